"""Application layer: ports and use cases of the Loggly appender."""
