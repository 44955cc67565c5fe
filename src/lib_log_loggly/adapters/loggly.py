"""Loggly HTTP transport implementing :class:`TransportPort`.

Purpose
-------
Ship one JSON record per call to the Loggly HTTP inputs endpoint and report
the outcome through the completion callback.

Contents
--------
* :func:`merge_tags` - default tags followed by per-event tags, de-duplicated.
* :class:`LogglyTransport` - ``requests``-backed client with a worker pool.

System Role
-----------
Outermost adapter: the dispatch queue calls :meth:`LogglyTransport.send` on the
logging thread, the HTTP request runs on a pool thread, and the result travels
back as the future's done-callback. Connection reuse is left to the
``requests.Session``. Exactly one attempt is made per record.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

import requests

from lib_log_loggly.application.ports.transport import CompletionCallback, TransportPort
from lib_log_loggly.domain.errors import TransportError
from lib_log_loggly.domain.settings import AppenderConfig

LOGGER = logging.getLogger(__name__)

TAG_HEADER = "X-LOGGLY-TAG"


def merge_tags(defaults: Iterable[str], extra: Iterable[str]) -> tuple[str, ...]:
    """Return ``defaults`` followed by unseen entries of ``extra``.

    Examples
    --------
    >>> merge_tags(['svc', 'prod'], ['prod', 'signup'])
    ('svc', 'prod', 'signup')
    """

    merged: list[str] = []
    for tag in (*defaults, *extra):
        if tag and tag not in merged:
            merged.append(tag)
    return tuple(merged)


class LogglyTransport(TransportPort):
    """Post records to ``https://<host>/inputs/<token>`` on a thread pool."""

    def __init__(
        self,
        config: AppenderConfig,
        *,
        session: requests.Session | None = None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        """Build the client once; it is reused for every :meth:`send`.

        Parameters
        ----------
        config:
            Supplies token, subdomain, host, default tags, and timeout.
        session:
            Optional pre-built session (tests inject fakes here).
        executor:
            Optional worker pool; defaults to ``config.max_workers`` threads.
        """
        self._config = config
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        self._executor = executor or ThreadPoolExecutor(
            max_workers=config.max_workers,
            thread_name_prefix=f"loggly-{config.subdomain}",
        )
        self._url = config.inputs_url

    @property
    def config(self) -> AppenderConfig:
        return self._config

    def send(self, record: Mapping[str, Any], tags: Sequence[str], callback: CompletionCallback) -> None:
        """Schedule one POST of ``record``; ``callback`` receives the outcome."""
        body = json.dumps(dict(record), default=str)
        headers: dict[str, str] = {}
        merged = merge_tags(self._config.tags, tags)
        if merged:
            headers[TAG_HEADER] = ",".join(merged)
        future = self._executor.submit(self._post, body, headers)
        future.add_done_callback(lambda done: callback(_outcome(done)))

    def close(self) -> None:
        """Release the worker pool and the HTTP session."""
        self._executor.shutdown(wait=False)
        self._session.close()

    def _post(self, body: str, headers: Mapping[str, str]) -> None:
        try:
            response = self._session.post(self._url, data=body, headers=dict(headers), timeout=self._config.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"request to {self._config.host} failed: {exc}") from exc
        if not response.ok:
            raise TransportError(
                f"loggly answered {response.status_code} {response.reason}",
                status_code=response.status_code,
            )
        LOGGER.debug("loggly accepted record with status %s", response.status_code)


def _outcome(future: Future[None]) -> BaseException | None:
    if future.cancelled():
        return TransportError("send cancelled before completion")
    return future.exception()


__all__ = ["LogglyTransport", "TAG_HEADER", "merge_tags"]
