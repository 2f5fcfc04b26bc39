# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""HTTP session used to download word lists"""
from __future__ import annotations

from requests import adapters, models, Session
from typing import Any
from urllib3.util.retry import Retry

try:
    from .version import __version__
except ImportError:
    __version__ = "UNKNOWN"

DEFAULT_RETRIES = 3
RETRY_STATUSES = (502, 503, 504)


class WordListAdapter(adapters.HTTPAdapter):
    """Adapter applying a default timeout to every request without an explicit one"""

    def __init__(self, *, timeout: int | None = None, retries: int = DEFAULT_RETRIES, **kwargs: Any) -> None:
        self.timeout = timeout
        retry = Retry(
            total=retries,
            backoff_factor=0.2,
            status_forcelist=RETRY_STATUSES,
            allowed_methods=frozenset(["GET", "HEAD"]),
            raise_on_status=False,
        )
        super().__init__(max_retries=retry, **kwargs)

    def send(self, request: models.PreparedRequest, **kwargs: Any) -> models.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def get_requests_session(*, timeout: int | None = None, retries: int = DEFAULT_RETRIES) -> Session:
    """Session for plain text downloads, retrying GETs on gateway errors"""
    session = Session()
    adapter = WordListAdapter(timeout=timeout, retries=retries)
    for prefix in ("http://", "https://"):
        session.mount(prefix, adapter)
    session.headers.update({"Accept": "text/plain", "User-Agent": "subspell/{}".format(__version__)})
    return session
