"""HTTP transport that tries a list of service hosts in turn."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable
from urllib.parse import quote, urlunsplit

import requests

from curvemanager.common import new_http_session

_HEADERS = {
    "Connection": "Keep-Alive",
    "Content-Type": "application/json",
    "User-Agent": "curl/7.52.1",
}


@dataclass
class HttpResult:
    """A response together with the host that produced it."""

    key: Any = ""
    err: Exception | None = None
    result: Any = None


class HttpError(Exception):
    """Raised when no host could be reached."""

    def __init__(self, message: str, errors: dict[str, Exception] | None = None):
        super().__init__(message)
        self.errors = dict(errors or {})


class MdsError(Exception):
    """Raised when an MDS response carries a failure status."""


def _build_url(host: str, path: str) -> str:
    if path and not path.startswith("/"):
        path = "/" + path
    return urlunsplit(("http", host, quote(path, safe="/$&+,:;=@"), "", ""))


@dataclass
class BaseHttp:
    """Sends requests to the first reachable host among several."""

    client: requests.Session = field(default_factory=new_http_session)
    timeout: float | None = None
    retry_times: int = 0

    def _send(self, method: str, hosts: Iterable[str], path: str, **kwargs: Any) -> HttpResult:
        hosts = list(hosts)
        if not hosts:
            raise HttpError("empty addr")
        errors: dict[str, Exception] = {}
        message = ""
        for host in hosts:
            try:
                response = self.client.request(
                    method,
                    _build_url(host, path),
                    headers=_HEADERS,
                    timeout=self.timeout,
                    **kwargs,
                )
            except requests.RequestException as exc:
                errors[host] = exc
                message = f"{message};{host}:{exc}"
                continue
            return HttpResult(key=host, result=response)
        raise HttpError(message, errors)

    def send_http(self, hosts: Iterable[str], path: str) -> HttpResult:
        """GET ``path`` from the first host that answers."""
        return self._send("GET", hosts, path)

    def send_http_by_post(self, hosts: Iterable[str], path: str, body: Any) -> HttpResult:
        """POST ``body`` to ``path`` on the first host that answers."""
        if isinstance(body, (bytes, str)):
            return self._send("POST", hosts, path, data=body)
        return self._send("POST", hosts, path, json=body)