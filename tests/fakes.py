# tests/fakes.py
"""
Fake transport and logger for testing the exchange without a network.
Responses are looked up by exact URL.
"""
from __future__ import annotations

from dataclasses import replace
from http import HTTPStatus
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urlsplit

from kurl.application.ports.http_transport import BuiltRequest, HopRequest, HttpTransportPort, ResponseSnapshot
from kurl.domain.diagnostic import Diagnostic, DiagnosticKind
from kurl.domain.exceptions import TransportFailure
from kurl.domain.headers import is_token


def response(
    status: int = 200,
    headers: Optional[List[Tuple[str, str]]] = None,
    body: bytes = b"",
    url: str = "",
) -> ResponseSnapshot:
    try:
        reason = HTTPStatus(status).phrase
    except ValueError:
        reason = ""
    return ResponseSnapshot(
        version="HTTP/1.1",
        status=status,
        reason=reason,
        headers=list(headers or []),
        url=url,
        body=body,
    )


def redirect(location: str, status: int = 302) -> ResponseSnapshot:
    return response(status, headers=[("Location", location)], body=b"moved")


Route = Union[ResponseSnapshot, Diagnostic]


class FakeTransport(HttpTransportPort):
    def __init__(self, routes: Optional[Dict[str, Route]] = None):
        self.routes: Dict[str, Route] = dict(routes or {})
        self.built: List[HopRequest] = []
        self.sent: List[BuiltRequest] = []
        self.read_body_flags: List[bool] = []
        self.closed = False

    def build(self, request: HopRequest) -> BuiltRequest:
        self.built.append(request)
        if not is_token(request.method):
            raise TransportFailure(
                Diagnostic(DiagnosticKind.REQUEST_BUILD_FAILURE, request.url, f"Invalid HTTP method: {request.method!r}")
            )
        parts = urlsplit(request.url)
        path = (parts.path or "/") + (f"?{parts.query}" if parts.query else "")
        return BuiltRequest(
            method=request.method,
            url=request.url,
            path=path,
            host=parts.netloc,
            version="HTTP/1.1",
            headers=request.headers.items(),
            body=request.body,
        )

    def send(self, request: BuiltRequest, read_body: bool = True) -> ResponseSnapshot:
        self.sent.append(request)
        self.read_body_flags.append(read_body)
        route = self.routes.get(request.url)
        if route is None:
            route = response(404, body=b"no route")
        if isinstance(route, Diagnostic):
            raise TransportFailure(route)
        return replace(route, url=route.url or request.url, body=route.body if read_body else None)

    def close(self) -> None:
        self.closed = True

    @property
    def methods(self) -> List[str]:
        return [r.method for r in self.sent]

    @property
    def urls(self) -> List[str]:
        return [r.url for r in self.sent]


def redirect_chain(base: str, hops: int, final: Optional[ResponseSnapshot] = None) -> Dict[str, Route]:
    """base/0 -> base/1 -> ... -> base/<hops> which answers `final`."""
    routes: Dict[str, Route] = {}
    for i in range(hops):
        routes[f"{base}/{i}"] = redirect(f"/{i + 1}" if i % 2 else f"{base}/{i + 1}")
    routes[f"{base}/{hops}"] = final or response(200, headers=[("Content-Type", "text/plain")], body=b"final body")
    return routes


class RecordingLogger:
    def __init__(self, bound: Optional[Dict[str, Any]] = None, calls: Optional[List[Dict[str, Any]]] = None) -> None:
        self.bound = dict(bound or {})
        self.calls: List[Dict[str, Any]] = calls if calls is not None else []

    def debug(self, event: str, **fields: Any) -> None:
        self._record("debug", event, fields)

    def info(self, event: str, **fields: Any) -> None:
        self._record("info", event, fields)

    def warning(self, event: str, **fields: Any) -> None:
        self._record("warning", event, fields)

    def error(self, event: str, **fields: Any) -> None:
        self._record("error", event, fields)

    def bind(self, **fields: Any) -> "RecordingLogger":
        merged = dict(self.bound)
        merged.update(fields)
        return RecordingLogger(bound=merged, calls=self.calls)

    def events(self, level: Optional[str] = None) -> List[str]:
        return [c["event"] for c in self.calls if level is None or c["level"] == level]

    def _record(self, level: str, event: str, fields: Dict[str, Any]) -> None:
        self.calls.append({"event": event, "level": level, **self.bound, **fields})
