# application/ports/requests_transport.py
from __future__ import annotations

import time
from http import HTTPStatus
from http.cookiejar import DefaultCookiePolicy
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

import requests
import urllib3

from kurl.application.ports.http_transport import BuiltRequest, HopRequest, HttpTransportPort, ResponseSnapshot
from kurl.domain.config import ResolveEntry
from kurl.domain.diagnostic import Diagnostic, DiagnosticKind
from kurl.domain.exceptions import TransportFailure
from kurl.domain.headers import is_token
from kurl.infrastructure.http.error_classifier import classify_exception
from kurl.infrastructure.http.resolve_adapter import ResolvingAdapter

_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}
# http.client always writes HTTP/1.1 on the request line
REQUEST_VERSION = "HTTP/1.1"


def _merge_headers(pairs: List[Tuple[str, str]]) -> Dict[str, str]:
    # requests keeps one value per name; repeated names are folded the way HTTP allows
    merged: Dict[str, str] = {}
    canonical: Dict[str, str] = {}
    for name, value in pairs:
        key = name.lower()
        if key in canonical:
            sep = "; " if key == "cookie" else ", "
            merged[canonical[key]] = merged[canonical[key]] + sep + value
        else:
            canonical[key] = name
            merged[name] = value
    return merged


def _reason(resp: requests.Response) -> str:
    if resp.reason:
        return str(resp.reason)
    try:
        return HTTPStatus(resp.status_code).phrase
    except ValueError:
        return ""


class RequestsTransport(HttpTransportPort):
    def __init__(
        self,
        connect_timeout: Optional[float] = None,
        insecure: bool = False,
        resolve: Optional[Sequence[ResolveEntry]] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self._session = session or requests.Session()
        # Set-Cookie from one hop must never leak into the headers of the next
        self._session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        if user_agent:
            self._session.headers["User-Agent"] = user_agent
        self._verify = not insecure
        if insecure:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        if resolve:
            adapter = ResolvingAdapter(resolve)
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
        self._timeout = None if connect_timeout is None else (connect_timeout, None)

    def build(self, request: HopRequest) -> BuiltRequest:
        if not is_token(request.method):
            raise TransportFailure(
                Diagnostic(
                    kind=DiagnosticKind.REQUEST_BUILD_FAILURE,
                    url=request.url,
                    detail=f"Invalid HTTP method: {request.method!r}",
                )
            )

        req = requests.Request(
            method=request.method,
            url=request.url,
            headers=_merge_headers(request.headers.items()),
            data=request.body,
        )
        try:
            prepared = self._session.prepare_request(req)
        except (requests.RequestException, ValueError) as e:
            raise TransportFailure(classify_exception(e, request.url)) from e

        parts = urlsplit(prepared.url)
        host = prepared.headers.get("Host") or parts.netloc.rsplit("@", 1)[-1]
        body = prepared.body
        if isinstance(body, str):
            body = body.encode("utf-8")

        return BuiltRequest(
            method=prepared.method,
            url=prepared.url,
            path=prepared.path_url,
            host=host,
            version=REQUEST_VERSION,
            headers=[(k, v) for k, v in prepared.headers.items() if k.lower() != "host"],
            body=body,
            native=prepared,
        )

    def send(self, request: BuiltRequest, read_body: bool = True) -> ResponseSnapshot:
        prepared = request.native
        settings = self._session.merge_environment_settings(prepared.url, {}, True, self._verify, None)

        t0 = time.perf_counter()
        try:
            resp = self._session.send(
                prepared,
                allow_redirects=False,
                timeout=self._timeout,
                **settings,
            )
        except (requests.RequestException, ValueError, OSError) as e:
            raise TransportFailure(classify_exception(e, request.url)) from e

        try:
            # wire bytes as received, Content-Encoding left in place
            body = resp.raw.read(decode_content=False) if read_body else None
        except (requests.RequestException, urllib3.exceptions.HTTPError, OSError) as e:
            raise TransportFailure(classify_exception(e, request.url)) from e
        finally:
            resp.close()
        elapsed_ms = int((time.perf_counter() - t0) * 1000)

        raw_headers = getattr(resp.raw, "headers", None)
        if raw_headers is not None and hasattr(raw_headers, "items"):
            headers = [(str(k), str(v)) for k, v in raw_headers.items()]
        else:
            headers = [(str(k), str(v)) for k, v in resp.headers.items()]

        return ResponseSnapshot(
            version=_VERSIONS.get(getattr(resp.raw, "version", 11), "HTTP/1.1"),
            status=resp.status_code,
            reason=_reason(resp),
            headers=headers,
            url=str(resp.url or request.url),
            body=body,
            elapsed_ms=elapsed_ms,
        )

    def close(self) -> None:
        self._session.close()
