# application/services/error_explainer.py
from __future__ import annotations

from typing import Callable, Dict, List

from kurl.domain.diagnostic import Diagnostic, DiagnosticKind

_CERT_MARKERS = ("certificate", "cert_verify", "ssl", "tls")


def _timeout_hints(d: Diagnostic) -> List[str]:
    return [
        "Increase the connect timeout, e.g. --connect-timeout 30",
        "Check that the server is reachable from this network",
        "A proxy or firewall may be dropping the connection",
    ]


def _connect_hints(d: Diagnostic) -> List[str]:
    if any(m in d.detail.lower() for m in _CERT_MARKERS):
        return [
            "The server certificate could not be verified",
            "Use -k/--insecure to skip certificate validation (not for production use)",
            "Make sure the system CA bundle is up to date",
        ]
    return [
        "Check the host name and port in the URL",
        "Check DNS, or pin the address with --resolve host:port:address",
        "Make sure the server is running and accepting connections",
    ]


def _redirect_hints(d: Diagnostic) -> List[str]:
    return [
        "The server keeps redirecting; it may be misconfigured",
        "Run without -L to inspect the first Location header",
        "Use -v to see every hop",
    ]


def _build_hints(d: Diagnostic) -> List[str]:
    return [
        "Check the URL syntax, e.g. http://host:port/path",
        "Check the method given with -X and every -H header",
    ]


def _other_hints(d: Diagnostic) -> List[str]:
    return [
        "Run again with -vv for more detail",
        "Check network connectivity",
    ]


_SUMMARIES: Dict[DiagnosticKind, str] = {
    DiagnosticKind.TIMEOUT: "Connection timed out",
    DiagnosticKind.CONNECT_FAILURE: "Failed to connect",
    DiagnosticKind.REDIRECT_LOOP: "Too many redirects",
    DiagnosticKind.REQUEST_BUILD_FAILURE: "Could not build request",
    DiagnosticKind.OTHER: "Request failed",
}

_HINTS: Dict[DiagnosticKind, Callable[[Diagnostic], List[str]]] = {
    DiagnosticKind.TIMEOUT: _timeout_hints,
    DiagnosticKind.CONNECT_FAILURE: _connect_hints,
    DiagnosticKind.REDIRECT_LOOP: _redirect_hints,
    DiagnosticKind.REQUEST_BUILD_FAILURE: _build_hints,
    DiagnosticKind.OTHER: _other_hints,
}


def summarize(d: Diagnostic) -> str:
    if d.url:
        return f"{_SUMMARIES[d.kind]}: {d.url} ({d.detail})"
    return f"{_SUMMARIES[d.kind]}: {d.detail}"


def explain(d: Diagnostic) -> str:
    """
    One summary line naming the URL, then a Suggestions block.
    """
    lines = [summarize(d), "", "Suggestions:"]
    lines.extend(f"  - {hint}" for hint in _HINTS[d.kind](d))
    return "\n".join(lines)
