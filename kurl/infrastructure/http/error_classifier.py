# infrastructure/http/error_classifier.py
from __future__ import annotations

from typing import List, Optional, Tuple, Type

import requests
import urllib3

from kurl.domain.diagnostic import Diagnostic, DiagnosticKind

# Order matters: ConnectTimeout is both a Timeout and a ConnectionError.
_CLASSIFIERS: List[Tuple[Type[BaseException], DiagnosticKind]] = [
    (requests.exceptions.TooManyRedirects, DiagnosticKind.REDIRECT_LOOP),
    (requests.exceptions.Timeout, DiagnosticKind.TIMEOUT),
    (TimeoutError, DiagnosticKind.TIMEOUT),
    (urllib3.exceptions.TimeoutError, DiagnosticKind.TIMEOUT),
    (requests.exceptions.ConnectionError, DiagnosticKind.CONNECT_FAILURE),
    (ConnectionError, DiagnosticKind.CONNECT_FAILURE),
    (requests.exceptions.MissingSchema, DiagnosticKind.REQUEST_BUILD_FAILURE),
    (requests.exceptions.InvalidSchema, DiagnosticKind.REQUEST_BUILD_FAILURE),
    (requests.exceptions.InvalidURL, DiagnosticKind.REQUEST_BUILD_FAILURE),
    (requests.exceptions.InvalidHeader, DiagnosticKind.REQUEST_BUILD_FAILURE),
    (requests.exceptions.URLRequired, DiagnosticKind.REQUEST_BUILD_FAILURE),
    (ValueError, DiagnosticKind.REQUEST_BUILD_FAILURE),
]


def classify_kind(exc: BaseException) -> DiagnosticKind:
    for exc_type, kind in _CLASSIFIERS:
        if isinstance(exc, exc_type):
            return kind
    return DiagnosticKind.OTHER


def classify_exception(exc: BaseException, url: Optional[str]) -> Diagnostic:
    detail = str(exc) or type(exc).__name__
    return Diagnostic(kind=classify_kind(exc), url=url, detail=detail)
