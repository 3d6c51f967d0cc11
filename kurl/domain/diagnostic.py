# domain/diagnostic.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DiagnosticKind(str, Enum):
    TIMEOUT = "timeout"
    CONNECT_FAILURE = "connect_failure"
    REDIRECT_LOOP = "redirect_loop"
    REQUEST_BUILD_FAILURE = "request_build_failure"
    OTHER = "other"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    url: Optional[str]
    detail: str
