# application/ports/http_transport.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from kurl.domain.headers import HeaderSet


@dataclass(frozen=True)
class HopRequest:
    """What the plan wants sent for one hop, before the transport touches it."""
    method: str
    url: str
    headers: HeaderSet
    body: Optional[bytes] = None


@dataclass(frozen=True)
class BuiltRequest:
    """The request exactly as it will go on the wire."""
    method: str
    url: str
    path: str
    host: str
    version: str
    headers: List[Tuple[str, str]]
    body: Optional[bytes] = None
    native: Any = None


@dataclass(frozen=True)
class ResponseSnapshot:
    version: str
    status: int
    reason: str
    headers: List[Tuple[str, str]]
    url: str
    body: Optional[bytes] = None
    elapsed_ms: int = 0

    @property
    def status_line(self) -> str:
        return f"{self.version} {self.status} {self.reason}".rstrip()

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status < 400

    def header(self, name: str) -> Optional[str]:
        key = name.lower()
        for n, v in self.headers:
            if n.lower() == key:
                return v
        return None


class HttpTransportPort(ABC):
    @abstractmethod
    def build(self, request: HopRequest) -> BuiltRequest:
        """Raise TransportFailure(REQUEST_BUILD_FAILURE) when the request cannot be built."""
        ...

    @abstractmethod
    def send(self, request: BuiltRequest, read_body: bool = True) -> ResponseSnapshot:
        """Raise TransportFailure for any network level failure. Never follows redirects."""
        ...

    def close(self) -> None:
        return None
