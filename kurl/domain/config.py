# domain/config.py
from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from kurl.domain.exceptions import ConflictingBodyError, ResolveFormatError


@dataclass(frozen=True)
class ResolveEntry:
    host: str
    port: int
    address: str

    def matches(self, host: Optional[str], port: Optional[int]) -> bool:
        return bool(host) and host.lower() == self.host.lower() and port == self.port


def parse_resolve(raw: str) -> ResolveEntry:
    """
    Parse a ``host:port:address`` triple.
    The address may be an IPv6 literal (optionally bracketed), so only the
    first two colons separate fields.
    """
    parts = raw.split(":", 2)
    if len(parts) != 3:
        raise ResolveFormatError(f"Invalid resolve entry (expected host:port:address): {raw}")

    host, port_s, address = (p.strip() for p in parts)
    if not host:
        raise ResolveFormatError(f"Invalid resolve entry, empty host: {raw}")
    try:
        port = int(port_s)
    except ValueError:
        raise ResolveFormatError(f"Invalid resolve entry, bad port {port_s!r}: {raw}") from None
    if not 0 < port < 65536:
        raise ResolveFormatError(f"Invalid resolve entry, port out of range: {raw}")

    address = address.strip("[]")
    try:
        ipaddress.ip_address(address)
    except ValueError:
        raise ResolveFormatError(f"Invalid resolve entry, bad address {address!r}: {raw}") from None

    return ResolveEntry(host=host, port=port, address=address)


def parse_resolve_list(raw_entries: Sequence[str]) -> List[ResolveEntry]:
    return [parse_resolve(r) for r in raw_entries]


@dataclass(frozen=True)
class RequestConfig:
    url: str
    method: str = "GET"
    data: Optional[str] = None       # form-encoded body
    data_raw: Optional[str] = None   # raw body, Content-Type untouched
    headers: List[str] = field(default_factory=list)
    cookie: Optional[str] = None
    follow_redirects: bool = False
    insecure: bool = False
    head_only: bool = False
    trace: bool = False
    connect_timeout: Optional[float] = None
    resolve: List[ResolveEntry] = field(default_factory=list)
    output: Optional[str] = None
    verbose: int = 0
    user_agent: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", (self.method or "GET").strip().upper())
        if self.data is not None and self.data_raw is not None:
            raise ConflictingBodyError("Only one of --data and --data-raw may be given")

    @property
    def has_body(self) -> bool:
        return self.data is not None or self.data_raw is not None
