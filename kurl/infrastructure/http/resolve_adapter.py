# infrastructure/http/resolve_adapter.py
from __future__ import annotations

from typing import List, Optional, Sequence
from urllib.parse import urlsplit

from requests.adapters import HTTPAdapter

from kurl.domain.config import ResolveEntry

DEFAULT_PORTS = {"http": 80, "https": 443}


class ResolvingAdapter(HTTPAdapter):
    """
    HTTPAdapter that connects to a fixed address for selected host:port pairs.

    The URL, the Host header and the TLS server name keep the original host
    name; only the TCP connection target changes.
    """

    def __init__(self, entries: Sequence[ResolveEntry], **kwargs):
        self._entries: List[ResolveEntry] = list(entries)
        super().__init__(**kwargs)

    def lookup(self, url: str) -> Optional[ResolveEntry]:
        parts = urlsplit(url)
        port = parts.port or DEFAULT_PORTS.get(parts.scheme.lower())
        for entry in self._entries:
            if entry.matches(parts.hostname, port):
                return entry
        return None

    def build_connection_pool_key_attributes(self, request, verify, cert=None):
        host_params, pool_kwargs = super().build_connection_pool_key_attributes(request, verify, cert)
        entry = self.lookup(request.url)
        if entry is None:
            return host_params, pool_kwargs

        original_host = host_params["host"]
        host_params = dict(host_params, host=entry.address)
        if host_params["scheme"] == "https":
            pool_kwargs = dict(pool_kwargs, server_hostname=original_host)
            if verify:
                pool_kwargs["assert_hostname"] = original_host
        return host_params, pool_kwargs

    def send(self, request, **kwargs):
        if self.lookup(request.url) is not None and "Host" not in request.headers:
            request.headers["Host"] = urlsplit(request.url).netloc.rsplit("@", 1)[-1]
        return super().send(request, **kwargs)
