# infrastructure/url/url_resolver.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin, urlsplit


@dataclass(frozen=True)
class UrlResolver:
    default_scheme: str = "http"

    def normalize(self, url: str) -> str:
        url = url.strip()
        if "://" in url:
            return url
        return f"{self.default_scheme}://" + url.lstrip("/")

    def resolve_location(self, base_url: str, location: Optional[str]) -> Optional[str]:
        """
        Resolve a Location header against the URL the response was read from.
        Returns None when the result is not a usable http(s) URL.
        """
        if location is None or not location.strip():
            return None
        try:
            candidate = urljoin(base_url, location.strip())
            parts = urlsplit(candidate)
            _ = parts.port  # raises on a malformed port
        except ValueError:
            return None
        if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
            return None
        return candidate
