# domain/headers.py
from __future__ import annotations

import re
from typing import Iterator, List, Optional, Sequence, Tuple

from kurl.domain.exceptions import HeaderFormatError

# RFC 7230 token
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def is_token(value: str) -> bool:
    return bool(_TOKEN_RE.match(value))


class HeaderSet:
    """
    Case-insensitive, multi-valued header collection.

    Insertion order is kept for output. A name may appear several times;
    get() returns the last value (last wins) while items() yields every pair.
    """

    def __init__(self, pairs: Optional[Sequence[Tuple[str, str]]] = None):
        self._pairs: List[Tuple[str, str]] = []
        for name, value in pairs or []:
            self.add(name, value)

    def add(self, name: str, value: str) -> None:
        if not is_token(name):
            raise HeaderFormatError(f"Invalid header name: {name!r}")
        if "\r" in value or "\n" in value:
            raise HeaderFormatError(f"Invalid header value for {name}: {value!r}")
        self._pairs.append((name, value))

    def get(self, name: str) -> Optional[str]:
        found = None
        key = name.lower()
        for n, v in self._pairs:
            if n.lower() == key:
                found = v
        return found

    def get_all(self, name: str) -> List[str]:
        key = name.lower()
        return [v for n, v in self._pairs if n.lower() == key]

    def items(self) -> List[Tuple[str, str]]:
        return list(self._pairs)

    def copy(self) -> "HeaderSet":
        return HeaderSet(self._pairs)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"HeaderSet({self._pairs!r})"


def parse_header_line(raw: str) -> Tuple[str, str]:
    # split on the first colon only, values may contain more
    if ":" not in raw:
        raise HeaderFormatError(f"Invalid header format: {raw}")
    name, value = raw.split(":", 1)
    name = name.strip()
    if not name:
        raise HeaderFormatError(f"Invalid header format: {raw}")
    return name, value.strip()


def build_header_set(raw_headers: Sequence[str], cookie: Optional[str] = None) -> HeaderSet:
    headers = HeaderSet()
    for raw in raw_headers:
        name, value = parse_header_line(raw)
        try:
            headers.add(name, value)
        except HeaderFormatError as e:
            raise HeaderFormatError(f"Invalid header format: {raw} ({e})") from e
    if cookie is not None:
        headers.add("Cookie", cookie)
    return headers
