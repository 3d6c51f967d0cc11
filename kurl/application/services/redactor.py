# application/services/redactor.py
from __future__ import annotations

from typing import Any, Iterable, List, Tuple

SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie", "set-cookie"}


def mask_value(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_HEADERS and value is not None:
        return "********"
    return value


def mask_pairs(pairs: Iterable[Tuple[str, str]]) -> List[Tuple[str, Any]]:
    return [(k, mask_value(k, v)) for k, v in pairs]

