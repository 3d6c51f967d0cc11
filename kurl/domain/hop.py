# domain/hop.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Phase(str, Enum):
    SENDING = "sending"
    AWAITING_RESPONSE = "awaiting_response"
    DECIDING = "deciding"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class RedirectPolicy:
    # Every followed hop is downgraded to GET without a body, 307/308 included.
    max_hops: int = 10
    method_after_redirect: str = "GET"


DEFAULT_REDIRECT_POLICY = RedirectPolicy()


@dataclass(frozen=True)
class HopState:
    url: str
    hop: int
    method: str

    def advance(self, next_url: str, policy: RedirectPolicy = DEFAULT_REDIRECT_POLICY) -> "HopState":
        return replace(self, url=next_url, hop=self.hop + 1, method=policy.method_after_redirect)
