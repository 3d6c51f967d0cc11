# application/outcome.py
from dataclasses import dataclass
from typing import Optional

from kurl.domain.diagnostic import Diagnostic


@dataclass(frozen=True)
class ExchangeOutcome:
    ok: bool
    requests_sent: int = 0
    final_status: Optional[int] = None
    final_url: Optional[str] = None
    diagnostic: Optional[Diagnostic] = None
