# domain/exceptions.py
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kurl.domain.diagnostic import Diagnostic


class KurlError(Exception):
    """Base class for every error kurl raises on purpose."""


class ConfigurationError(KurlError):
    """Invalid input detected before any network activity."""


class HeaderFormatError(ConfigurationError):
    pass


class ConflictingBodyError(ConfigurationError):
    pass


class ResolveFormatError(ConfigurationError):
    pass


class TransportFailure(KurlError):
    """
    Raised by transport adapters only. Carries the already classified
    diagnostic so the engine never has to inspect library exceptions.
    """

    def __init__(self, diagnostic: "Diagnostic"):
        super().__init__(diagnostic.detail)
        self.diagnostic = diagnostic
