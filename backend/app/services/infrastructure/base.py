"""
Provider Adapter base

Every external AI service is wrapped by one adapter. Adapters are configured
independently (present or absent depending on credentials) and answer a
lightweight status probe so callers can check availability before offering
the provider to an end user.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

NOT_CONFIGURED_REASON = "API key not configured"


@dataclass(frozen=True)
class ProviderStatus:
    available: bool
    reason: Optional[str] = None


class ProviderAdapter(ABC):
    """Common surface of text and video adapters"""

    name: str

    @abstractmethod
    def is_configured(self) -> bool:
        """True when the credential this adapter needs is present"""

    async def status(self) -> ProviderStatus:
        """Availability probe. Subclasses may add a network check."""
        if not self.is_configured():
            return ProviderStatus(available=False, reason=NOT_CONFIGURED_REASON)
        return ProviderStatus(available=True)
