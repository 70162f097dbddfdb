"""Identity Provider Interface

Resolves the authenticated tenant of an incoming request. Authentication
itself happens in an external identity provider; implementations only read
its outcome.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Identity:
    tenant_id: str
    email: Optional[str] = None


class IdentityProvider(ABC):

    @abstractmethod
    def identify(self, request: Any) -> Optional[Identity]:
        """
        Resolve the caller of a request

        Returns:
            Identity, or None when the request is unauthenticated
        """
        pass
