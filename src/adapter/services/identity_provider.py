"""Identity Provider Implementations

The API sits behind an auth gateway that authenticates users and forwards
their tenant as a request header.
"""

from typing import Any, Optional
from src.app.services.identity_provider import Identity, IdentityProvider


class HeaderIdentityProvider(IdentityProvider):
    """Reads the tenant and user e-mail from gateway headers"""

    def __init__(self, tenant_header: str = "X-Tenant-ID", email_header: str = "X-User-Email"):
        self.tenant_header = tenant_header
        self.email_header = email_header

    def identify(self, request: Any) -> Optional[Identity]:
        tenant_id = (request.headers.get(self.tenant_header) or "").strip()
        if not tenant_id:
            return None
        email = request.headers.get(self.email_header)
        return Identity(tenant_id=tenant_id, email=email)


class StaticIdentityProvider(IdentityProvider):
    """Treats every request as one fixed tenant (AUTH_DISABLED development mode)"""

    def __init__(self, tenant_id: str, email: Optional[str] = None):
        self.identity = Identity(tenant_id=tenant_id, email=email)

    def identify(self, request: Any) -> Optional[Identity]:
        return self.identity
