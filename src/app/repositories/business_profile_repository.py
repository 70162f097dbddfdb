"""Business Profile Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.business_profile import BusinessProfile


class BusinessProfileRepository(ABC):

    @abstractmethod
    async def get_by_tenant_id(self, tenant_id: str) -> Optional[BusinessProfile]:
        pass

    @abstractmethod
    async def save(self, profile: BusinessProfile) -> BusinessProfile:
        """Insert or update the tenant's profile"""
        pass
