"""Business profile use cases"""
from .business_profile import GetBusinessProfile, UpsertBusinessProfile
from .dtos import UpsertBusinessProfileCommandDTO, BusinessProfileResponseDTO

__all__ = [
    "GetBusinessProfile",
    "UpsertBusinessProfile",
    "UpsertBusinessProfileCommandDTO",
    "BusinessProfileResponseDTO",
]
