from .facility_repositories import (
    FacilityCycleRepositoryProtocol,
    FacilityRepositoryProtocol,
    FacilityRequestRepositoryProtocol,
)

__all__ = [
    "FacilityCycleRepositoryProtocol",
    "FacilityRepositoryProtocol",
    "FacilityRequestRepositoryProtocol",
]
