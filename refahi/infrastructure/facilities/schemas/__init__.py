from .facility_schemas import (
    ApproveRequest,
    CancelRequest,
    CreateCycleRequest,
    CreateFacilityRequest,
    CycleResponse,
    CycleSchema,
    FacilityRequestResponse,
    FacilityRequestSchema,
    FacilityResponse,
    FacilitySchema,
    RejectRequest,
    SubmitFacilityRequest,
)

__all__ = [
    "ApproveRequest",
    "CancelRequest",
    "CreateCycleRequest",
    "CreateFacilityRequest",
    "CycleResponse",
    "CycleSchema",
    "FacilityRequestResponse",
    "FacilityRequestSchema",
    "FacilityResponse",
    "FacilitySchema",
    "RejectRequest",
    "SubmitFacilityRequest",
]
