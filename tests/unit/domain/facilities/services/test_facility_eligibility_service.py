import pytest

from refahi.domain.common.exceptions import ValidationError
from refahi.domain.facilities.entities.facility import Facility
from refahi.domain.facilities.enums import FacilityType
from refahi.domain.facilities.services.facility_eligibility_service import (
    FacilityEligibilityService,
)


@pytest.fixture
def service() -> FacilityEligibilityService:
    return FacilityEligibilityService()


def _facility(**restrictions: list[str]) -> Facility:
    return Facility.create(
        name="Housing loan", code="loan-01", facility_type=FacilityType.LOAN, **restrictions
    )


def test_code_is_uppercased() -> None:
    assert _facility().code == "LOAN-01"


def test_unrestricted_facility(service: FacilityEligibilityService) -> None:
    result = service.check(_facility(), [], [])
    assert result.is_eligible
    assert result.errors == []


def test_prohibited_feature(service: FacilityEligibilityService) -> None:
    facility = _facility(prohibited_features=["RETIRED", "CONTRACTOR"])

    result = service.check(facility, ["CONTRACTOR", "VETERAN"], [])

    assert not result.is_eligible
    assert result.errors == ["Member has prohibited features: CONTRACTOR"]


def test_required_features_need_any_one(service: FacilityEligibilityService) -> None:
    facility = _facility(required_features=["VETERAN", "MARRIED"])

    assert service.check(facility, ["MARRIED"], []).is_eligible
    result = service.check(facility, [], [])
    assert result.errors == ["Member needs one of the features: VETERAN, MARRIED"]


def test_features_and_capabilities_both_required(service: FacilityEligibilityService) -> None:
    facility = _facility(required_features=["MARRIED"], required_capabilities=["HAS_CHILD"])

    assert service.check(facility, ["MARRIED"], ["HAS_CHILD"]).is_eligible
    result = service.check(facility, ["MARRIED"], [])
    assert not result.is_eligible
    assert len(result.errors) == 1


def test_all_errors_are_reported(service: FacilityEligibilityService) -> None:
    facility = _facility(
        required_features=["MARRIED"], prohibited_capabilities=["DEFAULTED_LOAN"]
    )

    result = service.check(facility, [], ["DEFAULTED_LOAN"])

    assert len(result.errors) == 2
    assert result.errors[0].startswith("Member has prohibited capabilities")


def test_required_and_prohibited_overlap_is_invalid() -> None:
    with pytest.raises(ValidationError):
        _facility(required_features=["X"], prohibited_features=["X"])
