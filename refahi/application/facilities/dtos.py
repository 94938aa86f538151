"""Read models returned by the facilities queries."""

from dataclasses import dataclass

from refahi.domain.facilities.entities.facility_cycle import FacilityCycle


@dataclass(frozen=True)
class CycleQuota:
    cycle: FacilityCycle
    used_quota: int

    @property
    def remaining_quota(self) -> int:
        return max(self.cycle.quota - self.used_quota, 0)
