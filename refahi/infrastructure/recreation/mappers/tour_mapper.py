"""Mapper for Tour ORM ↔ Domain conversion."""

from refahi.domain.common.value_objects import Money, TourCapacityId, TourId, TourPricingId
from refahi.domain.recreation.entities.tour import Tour, TourCapacity, TourPricing
from refahi.domain.recreation.enums import ParticipantType, TourStatus
from refahi.infrastructure.common.collections import sync_collection
from refahi.models import Tour as TourORM
from refahi.models import TourCapacity as TourCapacityORM
from refahi.models import TourPricing as TourPricingORM
from refahi.utils import ensure_utc, ensure_utc_or_none


class TourMapper:
    """Mapper for Tour ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: TourORM) -> Tour:
        """Convert ORM model to domain entity."""
        return Tour(
            id=TourId(orm_model.id),
            title=orm_model.title,
            description=orm_model.description,
            tour_start=ensure_utc(orm_model.tour_start),
            tour_end=ensure_utc(orm_model.tour_end),
            min_age=orm_model.min_age,
            max_age=orm_model.max_age,
            max_guests_per_reservation=orm_model.max_guests_per_reservation,
            is_active=orm_model.is_active,
            status=TourStatus(orm_model.status),
            required_capabilities=list(orm_model.required_capabilities or []),
            required_features=list(orm_model.required_features or []),
            required_agencies=list(orm_model.required_agencies or []),
            restricted_tour_ids=list(orm_model.restricted_tour_ids or []),
            capacities=[self._capacity_to_domain(c) for c in orm_model.capacities],
            pricing=[self._pricing_to_domain(p) for p in orm_model.pricing],
            created_at=ensure_utc_or_none(orm_model.created_at),
            updated_at=ensure_utc_or_none(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Tour, orm_model: TourORM | None = None) -> TourORM:
        """Convert domain entity to ORM model, including capacities and pricing."""
        orm_model = orm_model or TourORM()
        orm_model.title = domain_entity.title
        orm_model.description = domain_entity.description
        orm_model.tour_start = domain_entity.tour_start
        orm_model.tour_end = domain_entity.tour_end
        orm_model.min_age = domain_entity.min_age
        orm_model.max_age = domain_entity.max_age
        orm_model.max_guests_per_reservation = domain_entity.max_guests_per_reservation
        orm_model.is_active = domain_entity.is_active
        orm_model.status = domain_entity.status.value
        orm_model.required_capabilities = list(domain_entity.required_capabilities)
        orm_model.required_features = list(domain_entity.required_features)
        orm_model.required_agencies = list(domain_entity.required_agencies)
        orm_model.restricted_tour_ids = list(domain_entity.restricted_tour_ids)
        orm_model.capacities = sync_collection(
            orm_model.capacities,
            domain_entity.capacities,
            lambda _: TourCapacityORM(),
            self._update_capacity,
        )
        orm_model.pricing = sync_collection(
            orm_model.pricing,
            domain_entity.pricing,
            lambda _: TourPricingORM(),
            self._update_pricing,
        )
        return orm_model

    @staticmethod
    def _capacity_to_domain(orm_model: TourCapacityORM) -> TourCapacity:
        return TourCapacity(
            id=TourCapacityId(orm_model.id),
            max_participants=orm_model.max_participants,
            registration_start=ensure_utc(orm_model.registration_start),
            registration_end=ensure_utc(orm_model.registration_end),
            is_active=orm_model.is_active,
            description=orm_model.description,
            min_participants_per_reservation=orm_model.min_participants_per_reservation,
            max_participants_per_reservation=orm_model.max_participants_per_reservation,
        )

    @staticmethod
    def _pricing_to_domain(orm_model: TourPricingORM) -> TourPricing:
        return TourPricing(
            id=TourPricingId(orm_model.id),
            participant_type=ParticipantType(orm_model.participant_type),
            price=Money(orm_model.price_rials),
            valid_from=ensure_utc_or_none(orm_model.valid_from),
            valid_to=ensure_utc_or_none(orm_model.valid_to),
            is_active=orm_model.is_active,
            is_default=orm_model.is_default,
            discount_percentage=orm_model.discount_percentage,
            description=orm_model.description,
        )

    @staticmethod
    def _update_capacity(capacity: TourCapacity, orm_model: TourCapacityORM) -> None:
        orm_model.max_participants = capacity.max_participants
        orm_model.registration_start = capacity.registration_start
        orm_model.registration_end = capacity.registration_end
        orm_model.is_active = capacity.is_active
        orm_model.description = capacity.description
        orm_model.min_participants_per_reservation = capacity.min_participants_per_reservation
        orm_model.max_participants_per_reservation = capacity.max_participants_per_reservation

    @staticmethod
    def _update_pricing(pricing: TourPricing, orm_model: TourPricingORM) -> None:
        orm_model.participant_type = pricing.participant_type.value
        orm_model.price_rials = pricing.price.amount_rials
        orm_model.valid_from = pricing.valid_from
        orm_model.valid_to = pricing.valid_to
        orm_model.is_active = pricing.is_active
        orm_model.is_default = pricing.is_default
        orm_model.discount_percentage = pricing.discount_percentage
        orm_model.description = pricing.description
