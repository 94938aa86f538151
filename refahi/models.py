"""Database models."""

from datetime import date, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from refahi.database import Base

# Identity


class User(Base):
    """User authenticated by one-time password."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    national_code: Mapped[str] = mapped_column(String(10), unique=True, nullable=False, index=True)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, national_code='{self.national_code}')>"


class OtpChallenge(Base):
    """Hashed one-time password sent to a phone number."""

    __tablename__ = "otp_challenges"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    national_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    phone_number: Mapped[str] = mapped_column(String(20), nullable=False)
    code_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    attempts_left: Mapped[int] = mapped_column(Integer, nullable=False)
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        """String representation of OtpChallenge."""
        return f"<OtpChallenge(id={self.id}, status='{self.status}')>"


# Membership


class Member(Base):
    """Registered member of the association."""

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    membership_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    national_code: Mapped[str] = mapped_column(String(10), unique=True, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    membership_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    membership_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    capabilities: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    agencies: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Member."""
        return f"<Member(id={self.id}, membership_number='{self.membership_number}')>"


# Recreation


class Tour(Base):
    """Recreational tour."""

    __tablename__ = "tours"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(250), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tour_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    tour_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    min_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_guests_per_reservation: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    required_capabilities: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    required_features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    required_agencies: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    restricted_tour_ids: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    capacities: Mapped[list["TourCapacity"]] = relationship(
        back_populates="tour", cascade="all, delete-orphan", order_by="TourCapacity.id"
    )
    pricing: Mapped[list["TourPricing"]] = relationship(
        back_populates="tour", cascade="all, delete-orphan", order_by="TourPricing.id"
    )

    def __repr__(self) -> str:
        """String representation of Tour."""
        return f"<Tour(id={self.id}, title='{self.title[:50]}')>"


class TourCapacity(Base):
    """Registration window of a tour with its seat limit."""

    __tablename__ = "tour_capacities"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    tour_id: Mapped[int] = mapped_column(
        ForeignKey("tours.id", ondelete="CASCADE"), nullable=False, index=True
    )
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    registration_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    registration_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    min_participants_per_reservation: Mapped[int] = mapped_column(
        Integer, default=1, nullable=False
    )
    max_participants_per_reservation: Mapped[int] = mapped_column(
        Integer, default=10, nullable=False
    )

    tour: Mapped[Tour] = relationship(back_populates="capacities")


class TourPricing(Base):
    """Seat price of a tour for one participant type."""

    __tablename__ = "tour_pricing"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    tour_id: Mapped[int] = mapped_column(
        ForeignKey("tours.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_type: Mapped[str] = mapped_column(String(20), nullable=False)
    price_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    valid_from: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    valid_to: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    discount_percentage: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    tour: Mapped[Tour] = relationship(back_populates="pricing")


class TourReservation(Base):
    """Reservation of seats on a tour."""

    __tablename__ = "tour_reservations"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    tour_id: Mapped[int] = mapped_column(ForeignKey("tours.id"), nullable=False, index=True)
    capacity_id: Mapped[int | None] = mapped_column(
        ForeignKey("tour_capacities.id"), nullable=True, index=True
    )
    tracking_code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    user_national_code: Mapped[str] = mapped_column(String(10), nullable=False)
    member_id: Mapped[int | None] = mapped_column(ForeignKey("members.id"), nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    reservation_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expiry_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )
    confirmation_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    cancellation_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    cancellation_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    total_amount_rials: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    paid_amount_rials: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    # Bill of the finance module; no foreign key across modules
    bill_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    participants: Mapped[list["ReservationParticipant"]] = relationship(
        back_populates="reservation",
        cascade="all, delete-orphan",
        order_by="ReservationParticipant.id",
    )
    price_snapshots: Mapped[list["ReservationPriceSnapshot"]] = relationship(
        back_populates="reservation",
        cascade="all, delete-orphan",
        order_by="ReservationPriceSnapshot.id",
    )

    def __repr__(self) -> str:
        """String representation of TourReservation."""
        return f"<TourReservation(id={self.id}, tracking_code='{self.tracking_code}')>"


class ReservationParticipant(Base):
    """Person travelling on a reservation."""

    __tablename__ = "reservation_participants"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    reservation_id: Mapped[int] = mapped_column(
        ForeignKey("tour_reservations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_type: Mapped[str] = mapped_column(String(20), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    national_number: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    emergency_contact_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    emergency_contact_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    is_main: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    registration_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    reservation: Mapped[TourReservation] = relationship(back_populates="participants")


class ReservationPriceSnapshot(Base):
    """Price of a participant type frozen when a reservation was held."""

    __tablename__ = "reservation_price_snapshots"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    reservation_id: Mapped[int] = mapped_column(
        ForeignKey("tour_reservations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_type: Mapped[str] = mapped_column(String(20), nullable=False)
    pricing_id: Mapped[int] = mapped_column(Integer, nullable=False)
    base_price_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    final_price_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    discount_percentage: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    snapshot_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    reservation: Mapped[TourReservation] = relationship(back_populates="price_snapshots")


# Finance


class Bill(Base):
    """Bill issued to a user."""

    __tablename__ = "bills"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    bill_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    reference_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    bill_type: Mapped[str] = mapped_column(String(50), nullable=False)
    user_national_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    user_full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    total_amount_rials: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    paid_amount_rials: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    issue_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    fully_paid_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    cancellation_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # "metadata" is reserved on declarative classes
    bill_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, default=dict, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    items: Mapped[list["BillItem"]] = relationship(
        back_populates="bill", cascade="all, delete-orphan", order_by="BillItem.id"
    )
    payments: Mapped[list["Payment"]] = relationship(
        back_populates="bill", cascade="all, delete-orphan", order_by="Payment.id"
    )
    refunds: Mapped[list["Refund"]] = relationship(
        back_populates="bill", cascade="all, delete-orphan", order_by="Refund.id"
    )

    def __repr__(self) -> str:
        """String representation of Bill."""
        return f"<Bill(id={self.id}, bill_number='{self.bill_number}', status='{self.status}')>"


class BillItem(Base):
    """Line of a bill."""

    __tablename__ = "bill_items"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    bill_id: Mapped[int] = mapped_column(
        ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    unit_price_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    discount_percentage: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    bill: Mapped[Bill] = relationship(back_populates="items")


class Payment(Base):
    """Payment attempt against a bill."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    bill_id: Mapped[int] = mapped_column(
        ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    method: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    tracking_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    gateway_transaction_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    failure_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    bill: Mapped[Bill] = relationship(back_populates="payments")


class Refund(Base):
    """Refund given back from a bill."""

    __tablename__ = "refunds"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    bill_id: Mapped[int] = mapped_column(
        ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    reason: Mapped[str] = mapped_column(String(500), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    bill: Mapped[Bill] = relationship(back_populates="refunds")


class Wallet(Base):
    """Stored-value wallet of a user."""

    __tablename__ = "wallets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_national_code: Mapped[str] = mapped_column(
        String(10), unique=True, nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    transactions: Mapped[list["WalletTransaction"]] = relationship(
        back_populates="wallet",
        cascade="all, delete-orphan",
        order_by="WalletTransaction.id",
    )

    def __repr__(self) -> str:
        """String representation of Wallet."""
        return f"<Wallet(id={self.id}, user_national_code='{self.user_national_code}')>"


class WalletTransaction(Base):
    """Ledger entry of a wallet."""

    __tablename__ = "wallet_transactions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    wallet_id: Mapped[int] = mapped_column(
        ForeignKey("wallets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    transaction_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    balance_after_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    reference_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    wallet: Mapped[Wallet] = relationship(back_populates="transactions")


# Facilities


class Facility(Base):
    """Welfare facility programme."""

    __tablename__ = "facilities"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    facility_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    required_features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    prohibited_features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    required_capabilities: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    prohibited_capabilities: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Facility."""
        return f"<Facility(id={self.id}, code='{self.code}')>"


class FacilityCycle(Base):
    """Application round of a facility."""

    __tablename__ = "facility_cycles"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    facility_id: Mapped[int] = mapped_column(
        ForeignKey("facilities.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    quota: Mapped[int] = mapped_column(Integer, nullable=False)
    min_amount_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    max_amount_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payment_months: Mapped[int] = mapped_column(Integer, nullable=False)
    interest_rate: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    approval_message: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        """String representation of FacilityCycle."""
        return f"<FacilityCycle(id={self.id}, name='{self.name}')>"


class FacilityRequest(Base):
    """Member's request in a facility cycle."""

    __tablename__ = "facility_requests"
    __table_args__ = (
        UniqueConstraint("member_id", "idempotency_key", name="uq_request_member_idempotency"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    facility_id: Mapped[int] = mapped_column(
        ForeignKey("facilities.id"), nullable=False, index=True
    )
    cycle_id: Mapped[int] = mapped_column(
        ForeignKey("facility_cycles.id"), nullable=False, index=True
    )
    member_id: Mapped[int] = mapped_column(ForeignKey("members.id"), nullable=False, index=True)
    national_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    member_full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    requested_amount_rials: Mapped[int] = mapped_column(BigInteger, nullable=False)
    approved_amount_rials: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    request_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    review_notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    idempotency_key: Mapped[str | None] = mapped_column(String(100), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        """String representation of FacilityRequest."""
        return f"<FacilityRequest(id={self.id}, request_number='{self.request_number}')>"


# Surveying


class Survey(Base):
    """Survey with its participation policy."""

    __tablename__ = "surveys"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    state: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    start_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    max_attempts_per_member: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    allow_multiple_submissions: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    cool_down_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    questions: Mapped[list["SurveyQuestion"]] = relationship(
        back_populates="survey",
        cascade="all, delete-orphan",
        order_by="SurveyQuestion.display_order",
    )

    def __repr__(self) -> str:
        """String representation of Survey."""
        return f"<Survey(id={self.id}, title='{self.title[:50]}')>"


class SurveyQuestion(Base):
    """Question of a survey."""

    __tablename__ = "survey_questions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    survey_id: Mapped[int] = mapped_column(
        ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    survey: Mapped[Survey] = relationship(back_populates="questions")
    options: Mapped[list["QuestionOption"]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="QuestionOption.display_order",
    )


class QuestionOption(Base):
    """Option of a choice question."""

    __tablename__ = "question_options"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    question_id: Mapped[int] = mapped_column(
        ForeignKey("survey_questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    text: Mapped[str] = mapped_column(String(500), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)

    question: Mapped[SurveyQuestion] = relationship(back_populates="options")


class SurveyResponse(Base):
    """Attempt of a participant at a survey."""

    __tablename__ = "survey_responses"
    __table_args__ = (
        UniqueConstraint(
            "survey_id", "participant_national_code", "attempt_number", name="uq_response_attempt"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    survey_id: Mapped[int] = mapped_column(ForeignKey("surveys.id"), nullable=False, index=True)
    participant_national_code: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    attempt_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    answers: Mapped[list["ResponseAnswer"]] = relationship(
        back_populates="response", cascade="all, delete-orphan", order_by="ResponseAnswer.id"
    )


class ResponseAnswer(Base):
    """Answer to one question within a response."""

    __tablename__ = "response_answers"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    response_id: Mapped[int] = mapped_column(
        ForeignKey("survey_responses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question_id: Mapped[int] = mapped_column(ForeignKey("survey_questions.id"), nullable=False)
    text_answer: Mapped[str | None] = mapped_column(Text, nullable=True)
    selected_option_ids: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)

    response: Mapped[SurveyResponse] = relationship(back_populates="answers")
