"""
baucrew/booking/models.py

Defines the Booking model and associated enums.
- Created exactly once when a customer accepts a provider's offer
- Holds a snapshot of the job request fields taken at acceptance time
- Tracks the booking through payment, scheduling and completion
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from baucrew.database.base import Base, utcnow

if TYPE_CHECKING:
    from baucrew.database.models import User
    from baucrew.job_request.models import JobRequest
    from baucrew.messaging.models import MessageThread
    from baucrew.payment.models import PaymentTransaction


# ENUM: Booking Status
class BookingStatus(str, enum.Enum):
    REQUESTED = "REQUESTED"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    NEEDS_PAYMENT = "NEEDS_PAYMENT"
    PAID = "PAID"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    DISPUTED = "DISPUTED"
    REFUNDED = "REFUNDED"


# ENUM: Booking Type
class BookingType(str, enum.Enum):
    BOOKING = "BOOKING"


# ENUM: Price Type
class PriceType(str, enum.Enum):
    FIXED = "FIXED"
    HOURLY = "HOURLY"
    QUOTE = "QUOTE"


# MODEL: Booking
class Booking(Base):
    __tablename__ = "bookings"

    # Basic Identifiers & Foreign Keys
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the booking",
    )
    type: Mapped[BookingType] = mapped_column(
        Enum(BookingType), default=BookingType.BOOKING, nullable=False
    )
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus),
        default=BookingStatus.NEEDS_PAYMENT,
        nullable=False,
        index=True,
        comment="Current status of the booking",
    )
    job_request_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("job_requests.id", ondelete="SET NULL"),
        nullable=True,
        comment="Job request the booking originated from",
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Customer who booked",
    )
    provider_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Provider who will do the work",
    )

    # Job Snapshot (copied from the job request at acceptance time)
    job_title: Mapped[str] = mapped_column(String(100), nullable=False)
    job_description: Mapped[str] = mapped_column(Text, nullable=False)
    job_photo_urls: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    address_line1: Mapped[str] = mapped_column(String(100), nullable=False)
    address_line2: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city: Mapped[str] = mapped_column(String(50), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(5), nullable=False)
    country: Mapped[str] = mapped_column(String(2), default="DE", nullable=False)

    # Pricing
    currency: Mapped[str] = mapped_column(String(3), default="EUR", nullable=False)
    price_type: Mapped[PriceType] = mapped_column(
        Enum(PriceType), default=PriceType.QUOTE, nullable=False
    )
    quoted_price_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    platform_fee_cents: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    provider_payout_cents: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Lifecycle Timestamps
    requested_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    requested_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    scheduled_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    scheduled_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    paid_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Timestamp when payment succeeded"
    )

    # Audit Fields
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when the booking was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when the booking was last updated",
    )

    # Relationships
    customer: Mapped["User"] = relationship("User", foreign_keys=[customer_id])
    provider: Mapped["User"] = relationship("User", foreign_keys=[provider_id])
    job_request: Mapped[Optional["JobRequest"]] = relationship("JobRequest")
    thread: Mapped[Optional["MessageThread"]] = relationship(
        "MessageThread",
        back_populates="booking",
        uselist=False,
    )
    payment: Mapped[Optional["PaymentTransaction"]] = relationship(
        "PaymentTransaction",
        back_populates="booking",
        uselist=False,
    )
