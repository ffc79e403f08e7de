"""
baucrew/payment/models.py

Defines the PaymentTransaction model and PaymentStatus enum.
- One-to-one with a Booking (unique booking_id)
- Created in REQUIRES_PAYMENT when the booking is created
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from baucrew.database.base import Base, utcnow

if TYPE_CHECKING:
    from baucrew.booking.models import Booking


# ENUM: Payment Status
class PaymentStatus(str, enum.Enum):
    REQUIRES_PAYMENT = "REQUIRES_PAYMENT"
    PROCESSING = "PROCESSING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


# MODEL: PaymentTransaction
class PaymentTransaction(Base):
    __tablename__ = "payment_transactions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the payment transaction",
    )
    booking_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Booking this payment settles",
    )
    amount_cents: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Total charged to the customer"
    )
    platform_fee_cents: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False, comment="Platform share of the amount"
    )
    provider_amount_cents: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Provider share of the amount"
    )
    currency: Mapped[str] = mapped_column(String(3), default="EUR", nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus),
        default=PaymentStatus.REQUIRES_PAYMENT,
        nullable=False,
        comment="Current status of the payment",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    booking: Mapped["Booking"] = relationship("Booking", back_populates="payment")
