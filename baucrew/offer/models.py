"""
baucrew/offer/models.py

Defines the RequestOffer model and OfferStatus enum.
- A provider's priced bid against a customer's job request
- At most one offer per job request may be ACCEPTED (partial unique index)
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from baucrew.database.base import Base, utcnow

if TYPE_CHECKING:
    from baucrew.booking.models import Booking
    from baucrew.database.models import User
    from baucrew.job_request.models import JobRequest
    from baucrew.messaging.models import MessageThread


# ENUM: Offer Status
class OfferStatus(str, enum.Enum):
    SENT = "SENT"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


# MODEL: RequestOffer
class RequestOffer(Base):
    __tablename__ = "request_offers"
    __table_args__ = (
        Index(
            "uq_request_offers_one_accepted_per_job_request",
            "job_request_id",
            unique=True,
            postgresql_where=text("status = 'ACCEPTED'"),
            sqlite_where=text("status = 'ACCEPTED'"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the offer",
    )
    job_request_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("job_requests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Job request this offer bids on",
    )
    provider_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Provider who sent the offer",
    )
    thread_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("message_threads.id", ondelete="CASCADE"),
        nullable=False,
        comment="Conversation between the customer and this provider",
    )
    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("bookings.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
        comment="Booking created when this offer was accepted",
    )

    currency: Mapped[str] = mapped_column(String(3), default="EUR", nullable=False)
    amount_cents: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Quoted price in minor units"
    )
    message: Mapped[str] = mapped_column(Text, nullable=False, comment="Provider's cover note")
    earliest_start: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Earliest date the provider can start"
    )

    status: Mapped[OfferStatus] = mapped_column(
        Enum(OfferStatus),
        default=OfferStatus.SENT,
        nullable=False,
        comment="Current status of the offer",
    )
    accepted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Timestamp when the customer accepted"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    job_request: Mapped["JobRequest"] = relationship("JobRequest", back_populates="offers")
    provider: Mapped["User"] = relationship("User", foreign_keys=[provider_id])
    thread: Mapped["MessageThread"] = relationship("MessageThread", back_populates="offers")
    booking: Mapped[Optional["Booking"]] = relationship("Booking", foreign_keys=[booking_id])
