"""
baucrew/messaging/models.py

Messaging Models

Defines SQLAlchemy models for the messaging system:
- MessageThread: Conversation between a customer and one provider about a job request.
  Gains a booking back-reference once that provider's offer is accepted.
- Message: Represents individual messages sent within threads.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from baucrew.database.base import Base, utcnow

if TYPE_CHECKING:
    from baucrew.booking.models import Booking
    from baucrew.database.models import User
    from baucrew.job_request.models import JobRequest
    from baucrew.offer.models import RequestOffer


# ---------------------------------------------------
# Message Model
# ---------------------------------------------------
class Message(Base):
    """
    Represents an individual message sent in a thread.
    """

    __tablename__ = "messages"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the message",
    )
    thread_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("message_threads.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Thread this message belongs to",
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User who sent this message",
    )
    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Content of the message",
    )
    attachment_urls: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
        comment="Files attached to the message",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when the message was sent",
    )

    # Relationships
    thread: Mapped["MessageThread"] = relationship(
        "MessageThread",
        back_populates="messages",
    )
    sender: Mapped["User"] = relationship(
        "User",
        lazy="joined",
    )


# ---------------------------------------------------
# MessageThread Model
# ---------------------------------------------------
class MessageThread(Base):
    """
    Represents a conversation between the customer of a job request and one provider.
    """

    __tablename__ = "message_threads"
    __table_args__ = (
        UniqueConstraint(
            "job_request_id", "provider_id", name="uq_message_threads_job_request_provider"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the message thread",
    )
    job_request_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("job_requests.id", ondelete="CASCADE"),
        nullable=False,
        comment="Job request the conversation is about",
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Customer side of the conversation",
    )
    provider_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Provider side of the conversation",
    )
    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("bookings.id", ondelete="SET NULL"),
        nullable=True,
        comment="Booking that resulted from this conversation (lookup link only)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when the thread was created",
    )

    # Relationships
    messages: Mapped[list["Message"]] = relationship(
        "Message",
        back_populates="thread",
        cascade="all, delete-orphan",
        order_by=Message.created_at.asc(),
    )
    job_request: Mapped["JobRequest"] = relationship("JobRequest", back_populates="threads")
    customer: Mapped["User"] = relationship("User", foreign_keys=[customer_id])
    provider: Mapped["User"] = relationship("User", foreign_keys=[provider_id])
    offers: Mapped[list["RequestOffer"]] = relationship("RequestOffer", back_populates="thread")
    booking: Mapped[Optional["Booking"]] = relationship(
        "Booking",
        back_populates="thread",
        foreign_keys=[booking_id],
    )
