"""
baucrew/job_request/models.py

Defines the JobRequest model and its enums.
- Represents work requests posted by customers and bid on by providers
- Holds the customer's full address; provider-facing views omit the street lines
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from baucrew.database.base import Base, utcnow

# TYPE CHECKING IMPORTS
if TYPE_CHECKING:
    from baucrew.database.models import User
    from baucrew.messaging.models import MessageThread
    from baucrew.offer.models import RequestOffer


# ENUM: Job Request Status
class JobRequestStatus(str, enum.Enum):
    OPEN = "OPEN"
    IN_DISCUSSION = "IN_DISCUSSION"
    ASSIGNED = "ASSIGNED"
    CLOSED = "CLOSED"


# ENUM: Trade Category
class ListingCategory(str, enum.Enum):
    ELECTRICIAN = "ELECTRICIAN"
    PLUMBER = "PLUMBER"
    PAINTING = "PAINTING"
    DRYWALL = "DRYWALL"
    HANDYMAN = "HANDYMAN"
    CARPENTRY = "CARPENTRY"
    FLOORING = "FLOORING"
    MASONRY = "MASONRY"
    HVAC = "HVAC"
    OTHER = "OTHER"


# ENUM: Desired Timeframe
class JobTimeframe(str, enum.Enum):
    ASAP = "ASAP"
    NEXT_7_DAYS = "NEXT_7_DAYS"
    SPECIFIC_DATE = "SPECIFIC_DATE"


# Statuses in which providers may still send offers
OFFERABLE_STATUSES = frozenset({JobRequestStatus.OPEN, JobRequestStatus.IN_DISCUSSION})


# MODEL: JobRequest
class JobRequest(Base):
    __tablename__ = "job_requests"

    # Basic Identifiers & Foreign Keys
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the job request",
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Customer who posted the request",
    )

    # Work Description
    category: Mapped[ListingCategory] = mapped_column(
        Enum(ListingCategory), nullable=False, comment="Trade category of the work"
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False, comment="Short title")
    description: Mapped[str] = mapped_column(Text, nullable=False, comment="Work description")
    photo_urls: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False, comment="Photos attached by the customer"
    )
    timeframe: Mapped[JobTimeframe] = mapped_column(
        Enum(JobTimeframe),
        default=JobTimeframe.NEXT_7_DAYS,
        nullable=False,
        comment="When the customer wants the work done",
    )
    desired_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Requested date for SPECIFIC_DATE"
    )

    # Budget
    budget_min_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    budget_max_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    currency: Mapped[str] = mapped_column(String(3), default="EUR", nullable=False)

    # Address (street lines are private to the customer until payment)
    address_line1: Mapped[str] = mapped_column(String(100), nullable=False)
    address_line2: Mapped[str | None] = mapped_column(String(100), nullable=True)
    city: Mapped[str] = mapped_column(String(50), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(5), nullable=False)
    country: Mapped[str] = mapped_column(String(2), default="DE", nullable=False)

    # Status
    status: Mapped[JobRequestStatus] = mapped_column(
        Enum(JobRequestStatus),
        default=JobRequestStatus.OPEN,
        nullable=False,
        index=True,
        comment="Current status of the job request",
    )

    # Audit Fields
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when the request was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when the request was last updated",
    )

    # Relationships
    customer: Mapped["User"] = relationship("User", foreign_keys=[customer_id])
    offers: Mapped[list["RequestOffer"]] = relationship(
        "RequestOffer",
        back_populates="job_request",
        cascade="all, delete-orphan",
    )
    threads: Mapped[list["MessageThread"]] = relationship(
        "MessageThread",
        back_populates="job_request",
        cascade="all, delete-orphan",
    )
