"""
baucrew/database/models.py

Core SQLAlchemy ORM Models

Defines:
- User: Platform account mirrored from the identity provider, with role-based access

Imports every domain model module so the full mapper registry is configured
whenever users are loaded:
- CustomerProfile / ProviderProfile
- JobRequest
- RequestOffer
- MessageThread / Message
- Booking
- PaymentTransaction
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from baucrew.database.base import Base, utcnow
from baucrew.database.enums import UserRole
from baucrew.users.models import CustomerProfile, ProviderProfile
from baucrew.job_request.models import JobRequest  # noqa: F401
from baucrew.offer.models import RequestOffer  # noqa: F401
from baucrew.messaging.models import MessageThread, Message  # noqa: F401
from baucrew.booking.models import Booking  # noqa: F401
from baucrew.payment.models import PaymentTransaction  # noqa: F401

# ---------------------------------------------------
# User Model: Authenticated Platform User
# ---------------------------------------------------


class User(Base):
    __tablename__ = "users"

    # -------------------------------------
    # Fields
    # -------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the user",
    )
    auth_user_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Subject identifier issued by the identity provider",
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, comment="User's email address"
    )
    full_name: Mapped[str | None] = mapped_column(
        String(200), nullable=True, comment="User's full name (optional)"
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole),
        default=UserRole.CUSTOMER,
        nullable=False,
        comment="User role (CUSTOMER, PROVIDER, BOTH, ADMIN)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when the user was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when the user was last updated",
    )

    # -------------------------------------
    # Relationships
    # -------------------------------------

    # One-to-One: A user may have a customer profile after customer onboarding
    customer_profile: Mapped[Optional["CustomerProfile"]] = relationship(
        "CustomerProfile", back_populates="user", uselist=False
    )

    # One-to-One: A user may have a provider profile after provider onboarding
    provider_profile: Mapped[Optional["ProviderProfile"]] = relationship(
        "ProviderProfile", back_populates="user", uselist=False
    )
