"""
baucrew/users/models.py

Defines SQLAlchemy models for role-specific user profiles:
- CustomerProfile: Marker profile created by customer onboarding
- ProviderProfile: Public-facing business details of a tradesperson
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from baucrew.database.base import Base, utcnow
from baucrew.database.enums import VerificationStatus

if TYPE_CHECKING:
    from baucrew.database.models import User


# ------------------------------------------------------
# CustomerProfile Model
# ------------------------------------------------------
class CustomerProfile(Base):
    """
    Represents the customer side of a user account.
    """

    __tablename__ = "customer_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the customer profile",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Reference to the associated user",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when the profile was created",
    )

    user: Mapped["User"] = relationship("User", back_populates="customer_profile")


# ------------------------------------------------------
# ProviderProfile Model
# ------------------------------------------------------
class ProviderProfile(Base):
    """
    Represents additional profile information for users acting as providers.
    Stores the display identity and the service area of the tradesperson.
    """

    __tablename__ = "provider_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the provider profile",
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Reference to the associated user",
    )
    display_name: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Name shown to customers"
    )
    company_name: Mapped[str | None] = mapped_column(
        String(150), nullable=True, comment="Registered company name (optional)"
    )
    base_city: Mapped[str] = mapped_column(
        String(50), nullable=False, comment="City the provider operates from"
    )
    base_postal_code: Mapped[str] = mapped_column(
        String(5), nullable=False, comment="Postal code the provider operates from"
    )
    service_radius_km: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Travel radius around the base location"
    )
    verification_status: Mapped[VerificationStatus] = mapped_column(
        Enum(VerificationStatus),
        default=VerificationStatus.NOT_SUBMITTED,
        nullable=False,
        comment="Review state of the provider's verification documents",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        comment="Timestamp when the profile was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when the profile was last updated",
    )

    user: Mapped["User"] = relationship("User", back_populates="provider_profile")
