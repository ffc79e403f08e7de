"""
baucrew/users/schemas.py

User Schemas
Pydantic schemas for user-related payloads:
- Embeddable user and provider summaries reused by other modules
- Current user view
- Customer and provider onboarding
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from baucrew.core.schemas import ActionResult
from baucrew.database.enums import UserRole, VerificationStatus


# ---------------------------------------------------
# Partial Schemas for Embedding
# ---------------------------------------------------
class UserSummary(BaseModel):
    """Minimal user information for embedding in other responses."""

    id: UUID = Field(..., description="User's unique identifier")
    email: str = Field(..., description="User's email address")
    full_name: str | None = Field(None, description="User's full name")

    model_config = ConfigDict(from_attributes=True)


class SenderInfo(BaseModel):
    """Message sender identity."""

    id: UUID = Field(..., description="Sender's unique identifier")
    full_name: str | None = Field(None, description="Sender's full name")

    model_config = ConfigDict(from_attributes=True)


class ProviderSummary(UserSummary):
    """Provider identity including the public business names."""

    display_name: str | None = Field(None, description="Name shown to customers")
    company_name: str | None = Field(None, description="Registered company name")
    verification_status: VerificationStatus | None = Field(
        None, description="Review state of the provider's verification"
    )


# ---------------------------------------------------
# Current User Schemas
# ---------------------------------------------------
class ProviderProfileRead(BaseModel):
    """Provider profile details."""

    display_name: str
    company_name: str | None = None
    base_city: str
    base_postal_code: str
    service_radius_km: int
    verification_status: VerificationStatus

    model_config = ConfigDict(from_attributes=True)


class MeRead(BaseModel):
    """Schema returned for the authenticated user."""

    id: UUID
    email: str
    full_name: str | None = None
    role: UserRole
    has_customer_profile: bool
    provider_profile: ProviderProfileRead | None = None
    created_at: datetime


# ---------------------------------------------------
# Onboarding Schemas
# ---------------------------------------------------
class ProviderOnboardingRequest(BaseModel):
    """Schema used when a user completes provider onboarding."""

    display_name: str = Field(..., min_length=2, max_length=100)
    base_city: str = Field(..., min_length=2, max_length=50)
    base_postal_code: str = Field(..., pattern=r"^\d{5}$")
    service_radius_km: int = Field(..., ge=1, le=500)


class OnboardingResult(ActionResult):
    """Schema returned when onboarding completes."""

    role: UserRole
