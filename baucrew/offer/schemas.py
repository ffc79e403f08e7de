"""
baucrew/offer/schemas.py

Offer Schemas
Pydantic schemas for offer-related operations:
- Creating an offer on a job request (Authenticated Provider)
- Withdrawing an offer (Authenticated Provider)
- Reading offers
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from baucrew.core.schemas import ActionResult
from baucrew.database.enums import VerificationStatus
from baucrew.offer.models import OfferStatus


# ---------------------------------------------------
# Offer Creation Schemas (Authenticated Provider)
# ---------------------------------------------------
class OfferCreate(BaseModel):
    """Schema used when a provider sends an offer on a job request."""

    job_request_id: UUID = Field(..., description="Job request the offer bids on")
    amount_cents: int = Field(..., gt=0, description="Quoted price in cents")
    message: str = Field(..., max_length=2000, description="Cover note to the customer")
    earliest_start: datetime | None = Field(None, description="Earliest possible start")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Offer message cannot be empty")
        return value


class OfferCreateResult(ActionResult):
    offer_id: UUID


class OfferWithdrawResult(ActionResult):
    offer_id: UUID
    status: OfferStatus


# ---------------------------------------------------
# Read Schemas
# ---------------------------------------------------
class OfferRead(BaseModel):
    """An offer as stored."""

    id: UUID
    job_request_id: UUID
    provider_id: UUID
    thread_id: UUID
    booking_id: UUID | None = None
    currency: str
    amount_cents: int
    message: str
    earliest_start: datetime | None = None
    status: OfferStatus
    accepted_at: datetime | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OfferProviderInfo(BaseModel):
    """Provider details shown to a customer comparing offers."""

    id: UUID
    full_name: str | None = None
    display_name: str | None = None
    company_name: str | None = None
    verification_status: VerificationStatus | None = None


class CustomerOfferRead(OfferRead):
    provider: OfferProviderInfo
