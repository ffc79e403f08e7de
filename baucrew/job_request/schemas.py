"""
baucrew/job_request/schemas.py

Job Request Schemas
Pydantic schemas for job request operations:
- Creation by customers (field validation mirrors the request form)
- Customer views with the full address
- Provider views without the street lines (addressLine1/addressLine2 are never
  declared on provider-facing schemas, so they cannot leak into a response)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator

from baucrew.core.schemas import ActionResult
from baucrew.job_request.models import JobRequestStatus, JobTimeframe, ListingCategory
from baucrew.messaging.schemas import ThreadRead
from baucrew.offer.schemas import CustomerOfferRead, OfferRead


# ---------------------------------------------------
# Job Request Creation Schema (Authenticated Customer)
# ---------------------------------------------------
class JobRequestCreate(BaseModel):
    """Schema used when a customer posts a new job request."""

    category: ListingCategory
    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=20, max_length=2000)
    address_line1: str = Field(..., min_length=5, max_length=100)
    address_line2: str | None = Field(None, max_length=100)
    city: str = Field(..., min_length=2, max_length=50)
    postal_code: str = Field(..., pattern=r"^\d{5}$", description="German postal code")
    country: str = Field("DE", min_length=2, max_length=2)
    timeframe: JobTimeframe = JobTimeframe.NEXT_7_DAYS
    desired_date: datetime | None = None
    budget_min_cents: int | None = Field(None, ge=0)
    budget_max_cents: int | None = Field(None, ge=0)
    photo_urls: list[HttpUrl] = Field(default_factory=list)

    @model_validator(mode="after")
    def budget_range_valid(self) -> "JobRequestCreate":
        if (
            self.budget_min_cents is not None
            and self.budget_max_cents is not None
            and self.budget_min_cents > self.budget_max_cents
        ):
            raise ValueError("budget_min_cents cannot exceed budget_max_cents")
        return self


class JobRequestCreateResult(ActionResult):
    job_request_id: UUID


# ---------------------------------------------------
# Shared Read Fields (no street address)
# ---------------------------------------------------
class JobRequestPublicBase(BaseModel):
    id: UUID
    status: JobRequestStatus
    category: ListingCategory
    title: str
    description: str
    city: str
    postal_code: str
    country: str
    timeframe: JobTimeframe
    desired_date: datetime | None = None
    budget_min_cents: int | None = None
    budget_max_cents: int | None = None
    currency: str
    photo_urls: list[str] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------
# Customer Views
# ---------------------------------------------------
class JobRequestRead(JobRequestPublicBase):
    """A job request as its customer sees it, including the address."""

    customer_id: UUID
    address_line1: str
    address_line2: str | None = None
    updated_at: datetime
    offer_count: int = 0


class JobRequestCustomerDetail(JobRequestRead):
    offers: list[CustomerOfferRead] = Field(default_factory=list)


# ---------------------------------------------------
# Provider Views
# ---------------------------------------------------
class JobRequestCustomerInfo(BaseModel):
    id: UUID
    full_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


class OpenJobRequestItem(JobRequestPublicBase):
    """Job board entry."""

    offer_count: int = 0


class ProviderJobRequestView(JobRequestPublicBase):
    updated_at: datetime
    customer: JobRequestCustomerInfo
    total_offers: int = 0


class ProviderJobRequestDetail(BaseModel):
    """Job request for a provider together with that provider's own thread and offers."""

    job_request: ProviderJobRequestView
    thread: ThreadRead | None = None
    my_offers: list[OfferRead] = Field(default_factory=list)
