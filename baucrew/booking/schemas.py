"""
baucrew/booking/schemas.py

Booking Schemas
Pydantic schemas for booking-related operations:
- Offer acceptance result
- Customer and provider booking lists
- Provider booking detail (street address subject to the visibility policy)

The provider list item deliberately has no street address fields at all.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from baucrew.booking.models import BookingStatus, BookingType, PriceType
from baucrew.core.schemas import ActionResult
from baucrew.job_request.models import ListingCategory
from baucrew.messaging.schemas import ThreadRead
from baucrew.users.schemas import ProviderSummary, UserSummary


# ---------------------------------------------------
# Accept Offer Schema
# ---------------------------------------------------
class AcceptOfferResult(ActionResult):
    """Schema returned when a customer accepts an offer."""

    booking_id: UUID = Field(..., description="Booking created for the accepted offer")


# ---------------------------------------------------
# List Schemas
# ---------------------------------------------------
class BookingListItemBase(BaseModel):
    """Fields shared by customer and provider booking lists."""

    id: UUID
    status: BookingStatus
    job_title: str
    city: str
    postal_code: str
    created_at: datetime
    quoted_price_cents: int
    currency: str

    model_config = ConfigDict(from_attributes=True)


class CustomerBookingListItem(BookingListItemBase):
    provider: ProviderSummary


class ProviderBookingListItem(BookingListItemBase):
    customer: UserSummary


# ---------------------------------------------------
# Provider Detail Schema
# ---------------------------------------------------
class BookingJobRequestInfo(BaseModel):
    id: UUID
    category: ListingCategory

    model_config = ConfigDict(from_attributes=True)


class ProviderBookingDetail(BaseModel):
    """Full booking for its provider; street lines are "" until payment is confirmed."""

    id: UUID
    type: BookingType
    status: BookingStatus
    job_request_id: UUID | None = None
    customer_id: UUID
    provider_id: UUID

    job_title: str
    job_description: str
    job_photo_urls: list[str] = Field(default_factory=list)

    address_line1: str
    address_line2: str
    city: str
    postal_code: str
    country: str

    currency: str
    price_type: PriceType
    quoted_price_cents: int
    platform_fee_cents: int
    provider_payout_cents: int

    requested_start: datetime | None = None
    requested_end: datetime | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    paid_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    customer: UserSummary
    job_request: BookingJobRequestInfo | None = None
    thread: ThreadRead | None = None
