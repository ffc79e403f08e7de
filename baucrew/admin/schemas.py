"""
baucrew/admin/schemas.py

Admin Schemas
Read models for platform oversight. Admins see the full booking address
regardless of payment status.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from baucrew.booking.models import BookingStatus, BookingType
from baucrew.job_request.models import JobRequestStatus, JobTimeframe, ListingCategory
from baucrew.payment.schemas import PaymentSummary
from baucrew.users.schemas import ProviderSummary, UserSummary


# ---------------------------------------------------
# Job Requests
# ---------------------------------------------------
class AdminJobRequestItem(BaseModel):
    id: UUID
    status: JobRequestStatus
    category: ListingCategory
    title: str
    city: str
    postal_code: str
    created_at: datetime
    budget_min_cents: int | None = None
    budget_max_cents: int | None = None
    currency: str
    timeframe: JobTimeframe
    customer: UserSummary
    offer_count: int = 0
    thread_count: int = 0

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------
# Bookings
# ---------------------------------------------------
class AdminBookingJobRequestInfo(BaseModel):
    id: UUID
    title: str
    category: ListingCategory

    model_config = ConfigDict(from_attributes=True)


class AdminBookingItem(BaseModel):
    id: UUID
    type: BookingType
    status: BookingStatus
    job_title: str

    address_line1: str
    address_line2: str | None = None
    city: str
    postal_code: str
    country: str

    created_at: datetime
    requested_start: datetime | None = None
    requested_end: datetime | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    paid_at: datetime | None = None

    currency: str
    quoted_price_cents: int
    platform_fee_cents: int
    provider_payout_cents: int

    customer: UserSummary
    provider: ProviderSummary
    job_request: AdminBookingJobRequestInfo | None = None
    payment: PaymentSummary | None = None
