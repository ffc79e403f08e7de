"""
baucrew/booking/routes.py

Booking Routes
- List bookings as customer (Authenticated Customer)
- List bookings as provider (Authenticated Provider)
- Provider booking detail; street address shown only after payment (Authenticated Provider)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.booking import schemas
from baucrew.booking.services import BookingService
from baucrew.core.dependencies import require_roles
from baucrew.core.limiter import limiter
from baucrew.database.enums import CUSTOMER_ROLES, PROVIDER_ROLES
from baucrew.database.models import User
from baucrew.database.session import get_db

router = APIRouter(prefix="/bookings", tags=["Bookings"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedCustomerDep = Annotated[User, Depends(require_roles(*CUSTOMER_ROLES))]
AuthenticatedProviderDep = Annotated[User, Depends(require_roles(*PROVIDER_ROLES))]


@router.get(
    "/customer",
    response_model=list[schemas.CustomerBookingListItem],
    status_code=status.HTTP_200_OK,
    summary="List Customer Bookings",
    description="Bookings of the authenticated customer, newest first.",
)
@limiter.limit("20/minute")
async def list_customer_bookings(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedCustomerDep,
) -> list[schemas.CustomerBookingListItem]:
    return await BookingService(db).list_customer_bookings(current_user)


@router.get(
    "/provider",
    response_model=list[schemas.ProviderBookingListItem],
    status_code=status.HTTP_200_OK,
    summary="List Provider Bookings",
    description="Bookings of the authenticated provider, newest first. No street address.",
)
@limiter.limit("20/minute")
async def list_provider_bookings(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedProviderDep,
) -> list[schemas.ProviderBookingListItem]:
    return await BookingService(db).list_provider_bookings(current_user)


@router.get(
    "/provider/{booking_id}",
    response_model=schemas.ProviderBookingDetail,
    status_code=status.HTTP_200_OK,
    summary="Provider Booking Detail",
    description="Full booking for its provider. Street lines are empty until payment is confirmed.",
)
@limiter.limit("20/minute")
async def get_provider_booking_detail(
    request: Request,
    booking_id: UUID,
    db: DBDep,
    current_user: AuthenticatedProviderDep,
) -> schemas.ProviderBookingDetail:
    return await BookingService(db).get_provider_booking_detail(current_user, booking_id)
