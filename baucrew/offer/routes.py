"""
baucrew/offer/routes.py

Offer Routes
- Send an offer on a job request (Authenticated Provider)
- Withdraw an offer (Authenticated Provider)
- Accept an offer, creating the booking (Authenticated Customer)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.booking.schemas import AcceptOfferResult
from baucrew.booking.services import BookingService
from baucrew.core.dependencies import require_roles
from baucrew.core.limiter import limiter
from baucrew.database.enums import CUSTOMER_ROLES, PROVIDER_ROLES
from baucrew.database.models import User
from baucrew.database.session import get_db
from baucrew.offer import schemas
from baucrew.offer.services import OfferService

router = APIRouter(prefix="/offers", tags=["Offers"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedCustomerDep = Annotated[User, Depends(require_roles(*CUSTOMER_ROLES))]
AuthenticatedProviderDep = Annotated[User, Depends(require_roles(*PROVIDER_ROLES))]


# ---------------------------------------------------
# Provider Endpoints
# ---------------------------------------------------
@router.post(
    "",
    response_model=schemas.OfferCreateResult,
    status_code=status.HTTP_201_CREATED,
    summary="Send Offer",
    description="Provider sends a priced offer on an open job request.",
)
@limiter.limit("10/minute")
async def create_offer(
    request: Request,
    payload: schemas.OfferCreate,
    db: DBDep,
    current_user: AuthenticatedProviderDep,
) -> schemas.OfferCreateResult:
    return await OfferService(db).create_offer(current_user, payload)


@router.post(
    "/{offer_id}/withdraw",
    response_model=schemas.OfferWithdrawResult,
    status_code=status.HTTP_200_OK,
    summary="Withdraw Offer",
    description="Provider withdraws their own offer while it has not been decided.",
)
@limiter.limit("10/minute")
async def withdraw_offer(
    request: Request,
    offer_id: UUID,
    db: DBDep,
    current_user: AuthenticatedProviderDep,
) -> schemas.OfferWithdrawResult:
    return await OfferService(db).withdraw_offer(current_user, offer_id)


# ---------------------------------------------------
# Customer Endpoints
# ---------------------------------------------------
@router.post(
    "/{offer_id}/accept",
    response_model=AcceptOfferResult,
    status_code=status.HTTP_200_OK,
    summary="Accept Offer",
    description=(
        "Customer accepts an offer on their own job request. Competing offers are "
        "rejected and a booking awaiting payment is created."
    ),
)
@limiter.limit("5/minute")
async def accept_offer(
    request: Request,
    offer_id: UUID,
    db: DBDep,
    current_user: AuthenticatedCustomerDep,
) -> AcceptOfferResult:
    return await BookingService(db).accept_offer(current_user, offer_id)
