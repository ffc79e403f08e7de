"""
baucrew/payment/routes.py

Payment Routes
- Confirm a simulated payment (Authenticated Customer, PAYMENTS_MODE=disabled only)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.core.dependencies import require_roles
from baucrew.core.limiter import limiter
from baucrew.database.enums import CUSTOMER_ROLES
from baucrew.database.models import User
from baucrew.database.session import get_db
from baucrew.payment import schemas
from baucrew.payment.services import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedCustomerDep = Annotated[User, Depends(require_roles(*CUSTOMER_ROLES))]


@router.post(
    "/simulated/confirm",
    response_model=schemas.ConfirmSimulatedPaymentResult,
    status_code=status.HTTP_200_OK,
    summary="Confirm Simulated Payment",
    description="Marks a booking as paid without a payment provider. Development only.",
)
@limiter.limit("5/minute")
async def confirm_simulated_payment(
    request: Request,
    payload: schemas.ConfirmSimulatedPaymentRequest,
    db: DBDep,
    current_user: AuthenticatedCustomerDep,
) -> schemas.ConfirmSimulatedPaymentResult:
    return await PaymentService(db).confirm_simulated_payment(current_user, payload.booking_id)
