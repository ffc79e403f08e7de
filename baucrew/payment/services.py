"""
baucrew/payment/services.py

Payment Service Layer
Simulated payment confirmation for environments running with PAYMENTS_MODE=disabled.
Moving a booking to PAID is what reveals the street address to its provider.
"""

import logging
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.booking.models import Booking, BookingStatus
from baucrew.core.config import settings
from baucrew.core.exceptions import (
    APIError,
    AuthorizationError,
    BusinessRuleError,
    ConflictError,
    NotFoundError,
)
from baucrew.core.permissions import Identity, ensure_role
from baucrew.database.base import utcnow
from baucrew.database.enums import CUSTOMER_ROLES
from baucrew.payment import schemas
from baucrew.payment.models import PaymentStatus, PaymentTransaction

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def confirm_simulated_payment(
        self, user: Identity, booking_id: UUID
    ) -> schemas.ConfirmSimulatedPaymentResult:
        """Mark a NEEDS_PAYMENT booking as PAID and its payment transaction as SUCCEEDED."""
        ensure_role(user, CUSTOMER_ROLES, "Only customers can confirm payments")

        if not settings.simulated_payments_enabled:
            logger.warning(
                f"[PAYMENT] Simulated confirmation refused for booking {booking_id}: "
                f"PAYMENTS_MODE={settings.PAYMENTS_MODE}"
            )
            raise BusinessRuleError(
                "Simulated payments are only available when PAYMENTS_MODE=disabled"
            )

        booking = await self.db.get(Booking, booking_id)
        if not booking:
            logger.warning(f"Booking not found: booking_id={booking_id}")
            raise NotFoundError("Booking not found")

        if booking.customer_id != user.id:
            logger.warning(f"User {user.id} tried to pay booking {booking_id} of {booking.customer_id}")
            raise AuthorizationError("You can only confirm payments for your own bookings")

        if booking.status != BookingStatus.NEEDS_PAYMENT:
            raise ConflictError("This booking does not require payment or has already been paid")

        try:
            now = utcnow()
            paid = await self.db.execute(
                update(Booking)
                .where(Booking.id == booking_id, Booking.status == BookingStatus.NEEDS_PAYMENT)
                .values(status=BookingStatus.PAID, paid_at=now, updated_at=now)
            )
            if paid.rowcount != 1:
                raise ConflictError("This booking does not require payment or has already been paid")

            await self.db.execute(
                update(PaymentTransaction)
                .where(PaymentTransaction.booking_id == booking_id)
                .values(status=PaymentStatus.SUCCEEDED, updated_at=now)
            )
            await self.db.commit()
        except APIError:
            await self.db.rollback()
            raise
        except Exception as e:
            logger.error(f"[PAYMENT] Error confirming payment for booking {booking_id}: {e}", exc_info=True)
            await self.db.rollback()
            raise APIError(status_code=500, message="Failed to confirm payment.") from e

        logger.info(f"[PAYMENT] Simulated payment confirmed for booking {booking_id} by {user.id}")
        return schemas.ConfirmSimulatedPaymentResult(booking_id=booking_id)
