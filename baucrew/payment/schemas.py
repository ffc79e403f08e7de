"""
baucrew/payment/schemas.py

Payment Schemas
- Simulated payment confirmation request/result
- Payment summary embedded in admin views
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from baucrew.core.schemas import ActionResult
from baucrew.payment.models import PaymentStatus


class ConfirmSimulatedPaymentRequest(BaseModel):
    booking_id: UUID = Field(..., description="Booking to mark as paid")


class ConfirmSimulatedPaymentResult(ActionResult):
    booking_id: UUID


class PaymentSummary(BaseModel):
    id: UUID
    status: PaymentStatus
    amount_cents: int

    model_config = ConfigDict(from_attributes=True)
