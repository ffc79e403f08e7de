# tests/payment/test_payment_service.py
from uuid import uuid4

import pytest
from sqlalchemy import select

from baucrew.booking.models import Booking, BookingStatus
from baucrew.booking.services import BookingService
from baucrew.core.config import settings
from baucrew.core.exceptions import AuthorizationError, BusinessRuleError, ConflictError, NotFoundError
from baucrew.database.enums import UserRole
from baucrew.payment.models import PaymentStatus, PaymentTransaction
from baucrew.payment.services import PaymentService


async def confirm(session_factory, user, booking_id):
    async with session_factory() as session:
        return await PaymentService(session).confirm_simulated_payment(user, booking_id)


async def stored_state(session_factory, booking_id):
    async with session_factory() as session:
        booking = await session.get(Booking, booking_id)
        payment = (
            await session.execute(
                select(PaymentTransaction).filter(PaymentTransaction.booking_id == booking_id)
            )
        ).scalar_one()
        return booking, payment


@pytest.mark.asyncio
async def test_confirm_payment_marks_booking_paid(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    booking = await seed.booking(customer, provider)

    result = await confirm(session_factory, customer, booking.id)

    assert result.booking_id == booking.id
    stored, payment = await stored_state(session_factory, booking.id)
    assert stored.status == BookingStatus.PAID
    assert stored.paid_at is not None
    assert payment.status == PaymentStatus.SUCCEEDED


@pytest.mark.asyncio
async def test_payment_reveals_address_to_provider(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    booking = await seed.booking(customer, provider)

    async with session_factory() as session:
        before = await BookingService(session).get_provider_booking_detail(provider, booking.id)
    await confirm(session_factory, customer, booking.id)
    async with session_factory() as session:
        after = await BookingService(session).get_provider_booking_detail(provider, booking.id)

    assert (before.address_line1, before.address_line2) == ("", "")
    assert after.address_line1 == "Invalidenstrasse 117"
    assert after.address_line2 == "Hinterhaus, 3. OG"


@pytest.mark.asyncio
async def test_confirm_twice_conflicts(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    booking = await seed.booking(customer, provider)
    await confirm(session_factory, customer, booking.id)

    with pytest.raises(ConflictError) as exc:
        await confirm(session_factory, customer, booking.id)

    assert exc.value.message == "This booking does not require payment or has already been paid"


@pytest.mark.asyncio
async def test_confirm_foreign_booking_denied(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    stranger = await seed.user(UserRole.CUSTOMER, "Egon")
    provider = await seed.provider()
    booking = await seed.booking(customer, provider)

    with pytest.raises(AuthorizationError):
        await confirm(session_factory, stranger, booking.id)

    stored, payment = await stored_state(session_factory, booking.id)
    assert stored.status == BookingStatus.NEEDS_PAYMENT
    assert payment.status == PaymentStatus.REQUIRES_PAYMENT


@pytest.mark.asyncio
async def test_confirm_missing_booking(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)

    with pytest.raises(NotFoundError):
        await confirm(session_factory, customer, uuid4())


@pytest.mark.asyncio
async def test_confirm_refused_when_real_payments_enabled(
    seed, session_factory, monkeypatch
) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    booking = await seed.booking(customer, provider)
    monkeypatch.setattr(settings, "PAYMENTS_MODE", "stripe")

    with pytest.raises(BusinessRuleError) as exc:
        await confirm(session_factory, customer, booking.id)

    assert exc.value.status_code == 422
    stored, _ = await stored_state(session_factory, booking.id)
    assert stored.status == BookingStatus.NEEDS_PAYMENT


@pytest.mark.asyncio
async def test_provider_cannot_confirm(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    booking = await seed.booking(customer, provider)

    with pytest.raises(AuthorizationError):
        await confirm(session_factory, provider, booking.id)
