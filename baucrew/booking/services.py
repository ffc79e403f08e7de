"""
baucrew/booking/services.py

Booking Service Layer
Handles the offer-acceptance transaction and the booking read models:
- Accept an offer: one atomic unit that accepts the offer, rejects competing
  offers, creates the booking and its payment transaction, links the thread
  and assigns the job request
- List bookings for the customer and for the provider
- Provider booking detail with server-side address redaction
"""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from baucrew.booking import schemas
from baucrew.booking.models import Booking, BookingStatus, BookingType, PriceType
from baucrew.booking.policy import provider_address_lines
from baucrew.core.exceptions import APIError, AuthorizationError, ConflictError, NotFoundError
from baucrew.core.permissions import Identity, ensure_role
from baucrew.database.base import utcnow
from baucrew.database.enums import CUSTOMER_ROLES, PROVIDER_ROLES
from baucrew.database.models import User
from baucrew.job_request.models import JobRequest, JobRequestStatus
from baucrew.messaging.models import Message, MessageThread
from baucrew.messaging.schemas import ThreadRead
from baucrew.offer.models import OfferStatus, RequestOffer
from baucrew.payment.models import PaymentStatus, PaymentTransaction
from baucrew.users.schemas import UserSummary
from baucrew.users.services import build_provider_summary

logger = logging.getLogger(__name__)

OFFER_ALREADY_ACCEPTED = "This offer has already been accepted"
OFFER_NO_LONGER_AVAILABLE = "This offer is no longer available"


def _ensure_offer_open(status: OfferStatus) -> None:
    """Raise ConflictError unless the offer can still be accepted."""
    if status == OfferStatus.ACCEPTED:
        raise ConflictError(OFFER_ALREADY_ACCEPTED)
    if status != OfferStatus.SENT:
        raise ConflictError(OFFER_NO_LONGER_AVAILABLE)


class BookingService:
    """Service class for offer acceptance and booking queries."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_offer_or_404(self, offer_id: UUID) -> RequestOffer:
        """Helper to retrieve an offer with its job request and thread or raise 404."""
        stmt = (
            select(RequestOffer)
            .options(selectinload(RequestOffer.job_request), selectinload(RequestOffer.thread))
            .filter(RequestOffer.id == offer_id)
        )
        result = await self.db.execute(stmt)
        offer = result.unique().scalar_one_or_none()
        if not offer:
            logger.warning(f"Offer not found: offer_id={offer_id}")
            raise NotFoundError("Offer not found")
        return offer

    async def _get_booking_for_provider_view_or_404(self, booking_id: UUID) -> Booking:
        """Helper to retrieve a booking with customer, job request and thread or raise 404."""
        stmt = (
            select(Booking)
            .options(
                selectinload(Booking.customer),
                selectinload(Booking.job_request),
                selectinload(Booking.thread)
                .selectinload(MessageThread.messages)
                .joinedload(Message.sender),
            )
            .filter(Booking.id == booking_id)
        )
        result = await self.db.execute(stmt)
        booking = result.unique().scalar_one_or_none()
        if not booking:
            logger.warning(f"Booking not found: booking_id={booking_id}")
            raise NotFoundError("Booking not found")
        return booking

    async def _current_offer_status(self, offer_id: UUID) -> OfferStatus:
        """Committed status of an offer, bypassing the identity map."""
        return await self.db.scalar(select(RequestOffer.status).filter(RequestOffer.id == offer_id))

    # ---------------------------------------------------
    # Offer Acceptance
    # ---------------------------------------------------
    async def accept_offer(self, user: Identity, offer_id: UUID) -> schemas.AcceptOfferResult:
        """Customer accepts an offer on their own job request, creating the booking."""
        logger.info(f"Customer {user.id} accepting offer {offer_id}")
        ensure_role(user, CUSTOMER_ROLES, "Only customers can accept offers")

        offer = await self._get_offer_or_404(offer_id)

        if offer.job_request.customer_id != user.id:
            logger.warning(
                f"User {user.id} tried to accept offer {offer_id} on job request "
                f"{offer.job_request_id} owned by {offer.job_request.customer_id}"
            )
            raise AuthorizationError("You can only accept offers for your own job requests")

        _ensure_offer_open(offer.status)

        try:
            booking = await self._convert_offer_to_booking(offer)
            await self.db.commit()
        except APIError:
            await self.db.rollback()
            raise
        except Exception as e:
            logger.error(f"Error accepting offer {offer_id}: {e}", exc_info=True)
            await self.db.rollback()
            raise APIError(status_code=500, message="Failed to accept offer.") from e

        logger.info(
            f"Offer accepted: offer_id={offer_id}, booking_id={booking.id}, "
            f"job_request_id={offer.job_request_id}"
        )
        return schemas.AcceptOfferResult(booking_id=booking.id)

    async def _convert_offer_to_booking(self, offer: RequestOffer) -> Booking:
        """
        All writes of an acceptance. Runs inside the session's transaction and
        must be followed by commit (or rollback on any exception).
        """
        now = utcnow()

        # Concurrent acceptances on the same job request serialize on this row lock
        lock_result = await self.db.execute(
            select(JobRequest)
            .filter(JobRequest.id == offer.job_request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        job_request = lock_result.scalar_one()
        if job_request.status in (JobRequestStatus.ASSIGNED, JobRequestStatus.CLOSED):
            logger.warning(
                f"Job request {job_request.id} is {job_request.status.value}; "
                f"offer {offer.id} cannot be accepted"
            )
            # A double submit of the same offer must still report "already accepted"
            _ensure_offer_open(await self._current_offer_status(offer.id))
            raise ConflictError(OFFER_NO_LONGER_AVAILABLE)

        # 1. Accept this offer only if it is still SENT
        accepted = await self.db.execute(
            update(RequestOffer)
            .where(RequestOffer.id == offer.id, RequestOffer.status == OfferStatus.SENT)
            .values(status=OfferStatus.ACCEPTED, accepted_at=now)
        )
        if accepted.rowcount != 1:
            current_status = await self._current_offer_status(offer.id)
            logger.warning(f"Offer {offer.id} changed to {current_status} before acceptance")
            _ensure_offer_open(current_status)
            raise ConflictError(OFFER_NO_LONGER_AVAILABLE)

        # 2. Reject the competing offers that are still open
        rejected = await self.db.execute(
            update(RequestOffer)
            .where(
                RequestOffer.job_request_id == offer.job_request_id,
                RequestOffer.id != offer.id,
                RequestOffer.status == OfferStatus.SENT,
            )
            .values(status=OfferStatus.REJECTED)
        )
        logger.debug(f"Rejected {rejected.rowcount} competing offers on {offer.job_request_id}")

        # 3. Create the booking from a snapshot of the job request
        booking = Booking(
            type=BookingType.BOOKING,
            status=BookingStatus.NEEDS_PAYMENT,
            job_request_id=job_request.id,
            customer_id=job_request.customer_id,
            provider_id=offer.provider_id,
            job_title=job_request.title,
            job_description=job_request.description,
            job_photo_urls=list(job_request.photo_urls or []),
            address_line1=job_request.address_line1,
            address_line2=job_request.address_line2,
            city=job_request.city,
            postal_code=job_request.postal_code,
            country=job_request.country,
            currency=offer.currency,
            price_type=PriceType.QUOTE,
            quoted_price_cents=offer.amount_cents,
            platform_fee_cents=0,
            provider_payout_cents=0,
        )
        self.db.add(booking)
        await self.db.flush()

        # 4. Link the offer to its booking
        offer.booking_id = booking.id

        # 5. Link the conversation to the booking
        offer.thread.booking_id = booking.id

        # 6. The job request is now taken
        job_request.status = JobRequestStatus.ASSIGNED

        # 7. Payment intent for the booking
        payment = PaymentTransaction(
            booking_id=booking.id,
            amount_cents=offer.amount_cents,
            platform_fee_cents=0,
            provider_amount_cents=offer.amount_cents,
            currency=offer.currency,
            status=PaymentStatus.REQUIRES_PAYMENT,
        )
        self.db.add(payment)
        await self.db.flush()
        return booking

    # ---------------------------------------------------
    # Booking Retrieval
    # ---------------------------------------------------
    async def list_customer_bookings(
        self, user: Identity
    ) -> list[schemas.CustomerBookingListItem]:
        """Return the caller's bookings as customer, newest first."""
        ensure_role(user, CUSTOMER_ROLES, "Only customers can view customer bookings")

        stmt = (
            select(Booking)
            .options(selectinload(Booking.provider).selectinload(User.provider_profile))
            .filter(Booking.customer_id == user.id)
            .order_by(Booking.created_at.desc())
        )
        result = await self.db.execute(stmt)
        bookings = result.unique().scalars().all()

        return [
            schemas.CustomerBookingListItem(
                id=booking.id,
                status=booking.status,
                job_title=booking.job_title,
                city=booking.city,
                postal_code=booking.postal_code,
                created_at=booking.created_at,
                quoted_price_cents=booking.quoted_price_cents,
                currency=booking.currency,
                provider=build_provider_summary(booking.provider),
            )
            for booking in bookings
        ]

    async def list_provider_bookings(
        self, user: Identity
    ) -> list[schemas.ProviderBookingListItem]:
        """Return the caller's bookings as provider, newest first. Never includes street lines."""
        ensure_role(user, PROVIDER_ROLES, "Only providers can view provider bookings")

        stmt = (
            select(Booking)
            .options(selectinload(Booking.customer))
            .filter(Booking.provider_id == user.id)
            .order_by(Booking.created_at.desc())
        )
        result = await self.db.execute(stmt)
        bookings = result.unique().scalars().all()
        return [schemas.ProviderBookingListItem.model_validate(b) for b in bookings]

    async def get_provider_booking_detail(
        self, user: Identity, booking_id: UUID
    ) -> schemas.ProviderBookingDetail:
        """Return a booking for its provider with the address visibility policy applied."""
        ensure_role(user, PROVIDER_ROLES, "Only providers can view booking details")

        booking = await self._get_booking_for_provider_view_or_404(booking_id)

        if booking.provider_id != user.id:
            logger.warning(f"User {user.id} denied access to booking {booking_id}")
            raise AuthorizationError("You can only view your own bookings")

        address_line1, address_line2 = provider_address_lines(booking)

        return schemas.ProviderBookingDetail(
            id=booking.id,
            type=booking.type,
            status=booking.status,
            job_request_id=booking.job_request_id,
            customer_id=booking.customer_id,
            provider_id=booking.provider_id,
            job_title=booking.job_title,
            job_description=booking.job_description,
            job_photo_urls=booking.job_photo_urls or [],
            address_line1=address_line1,
            address_line2=address_line2,
            city=booking.city,
            postal_code=booking.postal_code,
            country=booking.country,
            currency=booking.currency,
            price_type=booking.price_type,
            quoted_price_cents=booking.quoted_price_cents,
            platform_fee_cents=booking.platform_fee_cents,
            provider_payout_cents=booking.provider_payout_cents,
            requested_start=booking.requested_start,
            requested_end=booking.requested_end,
            scheduled_start=booking.scheduled_start,
            scheduled_end=booking.scheduled_end,
            paid_at=booking.paid_at,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            customer=UserSummary.model_validate(booking.customer),
            job_request=(
                schemas.BookingJobRequestInfo.model_validate(booking.job_request)
                if booking.job_request
                else None
            ),
            thread=ThreadRead.model_validate(booking.thread) if booking.thread else None,
        )
