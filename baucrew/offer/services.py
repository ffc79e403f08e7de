"""
baucrew/offer/services.py

Offer Service Layer
- Create an offer on a job request (Authenticated Provider).
  Opens the customer/provider thread on first contact.
- Withdraw a sent offer (Authenticated Provider)

Acceptance lives in baucrew.booking.services since it creates the booking.
"""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.core.config import settings
from baucrew.core.exceptions import AuthorizationError, ConflictError, NotFoundError
from baucrew.core.permissions import Identity, ensure_role
from baucrew.database.enums import PROVIDER_ROLES
from baucrew.job_request.models import OFFERABLE_STATUSES, JobRequest, JobRequestStatus
from baucrew.messaging.services import get_or_create_thread
from baucrew.offer import schemas
from baucrew.offer.models import OfferStatus, RequestOffer

logger = logging.getLogger(__name__)


class OfferService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _lock_job_request_or_404(self, job_request_id: UUID) -> JobRequest:
        """Load the job request under a row lock so its status cannot change before commit."""
        result = await self.db.execute(
            select(JobRequest)
            .filter(JobRequest.id == job_request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        job_request = result.scalar_one_or_none()
        if not job_request:
            logger.warning(f"Job request not found: {job_request_id}")
            raise NotFoundError("Job request not found")
        return job_request

    async def _get_offer_or_404(self, offer_id: UUID) -> RequestOffer:
        offer = await self.db.get(RequestOffer, offer_id)
        if not offer:
            logger.warning(f"Offer not found: offer_id={offer_id}")
            raise NotFoundError("Offer not found")
        return offer

    # ---------------------------------------------------
    # Create Offer
    # ---------------------------------------------------
    async def create_offer(
        self, user: Identity, payload: schemas.OfferCreate
    ) -> schemas.OfferCreateResult:
        """Provider sends a priced offer on an open job request."""
        ensure_role(user, PROVIDER_ROLES, "Only providers can create offers")

        job_request = await self._lock_job_request_or_404(payload.job_request_id)
        if job_request.status not in OFFERABLE_STATUSES:
            logger.warning(
                f"Provider {user.id} tried to offer on job request {job_request.id} "
                f"in status {job_request.status.value}"
            )
            await self.db.rollback()
            raise ConflictError("This job request is no longer accepting offers")

        try:
            thread = await get_or_create_thread(self.db, job_request, user.id)

            offer = RequestOffer(
                job_request_id=job_request.id,
                provider_id=user.id,
                thread_id=thread.id,
                currency=settings.DEFAULT_CURRENCY,
                amount_cents=payload.amount_cents,
                message=payload.message,
                earliest_start=payload.earliest_start,
                status=OfferStatus.SENT,
            )
            self.db.add(offer)

            if job_request.status == JobRequestStatus.OPEN:
                job_request.status = JobRequestStatus.IN_DISCUSSION

            await self.db.commit()
        except IntegrityError as e:
            # Concurrent first contact created the same thread
            await self.db.rollback()
            logger.warning(f"Offer creation conflict on job request {payload.job_request_id}: {e}")
            raise ConflictError("The conversation was updated concurrently, please retry") from e

        logger.info(
            f"Offer {offer.id} sent by provider {user.id} on job request {job_request.id} "
            f"({offer.amount_cents} {offer.currency})"
        )
        return schemas.OfferCreateResult(offer_id=offer.id)

    # ---------------------------------------------------
    # Withdraw Offer
    # ---------------------------------------------------
    async def withdraw_offer(self, user: Identity, offer_id: UUID) -> schemas.OfferWithdrawResult:
        """Provider withdraws their own offer while it is still SENT."""
        ensure_role(user, PROVIDER_ROLES, "Only providers can withdraw offers")

        offer = await self._get_offer_or_404(offer_id)
        if offer.provider_id != user.id:
            logger.warning(f"User {user.id} tried to withdraw offer {offer_id} of {offer.provider_id}")
            raise AuthorizationError("You can only withdraw your own offers")

        # Compare-and-set: loses cleanly against a concurrent acceptance
        result = await self.db.execute(
            update(RequestOffer)
            .where(RequestOffer.id == offer_id, RequestOffer.status == OfferStatus.SENT)
            .values(status=OfferStatus.WITHDRAWN)
        )
        if result.rowcount != 1:
            await self.db.rollback()
            raise ConflictError("Only sent offers can be withdrawn")

        await self.db.commit()
        logger.info(f"Offer {offer_id} withdrawn by provider {user.id}")
        return schemas.OfferWithdrawResult(offer_id=offer_id, status=OfferStatus.WITHDRAWN)
