"""
baucrew/job_request/services.py

Job Request Service Layer
- Create a job request (Authenticated Customer)
- List and view own job requests with offers (Authenticated Customer)
- Job board and provider detail view (Authenticated Provider).
  Provider results are built from schemas without street address fields.
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from baucrew.core.exceptions import AuthorizationError, NotFoundError
from baucrew.core.permissions import Identity, ensure_role
from baucrew.database.enums import CUSTOMER_ROLES, PROVIDER_ROLES
from baucrew.database.models import User
from baucrew.job_request import schemas
from baucrew.job_request.models import JobRequest, JobRequestStatus
from baucrew.messaging.models import Message, MessageThread
from baucrew.messaging.schemas import ThreadRead
from baucrew.offer.models import RequestOffer
from baucrew.offer.schemas import CustomerOfferRead, OfferProviderInfo, OfferRead

logger = logging.getLogger(__name__)


def _offer_count_subquery():
    """Correlated count of offers for the JobRequest in the enclosing query."""
    return (
        select(func.count(RequestOffer.id))
        .where(RequestOffer.job_request_id == JobRequest.id)
        .correlate(JobRequest)
        .scalar_subquery()
    )


class JobRequestService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_job_request_or_404(self, job_request_id: UUID, *options) -> JobRequest:
        result = await self.db.execute(
            select(JobRequest).options(*options).filter(JobRequest.id == job_request_id)
        )
        job_request = result.unique().scalar_one_or_none()
        if not job_request:
            logger.warning(f"Job request not found: {job_request_id}")
            raise NotFoundError("Job request not found")
        return job_request

    # ---------------------------------------------------
    # Customer Operations
    # ---------------------------------------------------
    async def create_job_request(
        self, user: Identity, payload: schemas.JobRequestCreate
    ) -> schemas.JobRequestCreateResult:
        """Customer posts a new job request in OPEN status."""
        ensure_role(user, CUSTOMER_ROLES, "Only customers can create job requests")

        job_request = JobRequest(
            customer_id=user.id,
            category=payload.category,
            title=payload.title.strip(),
            description=payload.description.strip(),
            address_line1=payload.address_line1.strip(),
            address_line2=(payload.address_line2 or "").strip() or None,
            city=payload.city.strip(),
            postal_code=payload.postal_code,
            country=payload.country.upper(),
            timeframe=payload.timeframe,
            desired_date=payload.desired_date,
            budget_min_cents=payload.budget_min_cents,
            budget_max_cents=payload.budget_max_cents,
            photo_urls=[str(url) for url in payload.photo_urls],
            status=JobRequestStatus.OPEN,
        )
        self.db.add(job_request)
        await self.db.commit()

        logger.info(f"Job request {job_request.id} created by customer {user.id}")
        return schemas.JobRequestCreateResult(job_request_id=job_request.id)

    async def list_customer_job_requests(self, user: Identity) -> list[schemas.JobRequestRead]:
        """The caller's own job requests, newest first, with offer counts."""
        offer_count = _offer_count_subquery()
        result = await self.db.execute(
            select(JobRequest, offer_count)
            .filter(JobRequest.customer_id == user.id)
            .order_by(JobRequest.created_at.desc())
        )
        return [
            schemas.JobRequestRead.model_validate(job_request).model_copy(
                update={"offer_count": count}
            )
            for job_request, count in result.all()
        ]

    async def get_job_request_for_customer(
        self, user: Identity, job_request_id: UUID
    ) -> schemas.JobRequestCustomerDetail:
        """A customer's own job request with every offer and the offering provider."""
        ensure_role(user, CUSTOMER_ROLES, "Only customers can view job request details")

        job_request = await self._get_job_request_or_404(
            job_request_id,
            selectinload(JobRequest.offers)
            .selectinload(RequestOffer.provider)
            .selectinload(User.provider_profile),
        )
        if job_request.customer_id != user.id:
            logger.warning(f"User {user.id} denied access to job request {job_request_id}")
            raise AuthorizationError("You can only view your own job requests")

        offers = sorted(job_request.offers, key=lambda o: o.created_at, reverse=True)
        detail = schemas.JobRequestCustomerDetail.model_validate(
            {
                **schemas.JobRequestRead.model_validate(job_request).model_dump(),
                "offer_count": len(offers),
                "offers": [self._construct_customer_offer(offer) for offer in offers],
            }
        )
        return detail

    @staticmethod
    def _construct_customer_offer(offer: RequestOffer) -> CustomerOfferRead:
        provider = offer.provider
        profile = provider.provider_profile
        return CustomerOfferRead(
            **OfferRead.model_validate(offer).model_dump(),
            provider=OfferProviderInfo(
                id=provider.id,
                full_name=provider.full_name,
                display_name=profile.display_name if profile else None,
                company_name=profile.company_name if profile else None,
                verification_status=profile.verification_status if profile else None,
            ),
        )

    # ---------------------------------------------------
    # Provider Operations
    # ---------------------------------------------------
    async def get_job_request_for_provider(
        self, user: Identity, job_request_id: UUID
    ) -> schemas.ProviderJobRequestDetail:
        """
        Job request as a provider sees it: no street address, plus the caller's
        own thread (if any) and own offers.
        """
        ensure_role(user, PROVIDER_ROLES, "Only providers can view job request details")

        job_request = await self._get_job_request_or_404(
            job_request_id,
            selectinload(JobRequest.customer),
            selectinload(JobRequest.threads)
            .selectinload(MessageThread.messages)
            .joinedload(Message.sender),
            selectinload(JobRequest.offers),
        )

        total_offers = len(job_request.offers)
        my_offers = sorted(
            (o for o in job_request.offers if o.provider_id == user.id),
            key=lambda o: o.created_at,
            reverse=True,
        )
        thread = next((t for t in job_request.threads if t.provider_id == user.id), None)

        view = schemas.ProviderJobRequestView.model_validate(job_request).model_copy(
            update={"total_offers": total_offers}
        )
        return schemas.ProviderJobRequestDetail(
            job_request=view,
            thread=ThreadRead.model_validate(thread) if thread else None,
            my_offers=[OfferRead.model_validate(o) for o in my_offers],
        )

    async def list_open_job_requests_for_providers(
        self, user: Identity
    ) -> list[schemas.OpenJobRequestItem]:
        """Job board: OPEN requests, newest first, without street address."""
        ensure_role(user, PROVIDER_ROLES, "Only providers can view job requests")

        offer_count = _offer_count_subquery()
        result = await self.db.execute(
            select(JobRequest, offer_count)
            .filter(JobRequest.status == JobRequestStatus.OPEN)
            .order_by(JobRequest.created_at.desc())
        )
        return [
            schemas.OpenJobRequestItem.model_validate(job_request).model_copy(
                update={"offer_count": count}
            )
            for job_request, count in result.all()
        ]
