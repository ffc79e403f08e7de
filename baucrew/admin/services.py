"""
baucrew/admin/services.py

Admin Service Layer
Read-only oversight of the latest job requests and bookings.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from baucrew.admin import schemas
from baucrew.booking.models import Booking
from baucrew.core.config import settings
from baucrew.core.permissions import Identity, ensure_role
from baucrew.database.enums import ADMIN_ROLES
from baucrew.database.models import User
from baucrew.job_request.models import JobRequest
from baucrew.messaging.models import MessageThread
from baucrew.offer.models import RequestOffer
from baucrew.payment.schemas import PaymentSummary
from baucrew.users.schemas import UserSummary
from baucrew.users.services import build_provider_summary

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_job_requests(self, user: Identity) -> list[schemas.AdminJobRequestItem]:
        """Latest job requests with customer and offer/thread counts."""
        ensure_role(user, ADMIN_ROLES, "Admin access required")

        offer_count = (
            select(func.count(RequestOffer.id))
            .where(RequestOffer.job_request_id == JobRequest.id)
            .correlate(JobRequest)
            .scalar_subquery()
        )
        thread_count = (
            select(func.count(MessageThread.id))
            .where(MessageThread.job_request_id == JobRequest.id)
            .correlate(JobRequest)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(JobRequest, offer_count, thread_count)
            .options(selectinload(JobRequest.customer))
            .order_by(JobRequest.created_at.desc())
            .limit(settings.ADMIN_LIST_LIMIT)
        )
        rows = result.all()
        logger.info(f"[ADMIN] {user.id} listed {len(rows)} job requests")

        return [
            schemas.AdminJobRequestItem.model_validate(job_request).model_copy(
                update={"offer_count": offers, "thread_count": threads}
            )
            for job_request, offers, threads in rows
        ]

    async def list_bookings(self, user: Identity) -> list[schemas.AdminBookingItem]:
        """Latest bookings with the full address, parties, job request and payment."""
        ensure_role(user, ADMIN_ROLES, "Admin access required")

        result = await self.db.execute(
            select(Booking)
            .options(
                selectinload(Booking.customer),
                selectinload(Booking.provider).selectinload(User.provider_profile),
                selectinload(Booking.job_request),
                selectinload(Booking.payment),
            )
            .order_by(Booking.created_at.desc())
            .limit(settings.ADMIN_LIST_LIMIT)
        )
        bookings = result.unique().scalars().all()
        logger.info(f"[ADMIN] {user.id} listed {len(bookings)} bookings")

        return [
            schemas.AdminBookingItem(
                id=b.id,
                type=b.type,
                status=b.status,
                job_title=b.job_title,
                address_line1=b.address_line1,
                address_line2=b.address_line2,
                city=b.city,
                postal_code=b.postal_code,
                country=b.country,
                created_at=b.created_at,
                requested_start=b.requested_start,
                requested_end=b.requested_end,
                scheduled_start=b.scheduled_start,
                scheduled_end=b.scheduled_end,
                paid_at=b.paid_at,
                currency=b.currency,
                quoted_price_cents=b.quoted_price_cents,
                platform_fee_cents=b.platform_fee_cents,
                provider_payout_cents=b.provider_payout_cents,
                customer=UserSummary.model_validate(b.customer),
                provider=build_provider_summary(b.provider),
                job_request=(
                    schemas.AdminBookingJobRequestInfo.model_validate(b.job_request)
                    if b.job_request
                    else None
                ),
                payment=PaymentSummary.model_validate(b.payment) if b.payment else None,
            )
            for b in bookings
        ]
