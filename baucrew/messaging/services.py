"""
baucrew/messaging/services.py

Messaging Service Layer

Handles:
- Find-or-create of the one thread per (job request, provider) pair
- Sending messages, either into an existing thread or by opening contact on a job request
- Listing a user's threads (inbox) with a last-message preview
"""

import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from baucrew.core.exceptions import AuthorizationError, NotFoundError
from baucrew.core.permissions import Identity, ensure_role
from baucrew.database.enums import PROVIDER_ROLES
from baucrew.database.models import User
from baucrew.job_request.models import JobRequest
from baucrew.messaging import schemas
from baucrew.messaging.models import Message, MessageThread
from baucrew.users.schemas import UserSummary
from baucrew.users.services import build_provider_summary

logger = logging.getLogger(__name__)


# ---------------------------------------------------
# Threads
# ---------------------------------------------------
async def get_or_create_thread(
    db: AsyncSession, job_request: JobRequest, provider_id: UUID
) -> MessageThread:
    """
    Return the thread between the job request's customer and the provider,
    creating it (flushed, not committed) on first contact.
    """
    result = await db.execute(
        select(MessageThread).filter(
            MessageThread.job_request_id == job_request.id,
            MessageThread.provider_id == provider_id,
        )
    )
    thread = result.unique().scalar_one_or_none()
    if thread:
        return thread

    thread = MessageThread(
        job_request_id=job_request.id,
        customer_id=job_request.customer_id,
        provider_id=provider_id,
    )
    db.add(thread)
    await db.flush()
    logger.info(f"Thread {thread.id} opened on job request {job_request.id} by provider {provider_id}")
    return thread


# ---------------------------------------------------
# Send Message
# ---------------------------------------------------
async def send_message(
    db: AsyncSession, user: Identity, payload: schemas.SendMessageRequest
) -> schemas.SendMessageResult:
    """
    Post a message. With `thread_id` the caller must be a participant; otherwise
    a provider opens (or reuses) their thread on `job_request_id`.
    """
    if payload.thread_id:
        thread = await db.get(MessageThread, payload.thread_id)
        if not thread:
            logger.warning(f"Thread not found: {payload.thread_id}")
            raise NotFoundError("Thread not found")
        if user.id not in (thread.customer_id, thread.provider_id):
            logger.warning(f"User {user.id} is not a participant of thread {thread.id}")
            raise AuthorizationError("You are not a participant in this thread")
    else:
        ensure_role(user, PROVIDER_ROLES, "Only providers can initiate contact on job requests")
        job_request = await db.get(JobRequest, payload.job_request_id)
        if not job_request:
            logger.warning(f"Job request not found: {payload.job_request_id}")
            raise NotFoundError("Job request not found")
        thread = await get_or_create_thread(db, job_request, user.id)

    message = Message(
        thread_id=thread.id,
        sender_id=user.id,
        body=payload.body.strip(),
        attachment_urls=[],
    )
    db.add(message)
    await db.commit()

    logger.info(f"Message {message.id} sent by {user.id} in thread {thread.id}")
    return schemas.SendMessageResult(thread_id=thread.id)


# ---------------------------------------------------
# Inbox
# ---------------------------------------------------
async def list_my_threads(db: AsyncSession, user: Identity) -> list[schemas.InboxThreadRead]:
    """Threads where the caller is customer or provider, newest first."""
    result = await db.execute(
        select(MessageThread)
        .options(
            selectinload(MessageThread.messages),
            selectinload(MessageThread.provider).selectinload(User.provider_profile),
            selectinload(MessageThread.customer),
            selectinload(MessageThread.job_request),
        )
        .filter(or_(MessageThread.customer_id == user.id, MessageThread.provider_id == user.id))
        .order_by(MessageThread.created_at.desc())
    )
    threads = result.unique().scalars().all()

    inbox = []
    for thread in threads:
        # messages are ordered oldest first on the relationship
        last = thread.messages[-1] if thread.messages else None
        inbox.append(
            schemas.InboxThreadRead(
                id=thread.id,
                job_request_id=thread.job_request_id,
                booking_id=thread.booking_id,
                customer_id=thread.customer_id,
                provider_id=thread.provider_id,
                created_at=thread.created_at,
                last_message=schemas.LastMessagePreview.model_validate(last) if last else None,
                provider=build_provider_summary(thread.provider),
                customer=UserSummary.model_validate(thread.customer),
                job_request=schemas.ThreadJobRequestInfo.model_validate(thread.job_request),
            )
        )
    return inbox
