"""
baucrew/messaging/routes.py

Messaging API Routes

Defines all routes for the messaging system, including:
- Sending a message into a thread, or opening contact on a job request
- Listing all threads involving the authenticated user

All operations require user authentication and appropriate access control.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.core.dependencies import get_current_user
from baucrew.core.limiter import limiter
from baucrew.database.models import User
from baucrew.database.session import get_db
from baucrew.messaging import schemas, services

# ---------------------------------------------------
# Router Configuration
# ---------------------------------------------------
router = APIRouter(prefix="/messages", tags=["Messaging"])

# ---------------------------------------------------
# Dependencies
# ---------------------------------------------------
DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedUserDep = Annotated[User, Depends(get_current_user)]

# ---------------------------------------------------
# Messaging Endpoints (Authenticated Users Only)
# ---------------------------------------------------


@router.post(
    "",
    response_model=schemas.SendMessageResult,
    status_code=status.HTTP_201_CREATED,
    summary="Send Message",
    description="Reply in a thread (thread_id) or open contact on a job request (job_request_id).",
)
@limiter.limit("10/minute")
async def send_message(
    request: Request,
    payload: schemas.SendMessageRequest,
    db: DBDep,
    current_user: AuthenticatedUserDep,
) -> schemas.SendMessageResult:
    """
    Send a message.
    """
    return await services.send_message(db=db, user=current_user, payload=payload)


@router.get(
    "/threads",
    response_model=list[schemas.InboxThreadRead],
    status_code=status.HTTP_200_OK,
    summary="List My Threads",
    description="All conversations of the authenticated user with a last-message preview.",
)
@limiter.limit("20/minute")
async def list_my_threads(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedUserDep,
) -> list[schemas.InboxThreadRead]:
    return await services.list_my_threads(db=db, user=current_user)
