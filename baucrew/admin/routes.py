"""
baucrew/admin/routes.py

Admin API Routes

Read-only oversight endpoints:
- Latest job requests
- Latest bookings (full address)

All endpoints require Admin authentication.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.admin import schemas
from baucrew.admin.services import AdminService
from baucrew.core.dependencies import require_roles
from baucrew.core.limiter import limiter
from baucrew.database.enums import UserRole
from baucrew.database.models import User
from baucrew.database.session import get_db

# ---------------------------------------------------
# Router Configuration
# ---------------------------------------------------
router = APIRouter(prefix="/admin", tags=["Admin"])

# ---------------------------------------------------
# Dependencies
# ---------------------------------------------------
DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedAdminDep = Annotated[User, Depends(require_roles(UserRole.ADMIN))]


@router.get(
    "/job-requests",
    response_model=list[schemas.AdminJobRequestItem],
    status_code=status.HTTP_200_OK,
    summary="List Job Requests",
    description="Latest job requests with customer and activity counts. Requires Admin role.",
)
@limiter.limit("10/minute")
async def list_job_requests(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
) -> list[schemas.AdminJobRequestItem]:
    return await AdminService(db).list_job_requests(current_user)


@router.get(
    "/bookings",
    response_model=list[schemas.AdminBookingItem],
    status_code=status.HTTP_200_OK,
    summary="List Bookings",
    description="Latest bookings including the full address. Requires Admin role.",
)
@limiter.limit("10/minute")
async def list_bookings(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
) -> list[schemas.AdminBookingItem]:
    return await AdminService(db).list_bookings(current_user)
