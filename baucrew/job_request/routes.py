"""
baucrew/job_request/routes.py

Job Request Routes
Defines job request endpoints for customers and providers:
- Create a job request (Authenticated Customer)
- List own job requests (Authenticated User)
- View own job request with offers (Authenticated Customer)
- Job board of open requests (Authenticated Provider)
- Provider view of a job request, without street address (Authenticated Provider)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.core.dependencies import get_current_user, require_roles
from baucrew.core.limiter import limiter
from baucrew.database.enums import CUSTOMER_ROLES, PROVIDER_ROLES
from baucrew.database.models import User
from baucrew.database.session import get_db
from baucrew.job_request import schemas
from baucrew.job_request.services import JobRequestService

router = APIRouter(prefix="/job-requests", tags=["Job Requests"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedUserDep = Annotated[User, Depends(get_current_user)]
AuthenticatedCustomerDep = Annotated[User, Depends(require_roles(*CUSTOMER_ROLES))]
AuthenticatedProviderDep = Annotated[User, Depends(require_roles(*PROVIDER_ROLES))]


# ---------------------------------------------------
# Customer Endpoints
# ---------------------------------------------------
@router.post(
    "",
    response_model=schemas.JobRequestCreateResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create Job Request",
    description="Customer posts a new job request. Requires a customer-capable role.",
)
@limiter.limit("5/minute")
async def create_job_request(
    request: Request,
    payload: schemas.JobRequestCreate,
    db: DBDep,
    current_user: AuthenticatedCustomerDep,
) -> schemas.JobRequestCreateResult:
    return await JobRequestService(db).create_job_request(current_user, payload)


@router.get(
    "/mine",
    response_model=list[schemas.JobRequestRead],
    status_code=status.HTTP_200_OK,
    summary="List My Job Requests",
    description="Job requests posted by the authenticated user, newest first.",
)
@limiter.limit("20/minute")
async def list_my_job_requests(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedUserDep,
) -> list[schemas.JobRequestRead]:
    return await JobRequestService(db).list_customer_job_requests(current_user)


# ---------------------------------------------------
# Provider Endpoints
# ---------------------------------------------------
@router.get(
    "/open",
    response_model=list[schemas.OpenJobRequestItem],
    status_code=status.HTTP_200_OK,
    summary="Job Board",
    description="Open job requests for providers. Street address is never included.",
)
@limiter.limit("20/minute")
async def list_open_job_requests(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedProviderDep,
) -> list[schemas.OpenJobRequestItem]:
    return await JobRequestService(db).list_open_job_requests_for_providers(current_user)


@router.get(
    "/{job_request_id}/provider-view",
    response_model=schemas.ProviderJobRequestDetail,
    status_code=status.HTTP_200_OK,
    summary="Provider Job Request View",
    description="Job request with the provider's own thread and offers, without street address.",
)
@limiter.limit("20/minute")
async def get_job_request_for_provider(
    request: Request,
    job_request_id: UUID,
    db: DBDep,
    current_user: AuthenticatedProviderDep,
) -> schemas.ProviderJobRequestDetail:
    return await JobRequestService(db).get_job_request_for_provider(current_user, job_request_id)


@router.get(
    "/{job_request_id}",
    response_model=schemas.JobRequestCustomerDetail,
    status_code=status.HTTP_200_OK,
    summary="Get My Job Request",
    description="Customer's own job request with all received offers.",
)
@limiter.limit("20/minute")
async def get_job_request_for_customer(
    request: Request,
    job_request_id: UUID,
    db: DBDep,
    current_user: AuthenticatedCustomerDep,
) -> schemas.JobRequestCustomerDetail:
    return await JobRequestService(db).get_job_request_for_customer(current_user, job_request_id)
