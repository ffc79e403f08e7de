"""
baucrew/users/routes.py

User Routes
- Get the authenticated user's account and profiles
- Complete customer onboarding
- Complete provider onboarding

All endpoints require authentication.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from baucrew.core.dependencies import get_current_user
from baucrew.core.limiter import limiter
from baucrew.database.models import User
from baucrew.database.session import get_db
from baucrew.users import schemas
from baucrew.users.services import UserService

router = APIRouter(prefix="/users", tags=["Users"])
onboarding_router = APIRouter(prefix="/onboarding", tags=["Onboarding"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedUserDep = Annotated[User, Depends(get_current_user)]


# ---------------------------------------------------
# Current User
# ---------------------------------------------------
@router.get(
    "/me",
    response_model=schemas.MeRead,
    status_code=status.HTTP_200_OK,
    summary="Get My Account",
    description="Returns the authenticated user's account, role and profiles.",
)
@limiter.limit("20/minute")
async def get_me(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedUserDep,
) -> schemas.MeRead:
    return await UserService(db).get_me(current_user)


# ---------------------------------------------------
# Onboarding
# ---------------------------------------------------
@onboarding_router.post(
    "/customer",
    response_model=schemas.OnboardingResult,
    status_code=status.HTTP_200_OK,
    summary="Complete Customer Onboarding",
    description="Creates the customer profile and grants a customer-capable role.",
)
@limiter.limit("5/minute")
async def complete_customer_onboarding(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedUserDep,
) -> schemas.OnboardingResult:
    return await UserService(db).complete_customer_onboarding(current_user)


@onboarding_router.post(
    "/provider",
    response_model=schemas.OnboardingResult,
    status_code=status.HTTP_200_OK,
    summary="Complete Provider Onboarding",
    description="Creates or updates the provider profile and grants a provider-capable role.",
)
@limiter.limit("5/minute")
async def complete_provider_onboarding(
    request: Request,
    payload: schemas.ProviderOnboardingRequest,
    db: DBDep,
    current_user: AuthenticatedUserDep,
) -> schemas.OnboardingResult:
    return await UserService(db).complete_provider_onboarding(current_user, payload)
