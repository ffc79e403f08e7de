"""
baucrew/users/services.py

User Service Layer
- Current user view
- Customer and provider onboarding (profile upsert plus role assignment)
- Provider summary builder shared by bookings, job requests and messaging
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from baucrew.core.exceptions import NotFoundError
from baucrew.core.permissions import Identity
from baucrew.database.enums import UserRole
from baucrew.database.models import User
from baucrew.users import schemas
from baucrew.users.models import CustomerProfile, ProviderProfile

logger = logging.getLogger(__name__)


def build_provider_summary(provider: User) -> schemas.ProviderSummary:
    """Provider identity with profile names; `provider.provider_profile` must be loaded."""
    profile = provider.provider_profile
    return schemas.ProviderSummary(
        id=provider.id,
        email=provider.email,
        full_name=provider.full_name,
        display_name=profile.display_name if profile else None,
        company_name=profile.company_name if profile else None,
        verification_status=profile.verification_status if profile else None,
    )


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_user_with_profiles_or_404(self, user_id) -> User:
        result = await self.db.execute(
            select(User)
            .options(selectinload(User.customer_profile), selectinload(User.provider_profile))
            .filter(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        user = result.unique().scalar_one_or_none()
        if not user:
            logger.warning(f"User not found: {user_id}")
            raise NotFoundError("User not found")
        return user

    # ---------------------------------------------------
    # Current User
    # ---------------------------------------------------
    async def get_me(self, user: Identity) -> schemas.MeRead:
        db_user = await self._get_user_with_profiles_or_404(user.id)
        return schemas.MeRead(
            id=db_user.id,
            email=db_user.email,
            full_name=db_user.full_name,
            role=db_user.role,
            has_customer_profile=db_user.customer_profile is not None,
            provider_profile=(
                schemas.ProviderProfileRead.model_validate(db_user.provider_profile)
                if db_user.provider_profile
                else None
            ),
            created_at=db_user.created_at,
        )

    # ---------------------------------------------------
    # Onboarding
    # ---------------------------------------------------
    async def complete_customer_onboarding(self, user: Identity) -> schemas.OnboardingResult:
        """Ensure a customer profile exists and give the account a customer-capable role."""
        db_user = await self._get_user_with_profiles_or_404(user.id)

        if db_user.customer_profile is None:
            self.db.add(CustomerProfile(user_id=db_user.id))

        # ADMIN keeps its role; everyone else becomes at least a customer
        if db_user.role not in (UserRole.CUSTOMER, UserRole.BOTH, UserRole.ADMIN):
            logger.info(f"[ONBOARDING] User {db_user.id} role {db_user.role.value} -> CUSTOMER")
            db_user.role = UserRole.CUSTOMER

        await self.db.commit()
        logger.info(f"[ONBOARDING] Customer onboarding completed for user {db_user.id}")
        return schemas.OnboardingResult(role=db_user.role)

    async def complete_provider_onboarding(
        self, user: Identity, payload: schemas.ProviderOnboardingRequest
    ) -> schemas.OnboardingResult:
        """Create or update the provider profile and give the account a provider-capable role."""
        db_user = await self._get_user_with_profiles_or_404(user.id)

        profile = db_user.provider_profile
        if profile is None:
            profile = ProviderProfile(user_id=db_user.id)
            self.db.add(profile)

        profile.display_name = payload.display_name.strip()
        profile.base_city = payload.base_city.strip()
        profile.base_postal_code = payload.base_postal_code
        profile.service_radius_km = payload.service_radius_km

        if db_user.role not in (UserRole.PROVIDER, UserRole.BOTH, UserRole.ADMIN):
            logger.info(f"[ONBOARDING] User {db_user.id} role {db_user.role.value} -> PROVIDER")
            db_user.role = UserRole.PROVIDER

        await self.db.commit()
        logger.info(f"[ONBOARDING] Provider onboarding completed for user {db_user.id}")
        return schemas.OnboardingResult(role=db_user.role)
