# tests/users/test_user_service.py
import pytest

from baucrew.database.enums import UserRole, VerificationStatus
from baucrew.users.schemas import ProviderOnboardingRequest
from baucrew.users.services import UserService

PROVIDER_ONBOARDING = ProviderOnboardingRequest(
    display_name=" Fliesen Franke ",
    base_city="Leipzig",
    base_postal_code="04109",
    service_radius_km=40,
)


@pytest.mark.asyncio
async def test_get_me_for_plain_customer(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER, "Clara")

    async with session_factory() as session:
        me = await UserService(session).get_me(customer)

    assert me.id == customer.id
    assert me.role == UserRole.CUSTOMER
    assert me.full_name == "Clara Muster"
    assert me.has_customer_profile is False
    assert me.provider_profile is None


@pytest.mark.asyncio
async def test_get_me_includes_provider_profile(seed, session_factory) -> None:
    provider = await seed.provider("Anton")

    async with session_factory() as session:
        me = await UserService(session).get_me(provider)

    assert me.provider_profile is not None
    assert me.provider_profile.display_name == "Anton Elektro"
    assert me.provider_profile.verification_status == VerificationStatus.APPROVED


@pytest.mark.asyncio
async def test_customer_onboarding_creates_profile_once(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)

    async with session_factory() as session:
        result = await UserService(session).complete_customer_onboarding(customer)
    async with session_factory() as session:
        again = await UserService(session).complete_customer_onboarding(customer)
    async with session_factory() as session:
        me = await UserService(session).get_me(customer)

    assert result.role == UserRole.CUSTOMER
    assert again.role == UserRole.CUSTOMER
    assert me.has_customer_profile is True


@pytest.mark.asyncio
async def test_provider_becoming_customer_is_switched(seed, session_factory) -> None:
    provider = await seed.provider()

    async with session_factory() as session:
        result = await UserService(session).complete_customer_onboarding(provider)

    assert result.role == UserRole.CUSTOMER


@pytest.mark.asyncio
async def test_provider_onboarding_assigns_role_and_profile(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER, "Frank")

    async with session_factory() as session:
        result = await UserService(session).complete_provider_onboarding(
            customer, PROVIDER_ONBOARDING
        )
    async with session_factory() as session:
        me = await UserService(session).get_me(customer)

    assert result.role == UserRole.PROVIDER
    assert me.provider_profile.display_name == "Fliesen Franke"
    assert me.provider_profile.base_postal_code == "04109"
    assert me.provider_profile.service_radius_km == 40


@pytest.mark.asyncio
async def test_provider_onboarding_updates_existing_profile(seed, session_factory) -> None:
    provider = await seed.provider("Anton")

    async with session_factory() as session:
        await UserService(session).complete_provider_onboarding(provider, PROVIDER_ONBOARDING)
    async with session_factory() as session:
        me = await UserService(session).get_me(provider)

    assert me.provider_profile.display_name == "Fliesen Franke"
    assert me.provider_profile.base_city == "Leipzig"
    assert me.provider_profile.verification_status == VerificationStatus.APPROVED


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.BOTH, UserRole.ADMIN])
async def test_onboarding_keeps_broader_roles(seed, session_factory, role: UserRole) -> None:
    user = await seed.user(role, "Greta")

    async with session_factory() as session:
        as_customer = await UserService(session).complete_customer_onboarding(user)
    async with session_factory() as session:
        as_provider = await UserService(session).complete_provider_onboarding(
            user, PROVIDER_ONBOARDING
        )

    assert as_customer.role == role
    assert as_provider.role == role
