"""
tests/conftest.py

Test fixtures for API route tests and service tests.
Includes async clients, fake users, dependency overrides, and an in-memory
SQLite database with a small seeding helper for service-level tests.
"""
import os
import sys
from pathlib import Path

# Settings and the engine are created at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("PAYMENTS_MODE", "disabled")

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# --- Imports ---
from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from main import app
from baucrew.booking.models import Booking, BookingStatus, BookingType, PriceType
from baucrew.core.dependencies import get_current_user
from baucrew.database.enums import UserRole, VerificationStatus
from baucrew.database.init_db import create_tables, drop_tables
from baucrew.database.models import User
from baucrew.database.session import get_db
from baucrew.job_request.models import JobRequest, JobRequestStatus, ListingCategory
from baucrew.messaging.models import Message, MessageThread
from baucrew.offer.models import OfferStatus, RequestOffer
from baucrew.payment.models import PaymentStatus, PaymentTransaction
from baucrew.users.models import ProviderProfile


# --- Core Test Fixtures ---


@pytest.fixture(scope="session")
def transport() -> ASGITransport:
    """Fixture for ASGI transport."""
    return ASGITransport(app=app)


@pytest_asyncio.fixture(scope="function")
async def async_client(transport: ASGITransport) -> AsyncGenerator[AsyncClient, None]:
    """Fixture for HTTP async client."""
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# --- Fake User Fixtures ---


def _fake_user(role: UserRole, name: str) -> User:
    return User(
        id=uuid4(),
        auth_user_id=f"auth|{uuid4().hex}",
        email=f"{name.lower()}.test@example.com",
        full_name=f"{name} Test",
        role=role,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )


@pytest.fixture
def fake_admin_user() -> User:
    """Fixture for a fake admin user."""
    return _fake_user(UserRole.ADMIN, "Admin")


@pytest.fixture
def fake_customer_user() -> User:
    """Fixture for a fake customer user."""
    return _fake_user(UserRole.CUSTOMER, "Customer")


@pytest.fixture
def fake_provider_user() -> User:
    """Fixture for a fake provider user."""
    return _fake_user(UserRole.PROVIDER, "Provider")


# --- Dependency Override Fixtures ---


@pytest_asyncio.fixture
async def override_get_db() -> AsyncGenerator[None, None]:
    """Override for the database dependency."""

    async def _override() -> AsyncGenerator[AsyncMock, None]:
        yield AsyncMock()

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest_asyncio.fixture
async def mock_current_admin_user(fake_admin_user: User) -> AsyncGenerator[User, None]:
    """Mock the current user as an admin."""
    app.dependency_overrides[get_current_user] = lambda: fake_admin_user
    yield fake_admin_user
    app.dependency_overrides.pop(get_current_user, None)


@pytest_asyncio.fixture
async def mock_current_customer_user(fake_customer_user: User) -> AsyncGenerator[User, None]:
    """Mock the current user as a customer."""
    app.dependency_overrides[get_current_user] = lambda: fake_customer_user
    yield fake_customer_user
    app.dependency_overrides.pop(get_current_user, None)


@pytest_asyncio.fixture
async def mock_current_provider_user(fake_provider_user: User) -> AsyncGenerator[User, None]:
    """Mock the current user as a provider."""
    app.dependency_overrides[get_current_user] = lambda: fake_provider_user
    yield fake_provider_user
    app.dependency_overrides.pop(get_current_user, None)


# --- Database Fixtures (in-memory SQLite) ---


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, shared by every session through a static pool."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def use_test_db(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[None, None]:
    """Route requests to the in-memory database instead of a mocked session."""

    async def _override() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.pop(get_db, None)


class Seeder:
    """Inserts marketplace records directly, each call in its own committed session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _save(self, *objects):
        async with self.session_factory() as session:
            session.add_all(objects)
            await session.commit()
        return objects[0] if len(objects) == 1 else objects

    async def user(self, role: UserRole = UserRole.CUSTOMER, name: str = "Anna") -> User:
        user = User(
            auth_user_id=f"auth|{uuid4().hex}",
            email=f"{name.lower()}.{uuid4().hex[:8]}@example.de",
            full_name=f"{name} Muster",
            role=role,
        )
        return await self._save(user)

    async def provider(self, name: str = "Bernd", display_name: str | None = None) -> User:
        user = User(
            auth_user_id=f"auth|{uuid4().hex}",
            email=f"{name.lower()}.{uuid4().hex[:8]}@example.de",
            full_name=f"{name} Handwerk",
            role=UserRole.PROVIDER,
        )
        profile = ProviderProfile(
            user=user,
            display_name=display_name or f"{name} Elektro",
            company_name=f"{name} GmbH",
            base_city="Berlin",
            base_postal_code="10115",
            service_radius_km=30,
            verification_status=VerificationStatus.APPROVED,
        )
        await self._save(user, profile)
        return user

    async def job_request(
        self,
        customer: User,
        status: JobRequestStatus = JobRequestStatus.OPEN,
        address_line2: str | None = "Hinterhaus, 3. OG",
        title: str = "Steckdosen im Wohnzimmer erneuern",
    ) -> JobRequest:
        job_request = JobRequest(
            customer_id=customer.id,
            category=ListingCategory.ELECTRICIAN,
            title=title,
            description="Drei alte Steckdosen austauschen und eine neue setzen.",
            photo_urls=["https://cdn.example.de/photos/1.jpg"],
            address_line1="Invalidenstrasse 117",
            address_line2=address_line2,
            city="Berlin",
            postal_code="10115",
            country="DE",
            status=status,
        )
        return await self._save(job_request)

    async def thread(self, job_request: JobRequest, provider: User) -> MessageThread:
        thread = MessageThread(
            job_request_id=job_request.id,
            customer_id=job_request.customer_id,
            provider_id=provider.id,
        )
        return await self._save(thread)

    async def offer(
        self,
        job_request: JobRequest,
        provider: User,
        amount_cents: int = 50000,
        status: OfferStatus = OfferStatus.SENT,
    ) -> RequestOffer:
        thread = await self.thread(job_request, provider)
        offer = RequestOffer(
            job_request_id=job_request.id,
            provider_id=provider.id,
            thread_id=thread.id,
            currency="EUR",
            amount_cents=amount_cents,
            message="Kann Dienstag starten, Material inklusive.",
            status=status,
        )
        return await self._save(offer)

    async def message(self, thread_id, sender: User, body: str) -> Message:
        return await self._save(Message(thread_id=thread_id, sender_id=sender.id, body=body))

    async def booking(
        self,
        customer: User,
        provider: User,
        status: BookingStatus = BookingStatus.NEEDS_PAYMENT,
        address_line2: str | None = "Hinterhaus, 3. OG",
        with_thread: bool = False,
    ) -> Booking:
        job_request = await self.job_request(
            customer, status=JobRequestStatus.ASSIGNED, address_line2=address_line2
        )
        booking = Booking(
            type=BookingType.BOOKING,
            status=status,
            job_request_id=job_request.id,
            customer_id=customer.id,
            provider_id=provider.id,
            job_title=job_request.title,
            job_description=job_request.description,
            job_photo_urls=list(job_request.photo_urls),
            address_line1=job_request.address_line1,
            address_line2=address_line2,
            city=job_request.city,
            postal_code=job_request.postal_code,
            country=job_request.country,
            currency="EUR",
            price_type=PriceType.QUOTE,
            quoted_price_cents=50000,
            platform_fee_cents=0,
            provider_payout_cents=0,
        )
        await self._save(booking)
        payment = PaymentTransaction(
            booking_id=booking.id,
            amount_cents=50000,
            platform_fee_cents=0,
            provider_amount_cents=50000,
            currency="EUR",
            status=PaymentStatus.REQUIRES_PAYMENT,
        )
        await self._save(payment)
        if with_thread:
            thread = MessageThread(
                job_request_id=job_request.id,
                customer_id=customer.id,
                provider_id=provider.id,
                booking_id=booking.id,
            )
            await self._save(thread)
        return booking


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]) -> Seeder:
    return Seeder(session_factory)

