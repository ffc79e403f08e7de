# tests/messaging/test_messaging_service.py
from uuid import uuid4

import pytest
from pydantic import ValidationError
from sqlalchemy import func, select

from baucrew.core.exceptions import AuthorizationError, NotFoundError
from baucrew.database.enums import UserRole
from baucrew.messaging import services as messaging_services
from baucrew.messaging.models import Message, MessageThread
from baucrew.messaging.schemas import SendMessageRequest


async def count(session_factory, model) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model))


# --- Send message ---


@pytest.mark.asyncio
async def test_provider_opens_contact_on_job_request(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    job_request = await seed.job_request(customer)

    async with session_factory() as session:
        result = await messaging_services.send_message(
            session,
            provider,
            SendMessageRequest(job_request_id=job_request.id, body="  Ist der Keller zugaenglich?  "),
        )

    async with session_factory() as session:
        thread = await session.get(MessageThread, result.thread_id)
        message = (
            await session.execute(select(Message).filter(Message.thread_id == thread.id))
        ).scalar_one()

    assert thread.customer_id == customer.id
    assert thread.provider_id == provider.id
    assert message.body == "Ist der Keller zugaenglich?"
    assert message.sender_id == provider.id


@pytest.mark.asyncio
async def test_repeat_contact_reuses_thread(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    job_request = await seed.job_request(customer)

    for body in ("Erste Frage", "Zweite Frage"):
        async with session_factory() as session:
            await messaging_services.send_message(
                session, provider, SendMessageRequest(job_request_id=job_request.id, body=body)
            )

    assert await count(session_factory, MessageThread) == 1
    assert await count(session_factory, Message) == 2


@pytest.mark.asyncio
async def test_customer_replies_in_thread(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    job_request = await seed.job_request(customer)
    thread = await seed.thread(job_request, provider)

    async with session_factory() as session:
        result = await messaging_services.send_message(
            session, customer, SendMessageRequest(thread_id=thread.id, body="Ja, ueber den Hof.")
        )

    assert result.thread_id == thread.id
    assert await count(session_factory, Message) == 1


@pytest.mark.asyncio
async def test_outsider_cannot_post_in_thread(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider("Anton")
    outsider = await seed.provider("Berta")
    job_request = await seed.job_request(customer)
    thread = await seed.thread(job_request, provider)

    async with session_factory() as session:
        with pytest.raises(AuthorizationError) as exc:
            await messaging_services.send_message(
                session, outsider, SendMessageRequest(thread_id=thread.id, body="Hallo")
            )

    assert exc.value.message == "You are not a participant in this thread"
    assert await count(session_factory, Message) == 0


@pytest.mark.asyncio
async def test_customer_cannot_open_contact(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    job_request = await seed.job_request(customer)

    async with session_factory() as session:
        with pytest.raises(AuthorizationError) as exc:
            await messaging_services.send_message(
                session, customer, SendMessageRequest(job_request_id=job_request.id, body="Hallo")
            )

    assert exc.value.message == "Only providers can initiate contact on job requests"


@pytest.mark.asyncio
async def test_send_to_missing_thread_or_job_request(seed, session_factory) -> None:
    provider = await seed.provider()

    async with session_factory() as session:
        with pytest.raises(NotFoundError) as exc:
            await messaging_services.send_message(
                session, provider, SendMessageRequest(thread_id=uuid4(), body="Hallo")
            )
    assert exc.value.message == "Thread not found"

    async with session_factory() as session:
        with pytest.raises(NotFoundError) as exc:
            await messaging_services.send_message(
                session, provider, SendMessageRequest(job_request_id=uuid4(), body="Hallo")
            )
    assert exc.value.message == "Job request not found"


def test_send_message_request_validation() -> None:
    with pytest.raises(ValidationError):
        SendMessageRequest(body="Hallo")
    with pytest.raises(ValidationError):
        SendMessageRequest(thread_id=uuid4(), body="   ")


# --- Inbox ---


@pytest.mark.asyncio
async def test_inbox_lists_threads_for_both_sides(seed, session_factory) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider("Anton", display_name="Anton Maler")
    other_provider = await seed.provider("Berta")
    job_request = await seed.job_request(customer, title="Wohnzimmer streichen lassen")
    thread = await seed.thread(job_request, provider)
    quiet_thread = await seed.thread(job_request, other_provider)
    await seed.message(thread.id, provider, "Welche Farbe?")
    await seed.message(thread.id, customer, "Weiss, bitte.")

    async with session_factory() as session:
        customer_inbox = await messaging_services.list_my_threads(session, customer)
    async with session_factory() as session:
        provider_inbox = await messaging_services.list_my_threads(session, provider)

    assert [t.id for t in customer_inbox] == [quiet_thread.id, thread.id]
    assert customer_inbox[0].last_message is None
    assert customer_inbox[1].last_message.body == "Weiss, bitte."
    assert customer_inbox[1].last_message.sender_id == customer.id

    assert [t.id for t in provider_inbox] == [thread.id]
    assert provider_inbox[0].provider.display_name == "Anton Maler"
    assert provider_inbox[0].job_request.title == "Wohnzimmer streichen lassen"
