# tests/offer/test_offer_routes.py
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from baucrew.core.exceptions import ConflictError
from baucrew.database.models import User
from baucrew.offer import schemas as offer_schemas
from baucrew.offer import services as offer_services
from baucrew.offer.models import OfferStatus


@pytest.mark.asyncio
@patch.object(offer_services.OfferService, "create_offer", new_callable=AsyncMock)
async def test_create_offer_route(
    mock_create: AsyncMock,
    mock_current_provider_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    offer_id = uuid4()
    mock_create.return_value = offer_schemas.OfferCreateResult(offer_id=offer_id)
    payload = {
        "job_request_id": str(uuid4()),
        "amount_cents": 45000,
        "message": "Material ist im Preis enthalten.",
    }

    response = await async_client.post("/offers", json=payload)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"ok": True, "offer_id": str(offer_id)}
    sent_user, sent_payload = mock_create.await_args.args
    assert sent_user is mock_current_provider_user
    assert sent_payload.amount_cents == 45000


@pytest.mark.asyncio
async def test_create_offer_route_rejects_zero_amount(
    mock_current_provider_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    payload = {"job_request_id": str(uuid4()), "amount_cents": 0, "message": "Hallo"}

    response = await async_client.post("/offers", json=payload)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_create_offer_route_customer_forbidden(
    mock_current_customer_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    payload = {"job_request_id": str(uuid4()), "amount_cents": 100, "message": "Hallo"}

    response = await async_client.post("/offers", json=payload)

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
@patch.object(offer_services.OfferService, "withdraw_offer", new_callable=AsyncMock)
async def test_withdraw_offer_route(
    mock_withdraw: AsyncMock,
    mock_current_provider_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    offer_id = uuid4()
    mock_withdraw.return_value = offer_schemas.OfferWithdrawResult(
        offer_id=offer_id, status=OfferStatus.WITHDRAWN
    )

    response = await async_client.post(f"/offers/{offer_id}/withdraw")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "WITHDRAWN"


@pytest.mark.asyncio
@patch.object(offer_services.OfferService, "withdraw_offer", new_callable=AsyncMock)
async def test_withdraw_offer_route_conflict(
    mock_withdraw: AsyncMock,
    mock_current_provider_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_withdraw.side_effect = ConflictError("Only sent offers can be withdrawn")

    response = await async_client.post(f"/offers/{uuid4()}/withdraw")

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == {"error": "Only sent offers can be withdrawn"}
