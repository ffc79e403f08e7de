# tests/job_request/test_job_request_routes.py
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from main import app
from baucrew.core.dependencies import get_current_user
from baucrew.database.enums import UserRole
from baucrew.database.models import User
from baucrew.job_request import schemas as job_request_schemas
from baucrew.job_request import services as job_request_services
from baucrew.job_request.models import JobRequestStatus

VALID_PAYLOAD = {
    "category": "ELECTRICIAN",
    "title": "Lampe im Flur anschliessen",
    "description": "Deckenlampe im Flur anschliessen, Kabel liegt bereits.",
    "address_line1": "Sonnenallee 200",
    "city": "Berlin",
    "postal_code": "12059",
}


@pytest.mark.asyncio
@patch.object(job_request_services.JobRequestService, "create_job_request", new_callable=AsyncMock)
async def test_create_job_request_route(
    mock_create: AsyncMock,
    mock_current_customer_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    job_request_id = uuid4()
    mock_create.return_value = job_request_schemas.JobRequestCreateResult(
        job_request_id=job_request_id
    )

    response = await async_client.post("/job-requests", json=VALID_PAYLOAD)

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"ok": True, "job_request_id": str(job_request_id)}
    sent_user, sent_payload = mock_create.await_args.args
    assert sent_user is mock_current_customer_user
    assert sent_payload.postal_code == "12059"


@pytest.mark.asyncio
async def test_create_job_request_route_invalid_postal_code(
    mock_current_customer_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.post(
        "/job-requests", json={**VALID_PAYLOAD, "postal_code": "1205"}
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_job_board_forbidden_for_customer(
    mock_current_customer_user: User,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.get("/job-requests/open")

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_provider_view_json_has_no_street_keys(
    seed, use_test_db: None, async_client: AsyncClient
) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    provider = await seed.provider()
    job_request = await seed.job_request(customer, status=JobRequestStatus.IN_DISCUSSION)
    await seed.offer(job_request, provider)

    app.dependency_overrides[get_current_user] = lambda: provider
    try:
        detail = await async_client.get(f"/job-requests/{job_request.id}/provider-view")
        board = await async_client.get("/job-requests/open")
    finally:
        app.dependency_overrides.pop(get_current_user, None)

    assert detail.status_code == status.HTTP_200_OK
    body = detail.json()
    assert "address_line1" not in body["job_request"]
    assert "address_line2" not in body["job_request"]
    assert len(body["my_offers"]) == 1
    assert board.status_code == status.HTTP_200_OK
    assert board.json() == []


@pytest.mark.asyncio
async def test_customer_detail_route_returns_full_address(
    seed, use_test_db: None, async_client: AsyncClient
) -> None:
    customer = await seed.user(UserRole.CUSTOMER)
    job_request = await seed.job_request(customer)

    app.dependency_overrides[get_current_user] = lambda: customer
    try:
        response = await async_client.get(f"/job-requests/{job_request.id}")
    finally:
        app.dependency_overrides.pop(get_current_user, None)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["address_line1"] == "Invalidenstrasse 117"
    assert data["offers"] == []
