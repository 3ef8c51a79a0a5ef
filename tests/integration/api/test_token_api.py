import pytest
from httpx import AsyncClient

from tests.utils.auth_flow import register


@pytest.mark.asyncio
async def test_refresh_token(client: AsyncClient, test_data):
    registered = await register(client, test_data.get_copy("register_user"))
    tokens = registered.json()["data"]["tokens"]

    response = await client.post(
        "/api/auth/refresh-token", json={"refresh_token": tokens["refresh_token"]}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["access_token"]
    assert data["refresh_token"]
    assert data["refresh_token"] != tokens["refresh_token"]


@pytest.mark.asyncio
async def test_refresh_with_access_token(client: AsyncClient, test_data):
    registered = await register(client, test_data.get_copy("register_user"))
    access_token = registered.json()["data"]["tokens"]["access_token"]

    response = await client.post("/api/auth/refresh-token", json={"refresh_token": access_token})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid refresh token"


@pytest.mark.asyncio
async def test_refresh_with_garbage(client: AsyncClient):
    response = await client.post("/api/auth/refresh-token", json={"refresh_token": "abc.def.ghi"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_bearer_gate_rejects_refresh_token(client: AsyncClient, test_data):
    registered = await register(client, test_data.get_copy("register_user"))
    refresh_token = registered.json()["data"]["tokens"]["refresh_token"]

    response = await client.post(
        "/api/auth/reset-password",
        json={"password": test_data.get("new_password")},
        headers={"Authorization": f"Bearer {refresh_token}"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_INVALID"
