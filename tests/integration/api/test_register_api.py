import pytest
from httpx import AsyncClient

from tests.utils.auth_flow import PNG_BYTES, register, register_and_verify


@pytest.mark.asyncio
async def test_register_new_user(client: AsyncClient, test_data, upload_dir):
    """Registering stores the image and returns an unverified user with tokens"""
    user = test_data.get_copy("register_user")

    response = await register(client, user)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["status_code"] == 201
    assert body["message"] == "User registered successfully! Please verify your email."
    assert body["error"] is None

    data = body["data"]
    assert data["user"]["email"] == user["email"]
    assert data["user"]["full_name"] == user["full_name"]
    assert data["user"]["email_verified_at"] is None
    assert "password_hash" not in data["user"]
    assert data["tokens"]["access_token"]
    assert data["tokens"]["refresh_token"]

    stored = list(upload_dir.iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == PNG_BYTES
    assert data["user"]["profile_image"] == f"http://test/uploads/profile/{stored[0].name}"


@pytest.mark.asyncio
async def test_register_again_before_verification(client: AsyncClient, test_data, upload_dir):
    """The first registration wins and the second upload is discarded"""
    user = test_data.get_copy("register_user")
    first = await register(client, user)

    retry = dict(user, full_name="Someone Else", password="Changed123!")
    second = await register(client, retry)

    assert second.status_code == 201
    assert second.json()["data"]["user"]["id"] == first.json()["data"]["user"]["id"]
    assert second.json()["data"]["user"]["full_name"] == user["full_name"]
    assert len(list(upload_dir.iterdir())) == 1


@pytest.mark.asyncio
async def test_register_verified_email_conflicts(client: AsyncClient, test_data, upload_dir):
    user = test_data.get_copy("register_user")
    await register_and_verify(client, user)

    response = await register(client, user)

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["error"]["code"] == "CONFLICT"
    assert body["error"]["message"] == "User already exists"
    assert len(list(upload_dir.iterdir())) == 1


@pytest.mark.asyncio
async def test_register_requires_profile_image(client: AsyncClient, test_data):
    response = await register(client, test_data.get_copy("register_user"), image=None)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert response.json()["message"] == "profile_image is required"


@pytest.mark.asyncio
async def test_register_rejects_non_image(client: AsyncClient, test_data, upload_dir):
    response = await register(
        client,
        test_data.get_copy("register_user"),
        image=b"GIF89a",
        filename="avatar.gif",
        content_type="image/gif",
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Only .png, .jpg and .jpeg format allowed!"
    assert not upload_dir.exists() or not list(upload_dir.iterdir())


@pytest.mark.asyncio
async def test_register_rejects_oversized_image(client: AsyncClient, test_data, app_config):
    oversized = b"\x00" * (app_config.MAX_PROFILE_IMAGE_BYTES + 1)

    response = await register(client, test_data.get_copy("register_user"), image=oversized)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_register_invalid_fields(client: AsyncClient, test_data):
    user = test_data.get_copy("register_user")
    user["email"] = "not-an-email"
    user["password"] = "short"

    response = await register(client, user)

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "email" in body["message"]
    assert "password" in body["message"]
