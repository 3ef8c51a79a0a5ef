import pytest

from src.app.services.password_hasher import (
    OTP_HASH_LENGTH,
    OTP_SALT_LENGTH,
    PASSWORD_HASH_LENGTH,
    hash_secret,
    hash_secret_async,
    verify_secret,
    verify_secret_async,
)


def test_password_hash_format():
    stored = hash_secret("Secret123!")
    salt, digest = stored.split(":")

    assert len(salt) == 16 * 2
    assert len(digest) == PASSWORD_HASH_LENGTH * 2
    assert "Secret123!" not in stored


def test_password_round_trip():
    stored = hash_secret("Secret123!")

    assert verify_secret("Secret123!", stored)
    assert not verify_secret("Secret123?", stored)


def test_same_secret_hashes_differently():
    assert hash_secret("Secret123!") != hash_secret("Secret123!")


def test_otp_hash_uses_short_lengths():
    stored = hash_secret("1234", OTP_HASH_LENGTH, OTP_SALT_LENGTH)
    salt, digest = stored.split(":")

    assert len(salt) == OTP_SALT_LENGTH * 2
    assert len(digest) == OTP_HASH_LENGTH * 2
    assert verify_secret("1234", stored, OTP_HASH_LENGTH)


def test_length_mismatch_does_not_verify():
    """An OTP hash checked at password length fails instead of raising"""
    stored = hash_secret("1234", OTP_HASH_LENGTH, OTP_SALT_LENGTH)

    assert verify_secret("1234", stored, PASSWORD_HASH_LENGTH) is False


@pytest.mark.parametrize("stored", ["", "nocolon", ":abcd", "abcd:", "salt:not-hex"])
def test_malformed_stored_value_does_not_verify(stored):
    assert verify_secret("anything", stored) is False


@pytest.mark.asyncio
async def test_async_variants():
    stored = await hash_secret_async("Secret123!")

    assert await verify_secret_async("Secret123!", stored)
    assert not await verify_secret_async("wrong-pass", stored)
