"""
Credential hashing for passwords and one-time passcodes.

Stored format is a single "salt:hash" string: a random hex salt and the hex
scrypt digest of the secret under that salt. The digest length is chosen by
the caller and is NOT recorded in the stored value, so a secret must be
verified with the same ``output_length`` it was hashed with. Passwords use
PASSWORD_HASH_LENGTH, OTPs use the shorter OTP_HASH_LENGTH. A length
mismatch makes verification return False.

scrypt is CPU and memory bound; async callers should use the ``*_async``
variants, which run the derivation in a worker thread.
"""

import asyncio
import hashlib
import hmac
import secrets

PASSWORD_HASH_LENGTH = 64
PASSWORD_SALT_LENGTH = 16
OTP_HASH_LENGTH = 16
OTP_SALT_LENGTH = 4

# scrypt cost parameters (~16 MiB of memory per derivation)
_SCRYPT_N = 16384
_SCRYPT_R = 8
_SCRYPT_P = 1


def _derive(secret: str, salt: str, output_length: int) -> bytes:
    return hashlib.scrypt(
        secret.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        dklen=output_length,
    )


def hash_secret(
    secret: str,
    output_length: int = PASSWORD_HASH_LENGTH,
    salt_length: int = PASSWORD_SALT_LENGTH,
) -> str:
    """
    Hash a secret with a fresh random salt.

    Args:
        secret: Plaintext password or OTP
        output_length: Digest length in bytes
        salt_length: Salt length in bytes (hex-encoded in the output)

    Returns:
        "salt:hash" string
    """
    salt = secrets.token_hex(salt_length)
    digest = _derive(secret, salt, output_length)
    return f"{salt}:{digest.hex()}"


def verify_secret(
    secret: str, stored: str, output_length: int = PASSWORD_HASH_LENGTH
) -> bool:
    """
    Check a plaintext secret against a stored "salt:hash" string.

    Comparison is constant-time. Malformed stored values and digests of a
    different length than ``output_length`` verify as False.
    """
    salt, sep, stored_hex = stored.partition(":")
    if not sep or not salt or not stored_hex:
        return False
    try:
        stored_digest = bytes.fromhex(stored_hex)
    except ValueError:
        return False
    candidate = _derive(secret, salt, output_length)
    return hmac.compare_digest(candidate, stored_digest)


async def hash_secret_async(
    secret: str,
    output_length: int = PASSWORD_HASH_LENGTH,
    salt_length: int = PASSWORD_SALT_LENGTH,
) -> str:
    return await asyncio.to_thread(hash_secret, secret, output_length, salt_length)


async def verify_secret_async(
    secret: str, stored: str, output_length: int = PASSWORD_HASH_LENGTH
) -> bool:
    return await asyncio.to_thread(verify_secret, secret, stored, output_length)
