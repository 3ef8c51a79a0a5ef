"""
Refresh Token Use Case

Exchanges a valid refresh token for a new access/refresh pair.
"""

from src.app.errors import ErrorCode
from src.app.services.token_service import TokenIssuer
from src.libs.result import Error, Result, Return
from .dtos import AuthTokens


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT tokens.

    Business Rules:
    - Refresh token must verify against the refresh secret
    - Any verification failure (expired, forged, wrong kind) is UNAUTHORIZED
    - No server-side state: the old refresh token is not revoked
    """

    def __init__(self, token_issuer: TokenIssuer):
        self.token_issuer = token_issuer

    async def execute(self, refresh_token: str) -> Result[AuthTokens]:
        verified = self.token_issuer.verify_refresh(refresh_token)
        if verified.is_err():
            return Return.err(Error(ErrorCode.UNAUTHORIZED, "Invalid refresh token"))

        pair = self.token_issuer.issue_pair(verified.value)
        return Return.ok(
            AuthTokens(access_token=pair.access_token, refresh_token=pair.refresh_token)
        )
