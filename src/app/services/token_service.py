"""
Token Issuer

Signs and verifies the access and refresh JWTs handed to clients.
Access and refresh tokens are signed with different secrets, so a token of
one kind never verifies as the other. Tokens are not stored server-side;
their jti is random and not tracked.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import uuid4

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from src.app.errors import ErrorCode
from src.domain.entities import TokenType
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenSettings:
    access_secret: str
    refresh_secret: str
    issuer: str
    audience: str
    access_expires: timedelta = timedelta(minutes=10)
    refresh_expires: timedelta = timedelta(minutes=20)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenIssuer:
    def __init__(self, settings: TokenSettings):
        self.settings = settings

    def issue_access(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Sign a short-lived access token for ``user_id``"""
        return self._sign(
            TokenType.access,
            str(user_id),
            self.settings.access_secret,
            self.settings.access_expires,
            now,
        )

    def issue_refresh(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Sign a refresh token for ``user_id``"""
        return self._sign(
            TokenType.refresh,
            str(user_id),
            self.settings.refresh_secret,
            self.settings.refresh_expires,
            now,
        )

    def issue_pair(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access(user_id),
            refresh_token=self.issue_refresh(user_id),
        )

    def verify_access(self, token: str) -> Result[str]:
        """Verify an access token, returning its subject (user id)"""
        return self._verify(token, self.settings.access_secret, TokenType.access)

    def verify_refresh(self, token: str) -> Result[str]:
        """
        Verify a refresh token, returning its subject (user id)

        Errors:
            - TOKEN_EXPIRED: Signature valid but token past its expiry
            - TOKEN_INVALID: Bad signature, issuer, audience, type or subject
        """
        return self._verify(token, self.settings.refresh_secret, TokenType.refresh)

    def _sign(
        self,
        token_type: TokenType,
        subject: str,
        secret: str,
        expires: timedelta,
        now: Optional[datetime],
    ) -> str:
        now = now or datetime.now(UTC)
        payload = {
            "type": token_type.value,
            "jti": str(uuid4()),
            "iss": self.settings.issuer,
            "aud": self.settings.audience,
            "sub": subject,
            "iat": now,
            "exp": now + expires,
        }
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def _verify(self, token: str, secret: str, expected_type: TokenType) -> Result[str]:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                audience=self.settings.audience,
                issuer=self.settings.issuer,
            )
        except ExpiredSignatureError:
            return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Token has expired"))
        except JWTError as e:
            logger.debug(f"Rejected {expected_type.value} token: {e}")
            return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid token"))

        if payload.get("type") != expected_type.value:
            return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid token"))

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            return Return.err(Error(ErrorCode.TOKEN_INVALID, "Invalid token"))

        return Return.ok(subject)
