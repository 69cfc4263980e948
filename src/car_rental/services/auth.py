"""Sign-in and session token services."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from jose import JWTError, jwt

from car_rental.domain.errors import Unauthenticated, Unauthorized

logger = logging.getLogger(__name__)


class IdentityVerifier(Protocol):
    """Interface for verifying identity-provider assertions."""

    async def verify(self, id_token: str) -> str:
        """Verify an ID token and return the account's email address."""


class IdentityVerificationError(Exception):
    """Raised by identity verifiers when an assertion is rejected."""


@dataclass
class SessionTokenService:
    """Issues and verifies stateless session JWTs."""

    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(days=7)

    def issue(self, email: str, now: datetime | None = None) -> str:
        """Mint a signed token bound to the email."""
        issued_at = now or datetime.now(tz=UTC)
        payload = {
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the email embedded in a valid token."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.warning("Session token rejected: %s", exc)
            raise Unauthenticated("Unauthorized access: Invalid token") from exc
        email = payload.get("email")
        if not isinstance(email, str) or not email:
            raise Unauthenticated("Unauthorized access: Invalid token")
        return email


@dataclass
class AuthService:
    """Exchanges identity-provider assertions for session tokens."""

    identity_verifier: IdentityVerifier
    session_tokens: SessionTokenService

    async def sign_in(self, id_token: str) -> tuple[str, str]:
        """Return the verified email and a fresh session token."""
        try:
            email = await self.identity_verifier.verify(id_token)
        except IdentityVerificationError as exc:
            logger.warning("Identity verification failed: %s", exc)
            raise Unauthorized("Unauthorized: Invalid ID Token") from exc
        return email, self.session_tokens.issue(email)
