"""Firebase Authentication REST client."""

from dataclasses import dataclass

import httpx

from car_rental.services.auth import IdentityVerificationError, IdentityVerifier


@dataclass
class HttpxFirebaseIdentityClient(IdentityVerifier):
    """Verifies Firebase ID tokens through the Identity Toolkit API."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFirebaseIdentityClient":
        """Create an identity client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def verify(self, id_token: str) -> str:
        """Look up the account behind an ID token and return its email.

        Firebase rejects expired, revoked or forged tokens with a 400.
        """
        url = f"{self.base_url}/accounts:lookup"
        try:
            response = await self.http_client.post(
                url,
                params={"key": self.api_key},
                json={"idToken": id_token},
                timeout=10,
            )
            response.raise_for_status()
            users = response.json().get("users") or []
            email = users[0].get("email") if users else None
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            raise IdentityVerificationError(str(exc)) from exc
        if not email:
            raise IdentityVerificationError("Account has no email address")
        return str(email)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
