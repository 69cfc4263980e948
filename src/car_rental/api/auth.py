"""Sign-in endpoints and the session guard."""

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field

from car_rental.config import Settings
from car_rental.containers import AppContainer
from car_rental.domain.errors import Unauthenticated, ValidationError

router = APIRouter(prefix="/auth", tags=["auth"])


class IdTokenRequest(BaseModel):
    """Identity-provider assertion sent by the client."""

    id_token: str | None = Field(default=None, alias="idToken")


def get_container(request: Request) -> AppContainer:
    """Return the container attached by create_app."""
    container: AppContainer | None = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Application container is not initialized")
    return container


async def require_session(
    request: Request, container: AppContainer = Depends(get_container)
) -> str:
    """Validate the session cookie and return the caller's email."""
    token = request.cookies.get(container.settings.session_cookie_name)
    if not token:
        raise Unauthenticated("Unauthorized access: No token provided")
    return container.session_tokens.verify(token)


@router.post("/jwt")
async def issue_session(
    response: Response,
    payload: IdTokenRequest | None = None,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Exchange an ID token for a session cookie."""
    id_token = payload.id_token if payload else None
    if not id_token:
        raise ValidationError("ID Token required")
    email, token = await container.auth_service.sign_in(id_token)
    settings = container.settings
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        **_cookie_attributes(settings),
    )
    return {"success": True, "email": email, "message": "JWT cookie set successfully"}


@router.post("/logout")
async def logout(
    response: Response, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Clear the session cookie."""
    settings = container.settings
    response.delete_cookie(
        key=settings.session_cookie_name, **_cookie_attributes(settings)
    )
    return {"success": True, "message": "Token cleared"}


def _cookie_attributes(settings: Settings) -> dict[str, object]:
    """Cross-site cookies in production, same-site only elsewhere."""
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "strict",
    }
