"""Request dependencies shared by the routers."""

from fastapi import Depends, Header, Request

from culinary_studio.containers import AppContainer
from culinary_studio.errors import NotAuthenticatedError
from culinary_studio.services.sessions import StudioSession


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Return the token of an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def optional_session(
    container: AppContainer = Depends(get_container),
    token: str | None = Depends(bearer_token),
) -> StudioSession | None:
    """Resolve the caller's session when a token is sent."""
    if token is None:
        return None
    return container.session_manager.resolve(token)


async def require_session(
    session: StudioSession | None = Depends(optional_session),
) -> StudioSession:
    """Reject anonymous callers."""
    if session is None:
        raise NotAuthenticatedError
    return session
