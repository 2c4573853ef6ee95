"""Sign-up, sign-in and session endpoints."""

from fastapi import APIRouter, Depends

from culinary_studio.api.dependencies import (
    bearer_token,
    get_container,
    require_session,
)
from culinary_studio.api.schemas import SignInRequest, SignUpRequest, session_view
from culinary_studio.containers import AppContainer
from culinary_studio.errors import NotAuthenticatedError
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup")
async def sign_up(
    body: SignUpRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Register a chef; without a session the email must be verified first."""
    result = container.session_manager.sign_up(**body.model_dump())
    return {
        "user_id": result.user_id,
        "tier": result.tier,
        "verification_pending": result.verification_pending,
        "session": session_view(result.session) if result.session else None,
    }


@router.post("/signin")
async def sign_in(
    body: SignInRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    session = container.session_manager.sign_in(body.email, body.password)
    return session_view(session)


@router.post("/signout")
async def sign_out(
    token: str | None = Depends(bearer_token),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    if token is None:
        raise NotAuthenticatedError
    await container.session_manager.sign_out(token)
    return {"status": "ok"}


@router.get("/session")
async def current_session(
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    return session_view(session)
