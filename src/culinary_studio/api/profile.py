"""Profile and preference endpoints."""

from fastapi import APIRouter, Depends, UploadFile

from culinary_studio.api.dependencies import get_container, require_session
from culinary_studio.api.schemas import (
    PreferencesRequest,
    ProfileUpdateRequest,
    session_view,
)
from culinary_studio.containers import AppContainer
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
async def get_profile(
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    return {"profile": session.profile}


@router.patch("")
async def update_profile(
    body: ProfileUpdateRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    session.profile = container.profile_service.update_profile(
        session.profile, body.model_dump(exclude_none=True)
    )
    return {"profile": session.profile}


@router.post("/avatar")
async def upload_avatar(
    file: UploadFile,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    content = await file.read()
    session.profile = container.profile_service.upload_avatar(
        session.profile, file.filename or "avatar.jpg", content
    )
    return {"profile": session.profile}


@router.post("/deletion-request")
async def request_deletion(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Record that the user asked for the account to be deleted."""
    session.profile = container.profile_service.request_account_deletion(
        session.profile
    )
    return {"profile": session.profile}


@router.put("/preferences")
async def set_preferences(
    body: PreferencesRequest, session: StudioSession = Depends(require_session)
) -> dict[str, object]:
    if body.toggle_theme:
        session.toggle_theme()
    elif body.theme is not None:
        session.theme = body.theme
    if body.language is not None:
        session.set_language(body.language)
    return session_view(session)
