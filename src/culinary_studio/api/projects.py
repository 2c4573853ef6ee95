"""Project folder endpoints."""

from fastapi import APIRouter, Depends

from culinary_studio.api.dependencies import get_container, require_session
from culinary_studio.api.schemas import ProjectCreateRequest
from culinary_studio.containers import AppContainer
from culinary_studio.domain.projects import MemberKind
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/library")
async def library(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return every saved item of the user."""
    return {"library": container.project_service.library(session.user_id)}


@router.post("")
async def create_project(
    body: ProjectCreateRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    project = container.project_service.create(
        session.user_id, body.title, body.description, body.color
    )
    return {"project": project}


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.project_service.delete(session.user_id, project_id)
    return {"status": "ok"}


@router.get("/{project_id}/members")
async def members(
    project_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"members": container.project_service.members(session.user_id, project_id)}


@router.put("/{project_id}/items/{kind}/{item_id}")
async def link_item(
    project_id: str,
    kind: MemberKind,
    item_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.project_service.link(session.user_id, project_id, kind, item_id)
    return {"status": "ok"}


@router.delete("/{project_id}/items/{kind}/{item_id}")
async def unlink_item(
    project_id: str,
    kind: MemberKind,
    item_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Clear the item's project; ``project_id`` only addresses the route."""
    container.project_service.unlink(session.user_id, kind, item_id)
    return {"status": "ok"}
