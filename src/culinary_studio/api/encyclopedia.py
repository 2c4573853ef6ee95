"""Encyclopedia endpoints."""

from fastapi import APIRouter, Depends

from culinary_studio.api.dependencies import get_container, require_session
from culinary_studio.containers import AppContainer
from culinary_studio.domain.encyclopedia import CATEGORIES, group_topics, search_topics
from culinary_studio.errors import NotFoundError
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/encyclopedia", tags=["encyclopedia"])


@router.get("/categories")
async def categories() -> dict[str, object]:
    return {"categories": CATEGORIES}


@router.get("/topics")
async def topics(category: str, q: str = "") -> dict[str, object]:
    """Search a category and group the matches by parent group."""
    if category not in CATEGORIES:
        raise NotFoundError(f"Category {category} not found")
    matches = search_topics(category, q)
    return {"topics": matches, "groups": group_topics(matches)}


@router.get("/topics/{topic_id}")
async def article(
    topic_id: str, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    service = container.encyclopedia_service
    return {"topic": service.topic(topic_id), "article": service.article(topic_id)}


@router.post("/topics/{topic_id}/save")
async def toggle_saved(
    topic_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    saved = container.encyclopedia_service.toggle_saved(session.user_id, topic_id)
    return {"saved": saved}


@router.get("/library")
async def library(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"topics": container.encyclopedia_service.library(session.user_id)}
