"""Community feed endpoints."""

from fastapi import APIRouter, Depends

from culinary_studio.api.dependencies import (
    get_container,
    optional_session,
    require_session,
)
from culinary_studio.api.schemas import CommentRequest
from culinary_studio.containers import AppContainer
from culinary_studio.domain.social import ExploreFilter, FeedQuery, FeedTab
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/social", tags=["social"])


@router.get("/feed")
async def feed(
    tab: FeedTab = FeedTab.EXPLORE,
    explore_filter: ExploreFilter = ExploreFilter.NEW,
    search: str = "",
    session: StudioSession | None = Depends(optional_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a feed tab; anonymous visitors see the explore tab."""
    viewer_id = session.user_id if session else None
    query = FeedQuery(tab=tab, explore_filter=explore_filter, search=search)
    return {"posts": container.social_service.feed(viewer_id, query)}


@router.post("/posts/{post_id}/like")
async def toggle_like(
    post_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    return {"liked": container.social_service.toggle_like(session.user_id, post_id)}


@router.post("/posts/{post_id}/save")
async def toggle_save(
    post_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    return {"saved": container.social_service.toggle_save(session.user_id, post_id)}


@router.get("/follows")
async def following(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"following": container.social_service.following(session.user_id)}


@router.put("/follows/{chef_id}")
async def follow(
    chef_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.social_service.follow(session.user_id, chef_id)
    return {"status": "ok"}


@router.delete("/follows/{chef_id}")
async def unfollow(
    chef_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.social_service.unfollow(session.user_id, chef_id)
    return {"status": "ok"}


@router.get("/posts/{post_id}/comments")
async def comments(
    post_id: str, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return {"comments": container.social_service.comments(post_id)}


@router.post("/posts/{post_id}/comments")
async def add_comment(
    post_id: str,
    body: CommentRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    comment = container.social_service.add_comment(
        session.user_id, post_id, body.content
    )
    return {"comment": comment}
