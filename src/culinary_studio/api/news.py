"""Studio news endpoint."""

from fastapi import APIRouter, Depends

from culinary_studio.api.dependencies import get_container
from culinary_studio.containers import AppContainer

router = APIRouter(tags=["news"])


@router.get("/news")
async def news(container: AppContainer = Depends(get_container)) -> dict[str, object]:
    items = await container.news_service.latest()
    return {"items": [item.model_dump(by_alias=True) for item in items]}
