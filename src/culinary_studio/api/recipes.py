"""Recipe editor endpoints."""

from fastapi import APIRouter, Depends, UploadFile

from culinary_studio.api.dependencies import get_container, require_session
from culinary_studio.api.schemas import ShareRequest
from culinary_studio.containers import AppContainer
from culinary_studio.domain.recipes import RecipeDraft
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("")
async def list_recipes(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"recipes": container.recipe_service.list_recipes(session.user_id)}


@router.get("/new")
async def new_recipe(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the defaults of an empty recipe."""
    return {"draft": container.recipe_service.new_draft()}


@router.post("")
async def create_recipe(
    draft: RecipeDraft,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"recipe": container.recipe_service.save(session.user_id, draft)}


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    recipe = container.recipe_service.get_recipe(session.user_id, recipe_id)
    return {
        "recipe": recipe,
        "shared": container.recipe_service.is_shared(session.user_id, recipe_id),
    }


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    draft: RecipeDraft,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"recipe": container.recipe_service.save(session.user_id, draft, recipe_id)}


@router.delete("/{recipe_id}")
async def delete_recipe(
    recipe_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.recipe_service.delete(session.user_id, recipe_id)
    return {"status": "ok"}


@router.post("/{recipe_id}/images")
async def upload_image(
    recipe_id: str,
    file: UploadFile,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    content = await file.read()
    url = container.recipe_service.upload_image(
        session.user_id, recipe_id, file.filename or "image.jpg", content
    )
    return {"url": url}


@router.get("/{recipe_id}/share")
async def share_status(
    recipe_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    return {"shared": container.recipe_service.is_shared(session.user_id, recipe_id)}


@router.post("/{recipe_id}/share")
async def set_shared(
    recipe_id: str,
    body: ShareRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Publish the recipe to the community feed, or take it down."""
    recipe = container.recipe_service.set_shared(
        session.user_id, recipe_id, body.shared, body.draft
    )
    return {"recipe": recipe, "shared": body.shared}
