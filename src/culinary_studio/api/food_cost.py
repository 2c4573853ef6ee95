"""Food cost calculator endpoints."""

from dataclasses import asdict, fields

from fastapi import APIRouter, Body, Depends
from pydantic import TypeAdapter, ValidationError

from culinary_studio.api.dependencies import get_container, require_session
from culinary_studio.api.schemas import (
    CalculateRequest,
    OptimizeRequest,
    SaveWorksheetRequest,
    WorksheetUpdateRequest,
)
from culinary_studio.containers import AppContainer
from culinary_studio.domain.costing import TEMPLATE_CAPABILITIES, CostIngredient
from culinary_studio.domain.worksheet import CostWorksheet
from culinary_studio.errors import InvalidRequestError, NotFoundError
from culinary_studio.services.sessions import StudioSession

router = APIRouter(tags=["food-cost"])

_ROW_FIELDS = {item.name for item in fields(CostIngredient)} - {"id"}
_ROW_ADAPTER = TypeAdapter(CostIngredient)


def _worksheet_view(worksheet: CostWorksheet) -> dict[str, object]:
    return {
        "recipe_name": worksheet.recipe_name,
        "template": worksheet.template,
        "settings": worksheet.settings,
        "rows": worksheet.rows,
        "totals": worksheet.totals(),
    }


@router.post("/food-cost/calculate")
async def calculate(
    body: CalculateRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Cost an ad hoc list of rows."""
    totals = container.costing_service.calculate(
        body.ingredients, body.settings, body.template
    )
    return {"totals": totals}


@router.get("/food-cost/templates")
async def templates() -> dict[str, object]:
    return {
        "templates": [
            {"template": template, "capabilities": capabilities}
            for template, capabilities in TEMPLATE_CAPABILITIES.items()
        ]
    }


@router.get("/food-cost/worksheet")
async def get_worksheet(
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    return _worksheet_view(session.worksheet)


@router.put("/food-cost/worksheet")
async def update_worksheet(
    body: WorksheetUpdateRequest, session: StudioSession = Depends(require_session)
) -> dict[str, object]:
    worksheet = session.worksheet
    if body.recipe_name is not None:
        worksheet.recipe_name = body.recipe_name
    if body.template is not None:
        worksheet.template = body.template
    if body.settings is not None:
        worksheet.settings = body.settings
    return _worksheet_view(worksheet)


@router.post("/food-cost/worksheet/rows")
async def add_row(
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    row = session.worksheet.add_row()
    return {"row": row, **_worksheet_view(session.worksheet)}


@router.patch("/food-cost/worksheet/rows/{row_id}")
async def update_row(
    row_id: str,
    changes: dict[str, object] = Body(...),
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    """Change fields of one row; ``id`` cannot be changed."""
    unknown = set(changes) - _ROW_FIELDS
    if unknown:
        raise InvalidRequestError(f"Unknown row fields: {', '.join(sorted(unknown))}")
    current = next((row for row in session.worksheet.rows if row.id == row_id), None)
    if current is None:
        raise NotFoundError(f"Row {row_id} not found")
    try:
        merged = _ROW_ADAPTER.validate_python({**asdict(current), **changes})
    except ValidationError as exc:
        raise InvalidRequestError(str(exc)) from exc
    session.worksheet.update_row(
        row_id, {name: getattr(merged, name) for name in changes}
    )
    return _worksheet_view(session.worksheet)


@router.delete("/food-cost/worksheet/rows/{row_id}")
async def remove_row(
    row_id: str, session: StudioSession = Depends(require_session)
) -> dict[str, object]:
    session.worksheet.remove_row(row_id)
    return _worksheet_view(session.worksheet)


@router.delete("/food-cost/worksheet/rows")
async def clear_rows(
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    session.worksheet.clear()
    return _worksheet_view(session.worksheet)


@router.post("/food-cost/worksheet/import")
async def import_clipboard(
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    """Move the price clipboard into the worksheet."""
    imported = session.transfer_clipboard()
    return {"imported": imported, **_worksheet_view(session.worksheet)}


@router.post("/food-cost/worksheet/save")
async def save_worksheet(
    body: SaveWorksheetRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    sheet = container.costing_service.save_worksheet(
        session.user_id, session.worksheet, body.project_id
    )
    return {"sheet": sheet}


@router.post("/food-cost/optimize")
async def optimize(
    body: OptimizeRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Ask for three improvements; an empty list means none were available."""
    ingredients = (
        body.ingredients if body.ingredients is not None else session.worksheet.rows
    )
    template = body.template or session.worksheet.template
    suggestions = await container.costing_service.optimize(ingredients, template)
    return {"suggestions": suggestions}


@router.get("/food-costs")
async def list_sheets(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"sheets": container.costing_service.list_sheets(session.user_id)}


@router.get("/food-costs/{sheet_id}")
async def get_sheet(
    sheet_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return {"sheet": container.costing_service.get_sheet(session.user_id, sheet_id)}


@router.delete("/food-costs/{sheet_id}")
async def delete_sheet(
    sheet_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.costing_service.delete_sheet(session.user_id, sheet_id)
    return {"status": "ok"}
