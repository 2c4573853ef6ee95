"""Price tracker endpoints: stateless queries, the session view and the clipboard."""

from fastapi import APIRouter, Depends, Query

from culinary_studio.api.dependencies import get_container, require_session
from culinary_studio.api.schemas import FilterRequest, PageRequest, QuantityRequest
from culinary_studio.containers import AppContainer
from culinary_studio.domain.prices import (
    ALL_COUNTRIES,
    DEFAULT_PRICE_RANGE,
    SORTABLE_KEYS,
    FilterState,
    PriceClipboard,
    SortConfig,
    SortDirection,
)
from culinary_studio.errors import InvalidRequestError, NotFoundError
from culinary_studio.services.sessions import StudioSession

router = APIRouter(prefix="/prices", tags=["prices"])


def _filters(body: FilterRequest) -> FilterState:
    return FilterState(
        country=body.country,
        categories=tuple(body.categories),
        suppliers=tuple(body.suppliers),
        price_range=(body.min_price, body.max_price),
        search_term=body.search_term,
    )


def _clipboard_view(clipboard: PriceClipboard) -> dict[str, object]:
    return {
        "items": clipboard.items,
        "selected_ids": sorted(clipboard.selected_ids),
        "total": clipboard.total,
    }


def _check_sort_key(key: str) -> None:
    if key not in SORTABLE_KEYS:
        raise InvalidRequestError(f"Cannot sort by {key}")


@router.get("")
async def query_prices(  # noqa: PLR0913
    country: str = ALL_COUNTRIES,
    categories: list[str] = Query(default=[]),
    suppliers: list[str] = Query(default=[]),
    min_price: float = DEFAULT_PRICE_RANGE[0],
    max_price: float = DEFAULT_PRICE_RANGE[1],
    search: str = "",
    sort_key: str | None = None,
    sort_direction: SortDirection = SortDirection.ASC,
    page: int = Query(default=1, ge=1),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Filter, sort and paginate the catalog without touching session state."""
    filters = _filters(
        FilterRequest(
            country=country,
            categories=categories,
            suppliers=suppliers,
            min_price=min_price,
            max_price=max_price,
            search_term=search,
        )
    )
    sort = None
    if sort_key:
        _check_sort_key(sort_key)
        sort = SortConfig(key=sort_key, direction=sort_direction)
    return {"page": container.price_service.query(filters, sort, page)}


@router.get("/suppliers")
async def suppliers(
    country: str = ALL_COUNTRIES, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return {"suppliers": container.price_service.suppliers(country)}


@router.get("/view")
async def current_view(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    view = session.price_view
    return {
        "filters": view.filters,
        "sort": view.sort,
        "page": view.render(container.price_service.entries),
        "selected_ids": sorted(session.clipboard.selected_ids),
    }


@router.put("/view/filters")
async def set_filters(
    body: FilterRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace the filters; the view goes back to page 1."""
    session.price_view.set_filters(_filters(body))
    return await current_view(session, container)


@router.post("/view/sort/{key}")
async def toggle_sort(
    key: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Cycle a column through ascending, descending and unsorted."""
    _check_sort_key(key)
    session.price_view.toggle_sort(key)
    return await current_view(session, container)


@router.put("/view/page")
async def set_page(
    body: PageRequest,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    session.price_view.page = body.page
    return await current_view(session, container)


@router.get("/clipboard")
async def get_clipboard(
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    return _clipboard_view(session.clipboard)


@router.post("/clipboard/page")
async def toggle_page(
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Select the whole current page, or clear it when already selected."""
    page = session.price_view.render(container.price_service.entries)
    session.clipboard.toggle_page(page.items)
    return _clipboard_view(session.clipboard)


@router.post("/clipboard/{entry_id}")
async def toggle_entry(
    entry_id: str,
    session: StudioSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    entry = container.price_service.get_entry(entry_id)
    if entry is None:
        raise NotFoundError(f"Price entry {entry_id} not found")
    session.clipboard.toggle(entry)
    return _clipboard_view(session.clipboard)


@router.put("/clipboard/{entry_id}")
async def set_quantity(
    entry_id: str,
    body: QuantityRequest,
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    session.clipboard.set_quantity(entry_id, body.quantity)
    return _clipboard_view(session.clipboard)


@router.delete("/clipboard/{entry_id}")
async def remove_entry(
    entry_id: str, session: StudioSession = Depends(require_session)
) -> dict[str, object]:
    session.clipboard.remove(entry_id)
    return _clipboard_view(session.clipboard)


@router.delete("/clipboard")
async def clear_clipboard(
    session: StudioSession = Depends(require_session),
) -> dict[str, object]:
    session.clipboard.clear()
    return _clipboard_view(session.clipboard)
