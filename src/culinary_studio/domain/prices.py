"""Price tracker records and the filter, sort and paginate pipeline."""

import math
from dataclasses import dataclass, field, fields, replace
from enum import StrEnum
from functools import cmp_to_key

ALL_COUNTRIES = "All"
DEFAULT_PRICE_RANGE = (0.0, 50000.0)
MIN_CLIPBOARD_QUANTITY = 0.01


class SortDirection(StrEnum):
    """Direction of the single sort key."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PriceEntry:
    """Price of an ingredient at a supplier."""

    id: str
    ingredient_id: str
    name: str
    category: str
    country: str
    country_code: str
    supplier: str
    unit: str
    price: float
    currency: str
    last_updated: str
    trend: str
    trend_value: str
    previous_price: float | None = None


SORTABLE_KEYS = frozenset(item.name for item in fields(PriceEntry))


@dataclass(frozen=True)
class FilterState:
    """Active filters of the price table."""

    country: str = ALL_COUNTRIES
    categories: tuple[str, ...] = ()
    suppliers: tuple[str, ...] = ()
    price_range: tuple[float, float] = DEFAULT_PRICE_RANGE
    search_term: str = ""

    def matches(self, entry: PriceEntry) -> bool:
        """Return whether an entry passes every active filter."""
        if self.country != ALL_COUNTRIES and entry.country_code != self.country:
            return False
        if self.categories and entry.category not in self.categories:
            return False
        if self.suppliers and entry.supplier not in self.suppliers:
            return False
        low, high = self.price_range
        if entry.price < low or entry.price > high:
            return False
        return not (
            self.search_term and self.search_term.lower() not in entry.name.lower()
        )


@dataclass(frozen=True)
class SortConfig:
    """Single-key sort of the price table."""

    key: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class PricePage:
    """One page of the filtered and sorted table."""

    items: list[PriceEntry]
    page: int
    page_size: int
    total_items: int
    total_pages: int


def toggle_sort(current: SortConfig | None, key: str) -> SortConfig | None:
    """Cycle a column through ascending, descending and unsorted."""
    if current is not None and current.key == key:
        if current.direction == SortDirection.ASC:
            return SortConfig(key=key, direction=SortDirection.DESC)
        return None
    return SortConfig(key=key)


def filter_entries(entries: list[PriceEntry], filters: FilterState) -> list[PriceEntry]:
    """Return the entries matching all filters, in their original order."""
    return [entry for entry in entries if filters.matches(entry)]


def sort_entries(
    entries: list[PriceEntry], sort: SortConfig | None
) -> list[PriceEntry]:
    """Sort by one key; ties and missing values keep their prior order."""
    if sort is None:
        return list(entries)
    sign = 1 if sort.direction == SortDirection.ASC else -1

    def compare(left: PriceEntry, right: PriceEntry) -> int:
        left_value = getattr(left, sort.key)
        right_value = getattr(right, sort.key)
        if left_value is None or right_value is None:
            return 0
        if left_value < right_value:
            return -sign
        if left_value > right_value:
            return sign
        return 0

    return sorted(entries, key=cmp_to_key(compare))


def paginate(entries: list[PriceEntry], page: int, page_size: int) -> PricePage:
    """Slice one page out of the entries."""
    start = (page - 1) * page_size
    return PricePage(
        items=entries[start : start + page_size],
        page=page,
        page_size=page_size,
        total_items=len(entries),
        total_pages=math.ceil(len(entries) / page_size),
    )


def run_price_query(
    entries: list[PriceEntry],
    filters: FilterState,
    sort: SortConfig | None,
    page: int,
    page_size: int,
) -> PricePage:
    """Filter, sort and paginate the catalog."""
    ordered = sort_entries(filter_entries(entries, filters), sort)
    return paginate(ordered, page, page_size)


@dataclass
class PriceTableView:
    """Session-local view state of the price table."""

    page_size: int
    filters: FilterState = field(default_factory=FilterState)
    sort: SortConfig | None = None
    page: int = 1

    def set_filters(self, filters: FilterState) -> None:
        """Replace the filters and go back to the first page."""
        self.filters = filters
        self.page = 1

    def toggle_sort(self, key: str) -> None:
        """Advance the sort state of a column."""
        self.sort = toggle_sort(self.sort, key)

    def render(self, entries: list[PriceEntry]) -> PricePage:
        """Return the current page of the catalog."""
        return run_price_query(
            entries, self.filters, self.sort, self.page, self.page_size
        )


@dataclass(frozen=True)
class ClipboardItem:
    """Price entry picked for transfer to the cost worksheet."""

    entry: PriceEntry
    quantity: float = 1


@dataclass
class PriceClipboard:
    """Rows picked from the price table."""

    items: list[ClipboardItem] = field(default_factory=list)

    @property
    def selected_ids(self) -> set[str]:
        """Return ids of the picked entries."""
        return {item.entry.id for item in self.items}

    def toggle(self, entry: PriceEntry) -> None:
        """Add an entry with quantity 1, or remove it if already picked."""
        if entry.id in self.selected_ids:
            self.remove(entry.id)
            return
        self.items.append(ClipboardItem(entry=entry))

    def toggle_page(self, page_items: list[PriceEntry]) -> None:
        """Deselect the page when fully picked, otherwise pick the rest of it."""
        selected = self.selected_ids
        if all(entry.id in selected for entry in page_items):
            page_ids = {entry.id for entry in page_items}
            self.items = [item for item in self.items if item.entry.id not in page_ids]
            return
        self.items.extend(
            ClipboardItem(entry=entry)
            for entry in page_items
            if entry.id not in selected
        )

    def set_quantity(self, entry_id: str, quantity: float) -> None:
        """Set the quantity of a picked entry, never below 0.01."""
        self.items = [
            replace(item, quantity=max(MIN_CLIPBOARD_QUANTITY, quantity))
            if item.entry.id == entry_id
            else item
            for item in self.items
        ]

    def remove(self, entry_id: str) -> None:
        """Drop a picked entry."""
        self.items = [item for item in self.items if item.entry.id != entry_id]

    def clear(self) -> None:
        """Drop every picked entry."""
        self.items = []

    @property
    def total(self) -> float:
        """Return the sum of price times quantity."""
        return sum(item.entry.price * item.quantity for item in self.items)
