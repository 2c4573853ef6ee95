"""Market price catalog and table queries."""

import csv
import logging
import random
import re
from dataclasses import dataclass
from pathlib import Path

from culinary_studio.domain.catalog import (
    COUNTRIES,
    SUPPLIERS_BY_COUNTRY,
    categorize,
    country_by_code,
)
from culinary_studio.domain.prices import (
    ALL_COUNTRIES,
    FilterState,
    PriceEntry,
    PricePage,
    SortConfig,
    run_price_query,
)

logger = logging.getLogger(__name__)

BASE_PRICES_PATH = Path(__file__).resolve().parent.parent / "data" / "base_prices.csv"
LAST_UPDATED_LABEL = "1h ago"


@dataclass(frozen=True)
class BasePrice:
    """Reference price of an ingredient this month and last month."""

    name: str
    unit: str
    current: float
    previous: float


def load_base_prices(path: Path = BASE_PRICES_PATH) -> list[BasePrice]:
    """Read the bundled reference price table."""
    with path.open(newline="", encoding="utf-8") as handle:
        return [
            BasePrice(
                name=row["name"],
                unit=row["unit"],
                current=float(row["price_jan"]),
                previous=float(row["price_dec"]),
            )
            for row in csv.DictReader(handle)
            if row.get("name")
        ]


def build_catalog(base_prices: list[BasePrice], seed: int) -> list[PriceEntry]:
    """Expand reference prices to every country and supplier.

    Each entry gets the country multiplier and a variance drawn from
    [0.95, 1.05) by a generator seeded with ``seed``, so the catalog is
    reproducible for a given seed.
    """
    rng = random.Random(seed)
    entries: list[PriceEntry] = []
    for country in COUNTRIES:
        for supplier in SUPPLIERS_BY_COUNTRY[country.code]:
            for base in base_prices:
                variance = 0.95 + rng.random() * 0.1
                current = base.current * country.price_multiplier * variance
                previous = base.previous * country.price_multiplier * variance
                diff = current - previous
                trend = "up" if diff > 0 else "down" if diff < 0 else "stable"
                change = abs(diff) / previous * 100 if previous else 0.0
                entries.append(
                    PriceEntry(
                        id=f"pe-{len(entries) + 1}",
                        ingredient_id=re.sub(r"\s+", "-", base.name.lower()),
                        name=base.name,
                        category=categorize(base.name),
                        country=country.name,
                        country_code=country.code,
                        supplier=supplier,
                        unit=base.unit,
                        price=round(current, 2),
                        previous_price=round(previous, 2),
                        currency=country.symbol,
                        last_updated=LAST_UPDATED_LABEL,
                        trend=trend,
                        trend_value=f"{change:.1f}%",
                    )
                )
    logger.info("Built price catalog with %s entries", len(entries))
    return entries


@dataclass
class PriceService:
    """Read access to the price catalog."""

    entries: list[PriceEntry]
    page_size: int

    @classmethod
    def from_seed(cls, seed: int, page_size: int) -> "PriceService":
        """Build the catalog from the bundled reference prices."""
        return cls(entries=build_catalog(load_base_prices(), seed), page_size=page_size)

    def query(
        self, filters: FilterState, sort: SortConfig | None = None, page: int = 1
    ) -> PricePage:
        """Return one page of matching entries."""
        return run_price_query(self.entries, filters, sort, page, self.page_size)

    def get_entry(self, entry_id: str) -> PriceEntry | None:
        return next((entry for entry in self.entries if entry.id == entry_id), None)

    def suppliers(self, country_code: str = ALL_COUNTRIES) -> list[str]:
        """Return the suppliers offered for a country filter."""
        if country_code == ALL_COUNTRIES:
            return sorted(
                {name for names in SUPPLIERS_BY_COUNTRY.values() for name in names}
            )
        if country_by_code(country_code) is None:
            return []
        return list(SUPPLIERS_BY_COUNTRY[country_code])
