"""Reference data for markets, suppliers and base ingredients."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Country:
    """Market country with its currency."""

    name: str
    code: str
    currency: str
    symbol: str
    price_multiplier: float = 1.0


@dataclass(frozen=True)
class BaseIngredient:
    """Ingredient with nutrients per 100 g or ml."""

    name: str
    category: str
    unit: str
    base_price: float
    protein: float
    carbs: float
    fats: float
    calories: float


COUNTRIES: list[Country] = [
    Country(name="Spain", code="ES", currency="EUR", symbol="€"),
    Country(
        name="Mexico", code="MX", currency="MXN", symbol="$", price_multiplier=20
    ),
    Country(name="USA", code="US", currency="USD", symbol="$", price_multiplier=1.1),
    Country(name="France", code="FR", currency="EUR", symbol="€"),
    Country(name="Italy", code="IT", currency="EUR", symbol="€"),
    Country(name="Portugal", code="PT", currency="EUR", symbol="€"),
    Country(
        name="Japan", code="JP", currency="JPY", symbol="¥", price_multiplier=150
    ),
]

SUPPLIERS_BY_COUNTRY: dict[str, list[str]] = {
    "ES": ["Grupo TGT", "Mercabarna", "Mercasa"],
    "MX": ["CEDA", "Central de Abastos", "La Canasta"],
    "US": ["Costco Business", "Sysco", "US Foods"],
    "FR": ["Carrefour Pro", "Metro France", "Rungis Market"],
    "IT": ["Carrefour Grossista", "Esselunga Business", "Metro Italia"],
    "PT": ["Continente Pro", "Merc Lisboa", "Pingo Doce Business"],
    "JP": ["Aeon Supermarket", "Ito-Yokado", "Ota Market"],
}

CATEGORIES = [
    "Protein",
    "Vegetable",
    "Fruit",
    "Dairy",
    "Spice/Herb",
    "Grain",
    "Oil/Fat",
    "Other",
]

_CATEGORY_RULES: list[tuple[str, re.Pattern[str]]] = [
    (
        "Protein",
        re.compile(
            r"chicken|beef|pork|fish|shrimp|salmon|eggs|steak|almonds|cashews|"
            r"hazelnuts|peanuts|pecans|pistachios|walnuts|poppy seeds|sesame seeds"
        ),
    ),
    (
        "Fruit",
        re.compile(
            r"apple|avocado|banana|blueberry|blueberries|grape|lemon|mango|orange|"
            r"papaya|pineapple|strawberry|strawberries|watermelon"
        ),
    ),
    (
        "Vegetable",
        re.compile(
            r"tomato|onion|garlic|potato|carrot|broccoli|cabbage|beet|bell pepper|"
            r"chili pepper|cucumber|zucchini|spinach|celery|lettuce|radish|turnip|"
            r"eggplant|fennel|mushroom|sweet potato|cassava|cauliflower"
        ),
    ),
    ("Dairy", re.compile(r"milk|cream|cheese|yogurt|butter")),
    (
        "Spice/Herb",
        re.compile(
            r"salt|pepper|basil|bay leaves|cardamom|cilantro|cinnamon|cloves|cumin|"
            r"nutmeg|oregano|paprika|parsley|rosemary|saffron|star anise|thyme|"
            r"turmeric|vanilla"
        ),
    ),
    (
        "Grain",
        re.compile(
            r"rice|pasta|bread|wheat|flour|corn|beans|chickpeas|lentils|quinoa"
        ),
    ),
    ("Oil/Fat", re.compile(r"oil")),
]


def categorize(name: str) -> str:
    """Assign a price category from keywords in the ingredient name."""
    lowered = name.lower()
    for category, pattern in _CATEGORY_RULES:
        if pattern.search(lowered):
            return category
    return "Other"


def country_by_code(code: str) -> Country | None:
    """Return the country for a two-letter code, if known."""
    return next((country for country in COUNTRIES if country.code == code), None)


BASE_INGREDIENTS: list[BaseIngredient] = [
    BaseIngredient("Chicken Breast", "Protein", "kg", 6.50, 31, 0, 3.6, 165),
    BaseIngredient("Beef Chuck", "Protein", "kg", 12.00, 26, 0, 15, 250),
    BaseIngredient("Salmon Fillet", "Protein", "kg", 18.50, 20, 0, 13, 208),
    BaseIngredient("Shrimp", "Protein", "kg", 22.00, 24, 0, 0.3, 99),
    BaseIngredient("Eggs", "Protein", "doz", 3.50, 13, 1.1, 11, 155),
    BaseIngredient("Tomato", "Vegetable", "kg", 2.20, 0.9, 3.9, 0.2, 18),
    BaseIngredient("Onion", "Vegetable", "kg", 1.10, 1.1, 9, 0.1, 40),
    BaseIngredient("Garlic", "Vegetable", "kg", 8.00, 6.4, 33, 0.5, 149),
    BaseIngredient("Potato", "Vegetable", "kg", 0.90, 2, 17, 0.1, 77),
    BaseIngredient("Cheddar Cheese", "Dairy", "kg", 9.50, 25, 1.3, 33, 402),
    BaseIngredient("Milk (Whole)", "Dairy", "L", 1.20, 3.2, 4.8, 3.3, 61),
    BaseIngredient("Butter", "Dairy", "250g", 2.80, 0.9, 0.1, 81, 717),
    BaseIngredient("Sea Salt", "Spice/Herb", "500g", 1.50, 0, 0, 0, 0),
    BaseIngredient("Black Pepper", "Spice/Herb", "100g", 4.50, 10, 64, 3, 251),
    BaseIngredient("Spaghetti", "Grain", "500g", 1.30, 13, 75, 1.5, 371),
    BaseIngredient("Long Grain Rice", "Grain", "kg", 1.80, 2.7, 28, 0.3, 130),
    BaseIngredient("Olive Oil", "Oil/Fat", "L", 9.00, 0, 0, 100, 884),
    BaseIngredient("Sugar (White)", "Other", "kg", 1.15, 0, 100, 0, 387),
    BaseIngredient("Honey", "Other", "500g", 6.00, 0.3, 82, 0, 304),
    BaseIngredient("Soy Sauce", "Other", "500ml", 3.50, 8, 4.9, 0.6, 53),
]


def find_base_ingredient(name: str) -> BaseIngredient | None:
    """Return the base ingredient with an exact name match."""
    return next((item for item in BASE_INGREDIENTS if item.name == name), None)
