"""Encyclopedia categories, the fixed topic hierarchy and article records."""

from dataclasses import dataclass

GENERAL_GROUP = "General"
PLACEHOLDER_READING_TIME = "5 min"
PLACEHOLDER_AUTHOR = "Culinary Studio AI"


@dataclass(frozen=True)
class Topic:
    id: str
    category: str
    title: str
    icon: str
    parent_group: str | None = None
    badge: str = "verified"


@dataclass(frozen=True)
class Article:
    """Encyclopedia entry for a topic."""

    topic_id: str
    content: str
    reading_time: str
    author: str
    is_placeholder: bool = False


def _numbered(prefix: str, category: str, icon: str, titles: list[str]) -> list[Topic]:
    return [
        Topic(id=f"{prefix}-{index}", category=category, title=title, icon=icon)
        for index, title in enumerate(titles, start=1)
    ]


def _grouped(
    prefix: str, group: str, icon: str, titles: list[str]
) -> list[Topic]:
    return [
        Topic(
            id=f"tech-{prefix}{index}",
            category="TECHNIQUES",
            title=title,
            icon=icon,
            parent_group=group,
        )
        for index, title in enumerate(titles, start=1)
    ]


TOPICS: dict[str, list[Topic]] = {
    "INGREDIENTS": _numbered(
        "ing",
        "INGREDIENTS",
        "📋",
        [
            "Grains & Cereals",
            "Vegetables",
            "Fruits",
            "Herbs & Spices",
            "Legumes & Pulses",
            "Dairy & Cheeses",
            "Meats & Game",
            "Fish & Seafood",
            "Oils & Fats",
            "Nuts & Seeds",
            "Sweeteners",
            "Fermented & Pickled",
            "Sauces & Condiments",
            "Gelling & Thickening Agents",
            "Sourdoughs & Starters",
            "Specialty Ingredients",
        ],
    ),
    "TECHNIQUES": [
        *_grouped(
            "k",
            "Knife Skills",
            "🔪",
            [
                "Chopping",
                "Slicing",
                "Dicing",
                "Julienning",
                "Brunoise",
                "Peeling & Paring",
            ],
        ),
        *_grouped(
            "c",
            "Cooking Methods",
            "🔥",
            [
                "Boiling",
                "Steaming",
                "Poaching",
                "Grilling",
                "Roasting",
                "Baking",
                "Frying",
                "Sautéing",
                "Blanching",
                "Sous-vide",
            ],
        ),
        *_grouped(
            "p",
            "Preparation",
            "🧪",
            [
                "Marinating",
                "Fermenting",
                "Smoking",
                "Curing",
                "Pickling",
                "Emulsifying",
                "Clarifying",
            ],
        ),
        *_grouped(
            "pl",
            "Plating",
            "🎨",
            [
                "Classic Styles",
                "Modern Styles",
                "Garnishing",
                "Texture & Height",
                "Color Theory",
            ],
        ),
    ],
    "MEXICO": _numbered(
        "mex",
        "MEXICO",
        "🇲🇽",
        [
            "Culinary History",
            "Pre-Columbian Traditions",
            "Colonial Influences",
            "Traditional Ingredients",
            "Cooking Techniques",
            "Corn Gastronomy and Nixtamalization",
            "Regional Cuisines",
            "Culinary Masters",
            "Iconic Dishes",
            "Traditional Tools",
            "Festivals and Food",
            "Street Food Culture",
            "Sauces & Moles Varieties",
            "Staple Foods",
            "Traditional Beverages",
            "Indigenous Influence",
            "Religious & Festive Dishes",
            "Modern Mexican Cuisine",
            "Fusion & Contemporary Styles",
            "Markets & Food Distribution",
            "Local Foodways & Agriculture",
        ],
    ),
    "JAPAN": _numbered(
        "jpn",
        "JAPAN",
        "🇯🇵",
        [
            "Washoku Tradition",
            "Historical Development",
            "Seasonal Cooking",
            "Traditional Ingredients",
            "Kaiseki Cuisine",
            "Regional Variations",
            "Culinary Philosophy",
            "Traditional Dishes",
            "Cooking Utensils",
            "Tea Culture",
            "Sushi & Sashimi Culture",
            "Noodle Varieties (Ramen, Soba, Udon)",
            "Fermentation (Miso, Soy, Pickles, Sake)",
            "Street Food / Izakaya",
            "Presentation & Aesthetics",
            "Festive/Religious Cuisine",
            "Modern Japanese Fusion",
            "Seafood Traditions",
            "Obentos & Home Cooking",
            "Confectionery (Wagashi)",
        ],
    ),
    "SPAIN": _numbered(
        "esp",
        "SPAIN",
        "🇪🇸",
        [
            "Culinary Evolution",
            "Moorish Influences",
            "Regional Cuisines",
            "Traditional Ingredients",
            "Cooking Methods",
            "Tapas Culture",
            "Renowned Chefs",
            "Classic Dishes",
            "Traditional Equipment",
            "Culinary Festivals",
            "Seafood & Coasts",
            "Jamon & Cured Meats",
            "Paella & Rice Dishes",
            "Olive Oil Culture",
            "Wines & Sherries",
            "Spanish Sweets & Pastries",
            "Bar & Taverna Culture",
            "Religious and Festive Foods",
            "Spanish Bread Traditions",
            "Farmhouse & Mountain Cooking",
            "Gastronomic Societies (Txokos)",
            "Contemporary Spanish Cuisine",
        ],
    ),
    "ITALY": _numbered(
        "ita",
        "ITALY",
        "🇮🇹",
        [
            "Regional Diversity",
            "Ancient Origins",
            "Renaissance Influence",
            "Traditional Ingredients",
            "Pasta Culture",
            "Regional Specialties",
            "Master Chefs",
            "Iconic Recipes",
            "Traditional Tools",
            "Food Traditions",
            "Olive Oil & Vinegar Traditions",
            "Cheese Varieties",
            "Bread & Pizza Traditions",
            "Coffee & Espresso Culture",
            "Antipasti & Aperitivi",
            "Seafood Traditions",
            "Confectionery & Desserts",
            "Festivals & Celebrations",
            "Wine Regions & Traditions",
            "Home Cooking / Familiare",
            "Italian Street Food",
            "Slow Food Movement",
            "Contemporary & Fusion Italian",
        ],
    ),
    "FRANCE": _numbered(
        "fra",
        "FRANCE",
        "🇫🇷",
        [
            "Haute Cuisine History",
            "Classical Foundations",
            "Regional Traditions",
            "Essential Ingredients",
            "Classical Techniques",
            "Wine Regions",
            "Legendary Chefs",
            "Classic Preparations",
            "Professional Equipment",
            "Culinary Schools",
            "Bistro & Brasserie Culture",
            "Charcuterie & Pâtés",
            "Bread & Viennoiserie (Bakery)",
            "Cheese Traditions",
            "Pastry & Desserts (Pâtisserie)",
            "Butter & Dairy Traditions",
            "Festive & Religious Cuisine",
            "Sauces & Stocks",
            "French Home Cooking",
            "Contemporary / Fusion French",
            "Food Markets & Distribution",
            "Great Food Writers & Literature",
            "Gastronomic Tourism",
        ],
    ),
}

CATEGORIES = list(TOPICS)
ALL_TOPICS: list[Topic] = [topic for topics in TOPICS.values() for topic in topics]


def find_topic(topic_id: str) -> Topic | None:
    return next((topic for topic in ALL_TOPICS if topic.id == topic_id), None)


def search_topics(category: str, query: str = "") -> list[Topic]:
    """Return topics of a category whose title or group contains the query."""
    topics = TOPICS.get(category, [])
    if not query:
        return list(topics)
    needle = query.lower()
    return [
        topic
        for topic in topics
        if needle in topic.title.lower()
        or (topic.parent_group is not None and needle in topic.parent_group.lower())
    ]


def group_topics(topics: list[Topic]) -> dict[str, list[Topic]]:
    """Group topics by parent group, keeping first-seen group order."""
    grouped: dict[str, list[Topic]] = {}
    for topic in topics:
        grouped.setdefault(topic.parent_group or GENERAL_GROUP, []).append(topic)
    return grouped


def placeholder_article(topic: Topic) -> Article:
    """Return the stand-in shown while a topic has no stored article."""
    content = (
        f"### 📜 {topic.title}\n\n"
        "Our historians are currently verifying and digitizing the archives for "
        f"**{topic.title}**.\n\n"
        '> "History is the secret ingredient in every recipe." - Studio Archive'
    )
    return Article(
        topic_id=topic.id,
        content=content,
        reading_time=PLACEHOLDER_READING_TIME,
        author=PLACEHOLDER_AUTHOR,
        is_placeholder=True,
    )
