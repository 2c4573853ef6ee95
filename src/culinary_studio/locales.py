"""UI translations and supported languages."""

import json
from dataclasses import dataclass
from functools import cache
from pathlib import Path

DEFAULT_LANGUAGE = "en"
_LOCALES_PATH = Path(__file__).parent / "data" / "locales.json"


@dataclass(frozen=True)
class Language:
    """Supported UI language."""

    code: str
    display_name: str
    ai_name: str


LANGUAGES: list[Language] = [
    Language(code="en", display_name="English", ai_name="English"),
    Language(code="es", display_name="Español", ai_name="Spanish"),
    Language(code="ca", display_name="Català", ai_name="Catalan"),
    Language(code="fr", display_name="Français", ai_name="French"),
    Language(code="ja", display_name="日本語", ai_name="Japanese"),
    Language(code="it", display_name="Italiano", ai_name="Italian"),
    Language(code="pt", display_name="Português", ai_name="Portuguese"),
    Language(code="zh", display_name="中文", ai_name="Mandarin"),
    Language(code="de", display_name="Deutsch", ai_name="German"),
]


@cache
def load_translations() -> dict[str, dict[str, object]]:
    """Load the bundled translation tables."""
    with _LOCALES_PATH.open(encoding="utf-8") as handle:
        return json.load(handle)


def translate(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Resolve a dotted key, falling back to the key itself."""
    node: object = load_translations().get(language)
    for part in key.split("."):
        if not isinstance(node, dict) or not node.get(part):
            return key
        node = node[part]
    return node if isinstance(node, str) else key


def find_language(code: str) -> Language | None:
    return next((item for item in LANGUAGES if item.code == code), None)


def ai_language_name(code_or_name: str) -> str:
    """Return the language name used in AI prompts; unknown values pass through."""
    language = find_language(code_or_name)
    return language.ai_name if language else code_or_name
