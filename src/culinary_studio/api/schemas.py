"""Request bodies and response shapes of the HTTP API."""

from pydantic import BaseModel, Field

from culinary_studio.domain.costing import CostIngredient, CostSettings, CostTemplate
from culinary_studio.domain.models import PlanTier
from culinary_studio.domain.pairing import PairingAnalysis
from culinary_studio.domain.prices import ALL_COUNTRIES, DEFAULT_PRICE_RANGE
from culinary_studio.domain.projects import ProjectColor
from culinary_studio.domain.recipes import RecipeDraft
from culinary_studio.locales import DEFAULT_LANGUAGE
from culinary_studio.services.sessions import StudioSession, Theme


class SignUpRequest(BaseModel):
    email: str
    password: str
    confirm_password: str
    username: str
    full_name: str
    chef_name: str = ""
    plan: PlanTier = PlanTier.FREE
    promo_code: str = ""
    language: str = DEFAULT_LANGUAGE


class SignInRequest(BaseModel):
    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    full_name: str | None = None
    chef_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None


class PreferencesRequest(BaseModel):
    """Theme and language of the session; ``toggle_theme`` flips the theme."""

    theme: Theme | None = None
    toggle_theme: bool = False
    language: str | None = None


class ShareRequest(BaseModel):
    shared: bool
    draft: RecipeDraft | None = None


class ProjectCreateRequest(BaseModel):
    title: str
    description: str = ""
    color: ProjectColor = ProjectColor.ORANGE


class AnalyzeRequest(BaseModel):
    ingredients: list[str]
    language: str | None = None
    deep: bool = False


class SpeakRequest(BaseModel):
    analysis: PairingAnalysis


class SavePairingRequest(BaseModel):
    ingredients: list[str]
    analysis: PairingAnalysis
    name: str | None = None


class CalculateRequest(BaseModel):
    ingredients: list[CostIngredient] = Field(default_factory=list)
    settings: CostSettings = Field(default_factory=CostSettings)
    template: CostTemplate = CostTemplate.BASIC


class WorksheetUpdateRequest(BaseModel):
    recipe_name: str | None = None
    template: CostTemplate | None = None
    settings: CostSettings | None = None


class SaveWorksheetRequest(BaseModel):
    project_id: str | None = None


class OptimizeRequest(BaseModel):
    """Rows to optimize; the session worksheet is used when omitted."""

    ingredients: list[CostIngredient] | None = None
    template: CostTemplate | None = None


class FilterRequest(BaseModel):
    country: str = ALL_COUNTRIES
    categories: list[str] = Field(default_factory=list)
    suppliers: list[str] = Field(default_factory=list)
    min_price: float = DEFAULT_PRICE_RANGE[0]
    max_price: float = DEFAULT_PRICE_RANGE[1]
    search_term: str = ""


class PageRequest(BaseModel):
    page: int = Field(ge=1)


class QuantityRequest(BaseModel):
    quantity: float


class CommentRequest(BaseModel):
    content: str


class MessageRequest(BaseModel):
    text: str


def session_view(session: StudioSession) -> dict[str, object]:
    """Describe a session to its owner."""
    return {
        "access_token": session.access_token,
        "profile": session.profile,
        "theme": session.theme,
        "language": session.language,
        "inbox_open": session.inbox is not None and session.inbox.is_open,
    }
