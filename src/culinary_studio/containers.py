"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import ClientOptions, create_client

from culinary_studio.adapters.news_feed_client import HttpxNewsClient
from culinary_studio.adapters.openai_assistant_client import OpenAIAssistantClient
from culinary_studio.adapters.supabase_auth_provider import SupabaseAuthProvider
from culinary_studio.adapters.supabase_encyclopedia_repository import (
    SupabaseEncyclopediaRepository,
)
from culinary_studio.adapters.supabase_food_cost_repository import (
    SupabaseFoodCostRepository,
)
from culinary_studio.adapters.supabase_message_repository import (
    SupabaseMessageRepository,
)
from culinary_studio.adapters.supabase_pairing_repository import (
    SupabasePairingRepository,
)
from culinary_studio.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from culinary_studio.adapters.supabase_project_repository import (
    SupabaseProjectRepository,
)
from culinary_studio.adapters.supabase_promo_repository import SupabasePromoRepository
from culinary_studio.adapters.supabase_realtime import SupabaseRealtimeGateway
from culinary_studio.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from culinary_studio.adapters.supabase_social_repository import (
    SupabaseSocialRepository,
)
from culinary_studio.adapters.supabase_storage import SupabaseFileStorage
from culinary_studio.config import Settings
from culinary_studio.services.assistant import AssistantService
from culinary_studio.services.cache import InMemoryCache
from culinary_studio.services.chat import ChatService
from culinary_studio.services.costing import CostingService
from culinary_studio.services.encyclopedia import EncyclopediaService
from culinary_studio.services.news import NewsService
from culinary_studio.services.pairings import PairingService
from culinary_studio.services.prices import PriceService
from culinary_studio.services.profiles import ProfileService
from culinary_studio.services.projects import ProjectService
from culinary_studio.services.promos import PromoService
from culinary_studio.services.realtime import MessageBus
from culinary_studio.services.recipes import RecipeService
from culinary_studio.services.sessions import SessionManager
from culinary_studio.services.social import SocialService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_manager: SessionManager
    profile_service: ProfileService
    recipe_service: RecipeService
    project_service: ProjectService
    pairing_service: PairingService
    costing_service: CostingService
    price_service: PriceService
    social_service: SocialService
    encyclopedia_service: EncyclopediaService
    chat_service: ChatService
    news_service: NewsService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    # Sign-ins would replace the data client's session, so auth gets its own.
    auth_client = create_client(
        resolved_settings.supabase_url,
        resolved_settings.supabase_service_key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )
    auth_provider = SupabaseAuthProvider(auth_client)
    storage = SupabaseFileStorage(supabase_client, resolved_settings.storage_bucket)
    profile_repository = SupabaseProfileRepository(supabase_client)
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    project_repository = SupabaseProjectRepository(supabase_client)
    pairing_repository = SupabasePairingRepository(supabase_client)
    food_cost_repository = SupabaseFoodCostRepository(supabase_client)
    social_repository = SupabaseSocialRepository(supabase_client)
    realtime_gateway = SupabaseRealtimeGateway(
        url=resolved_settings.supabase_url,
        key=resolved_settings.supabase_service_key,
    )
    openai_client = OpenAIAssistantClient.create(resolved_settings.openai_api_key)
    assistant = AssistantService(
        client=openai_client,
        model=resolved_settings.openai_model,
        chat_model=resolved_settings.openai_chat_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        tts_model=resolved_settings.openai_tts_model,
        tts_voice=resolved_settings.openai_tts_voice,
    )
    news_client = HttpxNewsClient.create(resolved_settings.news_proxy_url)

    profile_service = ProfileService(
        repository=profile_repository, auth=auth_provider, storage=storage
    )
    session_manager = SessionManager(
        auth=auth_provider,
        profiles=profile_service,
        promos=PromoService(SupabasePromoRepository(supabase_client)),
        bus=MessageBus(queue_size=resolved_settings.realtime_queue_size),
        gateway=realtime_gateway,
        price_page_size=resolved_settings.price_page_size,
        default_language=resolved_settings.default_language,
    )
    recipe_service = RecipeService(
        repository=recipe_repository,
        social_repository=social_repository,
        storage=storage,
    )
    project_service = ProjectService(
        repository=project_repository,
        recipe_repository=recipe_repository,
        pairing_repository=pairing_repository,
        food_cost_repository=food_cost_repository,
        social_repository=social_repository,
    )
    news_service = NewsService(
        client=news_client,
        cache=InMemoryCache(),
        feed_url=resolved_settings.news_feed_url,
        ttl_seconds=resolved_settings.news_cache_ttl_seconds,
    )

    async def close_resources() -> None:
        await session_manager.stop()
        await realtime_gateway.close()
        await news_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_manager=session_manager,
        profile_service=profile_service,
        recipe_service=recipe_service,
        project_service=project_service,
        pairing_service=PairingService(pairing_repository, assistant),
        costing_service=CostingService(food_cost_repository, assistant),
        price_service=PriceService.from_seed(
            resolved_settings.price_catalog_seed, resolved_settings.price_page_size
        ),
        social_service=SocialService(social_repository),
        encyclopedia_service=EncyclopediaService(
            SupabaseEncyclopediaRepository(supabase_client)
        ),
        chat_service=ChatService(
            repository=SupabaseMessageRepository(supabase_client),
            assistant=assistant,
            profiles=profile_service,
        ),
        news_service=news_service,
        close_resources=close_resources,
    )
