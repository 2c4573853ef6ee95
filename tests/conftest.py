"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest
from supabase import AuthError

from culinary_studio.config import Settings
from culinary_studio.containers import AppContainer
from culinary_studio.domain.costing import CostTemplate, FoodCostSheet
from culinary_studio.domain.encyclopedia import Article
from culinary_studio.domain.messages import DirectMessage
from culinary_studio.domain.models import (
    AuthSession,
    AuthUser,
    PromoCode,
    ProfileRecord,
)
from culinary_studio.domain.news import NewsFeed
from culinary_studio.domain.pairing import SavedPairing
from culinary_studio.domain.projects import MemberKind, Project
from culinary_studio.domain.recipes import Recipe
from culinary_studio.domain.social import Comment, FeedPost
from culinary_studio.services.assistant import AssistantClient, AssistantService
from culinary_studio.services.auth import (
    AuthEvent,
    AuthListener,
    AuthProvider,
    SignUpOutcome,
)
from culinary_studio.services.cache import InMemoryCache
from culinary_studio.services.chat import ChatService, MessageRepository
from culinary_studio.services.costing import CostingService, FoodCostRepository
from culinary_studio.services.encyclopedia import (
    EncyclopediaRepository,
    EncyclopediaService,
)
from culinary_studio.services.news import NewsClient, NewsService
from culinary_studio.services.pairings import PairingRepository, PairingService
from culinary_studio.services.prices import PriceService
from culinary_studio.services.profiles import ProfileRepository, ProfileService
from culinary_studio.services.projects import ProjectRepository, ProjectService
from culinary_studio.services.promos import PromoRepository, PromoService
from culinary_studio.services.realtime import (
    MessageBus,
    MessageCallback,
    RealtimeGateway,
)
from culinary_studio.services.recipes import RecipeRepository, RecipeService
from culinary_studio.services.sessions import SessionManager
from culinary_studio.services.social import SocialRepository, SocialService
from culinary_studio.services.storage import FileStorage

TEST_SERVICE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
    "c2lnbmF0dXJl"
)


def make_auth_session(
    user_id: str = "user-1",
    email: str = "chef@example.com",
    token: str = "token-1",
    metadata: dict[str, object] | None = None,
) -> AuthSession:
    user = AuthUser(id=user_id, email=email, metadata=metadata or {})
    return AuthSession(access_token=token, user=user)


def make_post(post_id: str, user_id: str = "chef-2", likes: int = 0) -> FeedPost:
    return FeedPost(
        id=post_id,
        user_id=user_id,
        recipe_id=f"recipe-{post_id}",
        chef_name="Chef Ana",
        avatar_url=None,
        title=f"Dish {post_id}",
        description="",
        difficulty="INTERMEDIATE",
        image_url=None,
        likes_count=likes,
        comments_count=0,
        is_liked=False,
        is_saved=False,
        is_following=False,
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
        recipe={"id": f"recipe-{post_id}"},
    )


@dataclass
class FakeAuthProvider(AuthProvider):
    """Auth provider keeping users and tokens in memory."""

    auto_confirm: bool = True
    users: dict[str, tuple[str, AuthUser]] = field(default_factory=dict)
    tokens: dict[str, AuthUser] = field(default_factory=dict)
    listeners: list[AuthListener] = field(default_factory=list)
    signed_out: list[str] = field(default_factory=list)
    metadata_updates: list[tuple[str, dict[str, object]]] = field(
        default_factory=list
    )
    current: AuthSession | None = None
    fail_metadata: bool = False

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> SignUpOutcome:
        user = AuthUser(id=str(uuid4()), email=email, metadata=dict(metadata))
        self.users[email] = (password, user)
        if not self.auto_confirm:
            return SignUpOutcome(user=user, session=None)
        return SignUpOutcome(user=user, session=self._issue(user))

    def sign_in(self, email: str, password: str) -> AuthSession:
        stored = self.users.get(email)
        if stored is None or stored[0] != password:
            raise AuthError("Invalid login credentials", None)
        return self._issue(stored[1])

    def get_user(self, access_token: str) -> AuthUser | None:
        return self.tokens.get(access_token)

    def sign_out(self, access_token: str) -> None:
        self.tokens.pop(access_token, None)
        self.signed_out.append(access_token)

    def current_session(self) -> AuthSession | None:
        return self.current

    def update_metadata(self, user_id: str, metadata: dict[str, object]) -> None:
        if self.fail_metadata:
            raise AuthError("metadata rejected", None)
        self.metadata_updates.append((user_id, metadata))

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def emit(self, event: AuthEvent, session: AuthSession | None) -> None:
        for listener in list(self.listeners):
            listener(event, session)

    def _issue(self, user: AuthUser) -> AuthSession:
        token = f"token-{uuid4().hex[:8]}"
        self.tokens[token] = user
        return AuthSession(access_token=token, user=user)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    records: dict[str, ProfileRecord] = field(default_factory=dict)
    updates: list[tuple[str, dict[str, object]]] = field(default_factory=list)
    fail: bool = False

    def get_profile(self, user_id: str) -> ProfileRecord | None:
        if self.fail:
            raise RuntimeError("profiles unavailable")
        return self.records.get(user_id)

    def upsert_profile(self, payload: dict[str, object]) -> ProfileRecord | None:
        record = ProfileRecord(
            id=str(payload["id"]),
            username=payload.get("username"),  # type: ignore[arg-type]
            full_name=payload.get("full_name"),  # type: ignore[arg-type]
            chef_name=payload.get("chef_name"),  # type: ignore[arg-type]
            tier=payload.get("tier"),  # type: ignore[arg-type]
        )
        self.records[record.id] = record
        return record

    def update_profile(self, user_id: str, payload: dict[str, object]) -> None:
        self.updates.append((user_id, payload))

    def list_profiles(
        self, exclude_user_id: str | None = None
    ) -> list[ProfileRecord]:
        return [
            record for record in self.records.values() if record.id != exclude_user_id
        ]


@dataclass
class InMemoryPromoRepository(PromoRepository):
    codes: dict[str, PromoCode] = field(default_factory=dict)
    redeemed: list[str] = field(default_factory=list)

    def get_code(self, code: str) -> PromoCode | None:
        return self.codes.get(code)

    def increment_use(self, code: str) -> None:
        self.redeemed.append(code)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    rows: dict[str, dict[str, object]] = field(default_factory=dict)

    def create_recipe(self, payload: dict[str, object]) -> Recipe:
        row = {"id": str(uuid4()), **payload}
        self.rows[str(row["id"])] = row
        return Recipe.from_record(row)

    def update_recipe(
        self, user_id: str, recipe_id: str, payload: dict[str, object]
    ) -> Recipe:
        row = self.rows.get(recipe_id)
        if row is None or row["user_id"] != user_id:
            raise RuntimeError("Failed to update recipe")
        row.update(payload)
        return Recipe.from_record(row)

    def get_recipe(self, user_id: str, recipe_id: str) -> Recipe | None:
        row = self.rows.get(recipe_id)
        if row is None or row["user_id"] != user_id:
            return None
        return Recipe.from_record(row)

    def list_recipes(self, user_id: str) -> list[Recipe]:
        return [
            Recipe.from_record(row)
            for row in self.rows.values()
            if row["user_id"] == user_id
        ]

    def delete_recipe(self, user_id: str, recipe_id: str) -> None:
        row = self.rows.get(recipe_id)
        if row is not None and row["user_id"] == user_id:
            del self.rows[recipe_id]


@dataclass
class InMemoryProjectRepository(ProjectRepository):
    projects: dict[str, Project] = field(default_factory=dict)
    links: dict[tuple[MemberKind, str], str | None] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def create_project(self, payload: dict[str, object]) -> Project:
        project = Project(
            id=str(uuid4()),
            user_id=str(payload["user_id"]),
            title=str(payload["title"]),
            description=str(payload.get("description") or ""),
        )
        self.projects[project.id] = project
        return project

    def list_projects(self, user_id: str) -> list[Project]:
        return [item for item in self.projects.values() if item.user_id == user_id]

    def delete_project(self, user_id: str, project_id: str) -> None:
        self.calls.append("delete")
        self.projects.pop(project_id, None)

    def set_project(
        self, kind: MemberKind, user_id: str, item_id: str, project_id: str | None
    ) -> None:
        self.links[(kind, item_id)] = project_id

    def unlink_all(self, kind: MemberKind, user_id: str, project_id: str) -> None:
        self.calls.append(f"unlink:{kind.value}")
        for key, linked in list(self.links.items()):
            if key[0] == kind and linked == project_id:
                self.links[key] = None


@dataclass
class InMemoryPairingRepository(PairingRepository):
    pairings: dict[str, SavedPairing] = field(default_factory=dict)

    def create_pairing(self, payload: dict[str, object]) -> SavedPairing:
        pairing = SavedPairing(
            id=str(uuid4()),
            user_id=str(payload["user_id"]),
            project_id=None,
            title=str(payload["title"]),
            ingredients=list(payload["ingredients"]),  # type: ignore[arg-type]
            analysis=dict(payload["analysis"]),  # type: ignore[arg-type]
        )
        self.pairings[pairing.id] = pairing
        return pairing

    def list_pairings(self, user_id: str) -> list[SavedPairing]:
        return [item for item in self.pairings.values() if item.user_id == user_id]

    def get_pairing(self, user_id: str, pairing_id: str) -> SavedPairing | None:
        pairing = self.pairings.get(pairing_id)
        return pairing if pairing and pairing.user_id == user_id else None

    def delete_pairing(self, user_id: str, pairing_id: str) -> None:
        if self.get_pairing(user_id, pairing_id):
            del self.pairings[pairing_id]


@dataclass
class InMemoryFoodCostRepository(FoodCostRepository):
    sheets: dict[str, FoodCostSheet] = field(default_factory=dict)
    fail: bool = False

    def create_sheet(self, user_id: str, payload: dict[str, object]) -> FoodCostSheet:
        sheet = FoodCostSheet(
            id=str(uuid4()),
            user_id=user_id,
            project_id=payload.get("project_id"),  # type: ignore[arg-type]
            recipe_name=str(payload["recipe_name"]),
            template=CostTemplate(payload["template"]),
            total_cost=float(payload["total_cost"]),  # type: ignore[arg-type]
            servings=int(payload["servings"]),  # type: ignore[call-overload]
            cost_per_serving=float(payload["cost_per_serving"]),  # type: ignore[arg-type]
            ingredients=list(payload["ingredients"]),  # type: ignore[call-overload]
            created_at=None,
            updated_at=None,
        )
        self.sheets[sheet.id] = sheet
        return sheet

    def list_sheets(self, user_id: str) -> list[FoodCostSheet]:
        if self.fail:
            raise RuntimeError("food costs unavailable")
        return [item for item in self.sheets.values() if item.user_id == user_id]

    def get_sheet(self, user_id: str, sheet_id: str) -> FoodCostSheet | None:
        sheet = self.sheets.get(sheet_id)
        return sheet if sheet and sheet.user_id == user_id else None

    def delete_sheet(self, user_id: str, sheet_id: str) -> None:
        if self.get_sheet(user_id, sheet_id):
            del self.sheets[sheet_id]


@dataclass
class InMemorySocialRepository(SocialRepository):
    posts: list[FeedPost] = field(default_factory=list)
    saved: dict[str, list[str]] = field(default_factory=dict)
    follows: dict[str, list[str]] = field(default_factory=dict)
    reactions: set[tuple[str, str, str]] = field(default_factory=set)
    created_posts: list[dict[str, object]] = field(default_factory=list)
    shared: dict[str, set[str]] = field(default_factory=dict)
    comments: list[Comment] = field(default_factory=list)
    list_calls: list[dict[str, object]] = field(default_factory=list)
    fail: bool = False

    def list_posts(
        self,
        viewer_id: str | None,
        *,
        post_ids: list[str] | None = None,
        author_ids: list[str] | None = None,
        created_since: datetime | None = None,
    ) -> list[FeedPost]:
        if self.fail:
            raise RuntimeError("feed unavailable")
        self.list_calls.append(
            {
                "post_ids": post_ids,
                "author_ids": author_ids,
                "created_since": created_since,
            }
        )
        return [
            post
            for post in self.posts
            if (post_ids is None or post.id in post_ids)
            and (author_ids is None or post.user_id in author_ids)
        ]

    def create_post(self, payload: dict[str, object]) -> None:
        self.created_posts.append(payload)
        self.shared.setdefault(str(payload["user_id"]), set()).add(
            str(payload["recipe_id"])
        )

    def delete_recipe_posts(self, user_id: str, recipe_id: str) -> None:
        self.shared.get(user_id, set()).discard(recipe_id)

    def shared_recipe_ids(self, user_id: str) -> set[str]:
        return set(self.shared.get(user_id, set()))

    def saved_post_ids(self, user_id: str) -> list[str]:
        return list(self.saved.get(user_id, []))

    def following_ids(self, user_id: str) -> list[str]:
        return list(self.follows.get(user_id, []))

    def set_reaction(self, table: str, user_id: str, post_id: str, on: bool) -> None:
        key = (table, user_id, post_id)
        if on:
            self.reactions.add(key)
        else:
            self.reactions.discard(key)

    def has_reaction(self, table: str, user_id: str, post_id: str) -> bool:
        return (table, user_id, post_id) in self.reactions

    def follow(self, follower_id: str, following_id: str) -> None:
        self.follows.setdefault(follower_id, []).append(following_id)

    def unfollow(self, follower_id: str, following_id: str) -> None:
        followed = self.follows.get(follower_id, [])
        if following_id in followed:
            followed.remove(following_id)

    def list_comments(self, post_id: str) -> list[Comment]:
        return [item for item in self.comments if item.post_id == post_id]

    def add_comment(self, user_id: str, post_id: str, content: str) -> Comment:
        comment = Comment(
            id=str(uuid4()),
            post_id=post_id,
            user_id=user_id,
            content=content,
            user_name="Chef Test",
            avatar_url=None,
        )
        self.comments.append(comment)
        return comment


@dataclass
class InMemoryEncyclopediaRepository(EncyclopediaRepository):
    articles: dict[str, Article] = field(default_factory=dict)
    saved: dict[str, list[str]] = field(default_factory=dict)
    fail: bool = False

    def get_article(self, topic_id: str) -> Article | None:
        if self.fail:
            raise RuntimeError("encyclopedia unavailable")
        return self.articles.get(topic_id)

    def saved_topic_ids(self, user_id: str) -> list[str]:
        if self.fail:
            raise RuntimeError("encyclopedia unavailable")
        return list(self.saved.get(user_id, []))

    def set_saved(self, user_id: str, topic_id: str, saved: bool) -> None:
        topics = self.saved.setdefault(user_id, [])
        if saved:
            topics.append(topic_id)
        elif topic_id in topics:
            topics.remove(topic_id)


@dataclass
class InMemoryMessageRepository(MessageRepository):
    messages: list[DirectMessage] = field(default_factory=list)
    payloads: list[dict[str, object]] = field(default_factory=list)
    fail: bool = False

    def insert_message(self, payload: dict[str, object]) -> DirectMessage:
        if self.fail:
            raise RuntimeError("Failed to send message")
        self.payloads.append(payload)
        receiver = payload.get("receiver_id")
        message = DirectMessage(
            id=str(uuid4()),
            sender_id=str(payload["sender_id"]),
            receiver_id=str(receiver) if receiver else None,
            text=str(payload["text"]),
            is_ai=bool(payload.get("is_ai")),
        )
        self.messages.append(message)
        return message

    def conversation(self, user_id: str, other_id: str) -> list[DirectMessage]:
        pair = {user_id, other_id}
        return [
            message
            for message in self.messages
            if {message.sender_id, message.receiver_id} == pair
        ]


@dataclass
class FakeFileStorage(FileStorage):
    uploads: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        self.uploads[path] = (content, content_type)

    def public_url(self, path: str) -> str:
        return f"https://cdn.example.com/{path}"


@dataclass
class FakeAssistantClient(AssistantClient):
    json_result: dict[str, object] = field(default_factory=dict)
    text_result: str = "Use a hot pan."
    speech: bytes = b"\x00\x00\xff\x7f"
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str | None,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.calls.append(
            {"kind": "json", "prompt": prompt, "schema_name": schema_name}
        )
        if self.error is not None:
            raise self.error
        return self.json_result

    async def complete_text(
        self,
        *,
        model: str,
        store: bool,
        instructions: str | None,
        prompt: str,
    ) -> str:
        self.calls.append({"kind": "text", "prompt": prompt})
        if self.error is not None:
            raise self.error
        return self.text_result

    async def synthesize_speech(self, *, model: str, voice: str, text: str) -> bytes:
        self.calls.append({"kind": "speech", "text": text})
        if self.error is not None:
            raise self.error
        return self.speech


@dataclass
class FakeRealtimeGateway(RealtimeGateway):
    callbacks: dict[str, tuple[str, MessageCallback]] = field(default_factory=dict)
    unsubscribed: list[object] = field(default_factory=list)

    async def subscribe_inserts(
        self, receiver_id: str, callback: MessageCallback
    ) -> object:
        handle = f"chat:{receiver_id}:{len(self.callbacks) + 1}"
        self.callbacks[handle] = (receiver_id, callback)
        return handle

    async def unsubscribe(self, handle: object) -> None:
        self.unsubscribed.append(handle)
        self.callbacks.pop(str(handle), None)

    def push(self, message: DirectMessage) -> None:
        for receiver_id, callback in list(self.callbacks.values()):
            if receiver_id == message.receiver_id:
                callback(message)


@dataclass
class FakeNewsClient(NewsClient):
    feed: NewsFeed = field(default_factory=lambda: NewsFeed(status="ok"))
    error: Exception | None = None
    calls: int = 0

    async def fetch_feed(self, feed_url: str) -> NewsFeed:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.feed


def build_assistant(client: AssistantClient) -> AssistantService:
    return AssistantService(
        client=client,
        model="gpt-5.2",
        chat_model="gpt-5.2",
        reasoning_effort="low",
        store=False,
        tts_model="gpt-4o-mini-tts",
        tts_voice="coral",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=TEST_SERVICE_KEY,
        openai_api_key="openai-key",
    )


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def promo_repository() -> InMemoryPromoRepository:
    return InMemoryPromoRepository()


@pytest.fixture
def social_repository() -> InMemorySocialRepository:
    return InMemorySocialRepository()


@pytest.fixture
def message_repository() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture
def assistant_client() -> FakeAssistantClient:
    return FakeAssistantClient()


@pytest.fixture
def realtime_gateway() -> FakeRealtimeGateway:
    return FakeRealtimeGateway()


@pytest.fixture
def news_client() -> FakeNewsClient:
    return FakeNewsClient()


@pytest.fixture
def profile_service(
    profile_repository: InMemoryProfileRepository, auth_provider: FakeAuthProvider
) -> ProfileService:
    return ProfileService(
        repository=profile_repository, auth=auth_provider, storage=FakeFileStorage()
    )


@pytest.fixture
def session_manager(
    auth_provider: FakeAuthProvider,
    profile_service: ProfileService,
    promo_repository: InMemoryPromoRepository,
    realtime_gateway: FakeRealtimeGateway,
) -> SessionManager:
    return SessionManager(
        auth=auth_provider,
        profiles=profile_service,
        promos=PromoService(promo_repository),
        bus=MessageBus(queue_size=10),
        gateway=realtime_gateway,
        price_page_size=25,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    session_manager: SessionManager,
    profile_service: ProfileService,
    social_repository: InMemorySocialRepository,
    message_repository: InMemoryMessageRepository,
    assistant_client: FakeAssistantClient,
    news_client: FakeNewsClient,
) -> AppContainer:
    recipe_repository = InMemoryRecipeRepository()
    pairing_repository = InMemoryPairingRepository()
    food_cost_repository = InMemoryFoodCostRepository()
    assistant = build_assistant(assistant_client)

    async def close_resources() -> None:
        await session_manager.stop()

    return AppContainer(
        settings=settings,
        session_manager=session_manager,
        profile_service=profile_service,
        recipe_service=RecipeService(
            repository=recipe_repository,
            social_repository=social_repository,
            storage=FakeFileStorage(),
        ),
        project_service=ProjectService(
            repository=InMemoryProjectRepository(),
            recipe_repository=recipe_repository,
            pairing_repository=pairing_repository,
            food_cost_repository=food_cost_repository,
            social_repository=social_repository,
        ),
        pairing_service=PairingService(pairing_repository, assistant),
        costing_service=CostingService(food_cost_repository, assistant),
        price_service=PriceService.from_seed(
            settings.price_catalog_seed, settings.price_page_size
        ),
        social_service=SocialService(social_repository),
        encyclopedia_service=EncyclopediaService(InMemoryEncyclopediaRepository()),
        chat_service=ChatService(
            repository=message_repository,
            assistant=assistant,
            profiles=profile_service,
        ),
        news_service=NewsService(
            client=news_client,
            cache=InMemoryCache(),
            feed_url=settings.news_feed_url,
            ttl_seconds=settings.news_cache_ttl_seconds,
        ),
        close_resources=close_resources,
    )
