"""Explicit studio sessions kept in step with the auth provider."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from supabase import AuthError

from culinary_studio.domain.costing import CostIngredient
from culinary_studio.domain.models import AuthSession, PlanTier, UserProfile
from culinary_studio.domain.prices import PriceClipboard, PriceTableView
from culinary_studio.domain.worksheet import CostWorksheet
from culinary_studio.errors import InvalidRequestError, NotAuthenticatedError
from culinary_studio.locales import DEFAULT_LANGUAGE, find_language, translate
from culinary_studio.services.auth import AuthEvent, AuthProvider
from culinary_studio.services.profiles import ProfileService
from culinary_studio.services.promos import PromoService
from culinary_studio.services.realtime import (
    MessageBus,
    RealtimeGateway,
    RealtimeInbox,
)

logger = logging.getLogger(__name__)

_PROFILE_EVENTS = {
    AuthEvent.SIGNED_IN,
    AuthEvent.TOKEN_REFRESHED,
    AuthEvent.USER_UPDATED,
}


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


@dataclass
class StudioSession:
    """Everything the studio keeps for one signed-in user."""

    access_token: str
    profile: UserProfile
    price_view: PriceTableView
    theme: Theme = Theme.LIGHT
    language: str = DEFAULT_LANGUAGE
    clipboard: PriceClipboard = field(default_factory=PriceClipboard)
    worksheet: CostWorksheet = field(default_factory=CostWorksheet)
    inbox: RealtimeInbox | None = None

    @property
    def user_id(self) -> str:
        return self.profile.id

    def toggle_theme(self) -> Theme:
        self.theme = Theme.DARK if self.theme == Theme.LIGHT else Theme.LIGHT
        return self.theme

    def set_language(self, code: str) -> None:
        if find_language(code) is None:
            raise InvalidRequestError(f"Unsupported language: {code}")
        self.language = code

    def transfer_clipboard(self) -> list[CostIngredient]:
        """Move the picked prices into the worksheet and empty the clipboard."""
        rows = self.worksheet.import_clipboard(self.clipboard.items)
        self.clipboard.clear()
        return rows

    async def close(self) -> None:
        """Tear down the realtime inbox, if one was opened."""
        inbox, self.inbox = self.inbox, None
        if inbox is not None:
            await inbox.close()


@dataclass(frozen=True)
class SignUpResult:
    user_id: str | None
    tier: PlanTier
    verification_pending: bool
    session: StudioSession | None = None


@dataclass
class SessionManager:
    """Opens, resolves and tears down studio sessions."""

    auth: AuthProvider
    profiles: ProfileService
    promos: PromoService
    bus: MessageBus
    gateway: RealtimeGateway
    price_page_size: int
    default_language: str = DEFAULT_LANGUAGE
    _sessions: dict[str, StudioSession] = field(default_factory=dict)
    _unsubscribe: Callable[[], None] | None = None
    _provider_token: str | None = None
    _pending: set[asyncio.Task[None]] = field(default_factory=set)
    _orphaned: list[StudioSession] = field(default_factory=list)

    def start(self) -> None:
        """Listen for auth changes and adopt the provider's current session."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self.auth.on_auth_state_change(self.handle_auth_event)
        current = self.auth.current_session()
        if current is not None:
            self._adopt(current)

    async def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        sessions = [*self._sessions.values(), *self._orphaned]
        self._sessions.clear()
        self._orphaned.clear()
        for session in sessions:
            await session.close()
        if self._pending:
            await asyncio.gather(*self._pending)

    def handle_auth_event(self, event: AuthEvent, session: AuthSession | None) -> None:
        """Keep sessions in step with provider notifications."""
        logger.info("Auth event %s", event)
        if event in _PROFILE_EVENTS and session is not None:
            self._adopt(session, rekey=event == AuthEvent.TOKEN_REFRESHED)
        elif event == AuthEvent.SIGNED_OUT and self._provider_token is not None:
            self._discard(self._provider_token)
            self._provider_token = None

    def sign_up(  # noqa: PLR0913
        self,
        *,
        email: str,
        password: str,
        confirm_password: str,
        username: str,
        full_name: str,
        chef_name: str = "",
        plan: PlanTier = PlanTier.FREE,
        promo_code: str = "",
        language: str = DEFAULT_LANGUAGE,
    ) -> SignUpResult:
        """Register a chef; a valid promo code decides the plan."""
        if password != confirm_password:
            raise InvalidRequestError(translate("auth.passwordMismatch", language))
        promo = self.promos.verify(promo_code) if promo_code.strip() else None
        tier = promo.plan_to_grant if promo else plan
        outcome = self.auth.sign_up(
            email,
            password,
            {
                "username": username,
                "full_name": full_name,
                "chef_name": chef_name or f"Chef {full_name}",
                "tier": tier.value,
            },
        )
        if outcome.user is None:
            raise InvalidRequestError("Sign up did not create a user")
        if promo is not None:
            self.promos.redeem(promo)
        studio_session = self._adopt(outcome.session) if outcome.session else None
        return SignUpResult(
            user_id=outcome.user.id,
            tier=tier,
            verification_pending=outcome.session is None,
            session=studio_session,
        )

    def sign_in(self, email: str, password: str) -> StudioSession:
        auth_session = self.auth.sign_in(email, password)
        existing = self._sessions.get(auth_session.access_token)
        return existing or self._adopt(auth_session)

    def resolve(self, access_token: str) -> StudioSession:
        """Return the session of a bearer token, opening it on first use."""
        existing = self._sessions.get(access_token)
        if existing is not None:
            return existing
        try:
            user = self.auth.get_user(access_token)
        except AuthError as exc:
            raise NotAuthenticatedError(exc.message) from exc
        if user is None:
            raise NotAuthenticatedError
        return self._open(AuthSession(access_token=access_token, user=user))

    def find(self, access_token: str) -> StudioSession | None:
        return self._sessions.get(access_token)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the token and tear its session down."""
        try:
            self.auth.sign_out(access_token)
        finally:
            session = self._sessions.pop(access_token, None)
            if self._provider_token == access_token:
                self._provider_token = None
            if session is not None:
                await session.close()
                logger.info("Session closed for %s", session.user_id)

    async def inbox(self, session: StudioSession) -> RealtimeInbox:
        """Return the session's realtime inbox, opening it on first use."""
        if session.inbox is None:
            session.inbox = RealtimeInbox(
                user_id=session.user_id, bus=self.bus, gateway=self.gateway
            )
        await session.inbox.open()
        return session.inbox

    def open_sessions(self) -> list[StudioSession]:
        return list(self._sessions.values())

    def _adopt(self, auth_session: AuthSession, rekey: bool = False) -> StudioSession:
        """Map a provider session; a refreshed token takes over the old one."""
        token = auth_session.access_token
        previous = self._provider_token if rekey else None
        self._provider_token = token
        if previous and previous != token and previous in self._sessions:
            moved = self._sessions.pop(previous)
            moved.access_token = token
            self._sessions[token] = moved
        session = self._sessions.get(token)
        if session is None:
            return self._open(auth_session)
        session.profile = self.profiles.sync_from_session(auth_session)
        return session

    def _open(self, auth_session: AuthSession) -> StudioSession:
        session = StudioSession(
            access_token=auth_session.access_token,
            profile=self.profiles.sync_from_session(auth_session),
            price_view=PriceTableView(page_size=self.price_page_size),
            language=self.default_language,
        )
        self._sessions[auth_session.access_token] = session
        logger.info("Session opened for %s", session.user_id)
        return session

    def _discard(self, access_token: str) -> None:
        session = self._sessions.pop(access_token, None)
        if session is None or session.inbox is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "No event loop to close inbox of %s, deferring to stop",
                session.user_id,
            )
            self._orphaned.append(session)
            return
        task = loop.create_task(session.close())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
