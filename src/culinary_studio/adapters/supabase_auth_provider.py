"""Supabase Auth implementation of the auth provider."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from supabase import Client

from culinary_studio.domain.models import AuthSession, AuthUser
from culinary_studio.services.auth import (
    AuthEvent,
    AuthListener,
    AuthProvider,
    SignUpOutcome,
)

logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthProvider(AuthProvider):
    """Auth calls against a dedicated Supabase client."""

    client: Client

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> SignUpOutcome:
        """Register a user; the session is missing while email is unverified."""
        response = self.client.auth.sign_up(
            {"email": email, "password": password, "options": {"data": metadata}}
        )
        return SignUpOutcome(
            user=_parse_user(response.user) if response.user else None,
            session=_parse_session(response.session) if response.session else None,
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        response = self.client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        if response.session is None:
            raise RuntimeError("Failed to sign in")
        return _parse_session(response.session)

    def get_user(self, access_token: str) -> AuthUser | None:
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return _parse_user(response.user)

    def sign_out(self, access_token: str) -> None:
        self.client.auth.admin.sign_out(access_token)

    def current_session(self) -> AuthSession | None:
        session = self.client.auth.get_session()
        return _parse_session(session) if session else None

    def update_metadata(self, user_id: str, metadata: dict[str, object]) -> None:
        self.client.auth.admin.update_user_by_id(
            user_id, {"user_metadata": metadata}
        )

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Forward known auth events to ``listener``."""

        def _forward(event: str, session: Any) -> None:
            try:
                studio_event = AuthEvent(event)
            except ValueError:
                logger.debug("Ignoring auth event %s", event)
                return
            listener(studio_event, _parse_session(session) if session else None)

        subscription = self.client.auth.on_auth_state_change(_forward)
        return subscription.unsubscribe


def _parse_user(user: Any) -> AuthUser:
    return AuthUser(
        id=str(user.id),
        email=user.email or "",
        confirmed_at=user.email_confirmed_at or user.confirmed_at,
        metadata=dict(user.user_metadata or {}),
    )


def _parse_session(session: Any) -> AuthSession:
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user=_parse_user(session.user),
    )
