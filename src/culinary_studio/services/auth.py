"""Interface of the hosted auth provider."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from culinary_studio.domain.models import AuthSession, AuthUser


class AuthEvent(StrEnum):
    """Auth state notifications the studio reacts to."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


AuthListener = Callable[[AuthEvent, AuthSession | None], None]


@dataclass(frozen=True)
class SignUpOutcome:
    """Result of a sign-up; no session means email verification is pending."""

    user: AuthUser | None
    session: AuthSession | None


class AuthProvider(Protocol):
    """Sign-up, sign-in and session lookup backed by the BaaS."""

    def sign_up(
        self, email: str, password: str, metadata: dict[str, object]
    ) -> SignUpOutcome:
        """Register a user with profile metadata."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user an access token belongs to."""

    def sign_out(self, access_token: str) -> None:
        """Revoke an access token."""

    def current_session(self) -> AuthSession | None:
        """Return the session the provider already holds, if any."""

    def update_metadata(self, user_id: str, metadata: dict[str, object]) -> None:
        """Merge values into the user's metadata bag."""

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener and return its unsubscribe callable."""
