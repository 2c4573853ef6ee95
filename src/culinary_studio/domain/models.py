"""Core domain models for studio users and auth sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class PlanTier(StrEnum):
    """Subscription tier of a studio user."""

    FREE = "free"
    PLATINUM = "platinum"
    PLATINUM_PRIME = "platinum_prime"


@dataclass(frozen=True)
class AuthUser:
    """The parts of an auth provider user the studio reads."""

    id: str
    email: str
    confirmed_at: datetime | None = None
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthSession:
    """An authenticated session issued by the auth provider."""

    access_token: str
    user: AuthUser
    refresh_token: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """Public profile of a studio user."""

    id: str
    email: str
    username: str
    full_name: str
    chef_name: str
    bio: str = ""
    avatar_url: str = ""
    tier: PlanTier = PlanTier.FREE
    is_verified: bool = False
    auto_renew: bool = True
    deletion_requested_at: datetime | None = None


@dataclass(frozen=True)
class PromoCode:
    """Promotional code granting a plan at sign-up."""

    code: str
    plan_to_grant: PlanTier
    current_uses: int
    max_uses: int

    @property
    def exhausted(self) -> bool:
        """Return whether the code has no uses left."""
        return self.current_uses >= self.max_uses


@dataclass(frozen=True)
class ProfileRecord:
    """Row of the profiles table; blank columns are None."""

    id: str
    username: str | None = None
    full_name: str | None = None
    chef_name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    tier: str | None = None
    deletion_requested_at: datetime | None = None
