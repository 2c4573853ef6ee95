"""Profile provisioning and editing."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from supabase import AuthError, PostgrestAPIError

from culinary_studio.domain.messages import ChefContact
from culinary_studio.domain.models import (
    AuthSession,
    AuthUser,
    PlanTier,
    ProfileRecord,
    UserProfile,
)
from culinary_studio.services.auth import AuthProvider
from culinary_studio.services.storage import (
    FileStorage,
    avatar_path,
    content_type_for,
)

logger = logging.getLogger(__name__)

DEFAULT_FULL_NAME = "Chef"
DEFAULT_CHEF_NAME = "Chef Studio"
EDITABLE_FIELDS = ("full_name", "chef_name", "bio", "avatar_url")


class ProfileRepository(Protocol):
    """Persistence interface for the profiles table."""

    def get_profile(self, user_id: str) -> ProfileRecord | None:
        """Return the profile row, if present."""

    def upsert_profile(self, payload: dict[str, object]) -> ProfileRecord | None:
        """Insert or replace a profile row keyed by id."""

    def update_profile(self, user_id: str, payload: dict[str, object]) -> None:
        """Update columns of a profile row."""

    def list_profiles(
        self, exclude_user_id: str | None = None
    ) -> list[ProfileRecord]:
        """Return profiles, optionally leaving one user out."""


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _tier(value: object) -> PlanTier:
    try:
        return PlanTier(value)
    except ValueError:
        return PlanTier.FREE


def provisional_profile(user: AuthUser) -> UserProfile:
    """Build a profile from the auth metadata alone."""
    meta = user.metadata
    local_part = user.email.split("@", 1)[0] if user.email else ""
    return UserProfile(
        id=user.id,
        email=user.email,
        username=_text(meta.get("username")) or local_part or f"chef_{user.id[:5]}",
        full_name=_text(meta.get("full_name")) or DEFAULT_FULL_NAME,
        chef_name=_text(meta.get("chef_name")) or DEFAULT_CHEF_NAME,
        bio=_text(meta.get("bio")),
        avatar_url=_text(meta.get("avatar_url")),
        tier=_tier(meta.get("tier")),
        is_verified=user.confirmed_at is not None,
    )


def merge_profile(profile: UserProfile, record: ProfileRecord) -> UserProfile:
    """Overlay the non-empty columns of a stored row."""
    return replace(
        profile,
        username=record.username or profile.username,
        full_name=record.full_name or profile.full_name,
        chef_name=record.chef_name or profile.chef_name,
        bio=record.bio or profile.bio,
        avatar_url=record.avatar_url or profile.avatar_url,
        tier=_tier(record.tier) if record.tier else profile.tier,
        deletion_requested_at=record.deletion_requested_at,
    )


@dataclass
class ProfileService:
    """Application service for user profiles."""

    repository: ProfileRepository
    auth: AuthProvider
    storage: FileStorage

    def sync_from_session(self, session: AuthSession) -> UserProfile:
        """Return the profile for the session user, creating the row when missing.

        Store failures fall back to the metadata-only profile.
        """
        user = session.user
        profile = provisional_profile(user)
        try:
            record = self.repository.get_profile(user.id)
            if record is None:
                record = self.repository.upsert_profile(
                    {
                        "id": user.id,
                        "username": profile.username,
                        "full_name": profile.full_name,
                        "chef_name": profile.chef_name,
                        "tier": profile.tier.value,
                    }
                )
        except (PostgrestAPIError, RuntimeError):
            logger.warning("Profile sync failed for %s, using metadata", user.id)
            return profile
        return merge_profile(profile, record) if record else profile

    def update_profile(
        self, profile: UserProfile, changes: dict[str, str]
    ) -> UserProfile:
        """Update editable fields, then mirror them into the auth metadata."""
        applied = {
            key: value for key, value in changes.items() if key in EDITABLE_FIELDS
        }
        self.repository.update_profile(
            profile.id,
            {"updated_at": datetime.now(tz=UTC).isoformat(), **applied},
        )
        updated = replace(profile, **applied)
        try:
            self.auth.update_metadata(
                profile.id,
                {name: getattr(updated, name) for name in EDITABLE_FIELDS},
            )
        except AuthError as exc:
            logger.warning("Metadata sync warning: %s", exc)
        return updated

    def upload_avatar(
        self, profile: UserProfile, filename: str, content: bytes
    ) -> UserProfile:
        """Store a new avatar and point the profile at it."""
        path = avatar_path(profile.id, filename)
        self.storage.upload(path, content, content_type_for(filename))
        return self.update_profile(
            profile, {"avatar_url": self.storage.public_url(path)}
        )

    def request_account_deletion(self, profile: UserProfile) -> UserProfile:
        """Record a deletion request; nothing is removed here."""
        requested_at = datetime.now(tz=UTC)
        self.repository.update_profile(
            profile.id, {"deletion_requested_at": requested_at.isoformat()}
        )
        logger.info("Account deletion requested by %s", profile.id)
        return replace(profile, deletion_requested_at=requested_at)

    def list_chefs(self, exclude_user_id: str) -> list[ChefContact]:
        """Return the other chefs a user can message."""
        return [
            ChefContact(
                id=record.id,
                chef_name=record.chef_name or DEFAULT_CHEF_NAME,
                full_name=record.full_name or DEFAULT_FULL_NAME,
                avatar_url=record.avatar_url,
            )
            for record in self.repository.list_profiles(exclude_user_id)
        ]
