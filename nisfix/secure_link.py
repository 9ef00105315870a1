"""Magic-link tokens for passwordless sign-in and supplier invitations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow

AUTH_LINK_EXPIRY = timedelta(minutes=15)
INVITATION_LINK_EXPIRY = timedelta(days=7)

# A link without an expiry time counts as having expired long ago.
_NEVER = datetime.min.replace(tzinfo=timezone.utc)


class SecureLinkType(JsonEnum):
    """Purpose of a secure link."""

    AUTH = "AUTH"
    INVITATION = "INVITATION"


_EXPIRY_BY_TYPE: dict[SecureLinkType, timedelta] = {
    SecureLinkType.AUTH: AUTH_LINK_EXPIRY,
    SecureLinkType.INVITATION: INVITATION_LINK_EXPIRY,
}


@dataclass
class SecureLink:
    """A single-use link identified by a random secure identifier."""

    id: ObjectId | None = None
    secure_identifier: str = ""
    type: SecureLinkType | None = None
    email: str = ""
    user_id: ObjectId | None = None
    relationship_id: ObjectId | None = None
    expires_at: datetime | None = None
    used_at: datetime | None = None
    is_valid: bool = False
    ip_address: str = ""
    user_agent: str = ""
    created_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "secure_links"

    def before_create(self) -> None:
        """Assign an id, mark valid and set the expiry from the link type if unset."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.is_valid = True
        if self.expires_at is None:
            self.expires_at = now + _EXPIRY_BY_TYPE.get(self.type, AUTH_LINK_EXPIRY)

    def _expiry(self) -> datetime:
        return self.expires_at if self.expires_at is not None else _NEVER

    def is_expired(self) -> bool:
        return utcnow() > self._expiry()

    def is_used(self) -> bool:
        return self.used_at is not None

    def can_be_used(self) -> bool:
        return self.is_valid and not self.is_expired() and not self.is_used()

    def mark_as_used(self) -> None:
        self.used_at = utcnow()
        self.is_valid = False

    def invalidate(self) -> None:
        """Make the link unusable without recording a use."""
        self.is_valid = False

    def is_auth_link(self) -> bool:
        return self.type == SecureLinkType.AUTH

    def is_invitation_link(self) -> bool:
        return self.type == SecureLinkType.INVITATION

    def time_until_expiry(self) -> timedelta:
        return self._expiry() - utcnow()