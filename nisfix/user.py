"""User accounts with role-based access within an organization."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow


class UserRole(JsonEnum):
    """Role of a user within an organization."""

    ADMIN = "ADMIN"
    VIEWER = "VIEWER"


@dataclass
class User:
    """A user belonging to exactly one organization."""

    id: ObjectId | None = None
    email: str = ""
    name: str = ""
    organization_id: ObjectId | None = None
    role: UserRole | None = None
    is_active: bool = False
    last_login_at: datetime | None = None
    language: str = ""
    timezone: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "users"

    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def before_create(self) -> None:
        """Assign an id, timestamps and defaults for a new document."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        self.is_active = True
        if not self.language:
            self.language = "en"

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def soft_delete(self) -> None:
        """Mark the user as deleted and inactive."""
        now = utcnow()
        self.deleted_at = now
        self.updated_at = now
        self.is_active = False

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_viewer(self) -> bool:
        return self.role == UserRole.VIEWER

    def update_last_login(self) -> None:
        now = utcnow()
        self.last_login_at = now
        self.updated_at = now

    def _is_active_admin(self) -> bool:
        return self.is_admin() and self.is_active and not self.is_deleted()

    def can_manage_organization(self) -> bool:
        return self._is_active_admin()

    def can_invite_suppliers(self) -> bool:
        return self._is_active_admin()

    def can_create_requirements(self) -> bool:
        return self._is_active_admin()

    def can_review_responses(self) -> bool:
        return self._is_active_admin()