"""Organization documents: companies and suppliers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow


class OrganizationType(JsonEnum):
    """Kind of organization."""

    COMPANY = "COMPANY"
    SUPPLIER = "SUPPLIER"


@dataclass
class Address:
    """Physical address."""

    street: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = ""


@dataclass
class OrganizationSettings:
    """Organization-specific configuration."""

    default_due_days: int = 0
    require_checkfix: bool = False
    min_checkfix_grade: str = ""
    notification_emails: list[str] = field(default_factory=list)
    default_language: str = ""
    notifications_enabled: bool = False
    reminder_days_before: int = 0


def default_organization_settings() -> OrganizationSettings:
    """Return the settings a new organization starts with."""
    return OrganizationSettings(
        default_due_days=30,
        require_checkfix=False,
        min_checkfix_grade="C",
        notification_emails=[],
        default_language="en",
        notifications_enabled=True,
        reminder_days_before=7,
    )


@dataclass
class Organization:
    """A company or a supplier."""

    id: ObjectId | None = None
    type: OrganizationType | None = None
    name: str = ""
    slug: str = ""
    domain: str = ""
    description: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    address: Address | None = None
    checkfix_account_id: str = ""
    checkfix_linked_at: datetime | None = None
    settings: OrganizationSettings = field(default_factory=OrganizationSettings)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "organizations"

    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def before_create(self) -> None:
        """Assign an id, timestamps and default settings for a new document."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        if not self.settings.default_language:
            self.settings = default_organization_settings()

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def soft_delete(self) -> None:
        now = utcnow()
        self.deleted_at = now
        self.updated_at = now

    def is_company(self) -> bool:
        return self.type == OrganizationType.COMPANY

    def is_supplier(self) -> bool:
        return self.type == OrganizationType.SUPPLIER

    def has_checkfix_linked(self) -> bool:
        return bool(self.checkfix_account_id) and self.checkfix_linked_at is not None