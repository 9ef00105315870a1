"""Append-only audit trail entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow


class AuditAction(JsonEnum):
    """Kind of action recorded in an audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    SUBMIT = "SUBMIT"
    INVITE = "INVITE"
    ACCEPT = "ACCEPT"
    DECLINE = "DECLINE"
    SUSPEND = "SUSPEND"
    ACTIVATE = "ACTIVATE"
    VERIFY = "VERIFY"
    PUBLISH = "PUBLISH"
    ARCHIVE = "ARCHIVE"


class ResourceType(str, Enum):
    """Names of the resources an audit log can refer to."""

    ORGANIZATION = "organization"
    USER = "user"
    QUESTIONNAIRE = "questionnaire"
    QUESTION = "question"
    TEMPLATE = "template"
    RELATIONSHIP = "relationship"
    REQUIREMENT = "requirement"
    RESPONSE = "response"
    SUBMISSION = "submission"
    VERIFICATION = "verification"
    SECURE_LINK = "secure_link"


@dataclass
class AuditLog:
    """One entry of the activity audit trail."""

    id: ObjectId | None = None
    actor_user_id: ObjectId | None = None
    actor_email: str = ""
    actor_org_id: ObjectId | None = None
    action: AuditAction | None = None
    resource_type: str = ""
    resource_id: ObjectId | None = None
    description: str = ""
    changes: dict[str, Any] = field(default_factory=dict)
    ip_address: str = ""
    user_agent: str = ""
    request_id: str = ""
    created_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "audit_logs"

    def before_create(self) -> None:
        """Assign an id and creation time."""
        if self.id is None:
            self.id = ObjectId()
        self.created_at = utcnow()
        if self.changes is None:
            self.changes = {}

    def set_actor(
        self, user_id: ObjectId | None, email: str, org_id: ObjectId | None
    ) -> AuditLog:
        self.actor_user_id = user_id
        self.actor_email = email
        self.actor_org_id = org_id
        return self

    def set_request_info(self, ip_address: str, user_agent: str, request_id: str) -> AuditLog:
        self.ip_address = ip_address
        self.user_agent = user_agent
        self.request_id = request_id
        return self

    def add_change(self, field: str, before: Any, after: Any) -> AuditLog:
        """Record a before/after pair for field."""
        if self.changes is None:
            self.changes = {}
        self.changes[field] = {"before": before, "after": after}
        return self

    def add_changes(self, changes: Mapping[str, Any]) -> AuditLog:
        if self.changes is None:
            self.changes = {}
        self.changes.update(changes)
        return self

    def has_changes(self) -> bool:
        return bool(self.changes)

    def is_auth_action(self) -> bool:
        return self.action in (AuditAction.LOGIN, AuditAction.LOGOUT)

    def is_modification_action(self) -> bool:
        return self.action in (AuditAction.CREATE, AuditAction.UPDATE, AuditAction.DELETE)


def new_audit_log(
    action: AuditAction, resource_type: str, resource_id: ObjectId, description: str
) -> AuditLog:
    """Create an audit log entry ready to be stored."""
    log = AuditLog(
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        description=description,
    )
    log.before_create()
    return log


class AuditLogBuilder:
    """Fluent construction of audit log entries."""

    def __init__(self) -> None:
        self._log = AuditLog()

    def action(self, action: AuditAction) -> AuditLogBuilder:
        self._log.action = action
        return self

    def resource(self, resource_type: str, resource_id: ObjectId) -> AuditLogBuilder:
        self._log.resource_type = resource_type
        self._log.resource_id = resource_id
        return self

    def description(self, description: str) -> AuditLogBuilder:
        self._log.description = description
        return self

    def actor(
        self, user_id: ObjectId | None, email: str, org_id: ObjectId | None
    ) -> AuditLogBuilder:
        self._log.set_actor(user_id, email, org_id)
        return self

    def request_info(self, ip_address: str, user_agent: str, request_id: str) -> AuditLogBuilder:
        self._log.set_request_info(ip_address, user_agent, request_id)
        return self

    def change(self, field: str, before: Any, after: Any) -> AuditLogBuilder:
        self._log.add_change(field, before, after)
        return self

    def changes(self, changes: Mapping[str, Any]) -> AuditLogBuilder:
        self._log.add_changes(changes)
        return self

    def build(self) -> AuditLog:
        """Finish the entry, assigning its id and creation time."""
        self._log.before_create()
        return self._log