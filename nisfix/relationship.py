"""Business relationships between companies and their suppliers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow
from nisfix.errors import InvalidStatusTransitionError


class RelationshipStatus(JsonEnum):
    """State of a company-supplier relationship."""

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    REJECTED = "REJECTED"
    SUSPENDED = "SUSPENDED"
    TERMINATED = "TERMINATED"

    def is_terminal(self) -> bool:
        """Return True for states that allow no further transitions."""
        return self in (RelationshipStatus.REJECTED, RelationshipStatus.TERMINATED)

    def can_transition_to(self, target: RelationshipStatus) -> bool:
        """Return True if moving from this status to target is allowed.

        PENDING -> ACTIVE | REJECTED
        ACTIVE -> SUSPENDED | TERMINATED
        SUSPENDED -> ACTIVE | TERMINATED
        REJECTED and TERMINATED are terminal.
        """
        return target in _TRANSITIONS.get(self, frozenset())


_TRANSITIONS: dict[RelationshipStatus, frozenset[RelationshipStatus]] = {
    RelationshipStatus.PENDING: frozenset(
        {RelationshipStatus.ACTIVE, RelationshipStatus.REJECTED}
    ),
    RelationshipStatus.ACTIVE: frozenset(
        {RelationshipStatus.SUSPENDED, RelationshipStatus.TERMINATED}
    ),
    RelationshipStatus.SUSPENDED: frozenset(
        {RelationshipStatus.ACTIVE, RelationshipStatus.TERMINATED}
    ),
    RelationshipStatus.REJECTED: frozenset(),
    RelationshipStatus.TERMINATED: frozenset(),
}


class SupplierClassification(JsonEnum):
    """Risk classification of a supplier."""

    CRITICAL = "CRITICAL"
    IMPORTANT = "IMPORTANT"
    STANDARD = "STANDARD"

    def priority(self) -> int:
        """Return the numeric priority; higher means more critical."""
        return _PRIORITIES[self]


_PRIORITIES: dict[SupplierClassification, int] = {
    SupplierClassification.CRITICAL: 3,
    SupplierClassification.IMPORTANT: 2,
    SupplierClassification.STANDARD: 1,
}


@dataclass
class StatusChange:
    """One entry in a relationship's status history."""

    from_status: RelationshipStatus | None = None
    to_status: RelationshipStatus | None = None
    changed_by: ObjectId | None = None
    reason: str = ""
    changed_at: datetime | None = None


@dataclass
class CompanySupplierRelationship:
    """The relationship between one company and one supplier."""

    id: ObjectId | None = None
    company_id: ObjectId | None = None
    supplier_id: ObjectId | None = None
    invited_email: str = ""
    invited_by_user_id: ObjectId | None = None
    invited_at: datetime | None = None
    status: RelationshipStatus | None = None
    status_history: list[StatusChange] = field(default_factory=list)
    classification: SupplierClassification | None = None
    notes: str = ""
    services_provided: list[str] = field(default_factory=list)
    contract_ref: str = ""
    accepted_at: datetime | None = None
    rejected_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "company_supplier_relationships"

    def before_create(self) -> None:
        """Assign an id and timestamps; new relationships start as pending invitations."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        self.invited_at = now
        self.status = RelationshipStatus.PENDING
        self.status_history = [
            StatusChange(
                from_status=None,
                to_status=RelationshipStatus.PENDING,
                changed_by=self.invited_by_user_id,
                reason="Invitation sent",
                changed_at=now,
            )
        ]
        if self.classification is None:
            self.classification = SupplierClassification.STANDARD
        if self.services_provided is None:
            self.services_provided = []

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def transition_status(
        self, new_status: RelationshipStatus, changed_by: ObjectId, reason: str
    ) -> None:
        """Move to new_status, recording the change; raise if not allowed."""
        if self.status is None or not self.status.can_transition_to(new_status):
            raise InvalidStatusTransitionError()
        now = utcnow()
        self.status_history.append(
            StatusChange(
                from_status=self.status,
                to_status=new_status,
                changed_by=changed_by,
                reason=reason,
                changed_at=now,
            )
        )
        self.status = new_status
        self.updated_at = now
        if new_status == RelationshipStatus.ACTIVE:
            self.accepted_at = now
        elif new_status == RelationshipStatus.REJECTED:
            self.rejected_at = now

    def accept(self, supplier_id: ObjectId, changed_by: ObjectId) -> None:
        """Accept the invitation on behalf of supplier_id."""
        self.supplier_id = supplier_id
        self.transition_status(RelationshipStatus.ACTIVE, changed_by, "Invitation accepted")

    def decline(self, changed_by: ObjectId, reason: str) -> None:
        self.transition_status(RelationshipStatus.REJECTED, changed_by, reason)

    def suspend(self, changed_by: ObjectId, reason: str) -> None:
        self.transition_status(RelationshipStatus.SUSPENDED, changed_by, reason)

    def reactivate(self, changed_by: ObjectId, reason: str) -> None:
        self.transition_status(RelationshipStatus.ACTIVE, changed_by, reason)

    def terminate(self, changed_by: ObjectId, reason: str) -> None:
        self.transition_status(RelationshipStatus.TERMINATED, changed_by, reason)

    def is_pending(self) -> bool:
        return self.status == RelationshipStatus.PENDING

    def is_active(self) -> bool:
        return self.status == RelationshipStatus.ACTIVE

    def is_suspended(self) -> bool:
        return self.status == RelationshipStatus.SUSPENDED

    def is_terminated(self) -> bool:
        return self.status == RelationshipStatus.TERMINATED

    def is_rejected(self) -> bool:
        return self.status == RelationshipStatus.REJECTED

    def has_supplier(self) -> bool:
        return self.supplier_id is not None

    def can_receive_requirements(self) -> bool:
        """Requirements may only go to active relationships with a known supplier."""
        return self.is_active() and self.has_supplier()

    def update_classification(self, classification: SupplierClassification) -> None:
        self.classification = classification
        self.updated_at = utcnow()

    def is_critical_supplier(self) -> bool:
        return self.classification == SupplierClassification.CRITICAL

    def last_status_change(self) -> StatusChange | None:
        return self.status_history[-1] if self.status_history else None