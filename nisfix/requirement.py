"""Requirements that a company assigns to a supplier, and their lifecycle."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow
from nisfix.errors import InvalidStatusTransitionError


class RequirementType(JsonEnum):
    """What the supplier must provide to meet a requirement."""

    QUESTIONNAIRE = "QUESTIONNAIRE"
    CHECKFIX = "CHECKFIX"


class RequirementStatus(JsonEnum):
    """State of a requirement."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"

    def is_terminal(self) -> bool:
        """Return True for states that allow no further transitions."""
        return self in (RequirementStatus.APPROVED, RequirementStatus.EXPIRED)

    def can_transition_to(self, target: RequirementStatus) -> bool:
        """Return True if moving from this status to target is allowed.

        PENDING -> IN_PROGRESS | EXPIRED
        IN_PROGRESS -> SUBMITTED | EXPIRED
        SUBMITTED -> APPROVED | REJECTED | UNDER_REVIEW
        UNDER_REVIEW -> SUBMITTED
        REJECTED -> IN_PROGRESS
        APPROVED and EXPIRED are terminal.
        """
        return target in _TRANSITIONS.get(self, frozenset())


_TRANSITIONS: dict[RequirementStatus, frozenset[RequirementStatus]] = {
    RequirementStatus.PENDING: frozenset(
        {RequirementStatus.IN_PROGRESS, RequirementStatus.EXPIRED}
    ),
    RequirementStatus.IN_PROGRESS: frozenset(
        {RequirementStatus.SUBMITTED, RequirementStatus.EXPIRED}
    ),
    RequirementStatus.SUBMITTED: frozenset(
        {
            RequirementStatus.APPROVED,
            RequirementStatus.REJECTED,
            RequirementStatus.UNDER_REVIEW,
        }
    ),
    RequirementStatus.UNDER_REVIEW: frozenset({RequirementStatus.SUBMITTED}),
    RequirementStatus.REJECTED: frozenset({RequirementStatus.IN_PROGRESS}),
    RequirementStatus.APPROVED: frozenset(),
    RequirementStatus.EXPIRED: frozenset(),
}


class Priority(JsonEnum):
    """Priority level of a requirement."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class RequirementStatusChange:
    """One entry in a requirement's status history."""

    from_status: RequirementStatus | None = None
    to_status: RequirementStatus | None = None
    changed_by: ObjectId | None = None
    reason: str = ""
    changed_at: datetime | None = None


@dataclass
class Requirement:
    """A requirement a company assigns to a supplier within a relationship."""

    id: ObjectId | None = None
    relationship_id: ObjectId | None = None
    company_id: ObjectId | None = None
    supplier_id: ObjectId | None = None
    type: RequirementType | None = None
    title: str = ""
    description: str = ""
    priority: Priority | None = None
    questionnaire_id: ObjectId | None = None
    passing_score: int | None = None
    minimum_grade: str | None = None
    max_report_age_days: int | None = None
    due_date: datetime | None = None
    reminder_sent_at: datetime | None = None
    status: RequirementStatus | None = None
    status_history: list[RequirementStatusChange] = field(default_factory=list)
    assigned_by_user_id: ObjectId | None = None
    assigned_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "requirements"

    def before_create(self) -> None:
        """Assign an id and timestamps; new requirements start as pending."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        self.assigned_at = now
        self.status = RequirementStatus.PENDING
        self.status_history = [
            RequirementStatusChange(
                from_status=None,
                to_status=RequirementStatus.PENDING,
                changed_by=self.assigned_by_user_id,
                reason="Requirement assigned",
                changed_at=now,
            )
        ]
        if self.priority is None:
            self.priority = Priority.MEDIUM

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def transition_status(
        self, new_status: RequirementStatus, changed_by: ObjectId, reason: str
    ) -> None:
        """Move to new_status, recording the change; raise if not allowed."""
        if self.status is None or not self.status.can_transition_to(new_status):
            raise InvalidStatusTransitionError()
        now = utcnow()
        self.status_history.append(
            RequirementStatusChange(
                from_status=self.status,
                to_status=new_status,
                changed_by=changed_by,
                reason=reason,
                changed_at=now,
            )
        )
        self.status = new_status
        self.updated_at = now

    def start(self, changed_by: ObjectId) -> None:
        self.transition_status(RequirementStatus.IN_PROGRESS, changed_by, "Response started")

    def submit(self, changed_by: ObjectId) -> None:
        self.transition_status(RequirementStatus.SUBMITTED, changed_by, "Response submitted")

    def approve(self, changed_by: ObjectId, reason: str) -> None:
        self.transition_status(RequirementStatus.APPROVED, changed_by, reason)

    def reject(self, changed_by: ObjectId, reason: str) -> None:
        self.transition_status(RequirementStatus.REJECTED, changed_by, reason)

    def request_revision(self, changed_by: ObjectId, reason: str) -> None:
        self.transition_status(RequirementStatus.UNDER_REVIEW, changed_by, reason)

    def expire(self) -> None:
        """Expire a pending or in-progress requirement; raise otherwise."""
        if self.status not in (RequirementStatus.PENDING, RequirementStatus.IN_PROGRESS):
            raise InvalidStatusTransitionError()
        self.status = RequirementStatus.EXPIRED
        self.updated_at = utcnow()

    def retry(self, changed_by: ObjectId) -> None:
        self.transition_status(
            RequirementStatus.IN_PROGRESS, changed_by, "Retrying after rejection"
        )

    def resubmit(self, changed_by: ObjectId) -> None:
        self.transition_status(
            RequirementStatus.SUBMITTED, changed_by, "Resubmitted after revision"
        )

    def is_pending(self) -> bool:
        return self.status == RequirementStatus.PENDING

    def is_in_progress(self) -> bool:
        return self.status == RequirementStatus.IN_PROGRESS

    def is_submitted(self) -> bool:
        return self.status == RequirementStatus.SUBMITTED

    def is_approved(self) -> bool:
        return self.status == RequirementStatus.APPROVED

    def is_rejected(self) -> bool:
        return self.status == RequirementStatus.REJECTED

    def is_expired(self) -> bool:
        return self.status == RequirementStatus.EXPIRED

    def is_under_review(self) -> bool:
        return self.status == RequirementStatus.UNDER_REVIEW

    def is_questionnaire_requirement(self) -> bool:
        return self.type == RequirementType.QUESTIONNAIRE

    def is_checkfix_requirement(self) -> bool:
        return self.type == RequirementType.CHECKFIX

    def _status_is_terminal(self) -> bool:
        return self.status is not None and self.status.is_terminal()

    def is_overdue(self) -> bool:
        """Return True if the due date has passed and the requirement is still open."""
        if self.due_date is None:
            return False
        return utcnow() > self.due_date and not self._status_is_terminal()

    def days_until_due(self) -> int:
        """Return whole days until the due date (truncated), or -1 without one."""
        if self.due_date is None:
            return -1
        hours = (self.due_date - utcnow()).total_seconds() / 3600
        return int(hours / 24)

    def needs_reminder(self, reminder_days_before: int) -> bool:
        """Return True if a due-date reminder should be sent now."""
        if self.due_date is None or self.reminder_sent_at is not None:
            return False
        if self._status_is_terminal() or self.status == RequirementStatus.SUBMITTED:
            return False
        return self.days_until_due() <= reminder_days_before

    def mark_reminder_sent(self) -> None:
        now = utcnow()
        self.reminder_sent_at = now
        self.updated_at = now

    def can_start_response(self) -> bool:
        return self.is_pending()

    def can_be_submitted(self) -> bool:
        return self.is_in_progress()

    def can_be_reviewed(self) -> bool:
        return self.is_submitted()

    def last_status_change(self) -> RequirementStatusChange | None:
        return self.status_history[-1] if self.status_history else None