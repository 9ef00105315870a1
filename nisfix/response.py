"""Supplier responses to requirements."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from bson import ObjectId

from nisfix.base import utcnow


@dataclass
class DraftAnswer:
    """A saved, not yet submitted answer to one question."""

    question_id: ObjectId | None = None
    selected_options: list[str] = field(default_factory=list)
    text_answer: str = ""
    saved_at: datetime | None = None


@dataclass
class SupplierResponse:
    """A supplier's response to a requirement.

    Either a questionnaire submission or a CheckFix verification is linked,
    depending on the requirement's type.
    """

    id: ObjectId | None = None
    requirement_id: ObjectId | None = None
    supplier_id: ObjectId | None = None
    submission_id: ObjectId | None = None
    verification_id: ObjectId | None = None
    score: int | None = None
    max_score: int | None = None
    passed: bool | None = None
    grade: str | None = None
    draft_answers: list[DraftAnswer] = field(default_factory=list)
    reviewed_by_user_id: ObjectId | None = None
    reviewed_at: datetime | None = None
    review_notes: str = ""
    started_at: datetime | None = None
    submitted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "supplier_responses"

    def before_create(self) -> None:
        """Assign an id and timestamps for a new document."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        self.started_at = now
        if self.draft_answers is None:
            self.draft_answers = []

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def submit(self) -> None:
        now = utcnow()
        self.submitted_at = now
        self.updated_at = now

    def set_submission(
        self, submission_id: ObjectId, score: int, max_score: int, passed: bool
    ) -> None:
        """Link a questionnaire submission and copy its result."""
        self.submission_id = submission_id
        self.score = score
        self.max_score = max_score
        self.passed = passed
        self.updated_at = utcnow()

    def set_verification(self, verification_id: ObjectId, grade: str, passed: bool) -> None:
        """Link a CheckFix verification and copy its result."""
        self.verification_id = verification_id
        self.grade = grade
        self.passed = passed
        self.updated_at = utcnow()

    def mark_reviewed(self, reviewer_id: ObjectId, notes: str) -> None:
        now = utcnow()
        self.reviewed_by_user_id = reviewer_id
        self.reviewed_at = now
        self.review_notes = notes
        self.updated_at = now

    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    def is_reviewed(self) -> bool:
        return self.reviewed_at is not None

    def has_submission(self) -> bool:
        return self.submission_id is not None

    def has_verification(self) -> bool:
        return self.verification_id is not None

    def has_passed(self) -> bool:
        return self.passed is True

    def get_score_percentage(self) -> float:
        """Return score as a percentage of max_score, or 0 when unknown."""
        if self.score is None or not self.max_score:
            return 0.0
        return self.score / self.max_score * 100

    def save_draft_answer(self, answer: DraftAnswer) -> None:
        """Store a copy of answer, replacing any earlier draft for the same question."""
        now = utcnow()
        answer = replace(answer, saved_at=now)
        for index, existing in enumerate(self.draft_answers):
            if existing.question_id == answer.question_id:
                self.draft_answers[index] = answer
                break
        else:
            self.draft_answers.append(answer)
        self.updated_at = now

    def get_draft_answer(self, question_id: ObjectId) -> DraftAnswer | None:
        return next((a for a in self.draft_answers if a.question_id == question_id), None)

    def clear_draft_answers(self) -> None:
        self.draft_answers = []
        self.updated_at = utcnow()

    def draft_answer_count(self) -> int:
        return len(self.draft_answers)

    def completion_time_minutes(self) -> int:
        """Return whole minutes from start to submission, or 0 if not submitted."""
        if self.submitted_at is None or self.started_at is None:
            return 0
        return int((self.submitted_at - self.started_at).total_seconds() / 60)