"""Questionnaire submissions with calculated scores."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from bson import ObjectId

from nisfix.base import utcnow


@dataclass
class SubmissionAnswer:
    """A single answer in a submission."""

    question_id: ObjectId | None = None
    selected_options: list[str] = field(default_factory=list)
    text_answer: str = ""
    points_earned: int = 0
    max_points: int = 0
    is_must_pass_met: bool | None = None


@dataclass
class TopicScore:
    """Score reached within one topic."""

    topic_id: str = ""
    topic_name: str = ""
    score: int = 0
    max_score: int = 0
    percentage_score: float = 0.0


def _must_pass_failed(answer: SubmissionAnswer) -> bool:
    return answer.is_must_pass_met is False


@dataclass
class QuestionnaireSubmission:
    """All answers of a questionnaire response and their scores."""

    id: ObjectId | None = None
    response_id: ObjectId | None = None
    questionnaire_id: ObjectId | None = None
    supplier_id: ObjectId | None = None
    answers: list[SubmissionAnswer] = field(default_factory=list)
    total_score: int = 0
    max_possible_score: int = 0
    percentage_score: float = 0.0
    passed: bool = False
    must_pass_failed: bool = False
    topic_scores: list[TopicScore] = field(default_factory=list)
    completion_time_minutes: int = 0
    started_at: datetime | None = None
    submitted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "questionnaire_submissions"

    def before_create(self) -> None:
        """Assign an id and timestamps for a new document."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        if self.answers is None:
            self.answers = []
        if self.topic_scores is None:
            self.topic_scores = []

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def submit(self) -> None:
        now = utcnow()
        self.submitted_at = now
        self.updated_at = now

    def calculate_scores(self, passing_score: int) -> None:
        """Total the answers and decide whether the submission passed.

        A failed must-pass question fails the submission regardless of score.
        """
        self.total_score = sum(answer.points_earned for answer in self.answers)
        self.max_possible_score = sum(answer.max_points for answer in self.answers)
        self.must_pass_failed = any(_must_pass_failed(a) for a in self.answers)
        if self.max_possible_score > 0:
            self.percentage_score = self.total_score / self.max_possible_score * 100
        self.passed = not self.must_pass_failed and self.percentage_score >= passing_score

    def add_answer(self, answer: SubmissionAnswer) -> None:
        self.answers.append(answer)
        self.updated_at = utcnow()

    def get_answer(self, question_id: ObjectId) -> SubmissionAnswer | None:
        return next((a for a in self.answers if a.question_id == question_id), None)

    def add_topic_score(self, score: TopicScore) -> None:
        """Append a copy of score with its percentage filled in."""
        score = replace(score)
        if score.max_score > 0:
            score.percentage_score = score.score / score.max_score * 100
        self.topic_scores.append(score)
        self.updated_at = utcnow()

    def get_topic_score(self, topic_id: str) -> TopicScore | None:
        return next((s for s in self.topic_scores if s.topic_id == topic_id), None)

    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    def answer_count(self) -> int:
        return len(self.answers)

    def has_passed_all_must_pass(self) -> bool:
        return not self.must_pass_failed

    def get_failed_must_pass_count(self) -> int:
        return sum(1 for answer in self.answers if _must_pass_failed(answer))

    def get_weakest_topics(self, limit: int) -> list[TopicScore]:
        """Return up to limit topics, lowest percentage first (ties keep order)."""
        if limit < 0:
            raise ValueError("limit must not be negative")
        ordered = sorted(self.topic_scores, key=lambda s: s.percentage_score)
        return ordered[:limit]