"""Company-customised questionnaires and their lifecycle."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow
from nisfix.errors import InvalidStatusTransitionError


class QuestionnaireStatus(JsonEnum):
    """Lifecycle state: DRAFT -> PUBLISHED -> ARCHIVED."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class ScoringMode(JsonEnum):
    """How a questionnaire is scored."""

    PERCENTAGE = "PERCENTAGE"
    POINTS = "POINTS"


@dataclass
class QuestionnaireTopic:
    """A topic or section within a questionnaire."""

    id: str = ""
    name: str = ""
    description: str = ""
    order: int = 0


@dataclass
class Questionnaire:
    """A questionnaire owned by a company."""

    id: ObjectId | None = None
    company_id: ObjectId | None = None
    template_id: ObjectId | None = None
    name: str = ""
    description: str = ""
    status: QuestionnaireStatus | None = None
    version: int = 0
    passing_score: int = 0
    scoring_mode: ScoringMode | None = None
    topics: list[QuestionnaireTopic] = field(default_factory=list)
    question_count: int = 0
    max_possible_score: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    published_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "questionnaires"

    def before_create(self) -> None:
        """Assign an id, timestamps and defaults; new questionnaires start as drafts."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        self.status = QuestionnaireStatus.DRAFT
        self.version = 1
        if self.passing_score == 0:
            self.passing_score = 70
        if self.scoring_mode is None:
            self.scoring_mode = ScoringMode.PERCENTAGE
        if self.topics is None:
            self.topics = []

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def publish(self) -> None:
        """Publish a draft; raise InvalidStatusTransitionError otherwise."""
        if self.status != QuestionnaireStatus.DRAFT:
            raise InvalidStatusTransitionError()
        now = utcnow()
        self.status = QuestionnaireStatus.PUBLISHED
        self.published_at = now
        self.updated_at = now

    def archive(self) -> None:
        """Archive a published questionnaire; raise InvalidStatusTransitionError otherwise."""
        if self.status != QuestionnaireStatus.PUBLISHED:
            raise InvalidStatusTransitionError()
        self.status = QuestionnaireStatus.ARCHIVED
        self.updated_at = utcnow()

    def is_draft(self) -> bool:
        return self.status == QuestionnaireStatus.DRAFT

    def is_published(self) -> bool:
        return self.status == QuestionnaireStatus.PUBLISHED

    def is_archived(self) -> bool:
        return self.status == QuestionnaireStatus.ARCHIVED

    def can_be_edited(self) -> bool:
        return self.is_draft()

    def can_be_deleted(self) -> bool:
        return self.is_draft()

    def can_be_assigned(self) -> bool:
        return self.is_published()

    def get_topic_by_id(self, topic_id: str) -> QuestionnaireTopic | None:
        return next((topic for topic in self.topics if topic.id == topic_id), None)

    def add_topic(self, topic: QuestionnaireTopic) -> None:
        """Append a copy of topic, numbering it if it has no order."""
        if topic.order == 0:
            topic = replace(topic, order=len(self.topics) + 1)
        else:
            topic = replace(topic)
        self.topics.append(topic)
        self.updated_at = utcnow()

    def update_statistics(self, question_count: int, max_possible_score: int) -> None:
        self.question_count = question_count
        self.max_possible_score = max_possible_score
        self.updated_at = utcnow()

    def topic_count(self) -> int:
        return len(self.topics)

    def is_from_template(self) -> bool:
        return self.template_id is not None