"""Pre-defined and company-created questionnaire templates."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow


class TemplateCategory(JsonEnum):
    """Category of a template; everything but CUSTOM is system-defined."""

    ISO27001 = "ISO27001"
    GDPR = "GDPR"
    NIS2 = "NIS2"
    CUSTOM = "CUSTOM"

    def is_system_category(self) -> bool:
        return self is not TemplateCategory.CUSTOM


class TemplateVisibility(JsonEnum):
    """Publishing scope: DRAFT (unpublished), LOCAL (owning org), GLOBAL (all orgs)."""

    DRAFT = "DRAFT"
    LOCAL = "LOCAL"
    GLOBAL = "GLOBAL"


@dataclass
class TemplateTopic:
    """A topic or section within a template."""

    id: str = ""
    name: str = ""
    description: str = ""
    order: int = 0


@dataclass
class QuestionnaireTemplate:
    """A reusable questionnaire template."""

    id: ObjectId | None = None
    name: str = ""
    description: str = ""
    category: TemplateCategory | None = None
    version: str = ""
    is_system: bool = False
    created_by_org_id: ObjectId | None = None
    created_by_user: ObjectId | None = None
    visibility: TemplateVisibility | None = None
    published_by: ObjectId | None = None
    default_passing_score: int = 0
    estimated_minutes: int = 0
    topics: list[TemplateTopic] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    usage_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    published_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "questionnaire_templates"

    def before_create(self) -> None:
        """Assign an id, timestamps and defaults; new templates start as drafts."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        self.usage_count = 0
        if self.default_passing_score == 0:
            self.default_passing_score = 70
        if self.estimated_minutes == 0:
            self.estimated_minutes = 30
        if not self.version:
            self.version = "1.0"
        if self.topics is None:
            self.topics = []
        if self.tags is None:
            self.tags = []
        if self.visibility is None:
            self.visibility = TemplateVisibility.DRAFT

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def publish(self, visibility: TemplateVisibility, publisher_id: ObjectId) -> None:
        """Publish the template with the given visibility."""
        now = utcnow()
        self.published_at = now
        self.updated_at = now
        self.visibility = visibility
        self.published_by = publisher_id

    def unpublish(self) -> None:
        """Revert the template to draft."""
        self.published_at = None
        self.published_by = None
        self.visibility = TemplateVisibility.DRAFT
        self.updated_at = utcnow()

    def is_published(self) -> bool:
        return self.visibility in (TemplateVisibility.LOCAL, TemplateVisibility.GLOBAL)

    def is_draft(self) -> bool:
        return self.visibility == TemplateVisibility.DRAFT

    def is_global(self) -> bool:
        return self.visibility == TemplateVisibility.GLOBAL

    def is_owned_by_user(self, user_id: ObjectId) -> bool:
        return self.created_by_user is not None and self.created_by_user == user_id

    def is_owned_by_org(self, org_id: ObjectId) -> bool:
        return self.created_by_org_id is not None and self.created_by_org_id == org_id

    def increment_usage(self) -> None:
        self.usage_count += 1
        self.updated_at = utcnow()

    def can_be_edited(self) -> bool:
        """Only custom templates still in draft can be edited."""
        return not self.is_system and self.is_draft()

    def can_be_deleted(self) -> bool:
        """Custom templates can be deleted while draft or unused."""
        return not self.is_system and (self.is_draft() or self.usage_count == 0)

    def can_be_unpublished(self) -> bool:
        """Published custom templates can be unpublished while unused."""
        return not self.is_system and self.is_published() and self.usage_count == 0

    def get_topic_by_id(self, topic_id: str) -> TemplateTopic | None:
        return next((topic for topic in self.topics if topic.id == topic_id), None)

    def add_topic(self, topic: TemplateTopic) -> None:
        """Append a copy of topic, numbering it if it has no order."""
        if topic.order == 0:
            topic = replace(topic, order=len(self.topics) + 1)
        else:
            topic = replace(topic)
        self.topics.append(topic)
        self.updated_at = utcnow()

    def topic_count(self) -> int:
        return len(self.topics)