"""Questions with answer options, scoring and answer validation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow
from nisfix.errors import InvalidAnswerFormatError, InvalidOptionIDError


class QuestionType(JsonEnum):
    """Kind of question."""

    SINGLE_CHOICE = "SINGLE_CHOICE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    TEXT = "TEXT"
    YES_NO = "YES_NO"

    def requires_options(self) -> bool:
        """Return True if questions of this type must define options."""
        return self in (QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE)

    def is_choice_type(self) -> bool:
        """Return True if questions of this type are answered by choosing options."""
        return self in (
            QuestionType.SINGLE_CHOICE,
            QuestionType.MULTIPLE_CHOICE,
            QuestionType.YES_NO,
        )


@dataclass
class QuestionOption:
    """An answer option of a choice-based question."""

    id: str = ""
    text: str = ""
    points: int = 0
    is_correct: bool = False
    order: int = 0


@dataclass
class Question:
    """A single question of a questionnaire."""

    id: ObjectId | None = None
    questionnaire_id: ObjectId | None = None
    topic_id: str = ""
    text: str = ""
    description: str = ""
    help_text: str = ""
    type: QuestionType | None = None
    order: int = 0
    weight: int = 0
    max_points: int = 0
    is_must_pass: bool = False
    options: list[QuestionOption] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "questions"

    def before_create(self) -> None:
        """Assign an id, timestamps and scoring defaults for a new document."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        if self.weight == 0:
            self.weight = 1
        if self.options is None:
            self.options = []
        if self.max_points == 0:
            self.max_points = self._calculate_max_points()

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def _calculate_max_points(self) -> int:
        if not self.options:
            return 1
        if self.type in (QuestionType.SINGLE_CHOICE, QuestionType.YES_NO):
            max_points = max(0, max(opt.points for opt in self.options))
        elif self.type == QuestionType.MULTIPLE_CHOICE:
            max_points = sum(
                opt.points for opt in self.options if opt.is_correct and opt.points > 0
            )
        else:
            max_points = 0
        return max_points or 1

    def recalculate_max_points(self) -> None:
        self.max_points = self._calculate_max_points()
        self.updated_at = utcnow()

    def get_option_by_id(self, option_id: str) -> QuestionOption | None:
        return next((opt for opt in self.options if opt.id == option_id), None)

    def add_option(self, option: QuestionOption) -> None:
        """Append a copy of option, numbering it if it has no order."""
        if option.order == 0:
            option = replace(option, order=len(self.options) + 1)
        else:
            option = replace(option)
        self.options.append(option)
        self.max_points = self._calculate_max_points()
        self.updated_at = utcnow()

    def option_count(self) -> int:
        return len(self.options)

    def has_options(self) -> bool:
        return bool(self.options)

    def is_text_question(self) -> bool:
        return self.type == QuestionType.TEXT

    def is_choice_question(self) -> bool:
        return self.type is not None and self.type.is_choice_type()

    def is_single_choice(self) -> bool:
        return self.type == QuestionType.SINGLE_CHOICE

    def is_multiple_choice(self) -> bool:
        return self.type == QuestionType.MULTIPLE_CHOICE

    def is_yes_no(self) -> bool:
        return self.type == QuestionType.YES_NO

    def weighted_max_points(self) -> int:
        return self.max_points * self.weight

    def calculate_score(self, selected_option_ids: Iterable[str]) -> int:
        """Return the points earned by the selected options."""
        selected = list(selected_option_ids or [])
        if not selected:
            return 0
        if self.type in (QuestionType.SINGLE_CHOICE, QuestionType.YES_NO):
            if len(selected) == 1:
                option = self.get_option_by_id(selected[0])
                if option is not None:
                    return option.points
            return 0
        if self.type == QuestionType.MULTIPLE_CHOICE:
            chosen = set(selected)
            return sum(
                opt.points for opt in self.options if opt.id in chosen and opt.is_correct
            )
        return 0

    def validate_answer(self, selected_option_ids: Iterable[str], text_answer: str) -> None:
        """Raise if the answer does not fit this question's type."""
        selected = list(selected_option_ids or [])
        if self.type in (QuestionType.SINGLE_CHOICE, QuestionType.YES_NO):
            if len(selected) != 1:
                raise InvalidAnswerFormatError()
            if self.get_option_by_id(selected[0]) is None:
                raise InvalidOptionIDError()
        elif self.type == QuestionType.MULTIPLE_CHOICE:
            if not selected:
                raise InvalidAnswerFormatError()
            if any(self.get_option_by_id(option_id) is None for option_id in selected):
                raise InvalidOptionIDError()
        elif self.type == QuestionType.TEXT:
            if not text_answer:
                raise InvalidAnswerFormatError()