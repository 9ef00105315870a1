"""Verified CheckFix report data for a supplier domain."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone

from bson import ObjectId

from nisfix.base import JsonEnum, utcnow

VERIFICATION_VALIDITY = timedelta(days=30)

# A missing timestamp counts as lying far in the past.
_DISTANT_PAST = datetime.min.replace(tzinfo=timezone.utc)


class CheckFixGrade(JsonEnum):
    """CheckFix security grade; there is no E grade."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    def to_json(self) -> str:
        """Grades are serialised as they are, in upper case."""
        return self.value

    def score(self) -> int:
        """Return a numeric score for the grade; higher is better."""
        return _GRADE_SCORES[self]

    def meets_minimum(self, minimum: CheckFixGrade) -> bool:
        """Return True if this grade is at least as good as minimum."""
        return self.score() >= minimum.score()

    def is_passing(self) -> bool:
        """Return True for C or better."""
        return self.meets_minimum(CheckFixGrade.C)


_GRADE_SCORES: dict[CheckFixGrade, int] = {
    CheckFixGrade.A: 5,
    CheckFixGrade.B: 4,
    CheckFixGrade.C: 3,
    CheckFixGrade.D: 2,
    CheckFixGrade.F: 1,
}


@dataclass
class CategoryGrade:
    """Grade for one security category."""

    category: str = ""
    grade: str = ""
    score: int = 0


@dataclass
class CheckFixVerification:
    """A cached verification of a supplier's CheckFix report."""

    id: ObjectId | None = None
    response_id: ObjectId | None = None
    supplier_id: ObjectId | None = None
    domain: str = ""
    verified_domain: str = ""
    domain_match: bool = False
    report_hash: str = ""
    report_date: datetime | None = None
    overall_grade: CheckFixGrade | None = None
    overall_score: int = 0
    category_grades: list[CategoryGrade] = field(default_factory=list)
    critical_findings: int = 0
    high_findings: int = 0
    medium_findings: int = 0
    low_findings: int = 0
    verified_at: datetime | None = None
    verification_valid: bool = False
    expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def collection_name(cls) -> str:
        return "checkfix_verifications"

    def before_create(self) -> None:
        """Assign an id and timestamps; set the expiry if it is not set yet."""
        now = utcnow()
        if self.id is None:
            self.id = ObjectId()
        self.created_at = now
        self.updated_at = now
        self.verified_at = now
        if self.expires_at is None:
            self.expires_at = now + VERIFICATION_VALIDITY
        if self.category_grades is None:
            self.category_grades = []

    def before_update(self) -> None:
        self.updated_at = utcnow()

    def _expiry(self) -> datetime:
        return self.expires_at if self.expires_at is not None else _DISTANT_PAST

    def is_expired(self) -> bool:
        return utcnow() > self._expiry()

    def is_valid(self) -> bool:
        """Return True if verified, unexpired and the domain matched."""
        return self.verification_valid and not self.is_expired() and self.domain_match

    def meets_minimum_grade(self, minimum: CheckFixGrade) -> bool:
        if self.overall_grade is None:
            return False
        return self.overall_grade.meets_minimum(minimum)

    def total_findings(self) -> int:
        return (
            self.critical_findings
            + self.high_findings
            + self.medium_findings
            + self.low_findings
        )

    def has_critical_findings(self) -> bool:
        return self.critical_findings > 0

    def has_high_findings(self) -> bool:
        return self.high_findings > 0

    def get_category_grade(self, category: str) -> CategoryGrade | None:
        return next((g for g in self.category_grades if g.category == category), None)

    def add_category_grade(self, grade: CategoryGrade) -> None:
        self.category_grades.append(replace(grade))
        self.updated_at = utcnow()

    def days_until_expiry(self) -> int:
        """Return whole days until expiry, truncated toward zero."""
        hours = (self._expiry() - utcnow()).total_seconds() / 3600
        return int(hours / 24)

    def needs_refresh(self, days_before_expiry: int) -> bool:
        """Return True if expired or expiring within days_before_expiry days."""
        return self.is_expired() or self.days_until_expiry() <= days_before_expiry

    def refresh(self) -> None:
        """Extend the verification's validity from now."""
        now = utcnow()
        self.verified_at = now
        self.expires_at = now + VERIFICATION_VALIDITY
        self.updated_at = now

    def report_age_days(self) -> int:
        """Return the report's age in whole days."""
        report_date = self.report_date if self.report_date is not None else _DISTANT_PAST
        hours = (utcnow() - report_date).total_seconds() / 3600
        return int(hours / 24)

    def is_report_too_old(self, max_age_days: int) -> bool:
        return self.report_age_days() > max_age_days

    def passes_requirement(
        self, minimum_grade: CheckFixGrade, max_report_age_days: int
    ) -> bool:
        """Check validity, grade and (if max_report_age_days > 0) report age."""
        if not self.is_valid():
            return False
        if not self.meets_minimum_grade(minimum_grade):
            return False
        if max_report_age_days > 0 and self.is_report_too_old(max_report_age_days):
            return False
        return True