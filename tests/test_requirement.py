import json
from datetime import timedelta

import pytest
from bson import ObjectId

from nisfix.base import utcnow
from nisfix.errors import InvalidStatusTransitionError
from nisfix.requirement import (
    Priority,
    Requirement,
    RequirementStatus,
    RequirementType,
)

S = RequirementStatus


def _created(user_id=None):
    user_id = user_id or ObjectId()
    req = Requirement(title="Test Requirement", assigned_by_user_id=user_id)
    req.before_create()
    return req, user_id


@pytest.mark.parametrize(
    "rt, expected",
    [
        (RequirementType.QUESTIONNAIRE, '"questionnaire"'),
        (RequirementType.CHECKFIX, '"checkfix"'),
    ],
)
def test_requirement_type_to_json(rt, expected):
    assert json.dumps(rt.to_json()) == expected


def test_requirement_type_from_json_round_trip():
    for member in RequirementType:
        assert RequirementType.from_json(member.to_json()) is member


@pytest.mark.parametrize(
    "value, expected",
    [("QUESTIONNAIRE", True), ("CHECKFIX", True), ("INVALID", False)],
)
def test_requirement_type_is_valid(value, expected):
    assert RequirementType.is_valid(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("PENDING", True),
        ("IN_PROGRESS", True),
        ("SUBMITTED", True),
        ("UNDER_REVIEW", True),
        ("APPROVED", True),
        ("REJECTED", True),
        ("EXPIRED", True),
        ("INVALID", False),
    ],
)
def test_requirement_status_is_valid(value, expected):
    assert RequirementStatus.is_valid(value) is expected


@pytest.mark.parametrize(
    "status, expected",
    [
        (S.APPROVED, True),
        (S.EXPIRED, True),
        (S.PENDING, False),
        (S.IN_PROGRESS, False),
        (S.SUBMITTED, False),
        (S.REJECTED, False),
    ],
)
def test_requirement_status_is_terminal(status, expected):
    assert status.is_terminal() is expected


@pytest.mark.parametrize(
    "src, dst, expected",
    [
        (S.PENDING, S.IN_PROGRESS, True),
        (S.PENDING, S.EXPIRED, True),
        (S.PENDING, S.SUBMITTED, False),
        (S.PENDING, S.APPROVED, False),
        (S.IN_PROGRESS, S.SUBMITTED, True),
        (S.IN_PROGRESS, S.EXPIRED, True),
        (S.IN_PROGRESS, S.APPROVED, False),
        (S.SUBMITTED, S.APPROVED, True),
        (S.SUBMITTED, S.REJECTED, True),
        (S.SUBMITTED, S.UNDER_REVIEW, True),
        (S.SUBMITTED, S.IN_PROGRESS, False),
        (S.UNDER_REVIEW, S.SUBMITTED, True),
        (S.UNDER_REVIEW, S.APPROVED, False),
        (S.REJECTED, S.IN_PROGRESS, True),
        (S.REJECTED, S.APPROVED, False),
        (S.APPROVED, S.REJECTED, False),
        (S.EXPIRED, S.PENDING, False),
    ],
)
def test_requirement_status_can_transition_to(src, dst, expected):
    assert src.can_transition_to(dst) is expected


@pytest.mark.parametrize(
    "value, expected",
    [("LOW", True), ("MEDIUM", True), ("HIGH", True), ("CRITICAL", False)],
)
def test_priority_is_valid(value, expected):
    assert Priority.is_valid(value) is expected


def test_before_create():
    req, user_id = _created()
    assert req.id is not None
    assert req.created_at is not None
    assert req.status == S.PENDING
    assert req.priority == Priority.MEDIUM
    assert len(req.status_history) == 1
    first = req.status_history[0]
    assert first.from_status is None
    assert first.to_status == S.PENDING
    assert first.changed_by == user_id
    assert first.reason == "Requirement assigned"


def test_before_create_keeps_priority_and_id():
    existing = ObjectId()
    req = Requirement(id=existing, priority=Priority.HIGH)
    req.before_create()
    assert req.id == existing
    assert req.priority == Priority.HIGH


def test_transition_status():
    req, user_id = _created()
    req.transition_status(S.IN_PROGRESS, user_id, "Started")
    assert req.status == S.IN_PROGRESS
    assert len(req.status_history) == 2
    with pytest.raises(InvalidStatusTransitionError):
        req.transition_status(S.APPROVED, user_id, "Trying to approve")
    assert req.status == S.IN_PROGRESS
    assert len(req.status_history) == 2


def test_transition_without_status_raises():
    req = Requirement()
    with pytest.raises(InvalidStatusTransitionError):
        req.start(ObjectId())


def test_start():
    req, user_id = _created()
    req.start(user_id)
    assert req.is_in_progress()


def test_submit():
    req, user_id = _created()
    req.start(user_id)
    req.submit(user_id)
    assert req.is_submitted()


def test_approve():
    req, user_id = _created()
    req.start(user_id)
    req.submit(user_id)
    req.approve(user_id, "Looks good")
    assert req.is_approved()
    assert req.last_status_change().reason == "Looks good"


def test_reject():
    req, user_id = _created()
    req.start(user_id)
    req.submit(user_id)
    req.reject(user_id, "Needs improvement")
    assert req.is_rejected()


def test_request_revision_and_resubmit():
    req, user_id = _created()
    req.start(user_id)
    req.submit(user_id)
    req.request_revision(user_id, "Please clarify")
    assert req.is_under_review()
    req.resubmit(user_id)
    assert req.is_submitted()
    assert req.last_status_change().reason == "Resubmitted after revision"


def test_retry():
    req, user_id = _created()
    req.start(user_id)
    req.submit(user_id)
    req.reject(user_id, "Rejected")
    req.retry(user_id)
    assert req.is_in_progress()


def test_expire_from_pending_and_in_progress():
    req, _ = _created()
    req.expire()
    assert req.is_expired()

    req2, user_id = _created()
    req2.start(user_id)
    req2.expire()
    assert req2.is_expired()


def test_expire_from_submitted_raises():
    req, user_id = _created()
    req.start(user_id)
    req.submit(user_id)
    with pytest.raises(InvalidStatusTransitionError):
        req.expire()
    assert req.is_submitted()


@pytest.mark.parametrize(
    "offset, status, expected",
    [
        (None, S.PENDING, False),
        (timedelta(hours=-24), S.PENDING, True),
        (timedelta(hours=24), S.PENDING, False),
        (timedelta(hours=-24), S.APPROVED, False),
    ],
)
def test_is_overdue(offset, status, expected):
    due = None if offset is None else utcnow() + offset
    req = Requirement(title="Test", due_date=due, status=status)
    assert req.is_overdue() is expected


@pytest.mark.parametrize(
    "offset, expected",
    [(None, -1), (timedelta(hours=3 * 24 + 1), 3)],
)
def test_days_until_due(offset, expected):
    due = None if offset is None else utcnow() + offset
    req = Requirement(title="Test", due_date=due)
    assert req.days_until_due() == expected


@pytest.mark.parametrize(
    "due_offset, reminder_sent, status, days_before, expected",
    [
        (None, False, S.PENDING, 7, False),
        (timedelta(days=1), True, S.PENDING, 7, False),
        (timedelta(days=1), False, S.APPROVED, 7, False),
        (timedelta(days=1), False, S.SUBMITTED, 7, False),
        (timedelta(days=7), False, S.PENDING, 7, True),
        (timedelta(days=7), False, S.PENDING, 3, False),
    ],
)
def test_needs_reminder(due_offset, reminder_sent, status, days_before, expected):
    now = utcnow()
    req = Requirement(
        title="Test",
        due_date=None if due_offset is None else now + due_offset,
        reminder_sent_at=now if reminder_sent else None,
        status=status,
    )
    assert req.needs_reminder(days_before) is expected


def test_mark_reminder_sent_stops_reminders():
    req = Requirement(due_date=utcnow() + timedelta(days=1), status=S.PENDING)
    assert req.needs_reminder(7) is True
    req.mark_reminder_sent()
    assert req.reminder_sent_at == req.updated_at
    assert req.needs_reminder(7) is False


def test_last_status_change():
    req, user_id = _created()
    req.start(user_id)
    last = req.last_status_change()
    assert last.to_status == S.IN_PROGRESS
    assert last.from_status == S.PENDING


def test_last_status_change_empty():
    assert Requirement().last_status_change() is None


def test_response_gates_follow_status():
    req, user_id = _created()
    assert (req.can_start_response(), req.can_be_submitted(), req.can_be_reviewed()) == (
        True,
        False,
        False,
    )
    req.start(user_id)
    assert (req.can_start_response(), req.can_be_submitted()) == (False, True)
    req.submit(user_id)
    assert req.can_be_reviewed() is True


def test_type_predicates():
    assert Requirement(type=RequirementType.QUESTIONNAIRE).is_questionnaire_requirement()
    assert not Requirement(type=RequirementType.QUESTIONNAIRE).is_checkfix_requirement()
    assert Requirement(type=RequirementType.CHECKFIX).is_checkfix_requirement()


def test_collection_name():
    assert Requirement.collection_name() == "requirements"