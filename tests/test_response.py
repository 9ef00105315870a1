from datetime import timedelta

import pytest
from bson import ObjectId

from nisfix.response import DraftAnswer, SupplierResponse


@pytest.fixture
def response():
    resp = SupplierResponse(requirement_id=ObjectId(), supplier_id=ObjectId())
    resp.before_create()
    return resp


def test_collection_name():
    assert SupplierResponse.collection_name() == "supplier_responses"


def test_before_create(response):
    assert response.id is not None
    assert response.started_at == response.created_at == response.updated_at
    assert response.draft_answers == []
    assert not response.is_submitted()
    assert not response.is_reviewed()


def test_before_create_preserves_id():
    existing = ObjectId()
    resp = SupplierResponse(id=existing)
    resp.before_create()
    assert resp.id == existing


def test_submit(response):
    response.submit()
    assert response.is_submitted()
    assert response.submitted_at == response.updated_at


def test_set_submission(response):
    submission = ObjectId()
    response.set_submission(submission, 8, 8, True)
    assert response.has_submission()
    assert not response.has_verification()
    assert response.submission_id == submission
    assert response.score == 8
    assert response.max_score == 8
    assert response.has_passed()
    assert response.get_score_percentage() == 100.0


def test_set_verification(response):
    verification = ObjectId()
    response.set_verification(verification, "B", False)
    assert response.has_verification()
    assert not response.has_submission()
    assert response.grade == "B"
    assert response.has_passed() is False


def test_has_passed_unknown(response):
    assert response.has_passed() is False


@pytest.mark.parametrize(
    "score, max_score",
    [(None, None), (5, None), (None, 10), (5, 0)],
)
def test_score_percentage_without_data(score, max_score):
    resp = SupplierResponse(score=score, max_score=max_score)
    assert resp.get_score_percentage() == 0


def test_score_percentage_is_bounded(response):
    response.set_submission(ObjectId(), 3, 7, False)
    assert 0 < response.get_score_percentage() < 100


def test_mark_reviewed(response):
    reviewer = ObjectId()
    response.mark_reviewed(reviewer, "fine")
    assert response.is_reviewed()
    assert response.reviewed_by_user_id == reviewer
    assert response.review_notes == "fine"


def test_save_and_replace_draft_answer(response):
    question = ObjectId()
    response.save_draft_answer(DraftAnswer(question_id=question, selected_options=["a"]))
    assert response.draft_answer_count() == 1
    first = response.get_draft_answer(question)
    assert first.selected_options == ["a"]
    assert first.saved_at is not None

    response.save_draft_answer(DraftAnswer(question_id=question, text_answer="updated"))
    assert response.draft_answer_count() == 1
    assert response.get_draft_answer(question).text_answer == "updated"

    other = ObjectId()
    response.save_draft_answer(DraftAnswer(question_id=other))
    assert response.draft_answer_count() == 2
    assert response.get_draft_answer(other).question_id == other


def test_save_draft_answer_does_not_mutate_input(response):
    answer = DraftAnswer(question_id=ObjectId())
    response.save_draft_answer(answer)
    assert answer.saved_at is None


def test_get_missing_draft_answer(response):
    assert response.get_draft_answer(ObjectId()) is None


def test_clear_draft_answers(response):
    response.save_draft_answer(DraftAnswer(question_id=ObjectId()))
    response.clear_draft_answers()
    assert response.draft_answer_count() == 0
    assert response.draft_answers == []


def test_completion_time_not_submitted(response):
    assert response.completion_time_minutes() == 0


def test_completion_time_truncates(response):
    response.submitted_at = response.started_at + timedelta(minutes=42, seconds=30)
    assert response.completion_time_minutes() == 42