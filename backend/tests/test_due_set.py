import pytest

from quizzy_srs.models.quiz import Quiz
from quizzy_srs.services.due_set import build_due_set
from quizzy_srs.services.srs_engine import DAY_MS, SRSEngine

NOW = 1_760_000_000_000


def _tracked(quiz: Quiz, index: int, due_at: int, **overrides):
    record = SRSEngine.new_record(quiz.name, quiz.questions[index].question, now=due_at)
    return record.model_copy(update=overrides)


def test_unseen_corpus_fills_session(quizzes):
    result = build_due_set({}, quizzes, 10, NOW)
    assert len(result) == 10
    for item in result:
        assert item.srs_data.repetitions == 0
        assert item.srs_data.interval_days == 0
        assert item.srs_data.ease_factor == 2.5
        assert item.srs_data.next_review_due_at == NOW
    # Corpus order is kept among identical default due times
    assert [item.question for item in result[:5]] == [q.question for q in quizzes[0].questions]
    assert result[5].quiz_name == "Quiz 1"


@pytest.mark.parametrize("limit", [-3, 0, 1, 7, 15, 40])
def test_result_is_bounded(quizzes, limit):
    result = build_due_set({}, quizzes, limit, NOW)
    assert len(result) <= max(limit, 0)
    if limit <= 0:
        assert result == []


def test_empty_corpus():
    assert build_due_set({}, [], 10, NOW) == []
    assert build_due_set({}, [Quiz(name="Empty")], 10, NOW) == []


def test_due_reviews_come_before_unseen(quizzes):
    overdue = _tracked(quizzes[2], 4, NOW - 3 * DAY_MS, interval_days=1, repetitions=1)
    records = {overdue.question_id: overdue}
    result = build_due_set(records, quizzes, 3, NOW)
    assert result[0].question_id == overdue.question_id
    assert result[0].srs_data == overdue
    assert result[0].explanation == "Because 2.4"
    assert len(result) == 3


def test_most_overdue_first(quizzes):
    a = _tracked(quizzes[1], 0, NOW - 5 * DAY_MS)
    b = _tracked(quizzes[0], 0, NOW - 1 * DAY_MS)
    c = _tracked(quizzes[0], 1, NOW - 2 * DAY_MS)
    records = {r.question_id: r for r in (a, b, c)}
    result = build_due_set(records, quizzes, 3, NOW)
    assert [item.question_id for item in result] == [a.question_id, c.question_id, b.question_id]


def test_not_yet_due_questions_are_skipped(quizzes):
    future = _tracked(quizzes[0], 0, NOW + DAY_MS, interval_days=1, repetitions=1)
    records = {future.question_id: future}
    result = build_due_set(records, quizzes, 15, NOW)
    ids = [item.question_id for item in result]
    assert future.question_id not in ids
    assert len(result) == 14


def test_due_questions_may_exceed_then_truncate(quizzes):
    records = {}
    for quiz in quizzes:
        for i in range(5):
            record = _tracked(quiz, i, NOW - (i + 1) * DAY_MS)
            records[record.question_id] = record
    result = build_due_set(records, quizzes, 4, NOW)
    assert len(result) == 4
    assert all(item.srs_data.next_review_due_at <= NOW - 4 * DAY_MS for item in result)


def test_unseen_defaults_are_not_stored(quizzes):
    records = {}
    build_due_set(records, quizzes, 10, NOW)
    assert records == {}


def test_repeated_question_is_listed_once():
    question = {"question": "Same?", "answers": [{"answer": "yes"}], "answer": "yes"}
    quiz = Quiz.model_validate({"name": "Dup", "questions": [question, question]})
    result = build_due_set({}, [quiz], 10, NOW)
    assert len(result) == 1


def test_question_with_lone_surrogate_is_scheduled():
    quiz = Quiz.model_validate(
        {"name": "Q", "questions": [{"question": "bad \ud800", "answers": [{"answer": "a"}], "answer": "a"}]}
    )
    (item,) = build_due_set({}, [quiz], 10, NOW)
    assert item.question_id == SRSEngine.derive_question_id("Q", "bad \ud800")
