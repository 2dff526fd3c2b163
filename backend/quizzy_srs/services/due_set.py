from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..models.quiz import Quiz, QuizQuestion
from ..models.srs import ReviewQuestion, SchedulingRecord
from .srs_engine import SRSEngine


def _iter_questions(quizzes: Iterable[Quiz]) -> Iterator[tuple[Quiz, QuizQuestion, str]]:
    for quiz in quizzes:
        for question in quiz.questions:
            yield quiz, question, SRSEngine.derive_question_id(quiz.name, question.question)


def _to_review_question(quiz: Quiz, question: QuizQuestion, record: SchedulingRecord) -> ReviewQuestion:
    return ReviewQuestion(
        question_id=record.question_id,
        quiz_name=quiz.name,
        question=question.question,
        answers=question.answers,
        correct_answer=question.answer,
        explanation=question.explanation,
        srs_data=record,
    )


def build_due_set(
    records: dict[str, SchedulingRecord],
    quizzes: list[Quiz],
    max_questions: int,
    now: int,
) -> list[ReviewQuestion]:
    """
    Assemble a review session of at most ``max_questions`` questions.

    Due reviews come first; when they do not fill the session, questions that
    have never been answered are added with fresh default records (not stored).
    The result is ordered by due time, most overdue first. Ties keep corpus
    order: quiz order, then question order.
    """
    if max_questions <= 0 or not quizzes:
        return []

    selected: list[ReviewQuestion] = []
    seen: set[str] = set()

    for quiz, question, question_id in _iter_questions(quizzes):
        record = records.get(question_id)
        if record is None or question_id in seen:
            continue
        if record.next_review_due_at <= now:
            selected.append(_to_review_question(quiz, question, record))
            seen.add(question_id)

    if len(selected) < max_questions:
        for quiz, question, question_id in _iter_questions(quizzes):
            if len(selected) >= max_questions:
                break
            if question_id in records or question_id in seen:
                continue
            record = SRSEngine.new_record(quiz.name, question.question, now)
            selected.append(_to_review_question(quiz, question, record))
            seen.add(question_id)

    # list.sort is stable, so equal due times stay in corpus order
    selected.sort(key=lambda item: item.srs_data.next_review_due_at)
    return selected[:max_questions]
