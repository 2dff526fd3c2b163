"""Quiz corpus models, read-only input to the review scheduler."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, dumps camelCase with by_alias."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Answer(CamelModel):
    answer: str


class QuizQuestion(CamelModel):
    question: str
    answers: list[Answer] = []
    answer: str  # the correct choice
    explanation: str = ""


class Quiz(CamelModel):
    name: str
    category: str | None = None
    questions: list[QuizQuestion] = []
    no_shuffle: bool = False
