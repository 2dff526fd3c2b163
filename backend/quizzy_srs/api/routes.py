import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..core.config import get_config
from ..models.quiz import CamelModel, Quiz
from ..models.srs import ReviewQuestion, SchedulingRecord, SRSStats
from ..services.quiz_corpus import load_quizzes
from ..services.srs_engine import SRSEngine
from ..services.srs_service import SRSService

logger = logging.getLogger(__name__)


class DueQuestionsRequest(CamelModel):
    quizzes: list[Quiz] = []
    max_questions: int | None = None


class AnswerRequest(CamelModel):
    quiz_name: str
    question_text: str
    was_correct: bool


class SelectedAnswerRequest(CamelModel):
    review_question: ReviewQuestion
    selected_answer: str


class SelectedAnswerResponse(CamelModel):
    correct: bool
    correct_answer: str
    explanation: str = ""
    srs_data: SchedulingRecord | None = None


def create_router(service: SRSService) -> APIRouter:
    router = APIRouter(prefix="/api/srs", tags=["srs"])
    cfg = get_config()
    limiter = Limiter(key_func=get_remote_address)

    @router.post("/due", response_model=list[ReviewQuestion])
    async def due_questions(body: DueQuestionsRequest) -> list[ReviewQuestion]:
        limit = cfg.srs.session_size if body.max_questions is None else body.max_questions
        return await service.get_due_questions(body.quizzes, limit)

    @router.get("/due", response_model=list[ReviewQuestion])
    async def due_questions_from_corpus(limit: int | None = None) -> list[ReviewQuestion]:
        if not cfg.srs.quizzes_path:
            raise HTTPException(status_code=400, detail="No quiz corpus configured (srs.quizzes_path)")
        quizzes = load_quizzes(cfg.srs.quizzes_path)
        return await service.get_due_questions(quizzes, cfg.srs.session_size if limit is None else limit)

    @router.post("/answers", response_model=SchedulingRecord)
    @limiter.limit("120/minute")
    async def record_answer(request: Request, body: AnswerRequest) -> SchedulingRecord:
        await service.record_answer(body.quiz_name, body.question_text, body.was_correct)
        question_id = SRSEngine.derive_question_id(body.quiz_name, body.question_text)
        record = await service.get_record(question_id)
        logger.info("Recorded %s answer for %s", "correct" if body.was_correct else "incorrect", question_id)
        return record

    @router.post("/answers/select", response_model=SelectedAnswerResponse)
    @limiter.limit("120/minute")
    async def select_answer(request: Request, body: SelectedAnswerRequest) -> SelectedAnswerResponse:
        correct = await service.answer_question(body.review_question, body.selected_answer)
        record = await service.get_record(body.review_question.question_id)
        return SelectedAnswerResponse(
            correct=correct,
            correct_answer=body.review_question.correct_answer,
            explanation=body.review_question.explanation,
            srs_data=record,
        )

    @router.get("/stats", response_model=SRSStats)
    async def stats() -> SRSStats:
        return await service.get_stats()

    @router.get("/records/{question_id}", response_model=SchedulingRecord)
    async def get_record(question_id: str) -> SchedulingRecord:
        record = await service.get_record(question_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Question not tracked")
        return record

    return router
