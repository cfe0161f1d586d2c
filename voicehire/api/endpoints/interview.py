"""
Interview API endpoints

Handles interview lifecycle:
- Starting interviews
- Submitting answers
- Completing interviews
- History, detail and deletion
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from voicehire.api.dependencies import get_current_user, get_orchestrator, get_proctor_registry
from voicehire.config.settings import get_settings
from voicehire.core.interview_orchestrator import (
    AnswerRejectedError,
    AnswerTooShortError,
    InterviewNotFoundError,
    InterviewOrchestrator,
    QuestionNotFoundError,
)
from voicehire.core.proctoring import ProctorRegistry
from voicehire.db.models import Interview, User
from voicehire.models.evaluation import AnswerEvaluation
from voicehire.models.question import SelectionRequest

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class StartRequest(BaseModel):
    """Request model for starting an interview."""
    job_role: str = Field(..., min_length=1)
    interview_type: str = Field(..., min_length=1)
    difficulty: str = Field(..., min_length=1)
    num_questions: int = Field(..., gt=0)
    experience: str | None = None
    topic: str | None = None

    @field_validator("num_questions")
    @classmethod
    def within_limit(cls, value: int) -> int:
        limit = get_settings().max_questions
        if value > limit:
            raise ValueError(f"num_questions must be at most {limit}")
        return value


class QuestionOut(BaseModel):
    id: int
    question_index: int
    question_text: str


class StartResponse(BaseModel):
    """Response after starting an interview."""
    interview_id: int
    message: str
    questions: list[QuestionOut]


class AnswerRequest(BaseModel):
    """Request model for submitting an answer."""
    question_id: int
    answer_text: str

    @field_validator("answer_text")
    @classmethod
    def min_length(cls, value: str) -> str:
        minimum = get_settings().min_answer_chars
        if len(value.strip()) < minimum:
            raise ValueError(f"answer_text must be at least {minimum} characters")
        return value


class AnswerResponse(BaseModel):
    """Response after submitting an answer."""
    answer_id: int
    feedback: AnswerEvaluation


class InterviewSummary(BaseModel):
    """One interview in a listing."""
    id: int
    job_role: str
    experience: str | None = None
    interview_type: str
    topic: str | None = None
    difficulty: str
    num_questions: int
    overall_score: int | None = None
    grade: str | None = None
    status: str
    started_at: datetime | None = None
    completed_at: datetime | None = None
    answered_count: int | None = None


class InterviewDetail(BaseModel):
    """Interview with every question and its answer."""
    interview: InterviewSummary
    questions: list[dict[str, Any]]


class CompleteResponse(BaseModel):
    """Response after completing an interview."""
    message: str
    interview: InterviewSummary


def interview_summary(interview: Interview, answered_count: int | None = None) -> InterviewSummary:
    return InterviewSummary(
        id=interview.id,
        job_role=interview.job_role,
        experience=interview.experience,
        interview_type=interview.interview_type,
        topic=interview.topic,
        difficulty=interview.difficulty,
        num_questions=interview.num_questions,
        overall_score=interview.overall_score,
        grade=interview.grade,
        status=interview.status,
        started_at=interview.started_at,
        completed_at=interview.completed_at,
        answered_count=answered_count,
    )


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/start", response_model=StartResponse, status_code=status.HTTP_201_CREATED)
async def start_interview(
    request: StartRequest,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> StartResponse:
    """
    Create an interview and generate its questions.

    Questions come from the generation API when configured and
    reachable, from the built-in question bank otherwise.
    """
    selection = SelectionRequest(**request.model_dump())
    interview = await orchestrator.start_interview(user.id, selection)

    return StartResponse(
        interview_id=interview.id,
        message="Interview started successfully",
        questions=[
            QuestionOut(id=q.id, question_index=q.question_index, question_text=q.question_text)
            for q in interview.questions
        ],
    )


@router.post("/{interview_id}/answer", response_model=AnswerResponse)
async def submit_answer(
    interview_id: int,
    request: AnswerRequest,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> AnswerResponse:
    """Score an answer and store it with its feedback."""
    try:
        answer, evaluation = await orchestrator.submit_answer(
            user.id, interview_id, request.question_id, request.answer_text
        )
    except AnswerTooShortError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (InterviewNotFoundError, QuestionNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AnswerRejectedError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return AnswerResponse(answer_id=answer.id, feedback=evaluation)


@router.patch("/{interview_id}/complete", response_model=CompleteResponse)
def complete_interview(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    proctor_registry: ProctorRegistry = Depends(get_proctor_registry),
) -> CompleteResponse:
    """Mark an interview completed with the average answer score."""
    try:
        interview = orchestrator.complete_interview(user.id, interview_id)
    except InterviewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    proctor_registry.discard(interview_id)

    return CompleteResponse(message="Interview completed", interview=interview_summary(interview))


@router.get("/history", response_model=list[InterviewSummary])
def get_history(
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> list[InterviewSummary]:
    """All interviews of the current user, newest first."""
    return [
        interview_summary(interview, answered_count)
        for interview, answered_count in orchestrator.list_history(user.id)
    ]


@router.get("/{interview_id}", response_model=InterviewDetail)
def get_interview(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> InterviewDetail:
    """Get an interview with all questions and answers."""
    try:
        interview = orchestrator.get_interview(user.id, interview_id)
    except InterviewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    breakdown = orchestrator.qa_breakdown(interview)
    answered = sum(1 for item in breakdown if item["answer_id"] is not None)

    return InterviewDetail(
        interview=interview_summary(interview, answered),
        questions=breakdown,
    )


@router.delete("/{interview_id}")
def delete_interview(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    proctor_registry: ProctorRegistry = Depends(get_proctor_registry),
) -> dict[str, str]:
    """Delete an interview with its questions, answers and reports."""
    try:
        orchestrator.delete_interview(user.id, interview_id)
    except InterviewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    proctor_registry.discard(interview_id)

    return {"message": "Interview deleted."}
