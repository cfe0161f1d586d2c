"""
Report API endpoints

Handles:
- Report generation
- Report retrieval
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from voicehire.api.dependencies import get_current_user, get_orchestrator, get_proctor_registry
from voicehire.api.endpoints.interview import InterviewSummary, interview_summary
from voicehire.core.interview_orchestrator import (
    InterviewNotFoundError,
    InterviewOrchestrator,
    NoAnswersError,
    ReportNotFoundError,
)
from voicehire.core.proctoring import ProctorRegistry
from voicehire.db.models import Report, User
from voicehire.models.report import InterviewReport

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class ReportResponse(BaseModel):
    """Full report response."""
    report_id: int
    generated_at: datetime | None = None
    report: InterviewReport
    interview: InterviewSummary
    qa_breakdown: list[dict[str, Any]] = []


class ReportListItem(BaseModel):
    """Condensed report entry."""
    report_id: int
    interview_id: int
    job_role: str
    interview_type: str
    difficulty: str
    overall_score: int
    grade: str
    generated_at: datetime | None = None


def _report_response(orchestrator: InterviewOrchestrator, row: Report) -> ReportResponse:
    interview = row.interview
    return ReportResponse(
        report_id=row.id,
        generated_at=row.generated_at,
        report=orchestrator.report_from_row(row),
        interview=interview_summary(interview),
        qa_breakdown=orchestrator.qa_breakdown(interview),
    )


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/generate/{interview_id}", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def generate_report(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    proctor_registry: ProctorRegistry = Depends(get_proctor_registry),
) -> ReportResponse:
    """
    Generate a new report card for an interview.

    Every call stores a new report; GET returns the newest one. The
    interview is completed, so its proctoring session is closed.
    """
    try:
        row = await orchestrator.generate_report(user.id, interview_id)
    except InterviewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NoAnswersError as e:
        raise HTTPException(status_code=400, detail=str(e))

    proctor_registry.discard(interview_id)

    return _report_response(orchestrator, row)


@router.get("/all/me", response_model=list[ReportListItem])
def list_my_reports(
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> list[ReportListItem]:
    """All reports of the current user, newest first."""
    return [
        ReportListItem(
            report_id=row.id,
            interview_id=interview.id,
            job_role=interview.job_role,
            interview_type=interview.interview_type,
            difficulty=interview.difficulty,
            overall_score=row.overall_score,
            grade=row.grade,
            generated_at=row.generated_at,
        )
        for row, interview in orchestrator.list_reports(user.id)
    ]


@router.get("/{interview_id}", response_model=ReportResponse)
def get_report(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> ReportResponse:
    """Get the latest stored report for an interview."""
    try:
        row = orchestrator.get_report(user.id, interview_id)
    except (InterviewNotFoundError, ReportNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _report_response(orchestrator, row)
