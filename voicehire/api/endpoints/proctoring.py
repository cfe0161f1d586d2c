"""
Proctoring API endpoints

The browser reports focus changes and pushes downscaled camera frames;
the server owns the warning count and decides when an interview is
terminated.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from voicehire.api.dependencies import get_current_user, get_orchestrator, get_proctor_registry
from voicehire.config.settings import get_settings
from voicehire.core.interview_orchestrator import (
    STATUS_COMPLETED,
    InterviewNotFoundError,
    InterviewOrchestrator,
)
from voicehire.core.proctoring import ProctorRegistry, ProctorSession, decode_rgba_frame
from voicehire.db.models import User
from voicehire.models.proctoring import ProctorEvent, ProctorEventType, ProctorState, ViolationKind

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class ViolationRequest(BaseModel):
    """A focus violation observed by the browser."""
    kind: ViolationKind
    reason: str | None = None


class FrameRequest(BaseModel):
    """A downscaled camera frame as base64 RGBA bytes."""
    data: str = Field(..., min_length=1)
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)


class ProctorStatusResponse(BaseModel):
    """Proctoring state after an operation."""
    interview_id: int
    state: ProctorState
    status_text: str
    event: ProctorEvent | None = None
    sampled: bool | None = None
    interview_completed: bool = False


# ============================================================================
# HELPERS
# ============================================================================

def _session_for(
    interview_id: int,
    user: User,
    orchestrator: InterviewOrchestrator,
    registry: ProctorRegistry,
) -> ProctorSession | None:
    """
    Proctoring session of an owned interview.

    Completed interviews only look up an existing session, so late
    browser signals never open a new one.
    """
    try:
        interview = orchestrator.get_interview(user.id, interview_id)
    except InterviewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if interview.status == STATUS_COMPLETED:
        return registry.peek(interview_id)
    return registry.get(interview_id)


def _respond(
    interview_id: int,
    session: ProctorSession | None,
    user: User,
    orchestrator: InterviewOrchestrator,
    event: ProctorEvent | None = None,
    sampled: bool | None = None,
) -> ProctorStatusResponse:
    completed = False
    if event and event.type == ProctorEventType.TERMINATED:
        interview = orchestrator.complete_interview(user.id, interview_id)
        completed = interview.status == STATUS_COMPLETED
        logger.warning(f"Interview {interview_id} ended by proctoring after {event.warning_count} violations")

    if session:
        state = session.snapshot()
    else:
        state = ProctorState(max_warnings=get_settings().proctor_max_warnings)
    return ProctorStatusResponse(
        interview_id=interview_id,
        state=state,
        status_text=state.status_text,
        event=event,
        sampled=sampled,
        interview_completed=completed,
    )


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/{interview_id}/activate", response_model=ProctorStatusResponse)
def activate(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    registry: ProctorRegistry = Depends(get_proctor_registry),
) -> ProctorStatusResponse:
    """Start proctoring an interview with a clean warning count."""
    try:
        interview = orchestrator.get_interview(user.id, interview_id)
    except InterviewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if interview.status == STATUS_COMPLETED:
        raise HTTPException(status_code=409, detail="Interview is already completed.")

    session = registry.get(interview_id)
    session.activate()
    return _respond(interview_id, session, user, orchestrator)


@router.post("/{interview_id}/violation", response_model=ProctorStatusResponse)
def report_violation(
    interview_id: int,
    request: ViolationRequest,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    registry: ProctorRegistry = Depends(get_proctor_registry),
) -> ProctorStatusResponse:
    """
    Record a tab switch or window blur.

    Ignored while proctoring is inactive or within the cooldown after
    the previous counted violation.
    """
    session = _session_for(interview_id, user, orchestrator, registry)
    event = session.report(request.kind, request.reason) if session else None
    return _respond(interview_id, session, user, orchestrator, event=event)


@router.post("/{interview_id}/frame", response_model=ProctorStatusResponse)
def submit_frame(
    interview_id: int,
    request: FrameRequest,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    registry: ProctorRegistry = Depends(get_proctor_registry),
) -> ProctorStatusResponse:
    """Offer a camera frame to the motion detector."""
    session = _session_for(interview_id, user, orchestrator, registry)

    settings = get_settings()
    try:
        frame = decode_rgba_frame(
            request.data,
            request.width or settings.proctor_frame_width,
            request.height or settings.proctor_frame_height,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    sampled, event = session.submit_frame(frame) if session else (False, None)
    return _respond(interview_id, session, user, orchestrator, event=event, sampled=sampled)


@router.post("/{interview_id}/dismiss", response_model=ProctorStatusResponse)
def dismiss_warning(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    registry: ProctorRegistry = Depends(get_proctor_registry),
) -> ProctorStatusResponse:
    """Acknowledge the warning currently shown."""
    session = _session_for(interview_id, user, orchestrator, registry)
    if session:
        session.policy.dismiss_warning()
    return _respond(interview_id, session, user, orchestrator)


@router.post("/{interview_id}/deactivate", response_model=ProctorStatusResponse)
def deactivate(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    registry: ProctorRegistry = Depends(get_proctor_registry),
) -> ProctorStatusResponse:
    """Stop proctoring. Safe to call repeatedly."""
    session = _session_for(interview_id, user, orchestrator, registry)
    if session:
        session.deactivate()
    return _respond(interview_id, session, user, orchestrator)


@router.get("/{interview_id}", response_model=ProctorStatusResponse)
def get_status(
    interview_id: int,
    user: User = Depends(get_current_user),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
    registry: ProctorRegistry = Depends(get_proctor_registry),
) -> ProctorStatusResponse:
    """Current proctoring state of an interview."""
    session = _session_for(interview_id, user, orchestrator, registry)
    return _respond(interview_id, session, user, orchestrator)
