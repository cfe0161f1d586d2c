"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components.
"""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from voicehire.config.settings import get_settings
from voicehire.core.ai_reasoning import AIReasoningLayer
from voicehire.core.evaluation_engine import EvaluationEngine
from voicehire.core.interview_orchestrator import InterviewOrchestrator
from voicehire.core.proctoring import MotionDetector, ProctorPolicy, ProctorRegistry, ProctorSession
from voicehire.core.question_selector import QuestionSelector
from voicehire.core.report_generator import ReportGenerator
from voicehire.core.security import decode_access_token
from voicehire.db.database import get_db
from voicehire.db.models import User

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_ai_reasoning: AIReasoningLayer | None = None
_question_selector: QuestionSelector | None = None
_evaluation_engine: EvaluationEngine | None = None
_report_generator: ReportGenerator | None = None
_proctor_registry: ProctorRegistry | None = None


def get_ai_reasoning() -> AIReasoningLayer | None:
    """
    Get the AI reasoning layer singleton.

    Returns None when no Gemini key is configured; everything then runs
    on the local engines.
    """
    global _ai_reasoning

    settings = get_settings()
    if not settings.gemini_configured:
        return None

    if _ai_reasoning is None:
        _ai_reasoning = AIReasoningLayer(settings)
    return _ai_reasoning


def get_orchestrator(db: Session = Depends(get_db)) -> InterviewOrchestrator:
    """
    Build a request-scoped orchestrator around shared engines.

    Lazily initializes the engines on first use.
    """
    global _question_selector, _evaluation_engine, _report_generator

    ai_reasoning = get_ai_reasoning()

    if _question_selector is None:
        _question_selector = QuestionSelector()
    if _evaluation_engine is None:
        _evaluation_engine = EvaluationEngine(ai_reasoning)
    if _report_generator is None:
        _report_generator = ReportGenerator(ai_reasoning)

    return InterviewOrchestrator(
        db=db,
        ai_reasoning=ai_reasoning,
        question_selector=_question_selector,
        evaluation_engine=_evaluation_engine,
        report_generator=_report_generator,
        min_answer_chars=get_settings().min_answer_chars,
    )


def get_proctor_registry() -> ProctorRegistry:
    """Get the per-interview proctoring session registry."""
    global _proctor_registry

    if _proctor_registry is None:
        settings = get_settings()

        def new_session() -> ProctorSession:
            return ProctorSession(
                policy=ProctorPolicy(
                    max_warnings=settings.proctor_max_warnings,
                    cooldown_seconds=settings.proctor_cooldown_seconds,
                    dismiss_seconds=settings.proctor_dismiss_seconds,
                ),
                detector=MotionDetector(
                    pixel_threshold=settings.proctor_pixel_threshold,
                    change_ratio=settings.proctor_change_ratio,
                ),
                sample_interval_seconds=settings.proctor_sample_interval_seconds,
            )

        _proctor_registry = ProctorRegistry(new_session)

    return _proctor_registry


# ============================================================================
# AUTHENTICATION
# ============================================================================

def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user, or fail with 401."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None or payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token.")

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found.")
    return user


async def cleanup():
    """Cleanup resources on shutdown."""
    global _ai_reasoning, _question_selector, _evaluation_engine, _report_generator, _proctor_registry

    if _ai_reasoning:
        await _ai_reasoning.close()

    _ai_reasoning = None
    _question_selector = None
    _evaluation_engine = None
    _report_generator = None
    _proctor_registry = None
