"""
Data models and schemas for VoiceHire

Contains Pydantic models for:
- Question selection
- Answer evaluation
- Report data
- Proctoring state
"""

from voicehire.models.question import DifficultyLevel, QuestionCategory, SelectionRequest
from voicehire.models.evaluation import AnswerEvaluation
from voicehire.models.report import Grade, InterviewMeta, InterviewReport, score_to_grade
from voicehire.models.proctoring import (
    ProctorEvent,
    ProctorEventType,
    ProctorPhase,
    ProctorState,
    ViolationKind,
)

__all__ = [
    # Question
    "DifficultyLevel",
    "QuestionCategory",
    "SelectionRequest",
    # Evaluation
    "AnswerEvaluation",
    # Report
    "Grade",
    "InterviewMeta",
    "InterviewReport",
    "score_to_grade",
    # Proctoring
    "ProctorEvent",
    "ProctorEventType",
    "ProctorPhase",
    "ProctorState",
    "ViolationKind",
]
