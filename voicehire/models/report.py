"""
Report models for VoiceHire

Defines the structure of the final interview report card and the
score-to-grade mapping shared by every part of the system.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Grade(str, Enum):
    """Letter-style grade derived from a 0-100 score."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    NEEDS_IMPROVEMENT = "Needs Improvement"
    POOR = "Poor"


# Lower bound (inclusive) for each grade, highest first
GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (85, Grade.EXCELLENT),
    (70, Grade.GOOD),
    (55, Grade.AVERAGE),
    (40, Grade.NEEDS_IMPROVEMENT),
)


def score_to_grade(score: float) -> Grade:
    """
    Convert a 0-100 score to its grade.

    This is the only score-to-grade mapping in the codebase; interview
    completion, report generation and history all go through it.
    """
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.POOR


class InterviewMeta(BaseModel):
    """The parts of an interview the report templates refer to."""

    job_role: str
    interview_type: str
    difficulty: str | None = None


class InterviewReport(BaseModel):
    """Aggregate performance report for a finished interview."""

    overall_score: int = Field(..., ge=0, le=100)
    grade: Grade

    # Sub-skill scores
    communication: int = Field(..., ge=0, le=100)
    relevance: int = Field(..., ge=0, le=100)
    confidence: int = Field(..., ge=0, le=100)
    structure: int = Field(..., ge=0, le=100)
    depth: int = Field(..., ge=0, le=100)

    # Narrative
    strengths: list[str] = Field(..., min_length=3, max_length=3)
    improvements: list[str] = Field(..., min_length=3, max_length=3)
    recommendation: str

    @property
    def skill_scores(self) -> dict[str, int]:
        return {
            "communication": self.communication,
            "relevance": self.relevance,
            "confidence": self.confidence,
            "structure": self.structure,
            "depth": self.depth,
        }
