"""
Evaluation models for VoiceHire

Structured feedback returned for a single answer, whether it came from
the generation API or from the local evaluator.
"""

from pydantic import BaseModel, Field


class AnswerEvaluation(BaseModel):
    """Score and feedback for one answer."""

    score: int = Field(..., ge=0, le=100)
    positive: str = Field(..., description="One strength of the answer")
    improve: str = Field(..., description="One actionable improvement")
    brief: str = Field(..., description="One-sentence verdict spoken to the candidate")
