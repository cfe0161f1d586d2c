"""
Metadata API endpoints

Provides reference data for:
- Interview types
- Difficulty levels
"""

from fastapi import APIRouter
from pydantic import BaseModel

from voicehire.core.question_bank import DIFFICULTY_PREFIX, QUESTION_BANK
from voicehire.core.evaluation_engine import score_cap
from voicehire.models.question import DifficultyLevel, QuestionCategory

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class InterviewTypeInfo(BaseModel):
    """Information about an interview type."""
    id: str
    name: str
    question_count: int


class DifficultyInfo(BaseModel):
    """Information about a difficulty level."""
    id: str
    name: str
    question_prefix: str
    max_local_score: int


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/interview-types")
async def get_interview_types() -> list[InterviewTypeInfo]:
    """Get all interview types with the size of their built-in question pool."""
    return [
        InterviewTypeInfo(
            id=category.value,
            name=category.value.title(),
            question_count=len(QUESTION_BANK[category]),
        )
        for category in QuestionCategory
    ]


@router.get("/difficulties")
async def get_difficulties() -> list[DifficultyInfo]:
    """Get all difficulty levels."""
    return [
        DifficultyInfo(
            id=level.value,
            name=level.value,
            question_prefix=DIFFICULTY_PREFIX[level],
            max_local_score=score_cap(level),
        )
        for level in DifficultyLevel
    ]
