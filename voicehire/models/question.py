"""
Question models for VoiceHire
"""

from enum import Enum

from pydantic import BaseModel, Field


class QuestionCategory(str, Enum):
    """Interview types, each backed by a pool in the question bank."""

    BEHAVIORAL = "behavioral"
    TECHNICAL = "technical"
    SITUATIONAL = "situational"
    MIXED = "mixed"

    @classmethod
    def resolve(cls, value: "str | QuestionCategory") -> "QuestionCategory":
        """Map any input to a category; unknown values fall back to MIXED."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.MIXED


class DifficultyLevel(str, Enum):
    """Difficulty selected by the candidate."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXPERT = "Expert"

    @classmethod
    def parse(cls, value: "str | DifficultyLevel | None") -> "DifficultyLevel | None":
        """Case-insensitive lookup, None when the value is not a known level."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        for level in cls:
            if level.value.lower() == str(value).strip().lower():
                return level
        return None


class SelectionRequest(BaseModel):
    """Parameters for picking the questions of one interview."""

    job_role: str = Field(..., min_length=1)
    interview_type: str = Field(
        ...,
        description="behavioral, technical, situational or mixed; anything else is treated as mixed"
    )
    difficulty: str = Field(..., min_length=1)
    num_questions: int = Field(..., gt=0)
    topic: str | None = None
    experience: str | None = None

    @property
    def category(self) -> QuestionCategory:
        return QuestionCategory.resolve(self.interview_type)
