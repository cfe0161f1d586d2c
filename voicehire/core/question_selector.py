"""
Local question selection for VoiceHire

Picks interview questions from the built-in bank when the generation
API is not available.
"""

import logging
import random
import re

from voicehire.core.question_bank import get_pool
from voicehire.models.question import SelectionRequest

logger = logging.getLogger(__name__)

# Generic phrases in the opening question that get replaced by the role
_ROLE_PLACEHOLDER = re.compile(r"this role|this field|your experience", re.IGNORECASE)


class QuestionSelector:
    """
    Draws a random, non-repeating set of questions from the bank.

    Args:
        rng: Random source; pass a seeded ``random.Random`` for reproducible picks
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def select_questions(self, request: SelectionRequest) -> list[str]:
        """
        Select questions for an interview.

        The pool for the requested type is shuffled and truncated to
        ``num_questions``; the result is shorter than requested when the
        pool is smaller. Only the first question is personalized.
        """
        pool = get_pool(request.interview_type)
        selected = self.rng.sample(pool, k=min(request.num_questions, len(pool)))

        if selected:
            selected[0] = personalize(selected[0], request.job_role)

        logger.info(
            f"Selected {len(selected)} local {request.category.value} questions "
            f"for role '{request.job_role}'"
        )
        return selected


def personalize(question: str, job_role: str) -> str:
    """Replace generic role phrases with the candidate's job role."""
    return _ROLE_PLACEHOLDER.sub(lambda _: f"the {job_role} role", question)
