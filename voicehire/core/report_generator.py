"""
Report Generator for VoiceHire

Generates interview reports with:
- Overall score and grade
- Sub-skill scores
- Strengths and improvements
- Recommendation
"""

import logging
import math
import random
from collections.abc import Sequence

from voicehire.core.ai_reasoning import AIReasoningLayer, AIUnavailableError
from voicehire.models.report import InterviewMeta, InterviewReport, score_to_grade

logger = logging.getLogger(__name__)


# Score reported when no question was answered
DEFAULT_OVERALL_SCORE = 60

# Maximum jitter applied around the overall score, per sub-skill
SKILL_JITTER: dict[str, int] = {
    "communication": 10,
    "relevance": 10,
    "confidence": 8,
    "structure": 10,
    "depth": 12,
}


class ReportGenerator:
    """
    Generates interview reports.

    Asks the AI reasoning layer for a holistic analysis first and
    synthesizes a report from the answer scores when it cannot.
    """

    def __init__(
        self,
        ai_reasoning: AIReasoningLayer | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize report generator.

        Args:
            ai_reasoning: AI reasoning layer for enhanced insights
            rng: Random source for sub-skill jitter
        """
        self.ai_reasoning = ai_reasoning
        self.rng = rng or random.Random()

    async def generate(
        self,
        meta: InterviewMeta,
        answered: Sequence[tuple[str, str, int | None]],
    ) -> InterviewReport:
        """
        Generate the report for a finished interview.

        Args:
            meta: Role and interview type
            answered: (question, answer, score) for every answered question

        Returns:
            Complete InterviewReport
        """
        if self.ai_reasoning:
            try:
                report = await self.ai_reasoning.generate_report(meta=meta, answered=answered)
                logger.info("Report generated via generation API")
                return report
            except AIUnavailableError as e:
                logger.warning(f"Generation API unavailable, using local report generator: {e}")

        scores = [score for _, _, score in answered if score is not None]
        return self.synthesize(meta, scores)

    def synthesize(self, meta: InterviewMeta, answered_scores: Sequence[int]) -> InterviewReport:
        """
        Build a report from the scores of the answered questions.

        An empty score list yields the default overall score rather than
        an error.
        """
        overall = round_half_up(sum(answered_scores) / len(answered_scores)) if answered_scores else DEFAULT_OVERALL_SCORE

        skills = {name: self._vary(overall, spread) for name, spread in SKILL_JITTER.items()}

        return InterviewReport(
            overall_score=overall,
            grade=score_to_grade(overall),
            **skills,
            strengths=[
                "You completed the interview and attempted all questions.",
                "Your responses showed clarity of thought.",
                "You demonstrated relevant domain knowledge.",
            ],
            improvements=[
                "Practice structuring answers using the STAR method.",
                "Include more specific, quantified examples from your experience.",
                f"Research the {meta.job_role} role more deeply before interviews.",
            ],
            recommendation=(
                f"Keep practicing with mock interviews regularly. Focus on building depth in your "
                f"{meta.interview_type} responses for {meta.job_role} interviews. Use structured "
                f"frameworks like STAR or SOAR to organize your thoughts. With consistent practice, "
                f"you can improve your score significantly."
            ),
        )

    def _vary(self, base: int, spread: int) -> int:
        """Jitter a score by up to ``spread`` points, clamped to 0-100."""
        return min(100, max(0, base + self.rng.randint(-spread, spread)))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
