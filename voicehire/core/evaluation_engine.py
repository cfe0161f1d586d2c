"""
Evaluation Engine for VoiceHire

Handles scoring and feedback generation for candidate answers.
Uses the AI reasoning layer when it is configured and falls back to
text heuristics whenever the generation API cannot answer.
"""

import logging
import random
import re
from typing import Any

from voicehire.core.ai_reasoning import AIReasoningLayer, AIUnavailableError
from voicehire.models.evaluation import AnswerEvaluation
from voicehire.models.question import DifficultyLevel
from voicehire.models.report import InterviewMeta

logger = logging.getLogger(__name__)


# Word-count thresholds and the bonus each one adds (cumulative)
WORD_BONUSES: tuple[tuple[int, int], ...] = ((20, 5), (50, 10), (100, 5), (150, 5))

# Sentence-count thresholds and their bonuses (cumulative)
SENTENCE_BONUSES: tuple[tuple[int, int], ...] = ((2, 5), (4, 5))

SIGNAL_BONUS = 5
BASE_SCORE = 50
SCORE_FLOOR = 30
DEFAULT_SCORE_CAP = 90

SCORE_CAPS: dict[DifficultyLevel, int] = {
    DifficultyLevel.EASY: 95,
    DifficultyLevel.MEDIUM: 90,
    DifficultyLevel.HARD: 85,
    DifficultyLevel.EXPERT: 80,
}

SPECIFICITY_MARKERS = (
    "for example", "specifically", "such as", "instance", "result", "outcome",
    "achieved", "improved", "increased", "reduced", "led to",
)

STRUCTURE_MARKERS = (
    "first", "second", "additionally", "moreover", "however",
    "in conclusion", "finally",
)

POSITIVE_FEEDBACK = (
    "You provided a clear and direct response to the question.",
    "Your answer shows good understanding of the topic.",
    "You communicated your thoughts effectively.",
    "Your response was well-structured and easy to follow.",
    "You demonstrated relevant knowledge in your answer.",
)

IMPROVE_FEEDBACK = (
    "Try adding more specific examples with measurable outcomes.",
    "Consider using the STAR method (Situation, Task, Action, Result) for behavioral answers.",
    "Adding quantifiable metrics would strengthen your response.",
    "Try to connect your answer more directly to the role requirements.",
    "Consider providing more depth with real-world examples from your experience.",
)

STRONG_ANSWER_SCORE = 70

# (strong, weak) wording for the spoken one-line verdict
BRIEF_TEMPLATES = (
    ("Good answer. Keep this up!", "Decent answer. A bit more depth would help."),
    ("Strong response. Well articulated.", "Fair response. Try to be more specific."),
    ("Impressive answer. Shows solid understanding.", "Reasonable answer. Could use more examples."),
)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_DIGIT = re.compile(r"[0-9]")


def score_cap(difficulty: "str | DifficultyLevel | None") -> int:
    """Highest heuristic score reachable at a difficulty."""
    level = DifficultyLevel.parse(difficulty)
    return SCORE_CAPS.get(level, DEFAULT_SCORE_CAP)


class EvaluationEngine:
    """
    Central evaluation component for interview answers.

    Responsibilities:
    - Score individual answers
    - Generate feedback
    """

    def __init__(
        self,
        ai_reasoning: AIReasoningLayer | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize evaluation engine.

        Args:
            ai_reasoning: AI reasoning layer for detailed evaluation
            rng: Random source for feedback phrasing
        """
        self.ai_reasoning = ai_reasoning
        self.rng = rng or random.Random()

    # =========================================================================
    # ANSWER EVALUATION
    # =========================================================================

    async def evaluate_answer(
        self,
        question_text: str,
        answer_text: str,
        meta: InterviewMeta,
    ) -> AnswerEvaluation:
        """
        Evaluate a single answer.

        If AI reasoning is available, uses it for detailed evaluation.
        Otherwise, or when the call fails, uses heuristic evaluation.
        Both paths return the same structure.
        """
        if self.ai_reasoning:
            try:
                evaluation = await self.ai_reasoning.evaluate_answer(
                    question_text=question_text,
                    answer_text=answer_text,
                    meta=meta,
                )
                logger.info("Answer evaluated via generation API")
                return evaluation
            except AIUnavailableError as e:
                logger.warning(f"Generation API unavailable, using local evaluator: {e}")

        return self.evaluate_locally(question_text, answer_text, meta.difficulty)

    def evaluate_locally(
        self,
        question_text: str,
        answer_text: str,
        difficulty: "str | DifficultyLevel | None",
    ) -> AnswerEvaluation:
        """
        Heuristic-based evaluation when AI is not available.

        The score depends only on the answer text and difficulty; the
        feedback wording is drawn at random from fixed phrase pools.
        """
        analysis = self._analyze_answer(answer_text)
        score = self._score(analysis, difficulty)

        strong = score >= STRONG_ANSWER_SCORE
        strong_brief, weak_brief = self.rng.choice(BRIEF_TEMPLATES)

        return AnswerEvaluation(
            score=score,
            positive=self.rng.choice(POSITIVE_FEEDBACK),
            improve=self.rng.choice(IMPROVE_FEEDBACK),
            brief=strong_brief if strong else weak_brief,
        )

    def _analyze_answer(self, answer_text: str) -> dict[str, Any]:
        """Extract the scoring signals from an answer."""
        lowered = answer_text.lower()
        sentences = [s for s in _SENTENCE_SPLIT.split(answer_text) if s.strip()]

        return {
            "word_count": len(answer_text.split()),
            "sentence_count": len(sentences),
            "has_numbers": bool(_DIGIT.search(answer_text)),
            "has_specifics": any(marker in lowered for marker in SPECIFICITY_MARKERS),
            "has_structure": any(marker in lowered for marker in STRUCTURE_MARKERS),
        }

    def _score(self, analysis: dict[str, Any], difficulty: "str | DifficultyLevel | None") -> int:
        score = BASE_SCORE

        score += sum(bonus for threshold, bonus in WORD_BONUSES if analysis["word_count"] >= threshold)
        score += sum(bonus for threshold, bonus in SENTENCE_BONUSES if analysis["sentence_count"] >= threshold)

        for signal in ("has_numbers", "has_specifics", "has_structure"):
            if analysis[signal]:
                score += SIGNAL_BONUS

        score = min(score, score_cap(difficulty))
        return max(score, SCORE_FLOOR)
