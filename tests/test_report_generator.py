"""Tests for report synthesis and the score-to-grade mapping."""

import random

import pytest

from voicehire.core.ai_reasoning import AIUnavailableError
from voicehire.core.report_generator import (
    DEFAULT_OVERALL_SCORE,
    SKILL_JITTER,
    ReportGenerator,
    round_half_up,
)
from voicehire.models.report import Grade, InterviewMeta, InterviewReport, score_to_grade

META = InterviewMeta(job_role="Data Analyst", interview_type="technical", difficulty="Hard")


@pytest.mark.parametrize(
    "score, grade",
    [
        (100, Grade.EXCELLENT),
        (85, Grade.EXCELLENT),
        (84, Grade.GOOD),
        (70, Grade.GOOD),
        (69, Grade.AVERAGE),
        (55, Grade.AVERAGE),
        (54, Grade.NEEDS_IMPROVEMENT),
        (40, Grade.NEEDS_IMPROVEMENT),
        (39, Grade.POOR),
        (0, Grade.POOR),
    ],
)
def test_score_to_grade_boundaries(score, grade):
    assert score_to_grade(score) == grade


def test_round_half_up():
    assert round_half_up(72.5) == 73
    assert round_half_up(72.4) == 72
    assert round_half_up(0.5) == 1


def test_overall_is_rounded_mean_of_scores():
    report = ReportGenerator(rng=random.Random(5)).synthesize(META, [70, 75])
    assert report.overall_score == 73
    assert report.grade == Grade.GOOD


def test_empty_scores_use_default_overall():
    report = ReportGenerator(rng=random.Random(5)).synthesize(META, [])
    assert report.overall_score == DEFAULT_OVERALL_SCORE
    assert report.grade == Grade.AVERAGE


def test_sub_skills_stay_within_jitter_and_bounds():
    generator = ReportGenerator(rng=random.Random(11))
    for scores in ([95, 100], [50], [2, 0]):
        report = generator.synthesize(META, scores)
        for name, value in report.skill_scores.items():
            assert 0 <= value <= 100
            assert abs(value - report.overall_score) <= SKILL_JITTER[name]


def test_narrative_mentions_role_and_type():
    report = ReportGenerator(rng=random.Random(0)).synthesize(META, [60])

    assert len(report.strengths) == 3
    assert len(report.improvements) == 3
    assert report.improvements[2] == "Research the Data Analyst role more deeply before interviews."
    assert "technical responses for Data Analyst interviews" in report.recommendation


def test_same_seed_gives_same_report():
    a = ReportGenerator(rng=random.Random(8)).synthesize(META, [64, 81, 77])
    b = ReportGenerator(rng=random.Random(8)).synthesize(META, [64, 81, 77])
    assert a == b


class FailingAI:
    async def generate_report(self, **kwargs):
        raise AIUnavailableError("timeout")


class StaticAI:
    async def generate_report(self, **kwargs):
        return InterviewReport(
            overall_score=91,
            grade=score_to_grade(91),
            communication=90,
            relevance=92,
            confidence=88,
            structure=93,
            depth=89,
            strengths=["Concise.", "Calm.", "Specific."],
            improvements=["More metrics.", "Shorter intros.", "Name trade-offs."],
            recommendation="Ready.",
        )


@pytest.mark.anyio
async def test_generate_falls_back_and_ignores_missing_scores():
    generator = ReportGenerator(FailingAI(), rng=random.Random(2))
    answered = [("Q1", "A1", 80), ("Q2", "A2", None), ("Q3", "A3", 60)]

    report = await generator.generate(META, answered)

    assert report.overall_score == 70
    assert report.grade == Grade.GOOD


@pytest.mark.anyio
async def test_generate_prefers_ai_report():
    report = await ReportGenerator(StaticAI()).generate(META, [("Q", "A", 50)])
    assert report.overall_score == 91
    assert report.recommendation == "Ready."
