"""
Interview Orchestrator - coordinates the interview lifecycle.

    start → answer* → complete → report

The orchestrator picks questions, scores answers and builds reports by
delegating to the AI reasoning layer with local fallbacks, and persists
every step. One instance is created per request around a database
session; it holds no state of its own between requests.
"""

import json
import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from voicehire.core.ai_reasoning import AIReasoningLayer, AIUnavailableError
from voicehire.core.evaluation_engine import EvaluationEngine
from voicehire.core.question_selector import QuestionSelector
from voicehire.core.report_generator import ReportGenerator, round_half_up
from voicehire.db.models import Answer, Interview, Question, Report, utc_now
from voicehire.models.evaluation import AnswerEvaluation
from voicehire.models.question import SelectionRequest
from voicehire.models.report import InterviewMeta, InterviewReport, score_to_grade

logger = logging.getLogger(__name__)

STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"


class InterviewNotFoundError(LookupError):
    """Interview does not exist or belongs to another user."""
    pass


class QuestionNotFoundError(LookupError):
    """Question does not exist in the given interview."""
    pass


class ReportNotFoundError(LookupError):
    """No report has been generated for the interview yet."""
    pass


class AnswerRejectedError(Exception):
    """The answer cannot be stored (already answered, interview closed)."""
    pass


class AnswerTooShortError(ValueError):
    """The answer is below the minimum length."""
    pass


class NoAnswersError(ValueError):
    """A report was requested for an interview with no answers."""
    pass


class InterviewOrchestrator:
    """
    Runs interview operations for one authenticated user request.

    The caller identity is passed in as an opaque user id; every lookup
    is scoped to it so other users' interviews behave as missing.
    """

    def __init__(
        self,
        db: Session,
        ai_reasoning: AIReasoningLayer | None = None,
        question_selector: QuestionSelector | None = None,
        evaluation_engine: EvaluationEngine | None = None,
        report_generator: ReportGenerator | None = None,
        min_answer_chars: int = 5,
    ):
        """
        Initialize the orchestrator with component dependencies.

        Args:
            db: Request-scoped database session
            ai_reasoning: AI reasoning layer (None disables the generation API)
            question_selector: Local question selector
            evaluation_engine: Answer evaluation engine
            report_generator: Report generation component
            min_answer_chars: Minimum answer length after trimming
        """
        self.db = db
        self.ai_reasoning = ai_reasoning
        self.question_selector = question_selector or QuestionSelector()
        self.evaluation_engine = evaluation_engine or EvaluationEngine(ai_reasoning)
        self.report_generator = report_generator or ReportGenerator(ai_reasoning)
        self.min_answer_chars = min_answer_chars

    # =========================================================================
    # INTERVIEW LIFECYCLE
    # =========================================================================

    async def start_interview(self, user_id: int, request: SelectionRequest) -> Interview:
        """
        Create an interview and its questions.

        Questions come from the generation API when it answers, from the
        local bank otherwise.
        """
        questions = await self._generate_questions(request)

        interview = Interview(
            user_id=user_id,
            job_role=request.job_role,
            experience=request.experience,
            interview_type=request.interview_type,
            topic=request.topic,
            difficulty=request.difficulty,
            num_questions=len(questions),
            status=STATUS_IN_PROGRESS,
        )
        interview.questions = [
            Question(question_index=i, question_text=text)
            for i, text in enumerate(questions)
        ]

        self.db.add(interview)
        self.db.commit()
        self.db.refresh(interview)

        logger.info(f"Created interview {interview.id} with {len(questions)} questions for user {user_id}")
        return interview

    async def _generate_questions(self, request: SelectionRequest) -> list[str]:
        if self.ai_reasoning:
            try:
                questions = await self.ai_reasoning.generate_questions(request)
                logger.info("Questions generated via generation API")
                return questions
            except AIUnavailableError as e:
                logger.warning(f"Generation API unavailable, using built-in questions: {e}")

        return self.question_selector.select_questions(request)

    async def submit_answer(
        self,
        user_id: int,
        interview_id: int,
        question_id: int,
        answer_text: str,
    ) -> tuple[Answer, AnswerEvaluation]:
        """
        Evaluate and store the answer to one question.

        Raises:
            AnswerTooShortError: answer below the minimum length
            InterviewNotFoundError / QuestionNotFoundError: unknown ids
            AnswerRejectedError: question already answered or interview closed
        """
        answer_text = answer_text.strip()
        if len(answer_text) < self.min_answer_chars:
            raise AnswerTooShortError(f"answerText must be at least {self.min_answer_chars} characters")

        interview = self.get_interview(user_id, interview_id)
        question = self.db.scalar(
            select(Question).where(Question.id == question_id, Question.interview_id == interview.id)
        )
        if question is None:
            raise QuestionNotFoundError(f"Question not found: {question_id}")

        if interview.status == STATUS_COMPLETED:
            raise AnswerRejectedError("Interview is already completed.")
        if question.answer is not None:
            raise AnswerRejectedError("This question has already been answered.")

        evaluation = await self.evaluation_engine.evaluate_answer(
            question_text=question.question_text,
            answer_text=answer_text,
            meta=self._meta(interview),
        )

        answer = Answer(
            interview=interview,
            question=question,
            answer_text=answer_text,
            score=evaluation.score,
            positive=evaluation.positive,
            improve=evaluation.improve,
            brief=evaluation.brief,
        )
        self.db.add(answer)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AnswerRejectedError("This question has already been answered.") from e
        self.db.refresh(answer)

        return answer, evaluation

    def complete_interview(self, user_id: int, interview_id: int) -> Interview:
        """
        Mark an interview completed with the average of its answer scores.

        Completing an already completed interview leaves it unchanged.
        """
        interview = self.get_interview(user_id, interview_id)
        if interview.status == STATUS_COMPLETED:
            return interview

        avg_score = self.db.scalar(
            select(func.avg(Answer.score)).where(Answer.interview_id == interview.id)
        )
        overall = round_half_up(avg_score) if avg_score is not None else 0

        interview.status = STATUS_COMPLETED
        interview.overall_score = overall
        interview.grade = score_to_grade(overall).value
        interview.completed_at = utc_now()
        self.db.commit()

        logger.info(f"Interview {interview.id} completed with score {overall} ({interview.grade})")
        return interview

    def delete_interview(self, user_id: int, interview_id: int) -> None:
        interview = self.get_interview(user_id, interview_id)
        self.db.delete(interview)
        self.db.commit()
        logger.info(f"Deleted interview {interview_id}")

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_interview(self, user_id: int, interview_id: int) -> Interview:
        interview = self.db.scalar(
            select(Interview).where(Interview.id == interview_id, Interview.user_id == user_id)
        )
        if interview is None:
            raise InterviewNotFoundError(f"Interview not found: {interview_id}")
        return interview

    def list_history(self, user_id: int) -> list[tuple[Interview, int]]:
        """All interviews of a user with their answered counts, newest first."""
        rows = self.db.execute(
            select(Interview, func.count(Answer.id))
            .outerjoin(Answer, Answer.interview_id == Interview.id)
            .where(Interview.user_id == user_id)
            .group_by(Interview.id)
            .order_by(Interview.started_at.desc(), Interview.id.desc())
        ).all()
        return [(interview, count) for interview, count in rows]

    def qa_breakdown(self, interview: Interview) -> list[dict[str, Any]]:
        """Every question in order, with its answer and feedback if any."""
        breakdown = []
        for question in interview.questions:
            answer = question.answer
            breakdown.append({
                "question_id": question.id,
                "question_index": question.question_index,
                "question_text": question.question_text,
                "answer_id": answer.id if answer else None,
                "answer_text": answer.answer_text if answer else None,
                "score": answer.score if answer else None,
                "positive": answer.positive if answer else None,
                "improve": answer.improve if answer else None,
                "brief": answer.brief if answer else None,
                "answered_at": answer.answered_at if answer else None,
            })
        return breakdown

    # =========================================================================
    # REPORTS
    # =========================================================================

    async def generate_report(self, user_id: int, interview_id: int) -> Report:
        """
        Generate and store a new report for an interview.

        Reports are append-only; generating again adds a newer row and
        earlier rows are kept as they were.

        Raises:
            NoAnswersError: nothing was answered
        """
        interview = self.get_interview(user_id, interview_id)

        answered = [
            (q.question_text, q.answer.answer_text, q.answer.score)
            for q in interview.questions
            if q.answer is not None
        ]
        if not answered:
            raise NoAnswersError("No answers found for this interview.")

        report = await self.report_generator.generate(self._meta(interview), answered)

        row = Report(
            interview_id=interview.id,
            overall_score=report.overall_score,
            grade=report.grade.value,
            communication=report.communication,
            relevance=report.relevance,
            confidence=report.confidence,
            structure=report.structure,
            depth=report.depth,
            strengths=json.dumps(report.strengths),
            improvements=json.dumps(report.improvements),
            recommendation=report.recommendation,
        )
        self.db.add(row)

        interview.overall_score = report.overall_score
        interview.grade = report.grade.value
        interview.status = STATUS_COMPLETED
        if interview.completed_at is None:
            interview.completed_at = utc_now()

        self.db.commit()
        self.db.refresh(row)

        logger.info(f"Generated report {row.id} for interview {interview.id}: {report.overall_score} ({report.grade.value})")
        return row

    def get_report(self, user_id: int, interview_id: int) -> Report:
        """Latest stored report for an interview."""
        interview = self.get_interview(user_id, interview_id)
        report = self.db.scalar(
            select(Report)
            .where(Report.interview_id == interview.id)
            .order_by(Report.id.desc())
            .limit(1)
        )
        if report is None:
            raise ReportNotFoundError(
                "Report not found. Generate one first using POST /api/report/generate/{interview_id}"
            )
        return report

    def list_reports(self, user_id: int) -> list[tuple[Report, Interview]]:
        rows = self.db.execute(
            select(Report, Interview)
            .join(Interview, Interview.id == Report.interview_id)
            .where(Interview.user_id == user_id)
            .order_by(Report.generated_at.desc(), Report.id.desc())
        ).all()
        return [(report, interview) for report, interview in rows]

    @staticmethod
    def report_from_row(row: Report) -> InterviewReport:
        """Rebuild the structured report exactly as it was stored."""
        return InterviewReport(
            overall_score=row.overall_score,
            grade=row.grade,
            communication=row.communication,
            relevance=row.relevance,
            confidence=row.confidence,
            structure=row.structure,
            depth=row.depth,
            strengths=json.loads(row.strengths),
            improvements=json.loads(row.improvements),
            recommendation=row.recommendation,
        )

    @staticmethod
    def _meta(interview: Interview) -> InterviewMeta:
        return InterviewMeta(
            job_role=interview.job_role,
            interview_type=interview.interview_type,
            difficulty=interview.difficulty,
        )
