"""
AI Reasoning Layer for VoiceHire

Handles all AI-powered operations:
- Question generation
- Answer evaluation
- Report generation

Talks to the Gemini generateContent API. Every failure is reported as
AIUnavailableError so callers can switch to the local fallbacks.
Integrated with Langfuse for optional tracing.
"""

import asyncio
import json
import logging
import re
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from voicehire.config.settings import Settings, get_settings
from voicehire.models.evaluation import AnswerEvaluation
from voicehire.models.question import SelectionRequest
from voicehire.models.report import InterviewMeta, InterviewReport, score_to_grade
from voicehire.prompts.evaluator import EvaluatorPrompts
from voicehire.prompts.interviewer import InterviewerPrompts
from voicehire.prompts.report import ReportPrompts

logger = logging.getLogger(__name__)

# Langfuse imports
try:
    from langfuse import Langfuse
    LANGFUSE_AVAILABLE = True
except ImportError:
    LANGFUSE_AVAILABLE = False
    Langfuse = None

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


class AIUnavailableError(Exception):
    """The generation API could not produce a usable result."""
    pass


def parse_model_json(raw: str) -> Any:
    """Strip markdown code fences and parse the JSON payload."""
    cleaned = _CODE_FENCE.sub("", raw).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AIUnavailableError(f"Malformed JSON from model: {e}") from e


class AIReasoningLayer:
    """
    Central AI reasoning component using Gemini.

    Rate-limited calls (HTTP 429) are retried with exponential back-off;
    any other failure is raised immediately.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize AI reasoning layer with Gemini configuration."""
        self.settings = settings or get_settings()

        # HTTP client for API calls
        self.client = client or httpx.AsyncClient(timeout=self.settings.gemini_timeout_seconds)

        # Prompt templates
        self.interviewer_prompts = InterviewerPrompts()
        self.evaluator_prompts = EvaluatorPrompts()
        self.report_prompts = ReportPrompts()

        # Initialize Langfuse for observability
        self.langfuse = None
        if LANGFUSE_AVAILABLE and self.settings.langfuse_enabled:
            if self.settings.langfuse_secret_key and self.settings.langfuse_public_key:
                try:
                    self.langfuse = Langfuse(
                        secret_key=self.settings.langfuse_secret_key,
                        public_key=self.settings.langfuse_public_key,
                        host=self.settings.langfuse_base_url,
                    )
                    logger.info("Langfuse initialized for LLM observability")
                except Exception as e:
                    logger.warning(f"Failed to initialize Langfuse: {e}")
            else:
                logger.info("Langfuse keys not configured, tracing disabled")

    async def close(self):
        """Close the HTTP client and flush Langfuse."""
        await self.client.aclose()
        if self.langfuse:
            try:
                self.langfuse.flush()
            except Exception as e:
                logger.warning(f"Failed to flush Langfuse: {e}")

    # =========================================================================
    # CORE AI OPERATIONS
    # =========================================================================

    async def call_gemini(self, prompt: str, temperature: float = 0.7, trace_name: str = "gemini_call") -> str:
        """
        Send a prompt to Gemini and return the text of the first candidate.

        Raises:
            AIUnavailableError: key missing, HTTP failure, rate limit
                exhausted or empty response
        """
        if not self.settings.gemini_configured:
            raise AIUnavailableError("Gemini API key not configured")

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": self.settings.gemini_max_output_tokens,
            },
        }
        span = self._start_span(trace_name, {"temperature": temperature, "prompt_length": len(prompt)})

        try:
            text = await self._post_with_retries(payload)
        except AIUnavailableError as e:
            self._end_span(span, {"error": str(e)})
            raise

        self._end_span(span, {"response_length": len(text)})
        return text

    async def _post_with_retries(self, payload: dict[str, Any]) -> str:
        max_retries = self.settings.gemini_max_retries

        for attempt in range(1, max_retries + 1):
            try:
                response = await self.client.post(
                    self.settings.gemini_generate_url,
                    params={"key": self.settings.gemini_api_key},
                    json=payload,
                )
            except httpx.HTTPError as e:
                logger.error(f"Gemini API request failed: {e}")
                raise AIUnavailableError(f"Gemini request failed: {e}") from e

            if response.status_code == 429 and attempt < max_retries:
                wait_seconds = (2 ** attempt) * self.settings.gemini_retry_base_seconds
                logger.warning(
                    f"Gemini rate limited. Waiting {wait_seconds:.0f}s before retry "
                    f"{attempt + 1}/{max_retries}"
                )
                await asyncio.sleep(wait_seconds)
                continue

            try:
                data = response.json()
            except ValueError:
                data = {}

            if response.status_code >= 400:
                error = data.get("error") if isinstance(data, dict) else None
                message = error.get("message") if isinstance(error, dict) else None
                logger.error(f"Gemini API error {response.status_code}: {message}")
                raise AIUnavailableError(message or f"Gemini API error: {response.status_code}")

            text = self._extract_text(data)
            if not text:
                raise AIUnavailableError("Empty response from Gemini")
            return text

        raise AIUnavailableError("Gemini API rate limit exceeded after retries")

    def _extract_text(self, data: Any) -> str:
        """Extract text content from a generateContent response."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return ""
        return text if isinstance(text, str) else ""

    # =========================================================================
    # QUESTION GENERATION
    # =========================================================================

    async def generate_questions(self, request: SelectionRequest) -> list[str]:
        """
        Generate the question list for an interview.

        Returns at most ``request.num_questions`` non-empty strings.
        """
        prompt = self.interviewer_prompts.generate_questions_prompt(request)
        raw = await self.call_gemini(prompt, temperature=0.8, trace_name="question_generation")
        data = parse_model_json(raw)

        if not isinstance(data, list):
            raise AIUnavailableError("Question response is not a JSON array")

        questions = [q.strip() for q in data if isinstance(q, str) and q.strip()]
        if not questions:
            raise AIUnavailableError("Question response contained no questions")

        return questions[:request.num_questions]

    # =========================================================================
    # ANSWER EVALUATION
    # =========================================================================

    async def evaluate_answer(
        self,
        question_text: str,
        answer_text: str,
        meta: InterviewMeta,
    ) -> AnswerEvaluation:
        """Score one answer; the result has the same shape as the local evaluator's."""
        prompt = self.evaluator_prompts.generate_evaluation_prompt(question_text, answer_text, meta)
        raw = await self.call_gemini(prompt, temperature=0.5, trace_name="answer_evaluation")
        data = parse_model_json(raw)

        try:
            return AnswerEvaluation.model_validate(data)
        except ValidationError as e:
            raise AIUnavailableError(f"Invalid evaluation payload: {e.error_count()} errors") from e

    # =========================================================================
    # REPORT GENERATION
    # =========================================================================

    async def generate_report(
        self,
        meta: InterviewMeta,
        answered: Sequence[tuple[str, str, int | None]],
    ) -> InterviewReport:
        """
        Ask the model for a holistic interview report.

        The grade in the payload is ignored and recomputed from the
        overall score so every report uses the same grade mapping.
        """
        prompt = self.report_prompts.generate_report_prompt(meta, answered)
        raw = await self.call_gemini(prompt, temperature=0.4, trace_name="report_generation")
        data = parse_model_json(raw)

        if not isinstance(data, dict):
            raise AIUnavailableError("Report response is not a JSON object")

        try:
            overall = int(data.get("overall_score"))
        except (TypeError, ValueError) as e:
            raise AIUnavailableError("Report response has no usable overall_score") from e

        try:
            return InterviewReport.model_validate({**data, "grade": score_to_grade(overall)})
        except ValidationError as e:
            raise AIUnavailableError(f"Invalid report payload: {e.error_count()} errors") from e

    # =========================================================================
    # TRACING
    # =========================================================================

    def _start_span(self, name: str, metadata: dict[str, Any]):
        if not self.langfuse:
            return None
        try:
            return self.langfuse.start_span(name=name, metadata=metadata)
        except Exception as lf_err:
            logger.warning(f"Langfuse span start failed: {lf_err}")
            return None

    def _end_span(self, span, output: dict[str, Any]) -> None:
        if not span:
            return
        try:
            span.update(output=output)
            span.end()
        except Exception as lf_err:
            logger.warning(f"Langfuse span end failed: {lf_err}")
