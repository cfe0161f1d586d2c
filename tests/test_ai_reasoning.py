"""Tests for the Gemini client, using a mocked HTTP transport."""

import json

import httpx
import pytest

from voicehire.config.settings import Settings
from voicehire.core.ai_reasoning import AIReasoningLayer, AIUnavailableError, parse_model_json
from voicehire.core.report_generator import ReportGenerator
from voicehire.models.question import SelectionRequest
from voicehire.models.report import Grade, InterviewMeta

META = InterviewMeta(job_role="Backend Engineer", interview_type="technical", difficulty="Hard")


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_layer(handler, **overrides) -> tuple[AIReasoningLayer, list[httpx.Request]]:
    calls: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return handler(request, len(calls))

    fields = {"gemini_api_key": "test-key", "gemini_retry_base_seconds": 0, "langfuse_enabled": False}
    fields.update(overrides)
    settings = Settings(**fields)
    client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return AIReasoningLayer(settings, client=client), calls


def test_parse_model_json_strips_code_fences():
    assert parse_model_json('```json\n["a", "b"]\n```') == ["a", "b"]
    assert parse_model_json('```\n{"score": 3}\n```') == {"score": 3}


def test_parse_model_json_rejects_garbage():
    with pytest.raises(AIUnavailableError):
        parse_model_json("Sure! Here are your questions:")


@pytest.mark.anyio
async def test_generate_questions_sends_key_and_truncates():
    questions = ["Q1?", "Q2?", "  ", "Q3?", "Q4?"]
    layer, calls = make_layer(lambda req, n: httpx.Response(200, json=gemini_body(json.dumps(questions))))

    request = SelectionRequest(job_role="Chef", interview_type="mixed", difficulty="Easy", num_questions=3)
    result = await layer.generate_questions(request)

    assert result == ["Q1?", "Q2?", "Q3?"]
    assert calls[0].url.params["key"] == "test-key"
    assert calls[0].url.path.endswith(":generateContent")
    await layer.close()


@pytest.mark.anyio
async def test_rate_limit_is_retried():
    def handler(request, attempt):
        if attempt == 1:
            return httpx.Response(429, json={"error": {"message": "quota"}})
        return httpx.Response(200, json=gemini_body('["Only question?"]'))

    layer, calls = make_layer(handler)
    request = SelectionRequest(job_role="Chef", interview_type="mixed", difficulty="Easy", num_questions=3)

    assert await layer.generate_questions(request) == ["Only question?"]
    assert len(calls) == 2
    await layer.close()


@pytest.mark.anyio
async def test_rate_limit_gives_up_after_max_retries():
    layer, calls = make_layer(lambda req, n: httpx.Response(429, json={"error": {"message": "quota"}}))

    with pytest.raises(AIUnavailableError):
        await layer.call_gemini("hello")
    assert len(calls) == 3
    await layer.close()


@pytest.mark.anyio
async def test_http_error_is_not_retried():
    layer, calls = make_layer(
        lambda req, n: httpx.Response(400, json={"error": {"message": "API key not valid"}})
    )

    with pytest.raises(AIUnavailableError, match="API key not valid"):
        await layer.call_gemini("hello")
    assert len(calls) == 1
    await layer.close()


@pytest.mark.anyio
async def test_missing_key_fails_without_request():
    layer, calls = make_layer(lambda req, n: httpx.Response(200), gemini_api_key="")

    with pytest.raises(AIUnavailableError):
        await layer.call_gemini("hello")
    assert calls == []
    await layer.close()


@pytest.mark.anyio
async def test_empty_candidates_are_unavailable():
    layer, _ = make_layer(lambda req, n: httpx.Response(200, json={"candidates": []}))

    with pytest.raises(AIUnavailableError):
        await layer.call_gemini("hello")
    await layer.close()


@pytest.mark.anyio
async def test_evaluate_answer_parses_feedback():
    payload = {"score": 77, "positive": "Clear.", "improve": "Add numbers.", "brief": "Solid."}
    layer, _ = make_layer(
        lambda req, n: httpx.Response(200, json=gemini_body(f"```json\n{json.dumps(payload)}\n```"))
    )

    result = await layer.evaluate_answer("What is REST?", "An architectural style.", META)

    assert result.score == 77
    assert result.improve == "Add numbers."
    await layer.close()


@pytest.mark.anyio
async def test_evaluate_answer_rejects_out_of_range_score():
    payload = {"score": 140, "positive": "x", "improve": "y", "brief": "z"}
    layer, _ = make_layer(lambda req, n: httpx.Response(200, json=gemini_body(json.dumps(payload))))

    with pytest.raises(AIUnavailableError):
        await layer.evaluate_answer("Q", "A", META)
    await layer.close()


@pytest.mark.anyio
async def test_report_grade_is_recomputed_from_score():
    payload = {
        "overall_score": 50,
        "grade": "Excellent",
        "communication": 55,
        "relevance": 48,
        "confidence": 52,
        "structure": 45,
        "depth": 50,
        "strengths": ["Polite.", "On topic.", "Calm."],
        "improvements": ["Go deeper.", "Use examples.", "Quantify impact."],
        "recommendation": "Practice more.",
    }
    layer, _ = make_layer(lambda req, n: httpx.Response(200, json=gemini_body(json.dumps(payload))))

    report = await layer.generate_report(META, [("Q", "A", 50)])

    assert report.overall_score == 50
    assert report.grade == Grade.NEEDS_IMPROVEMENT
    await layer.close()


@pytest.mark.anyio
async def test_report_without_score_is_unavailable():
    layer, _ = make_layer(lambda req, n: httpx.Response(200, json=gemini_body('{"grade": "Good"}')))

    with pytest.raises(AIUnavailableError):
        await layer.generate_report(META, [("Q", "A", 50)])
    await layer.close()


@pytest.mark.anyio
async def test_only_first_part_text_is_used():
    body = {"candidates": [{"content": {"parts": [{"text": "first"}, {"text": " second"}]}}]}
    layer, _ = make_layer(lambda req, n: httpx.Response(200, json=body))

    assert await layer.call_gemini("hello") == "first"
    await layer.close()


SHORT_REPORT = {
    "overall_score": 82,
    "communication": 80,
    "relevance": 84,
    "confidence": 79,
    "structure": 83,
    "depth": 81,
    "strengths": ["Clear."],
    "improvements": ["Go deeper."],
    "recommendation": "Nearly there.",
}


@pytest.mark.anyio
async def test_report_needs_three_strengths_and_improvements():
    layer, _ = make_layer(lambda req, n: httpx.Response(200, json=gemini_body(json.dumps(SHORT_REPORT))))

    with pytest.raises(AIUnavailableError):
        await layer.generate_report(META, [("Q", "A", 50)])
    await layer.close()


@pytest.mark.anyio
async def test_short_report_falls_back_to_local_synthesis():
    layer, _ = make_layer(lambda req, n: httpx.Response(200, json=gemini_body(json.dumps(SHORT_REPORT))))

    report = await ReportGenerator(layer).generate(META, [("Q", "A", 50)])

    assert report.overall_score == 50
    assert len(report.strengths) == 3
    assert report.improvements[2] == "Research the Backend Engineer role more deeply before interviews."
    await layer.close()
