"""Tests for report generation and retrieval."""

from conftest import register, start_interview

from test_api_interview import LONG_ANSWER, answer


def answered_interview(client, headers) -> int:
    body = start_interview(client, headers, job_role="Data Analyst", interview_type="technical", difficulty="Medium")
    interview_id = body["interview_id"]
    answer(client, headers, interview_id, body["questions"][0]["id"], LONG_ANSWER)       # 70
    answer(client, headers, interview_id, body["questions"][1]["id"], "I like it here")  # 50
    return interview_id


def test_generate_requires_answers(client, auth_headers):
    body = start_interview(client, auth_headers)
    response = client.post(f"/api/report/generate/{body['interview_id']}", headers=auth_headers)
    assert response.status_code == 400


def test_generate_builds_local_report(client, auth_headers):
    interview_id = answered_interview(client, auth_headers)

    response = client.post(f"/api/report/generate/{interview_id}", headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    report = body["report"]
    assert report["overall_score"] == 60
    assert report["grade"] == "Average"
    for skill in ("communication", "relevance", "confidence", "structure", "depth"):
        assert 0 <= report[skill] <= 100
        assert abs(report[skill] - 60) <= 12
    assert report["improvements"][2] == "Research the Data Analyst role more deeply before interviews."

    assert body["interview"]["status"] == "completed"
    assert body["interview"]["overall_score"] == 60
    assert len(body["qa_breakdown"]) == 3
    assert body["qa_breakdown"][2]["answer_text"] is None


def test_get_returns_stored_report_unchanged(client, auth_headers):
    interview_id = answered_interview(client, auth_headers)
    generated = client.post(f"/api/report/generate/{interview_id}", headers=auth_headers).json()

    fetched = client.get(f"/api/report/{interview_id}", headers=auth_headers).json()

    assert fetched["report_id"] == generated["report_id"]
    assert fetched["report"] == generated["report"]


def test_regenerating_keeps_history_and_get_returns_latest(client, auth_headers):
    interview_id = answered_interview(client, auth_headers)
    first = client.post(f"/api/report/generate/{interview_id}", headers=auth_headers).json()
    second = client.post(f"/api/report/generate/{interview_id}", headers=auth_headers).json()

    assert second["report_id"] > first["report_id"]

    latest = client.get(f"/api/report/{interview_id}", headers=auth_headers).json()
    assert latest["report_id"] == second["report_id"]
    assert latest["report"] == second["report"]

    listing = client.get("/api/report/all/me", headers=auth_headers).json()
    assert {item["report_id"] for item in listing} == {first["report_id"], second["report_id"]}
    assert all(item["interview_id"] == interview_id for item in listing)


def test_missing_report_is_not_found(client, auth_headers):
    body = start_interview(client, auth_headers)
    assert client.get(f"/api/report/{body['interview_id']}", headers=auth_headers).status_code == 404
    assert client.get("/api/report/99999", headers=auth_headers).status_code == 404


def test_reports_are_private(client, auth_headers):
    interview_id = answered_interview(client, auth_headers)
    client.post(f"/api/report/generate/{interview_id}", headers=auth_headers)
    intruder = register(client, email="intruder@example.com")

    assert client.get(f"/api/report/{interview_id}", headers=intruder).status_code == 404
    assert client.post(f"/api/report/generate/{interview_id}", headers=intruder).status_code == 404
    assert client.get("/api/report/all/me", headers=intruder).json() == []


def test_deleting_interview_removes_reports(client, auth_headers):
    interview_id = answered_interview(client, auth_headers)
    client.post(f"/api/report/generate/{interview_id}", headers=auth_headers)

    client.delete(f"/api/interview/{interview_id}", headers=auth_headers)

    assert client.get("/api/report/all/me", headers=auth_headers).json() == []
