"""Tests for the interview lifecycle endpoints."""

from conftest import register, start_interview

from voicehire.core.question_bank import QUESTION_BANK
from voicehire.models.question import QuestionCategory

LONG_ANSWER = (
    "First I mapped the problem. For example we had slow reports "
    "so I rewrote the queries and tested them carefully."
)


def answer(client, headers, interview_id, question_id, text=LONG_ANSWER):
    return client.post(
        f"/api/interview/{interview_id}/answer",
        json={"question_id": question_id, "answer_text": text},
        headers=headers,
    )


def test_start_uses_local_question_bank(client, auth_headers):
    body = start_interview(client, auth_headers, interview_type="technical", num_questions=4)

    questions = body["questions"]
    assert len(questions) == 4
    assert [q["question_index"] for q in questions] == [0, 1, 2, 3]
    pool = set(QUESTION_BANK[QuestionCategory.TECHNICAL])
    assert all(q["question_text"] in pool for q in questions[1:])


def test_start_caps_at_pool_size(client, auth_headers):
    body = start_interview(client, auth_headers, interview_type="unknown-type", num_questions=20)
    assert len(body["questions"]) == 15


def test_start_validates_request(client, auth_headers):
    missing_role = client.post(
        "/api/interview/start",
        json={"interview_type": "mixed", "difficulty": "Easy", "num_questions": 3},
        headers=auth_headers,
    )
    zero_questions = client.post(
        "/api/interview/start",
        json={"job_role": "Chef", "interview_type": "mixed", "difficulty": "Easy", "num_questions": 0},
        headers=auth_headers,
    )
    assert missing_role.status_code == 422
    assert zero_questions.status_code == 422


def test_answer_is_scored_and_stored(client, auth_headers):
    body = start_interview(client, auth_headers, difficulty="Medium")
    question = body["questions"][0]

    response = answer(client, auth_headers, body["interview_id"], question["id"])
    assert response.status_code == 200
    feedback = response.json()["feedback"]
    assert feedback["score"] == 70
    assert feedback["positive"] and feedback["improve"] and feedback["brief"]

    detail = client.get(f"/api/interview/{body['interview_id']}", headers=auth_headers).json()
    assert detail["interview"]["answered_count"] == 1
    assert detail["questions"][0]["answer_text"] == LONG_ANSWER
    assert detail["questions"][0]["score"] == 70
    assert detail["questions"][1]["answer_text"] is None


def test_short_answer_is_rejected(client, auth_headers):
    body = start_interview(client, auth_headers)
    response = answer(client, auth_headers, body["interview_id"], body["questions"][0]["id"], text="  ok   ")
    assert response.status_code == 422


def test_second_answer_to_same_question_conflicts(client, auth_headers):
    body = start_interview(client, auth_headers)
    question_id = body["questions"][0]["id"]

    assert answer(client, auth_headers, body["interview_id"], question_id).status_code == 200
    assert answer(client, auth_headers, body["interview_id"], question_id).status_code == 409


def test_unknown_question_or_interview_is_not_found(client, auth_headers):
    body = start_interview(client, auth_headers)
    assert answer(client, auth_headers, body["interview_id"], 99999).status_code == 404
    assert answer(client, auth_headers, 99999, body["questions"][0]["id"]).status_code == 404


def test_other_users_interviews_are_invisible(client, auth_headers):
    body = start_interview(client, auth_headers)
    intruder = register(client, email="intruder@example.com")

    assert client.get(f"/api/interview/{body['interview_id']}", headers=intruder).status_code == 404
    assert answer(client, intruder, body["interview_id"], body["questions"][0]["id"]).status_code == 404
    assert client.delete(f"/api/interview/{body['interview_id']}", headers=intruder).status_code == 404
    assert client.get("/api/interview/history", headers=intruder).json() == []


def test_complete_averages_scores(client, auth_headers):
    body = start_interview(client, auth_headers, difficulty="Medium")
    interview_id = body["interview_id"]
    answer(client, auth_headers, interview_id, body["questions"][0]["id"])               # 70
    answer(client, auth_headers, interview_id, body["questions"][1]["id"], "I like it here")  # 50

    response = client.patch(f"/api/interview/{interview_id}/complete", headers=auth_headers)
    assert response.status_code == 200
    interview = response.json()["interview"]
    assert interview["status"] == "completed"
    assert interview["overall_score"] == 60
    assert interview["grade"] == "Average"
    assert interview["completed_at"] is not None


def test_complete_without_answers_scores_zero(client, auth_headers):
    body = start_interview(client, auth_headers)
    interview = client.patch(f"/api/interview/{body['interview_id']}/complete", headers=auth_headers).json()["interview"]
    assert interview["overall_score"] == 0
    assert interview["grade"] == "Poor"


def test_answers_rejected_after_completion(client, auth_headers):
    body = start_interview(client, auth_headers)
    client.patch(f"/api/interview/{body['interview_id']}/complete", headers=auth_headers)

    response = answer(client, auth_headers, body["interview_id"], body["questions"][0]["id"])
    assert response.status_code == 409


def test_history_lists_interviews_with_answer_counts(client, auth_headers):
    first = start_interview(client, auth_headers, job_role="Chef")
    second = start_interview(client, auth_headers, job_role="Pilot")
    answer(client, auth_headers, first["interview_id"], first["questions"][0]["id"])

    history = client.get("/api/interview/history", headers=auth_headers).json()

    assert [item["id"] for item in history] == [second["interview_id"], first["interview_id"]]
    counts = {item["job_role"]: item["answered_count"] for item in history}
    assert counts == {"Chef": 1, "Pilot": 0}


def test_delete_removes_interview(client, auth_headers):
    body = start_interview(client, auth_headers)
    answer(client, auth_headers, body["interview_id"], body["questions"][0]["id"])

    assert client.delete(f"/api/interview/{body['interview_id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/interview/{body['interview_id']}", headers=auth_headers).status_code == 404
    assert client.get("/api/interview/history", headers=auth_headers).json() == []


def test_metadata(client):
    types = client.get("/api/metadata/interview-types").json()
    assert {t["id"] for t in types} == {"behavioral", "technical", "situational", "mixed"}
    assert all(t["question_count"] == 15 for t in types)

    difficulties = client.get("/api/metadata/difficulties").json()
    assert [d["max_local_score"] for d in difficulties] == [95, 90, 85, 80]
