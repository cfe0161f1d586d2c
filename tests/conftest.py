"""
Shared fixtures: isolated settings, an in-memory database and an API
client that never reaches the generation API.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from voicehire.api import dependencies
from voicehire.config.settings import get_settings
from voicehire.core.proctoring import MotionDetector, ProctorPolicy, ProctorRegistry, ProctorSession
from voicehire.db.database import create_db_engine, get_db, init_db


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def local_settings(monkeypatch):
    """Settings with no Gemini key, so every path uses the local engines."""
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("LANGFUSE_ENABLED", "false")
    get_settings.cache_clear()

    for name in ("_ai_reasoning", "_question_selector", "_evaluation_engine",
                 "_report_generator", "_proctor_registry"):
        monkeypatch.setattr(dependencies, name, None)

    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    SessionLocal = sessionmaker(bind=db_engine, expire_on_commit=False)
    with SessionLocal() as session:
        yield session


@pytest.fixture
def proctor_registry(clock):
    def new_session() -> ProctorSession:
        return ProctorSession(
            policy=ProctorPolicy(max_warnings=3, cooldown_seconds=8, dismiss_seconds=8, clock=clock),
            detector=MotionDetector(pixel_threshold=60, change_ratio=0.40),
            sample_interval_seconds=2,
        )

    return ProctorRegistry(new_session)


@pytest.fixture
def client(db_engine, proctor_registry):
    SessionLocal = sessionmaker(bind=db_engine, expire_on_commit=False)

    def override_get_db():
        with SessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[dependencies.get_proctor_registry] = lambda: proctor_registry

    yield TestClient(app)

    app.dependency_overrides.clear()


def register(client: TestClient, email: str = "candidate@example.com", name: str = "Alex Candidate") -> dict:
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": "secret123"},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def auth_headers(client):
    return register(client)


def start_interview(client: TestClient, headers: dict, **overrides) -> dict:
    payload = {
        "job_role": "Data Analyst",
        "interview_type": "behavioral",
        "difficulty": "Medium",
        "num_questions": 3,
    }
    payload.update(overrides)
    response = client.post("/api/interview/start", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
