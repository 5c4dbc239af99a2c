"""
API Tests for the papers and questions routes
"""
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from papersmith.generation.external import ExternalPaperGenerator
from papersmith.generation.service import PaperService
from papersmith.llm.mock import MockLLMClient
from papersmith.main import app
from papersmith.observability import init_otel
from papersmith.questions.inmemory import InMemoryQuestionRepository
from papersmith.settings import Settings
from papersmith.storage.inmemory import InMemoryBackend
from papersmith.storage.store import PaperStore
from papersmith.wiring import get_question_repo, get_service


class UnreadableBackend(InMemoryBackend):
    async def load(self, name):
        raise OSError("permission denied")


@pytest.fixture
def service() -> PaperService:
    generator = ExternalPaperGenerator(MockLLMClient(), ["mock-1"], provider="mock", backoff_s=0)
    return PaperService(InMemoryQuestionRepository(), generator, PaperStore(InMemoryBackend()))


@pytest.fixture
async def client(service):
    app.dependency_overrides[get_service] = lambda: service
    app.dependency_overrides[get_question_repo] = InMemoryQuestionRepository
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def config_payload():
    return {
        "course_id": 1,
        "exam_type": "mid",
        "total_marks": 10,
        "units": [
            {"id": 1, "course_id": 1, "unit_number": 1, "title": "Introduction to Data Structures"},
            {"id": 2, "course_id": 1, "unit_number": 2, "title": "Arrays and Linked Lists"},
        ],
        "difficulty_distribution": {"easy": 50, "medium": 50},
        "bloom_distribution": {"1": 30, "2": 30, "3": 40},
    }


@pytest.mark.asyncio
async def test_health(client):
    """Test health endpoint"""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_validate_reports_errors(client, config_payload):
    """Test validation errors are returned without failing the request"""
    config_payload["difficulty_distribution"] = {"easy": 40, "medium": 50}

    response = await client.post("/papers/validate", json=config_payload)

    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is False
    assert body["errors"] == ["difficulty distribution sums to 90, expected 100"]


@pytest.mark.asyncio
async def test_generate_invalid_config(client, config_payload):
    """Test generating from an invalid config returns 422 with the errors"""
    config_payload["total_marks"] = 0

    response = await client.post("/papers/generate", json={"config": config_payload})

    assert response.status_code == 422
    assert "total_marks must be positive, got 0" in response.json()["detail"]["errors"]


@pytest.mark.asyncio
async def test_generate_and_manage_history(client, config_payload):
    """Test generating with persist, then reading and deleting the paper"""
    response = await client.post("/papers/generate", json={"config": config_payload, "persist": True})

    assert response.status_code == 200
    paper = response.json()
    assert paper["generation_method"] == "external"
    assert paper["model"] == "mock-1"
    assert paper["achieved_total_marks"] >= 10
    assert {q["unit_id"] for q in paper["questions"]} <= {1, 2}

    listed = (await client.get("/papers")).json()
    assert [p["paper_id"] for p in listed] == [paper["paper_id"]]

    fetched = await client.get(f"/papers/{paper['paper_id']}")
    assert fetched.status_code == 200
    assert fetched.json() == paper

    assert (await client.delete(f"/papers/{paper['paper_id']}")).status_code == 200
    assert (await client.get(f"/papers/{paper['paper_id']}")).status_code == 404


@pytest.mark.asyncio
async def test_generate_with_given_pool_and_seed(client, config_payload):
    """Test a caller-supplied pool is used as-is"""
    questions = [
        {"id": 100, "course_id": 1, "unit_id": 1, "text": "A", "marks": 5},
        {"id": 101, "course_id": 1, "unit_id": 2, "text": "B", "marks": 5},
    ]

    response = await client.post(
        "/papers/generate", json={"config": config_payload, "questions": questions, "seed": 3}
    )

    assert response.status_code == 200
    assert sorted(q["id"] for q in response.json()["questions"]) == [100, 101]


@pytest.mark.asyncio
async def test_save_and_clear(client, config_payload):
    """Test saving a paper directly and clearing history"""
    generated = (await client.post("/papers/generate", json={"config": config_payload})).json()

    saved = await client.post("/papers", json=generated)
    assert saved.status_code == 200
    assert len((await client.get("/papers")).json()) == 1

    assert (await client.delete("/papers")).json() == {"status": "cleared"}
    assert (await client.get("/papers")).json() == []


@pytest.mark.asyncio
async def test_list_questions_and_units(client):
    """Test question bank listing with course and unit filters"""
    questions = (await client.get("/questions", params={"course_id": 1, "unit_id": [2]})).json()
    units = (await client.get("/units", params={"course_id": 2})).json()

    assert {q["unit_id"] for q in questions} == {2}
    assert [u["unit_number"] for u in units] == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_resave_after_persist_keeps_one_copy(client, config_payload):
    """Test saving a persisted paper again does not duplicate it"""
    paper = (await client.post("/papers/generate", json={"config": config_payload, "persist": True})).json()

    assert (await client.post("/papers", json=paper)).status_code == 200

    assert [p["paper_id"] for p in (await client.get("/papers")).json()] == [paper["paper_id"]]


@pytest.mark.asyncio
async def test_store_read_failure_is_503(service):
    """Test a history backend that cannot be read answers 503"""
    service.store = PaperStore(UnreadableBackend())
    app.dependency_overrides[get_service] = lambda: service
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            listed = await ac.get("/papers")
            fetched = await ac.get("/papers/123")
    finally:
        app.dependency_overrides.clear()

    assert listed.status_code == 503
    assert fetched.status_code == 503
    assert "failed to load" in listed.json()["detail"]


def test_tracing_disabled_by_default():
    """Test tracing stays off unless enabled in settings"""
    assert init_otel(FastAPI(), Settings(observability_enabled=False)) is False
