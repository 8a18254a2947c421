import pytest
from fastapi.testclient import TestClient

from data_hunter.api.routes import get_orchestrator
from data_hunter.main import app
from data_hunter.models.schemas import TextSearchResult
from data_hunter.services.extraction import FieldExtractionEngine
from data_hunter.services.image_locator import ImageLocator
from data_hunter.services.orchestrator import ResolutionOrchestrator
from data_hunter.services.text_acquirer import TextAcquirer
from conftest import StubTextSearch, StubValidator


@pytest.fixture
def client(settings):
    text_search = StubTextSearch(TextSearchResult(snippets=["Ingredients: oats, honey. Energy 1600kJ"]))
    orchestrator = ResolutionOrchestrator(
        ImageLocator(StubValidator(), config=settings),
        TextAcquirer(text_search=text_search, config=settings),
        FieldExtractionEngine(),
    )
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_search_returns_full_record(client):
    response = client.get("/api/search", params={"gtin": "5010029000016", "market": "uk"})

    assert response.status_code == 200
    body = response.json()
    assert body["gtin"] == "5010029000016"
    assert body["market"] == "UK"
    assert body["found"] is True
    assert body["status"] == "Found"
    assert body["ingredients"] == "oats, honey."
    assert body["energy"] == "1600kJ"
    assert body["image_url"] == "-"
    assert body["organic_cert"] == "-"


def test_search_without_gtin_is_missing(client):
    body = client.get("/api/search").json()

    assert body["found"] is False
    assert body["status"] == "Missing"
    assert body["market"] == "UK"


def test_markets(client):
    markets = client.get("/api/markets").json()

    codes = [m["code"] for m in markets]
    assert "DE" in codes and "FR" in codes
    assert {"code": "DE", "country": "Deutschland Germany", "language": "German"} in markets


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "Master Data Hunter API", "version": "1.0.0"}


def test_root(client):
    assert client.get("/").json()["docs"] == "/docs"
