import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("LITEAPI_API_KEY", "test-lite-key")
    monkeypatch.setenv("LITEAPI_WEBHOOK_TOKEN", "")
    monkeypatch.setenv("AMADEUS_API_KEY", "test-amadeus-key")
    monkeypatch.setenv("AMADEUS_API_SECRET", "test-amadeus-secret")
    monkeypatch.setenv("AMADEUS_BASE_URL", "https://test.api.amadeus.com")
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", "test-places-key")
    monkeypatch.setenv("OPENROUTER_API_KEY", "test-openrouter-key")
    monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "test-service-key")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "test-anon-key")
    monkeypatch.setenv("BOOK_RETRY_DELAY", "0")


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
