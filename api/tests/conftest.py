import pytest
from httpx import ASGITransport, AsyncClient

from magnet_rss.database import settings
from magnet_rss.dependencies import get_store
from magnet_rss.main import app
from magnet_rss.services.kv_store import MemoryKeyValueStore

TEST_SECRET = "test-secret-for-testing"


@pytest.fixture(scope="function")
def store():
    return MemoryKeyValueStore()


@pytest.fixture(scope="function")
async def client(store):
    app.dependency_overrides[get_store] = lambda: store
    original_secret = settings.magnet_rss_key
    settings.magnet_rss_key = TEST_SECRET
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    settings.magnet_rss_key = original_secret
    app.dependency_overrides.clear()
