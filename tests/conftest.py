import httpx
import pytest

from checkout_console.core.storage import MemoryStore
from checkout_console.services.api_client import ApiClient
from mock_api.database import reset_all
from mock_api.main import app

from .fakes import FakeApi, RecordingNavigator


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture(autouse=True)
def reset_mock_api():
    reset_all()
    yield
    reset_all()


@pytest.fixture
async def api():
    """ApiClient wired to the mock data API in-process"""
    client = ApiClient("http://testserver", transport=httpx.ASGITransport(app=app))
    yield client
    await client.close()


@pytest.fixture
async def http():
    """Raw HTTP client against the mock data API"""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client
