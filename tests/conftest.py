"""
Pytest configuration and fixtures
"""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.services.letter_store import LetterStore


def letter_payload(**overrides) -> dict:
    """A complete, valid letter form"""
    payload = {
        "applicantName": "Jane Doe",
        "relationship": "Research advisor",
        "durationKnown": "3 years",
        "institution": "State University",
        "targetProgram": "PhD in Computer Science",
        "targetInstitution": "MIT",
        "fieldDomain": "Machine Learning",
        "observedQualities": "Curious, rigorous, independent",
        "achievements": "First-author paper at NeurIPS",
        "softTraits": "Kind and collaborative",
        "referrerName": "Dr. Alan Smith",
        "referrerTitle": "Professor of Computer Science",
        "referrerEmail": "prof@uni.edu",
        "tone": "formal",
        "lorType": "graduate",
        "recommendationStrength": "strongly",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'letters.db'}"


@pytest_asyncio.fixture
async def store(database_url):
    store = LetterStore(database_url)
    await store.create_tables()
    yield store
    await store.close()


@pytest.fixture
def app_settings(database_url):
    return Settings(
        _env_file=None,
        database_url=database_url,
        gemini_api_key="test-key",
    )


@pytest.fixture
def client(app_settings):
    with TestClient(create_app(app_settings)) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Issue a session for a user id and return its auth headers"""
    def _login(user_id: str) -> dict:
        gate = client.app.state.session_gate
        token = client.portal.call(gate.issue_session, user_id)
        return {"Authorization": f"Bearer {token}"}
    return _login
