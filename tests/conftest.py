import pytest

_ENV_VARS = (
    "ANTHROPIC_VERTEX_PROJECT_ID",
    "CLOUD_ML_REGION",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GOOGLE_CLOUD_PROJECT",
    "GOOGLE_CLOUD_LOCATION",
    "GOOGLE_GENAI_USE_GCA",
    "GOOGLE_GENAI_USE_VERTEXAI",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without any auth-related environment variables."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep stray .env files out of the tests
    monkeypatch.setattr("claude_bridge.auth.load_dotenv", lambda *a, **k: False)
    yield monkeypatch


@pytest.fixture
def claude_env(monkeypatch):
    """Environment for a Claude-on-Vertex session."""
    monkeypatch.setenv("ANTHROPIC_VERTEX_PROJECT_ID", "test-project")
    monkeypatch.setenv("CLOUD_ML_REGION", "us-central1")
    return monkeypatch
