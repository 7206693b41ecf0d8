import pytest

ENV_KEYS = [
    "AI_PROVIDER",
    "OPENAI_TOKEN",
    "TOGETHER_KEY",
    "OPENAI_MODEL",
    "TOGETHER_MODEL",
    "OPENAI_API_URL",
    "TOGETHER_API_URL",
    "AI_TEMP",
    "AI_MAX_TOKENS",
    "AI_TIMEOUT",
    "AI_RETRIES",
    "AI_RETRY_DELAY",
    "CURL_TIMEOUT",
    "CURL_RETRIES",
    "CURL_RETRY_DELAY",
    "AI_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from the caller's environment and any local .env file."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
