from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import find_dotenv, load_dotenv

from ai_commit_log.errors import UsageError

OPENAI = "openai"
TOGETHERAI = "togetherai"
PROVIDERS = (OPENAI, TOGETHERAI)


@dataclass(frozen=True)
class ProviderConfig:
    name: str
    api_key: str
    model: str
    api_url: str


@dataclass(frozen=True)
class Settings:
    provider: str

    openai_api_key: str | None
    openai_model: str
    openai_api_url: str

    together_api_key: str | None
    together_model: str
    together_api_url: str

    temperature: float
    max_tokens: int

    timeout_s: float
    retries: int
    retry_delay_s: float

    log_level: str

    def with_overrides(self, *, provider: str | None = None, model: str | None = None) -> Settings:
        """Apply command-line overrides; `model` targets the selected provider."""
        s = self
        if provider:
            s = replace(s, provider=provider.strip().lower())
        if model:
            if s.provider == OPENAI:
                s = replace(s, openai_model=model)
            elif s.provider == TOGETHERAI:
                s = replace(s, together_model=model)
        return s


def load_settings() -> Settings:
    # Allow users to keep secrets in a local `.env` (not committed), looked up from the cwd.
    load_dotenv(find_dotenv(usecwd=True), override=False)

    def getenv(*keys: str, default: str | None = None) -> str | None:
        for key in keys:
            v = os.getenv(key)
            if v is not None and v != "":
                return v
        return default

    def getnum(cast, *keys: str, default: str):
        raw = getenv(*keys, default=default) or default
        try:
            value = cast(raw)
        except ValueError:
            raise UsageError(f"{keys[0]} must be a number, got {raw!r}.") from None
        if value < 0:
            raise UsageError(f"{keys[0]} must not be negative, got {raw!r}.")
        return value

    provider = (getenv("AI_PROVIDER", default=TOGETHERAI) or TOGETHERAI).strip().lower()

    openai_api_key = getenv("OPENAI_TOKEN")
    openai_model = getenv("OPENAI_MODEL", default="gpt-4.5-preview") or ""
    openai_api_url = getenv("OPENAI_API_URL", default="https://api.openai.com/v1/chat/completions") or ""

    together_api_key = getenv("TOGETHER_KEY")
    together_model = getenv("TOGETHER_MODEL", default="Qwen/Qwen2.5-Coder-32B-Instruct") or ""
    together_api_url = getenv("TOGETHER_API_URL", default="https://api.together.xyz/v1/chat/completions") or ""

    # CURL_* names are still honoured so existing shell setups keep working.
    return Settings(
        provider=provider,
        openai_api_key=openai_api_key,
        openai_model=openai_model,
        openai_api_url=openai_api_url,
        together_api_key=together_api_key,
        together_model=together_model,
        together_api_url=together_api_url,
        temperature=getnum(float, "AI_TEMP", default="0.3"),
        max_tokens=getnum(int, "AI_MAX_TOKENS", default="4096"),
        timeout_s=getnum(float, "AI_TIMEOUT", "CURL_TIMEOUT", default="60"),
        retries=getnum(int, "AI_RETRIES", "CURL_RETRIES", default="2"),
        retry_delay_s=getnum(float, "AI_RETRY_DELAY", "CURL_RETRY_DELAY", default="5"),
        log_level=(getenv("AI_LOG_LEVEL", default="WARNING") or "WARNING").upper(),
    )


def resolve_provider(settings: Settings) -> ProviderConfig:
    """Pick endpoint, model and credential for the selected provider."""
    if settings.provider == OPENAI:
        if not settings.openai_api_key:
            raise UsageError("OPENAI_TOKEN env var is not set for AI_PROVIDER=openai.")
        return ProviderConfig(
            name=OPENAI,
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            api_url=settings.openai_api_url,
        )
    if settings.provider == TOGETHERAI:
        if not settings.together_api_key:
            raise UsageError("TOGETHER_KEY env var is not set for AI_PROVIDER=togetherai.")
        return ProviderConfig(
            name=TOGETHERAI,
            api_key=settings.together_api_key,
            model=settings.together_model,
            api_url=settings.together_api_url,
        )
    choices = " or ".join(repr(p) for p in PROVIDERS)
    raise UsageError(f"Unsupported AI_PROVIDER: {settings.provider!r}. Use {choices}.")
