from __future__ import annotations

from ai_commit_log.config import ProviderConfig, Settings, resolve_provider

from .openai_compat import OpenAICompatLLM


def build_llm(settings: Settings, provider: ProviderConfig | None = None) -> OpenAICompatLLM:
    # Both supported providers speak the OpenAI chat-completions dialect.
    provider = provider or resolve_provider(settings)
    return OpenAICompatLLM(
        api_key=provider.api_key,
        model=provider.model,
        api_url=provider.api_url,
        timeout_s=settings.timeout_s,
        retries=settings.retries,
        retry_delay_s=settings.retry_delay_s,
        max_tokens=settings.max_tokens,
    )
