from __future__ import annotations

from typing import Protocol

from ai_commit_log.schema import ChatMessage, ChatRequest


class LLMClient(Protocol):
    def post(self, request: ChatRequest) -> str:
        """Send one request and return the raw response body."""
        raise NotImplementedError

    def chat(self, messages: list[ChatMessage], *, temperature: float = 0.3) -> str:
        """Return assistant text output."""
        raise NotImplementedError
