from __future__ import annotations

import json
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ai_commit_log.config import ProviderConfig, Settings
from ai_commit_log.errors import ApplicationError, ExtractionError, ResponseFormatError, UsageError
from ai_commit_log.prompts import COMMIT_PROMPT, SYSTEM_PROMPT

_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\n([\s\S]*?)\n?```$")


class ChatMessage(BaseModel):
    role: str  # "system" | "user" | "assistant"
    content: str


class ChatRequest(BaseModel):
    """JSON body of a chat-completions call."""

    model: str
    temperature: float
    max_tokens: int
    messages: list[ChatMessage] = Field(default_factory=list)


class ProviderError(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: str | None = None


class ChoiceMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    content: str | None = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: ChoiceMessage | None = None


class ChatResponse(BaseModel):
    """The parts of a provider response we consume; everything else is ignored."""

    model_config = ConfigDict(extra="allow")

    choices: list[Choice] = Field(default_factory=list)


def build_request(patch: str, provider: ProviderConfig, settings: Settings) -> ChatRequest:
    if not patch or not patch.strip():
        raise UsageError("No patch provided. Pipe a git diff or patch content.")
    return ChatRequest(
        model=provider.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        messages=[
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(role="user", content=f"{COMMIT_PROMPT}\n\n{patch}"),
        ],
    )


def extract_commit_message(body: str) -> str:
    """
    Validate a raw response body and return the first choice's content.

    Checks run in order and the first failure wins:
    - empty body
    - body is not JSON
    - provider error payload (`error.message`, or `error` as a plain string)
    - no usable `choices[0].message.content`
    """
    if not body or not body.strip():
        raise ResponseFormatError("API response was empty. Check API key, endpoint, and network.")

    try:
        data = json.loads(body)
    except ValueError:
        raise ResponseFormatError("Invalid API response format (not valid JSON).", raw=body) from None

    if not isinstance(data, dict):
        raise ExtractionError("Failed to extract commit message from API response.", raw=body)

    api_error = _provider_error_message(data.get("error"))
    if api_error:
        raise ApplicationError(f"API returned: {api_error}")

    try:
        parsed = ChatResponse.model_validate(data)
    except ValidationError:
        raise ExtractionError("Failed to extract commit message from API response.", raw=body) from None

    content = ""
    if parsed.choices and parsed.choices[0].message is not None:
        content = parsed.choices[0].message.content or ""
    if not content.strip():
        raise ExtractionError("Failed to extract commit message from API response.", raw=body)
    return strip_code_fence(content)


def strip_code_fence(text: str) -> str:
    """Unwrap a message the model put inside a single ``` fence."""
    m = _FENCE_RE.match(text.strip())
    if m:
        return m.group(1)
    return text


def _provider_error_message(error: object) -> str:
    message = ""
    if isinstance(error, str):
        message = error
    elif isinstance(error, dict):
        try:
            message = ProviderError.model_validate(error).message or ""
        except ValidationError:
            message = ""
    return message if message.strip() else ""
