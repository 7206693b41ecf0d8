from __future__ import annotations

import logging
import threading

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from ai_commit_log.errors import TransportError
from ai_commit_log.schema import ChatMessage, ChatRequest, extract_commit_message

logger = logging.getLogger(__name__)

# Same set curl treats as transient with --retry.
TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)


def _is_transient_status(response: httpx.Response) -> bool:
    return response.status_code in TRANSIENT_STATUS_CODES


def _last_outcome(retry_state: RetryCallState) -> httpx.Response:
    # Re-raises the last exception, or hands back the last (transient) response.
    return retry_state.outcome.result()


class OpenAICompatLLM:
    """
    Minimal OpenAI-compatible ChatCompletions client via raw HTTP.
    Works with OpenAI, Together AI or any OpenAI-compatible gateway if you point api_url accordingly.
    """

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        api_url: str = "https://api.openai.com/v1/chat/completions",
        timeout_s: float = 60.0,
        retries: int = 2,
        retry_delay_s: float = 5.0,
        max_tokens: int = 4096,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.timeout_s = timeout_s
        self.retries = retries
        self.retry_delay_s = retry_delay_s
        self.max_tokens = max_tokens
        self.transport = transport

    def post(self, request: ChatRequest) -> str:
        """Send the request, retrying transient failures, and return the raw body."""
        retryer = Retrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=wait_fixed(self.retry_delay_s),
            retry=retry_if_exception_type(TRANSIENT_ERRORS) | retry_if_result(_is_transient_status),
            retry_error_callback=_last_outcome,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        logger.debug("POST %s (model=%s)", self.api_url, request.model)
        try:
            r = retryer(self._send, request.model_dump())
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            attempts = retryer.statistics.get("attempt_number", 1)
            raise TransportError(f"Request to {self.api_url} failed after {attempts} attempt(s): {exc}") from exc
        logger.debug("HTTP %s, %d bytes", r.status_code, len(r.content))
        return r.text

    def chat(self, messages: list[ChatMessage], *, temperature: float = 0.3) -> str:
        request = ChatRequest(
            model=self.model,
            temperature=temperature,
            max_tokens=self.max_tokens,
            messages=messages,
        )
        return extract_commit_message(self.post(request))

    def _send(self, payload: dict) -> httpx.Response:
        """One attempt, cut off once `timeout_s` has elapsed in total (like curl --max-time)."""
        result: dict = {}

        def _runner() -> None:
            try:
                result["response"] = self._post_once(payload)
            except BaseException as e:  # re-raised on the calling thread
                result["error"] = e

        t = threading.Thread(target=_runner, name="ai-commit-log-post", daemon=True)
        t.start()
        t.join(timeout=self.timeout_s or None)
        if t.is_alive():
            # The daemon thread is abandoned; its reply, if any, is ignored.
            raise httpx.ReadTimeout(f"No complete response within {self.timeout_s:g}s")
        if "error" in result:
            raise result["error"]
        return result["response"]

    def _post_once(self, payload: dict) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        with httpx.Client(timeout=self.timeout_s or None, transport=self.transport) as client:
            return client.post(self.api_url, json=payload, headers=headers)
