"""Request building and response validation."""

import json

import pytest

from ai_commit_log.config import ProviderConfig, load_settings
from ai_commit_log.errors import ApplicationError, ExtractionError, ResponseFormatError, UsageError
from ai_commit_log.prompts import COMMIT_PROMPT, SYSTEM_PROMPT
from ai_commit_log.schema import build_request, extract_commit_message
from ai_commit_log.schema.chat import strip_code_fence

PATCH = "diff --git a/x.py b/x.py\n+print('x')"


@pytest.fixture
def provider():
    return ProviderConfig(name="openai", api_key="sk-test", model="gpt-test", api_url="https://example.invalid/v1")


def _body(content):
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


class TestBuildRequest:

    def test_payload_shape(self, provider):
        settings = load_settings()
        payload = build_request(PATCH, provider, settings).model_dump()

        assert payload["model"] == "gpt-test"
        assert payload["temperature"] == 0.3
        assert payload["max_tokens"] == 4096
        assert payload["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"{COMMIT_PROMPT}\n\n{PATCH}"},
        ]

    def test_user_content_ends_with_patch(self, provider):
        request = build_request(PATCH, provider, load_settings())
        assert request.messages[1].content.endswith("follows:\n\n" + PATCH)

    def test_prompt_example_shows_bullet_layout(self):
        assert "fix : addresses potential race conditions in the caching layer." in COMMIT_PROMPT
        assert "\n- Introduce" in COMMIT_PROMPT
        assert "\n- Modify" in COMMIT_PROMPT
        assert "\n- Update" in COMMIT_PROMPT

    @pytest.mark.parametrize("patch", ["", "   \n"])
    def test_empty_patch_is_usage_error(self, provider, patch):
        with pytest.raises(UsageError):
            build_request(patch, provider, load_settings())


class TestExtractCommitMessage:

    def test_extracts_first_choice(self):
        body = json.dumps({"choices": [
            {"message": {"content": "feature: add x\n\nBody text here."}},
            {"message": {"content": "fix: ignored"}},
        ]})
        assert extract_commit_message(body) == "feature: add x\n\nBody text here."

    @pytest.mark.parametrize("body", ["", "  \n"])
    def test_empty_body(self, body):
        with pytest.raises(ResponseFormatError, match="empty"):
            extract_commit_message(body)

    def test_invalid_json_keeps_raw_body(self):
        with pytest.raises(ResponseFormatError) as exc_info:
            extract_commit_message("<html>Bad Gateway</html>")
        assert exc_info.value.raw == "<html>Bad Gateway</html>"

    def test_provider_error_surfaced_verbatim(self):
        body = json.dumps({"error": {"message": "Invalid API key [code=401]", "type": "auth"}})
        with pytest.raises(ApplicationError) as exc_info:
            extract_commit_message(body)
        assert "Invalid API key [code=401]" in exc_info.value.message
        assert exc_info.value.raw is None

    def test_string_error(self):
        with pytest.raises(ApplicationError, match="quota exceeded"):
            extract_commit_message(json.dumps({"error": "quota exceeded"}))

    def test_error_checked_before_choices(self):
        body = json.dumps({"error": {"message": "boom"}, "choices": [{"message": {"content": "fix: x"}}]})
        with pytest.raises(ApplicationError):
            extract_commit_message(body)

    def test_empty_error_message_is_ignored(self):
        body = json.dumps({"error": {"message": ""}, "choices": [{"message": {"content": "fix: x"}}]})
        assert extract_commit_message(body) == "fix: x"

    @pytest.mark.parametrize("data", [
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": [{"message": {"content": "   "}}]},
        {"choices": "nope"},
        ["not", "an", "object"],
    ])
    def test_missing_content(self, data):
        body = json.dumps(data)
        with pytest.raises(ExtractionError) as exc_info:
            extract_commit_message(body)
        assert exc_info.value.raw == body

    def test_code_fence_removed(self):
        assert extract_commit_message(_body("```text\nfix: x\n\nBody.\n```")) == "fix: x\n\nBody."


class TestStripCodeFence:

    def test_plain_text_untouched(self):
        assert strip_code_fence("fix: x\n\nBody.") == "fix: x\n\nBody."

    def test_bare_fence(self):
        assert strip_code_fence("```\nfix: x\n```") == "fix: x"

    def test_inner_fence_untouched(self):
        text = "fix: x\n\n```\ncode\n```"
        assert strip_code_fence(text) == text
