"""
政策分析器单元测试：prompt 构造、模型调用参数、异常分类。LLM 全部 mock，无需 API key。
"""
import base64
import json

import pytest
from unittest.mock import MagicMock, patch

from policylens.analysis import PolicyAnalyzer, UserProfile, build_analyzer, build_prompt
from policylens.analysis.prompt import PDF_PLACEHOLDER, RESULT_FIELDS
from policylens.analysis.provider_errors import (
    MSG_BAD_CREDENTIALS,
    MSG_GENERIC,
    MSG_QUOTA,
    MSG_TIMEOUT,
    classify_provider_error,
)
from policylens.core.errors import ConfigurationError, InputError, IncompleteResponseError, ProviderError
from policylens.core.llm import build_messages, completion

from conftest import POLICY_TEXT, VALID_REPLY, fenced

_PATCH_LLM = "policylens.analysis.analyzer.llm_completion"


def _reply(content: str) -> MagicMock:
    resp = MagicMock()
    resp.choices[0].message.content = content
    return resp


@pytest.fixture
def analyzer():
    return PolicyAnalyzer(api_key="test-key", model="gemini/gemini-2.5-flash", timeout=30)


# ──────────────────────────────────────────────
# 1. build_prompt
# ──────────────────────────────────────────────

class TestBuildPrompt:
    def test_embeds_text_and_every_profile_field(self, profile):
        p = UserProfile(**{**profile.model_dump(), "income_range": "₹6-10 lakh"})
        prompt = build_prompt(POLICY_TEXT, p)
        assert "<<<\n" + POLICY_TEXT + "\n>>>" in prompt
        for value in ("26-35", "Employee", "₹6-10 lakh", "Urban - Metro", "Technology / IT"):
            assert value in prompt

    def test_missing_income_shows_not_specified(self, profile):
        assert "- Income Range: Not specified" in build_prompt(POLICY_TEXT, profile)

    def test_placeholder_when_only_pdf(self, profile):
        assert PDF_PLACEHOLDER in build_prompt(None, profile)

    def test_mandates_all_seven_fields_and_rules(self, profile):
        prompt = build_prompt(POLICY_TEXT, profile)
        for field in RESULT_FIELDS:
            assert f'"{field}"' in prompt
        assert "Do NOT give legal, financial, or medical advice." in prompt
        assert "Clearly state uncertainty" in prompt

    def test_deterministic(self, profile):
        assert build_prompt(POLICY_TEXT, profile) == build_prompt(POLICY_TEXT, profile)


# ──────────────────────────────────────────────
# 2. analyze — 输入校验
# ──────────────────────────────────────────────

class TestAnalyzeInput:
    def test_no_text_no_pdf(self, analyzer, profile):
        with patch(_PATCH_LLM) as llm:
            with pytest.raises(InputError) as exc:
                analyzer.analyze(None, profile)
        assert exc.value.user_message == "Please provide either policy text or a PDF file."
        llm.assert_not_called()

    def test_near_empty_text_counts_as_absent(self, analyzer, profile):
        with patch(_PATCH_LLM) as llm:
            with pytest.raises(InputError):
                analyzer.analyze("  short  ", profile)
        llm.assert_not_called()

    @pytest.mark.parametrize("missing", ["age_group", "occupation"])
    def test_profile_without_age_or_occupation(self, analyzer, profile, missing):
        incomplete = profile.model_copy(update={missing: ""})
        with patch(_PATCH_LLM) as llm:
            with pytest.raises(InputError) as exc:
                analyzer.analyze(POLICY_TEXT, incomplete)
        assert "age group and occupation" in exc.value.user_message
        llm.assert_not_called()


# ──────────────────────────────────────────────
# 3. analyze — 模型调用
# ──────────────────────────────────────────────

class TestAnalyzeCall:
    def test_text_path_returns_result(self, analyzer, profile):
        with patch(_PATCH_LLM, return_value=_reply(fenced(VALID_REPLY))) as llm:
            result = analyzer.analyze(POLICY_TEXT, profile)
        assert result.model_dump() == VALID_REPLY
        kwargs = llm.call_args.kwargs
        assert kwargs["model"] == "gemini/gemini-2.5-flash"
        assert kwargs["api_key"] == "test-key"
        assert kwargs["timeout"] == 30
        content = kwargs["messages"][0]["content"]
        assert isinstance(content, str)
        assert POLICY_TEXT in content

    def test_pdf_sent_as_second_content_part(self, analyzer, profile):
        pdf_b64 = base64.b64encode(b"%PDF-1.4 fake").decode()
        with patch(_PATCH_LLM, return_value=_reply(json.dumps(VALID_REPLY))) as llm:
            analyzer.analyze(None, profile, pdf_base64=pdf_b64)
        parts = llm.call_args.kwargs["messages"][0]["content"]
        assert parts[0]["type"] == "text"
        assert PDF_PLACEHOLDER in parts[0]["text"]
        assert parts[1]["type"] == "file"
        assert parts[1]["file"]["file_data"] == "data:application/pdf;base64," + pdf_b64

    def test_incomplete_reply_propagates(self, analyzer, profile):
        partial = {k: v for k, v in VALID_REPLY.items() if k != "policy_summary"}
        with patch(_PATCH_LLM, return_value=_reply(fenced(partial))):
            with pytest.raises(IncompleteResponseError):
                analyzer.analyze(POLICY_TEXT, profile)

    def test_called_once_no_retry_on_failure(self, analyzer, profile):
        with patch(_PATCH_LLM, side_effect=Exception("503 Service Unavailable")) as llm:
            with pytest.raises(ProviderError):
                analyzer.analyze(POLICY_TEXT, profile)
        assert llm.call_count == 1

    def test_provider_error_message_is_user_safe(self, analyzer, profile):
        with patch(_PATCH_LLM, side_effect=Exception("API key not valid. Please pass a valid API key. [internal-id 42]")):
            with pytest.raises(ProviderError) as exc:
                analyzer.analyze(POLICY_TEXT, profile)
        assert exc.value.user_message == MSG_BAD_CREDENTIALS
        assert "internal-id" not in exc.value.user_message


# ──────────────────────────────────────────────
# 4. classify_provider_error
# ──────────────────────────────────────────────

class TestClassifyProviderError:
    @pytest.mark.parametrize("message,expected", [
        ("API key not valid", MSG_BAD_CREDENTIALS),
        ("Resource has been exhausted (e.g. check quota).", MSG_QUOTA),
        ("Rate limit reached for requests", MSG_QUOTA),
        ("Request timeout after 120s", MSG_TIMEOUT),
        ("The read operation timed out", MSG_TIMEOUT),
        ("Connection reset by peer", MSG_GENERIC),
    ])
    def test_message_fallback(self, message, expected):
        assert classify_provider_error(Exception(message)) == expected

    def test_structured_rate_limit_error(self):
        import litellm

        err = litellm.RateLimitError(message="too many", llm_provider="gemini", model="gemini-2.5-flash")
        assert classify_provider_error(err) == MSG_QUOTA

    def test_structured_timeout_error(self):
        import litellm

        err = litellm.Timeout(message="deadline", model="gemini-2.5-flash", llm_provider="gemini")
        assert classify_provider_error(err) == MSG_TIMEOUT

    def test_type_check_failure_falls_back_to_text(self):
        with patch(
            "policylens.analysis.provider_errors._classify_by_type",
            side_effect=ImportError("deadlock detected"),
        ):
            assert classify_provider_error(Exception("Request timeout")) == MSG_TIMEOUT

    def test_unprintable_error_is_generic(self):
        class Unprintable(Exception):
            def __str__(self):
                raise RuntimeError("no text")

        assert classify_provider_error(Unprintable()) == MSG_GENERIC

    def test_all_messages_share_prefix(self):
        for msg in (MSG_BAD_CREDENTIALS, MSG_QUOTA, MSG_TIMEOUT, MSG_GENERIC):
            assert msg.startswith("Failed to analyze policy. ")


# ──────────────────────────────────────────────
# 5. build_analyzer — 启动时取配置
# ──────────────────────────────────────────────

class TestBuildAnalyzer:
    def test_missing_key_fails_fast(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError) as exc:
            build_analyzer()
        assert "API key" in exc.value.user_message

    def test_reads_model_and_timeout(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "k-123")
        monkeypatch.setenv("POLICYLENS_MODEL", "openai/gpt-4o")
        monkeypatch.setenv("POLICYLENS_LLM_TIMEOUT", "45")
        a = build_analyzer()
        assert (a.api_key, a.model, a.timeout) == ("k-123", "openai/gpt-4o", 45.0)


# ──────────────────────────────────────────────
# 6. core.llm.completion — 默认取配置
# ──────────────────────────────────────────────

class TestCompletionDefaults:
    def test_defaults_from_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        monkeypatch.setenv("POLICYLENS_MODEL", "gemini/test-model")
        monkeypatch.setenv("POLICYLENS_LLM_TIMEOUT", "45")
        with patch("policylens.core.llm.litellm_completion") as llm:
            completion(build_messages("hi"))
        kwargs = llm.call_args.kwargs
        assert kwargs["model"] == "gemini/test-model"
        assert kwargs["api_key"] == "env-key"
        assert kwargs["timeout"] == 45.0

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        with patch("policylens.core.llm.litellm_completion") as llm:
            completion(build_messages("hi"), model="openai/gpt-4o", api_key="k", timeout=5)
        kwargs = llm.call_args.kwargs
        assert (kwargs["model"], kwargs["api_key"], kwargs["timeout"]) == ("openai/gpt-4o", "k", 5)

    def test_empty_messages_rejected(self):
        with patch("policylens.core.llm.litellm_completion") as llm:
            with pytest.raises(ValueError):
                completion([])
        llm.assert_not_called()
