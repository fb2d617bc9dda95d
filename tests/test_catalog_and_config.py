"""
示例政策目录、配置读取、token 预估、命令行渲染。
"""
import pytest
from unittest.mock import patch

from fastapi.testclient import TestClient

from policylens.analysis import AnalysisResult
from policylens.api.app import create_app
from policylens.catalog import EXAMPLE_POLICIES, get_policy_by_id, get_policy_list
from policylens.cli import main, render_result
from policylens.core.config import (
    MIN_POLICY_TEXT_CHARS,
    get_cors_origins,
    get_llm_timeout,
    require_api_key,
)
from policylens.core.errors import ConfigurationError
from policylens.core.tokens import count_tokens

from conftest import VALID_REPLY, FakeAnalyzer

EXPECTED_IDS = ["nep-2020", "climate-action", "universal-healthcare", "digital-privacy", "gig-worker-rights"]


# ──────────────────────────────────────────────
# 1. 示例政策
# ──────────────────────────────────────────────

class TestCatalog:
    def test_bundled_ids(self):
        assert [p.id for p in EXAMPLE_POLICIES] == EXPECTED_IDS

    def test_every_example_long_enough(self):
        for p in EXAMPLE_POLICIES:
            assert len(p.text.strip()) >= MIN_POLICY_TEXT_CHARS, p.id

    def test_lookup(self):
        assert get_policy_by_id("nep-2020").title == "National Education Policy 2020 (India)"
        assert get_policy_by_id("missing") is None

    def test_list_has_only_id_and_title(self):
        items = get_policy_list()
        assert len(items) == 5
        assert all(set(item) == {"id", "title"} for item in items)

    def test_http_endpoints(self):
        client = TestClient(create_app(analyzer=FakeAnalyzer()))
        r = client.get("/api/policies")
        assert r.status_code == 200
        assert [i["id"] for i in r.json()] == EXPECTED_IDS
        r = client.get("/api/policies/gig-worker-rights")
        assert r.status_code == 200
        assert r.json()["text"].startswith("The Gig Economy Worker Rights")
        r = client.get("/api/policies/unknown")
        assert r.status_code == 404
        assert r.json()["success"] is False


# ──────────────────────────────────────────────
# 2. 配置
# ──────────────────────────────────────────────

class TestConfig:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_require_api_key_missing(self, monkeypatch, value):
        if value is None:
            monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        else:
            monkeypatch.setenv("GEMINI_API_KEY", value)
        with pytest.raises(ConfigurationError):
            require_api_key()

    def test_require_api_key_strips(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "  abc  ")
        assert require_api_key() == "abc"

    @pytest.mark.parametrize("raw", ["soon", "0", "-5"])
    def test_invalid_timeout(self, monkeypatch, raw):
        monkeypatch.setenv("POLICYLENS_LLM_TIMEOUT", raw)
        with pytest.raises(ConfigurationError):
            get_llm_timeout()

    def test_default_timeout(self, monkeypatch):
        monkeypatch.delenv("POLICYLENS_LLM_TIMEOUT", raising=False)
        assert get_llm_timeout() == 120.0

    def test_cors_origins(self, monkeypatch):
        monkeypatch.setenv("POLICYLENS_CORS_ORIGINS", "https://a.example, https://b.example ,")
        assert get_cors_origins() == ["https://a.example", "https://b.example"]
        monkeypatch.delenv("POLICYLENS_CORS_ORIGINS")
        assert get_cors_origins() == ["*"]


# ──────────────────────────────────────────────
# 3. token 预估
# ──────────────────────────────────────────────

class TestTokens:
    def test_empty(self):
        assert count_tokens("") == 0

    def test_fallback_without_encoding(self):
        with patch("policylens.core.tokens._get_encoding", return_value=None):
            assert count_tokens("x" * 400) == 100
            assert count_tokens("hi") == 1


# ──────────────────────────────────────────────
# 4. 命令行
# ──────────────────────────────────────────────

class TestCli:
    def test_render_result_sections(self):
        out = render_result(AnalysisResult(**VALID_REPLY))
        assert "POLICY SUMMARY" in out
        assert VALID_REPLY["policy_summary"] in out
        for item in VALID_REPLY["user_actions"]:
            assert f"  - {item}" in out
        assert "not legal, financial, or medical advice" in out

    def test_examples_command(self, capsys):
        assert main(["examples"]) == 0
        out = capsys.readouterr().out
        for pid in EXPECTED_IDS:
            assert pid in out

    def test_analyze_rejects_short_text_locally(self, capsys):
        code = main([
            "analyze", "--text", "too short",
            "--age-group", "26-35", "--occupation", "Employee",
            "--location-type", "Rural", "--sector", "Energy",
        ])
        assert code == 2
        assert "at least 200 characters" in capsys.readouterr().err
