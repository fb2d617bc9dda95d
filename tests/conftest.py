"""
共享测试数据：合法的模型回复、画像表单字段、记录调用的假分析器。
"""
import json

import pytest

from policylens.analysis import AnalysisResult, UserProfile

VALID_REPLY = {
    "policy_summary": "The policy restructures schooling and higher education.",
    "personal_impact": "As a salaried tech employee you may see new upskilling routes.",
    "benefits": ["More flexible degrees", "Vocational options", "Research funding"],
    "drawbacks": ["Transition uncertainty", "Uneven rollout", "Funding may lag targets"],
    "short_term_impact": "Little immediate change for working adults.",
    "long_term_impact": "A shifted talent pipeline over the next decade.",
    "user_actions": ["Follow official updates", "Look into certification programmes"],
}

PROFILE_FORM = {
    "ageGroup": "26-35",
    "occupation": "Employee",
    "locationType": "Urban - Metro",
    "sector": "Technology / IT",
}

POLICY_TEXT = (
    "The Digital Skills Act funds short certification courses for working adults, "
    "requires employers with more than 50 staff to offer annual training days, "
    "and creates a public registry of accredited providers with published outcomes."
)
assert len(POLICY_TEXT) >= 200


def fenced(payload: dict) -> str:
    """模拟模型常见的 ```json 代码块回复。"""
    return "Here is the analysis:\n```json\n" + json.dumps(payload, indent=2) + "\n```\n"


class FakeAnalyzer:
    """记录每次 analyze 调用；result 或 error 二选一决定行为。"""

    model = "fake/model"

    def __init__(self, result: dict | None = None, error: Exception | None = None):
        self.result = AnalysisResult(**(result or VALID_REPLY))
        self.error = error
        self.calls: list[dict] = []

    def analyze(self, text, profile: UserProfile, pdf_base64=None):
        self.calls.append({"text": text, "profile": profile, "pdf_base64": pdf_base64})
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_analyzer():
    return FakeAnalyzer()


@pytest.fixture
def profile():
    return UserProfile(**PROFILE_FORM)
