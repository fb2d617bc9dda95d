"""
政策分析主 Prompt：角色、行为约束、政策正文、用户画像、任务与严格 JSON 输出格式。

模板是确定性的：同样的正文与画像总得到同样的 prompt，改行为只改这里。
"""
from __future__ import annotations

from .schemas import UserProfile

PDF_PLACEHOLDER = "Refer to the attached PDF document for the policy content."

RESULT_FIELDS = (
    "policy_summary",
    "personal_impact",
    "benefits",
    "drawbacks",
    "short_term_impact",
    "long_term_impact",
    "user_actions",
)

_TEMPLATE = """You are an expert public policy analyst and civic educator.

Your task is to analyze a public policy and explain its impact in a way that is:
- Simple
- Neutral
- Personalized
- Explainable
- Non-political
- Non-advisory

IMPORTANT RULES:
- Do NOT promote or oppose the policy.
- Do NOT give legal, financial, or medical advice.
- Focus on understanding and awareness.
- Clearly state uncertainty where applicable.

POLICY TEXT:
<<<
{policy_text}
>>>

USER PROFILE:
- Age Group: {age_group}
- Occupation: {occupation}
- Income Range: {income_range}
- Location Type: {location_type}
- Sector: {sector}

TASKS:
1. Explain the policy in plain language (max 150 words).
2. Explain how this policy specifically affects this user.
3. List 3 potential benefits relevant to this user.
4. List 3 possible drawbacks or concerns.
5. Describe short-term vs long-term impact.
6. Suggest 2 practical, non-prescriptive actions the user can consider.

OUTPUT FORMAT (STRICT JSON):
{{
  "policy_summary": "",
  "personal_impact": "",
  "benefits": [],
  "drawbacks": [],
  "short_term_impact": "",
  "long_term_impact": "",
  "user_actions": []
}}"""


def build_prompt(policy_text: str | None, profile: UserProfile) -> str:
    """policy_text 为空（仅上传 PDF）时用占位句指向附件。"""
    return _TEMPLATE.format(
        policy_text=policy_text or PDF_PLACEHOLDER,
        age_group=profile.age_group,
        occupation=profile.occupation,
        income_range=profile.income_range or "Not specified",
        location_type=profile.location_type,
        sector=profile.sector,
    )
