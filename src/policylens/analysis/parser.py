"""
模型回复解析：从可能被 markdown 代码块包裹的文本中取出 JSON，并校验为 AnalysisResult。

列表字段缺失或为空时用固定兜底文案替换，不让整次请求因部分回复失败；
文本字段缺失则整体判为不完整。
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from policylens.core.errors import IncompleteResponseError, ParseError
from .schemas import AnalysisResult

logger = logging.getLogger(__name__)

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```")
_BRACED = re.compile(r"\{[\s\S]*\}")

SCALAR_FIELDS = ("policy_summary", "personal_impact", "short_term_impact", "long_term_impact")

LIST_FALLBACKS: dict[str, list[str]] = {
    "benefits": ["Analysis pending - please try again"],
    "drawbacks": ["Analysis pending - please try again"],
    "user_actions": ["Stay informed about policy updates"],
}


def extract_json(text: str) -> dict[str, Any]:
    """```json 代码块优先，其次首个 { 到末个 } 的片段，都没有则整段尝试。"""
    raw = text or ""
    m = _FENCED_JSON.search(raw) or _BRACED.search(raw)
    if m:
        candidate = m.group(1) if m.re is _FENCED_JSON else m.group(0)
    else:
        candidate = raw
    try:
        data = json.loads(candidate)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error("JSON parsing error: %s", e)
        raise ParseError(str(e)) from e
    if not isinstance(data, dict):
        logger.error("JSON parsing error: expected an object, got %s", type(data).__name__)
        raise ParseError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _clean_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if item is None:
            continue
        s = item if isinstance(item, str) else str(item)
        if s.strip():
            items.append(s)
    return items


def validate_result(data: dict[str, Any]) -> AnalysisResult:
    """文本字段必须是非空字符串；列表字段缺失/非列表/为空时替换为兜底文案。"""
    missing = [
        field
        for field in SCALAR_FIELDS
        if not isinstance(data.get(field), str) or not data[field].strip()
    ]
    if missing:
        logger.error("Missing fields in AI response: %s", missing)
        raise IncompleteResponseError(f"missing fields: {', '.join(missing)}")

    values: dict[str, Any] = {field: data[field] for field in SCALAR_FIELDS}
    for field, fallback in LIST_FALLBACKS.items():
        items = _clean_list(data.get(field))
        if not items:
            logger.warning("AI response field %s empty or invalid, using fallback", field)
            items = list(fallback)
        values[field] = items
    return AnalysisResult(**values)


def parse_analysis(text: str) -> AnalysisResult:
    """模型原始回复 → AnalysisResult。"""
    return validate_result(extract_json(text))
