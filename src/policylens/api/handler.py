"""
请求处理：服务端权威校验 → 选择正文 / PDF 路径 → 交给分析器。

与 HTTP 解耦，app.py 只负责把 multipart 表单装进 AnalyzeForm、把异常映射成状态码。
"""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Optional

from policylens.analysis import AnalysisResult, PdfUpload, PolicyAnalyzer, UserProfile, INPUT_METHODS
from policylens.catalog import get_policy_by_id
from policylens.core.config import MAX_PDF_BYTES, MAX_POLICY_TEXT_CHARS, MIN_POLICY_TEXT_CHARS
from policylens.core.errors import ValidationError

logger = logging.getLogger(__name__)

MSG_PROFILE_INCOMPLETE = (
    "Please complete all required profile fields (age group, occupation, location type, and sector)"
)
MSG_TEXT_TOO_SHORT = (
    "Policy text must be at least 200 characters long. Please provide more detailed policy content."
)
MSG_PDF_TOO_LARGE = "PDF file is too large. Maximum size is 10MB."
MSG_PDF_MISSING = "Please select a PDF file"
MSG_PDF_WRONG_TYPE = "Please upload a PDF file"


@dataclass
class AnalyzeForm:
    """POST /api/analyze-policy 的表单内容。"""
    input_method: Optional[str] = None
    policy_text: Optional[str] = None
    pdf: Optional[PdfUpload] = None
    example_id: Optional[str] = None
    profile: UserProfile = field(default_factory=UserProfile)


def _resolve_method(raw: Optional[str]) -> str:
    method = (raw or "text").strip().lower() or "text"
    if method not in INPUT_METHODS:
        raise ValidationError(f"Unknown input method '{raw}'. Use one of: {', '.join(INPUT_METHODS)}.")
    return method


def _encode_pdf(pdf: Optional[PdfUpload]) -> str:
    if pdf is None or pdf.size == 0:
        raise ValidationError(MSG_PDF_MISSING)
    if not pdf.looks_like_pdf():
        raise ValidationError(MSG_PDF_WRONG_TYPE)
    if pdf.size > MAX_PDF_BYTES:
        raise ValidationError(MSG_PDF_TOO_LARGE)
    return base64.b64encode(pdf.content).decode("ascii")


def _resolve_text(method: str, form: AnalyzeForm) -> str:
    text = form.policy_text or ""
    if method == "example" and not text.strip() and form.example_id:
        policy = get_policy_by_id(form.example_id.strip())
        if policy is None:
            raise ValidationError(f"Unknown example policy '{form.example_id}'.")
        text = policy.text
    if len(text.strip()) < MIN_POLICY_TEXT_CHARS:
        raise ValidationError(MSG_TEXT_TOO_SHORT)
    if len(text) > MAX_POLICY_TEXT_CHARS:
        logger.warning(
            "Policy text truncated from %d to %d characters", len(text), MAX_POLICY_TEXT_CHARS
        )
        text = text[:MAX_POLICY_TEXT_CHARS]
    return text


def handle_analyze(form: AnalyzeForm, analyzer: PolicyAnalyzer) -> AnalysisResult:
    """校验失败抛 ValidationError，且此时绝不调用模型；分析失败的 AnalysisError 原样上抛。"""
    method = _resolve_method(form.input_method)
    if form.profile.missing_required():
        raise ValidationError(MSG_PROFILE_INCOMPLETE)

    if method == "pdf":
        pdf_base64 = _encode_pdf(form.pdf)
        return analyzer.analyze(None, form.profile, pdf_base64=pdf_base64)

    text = _resolve_text(method, form)
    return analyzer.analyze(text, form.profile)
