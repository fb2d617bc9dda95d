"""
输入表单：客户端本地预校验，通过后才交给流程控制器。服务端仍会做权威复核。
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from policylens.analysis import PdfUpload, PolicySubmission, UserProfile
from policylens.catalog import get_policy_by_id
from policylens.core.config import MAX_PDF_BYTES, MIN_POLICY_TEXT_CHARS
from policylens.core.errors import ValidationError


def read_pdf(path: str | Path) -> PdfUpload:
    """本地文件 → PdfUpload；按扩展名声明媒体类型。"""
    path = Path(path)
    if not path.is_file():
        raise ValidationError(f"File not found: {path}")
    ctype = "application/pdf" if path.suffix.lower() == ".pdf" else "application/octet-stream"
    return PdfUpload(filename=path.name, content=path.read_bytes(), content_type=ctype)


def build_policy_submission(
    method: str,
    text: Optional[str] = None,
    pdf: Optional[PdfUpload] = None,
    example_id: Optional[str] = None,
) -> PolicySubmission:
    """
    text / example：正文去首尾空白后至少 200 字符（example 可只给 example_id，从内置目录取正文）。
    pdf：必须选择文件、类型为 PDF、不超过 10MB。
    """
    if method == "example" and not (text or "").strip() and example_id:
        policy = get_policy_by_id(example_id)
        if policy is None:
            raise ValidationError(f"Unknown example policy '{example_id}'")
        text = policy.text

    if method in ("text", "example"):
        if not text or len(text.strip()) < MIN_POLICY_TEXT_CHARS:
            raise ValidationError("Policy text must be at least 200 characters long")
        return PolicySubmission(method=method, text=text)

    if method == "pdf":
        if pdf is None:
            raise ValidationError("Please select a PDF file")
        if not pdf.looks_like_pdf():
            raise ValidationError("Please upload a PDF file")
        if pdf.size > MAX_PDF_BYTES:
            raise ValidationError("PDF file must be less than 10MB")
        return PolicySubmission(method="pdf", file=pdf)

    raise ValidationError(f"Unknown input method '{method}'")


def build_profile(
    age_group: str = "",
    occupation: str = "",
    location_type: str = "",
    sector: str = "",
    income_range: Optional[str] = None,
) -> UserProfile:
    """四个必填项任一为空即拒绝。"""
    profile = UserProfile(
        age_group=age_group or "",
        occupation=occupation or "",
        income_range=income_range or None,
        location_type=location_type or "",
        sector=sector or "",
    )
    if profile.missing_required():
        raise ValidationError("Please complete all required fields")
    return profile
