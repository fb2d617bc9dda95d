"""
把政策提交 + 画像打包成一次 multipart 请求，发往 POST /api/analyze-policy。

http 可以是任意 httpx.Client（含 FastAPI 的 TestClient），便于进程内联调。
"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as SchemaError

from policylens.analysis import AnalysisResult, PolicySubmission, UserProfile

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze-policy"
MSG_ANALYSIS_FAILED = "Failed to analyze policy. Please try again."
MSG_CONNECTION = "An unexpected error occurred. Please check your connection and try again."


class TransportError(Exception):
    """请求未成功：message 可直接展示给用户。"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def build_form(submission: PolicySubmission, profile: UserProfile) -> tuple[dict[str, str], dict[str, Any]]:
    """返回 (data, files)：pdf 走 pdfFile，其余走 policyText。"""
    data = {"inputMethod": submission.method, **profile.form_fields()}
    files: dict[str, Any] = {}
    if submission.method == "pdf" and submission.file is not None:
        f = submission.file
        files["pdfFile"] = (f.filename or "policy.pdf", f.content, f.content_type or "application/pdf")
    else:
        data["policyText"] = submission.text or ""
    return data, files


class ApiTransport:
    """同步发送一次分析请求，不重试。"""

    def __init__(self, http: httpx.Client, path: str = ANALYZE_PATH):
        self.http = http
        self.path = path

    def analyze(self, submission: PolicySubmission, profile: UserProfile) -> AnalysisResult:
        data, files = build_form(submission, profile)
        try:
            resp = self.http.post(self.path, data=data, files=files or None)
            body = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Analysis request failed: %s", e)
            raise TransportError(MSG_CONNECTION) from e

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise TransportError(error or MSG_ANALYSIS_FAILED)
        try:
            return AnalysisResult(**(body.get("data") or {}))
        except SchemaError as e:
            logger.error("Malformed analysis payload: %s", e)
            raise TransportError(MSG_ANALYSIS_FAILED) from e
