"""
模型服务异常 → 面向用户的一句话。

先看 LiteLLM 的结构化异常类型，再回退到错误文本的关键字匹配；
所有映射只在这一处，厂商改了错误码只改这里。
"""
from __future__ import annotations

import logging

from litellm.exceptions import AuthenticationError, RateLimitError, Timeout

logger = logging.getLogger(__name__)

PREFIX = "Failed to analyze policy. "

MSG_BAD_CREDENTIALS = PREFIX + "Invalid API key configuration."
MSG_QUOTA = PREFIX + "API quota exceeded. Please try again later."
MSG_TIMEOUT = PREFIX + "Request timed out. Please try again."
MSG_GENERIC = PREFIX + "Please try again or contact support if the issue persists."

_TYPE_MESSAGES = (
    (AuthenticationError, MSG_BAD_CREDENTIALS),
    (RateLimitError, MSG_QUOTA),
    (Timeout, MSG_TIMEOUT),
)


def _classify_by_type(error: BaseException) -> str | None:
    for error_type, message in _TYPE_MESSAGES:
        if isinstance(error, error_type):
            return message
    return None


def _classify_by_text(error: BaseException) -> str:
    text = str(error)
    lower = text.lower()
    if "API key" in text or "api_key" in lower:
        return MSG_BAD_CREDENTIALS
    if "quota" in lower or "limit" in lower:
        return MSG_QUOTA
    if "timeout" in lower or "timed out" in lower:
        return MSG_TIMEOUT
    return MSG_GENERIC


def classify_provider_error(error: BaseException) -> str:
    """返回可直接展示给用户的错误信息，不含任何厂商内部细节；本身从不抛异常。"""
    try:
        message = _classify_by_type(error)
    except Exception:
        # 类型判断失败只影响精度，退回文本匹配
        logger.warning("Provider error type check failed for %r", type(error), exc_info=True)
        message = None
    if message:
        return message
    try:
        return _classify_by_text(error)
    except Exception:
        logger.warning("Provider error text unavailable for %r", type(error), exc_info=True)
        return MSG_GENERIC
