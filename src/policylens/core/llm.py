"""
LiteLLM 统一多平台模型调用：一套请求逻辑、一套错误处理，换模型只改 model 字符串。

模型名使用 LiteLLM 格式，例如：gemini/gemini-2.5-flash、openai/gpt-4o、anthropic/claude-3-5-sonnet。
PDF 以 data URL 的 file 内容块随 prompt 一起发送，由模型自行读取正文。
"""
from __future__ import annotations

from typing import Any

from litellm import completion as litellm_completion

from policylens.core.config import get_api_key, get_default_model, get_llm_timeout


def completion(
    messages: list[dict[str, Any]],
    *,
    model: str | None = None,
    api_key: str | None = None,
    timeout: float | None = None,
    **kwargs: Any,
) -> Any:
    """
    单次 completion 调用；凭证与超时总是显式传给 LiteLLM，不依赖厂商 SDK 自己读环境变量。
    model / api_key / timeout 不传时分别取 POLICYLENS_MODEL、GEMINI_API_KEY、POLICYLENS_LLM_TIMEOUT。
    返回 litellm 的 response，用 response_text() 取正文。
    """
    if not messages:
        raise ValueError("messages must not be empty")
    return litellm_completion(
        model=model or get_default_model(),
        messages=messages,
        api_key=api_key or get_api_key(),
        timeout=timeout or get_llm_timeout(),
        **kwargs,
    )


def pdf_content_part(pdf_base64: str) -> dict[str, Any]:
    """base64 编码的 PDF → OpenAI 兼容的 file 内容块。"""
    return {
        "type": "file",
        "file": {"file_data": f"data:application/pdf;base64,{pdf_base64}"},
    }


def build_messages(prompt: str, pdf_base64: str | None = None) -> list[dict[str, Any]]:
    """单轮 user 消息；有 PDF 时作为第二个内容块附上。"""
    if not pdf_base64:
        return [{"role": "user", "content": prompt}]
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                pdf_content_part(pdf_base64),
            ],
        }
    ]


def response_text(resp: Any) -> str:
    return (resp.choices[0].message.content or "").strip()
