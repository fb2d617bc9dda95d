"""
tiktoken：请求前算账，预估发给模型的 prompt 大约多少 token。

政策正文上限 100k 字符，便于在 DEBUG 日志里观察单次调用的输入规模。
非 OpenAI 模型（如 Gemini）没有官方编码表，统一用 cl100k_base 近似。
"""
from __future__ import annotations

from typing import Optional

_DEFAULT_ENCODING = "cl100k_base"


def _get_encoding(model_name: Optional[str] = None) -> "tiktoken.Encoding | None":
    """按模型名取编码；未知模型用 cl100k_base。加载失败（如无网络下载编码表）返回 None。"""
    import tiktoken
    try:
        name = (model_name or "").strip().lower()
        if name:
            try:
                return tiktoken.encoding_for_model(name.split("/")[-1])
            except KeyError:
                pass
        return tiktoken.get_encoding(_DEFAULT_ENCODING)
    except Exception:
        return None


def count_tokens(text: str, model_name: Optional[str] = None) -> int:
    """
    计算文本的 token 数量。
    若编码不可用，回退为约 len(text)//4 的近似值（英文平均每 token 约 4 字符）。
    """
    if not text:
        return 0
    enc = _get_encoding(model_name)
    if enc is not None:
        return len(enc.encode(text))
    return max(1, len(text) // 4)
