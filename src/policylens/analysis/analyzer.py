"""
政策分析器：prompt → 模型（LiteLLM，可附 PDF）→ 解析校验 → AnalysisResult。

凭证与模型在进程启动时确定一次（build_analyzer），之后显式传给请求处理层。
不做自动重试：模型调用失败直接以 ProviderError 返回，由用户自行重新提交。
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from policylens.core.config import get_default_model, get_llm_timeout, require_api_key
from policylens.core.errors import InputError, ProviderError
from policylens.core.llm import build_messages, response_text
from policylens.core.llm import completion as llm_completion
from policylens.core.tokens import count_tokens
from .parser import parse_analysis
from .prompt import build_prompt
from .provider_errors import classify_provider_error
from .schemas import AnalysisResult, UserProfile

logger = logging.getLogger(__name__)

# 正文短于此值且无 PDF 时视为未提供内容
MIN_CONTENT_CHARS = 10


@dataclass
class PolicyAnalyzer:
    """已配置好的模型客户端：model 为 LiteLLM 模型名，timeout 单位秒。"""
    api_key: str
    model: str
    timeout: float

    def analyze(
        self,
        text: str | None,
        profile: UserProfile,
        pdf_base64: str | None = None,
    ) -> AnalysisResult:
        has_text = bool(text and len(text.strip()) >= MIN_CONTENT_CHARS)
        if not has_text and not pdf_base64:
            raise InputError("Please provide either policy text or a PDF file.")
        if not profile.age_group or not profile.occupation:
            raise InputError("User profile is incomplete. Please provide age group and occupation.")

        prompt = build_prompt(text if has_text else None, profile)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "prompt ~%d tokens (model=%s, pdf=%s)",
                count_tokens(prompt, self.model),
                self.model,
                bool(pdf_base64),
            )

        try:
            resp = llm_completion(
                model=self.model,
                messages=build_messages(prompt, pdf_base64),
                api_key=self.api_key,
                timeout=self.timeout,
            )
            reply = response_text(resp)
        except Exception as e:
            logger.error("AI provider error: %s", e)
            raise ProviderError(str(e), user_message=classify_provider_error(e)) from e

        return parse_analysis(reply)


def build_analyzer() -> PolicyAnalyzer:
    """从环境变量构造分析器；缺少 GEMINI_API_KEY 时抛 ConfigurationError（启动即失败）。"""
    return PolicyAnalyzer(
        api_key=require_api_key(),
        model=get_default_model(),
        timeout=get_llm_timeout(),
    )
