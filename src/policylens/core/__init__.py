# 配置、错误分类、LiteLLM 封装、tiktoken 预估

from .config import (
    MAX_PDF_BYTES,
    MIN_POLICY_TEXT_CHARS,
    MAX_POLICY_TEXT_CHARS,
    MAX_FORM_FIELD_BYTES,
    configure_logging,
    get_api_key,
    require_api_key,
    get_default_model,
    get_llm_timeout,
    get_cors_origins,
)
from .errors import (
    PolicyLensError,
    ConfigurationError,
    ValidationError,
    AnalysisError,
    InputError,
    ParseError,
    IncompleteResponseError,
    ProviderError,
)
from .llm import completion, build_messages, response_text
from .tokens import count_tokens

__all__ = [
    "MAX_PDF_BYTES",
    "MIN_POLICY_TEXT_CHARS",
    "MAX_POLICY_TEXT_CHARS",
    "MAX_FORM_FIELD_BYTES",
    "configure_logging",
    "get_api_key",
    "require_api_key",
    "get_default_model",
    "get_llm_timeout",
    "get_cors_origins",
    "PolicyLensError",
    "ConfigurationError",
    "ValidationError",
    "AnalysisError",
    "InputError",
    "ParseError",
    "IncompleteResponseError",
    "ProviderError",
    "completion",
    "build_messages",
    "response_text",
    "count_tokens",
]
