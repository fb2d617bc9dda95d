"""
配置：从环境变量读取，供 API、分析器与 CLI 使用。
"""
import logging
import os
from pathlib import Path

from .errors import ConfigurationError

# 可选加载 .env（若存在）：先项目根（与 pyproject.toml 同层），再当前工作目录
_env_paths = [
    Path(__file__).resolve().parents[3] / ".env",  # src/policylens/core -> 项目根
    Path.cwd() / ".env",
]
for _p in _env_paths:
    if _p.exists():
        from dotenv import load_dotenv
        load_dotenv(_p)
        break

# 输入边界（与前端表单一致）
MAX_PDF_BYTES = 10 * 1024 * 1024
MIN_POLICY_TEXT_CHARS = 200
MAX_POLICY_TEXT_CHARS = 100_000
# 单个表单文本字段上限：须远大于正文截断长度，超长正文由处理层截断而不是在解析时被拒
MAX_FORM_FIELD_BYTES = 16 * 1024 * 1024

API_KEY_ENV = "GEMINI_API_KEY"


def get_api_key() -> str | None:
    key = (os.getenv(API_KEY_ENV) or "").strip()
    return key or None


def require_api_key() -> str:
    """取模型服务凭证；缺失时立即报配置错误，而不是等到调用模型时报出难懂的错误。"""
    key = get_api_key()
    if not key:
        raise ConfigurationError(
            f"{API_KEY_ENV} is not set",
            user_message="Server is not configured: the AI provider API key is missing.",
        )
    return key


def get_default_model() -> str:
    """LiteLLM 格式的模型名，换厂商只改这一串，如 gemini/gemini-2.5-flash、openai/gpt-4o。"""
    return os.getenv("POLICYLENS_MODEL", "gemini/gemini-2.5-flash")


def get_llm_timeout() -> float:
    """单次模型调用超时（秒）。模型服务本身不保证时延，由调用方兜底。"""
    raw = os.getenv("POLICYLENS_LLM_TIMEOUT", "120")
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"POLICYLENS_LLM_TIMEOUT must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"POLICYLENS_LLM_TIMEOUT must be positive, got {raw!r}")
    return value


def get_cors_origins() -> list[str]:
    raw = os.getenv("POLICYLENS_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def get_log_level() -> str:
    return (os.getenv("POLICYLENS_LOG_LEVEL") or "INFO").strip().upper()


def configure_logging(level: str | None = None) -> None:
    """进程启动时调用一次：统一日志格式与级别（POLICYLENS_LOG_LEVEL）。"""
    logging.basicConfig(
        level=level or get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
