# Prompt、模型调用与回复校验

from .schemas import (
    AnalysisResult,
    PdfUpload,
    PolicySubmission,
    UserProfile,
    INPUT_METHODS,
)
from .analyzer import PolicyAnalyzer, build_analyzer
from .parser import extract_json, validate_result, parse_analysis
from .prompt import build_prompt
from .provider_errors import classify_provider_error

__all__ = [
    "AnalysisResult",
    "PdfUpload",
    "PolicySubmission",
    "UserProfile",
    "INPUT_METHODS",
    "PolicyAnalyzer",
    "build_analyzer",
    "extract_json",
    "validate_result",
    "parse_analysis",
    "build_prompt",
    "classify_provider_error",
]
