# 客户端：输入表单、步骤控制、HTTP 传输

from .flow import (
    AnalysisFlow,
    ErrorStep,
    FlowError,
    FlowState,
    LoadingStep,
    PolicyStep,
    ProfileStep,
    ResultStep,
)
from .forms import build_policy_submission, build_profile, read_pdf
from .transport import ApiTransport, TransportError

__all__ = [
    "AnalysisFlow",
    "ErrorStep",
    "FlowError",
    "FlowState",
    "LoadingStep",
    "PolicyStep",
    "ProfileStep",
    "ResultStep",
    "build_policy_submission",
    "build_profile",
    "read_pdf",
    "ApiTransport",
    "TransportError",
]
