"""
页面步骤控制：政策 → 画像 → 分析中 → 结果 / 失败。

每一步是一个显式的状态值（带各自所需的数据），不用零散的 step/loading/error 标志拼凑。
合法迁移：
  PolicyStep  --submit_policy-->  ProfileStep
  ProfileStep --submit_profile--> LoadingStep --> ResultStep | ErrorStep
  ProfileStep / ErrorStep --back--> PolicyStep
  任意状态 --start_over--> PolicyStep（清空全部数据）
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

from policylens.analysis import AnalysisResult, PolicySubmission, UserProfile
from .transport import TransportError

logger = logging.getLogger(__name__)

MSG_UNEXPECTED = "An unexpected error occurred. Please check your connection and try again."


class AnalysisTransport(Protocol):
    def analyze(self, submission: PolicySubmission, profile: UserProfile) -> AnalysisResult: ...


@dataclass(frozen=True)
class PolicyStep:
    """第 1 步：选择输入方式并提供政策。"""


@dataclass(frozen=True)
class ProfileStep:
    """第 2 步：填写画像。"""
    policy: PolicySubmission


@dataclass(frozen=True)
class LoadingStep:
    """请求已发出，等待模型回复（通常 10-30 秒）。"""
    policy: PolicySubmission
    profile: UserProfile


@dataclass(frozen=True)
class ResultStep:
    """第 3 步：展示分析结果。"""
    policy: PolicySubmission
    profile: UserProfile
    result: AnalysisResult


@dataclass(frozen=True)
class ErrorStep:
    """分析失败；保留已提交的政策，便于返回重试。"""
    policy: PolicySubmission
    profile: UserProfile
    message: str


FlowState = Union[PolicyStep, ProfileStep, LoadingStep, ResultStep, ErrorStep]


class FlowError(Exception):
    """当前状态下不允许的操作。"""


class AnalysisFlow:
    """单次分析的步骤控制器；on_change 在每次状态迁移后回调（渲染用）。"""

    def __init__(
        self,
        transport: AnalysisTransport,
        on_change: Optional[Callable[[FlowState], None]] = None,
    ):
        self.transport = transport
        self.on_change = on_change
        self.state: FlowState = PolicyStep()

    def _set(self, state: FlowState) -> FlowState:
        self.state = state
        if self.on_change is not None:
            self.on_change(state)
        return state

    def _expect(self, *kinds: type, action: str) -> None:
        if not isinstance(self.state, kinds):
            raise FlowError(f"cannot {action} from {type(self.state).__name__}")

    def submit_policy(self, submission: PolicySubmission) -> FlowState:
        self._expect(PolicyStep, action="submit policy")
        return self._set(ProfileStep(policy=submission))

    def submit_profile(self, profile: UserProfile) -> FlowState:
        """发出唯一一次请求；失败即进入 ErrorStep，不自动重试。"""
        self._expect(ProfileStep, action="submit profile")
        policy = self.state.policy
        self._set(LoadingStep(policy=policy, profile=profile))
        try:
            result = self.transport.analyze(policy, profile)
        except TransportError as e:
            return self._set(ErrorStep(policy=policy, profile=profile, message=e.message))
        except Exception:
            logger.exception("Analysis error")
            return self._set(ErrorStep(policy=policy, profile=profile, message=MSG_UNEXPECTED))
        return self._set(ResultStep(policy=policy, profile=profile, result=result))

    def back(self) -> FlowState:
        self._expect(ProfileStep, ErrorStep, action="go back")
        return self._set(PolicyStep())

    def start_over(self) -> FlowState:
        return self._set(PolicyStep())
