"""
错误分类：每个异常都带一条可直接展示给用户的 user_message，内部细节只进日志。
"""


class PolicyLensError(Exception):
    """所有业务异常的基类。"""

    default_message = "An unexpected error occurred. Please try again."
    # 为 True 时 message 本身面向用户（校验类错误），否则只进日志
    public_message = False

    def __init__(self, message: str | None = None, *, user_message: str | None = None):
        if user_message is None:
            user_message = message if (self.public_message and message) else self.default_message
        self.user_message = user_message
        super().__init__(message or user_message)


class ConfigurationError(PolicyLensError):
    """缺少凭证或配置非法。"""

    default_message = "Server is not configured correctly."


class ValidationError(PolicyLensError):
    """用户输入缺失或不合法，用户修正表单即可。"""

    default_message = "Invalid input."
    public_message = True


class AnalysisError(PolicyLensError):
    """AI 分析阶段的失败（输入、模型调用、回复解析）。"""

    default_message = "Failed to analyze policy. Please try again."


class InputError(AnalysisError):
    """分析器收到的内容或画像不完整。"""

    public_message = True


class ParseError(AnalysisError):
    """模型回复中找不到可解析的 JSON。"""

    default_message = "Failed to parse AI response. Please try again."


class IncompleteResponseError(AnalysisError):
    """模型回复缺少必填的文本字段。"""

    default_message = "AI response is incomplete. Please try again."


class ProviderError(AnalysisError):
    """凭证、配额、超时或传输层失败。"""
