"""
HTTP 响应模型：统一 {success, data | error} 外形。
"""
from pydantic import BaseModel, Field
from typing import Optional

from policylens.analysis import AnalysisResult


class AnalyzeResponse(BaseModel):
    """POST /api/analyze-policy 响应。"""
    success: bool = Field(..., description="是否成功")
    data: Optional[AnalysisResult] = Field(None, description="成功时的七字段分析结果")
    error: Optional[str] = Field(None, description="失败时可展示给用户的错误信息")


class PolicyListItem(BaseModel):
    """示例政策选择列表项。"""
    id: str
    title: str


class PolicyDetailResponse(BaseModel):
    """GET /api/policies/{id} 响应。"""
    id: str
    title: str
    text: str
