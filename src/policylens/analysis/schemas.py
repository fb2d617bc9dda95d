"""
政策分析的数据边界：政策提交、用户画像、分析结果。全部只在单次请求内存活，不落库。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

InputMethod = Literal["text", "pdf", "example"]
INPUT_METHODS: tuple[str, ...] = ("text", "pdf", "example")

# 画像选项（与前端下拉框一致；服务端不强制枚举，只校验必填）
AGE_GROUPS = ("18-25", "26-35", "36-45", "46-55", "56-65", "65+")
OCCUPATIONS = (
    "Student",
    "Employee",
    "Self-Employed",
    "Freelancer",
    "Unemployed",
    "Retired",
    "Homemaker",
    "Other",
)
INCOME_RANGES = (
    "Below ₹3 lakh",
    "₹3-6 lakh",
    "₹6-10 lakh",
    "₹10-15 lakh",
    "₹15-25 lakh",
    "Above ₹25 lakh",
)
LOCATION_TYPES = ("Urban - Metro", "Urban - Tier 2/3", "Semi-Urban", "Rural")
SECTORS = (
    "Education",
    "Healthcare",
    "Technology / IT",
    "Finance / Banking",
    "Manufacturing",
    "Agriculture",
    "Retail / E-commerce",
    "Transportation",
    "Construction",
    "Government",
    "Non-Profit",
    "Media / Entertainment",
    "Hospitality / Tourism",
    "Energy",
    "Other",
)


@dataclass(frozen=True)
class PdfUpload:
    """上传的 PDF 原始字节与声明的媒体类型。"""
    filename: str
    content: bytes
    content_type: str = "application/pdf"

    @property
    def size(self) -> int:
        return len(self.content)

    def looks_like_pdf(self) -> bool:
        """只认声明的 application/pdf，扩展名不作数。"""
        ctype = (self.content_type or "").split(";")[0].strip().lower()
        return ctype == "application/pdf"


@dataclass(frozen=True)
class PolicySubmission:
    """method 决定 text 与 file 哪个有效。"""
    method: InputMethod
    text: Optional[str] = None
    file: Optional[PdfUpload] = None


class UserProfile(BaseModel):
    """用户画像：前四项必填，收入区间可选。字段名同时接受 camelCase（表单字段名）。"""
    model_config = ConfigDict(populate_by_name=True)

    age_group: str = Field("", alias="ageGroup", description="年龄段，如 26-35")
    occupation: str = Field("", description="职业，如 Employee")
    income_range: Optional[str] = Field(None, alias="incomeRange", description="收入区间（可选）")
    location_type: str = Field("", alias="locationType", description="居住地类型，如 Urban - Metro")
    sector: str = Field("", description="所在行业，如 Technology / IT")

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("age_group", "occupation", "location_type", "sector")

    def missing_required(self) -> list[str]:
        """返回为空的必填字段（按表单字段名）。"""
        aliases = {"age_group": "ageGroup", "location_type": "locationType"}
        return [
            aliases.get(name, name)
            for name in self.REQUIRED_FIELDS
            if not (getattr(self, name) or "").strip()
        ]

    def form_fields(self) -> dict[str, str]:
        """按 multipart 字段名展开；未填收入区间发空串。"""
        return {
            "ageGroup": self.age_group,
            "occupation": self.occupation,
            "incomeRange": self.income_range or "",
            "locationType": self.location_type,
            "sector": self.sector,
        }


class AnalysisResult(BaseModel):
    """模型回复经校验后的七字段结构。"""
    policy_summary: str = Field(..., description="政策白话摘要")
    personal_impact: str = Field(..., description="对该用户的具体影响")
    benefits: list[str] = Field(..., min_length=1, description="潜在好处")
    drawbacks: list[str] = Field(..., min_length=1, description="可能的不利或顾虑")
    short_term_impact: str = Field(..., description="短期影响")
    long_term_impact: str = Field(..., description="长期影响")
    user_actions: list[str] = Field(..., min_length=1, description="可考虑的行动（非建议）")
