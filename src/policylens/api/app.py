"""
Policy Lens HTTP 入口。

POST /api/analyze-policy：政策（正文 / PDF / 示例）+ 用户画像 → 个性化政策解读（统一 {success, data | error}）。
GET /api/policies：内置示例政策，供前端一键填充。

分析器（凭证 + 模型）在启动时构造一次并挂在 app.state 上；缺少 GEMINI_API_KEY 时启动即失败。
测试或嵌入时可通过 create_app(analyzer=...) 直接注入。
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from policylens.analysis import PdfUpload, PolicyAnalyzer, UserProfile, build_analyzer
from policylens.catalog import get_policy_by_id, get_policy_list
from policylens.core.config import (
    MAX_FORM_FIELD_BYTES,
    MAX_PDF_BYTES,
    configure_logging,
    get_cors_origins,
)
from policylens.core.errors import (
    AnalysisError,
    ConfigurationError,
    InputError,
    PolicyLensError,
    ValidationError,
)
from .handler import AnalyzeForm, handle_analyze
from .schemas import AnalyzeResponse, PolicyDetailResponse, PolicyListItem

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze-policy"
MSG_UNEXPECTED = "An unexpected error occurred. Please try again."

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = AnalyzeResponse(success=False, error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _text_field(fields: FormData, name: str) -> str | None:
    """取文本字段；缺失或误传成文件时视为未提供。"""
    value = fields.get(name)
    return value if isinstance(value, str) else None


def _status_for(error: PolicyLensError) -> int:
    if isinstance(error, (ValidationError, InputError)):
        return 400
    return 500


def create_app(analyzer: PolicyAnalyzer | None = None) -> FastAPI:
    """构造应用；analyzer 为空时在 lifespan 中按环境变量构造。"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        if app.state.analyzer is None:
            app.state.analyzer = build_analyzer()
            logger.info("Policy analyzer ready (model=%s)", app.state.analyzer.model)
        yield

    app = FastAPI(
        title="Policy Lens API",
        description="政策个性化解读：正文 / PDF + 用户画像 → 白话摘要、个人影响、利弊与可选行动",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.analyzer = analyzer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        """框架层错误（表单解析失败、路由不存在等）也按统一外形返回。"""
        logger.info("HTTP %d on %s: %s", exc.status_code, request.url.path, exc.detail)
        response = _error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.get("/health")
    def health():
        """探活。"""
        return {"status": "ok", "service": "policylens"}

    @app.get("/api/policies", response_model=list[PolicyListItem])
    def list_policies():
        """示例政策选择列表（id + title）。"""
        return get_policy_list()

    @app.get("/api/policies/{policy_id}", response_model=PolicyDetailResponse)
    def get_policy(policy_id: str):
        """按 id 取示例政策全文；不存在返回 404。"""
        policy = get_policy_by_id(policy_id)
        if policy is None:
            return JSONResponse(
                status_code=404,
                content={"success": False, "error": f"Example policy '{policy_id}' not found."},
            )
        return policy.model_dump()

    @app.options(ANALYZE_PATH)
    def analyze_policy_preflight():
        """预检请求：放开跨域，允许 POST。"""
        return Response(status_code=200, headers=PREFLIGHT_HEADERS)

    @app.post(ANALYZE_PATH, response_model=AnalyzeResponse, response_model_exclude_none=True)
    async def analyze_policy(request: Request):
        """
        政策分析：校验失败 400，分析/模型/配置失败 500，错误信息均可直接展示、不含内部细节。
        模型调用耗时 10-30 秒，放到线程池执行，避免阻塞事件循环。

        表单字段：inputMethod、policyText、pdfFile、exampleId、ageGroup、occupation、
        incomeRange（可选）、locationType、sector。
        """
        # 自行解析表单：默认单字段 1MB 上限会在截断前就拒掉超长正文
        async with request.form(max_part_size=MAX_FORM_FIELD_BYTES) as fields:
            try:
                pdf = None
                upload = fields.get("pdfFile")
                if isinstance(upload, UploadFile):
                    # 多读 1 字节即可判断是否超限，不把超大文件整个读进内存
                    content = await upload.read(MAX_PDF_BYTES + 1)
                    pdf = PdfUpload(
                        filename=upload.filename or "",
                        content=content,
                        content_type=upload.content_type or "",
                    )
                form = AnalyzeForm(
                    input_method=_text_field(fields, "inputMethod"),
                    policy_text=_text_field(fields, "policyText"),
                    pdf=pdf,
                    example_id=_text_field(fields, "exampleId"),
                    profile=UserProfile(
                        age_group=_text_field(fields, "ageGroup") or "",
                        occupation=_text_field(fields, "occupation") or "",
                        income_range=_text_field(fields, "incomeRange") or None,
                        location_type=_text_field(fields, "locationType") or "",
                        sector=_text_field(fields, "sector") or "",
                    ),
                )
                analyzer = request.app.state.analyzer
                if analyzer is None:
                    raise ConfigurationError(
                        "analyzer not initialised",
                        user_message="Server is not configured: the AI provider API key is missing.",
                    )
                result = await run_in_threadpool(handle_analyze, form, analyzer)
            except (ValidationError, InputError) as e:
                return _error_response(_status_for(e), e.user_message)
            except (AnalysisError, ConfigurationError) as e:
                logger.error("Policy analysis failed: %s", e)
                return _error_response(_status_for(e), e.user_message)
            except Exception:
                logger.exception("API endpoint error")
                return _error_response(500, MSG_UNEXPECTED)
        return AnalyzeResponse(success=True, data=result)

    return app


app = create_app()
