"""
命令行入口：

  policylens serve [--host H] [--port P]           启动 API（uvicorn）
  policylens examples                               列出内置示例政策
  policylens analyze (--text T | --text-file F | --pdf P | --example ID)
                     --age-group ... --occupation ... --location-type ... --sector ...
                     [--income-range ...] [--url http://127.0.0.1:8000]

analyze 走与网页相同的步骤：政策 → 画像 → 请求 → 结果 / 失败，结果以纯文本输出。
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from policylens.analysis import AnalysisResult
from policylens.analysis.schemas import AGE_GROUPS, INCOME_RANGES, LOCATION_TYPES, OCCUPATIONS, SECTORS
from policylens.catalog import get_policy_list
from policylens.core.config import configure_logging
from policylens.core.errors import ValidationError

DEFAULT_URL = "http://127.0.0.1:8000"


def render_result(result: AnalysisResult) -> str:
    """纯文本渲染七个字段。"""
    def bullets(items: list[str]) -> str:
        return "\n".join(f"  - {item}" for item in items)

    return "\n".join([
        "POLICY SUMMARY",
        f"  {result.policy_summary}",
        "",
        "HOW THIS AFFECTS YOU",
        f"  {result.personal_impact}",
        "",
        "POTENTIAL BENEFITS",
        bullets(result.benefits),
        "",
        "POSSIBLE CONCERNS",
        bullets(result.drawbacks),
        "",
        "SHORT-TERM IMPACT",
        f"  {result.short_term_impact}",
        "",
        "LONG-TERM IMPACT",
        f"  {result.long_term_impact}",
        "",
        "ACTIONS YOU CAN CONSIDER",
        bullets(result.user_actions),
        "",
        "For educational purposes only. This is not legal, financial, or medical advice.",
    ])


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("policylens.api.app:app", host=args.host, port=args.port)
    return 0


def _cmd_examples(args: argparse.Namespace) -> int:
    for item in get_policy_list():
        print(f"{item['id']:<24} {item['title']}")
    return 0


def _policy_from_args(args: argparse.Namespace):
    from policylens.client import build_policy_submission, read_pdf

    if args.pdf:
        return build_policy_submission("pdf", pdf=read_pdf(args.pdf))
    if args.example:
        return build_policy_submission("example", example_id=args.example)
    text = args.text
    if args.text_file:
        text = Path(args.text_file).read_text(encoding="utf-8")
    return build_policy_submission("text", text=text)


def _cmd_analyze(args: argparse.Namespace) -> int:
    import httpx

    from policylens.client import AnalysisFlow, ApiTransport, ErrorStep, LoadingStep, ResultStep, build_profile

    try:
        submission = _policy_from_args(args)
        profile = build_profile(
            age_group=args.age_group,
            occupation=args.occupation,
            location_type=args.location_type,
            sector=args.sector,
            income_range=args.income_range,
        )
    except ValidationError as e:
        print(f"错误: {e.user_message}", file=sys.stderr)
        return 2

    def on_change(state):
        if isinstance(state, LoadingStep):
            print("Analyzing policy... this may take 10-30 seconds.", file=sys.stderr)

    with httpx.Client(base_url=args.url, timeout=args.timeout) as http:
        flow = AnalysisFlow(ApiTransport(http), on_change=on_change)
        flow.submit_policy(submission)
        state = flow.submit_profile(profile)

    if isinstance(state, ResultStep):
        print(render_result(state.result))
        return 0
    if isinstance(state, ErrorStep):
        print(f"Analysis failed: {state.message}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="policylens", description="Policy Lens：政策个性化解读")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="启动 API 服务")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.set_defaults(func=_cmd_serve)

    p_examples = sub.add_parser("examples", help="列出内置示例政策")
    p_examples.set_defaults(func=_cmd_examples)

    p_analyze = sub.add_parser("analyze", help="提交政策与画像，输出解读结果")
    source = p_analyze.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="政策正文（至少 200 字符）")
    source.add_argument("--text-file", help="政策正文文件路径（UTF-8）")
    source.add_argument("--pdf", help="政策 PDF 路径（≤10MB）")
    source.add_argument("--example", help="内置示例政策 id，见 policylens examples")
    p_analyze.add_argument("--age-group", required=True, choices=AGE_GROUPS)
    p_analyze.add_argument("--occupation", required=True, choices=OCCUPATIONS)
    p_analyze.add_argument("--location-type", required=True, choices=LOCATION_TYPES)
    p_analyze.add_argument("--sector", required=True, choices=SECTORS)
    p_analyze.add_argument("--income-range", choices=INCOME_RANGES, default=None)
    p_analyze.add_argument("--url", default=DEFAULT_URL, help=f"API 地址（默认 {DEFAULT_URL}）")
    p_analyze.add_argument("--timeout", type=float, default=180.0, help="请求超时秒数")
    p_analyze.set_defaults(func=_cmd_analyze)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("WARNING" if args.command == "analyze" else None)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
