#!/usr/bin/env python3
"""
模型服务连通性检查：用 .env / 环境变量里的 GEMINI_API_KEY 与 POLICYLENS_MODEL 发一条最小 prompt。

用法：uv run python scripts/check_provider.py [--model gemini/gemini-2.5-flash]
"""
import argparse
import sys

from policylens.analysis.provider_errors import classify_provider_error
from policylens.core.config import get_default_model, require_api_key
from policylens.core.errors import ConfigurationError
from policylens.core.llm import build_messages, completion, response_text


def main():
    parser = argparse.ArgumentParser(description="检查模型服务是否可用")
    parser.add_argument("--model", type=str, default="", help="LiteLLM 模型名（覆盖 POLICYLENS_MODEL）")
    args = parser.parse_args()

    try:
        api_key = require_api_key()
    except ConfigurationError as e:
        print(f"错误: {e}（请在 .env 中配置）")
        return 1
    model = args.model or get_default_model()
    print(f"API Key 已配置（长度 {len(api_key)}），模型: {model}")
    print("发送测试 prompt ...")

    try:
        prompt = 'Say "Hello, the API is working!" in JSON format with a key "message".'
        resp = completion(build_messages(prompt), model=model)
    except Exception as e:
        print(f"调用失败: {classify_provider_error(e)}")
        print(f"原始错误: {e}")
        return 1

    print("回复:")
    print(response_text(resp))
    print("模型服务可用。")
    return 0


if __name__ == "__main__":
    sys.exit(main())
