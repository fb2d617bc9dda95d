# 内置示例政策目录

from .examples import EXAMPLE_POLICIES, ExamplePolicy, get_policy_by_id, get_policy_list

__all__ = [
    "EXAMPLE_POLICIES",
    "ExamplePolicy",
    "get_policy_by_id",
    "get_policy_list",
]
