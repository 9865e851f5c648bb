"""Test utilities package."""

from .hook_data_factory import create_hook_data
from .hook_environment import (
    HookRun,
    TestRulesProjectEnvironment,
    rule_text,
)

__all__ = [
    "create_hook_data",
    "HookRun",
    "TestRulesProjectEnvironment",
    "rule_text",
]
