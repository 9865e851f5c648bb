"""Decide whether a compiled rule matches one hook event."""

from __future__ import annotations

from hookify.types.claude import HookInput
from .condition_evaluator import ConditionEvaluator
from .field_extractor import extract_field, get_tool_info
from .rule import Condition, Rule


def matches_tool(matcher: str, tool_name: str) -> bool:
    """Check a tool name against a ``*`` or ``A|B|C`` tool matcher."""
    if matcher == "*":
        return True
    return tool_name in matcher.split("|")


class RuleMatcher:
    """Matches rules against events using a shared ConditionEvaluator."""

    def __init__(self, evaluator: ConditionEvaluator | None = None):
        self.evaluator = evaluator or ConditionEvaluator()

    def check_condition(self, condition: Condition, input_data: HookInput) -> bool:
        tool_name, tool_input = get_tool_info(input_data)
        value = extract_field(condition.field, tool_name, tool_input, input_data)
        return self.evaluator.evaluate(condition, value)

    def matches(self, rule: Rule, input_data: HookInput) -> bool:
        tool_name, _ = get_tool_info(input_data)

        if rule.tool_matcher and not matches_tool(rule.tool_matcher, tool_name):
            return False

        # A rule without conditions would match everything
        if not rule.conditions:
            return False

        return all(self.check_condition(c, input_data) for c in rule.conditions)
