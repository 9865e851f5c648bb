"""Main rule evaluation engine for hookify rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from hookify.log import hookify_log
from hookify.types.claude import HookEventType, HookInput, HookOutput, HookSpecificOutput
from .condition_evaluator import ConditionEvaluator
from .rule import Rule
from .rule_loader import load_rules
from .rule_matcher import RuleMatcher


@dataclass
class RuleMatches:
    """Rules that matched one event, split by action, in load order."""

    blocking: list[Rule] = field(default_factory=list)
    warning: list[Rule] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.blocking or self.warning)


def format_rule_message(rule: Rule) -> str:
    return f"**[{rule.name}]**\n{rule.message}"


def combine_messages(rules: list[Rule]) -> str:
    return "\n\n".join(format_rule_message(r) for r in rules)


def block_output(hook_event: str, message: str) -> HookOutput:
    """Shape a blocking decision for the hook event that triggered it."""
    if hook_event == HookEventType.STOP:
        return HookOutput(decision="block", reason=message, systemMessage=message)
    if hook_event in (HookEventType.PRE_TOOL_USE, HookEventType.POST_TOOL_USE):
        return HookOutput(
            hookSpecificOutput=HookSpecificOutput(
                hookEventName=hook_event,
                permissionDecision="deny",
            ),
            systemMessage=message,
        )
    return HookOutput(systemMessage=message)


class RuleEngine:
    """Runs a loaded rule set against hook events.

    The rule list is fixed at construction; one engine can evaluate any
    number of events and shares its pattern cache between them.
    """

    def __init__(
        self,
        rules: list[Rule] | None = None,
        evaluator: ConditionEvaluator | None = None,
    ):
        self._rules: list[Rule] = list(rules or [])
        self.matcher = RuleMatcher(evaluator)

    @classmethod
    def from_rule_dirs(
        cls,
        event: str | None = None,
        project_dir: str | Path | None = None,
        evaluator: ConditionEvaluator | None = None,
    ) -> "RuleEngine":
        """Create an engine from the project and plugin rule directories."""
        return cls(load_rules(event=event, project_dir=project_dir), evaluator)

    # -- Collection interface --

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    # -- Domain methods --

    def find_matches(self, input_data: HookInput) -> RuleMatches:
        matches = RuleMatches()
        for rule in self._rules:
            if not self.matcher.matches(rule, input_data):
                continue
            hookify_log(f"[{rule.name}] Matched ({rule.action})")
            if rule.is_blocking:
                matches.blocking.append(rule)
            else:
                matches.warning.append(rule)
        return matches

    def evaluate(self, input_data: HookInput) -> HookOutput:
        """Evaluate every rule and build the decision for this event.

        Blocking matches win outright: when any rule blocks, warnings are
        left out of the output.
        """
        matches = self.find_matches(input_data)

        if matches.blocking:
            message = combine_messages(matches.blocking)
            return block_output(input_data.hook_event_name, message)

        if matches.warning:
            return HookOutput(systemMessage=combine_messages(matches.warning))

        hookify_log("No rules matched")
        return HookOutput()


def evaluate_rules(rules: list[Rule], input_data: HookInput | dict[str, Any]) -> dict[str, Any]:
    """Evaluate rules against a hook payload and return the decision as a dict."""
    if not isinstance(input_data, HookInput):
        input_data = HookInput.model_validate(input_data)
    return RuleEngine(rules).evaluate(input_data).to_dict()
