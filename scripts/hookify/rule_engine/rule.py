"""Rule and Condition records, and compilation from parsed frontmatter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class RuleEvent(StrEnum):
    BASH = "bash"
    FILE = "file"
    STOP = "stop"
    PROMPT = "prompt"
    ALL = "all"


class RuleAction(StrEnum):
    WARN = "warn"
    BLOCK = "block"


class Operator(StrEnum):
    REGEX_MATCH = "regex_match"
    CONTAINS = "contains"
    EQUALS = "equals"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"


# Field a legacy top-level ``pattern`` is checked against, per event
LEGACY_PATTERN_FIELDS: dict[str, str] = {
    RuleEvent.BASH: "command",
    RuleEvent.FILE: "new_text",
}
LEGACY_PATTERN_DEFAULT_FIELD = "content"


@dataclass(frozen=True)
class Condition:
    """One field/operator/pattern test."""

    field: str
    operator: str
    pattern: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "operator": str(self.operator), "pattern": self.pattern}


@dataclass(frozen=True)
class Rule:
    """A compiled rule loaded from one rule file."""

    name: str = "unnamed"
    enabled: bool = True
    event: str = RuleEvent.ALL
    legacy_pattern: str | None = None
    conditions: tuple[Condition, ...] = ()
    action: RuleAction = RuleAction.WARN
    tool_matcher: str | None = None
    message: str = ""

    @property
    def is_blocking(self) -> bool:
        return self.action == RuleAction.BLOCK

    def applies_to(self, event: str | None) -> bool:
        """True when the rule belongs in a rule set loaded for ``event``."""
        return not event or self.event == RuleEvent.ALL or self.event == event

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "enabled": self.enabled,
            "event": str(self.event),
            "pattern": self.legacy_pattern,
            "conditions": [c.to_dict() for c in self.conditions],
            "action": str(self.action),
            "tool_matcher": self.tool_matcher,
            "message": self.message,
        }


def _as_operator(value: Any) -> Operator:
    try:
        return Operator(value)
    except ValueError:
        return Operator.REGEX_MATCH


def _text(value: Any) -> str:
    if value is None or value is False:
        return ""
    return str(value)


def compile_conditions(metadata: dict[str, Any]) -> list[Condition]:
    """Build the condition list, falling back to the legacy ``pattern`` key.

    An explicit, non-empty ``conditions`` list always wins; ``pattern`` only
    applies when no condition came out of it.
    """
    conditions: list[Condition] = []

    raw_conditions = metadata.get("conditions")
    if isinstance(raw_conditions, list):
        for entry in raw_conditions:
            if not isinstance(entry, dict):
                continue
            conditions.append(
                Condition(
                    field=_text(entry.get("field")),
                    operator=_as_operator(entry.get("operator")),
                    pattern=_text(entry.get("pattern")),
                )
            )

    legacy_pattern = metadata.get("pattern")
    if not conditions and isinstance(legacy_pattern, str) and legacy_pattern:
        event = _text(metadata.get("event")) or RuleEvent.ALL
        conditions.append(
            Condition(
                field=LEGACY_PATTERN_FIELDS.get(event, LEGACY_PATTERN_DEFAULT_FIELD),
                operator=Operator.REGEX_MATCH,
                pattern=legacy_pattern,
            )
        )

    return conditions


def compile_rule(metadata: dict[str, Any], message: str) -> Rule:
    """Create a Rule from frontmatter metadata and the message body.

    Args:
        metadata: Parsed frontmatter. Must not be empty; an empty mapping
            means the file had no frontmatter and is rejected by the loader.
        message: The markdown body after the frontmatter.

    Returns:
        The compiled Rule with documented defaults applied.
    """
    legacy_pattern = metadata.get("pattern")
    tool_matcher = metadata.get("tool_matcher")

    return Rule(
        name=_text(metadata.get("name")) or "unnamed",
        enabled=metadata.get("enabled") is not False,
        event=_text(metadata.get("event")) or RuleEvent.ALL,
        legacy_pattern=legacy_pattern if isinstance(legacy_pattern, str) and legacy_pattern else None,
        conditions=tuple(compile_conditions(metadata)),
        action=RuleAction.BLOCK if metadata.get("action") == RuleAction.BLOCK else RuleAction.WARN,
        tool_matcher=tool_matcher if isinstance(tool_matcher, str) and tool_matcher else None,
        message=message.strip(),
    )
