"""Condition evaluation with a per-evaluator compiled-pattern cache."""

from __future__ import annotations

import re
import threading
from typing import Pattern

from hookify.log import hookify_log
from .rule import Condition, Operator


class PatternCache:
    """Compiled regex cache keyed by pattern text.

    Entries are never evicted: patterns come from loaded rules and do not
    change for the life of the process. The lock lets one cache serve
    concurrent evaluations in a long-lived host.
    """

    def __init__(self, flags: int = re.IGNORECASE):
        self.flags = flags
        self._compiled: dict[str, Pattern[str]] = {}
        self._lock = threading.Lock()

    def compile(self, pattern: str) -> Pattern[str] | None:
        """Return the compiled pattern, or None (with a warning) if it is invalid."""
        with self._lock:
            compiled = self._compiled.get(pattern)
            if compiled is not None:
                return compiled
            try:
                compiled = re.compile(pattern, self.flags)
            except re.error as e:
                hookify_log(f"WARNING: Invalid regex pattern {pattern!r}: {e}")
                return None
            self._compiled[pattern] = compiled
            return compiled

    def __len__(self) -> int:
        with self._lock:
            return len(self._compiled)

    def __contains__(self, pattern: object) -> bool:
        with self._lock:
            return pattern in self._compiled


class ConditionEvaluator:
    """Evaluates one condition against an already-extracted field value."""

    def __init__(self, cache: PatternCache | None = None):
        self.cache = cache if cache is not None else PatternCache()

    def regex_match(self, pattern: str, text: str) -> bool:
        compiled = self.cache.compile(pattern)
        if compiled is None:
            return False
        return bool(compiled.search(text))

    def evaluate(self, condition: Condition, value: str | None) -> bool:
        """Check a condition against a field value.

        Args:
            condition: The condition to check.
            value: The extracted field value; None means the field was not found.

        Returns:
            True if the condition holds. A missing field and an unknown
            operator are both False.
        """
        if value is None:
            return False

        operator = condition.operator
        pattern = condition.pattern

        if operator == Operator.REGEX_MATCH:
            return self.regex_match(pattern, value)
        elif operator == Operator.CONTAINS:
            return pattern in value
        elif operator == Operator.EQUALS:
            return value == pattern
        elif operator == Operator.NOT_CONTAINS:
            return pattern not in value
        elif operator == Operator.STARTS_WITH:
            return value.startswith(pattern)
        elif operator == Operator.ENDS_WITH:
            return value.endswith(pattern)
        else:
            hookify_log(f"WARNING: Unknown condition operator: {operator}")
            return False
