"""Rule engine module for markdown hookify rules."""

from .condition_evaluator import ConditionEvaluator, PatternCache
from .engine import (
    RuleEngine,
    RuleMatches,
    block_output,
    combine_messages,
    evaluate_rules,
    format_rule_message,
)
from .field_extractor import extract_field, get_tool_info, read_transcript
from .frontmatter import FrontmatterParser, ScanState, extract_frontmatter
from .rule import (
    Condition,
    Operator,
    Rule,
    RuleAction,
    RuleEvent,
    compile_conditions,
    compile_rule,
)
from .rule_loader import (
    LoadErrorKind,
    RuleFileResult,
    discover_rule_files,
    get_plugin_rules_dir,
    get_project_rules_dir,
    load_rule_file,
    load_rules,
)
from .rule_matcher import RuleMatcher, matches_tool

__all__ = [
    # Core records
    "Condition",
    "Operator",
    "Rule",
    "RuleAction",
    "RuleEvent",
    # Parsing and compilation
    "FrontmatterParser",
    "ScanState",
    "extract_frontmatter",
    "compile_conditions",
    "compile_rule",
    # Rule loader
    "LoadErrorKind",
    "RuleFileResult",
    "discover_rule_files",
    "get_plugin_rules_dir",
    "get_project_rules_dir",
    "load_rule_file",
    "load_rules",
    # Field extractor
    "extract_field",
    "get_tool_info",
    "read_transcript",
    # Evaluation
    "ConditionEvaluator",
    "PatternCache",
    "RuleMatcher",
    "matches_tool",
    "RuleEngine",
    "RuleMatches",
    "block_output",
    "combine_messages",
    "evaluate_rules",
    "format_rule_message",
]
