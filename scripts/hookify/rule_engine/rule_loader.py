"""Load hookify rule files from the project and plugin rule directories."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from hookify import conf
from hookify.log import hookify_log
from .frontmatter import extract_frontmatter
from .rule import Rule, compile_rule


class LoadErrorKind(StrEnum):
    MISSING_FRONTMATTER = "missing_frontmatter"
    UNREADABLE = "unreadable"


@dataclass
class RuleFileResult:
    """Outcome of loading one candidate rule file."""

    path: Path
    rule: Rule | None = None
    error_kind: LoadErrorKind | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.rule is not None


def get_project_rules_dir(project_dir: str | Path | None = None) -> Path:
    """Return the project-level rules directory (<project>/.claude)."""
    project_path = Path(project_dir) if project_dir else Path.cwd()
    return project_path / conf.PROJECT_RULES_DIRNAME


def get_plugin_rules_dir() -> Path | None:
    """Return <$CLAUDE_PLUGIN_ROOT>/rules, or None when the variable is unset."""
    plugin_root = conf.get_plugin_root()
    if plugin_root is None:
        return None
    return plugin_root / conf.PLUGIN_RULES_DIRNAME


def is_project_rule_file(path: Path) -> bool:
    return path.name.startswith(conf.PROJECT_RULE_PREFIX) and path.name.endswith(conf.RULE_SUFFIX)


def is_plugin_rule_file(path: Path) -> bool:
    return path.name.endswith(conf.RULE_SUFFIX)


def load_rule_file(path: Path) -> RuleFileResult:
    """Read, parse and compile a single rule file."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return RuleFileResult(
            path=path,
            error_kind=LoadErrorKind.UNREADABLE,
            error=f"Error loading {path}: {e}",
        )

    metadata, message = extract_frontmatter(content)
    if not metadata:
        return RuleFileResult(
            path=path,
            error_kind=LoadErrorKind.MISSING_FRONTMATTER,
            error=f"{path} missing YAML frontmatter",
        )

    return RuleFileResult(path=path, rule=compile_rule(metadata, message))


def _candidate_files(rules_dir: Path | None, is_rule_file) -> list[Path]:
    """List matching files in a directory, sorted by name; [] if unreadable."""
    if rules_dir is None or not rules_dir.is_dir():
        return []
    try:
        entries = sorted(rules_dir.iterdir())
    except OSError as e:
        hookify_log(f"WARNING: Could not read rules directory {rules_dir}: {e}")
        return []
    return [p for p in entries if p.is_file() and is_rule_file(p)]


def discover_rule_files(project_dir: str | Path | None = None) -> list[Path]:
    """All candidate rule files: project rules first, then plugin rules."""
    return (
        _candidate_files(get_project_rules_dir(project_dir), is_project_rule_file)
        + _candidate_files(get_plugin_rules_dir(), is_plugin_rule_file)
    )


def load_rules(event: str | None = None, project_dir: str | Path | None = None) -> list[Rule]:
    """Load all enabled rules, optionally restricted to one event scope.

    Args:
        event: 'bash', 'file', 'stop', 'prompt', or None for every event.
            Rules with event 'all' are always included.
        project_dir: Project whose .claude directory holds rule files.
            Defaults to the current working directory.

    Returns:
        Rules in discovery order. Files that can't be read or have no
        frontmatter are skipped with a warning.
    """
    rules: list[Rule] = []
    for path in discover_rule_files(project_dir):
        result = load_rule_file(path)
        if not result.ok:
            hookify_log(f"WARNING: {result.error}")
            continue
        rule = result.rule
        if rule.enabled and rule.applies_to(event):
            rules.append(rule)

    hookify_log(f"Loaded {len(rules)} rules (event={event or 'all'})")
    return rules
