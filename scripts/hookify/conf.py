"""Hookify - Central path and naming configuration."""

import json
import os
from pathlib import Path


def _env_flag(name: str, default: bool = True) -> bool:
    """Read a 0/1 style toggle from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


USER_HOME = Path.home()
HOOKIFY_HOME = USER_HOME / ".claude" / "hookify"

SCRIPT_DIR = Path(__file__).resolve().parent.parent
PLUGIN_DIR = SCRIPT_DIR.parent

# =============================================================================
# RULE FILE CONVENTIONS
# =============================================================================

PROJECT_RULES_DIRNAME = ".claude"
PROJECT_RULE_PREFIX = "hookify."
RULE_SUFFIX = ".local.md"

PLUGIN_ROOT_ENV = "CLAUDE_PLUGIN_ROOT"
PLUGIN_RULES_DIRNAME = "rules"
PLUGIN_JSON = Path(".claude-plugin") / "plugin.json"

# =============================================================================
# LOGGING
# =============================================================================

LOG = _env_flag("HOOKIFY_LOG")
LOG_TO_STDERR = _env_flag("HOOKIFY_LOG_STDERR")  # stderr keeps hook stdout clean
LOG_FILE = Path(os.environ.get("HOOKIFY_LOG_FILE") or HOOKIFY_HOME / "hookify.log")


def get_plugin_root() -> Path | None:
    """Return the plugin root from the environment, if set."""
    root = os.environ.get(PLUGIN_ROOT_ENV)
    return Path(root) if root else None


def load_plugin_config() -> dict:
    """Load the plugin manifest (.claude-plugin/plugin.json) as a dict."""
    plugin_root = get_plugin_root() or PLUGIN_DIR
    plugin_json = plugin_root / PLUGIN_JSON
    try:
        with open(plugin_json, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}
