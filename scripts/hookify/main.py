#!/usr/bin/env python3
"""
Hookify - Hook Entry Point
Reads one hook event from stdin, evaluates hookify rules against it and
writes one decision document to stdout.
"""
import argparse
import json
import sys
from typing import Any, TextIO

from hookify.conf import load_plugin_config
from hookify.log import hookify_log
from hookify.rule_engine import RuleEngine, RuleEvent
from hookify.types.claude import HookEventType, HookInput

# =============================================================================
# HOOK KIND -> EVENT SCOPE
# =============================================================================

HOOK_KINDS: dict[str, HookEventType] = {
    "pretooluse": HookEventType.PRE_TOOL_USE,
    "posttooluse": HookEventType.POST_TOOL_USE,
    "stop": HookEventType.STOP,
    "userpromptsubmit": HookEventType.USER_PROMPT_SUBMIT,
}

TOOL_EVENTS: dict[str, RuleEvent] = {
    "Bash": RuleEvent.BASH,
    "Edit": RuleEvent.FILE,
    "Write": RuleEvent.FILE,
    "MultiEdit": RuleEvent.FILE,
}

# =============================================================================
# MAIN LOGIC
# =============================================================================


def select_event_scope(hook_event: str, tool_name: str | None) -> RuleEvent | None:
    """Map the host's hook event to the rule event scope to load.

    Returns None when every rule should be loaded.
    """
    if hook_event in (HookEventType.PRE_TOOL_USE, HookEventType.POST_TOOL_USE):
        return TOOL_EVENTS.get(tool_name or "")
    if hook_event == HookEventType.STOP:
        return RuleEvent.STOP
    if hook_event == HookEventType.USER_PROMPT_SUBMIT:
        return RuleEvent.PROMPT
    return None


def resolve_hook_event(hook_kind: str | None, payload_event: str) -> str:
    """Pick the hook event: the CLI hook kind if recognised, else the payload's."""
    if not hook_kind:
        return payload_event
    hook_event = HOOK_KINDS.get(hook_kind.lower())
    if hook_event is None:
        hookify_log(f"WARNING: Unknown hook kind {hook_kind!r}, using hook_event_name={payload_event!r}")
        return payload_event
    return hook_event


def run_hook(data: dict[str, Any], hook_kind: str | None = None) -> dict[str, Any]:
    """Evaluate rules for one hook payload and return the decision dict."""
    input_data = HookInput.model_validate(data)
    hook_event = resolve_hook_event(hook_kind, input_data.hook_event_name)
    if not input_data.hook_event_name:
        input_data = input_data.model_copy(update={"hook_event_name": hook_event})

    event = select_event_scope(hook_event, input_data.tool_name)
    hookify_log(
        f"Hook triggered: {hook_event or 'unknown'} "
        f"(tool={input_data.tool_name}, scope={event or 'all'})"
    )

    engine = RuleEngine.from_rule_dirs(event=event, project_dir=input_data.cwd)
    return engine.evaluate(input_data).to_dict()


def error_output(error: Exception) -> dict[str, Any]:
    """Fail-open decision: surface the error, never block the tool call."""
    return {"systemMessage": f"Hookify error: {error}"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hookify-hook",
        description="Evaluate hookify rules for one Claude Code hook event read from stdin.",
    )
    parser.add_argument(
        "hook",
        nargs="?",
        help=f"Hook kind ({', '.join(sorted(HOOK_KINDS))}); defaults to the payload's hook_event_name",
    )
    return parser


def main(argv: list[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    args, extra = build_parser().parse_known_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    version = load_plugin_config().get("version", "unknown")
    banner = f" hookify v{version} "
    hookify_log(banner.center(60, "="))
    if extra:
        hookify_log(f"WARNING: Ignoring extra arguments: {extra}")

    try:
        data = json.load(stdin)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        result = run_hook(data, args.hook)
    except Exception as e:
        # On error, allow the operation
        hookify_log(f"ERROR: {e}")
        result = error_output(e)

    stdout.write(json.dumps(result) + "\n")
    stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
