"""End-to-end tests of the hook entry point (stdin JSON in, decision JSON out)."""

import io
import json

import pytest

from hookify import conf
from hookify.main import HOOK_KINDS, main, run_hook, select_event_scope
from hookify.rule_engine import RuleEvent
from hookify.types.claude import HookEventType
from tests.test_utils import rule_text


NO_RM = rule_text("Do not delete recursively", name="no-rm", event="bash", pattern="rm -rf", action="block")
CONSOLE_LOG = rule_text("Remove debug logging", name="console-log", event="file", pattern="console\\.log")
RUN_TESTS = """---
name: run-tests
event: stop
action: block
conditions:
  - field: reason
    operator: contains
    pattern: tests not run
---
Run the tests first
"""
PROMPT_WARN = """---
name: think
event: prompt
conditions:
  - field: user_prompt
    operator: regex_match
    pattern: delete\\s+everything
---
Think twice
"""


class TestEventScope:
    @pytest.mark.parametrize("hook_event,tool_name,expected", [
        ("PreToolUse", "Bash", RuleEvent.BASH),
        ("PostToolUse", "Bash", RuleEvent.BASH),
        ("PreToolUse", "Edit", RuleEvent.FILE),
        ("PreToolUse", "Write", RuleEvent.FILE),
        ("PreToolUse", "MultiEdit", RuleEvent.FILE),
        ("PreToolUse", "Read", None),
        ("Stop", None, RuleEvent.STOP),
        ("UserPromptSubmit", None, RuleEvent.PROMPT),
        ("Notification", None, None),
    ])
    def test_select_event_scope(self, hook_event, tool_name, expected):
        assert select_event_scope(hook_event, tool_name) == expected


class TestHookEntryPoint:
    def test_bash_block(self, rules_env, hook_data_factory):
        rules_env.add_project_rule("no-rm", NO_RM)
        data = hook_data_factory(HookEventType.PRE_TOOL_USE, tool_name="Bash", dangerous=True)

        run = rules_env.run_hook(data, "pretooluse")

        assert run.exit_code == 0
        assert run.output["hookSpecificOutput"]["permissionDecision"] == "deny"
        assert "**[no-rm]**\nDo not delete recursively" == run.output["systemMessage"]

    def test_bash_rules_not_loaded_for_file_tools(self, rules_env, hook_data_factory):
        rules_env.add_project_rule("no-rm", NO_RM)
        data = hook_data_factory(
            HookEventType.PRE_TOOL_USE,
            tool_name="Write",
            tool_input={"file_path": "/p/rm.sh", "content": "rm -rf /"},
        )
        assert rules_env.run_hook(data).output == {}

    def test_plugin_rule_warns_on_write(self, rules_env, hook_data_factory):
        rules_env.add_plugin_rule("console-log", CONSOLE_LOG)
        data = hook_data_factory(
            HookEventType.PRE_TOOL_USE,
            tool_name="Write",
            tool_input={"file_path": "/p/app.js", "content": "console.log('x')"},
        )
        assert rules_env.run_hook(data).output == {
            "systemMessage": "**[console-log]**\nRemove debug logging"
        }

    def test_stop_block(self, rules_env, hook_data_factory):
        rules_env.add_project_rule("run-tests", RUN_TESTS)
        rules_env.add_project_rule("no-rm", NO_RM)
        data = hook_data_factory(HookEventType.STOP, reason="tests not run")

        output = rules_env.run_hook(data, "stop").output

        assert output["decision"] == "block"
        assert output["reason"] == output["systemMessage"] == "**[run-tests]**\nRun the tests first"

    def test_prompt_warning(self, rules_env, hook_data_factory):
        rules_env.add_project_rule("think", PROMPT_WARN)
        data = hook_data_factory(HookEventType.USER_PROMPT_SUBMIT, dangerous=True)
        assert rules_env.run_hook(data, "userpromptsubmit").output == {
            "systemMessage": "**[think]**\nThink twice"
        }

    def test_hook_kind_from_payload(self, rules_env, hook_data_factory):
        rules_env.add_project_rule("no-rm", NO_RM)
        data = hook_data_factory(HookEventType.POST_TOOL_USE, tool_name="Bash", tool_input={"command": "rm -rf x"})
        output = rules_env.run_hook(data).output
        assert output["hookSpecificOutput"]["hookEventName"] == "PostToolUse"

    def test_hook_kind_argument_fills_missing_event_name(self, rules_env):
        rules_env.add_project_rule("no-rm", NO_RM)
        output = rules_env.run_hook(
            {"tool_name": "Bash", "tool_input": {"command": "rm -rf x"}}, "pretooluse"
        ).output
        assert output["hookSpecificOutput"]["hookEventName"] == "PreToolUse"

    def test_no_rules_is_empty_object(self, rules_env, hook_data_factory):
        data = hook_data_factory(HookEventType.PRE_TOOL_USE)
        assert rules_env.run_hook(data).output == {}


class TestFailOpen:
    def test_invalid_json(self, log_text):
        stdout = io.StringIO()
        assert main([], stdin=io.StringIO("{not json"), stdout=stdout) == 0
        output = json.loads(stdout.getvalue())
        assert output["systemMessage"].startswith("Hookify error: ")
        assert "ERROR:" in log_text()

    def test_non_object_payload(self):
        stdout = io.StringIO()
        assert main(["stop"], stdin=io.StringIO("[1, 2]"), stdout=stdout) == 0
        assert json.loads(stdout.getvalue())["systemMessage"].startswith("Hookify error: ")

    def test_invalid_payload_shape(self):
        stdout = io.StringIO()
        main([], stdin=io.StringIO(json.dumps({"tool_input": "not a mapping"})), stdout=stdout)
        assert "Hookify error" in json.loads(stdout.getvalue())["systemMessage"]

    def test_internal_error(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr("hookify.main.RuleEngine.from_rule_dirs", boom)
        stdout = io.StringIO()
        assert main([], stdin=io.StringIO("{}"), stdout=stdout) == 0
        assert json.loads(stdout.getvalue()) == {"systemMessage": "Hookify error: disk on fire"}

    def test_malformed_rule_file_does_not_break_hook(self, rules_env, hook_data_factory):
        rules_env.add_project_rule("broken", "no frontmatter at all")
        rules_env.add_project_rule("no-rm", NO_RM)
        data = hook_data_factory(HookEventType.PRE_TOOL_USE, dangerous=True)
        output = rules_env.run_hook(data, "pretooluse").output
        assert output["hookSpecificOutput"]["permissionDecision"] == "deny"


def test_run_hook_uses_payload_cwd(rules_env):
    rules_env.add_project_rule("no-rm", NO_RM)
    output = run_hook({
        "hook_event_name": "PreToolUse",
        "cwd": str(rules_env.path),
        "tool_name": "Bash",
        "tool_input": {"command": "rm -rf /"},
    })
    assert output["hookSpecificOutput"]["permissionDecision"] == "deny"


def test_hooks_json_registers_every_hook_kind():
    hooks = json.loads((conf.PLUGIN_DIR / "hooks" / "hooks.json").read_text(encoding="utf-8"))["hooks"]
    commands = [h["command"] for entries in hooks.values() for entry in entries for h in entry["hooks"]]
    assert sorted(cmd.rsplit(" ", 1)[-1] for cmd in commands) == sorted(HOOK_KINDS)
    for event_name, entries in hooks.items():
        kind = entries[0]["hooks"][0]["command"].rsplit(" ", 1)[-1]
        assert HOOK_KINDS[kind] == event_name


class TestLenientPayload:
    def test_null_event_name_still_evaluates(self, rules_env):
        rules_env.add_project_rule("no-rm", NO_RM)
        payload = {"hook_event_name": None, "tool_name": "Bash", "tool_input": {"command": "rm -rf /"}}

        output = rules_env.run_hook(payload, "pretooluse").output

        assert output["hookSpecificOutput"] == {"hookEventName": "PreToolUse", "permissionDecision": "deny"}

    def test_null_event_name_without_hook_kind(self, rules_env):
        rules_env.add_project_rule("no-rm", NO_RM)
        payload = {"hook_event_name": None, "tool_name": "Bash", "tool_input": {"command": "rm -rf /"}}
        assert rules_env.run_hook(payload).output == {"systemMessage": "**[no-rm]**\nDo not delete recursively"}

    def test_null_and_non_string_event_fields(self, rules_env):
        rules_env.add_project_rule("run-tests", RUN_TESTS)
        payload = {"hook_event_name": "Stop", "reason": None, "user_prompt": None, "prompt": 7}
        assert rules_env.run_hook(payload, "stop").output == {}

    def test_non_string_reason_is_compared_as_text(self, rules_env):
        rules_env.add_project_rule("run-tests", RUN_TESTS)
        payload = {"hook_event_name": "Stop", "reason": ["tests not run"]}
        assert rules_env.run_hook(payload, "stop").output["decision"] == "block"

    def test_unknown_hook_kind_falls_back_to_payload(self, rules_env, log_text):
        rules_env.add_project_rule("no-rm", NO_RM)
        payload = {"hook_event_name": "PreToolUse", "tool_name": "Bash", "tool_input": {"command": "rm -rf /"}}

        run = rules_env.run_hook(payload, "notification")

        assert run.exit_code == 0
        assert run.output["hookSpecificOutput"]["permissionDecision"] == "deny"
        assert "Unknown hook kind 'notification'" in log_text()

    def test_hook_kind_is_case_insensitive(self, rules_env):
        rules_env.add_project_rule("no-rm", NO_RM)
        output = rules_env.run_hook({"tool_name": "Bash", "tool_input": {"command": "rm -rf x"}}, "PreToolUse").output
        assert output["hookSpecificOutput"]["hookEventName"] == "PreToolUse"

    def test_extra_arguments_are_ignored(self, log_text):
        stdout = io.StringIO()
        assert main(["stop", "--verbose", "more"], stdin=io.StringIO("{}"), stdout=stdout) == 0
        assert json.loads(stdout.getvalue()) == {}
        assert "Ignoring extra arguments" in log_text()
