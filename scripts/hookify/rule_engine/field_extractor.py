"""Extract rule condition fields from hook input data."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from hookify.log import hookify_log
from hookify.types.claude import (
    HookInput,
    is_bash_input,
    is_file_input,
    is_multi_edit_input,
    parse_tool_input,
)

NEW_TEXT_FIELDS = ("content", "new_text", "new_string")
OLD_TEXT_FIELDS = ("old_text", "old_string")


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def read_transcript(transcript_path: str | None) -> str:
    """Return the transcript file's text, or an empty string if it can't be read."""
    if not transcript_path:
        return ""
    try:
        return Path(transcript_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        hookify_log(f"WARNING: Could not read transcript {transcript_path}: {e}")
        return ""


def _event_field(field: str, input_data: HookInput) -> str | None:
    if field == "reason":
        return input_data.reason or ""
    if field == "transcript":
        return read_transcript(input_data.transcript_path)
    if field == "user_prompt":
        return input_data.user_prompt or input_data.prompt or ""
    return None


def _tool_field(field: str, tool_name: str | None, tool_input: dict[str, Any]) -> str | None:
    tool = parse_tool_input(tool_name, tool_input)

    if is_bash_input(tool):
        if field == "command":
            return _as_text(tool.command or "")

    elif is_file_input(tool):
        # Write, Edit
        if field in NEW_TEXT_FIELDS:
            return _as_text(tool.new_text)
        if field in OLD_TEXT_FIELDS:
            return _as_text(tool.old_text)
        if field == "file_path":
            return _as_text(tool.file_path or "")

    elif is_multi_edit_input(tool):
        if field == "file_path":
            return _as_text(tool.file_path or "")
        if field in ("new_text", "content"):
            return tool.new_text

    return None


def extract_field(
    field: str,
    tool_name: str | None,
    tool_input: dict[str, Any] | None,
    input_data: HookInput,
) -> str | None:
    """Extract a specific field from hook input data.

    Resolution order: an exact key in ``tool_input``, then event-level fields
    (``reason``, ``transcript``, ``user_prompt``), then per-tool synonyms.

    Args:
        field: The field to extract ('command', 'new_text', 'file_path', 'reason', etc.).
        tool_name: The name of the tool (e.g., 'Bash', 'Write', 'Edit').
        tool_input: The tool's input parameters.
        input_data: The full hook input.

    Returns:
        The extracted field value as a string, or None if the field does not
        exist for this event. An empty string is a found, empty value.
    """
    tool_input = tool_input or {}

    if field in tool_input:
        return _as_text(tool_input[field])

    value = _event_field(field, input_data)
    if value is not None:
        return value

    return _tool_field(field, tool_name, tool_input)


def get_tool_info(input_data: HookInput) -> tuple[str, dict[str, Any]]:
    """Return (tool_name, tool_input), with absent values as empty."""
    return input_data.tool_name or "", input_data.tool_input or {}
