"""Typed schemas for Claude Code hook events, tool payloads and hook output.

The host sends one JSON document per hook invocation. ``HookInput`` validates
the fields the rule engine reads and keeps everything else as extra data;
``parse_tool_input`` gives a typed view of ``tool_input`` for the tools the
field extractor knows about. ``HookOutput`` is the decision document written
back to the host.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HookEventType(StrEnum):
    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    STOP = "Stop"
    SUBAGENT_STOP = "SubagentStop"
    NOTIFICATION = "Notification"
    SESSION_START = "SessionStart"


# =============================================================================
# Tool Input Types
# =============================================================================


@dataclass
class BashToolInput:
    """Input parameters for the Bash tool."""

    command: str = ""
    description: str | None = None
    timeout: int | None = None
    run_in_background: bool | None = None


@dataclass
class FileToolInput:
    """Shared shape of the single-file writing tools (Write, Edit)."""

    file_path: str = ""
    content: str = ""
    old_string: str = ""
    new_string: str = ""

    @property
    def new_text(self) -> str:
        return self.new_string or self.content or ""

    @property
    def old_text(self) -> str:
        return self.old_string or ""


@dataclass
class WriteToolInput(FileToolInput):
    """Input parameters for the Write tool."""


@dataclass
class EditToolInput(FileToolInput):
    """Input parameters for the Edit tool."""

    replace_all: bool = False


@dataclass
class MultiEditToolInput:
    """Input parameters for the MultiEdit tool."""

    file_path: str = ""
    edits: list[dict[str, Any]] | None = None

    @property
    def new_text(self) -> str | None:
        """Space-joined ``new_string`` of every edit, or None without an edits list."""
        if not isinstance(self.edits, list):
            return None
        return " ".join(
            str(edit.get("new_string") or "") if isinstance(edit, dict) else ""
            for edit in self.edits
        )


# Union of all tool input types
ToolInput = Union[
    BashToolInput,
    WriteToolInput,
    EditToolInput,
    MultiEditToolInput,
    dict[str, Any],  # Fallback for unknown tools
]


def parse_tool_input(tool_name: str | None, input_dict: dict[str, Any]) -> ToolInput:
    """Parse a tool input dictionary into a typed dataclass.

    Args:
        tool_name: The name of the tool.
        input_dict: The raw input dictionary.

    Returns:
        A typed tool input dataclass, or the original dict if unknown.
    """
    parsers: dict[str, type] = {
        "Bash": BashToolInput,
        "Write": WriteToolInput,
        "Edit": EditToolInput,
        "MultiEdit": MultiEditToolInput,
    }

    parser = parsers.get(tool_name or "")
    if parser is None:
        return input_dict

    # Filter to only include fields the dataclass accepts
    valid_fields = {f.name for f in parser.__dataclass_fields__.values()}  # type: ignore
    filtered = {k: v for k, v in input_dict.items() if k in valid_fields and v is not None}

    try:
        return parser(**filtered)
    except (TypeError, ValueError):
        return input_dict


def is_bash_input(tool_input: ToolInput) -> bool:
    """Check if tool input is BashToolInput."""
    return isinstance(tool_input, BashToolInput)


def is_file_input(tool_input: ToolInput) -> bool:
    """Check if tool input is a Write or Edit input."""
    return isinstance(tool_input, FileToolInput)


def is_multi_edit_input(tool_input: ToolInput) -> bool:
    """Check if tool input is MultiEditToolInput."""
    return isinstance(tool_input, MultiEditToolInput)


# =============================================================================
# Hook Input
# =============================================================================


class HookInput(BaseModel):
    """Hook payload fields read by the rule engine."""

    model_config = ConfigDict(extra="allow")

    hook_event_name: str = Field(default="")
    tool_name: str | None = Field(default=None)
    tool_input: dict[str, Any] = Field(default_factory=dict)
    reason: str | None = Field(default=None)
    transcript_path: str | None = Field(default=None)
    user_prompt: str | None = Field(default=None)
    prompt: str | None = Field(default=None)
    cwd: str | None = Field(default=None)

    @field_validator("tool_input", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("hook_event_name", mode="before")
    @classmethod
    def none_as_blank(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("tool_name", "reason", "user_prompt", "prompt", "transcript_path", "cwd", mode="before")
    @classmethod
    def scalar_as_text(cls, value: Any) -> Any:
        # Only null stays null; any other non-string value is kept as its text
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value, default=str)


# =============================================================================
# Hook Output
# =============================================================================


class HookSpecificOutput(BaseModel):
    """Event-specific block of the decision document (tool events only)."""

    hookEventName: str
    permissionDecision: Literal["deny", "allow"]


class HookOutput(BaseModel):
    """Decision document returned to the host.

    An instance with nothing set serialises to ``{}``: the explicit no-op.
    """

    decision: Literal["block"] | None = None
    reason: str | None = None
    hookSpecificOutput: HookSpecificOutput | None = None
    systemMessage: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @property
    def is_empty(self) -> bool:
        return not self.to_dict()
