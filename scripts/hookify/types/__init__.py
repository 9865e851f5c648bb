"""Type definitions for hook payloads and decisions."""

from .claude import (
    BashToolInput,
    EditToolInput,
    FileToolInput,
    HookEventType,
    HookInput,
    HookOutput,
    HookSpecificOutput,
    MultiEditToolInput,
    ToolInput,
    WriteToolInput,
    is_bash_input,
    is_file_input,
    is_multi_edit_input,
    parse_tool_input,
)

__all__ = [
    "BashToolInput",
    "EditToolInput",
    "FileToolInput",
    "HookEventType",
    "HookInput",
    "HookOutput",
    "HookSpecificOutput",
    "MultiEditToolInput",
    "ToolInput",
    "WriteToolInput",
    "is_bash_input",
    "is_file_input",
    "is_multi_edit_input",
    "parse_tool_input",
]
