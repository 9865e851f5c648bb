"""Hookify - rule-based gating for Claude Code hook events."""

__version__ = "0.1.0"
