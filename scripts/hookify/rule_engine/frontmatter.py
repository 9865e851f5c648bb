"""Parse the restricted markdown-with-frontmatter rule format.

A rule file looks like::

    ---
    name: no-rm
    event: bash
    conditions:
      - field: command
        operator: regex_match
        pattern: rm\\s+-rf
    ---
    Message shown when the rule matches.

The metadata block supports scalar keys (with true/false coercion), flat lists
of scalars, and flat lists of maps written inline (``- a: 1, b: 2``) or over
several indented lines. Nothing nests deeper than that.

Scanner transitions (any state not listed ignores the line)::

    state         line                          action                     next
    ------------  ----------------------------  -------------------------  ------------
    any           top-level ``key:``            flush list, open list key  IN_LIST
    any           top-level ``key: value``      flush list, store scalar   GROUND
    IN_LIST/DICT  ``- k: v, k2: v2``            flush item, push map       IN_LIST
    IN_LIST/DICT  ``- k: v``                    flush item, open map       IN_DICT_ITEM
    IN_LIST/DICT  ``- value``                   flush item, push scalar    IN_LIST
    IN_DICT_ITEM  indent > 2 and ``k: v``       add pair to open map       IN_DICT_ITEM
    end of input                                flush item, flush list
"""

from __future__ import annotations

from enum import Enum
from typing import Any

DELIMITER = "---"
_QUOTES = "\"'"


class ScanState(Enum):
    GROUND = "ground"
    IN_LIST = "in_list"
    IN_DICT_ITEM = "in_dict_item"


def strip_quotes(value: str) -> str:
    """Drop one leading and one trailing quote character, if present."""
    if value and value[0] in _QUOTES:
        value = value[1:]
    if value and value[-1] in _QUOTES:
        value = value[:-1]
    return value


def coerce_scalar(value: str) -> str | bool:
    """Quote-strip a scalar and map true/false (any case) to booleans."""
    clean = strip_quotes(value)
    if clean.lower() == "true":
        return True
    if clean.lower() == "false":
        return False
    return clean


def _split_pair(text: str) -> tuple[str, str]:
    key, _, value = text.partition(":")
    return key.strip(), strip_quotes(value.strip())


class FrontmatterParser:
    """Line scanner for the metadata block of a rule file.

    One instance parses one block; call ``parse()`` with the text between the
    delimiters.
    """

    def __init__(self) -> None:
        self.metadata: dict[str, Any] = {}
        self.state = ScanState.GROUND
        self._list_key: str | None = None
        self._list: list[Any] = []
        self._item: dict[str, str] = {}

    def parse(self, text: str) -> dict[str, Any]:
        for line in text.split("\n"):
            self.feed(line)
        self.finish()
        return self.metadata

    def feed(self, line: str) -> None:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            return

        indent = len(line) - len(line.lstrip())

        if indent == 0 and ":" in line and not stripped.startswith("-"):
            self._top_level_key(line)
        elif stripped.startswith("-") and self.state is not ScanState.GROUND:
            self._list_item(stripped[1:].strip())
        elif indent > 2 and self.state is ScanState.IN_DICT_ITEM and ":" in stripped:
            key, value = _split_pair(stripped)
            self._item[key] = value

    def finish(self) -> None:
        self._flush_list()

    # -- transitions --

    def _top_level_key(self, line: str) -> None:
        self._flush_list()
        key, _, value = line.partition(":")
        key = key.strip()
        value = value.strip()
        if not value:
            self._list_key = key
            self._list = []
            self.state = ScanState.IN_LIST
        else:
            self.metadata[key] = coerce_scalar(value)
            self.state = ScanState.GROUND

    def _list_item(self, item_text: str) -> None:
        self._flush_item()
        if ":" in item_text and "," in item_text:
            inline: dict[str, str] = {}
            for part in item_text.split(","):
                if ":" in part:
                    key, value = _split_pair(part)
                    inline[strip_quotes(key)] = value
            self._list.append(inline)
            self.state = ScanState.IN_LIST
        elif ":" in item_text:
            key, value = _split_pair(item_text)
            self._item = {key: value}
            self.state = ScanState.IN_DICT_ITEM
        else:
            self._list.append(strip_quotes(item_text))
            self.state = ScanState.IN_LIST

    # -- flushing --

    def _flush_item(self) -> None:
        if self.state is ScanState.IN_DICT_ITEM and self._item:
            self._list.append(self._item)
        self._item = {}

    def _flush_list(self) -> None:
        if self.state is ScanState.GROUND or self._list_key is None:
            return
        self._flush_item()
        self.metadata[self._list_key] = self._list
        self._list_key = None
        self._list = []
        self.state = ScanState.GROUND


def extract_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split rule-file text into (metadata, message body).

    Text that does not open with the delimiter, or has no closing delimiter,
    yields empty metadata and the whole text as body.
    """
    if not content.startswith(DELIMITER):
        return {}, content

    parts = content.split(DELIMITER)
    if len(parts) < 3:
        return {}, content

    metadata = FrontmatterParser().parse(parts[1])
    message = DELIMITER.join(parts[2:]).strip()
    return metadata, message
