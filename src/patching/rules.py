# src/patching/rules.py — v2
"""Patch rule models.

Each rule carries a ``required`` flag deciding whether matching nothing is an
error or a no-op. Defaults: literal and inject rules are optional, key=value
rules are required.
"""

from __future__ import annotations

import re
from typing import Literal, Union

from pydantic import BaseModel, field_validator


class LiteralRule(BaseModel):
    """Replace every occurrence of a literal token."""

    kind: Literal["literal"] = "literal"
    token: str
    replacement: str
    required: bool = False

    @field_validator("token")
    @classmethod
    def token_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("token must not be empty")
        return v

    def apply(self, text: str) -> tuple[str, int]:
        """Return (patched text, number of matches)."""
        count = text.count(self.token)
        return text.replace(self.token, self.replacement), count


class KeyValueRule(BaseModel):
    """Replace each line starting with KEY by ``KEY=value``."""

    kind: Literal["key_value"] = "key_value"
    key: str
    value: str
    required: bool = True

    @field_validator("key")
    @classmethod
    def key_is_plain(cls, v: str) -> str:
        if not v or "\n" in v:
            raise ValueError("key must be a non-empty single line")
        return v

    def apply(self, text: str) -> tuple[str, int]:
        pattern = re.compile(rf"^{re.escape(self.key)}[^\r\n]*", re.MULTILINE)
        line = f"{self.key}={self.value}"
        return pattern.subn(lambda _m: line, text)


class InjectLineRule(BaseModel):
    """Append a line unless the file already contains it.

    Matches count lines already equal to ``line``, so a second application
    reports a match and changes nothing.
    """

    kind: Literal["inject_line"] = "inject_line"
    line: str
    required: bool = False

    def apply(self, text: str) -> tuple[str, int]:
        wanted = self.line.strip()
        present = sum(1 for existing in text.splitlines() if existing.strip() == wanted)
        if present:
            return text, present
        eol = "\r\n" if "\r\n" in text else "\n"
        if text and not text.endswith("\n"):
            text += eol
        return f"{text}{self.line}{eol}", 1


PatchRule = Union[LiteralRule, KeyValueRule, InjectLineRule]
