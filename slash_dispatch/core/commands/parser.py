"""Tokenizer for slash commands found in issue comments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

TRIGGER = "/"

# key="quoted value", "quoted value" (both allowing \" escapes), or a bare word.
TOKEN_PATTERN = re.compile(
    r'\S+="[^"\\]*(?:\\.[^"\\]*)*"|"[^"\\]*(?:\\.[^"\\]*)*"|\S+'
)
LINE_BREAK = re.compile(r"\r?\n")


@dataclass
class ParsedCommand:
    name: str
    tokens: List[str]

    @property
    def args(self) -> List[str]:
        return self.tokens[1:]


def tokenize(line: str) -> List[str]:
    """Split a command line into words, keeping quoted spans together.

    Quotes are left in place; an unterminated quote simply falls back to
    whitespace splitting for the rest of the line.
    """
    return TOKEN_PATTERN.findall(line)


def parse_command(text: str) -> Optional[ParsedCommand]:
    """Parse the first line of a comment into a structured command.

    Supported syntax:
      - `/name arg key=value "quoted arg" key="quoted value"`
    """

    first_line = LINE_BREAK.split(text, maxsplit=1)[0].strip()
    if len(first_line) < 2 or not first_line.startswith(TRIGGER):
        return None

    tokens = tokenize(first_line[len(TRIGGER):])
    if not tokens:
        return None
    return ParsedCommand(name=tokens[0], tokens=tokens)
