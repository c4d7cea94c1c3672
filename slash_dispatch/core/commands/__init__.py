"""Slash command parsing, argument payloads and matching."""

from .dispatcher import CommandDispatcher, MatchResult, MatchStage
from .parser import ParsedCommand, parse_command, tokenize
from .payload import MAX_ARGS, build_payload

__all__ = [
    "CommandDispatcher",
    "MatchResult",
    "MatchStage",
    "ParsedCommand",
    "parse_command",
    "tokenize",
    "MAX_ARGS",
    "build_payload",
]
