"""Build the argument payload sent with each dispatched command."""

from __future__ import annotations

import re
from typing import List, Sequence

from ..models import CommandArgs, SlashCommandPayload

# Keeps the dispatch payload under GitHub's size limits. Static args are
# operator-controlled and not counted.
MAX_ARGS = 50

NAMED_ARG_PATTERN = re.compile(r"^(?P<name>[a-zA-Z0-9_-]+)=(?P<value>.+)$")


def strip_quotes(value: str) -> str:
    if value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def build_payload(
    command_tokens: Sequence[str],
    static_args: Sequence[str] = (),
) -> SlashCommandPayload:
    """Classify command tokens into named and unnamed arguments.

    ``command_tokens[0]`` is the command name. Up to ``MAX_ARGS`` following
    tokens are kept and ``static_args`` are placed in front of them. Later
    occurrences of a named argument overwrite earlier ones.
    """

    arg_words: List[str] = [*static_args, *command_tokens[1 : MAX_ARGS + 1]]
    args = CommandArgs()
    if arg_words:
        args.all = " ".join(arg_words)
        unnamed_words: List[str] = []
        for word in arg_words:
            match = NAMED_ARG_PATTERN.match(word)
            if match:
                args.named[match.group("name")] = strip_quotes(match.group("value"))
            else:
                unnamed_words.append(word)
                args.unnamed.values.append(strip_quotes(word))
        if unnamed_words:
            args.unnamed.all = " ".join(unnamed_words)

    return SlashCommandPayload(command=command_tokens[0], args=args)
