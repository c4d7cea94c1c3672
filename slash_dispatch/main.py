"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
from typing import Sequence

from .core import (
    ConfigError,
    EventError,
    GitHubError,
    Router,
    WorkflowDispatchError,
    get_commands_config,
    load_event,
    load_inputs,
)
from .core.commands import build_payload, parse_command
from .github import GitHubManager

LOGGER = logging.getLogger(__name__)


def cli(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="slash-dispatch",
        description="Slash Command Dispatch - turn issue comment slash commands into dispatch events",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "run",
        help="Handle the current GitHub Actions issue_comment event (default)",
    )

    parse_parser = subparsers.add_parser(
        "parse",
        help="Print the slash_command payload built for a comment",
    )
    parse_parser.add_argument("comment", help="Comment text, e.g. '/deploy env=prod'")
    parse_parser.add_argument(
        "--static-arg",
        dest="static_args",
        action="append",
        default=[],
        help="Static argument to prepend (repeatable)",
    )

    args = parser.parse_args(argv)
    _configure_logging()

    if args.command == "parse":
        return _run_parse(args.comment, args.static_args)

    try:
        return asyncio.run(_run_async())
    except KeyboardInterrupt:
        LOGGER.info("Interrupted by user")
        return 130


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    if os.getenv("RUNNER_DEBUG") == "1":
        log_level_name = "DEBUG"
    log_level = getattr(logging, log_level_name, logging.INFO)
    logging.getLogger().setLevel(log_level)


def _run_parse(comment: str, static_args: Sequence[str]) -> int:
    command = parse_command(comment)
    if command is None:
        LOGGER.error("The first line of the comment is not a valid slash command.")
        return 1
    payload = build_payload(command.tokens, static_args)
    print(json.dumps(payload.to_dict(), indent=2))
    return 0


async def _run_async() -> int:
    try:
        event = load_event()
    except EventError as exc:
        LOGGER.error("%s", exc)
        return 1

    if not event.is_supported:
        LOGGER.warning("Event type '%s' not supported.", event.action)
        return 0

    try:
        inputs = load_inputs()
        commands = get_commands_config(inputs)
    except ConfigError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1
    LOGGER.debug("Commands config: %s", commands)

    github_manager = GitHubManager(inputs.token)
    reaction_manager = GitHubManager(inputs.reaction_token)
    router = Router(
        commands,
        github_manager,
        reaction_manager=reaction_manager,
        reactions=inputs.reactions,
    )

    try:
        await router.handle_event(event)
    except WorkflowDispatchError as exc:
        if not exc.informational:
            LOGGER.error("%s", exc)
            return 1
        set_output("error-message", str(exc))
        LOGGER.warning("%s", exc)
    except GitHubError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


def set_output(name: str, value: str) -> None:
    """Write a step output for later workflow steps."""
    output_path = os.getenv("GITHUB_OUTPUT")
    if not output_path:
        LOGGER.debug("GITHUB_OUTPUT is not set; skipping output %s", name)
        return
    with open(output_path, "a", encoding="utf-8") as handle:
        if "\n" in value:
            delimiter = "ghadelimiter_slash_dispatch"
            handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            handle.write(f"{name}={value}\n")


if __name__ == "__main__":
    raise SystemExit(cli())
