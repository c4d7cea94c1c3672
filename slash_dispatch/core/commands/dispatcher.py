"""Match parsed commands against the registered command configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence, Tuple

from ..models import CommandConfig, IssueType, Permission
from ..permissions import has_permission
from .parser import ParsedCommand

LOGGER = logging.getLogger(__name__)

PermissionLookup = Callable[[], Awaitable[Permission]]
CandidatesHook = Callable[[Tuple[CommandConfig, ...]], Awaitable[None]]


class MatchStage(str, Enum):
    NAME = "name"
    ISSUE_TYPE = "issue_type"
    EDITS = "allow_edits"
    PERMISSION = "permission"


@dataclass(frozen=True)
class MatchResult:
    matches: Tuple[CommandConfig, ...]
    halted_at: Optional[MatchStage] = None

    @property
    def matched(self) -> bool:
        return bool(self.matches)


class CommandDispatcher:
    """Narrows the registered commands down to those that should be dispatched."""

    def __init__(self, commands: Sequence[CommandConfig]) -> None:
        self._commands: Tuple[CommandConfig, ...] = tuple(commands)

    def match_name(self, name: str) -> Tuple[CommandConfig, ...]:
        return tuple(cmd for cmd in self._commands if cmd.command == name)

    @staticmethod
    def filter_issue_type(
        commands: Sequence[CommandConfig], is_pull_request: bool
    ) -> Tuple[CommandConfig, ...]:
        wanted = IssueType.PULL_REQUEST if is_pull_request else IssueType.ISSUE
        return tuple(cmd for cmd in commands if cmd.issue_type in (IssueType.BOTH, wanted))

    @staticmethod
    def filter_edits(commands: Sequence[CommandConfig]) -> Tuple[CommandConfig, ...]:
        return tuple(cmd for cmd in commands if cmd.allow_edits)

    @staticmethod
    def filter_permission(
        commands: Sequence[CommandConfig], actor_permission: Permission
    ) -> Tuple[CommandConfig, ...]:
        return tuple(cmd for cmd in commands if has_permission(actor_permission, cmd.permission))

    def match_context(
        self,
        command: ParsedCommand,
        is_pull_request: bool,
        is_edit: bool,
    ) -> MatchResult:
        """Run the checks that need no remote calls (name, issue type, edits)."""

        matches = self.match_name(command.name)
        LOGGER.debug("Config matches on 'command': %s", matches)
        if not matches:
            LOGGER.info("Command '%s' is not registered for dispatch.", command.name)
            return MatchResult((), MatchStage.NAME)

        matches = self.filter_issue_type(matches, is_pull_request)
        LOGGER.debug("Config matches on 'issue_type': %s", matches)
        if not matches:
            issue_type = "pull request" if is_pull_request else "issue"
            LOGGER.info(
                "Command '%s' is not configured for the issue type '%s'.",
                command.name,
                issue_type,
            )
            return MatchResult((), MatchStage.ISSUE_TYPE)

        if is_edit:
            matches = self.filter_edits(matches)
            LOGGER.debug("Config matches on 'allow_edits': %s", matches)
            if not matches:
                LOGGER.info("Command '%s' is not configured to allow edits.", command.name)
                return MatchResult((), MatchStage.EDITS)

        return MatchResult(matches)

    async def match(
        self,
        command: ParsedCommand,
        is_pull_request: bool,
        is_edit: bool,
        lookup_permission: PermissionLookup,
        on_candidates: Optional[CandidatesHook] = None,
    ) -> MatchResult:
        """Run every stage, looking up the actor permission only if still needed."""

        result = self.match_context(command, is_pull_request, is_edit)
        if not result.matched:
            return result

        if on_candidates is not None:
            await on_candidates(result.matches)

        actor_permission = Permission(await lookup_permission())
        LOGGER.debug("Actor permission: %s", actor_permission.value)
        matches = self.filter_permission(result.matches, actor_permission)
        LOGGER.debug("Config matches on 'permission': %s", matches)
        if not matches:
            LOGGER.info(
                "Command '%s' is not configured for the user's permission level '%s'.",
                command.name,
                actor_permission.value,
            )
            return MatchResult((), MatchStage.PERMISSION)

        LOGGER.info("Command '%s' to be dispatched.", command.name)
        return MatchResult(matches)
