"""Routes issue comment events to command dispatches."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Sequence, Tuple

from .commands.dispatcher import CommandDispatcher
from .commands.parser import parse_command
from .commands.payload import build_payload
from .event import CommentEvent
from .models import CommandConfig, Permission

if TYPE_CHECKING:
    from ..github import GitHubManager

LOGGER = logging.getLogger(__name__)


class Router:
    """Central orchestrator translating a slash command comment into dispatches."""

    def __init__(
        self,
        commands: Sequence[CommandConfig],
        github_manager: GitHubManager,
        reaction_manager: GitHubManager | None = None,
        reactions: bool = True,
    ) -> None:
        self._dispatcher = CommandDispatcher(commands)
        self._github_manager = github_manager
        self._reaction_manager = reaction_manager or github_manager
        self._reactions = reactions

    async def handle_event(self, event: CommentEvent) -> List[CommandConfig]:
        """Dispatch every registered command matching the comment.

        Returns the configurations that were dispatched, in order.
        """

        LOGGER.debug("Comment body: %s", event.comment_body)
        LOGGER.debug("Comment id: %s", event.comment_id)

        command = parse_command(event.comment_body)
        if command is None:
            LOGGER.info("The first line of the comment is not a valid slash command.")
            return []
        LOGGER.debug("Command tokens: %s", command.tokens)

        async def lookup_permission() -> Permission:
            return await self._github_manager.get_actor_permission(event.repository, event.actor)

        async def acknowledge(_: Tuple[CommandConfig, ...]) -> None:
            await self._add_reaction(event, "eyes")

        result = await self._dispatcher.match(
            command,
            is_pull_request=event.is_pull_request,
            is_edit=event.is_edit,
            lookup_permission=lookup_permission,
            on_candidates=acknowledge,
        )
        if not result.matched:
            return []

        client_payload: Dict[str, Any] = {"slash_command": {}, "github": event.github_context()}
        if event.is_pull_request:
            client_payload["pull_request"] = await self._github_manager.get_pull(
                event.repository, event.issue_number
            )

        dispatched: List[CommandConfig] = []
        for cmd in result.matches:
            payload = build_payload(command.tokens, cmd.static_args)
            client_payload["slash_command"] = payload.to_dict()
            LOGGER.debug("Slash command payload: %s", client_payload["slash_command"])
            await self._github_manager.create_dispatch(cmd, client_payload)
            dispatched.append(cmd)

        await self._add_reaction(event, "rocket")
        return dispatched

    async def _add_reaction(self, event: CommentEvent, reaction: str) -> None:
        if not self._reactions:
            return
        await self._reaction_manager.try_add_reaction(
            event.repository, event.issue_number, event.comment_id, reaction
        )
