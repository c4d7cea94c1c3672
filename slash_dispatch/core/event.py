"""The issue comment event that triggered a run."""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import EventError
from .models import RepositoryRef

LOGGER = logging.getLogger(__name__)

SUPPORTED_ACTIONS = ("created", "edited")
MAX_BODY_LENGTH = 1000


@dataclass
class CommentEvent:
    action: str
    comment_id: int
    comment_body: str
    issue_number: int
    is_pull_request: bool
    actor: str
    repository: RepositoryRef
    payload: Dict[str, Any] = field(default_factory=dict)
    event_name: str = "issue_comment"

    @property
    def is_supported(self) -> bool:
        return self.action in SUPPORTED_ACTIONS

    @property
    def is_edit(self) -> bool:
        return self.action == "edited"

    def github_context(self) -> Dict[str, Any]:
        """Render the workflow context forwarded in dispatch payloads."""
        payload = copy.deepcopy(self.payload)
        issue = payload.get("issue")
        if isinstance(issue, dict) and issue.get("body"):
            issue["body"] = truncate_body(issue["body"])
        return {
            "payload": payload,
            "eventName": self.event_name,
            "sha": os.getenv("GITHUB_SHA", ""),
            "ref": os.getenv("GITHUB_REF", ""),
            "workflow": os.getenv("GITHUB_WORKFLOW", ""),
            "action": os.getenv("GITHUB_ACTION", ""),
            "actor": self.actor,
            "job": os.getenv("GITHUB_JOB", ""),
            "runNumber": _env_int("GITHUB_RUN_NUMBER"),
            "runId": _env_int("GITHUB_RUN_ID"),
            "apiUrl": os.getenv("GITHUB_API_URL", "https://api.github.com"),
            "serverUrl": os.getenv("GITHUB_SERVER_URL", "https://github.com"),
            "graphqlUrl": os.getenv("GITHUB_GRAPHQL_URL", "https://api.github.com/graphql"),
        }


def truncate_body(body: Optional[str]) -> str:
    return (body or "")[:MAX_BODY_LENGTH]


def _env_int(name: str) -> int:
    try:
        return int(os.getenv(name, "0"))
    except ValueError:
        return 0


def event_from_payload(
    payload: Dict[str, Any],
    actor: str,
    repository: str,
    event_name: str = "issue_comment",
) -> CommentEvent:
    action = payload.get("action")
    issue = payload.get("issue")
    comment = payload.get("comment")
    if not action or not isinstance(issue, dict) or not isinstance(comment, dict):
        raise EventError("Required context properties are missing.")
    if not repository:
        raise EventError("GITHUB_REPOSITORY is not set")

    return CommentEvent(
        action=action,
        comment_id=comment.get("id", 0),
        comment_body=comment.get("body") or "",
        issue_number=issue.get("number", 0),
        is_pull_request="pull_request" in issue,
        actor=actor,
        repository=RepositoryRef.parse(repository),
        payload=payload,
        event_name=event_name,
    )


def load_event(path: Path | str | None = None) -> CommentEvent:
    """Load the triggering event from the GitHub Actions runner environment."""
    event_path = path or os.getenv("GITHUB_EVENT_PATH")
    if not event_path:
        raise EventError("GITHUB_EVENT_PATH is not set")

    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise EventError(f"Failed to read event payload {event_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise EventError(f"Invalid event payload {event_path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise EventError(f"Invalid event payload {event_path}")

    return event_from_payload(
        payload,
        actor=os.getenv("GITHUB_ACTOR", ""),
        repository=os.getenv("GITHUB_REPOSITORY", ""),
        event_name=os.getenv("GITHUB_EVENT_NAME", "issue_comment"),
    )
