"""Core domain logic for Slash Command Dispatch."""

from .config import Inputs, get_commands_config, load_inputs, validate_config
from .errors import (
    ConfigError,
    ConfigValidationError,
    EventError,
    GitHubError,
    SlashDispatchError,
    WorkflowDispatchError,
)
from .event import CommentEvent, load_event
from .models import (
    CommandArgs,
    CommandConfig,
    DispatchType,
    IssueType,
    Permission,
    RepositoryRef,
    SlashCommandPayload,
    UnnamedArgs,
)
from .permissions import has_permission
from .router import Router

__all__ = [
    "Inputs",
    "get_commands_config",
    "load_inputs",
    "validate_config",
    "CommandArgs",
    "CommandConfig",
    "DispatchType",
    "IssueType",
    "Permission",
    "RepositoryRef",
    "SlashCommandPayload",
    "UnnamedArgs",
    "CommentEvent",
    "load_event",
    "has_permission",
    "SlashDispatchError",
    "ConfigError",
    "ConfigValidationError",
    "EventError",
    "GitHubError",
    "WorkflowDispatchError",
    "Router",
]
