"""Custom exception hierarchy for Slash Command Dispatch."""

from __future__ import annotations

INFORMATIONAL_WORKFLOW_PREFIXES = (
    "Unexpected inputs provided",
    "No ref found for:",
)


class SlashDispatchError(Exception):
    """Base error type."""


class ConfigError(SlashDispatchError):
    pass


class ConfigValidationError(ConfigError):
    """Raised when a configuration field is outside its enumeration."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"'{value}' is not a valid '{field}'.")
        self.field = field
        self.value = value


class EventError(SlashDispatchError):
    pass


class GitHubError(SlashDispatchError):
    pass


class WorkflowDispatchError(GitHubError):
    """Raised when GitHub rejects a workflow dispatch request."""

    @property
    def informational(self) -> bool:
        message = str(self)
        if message.startswith(INFORMATIONAL_WORKFLOW_PREFIXES):
            return True
        if message.startswith("Required input") and message.endswith("not provided"):
            return True
        return message == "Workflow does not have 'workflow_dispatch' trigger"
