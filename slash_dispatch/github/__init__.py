"""GitHub integration helpers."""

from .client import GitHubManager

__all__ = ["GitHubManager"]
