"""Shared fixtures for command matching tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from slash_dispatch.core.models import CommandConfig, DispatchType, IssueType, Permission


@pytest.fixture
def registered_commands():
    """A mix of registrations covering every matching stage."""
    return [
        CommandConfig(command="deploy", issue_type=IssueType.PULL_REQUEST, repository="owner/app"),
        CommandConfig(command="test", repository="owner/app"),
        CommandConfig(
            command="test",
            repository="owner/ci",
            static_args=("production",),
            dispatch_type=DispatchType.WORKFLOW,
        ),
        CommandConfig(command="rebase", allow_edits=True, repository="owner/app"),
        CommandConfig(command="release", permission=Permission.ADMIN, repository="owner/app"),
        CommandConfig(command="label", permission=Permission.TRIAGE, issue_type=IssueType.ISSUE),
    ]


@pytest.fixture
def lookup_permission():
    """Async permission lookup returning write access."""
    return AsyncMock(return_value=Permission.WRITE)
