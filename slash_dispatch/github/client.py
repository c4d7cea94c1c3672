"""Lightweight GitHub client helpers."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Dict, Optional

import requests
from github import Auth, Github, GithubException
from github.Repository import Repository

from ..core.errors import GitHubError, WorkflowDispatchError
from ..core.event import truncate_body
from ..core.models import CommandConfig, DispatchType, Permission, RepositoryRef

LOGGER = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
MAX_WORKFLOW_INPUTS = 10
REQUEST_TIMEOUT = 30

# PyGithub raises requests exceptions for transport failures.
API_ERRORS = (GithubException, requests.RequestException)

# Highest first: (field in the REST permissions object, permission level).
PERMISSION_FLAGS = (
    ("admin", Permission.ADMIN),
    ("maintain", Permission.MAINTAIN),
    ("push", Permission.WRITE),
    ("triage", Permission.TRIAGE),
    ("pull", Permission.READ),
)


def workflow_inputs(named: Dict[str, str]) -> Dict[str, str]:
    """Take at most MAX_WORKFLOW_INPUTS named arguments, excluding 'ref'."""
    inputs: Dict[str, str] = {}
    for key, value in named.items():
        if key == "ref":
            continue
        inputs[key] = value
        if len(inputs) == MAX_WORKFLOW_INPUTS:
            break
    return inputs


class GitHubManager:
    """Wrapper around PyGithub that exposes async helpers."""

    def __init__(self, token: Optional[str], api_url: Optional[str] = None) -> None:
        self._token = token
        self._api_url = (api_url or os.getenv("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
        self._client = Github(auth=Auth.Token(token), base_url=self._api_url) if token else None

    async def get_actor_permission(self, repo: RepositoryRef, actor: str) -> Permission:
        return await asyncio.to_thread(self._get_actor_permission_sync, repo, actor)

    async def try_add_reaction(
        self,
        repo: RepositoryRef,
        issue_number: int,
        comment_id: int,
        reaction: str,
    ) -> None:
        await asyncio.to_thread(
            self._try_add_reaction_sync,
            repo,
            issue_number,
            comment_id,
            reaction,
        )

    async def get_pull(self, repo: RepositoryRef, pull_number: int) -> Dict[str, Any]:
        return await asyncio.to_thread(self._get_pull_sync, repo, pull_number)

    async def create_dispatch(self, cmd: CommandConfig, client_payload: Dict[str, Any]) -> None:
        if cmd.dispatch_type == DispatchType.REPOSITORY:
            await asyncio.to_thread(self._create_repository_dispatch_sync, cmd, client_payload)
        else:
            await asyncio.to_thread(self._create_workflow_dispatch_sync, cmd, client_payload)

    def _get_actor_permission_sync(self, repo: RepositoryRef, actor: str) -> Permission:
        """Resolve the actor's highest permission, including team-based access."""
        url = f"{self._api_url}/repos/{repo.owner}/{repo.name}/collaborators/{actor}/permission"
        try:
            response = requests.get(url, headers=self._headers(), timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise GitHubError(f"Failed to query permission for {actor}: {exc}") from exc

        if response.status_code == 404:
            LOGGER.debug("User %s is not a collaborator on %s", actor, repo.full_name)
            return Permission.NONE
        if not response.ok:
            raise GitHubError(
                f"Failed to query permission for {actor}: "
                f"{response.status_code} {_error_message(response)}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise GitHubError(f"Invalid permission response for {actor}: {exc}") from exc
        if not isinstance(data, dict):
            raise GitHubError(f"Invalid permission response for {actor}: {response.text}")
        permissions = (data.get("user") or {}).get("permissions") or {}
        LOGGER.debug("REST API collaborator permission: %s", permissions)
        for flag, permission in PERMISSION_FLAGS:
            if permissions.get(flag):
                return permission
        return Permission.NONE

    def _try_add_reaction_sync(
        self,
        repo: RepositoryRef,
        issue_number: int,
        comment_id: int,
        reaction: str,
    ) -> None:
        try:
            issue = self._get_repo(repo.full_name).get_issue(issue_number)
            issue.get_comment(comment_id).create_reaction(reaction)
        except (GithubException, requests.RequestException, GitHubError) as exc:
            LOGGER.debug("Reaction failed: %s", exc)
            LOGGER.warning("Failed to set reaction on comment ID %s.", comment_id)

    def _get_pull_sync(self, repo: RepositoryRef, pull_number: int) -> Dict[str, Any]:
        try:
            pull = self._get_repo(repo.full_name).get_pull(pull_number)
        except API_ERRORS as exc:
            raise GitHubError(f"Failed to load pull request #{pull_number}: {exc}") from exc
        data = dict(pull.raw_data)
        data["body"] = truncate_body(data.get("body"))
        return data

    def _create_repository_dispatch_sync(
        self, cmd: CommandConfig, client_payload: Dict[str, Any]
    ) -> None:
        try:
            created = self._get_repo(cmd.repository).create_repository_dispatch(
                cmd.event_type, client_payload
            )
        except API_ERRORS as exc:
            raise GitHubError(f"Repository dispatch to {cmd.repository} failed: {exc}") from exc
        if not created:
            raise GitHubError(f"Repository dispatch to {cmd.repository} was not accepted")
        LOGGER.info(
            "Command '%s' dispatched to '%s' with event type '%s'.",
            cmd.command,
            cmd.repository,
            cmd.event_type,
        )

    def _create_workflow_dispatch_sync(
        self, cmd: CommandConfig, client_payload: Dict[str, Any]
    ) -> None:
        named = (client_payload.get("slash_command") or {}).get("args", {}).get("named", {})
        ref = named.get("ref") or self._get_default_branch(cmd.repository)
        target = cmd.repository_ref
        url = (
            f"{self._api_url}/repos/{target.owner}/{target.name}"
            f"/actions/workflows/{cmd.workflow}/dispatches"
        )
        try:
            response = requests.post(
                url,
                json={"ref": ref, "inputs": workflow_inputs(named)},
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise GitHubError(f"Workflow dispatch of {cmd.workflow} failed: {exc}") from exc

        if response.status_code == 422:
            raise WorkflowDispatchError(_error_message(response))
        if not response.ok:
            raise GitHubError(
                f"Workflow dispatch of {cmd.workflow} failed: "
                f"{response.status_code} {_error_message(response)}"
            )
        LOGGER.info(
            "Command '%s' dispatched to workflow '%s' in '%s'",
            cmd.command,
            cmd.workflow,
            cmd.repository,
        )

    def _get_default_branch(self, repository: str) -> str:
        try:
            return self._get_repo(repository).default_branch
        except API_ERRORS as exc:
            raise GitHubError(f"Failed to load repository {repository}: {exc}") from exc

    def _get_repo(self, full_name: str) -> Repository:
        if not self._client:
            raise GitHubError("GitHub token is not configured.")
        return self._client.get_repo(full_name)

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers


def _error_message(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.text
