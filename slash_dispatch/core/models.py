"""Domain models for Slash Command Dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class Permission(str, Enum):
    NONE = "none"
    READ = "read"
    TRIAGE = "triage"
    WRITE = "write"
    MAINTAIN = "maintain"
    ADMIN = "admin"


class IssueType(str, Enum):
    ISSUE = "issue"
    PULL_REQUEST = "pull-request"
    BOTH = "both"


class DispatchType(str, Enum):
    REPOSITORY = "repository"
    WORKFLOW = "workflow"


@dataclass(frozen=True)
class RepositoryRef:
    owner: str
    name: str

    @classmethod
    def parse(cls, full_name: str) -> "RepositoryRef":
        owner, _, name = full_name.partition("/")
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class CommandConfig:
    """A single registered slash command."""

    command: str
    permission: Permission = Permission.WRITE
    issue_type: IssueType = IssueType.BOTH
    allow_edits: bool = False
    repository: str = ""
    event_type_suffix: str = "-command"
    static_args: Tuple[str, ...] = ()
    dispatch_type: DispatchType = DispatchType.REPOSITORY

    @property
    def event_type(self) -> str:
        return f"{self.command}{self.event_type_suffix}"

    @property
    def workflow(self) -> str:
        return f"{self.event_type}.yml"

    @property
    def repository_ref(self) -> RepositoryRef:
        return RepositoryRef.parse(self.repository)


@dataclass
class UnnamedArgs:
    all: str = ""
    values: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, str]:
        rendered = {"all": self.all}
        for index, value in enumerate(self.values, start=1):
            rendered[f"arg{index}"] = value
        return rendered


@dataclass
class CommandArgs:
    all: str = ""
    unnamed: UnnamedArgs = field(default_factory=UnnamedArgs)
    named: Dict[str, str] = field(default_factory=dict)


@dataclass
class SlashCommandPayload:
    """Arguments of one slash command invocation, as sent to dispatch targets."""

    command: str
    args: CommandArgs = field(default_factory=CommandArgs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "args": {
                "all": self.args.all,
                "unnamed": self.args.unnamed.to_dict(),
                "named": dict(self.args.named),
            },
        }
