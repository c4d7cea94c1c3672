"""Configuration loader for registered slash commands."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .errors import ConfigError, ConfigValidationError
from .models import CommandConfig, DispatchType, IssueType, Permission

LOGGER = logging.getLogger(__name__)

ENV_FILE_NAME = ".env"
YAML_SUFFIXES = (".yml", ".yaml")

# Record key -> name reported to operators when the value is invalid.
ENUM_FIELDS = (
    ("permission", "permission", Permission),
    ("issue_type", "issue-type", IssueType),
    ("dispatch_type", "dispatch-type", DispatchType),
)


@dataclass
class Inputs:
    token: str
    reaction_token: str = ""
    reactions: bool = True
    commands: List[str] = field(default_factory=list)
    permission: str = ""
    issue_type: str = ""
    allow_edits: bool = False
    repository: str = ""
    event_type_suffix: str = ""
    static_args: List[str] = field(default_factory=list)
    dispatch_type: str = ""
    config: str = ""
    config_from_file: str = ""


def command_defaults(repository: Optional[str] = None) -> Dict[str, Any]:
    """Return the record used for any field a command does not set."""
    if repository is None:
        repository = os.getenv("GITHUB_REPOSITORY", "")
    return {
        "permission": Permission.WRITE.value,
        "issue_type": IssueType.BOTH.value,
        "allow_edits": False,
        "repository": repository,
        "event_type_suffix": "-command",
        "static_args": [],
        "dispatch_type": DispatchType.REPOSITORY.value,
    }


def to_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None or value == "":
        return default
    return value == "true"


def split_list(raw: Optional[str]) -> List[str]:
    """Split a newline and/or comma separated input into trimmed items."""
    if not raw:
        return []
    items = raw.replace("\r", "").replace(",", "\n").split("\n")
    return [item.strip() for item in items if item.strip()]


def get_input(name: str) -> str:
    """Read a GitHub Actions input (exposed as INPUT_<NAME>)."""
    env_name = f"INPUT_{name.replace(' ', '_').upper()}"
    return (os.getenv(env_name) or "").strip()


def load_inputs(env_file: Path | str | None = None) -> Inputs:
    """Load action inputs from the environment, reading a .env file if present."""
    _load_env_file(Path(env_file) if env_file else Path.cwd() / ENV_FILE_NAME)

    token = get_input("token")
    if not token:
        raise ConfigError("Missing required input 'token'.")

    return Inputs(
        token=token,
        reaction_token=get_input("reaction-token") or token,
        reactions=to_bool(get_input("reactions"), True),
        commands=split_list(get_input("commands")),
        permission=get_input("permission"),
        issue_type=get_input("issue-type"),
        allow_edits=to_bool(get_input("allow-edits"), False),
        repository=get_input("repository"),
        event_type_suffix=get_input("event-type-suffix"),
        static_args=split_list(get_input("static-args")),
        dispatch_type=get_input("dispatch-type"),
        config=get_input("config"),
        config_from_file=get_input("config-from-file"),
    )


def _load_env_file(path: Path) -> None:
    if not path.exists():
        LOGGER.debug("No .env file found at %s; relying on environment.", path)
        return
    load_dotenv(dotenv_path=path, override=False)


def get_commands_config(inputs: Inputs) -> List[CommandConfig]:
    """Resolve and validate the registered commands from the action inputs."""
    if inputs.config_from_file:
        LOGGER.info("Using JSON configuration from file '%s'.", inputs.config_from_file)
        records = _load_config_file(Path(inputs.config_from_file))
    elif inputs.config:
        LOGGER.info("Using JSON configuration from 'config' input.")
        records = _parse_json(inputs.config)
    else:
        LOGGER.info("Using configuration from yaml inputs.")
        return commands_from_inputs(inputs)
    return _build_commands(records, inputs.repository or None)


def commands_from_inputs(inputs: Inputs) -> List[CommandConfig]:
    """Replicate the flat input template across every command name."""
    LOGGER.debug("Commands: %s", inputs.commands)
    defaults = command_defaults(inputs.repository or None)
    records = [
        {
            "command": name,
            "permission": inputs.permission or defaults["permission"],
            "issue_type": inputs.issue_type or defaults["issue_type"],
            "allow_edits": inputs.allow_edits,
            "repository": inputs.repository or defaults["repository"],
            "event_type_suffix": inputs.event_type_suffix or defaults["event_type_suffix"],
            "static_args": list(inputs.static_args),
            "dispatch_type": inputs.dispatch_type or defaults["dispatch_type"],
        }
        for name in inputs.commands
    ]
    validate_config(records)
    return [_to_command(record) for record in records]


def commands_from_json(text: str, repository: Optional[str] = None) -> List[CommandConfig]:
    """Build commands from a JSON array of partial command records."""
    return _build_commands(_parse_json(text), repository)


def validate_config(records: Iterable[Mapping[str, Any]]) -> None:
    """Reject the whole configuration if any record has an unknown enum value."""
    for record in records:
        for key, field_name, enum_cls in ENUM_FIELDS:
            value = record.get(key)
            try:
                enum_cls(value)
            except ValueError as exc:
                raise ConfigValidationError(field_name, value) from exc


def _build_commands(raw: Any, repository: Optional[str]) -> List[CommandConfig]:
    LOGGER.debug("JSON config: %s", raw)
    if not isinstance(raw, list):
        raise ConfigError("Command configuration must be an array of command objects")

    defaults = command_defaults(repository)
    records = [_merge_defaults(index, entry, defaults) for index, entry in enumerate(raw)]
    validate_config(records)
    return [_to_command(record) for record in records]


def _merge_defaults(index: int, entry: Any, defaults: Mapping[str, Any]) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        raise ConfigError(f"Command configuration entry {index} must be an object")

    command = entry.get("command")
    if not command or not isinstance(command, str):
        raise ConfigError(f"Command configuration entry {index} is missing 'command'")

    static_args = entry.get("static_args") or defaults["static_args"]
    if not isinstance(static_args, list):
        raise ConfigError(f"static_args for command '{command}' must be an array")

    return {
        "command": command,
        "permission": entry.get("permission") or defaults["permission"],
        "issue_type": entry.get("issue_type") or defaults["issue_type"],
        "allow_edits": to_bool(entry.get("allow_edits"), defaults["allow_edits"]),
        "repository": entry.get("repository") or defaults["repository"],
        "event_type_suffix": entry.get("event_type_suffix") or defaults["event_type_suffix"],
        "static_args": [str(arg) for arg in static_args],
        "dispatch_type": entry.get("dispatch_type") or defaults["dispatch_type"],
    }


def _to_command(record: Mapping[str, Any]) -> CommandConfig:
    return CommandConfig(
        command=record["command"],
        permission=Permission(record["permission"]),
        issue_type=IssueType(record["issue_type"]),
        allow_edits=record["allow_edits"],
        repository=record["repository"],
        event_type_suffix=record["event_type_suffix"],
        static_args=tuple(record["static_args"]),
        dispatch_type=DispatchType(record["dispatch_type"]),
    )


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse JSON configuration: {exc}") from exc


def _load_config_file(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found at {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse YAML configuration {path}: {exc}") from exc
    return _parse_json(text)
