"""Slash Command Dispatch - turn issue comment slash commands into GitHub dispatch events."""

__version__ = "0.1.0"
