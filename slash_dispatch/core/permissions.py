"""Repository permission hierarchy."""

from __future__ import annotations

import logging
from typing import Dict, Union

from .models import Permission

LOGGER = logging.getLogger(__name__)

PERMISSION_LEVELS: Dict[Permission, int] = {
    Permission.NONE: 1,
    Permission.READ: 2,
    Permission.TRIAGE: 3,
    Permission.WRITE: 4,
    Permission.MAINTAIN: 5,
    Permission.ADMIN: 6,
}


def permission_level(permission: Union[Permission, str]) -> int:
    """Return the numeric level; raises ValueError for unknown permissions."""
    return PERMISSION_LEVELS[Permission(permission)]


def has_permission(
    actor_permission: Union[Permission, str],
    required_permission: Union[Permission, str],
) -> bool:
    actor_level = permission_level(actor_permission)
    required_level = permission_level(required_permission)
    LOGGER.debug("Actor permission level: %s", actor_level)
    LOGGER.debug("Command permission level: %s", required_level)
    return actor_level >= required_level
