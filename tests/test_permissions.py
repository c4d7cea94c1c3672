"""Tests for the permission hierarchy."""

import pytest

from slash_dispatch.core.models import Permission
from slash_dispatch.core.permissions import has_permission, permission_level


class TestHasPermission:
    def test_actor_does_not_have_permission(self):
        assert not has_permission("none", "read")
        assert not has_permission("read", "triage")
        assert not has_permission("triage", "write")
        assert not has_permission("write", "maintain")
        assert not has_permission("maintain", "admin")

    def test_actor_has_permission(self):
        assert has_permission("read", "none")
        assert has_permission("triage", "read")
        assert has_permission("write", "triage")
        assert has_permission("admin", "write")
        assert has_permission("write", "write")

    @pytest.mark.parametrize("permission", list(Permission))
    def test_reflexive(self, permission):
        assert has_permission(permission, permission)

    @pytest.mark.parametrize("permission", list(Permission))
    def test_admin_has_every_permission(self, permission):
        assert has_permission(Permission.ADMIN, permission)

    @pytest.mark.parametrize("permission", [p for p in Permission if p != Permission.NONE])
    def test_none_has_no_permission_above_none(self, permission):
        assert not has_permission(Permission.NONE, permission)

    def test_levels_strictly_increase(self):
        levels = [permission_level(p) for p in Permission]
        assert levels == [1, 2, 3, 4, 5, 6]

    def test_unknown_permission_is_an_error(self):
        with pytest.raises(ValueError):
            has_permission("super-admin", "read")
