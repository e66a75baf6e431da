# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Role tables and the pure permission decision functions."""

from sitemeet.rbac.actor import Actor, Permissions
from sitemeet.rbac.engine import (
    DEFAULT_MATRIX,
    PermissionMatrix,
    build_permission_matrix,
    can_access_project,
    check_permission,
    has_permission,
    has_project_permission,
    resolve_global_permissions,
)
from sitemeet.rbac.permissions import PermissionAction

__all__ = [
    "DEFAULT_MATRIX",
    "Actor",
    "PermissionAction",
    "PermissionMatrix",
    "Permissions",
    "build_permission_matrix",
    "can_access_project",
    "check_permission",
    "has_permission",
    "has_project_permission",
    "resolve_global_permissions",
]
