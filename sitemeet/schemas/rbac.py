# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Permission schemas."""

import uuid

from pydantic import BaseModel, ConfigDict

from sitemeet.models.enums import GlobalRole
from sitemeet.rbac.permissions import PermissionAction


class PermissionsSchema(BaseModel):
    """Flat capability snapshot for UI gating (advisory)."""

    model_config = ConfigDict(from_attributes=True)

    can_create_meetings: bool
    can_edit_meetings: bool
    can_close_meetings: bool
    can_send_minutes: bool
    can_create_points: bool
    can_edit_any_point: bool
    can_edit_assigned_points: bool
    can_assign_points: bool
    can_upload_attachments: bool
    can_comment: bool
    can_edit_attendance: bool
    can_view_all_projects: bool
    can_create_projects: bool
    can_edit_projects: bool
    can_manage_users: bool
    can_view_global_kpis: bool
    can_view_project_kpis: bool
    can_view_company_kpis: bool
    is_bim_manager: bool


class PermissionCheckResponse(BaseModel):
    """Result of a single permission check."""

    action: PermissionAction
    project_id: uuid.UUID | None = None
    allowed: bool


class RoleInfoSchema(BaseModel):
    """Display information for one role."""

    role: str
    display_name: str
    description: str | None = None


class PermissionCategorySchema(BaseModel):
    """Group of actions shown together in the matrix editor."""

    name: str
    actions: list[PermissionAction]
    labels: dict[str, str]


class PermissionMatrixSchema(BaseModel):
    """Effective global matrix and the fixed project-role table."""

    global_roles: dict[str, list[str]]
    project_roles: dict[str, list[str]]
    project_role_names: dict[str, str]
    roles: list[RoleInfoSchema]
    categories: list[PermissionCategorySchema]


class PermissionOverrideSchema(BaseModel):
    """Grant or revoke one action for one global role."""

    model_config = ConfigDict(from_attributes=True)

    role: GlobalRole
    action: PermissionAction
    is_enabled: bool
