# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Actor and permission snapshot value types."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType

from sitemeet.models.enums import CompanyRole, GlobalRole, ProjectRole
from sitemeet.rbac.permissions import PermissionAction


@dataclass(frozen=True)
class Actor:
    """The authenticated caller, with every role source already resolved.

    Built once per request by ``rbac_service.load_actor`` and never mutated
    while permission checks run.
    """

    id: uuid.UUID
    email: str
    name: str = ""
    global_roles: frozenset[GlobalRole] = frozenset()
    company_id: uuid.UUID | None = None
    company_role: CompanyRole | None = None
    project_roles: Mapping[uuid.UUID, ProjectRole] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "global_roles", frozenset(self.global_roles))
        object.__setattr__(
            self, "project_roles", MappingProxyType(dict(self.project_roles))
        )

    @property
    def is_bim_manager(self) -> bool:
        return GlobalRole.BIM_MANAGER in self.global_roles

    @property
    def project_ids(self) -> frozenset[uuid.UUID]:
        return frozenset(self.project_roles)

    def project_role(self, project_id: uuid.UUID | None) -> ProjectRole | None:
        if project_id is None:
            return None
        return self.project_roles.get(project_id)


# Snapshot flag -> catalog action it reflects
PERMISSION_FLAGS: dict[str, PermissionAction] = {
    "can_create_meetings": PermissionAction.MEETINGS_CREATE,
    "can_edit_meetings": PermissionAction.MEETINGS_EDIT,
    "can_close_meetings": PermissionAction.MEETINGS_CLOSE,
    "can_send_minutes": PermissionAction.MEETINGS_SEND_MINUTES,
    "can_create_points": PermissionAction.POINTS_CREATE,
    "can_edit_any_point": PermissionAction.POINTS_EDIT_ANY,
    "can_edit_assigned_points": PermissionAction.POINTS_EDIT_ASSIGNED,
    "can_assign_points": PermissionAction.POINTS_ASSIGN,
    "can_upload_attachments": PermissionAction.ATTACHMENTS_UPLOAD,
    "can_comment": PermissionAction.COMMENTS_CREATE,
    "can_edit_attendance": PermissionAction.ATTENDANCE_EDIT,
    "can_view_all_projects": PermissionAction.PROJECTS_VIEW_ALL,
    "can_create_projects": PermissionAction.PROJECTS_CREATE,
    "can_edit_projects": PermissionAction.PROJECTS_EDIT,
    "can_manage_users": PermissionAction.USERS_MANAGE,
    "can_view_global_kpis": PermissionAction.KPIS_VIEW_GLOBAL,
    "can_view_project_kpis": PermissionAction.KPIS_VIEW_PROJECT,
    "can_view_company_kpis": PermissionAction.KPIS_VIEW_COMPANY,
}


@dataclass(frozen=True)
class Permissions:
    """Global-scope capability snapshot used for UI gating.

    Advisory only: mutations re-check through ``engine.check_permission``.
    Project-specific grants are not reflected here.
    """

    can_create_meetings: bool = False
    can_edit_meetings: bool = False
    can_close_meetings: bool = False
    can_send_minutes: bool = False
    can_create_points: bool = False
    can_edit_any_point: bool = False
    can_edit_assigned_points: bool = False
    can_assign_points: bool = False
    can_upload_attachments: bool = False
    can_comment: bool = False
    can_edit_attendance: bool = False
    can_view_all_projects: bool = False
    can_create_projects: bool = False
    can_edit_projects: bool = False
    can_manage_users: bool = False
    can_view_global_kpis: bool = False
    can_view_project_kpis: bool = False
    can_view_company_kpis: bool = False
    is_bim_manager: bool = False

    @classmethod
    def from_grants(
        cls, granted: frozenset[PermissionAction], is_bim_manager: bool
    ) -> Permissions:
        flags = {name: action in granted for name, action in PERMISSION_FLAGS.items()}
        return cls(**flags, is_bim_manager=is_bim_manager)

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)

    def true_flags(self) -> set[str]:
        return {f.name for f in fields(self) if getattr(self, f.name)}
