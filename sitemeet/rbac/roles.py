# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Role tables for the three role tiers.

Kept as plain data so the matrices can be audited and tested directly.
"""

from sitemeet.models.enums import CompanyRole, GlobalRole, ProjectRole
from sitemeet.rbac.permissions import PermissionAction as A

_BIM_LEADS = frozenset({GlobalRole.BIM_MANAGER, GlobalRole.BIM_PROJECT_MANAGER})
_BIM_EDITORS = _BIM_LEADS | {GlobalRole.BIM_COORDINATOR}
_CONTRIBUTORS = _BIM_EDITORS | {
    GlobalRole.BIM_DESIGNER,
    GlobalRole.ENGINEER,
    GlobalRole.PROJECT_MANAGER,
    GlobalRole.DESIGN_MANAGER,
}

# Global role grants per action. VIEWER appears nowhere on purpose.
DEFAULT_PERMISSION_MATRIX: dict[A, frozenset[GlobalRole]] = {
    A.MEETINGS_CREATE: _BIM_LEADS,
    A.MEETINGS_EDIT: _BIM_LEADS,
    A.MEETINGS_CLOSE: _BIM_LEADS,
    A.MEETINGS_SEND_MINUTES: _BIM_LEADS,
    A.POINTS_CREATE: _BIM_EDITORS,
    A.POINTS_EDIT_ANY: _BIM_EDITORS,
    A.POINTS_EDIT_ASSIGNED: frozenset({GlobalRole.BIM_DESIGNER, GlobalRole.ENGINEER}),
    A.POINTS_ASSIGN: _BIM_LEADS,
    A.ATTACHMENTS_UPLOAD: _CONTRIBUTORS,
    A.COMMENTS_CREATE: _CONTRIBUTORS,
    A.ATTENDANCE_EDIT: _BIM_EDITORS,
    A.PROJECTS_VIEW_ALL: frozenset({GlobalRole.BIM_MANAGER}),
    A.PROJECTS_CREATE: frozenset({GlobalRole.BIM_MANAGER}),
    A.PROJECTS_EDIT: _BIM_LEADS,
    A.USERS_MANAGE: frozenset({GlobalRole.BIM_MANAGER}),
    A.KPIS_VIEW_GLOBAL: frozenset({GlobalRole.BIM_MANAGER}),
    A.KPIS_VIEW_PROJECT: _BIM_LEADS,
    A.KPIS_VIEW_COMPANY: frozenset({GlobalRole.PROJECT_MANAGER}),
}

_PROJECT_LEAD_ACTIONS = frozenset(
    {
        A.MEETINGS_CREATE,
        A.MEETINGS_EDIT,
        A.MEETINGS_CLOSE,
        A.MEETINGS_SEND_MINUTES,
        A.POINTS_CREATE,
        A.POINTS_EDIT_ANY,
        A.POINTS_ASSIGN,
        A.ATTACHMENTS_UPLOAD,
        A.COMMENTS_CREATE,
        A.ATTENDANCE_EDIT,
        A.PROJECTS_EDIT,
        A.KPIS_VIEW_PROJECT,
    }
)

# Actions a project role grants inside its own project only
PROJECT_ROLE_PERMISSIONS: dict[ProjectRole, frozenset[A]] = {
    ProjectRole.PROJECT_LEADER: _PROJECT_LEAD_ACTIONS,
    ProjectRole.BIM_MANAGER: _PROJECT_LEAD_ACTIONS,
    ProjectRole.BIM_COORDINATOR: frozenset(
        {
            A.MEETINGS_CREATE,
            A.MEETINGS_EDIT,
            A.POINTS_CREATE,
            A.POINTS_EDIT_ANY,
            A.ATTACHMENTS_UPLOAD,
            A.COMMENTS_CREATE,
            A.ATTENDANCE_EDIT,
        }
    ),
    ProjectRole.DESIGN_LEAD: frozenset(
        {A.POINTS_CREATE, A.POINTS_EDIT_ANY, A.ATTACHMENTS_UPLOAD, A.COMMENTS_CREATE}
    ),
    ProjectRole.DESIGN_MANAGER: frozenset(
        {
            A.POINTS_CREATE,
            A.POINTS_EDIT_ANY,
            A.ATTACHMENTS_UPLOAD,
            A.COMMENTS_CREATE,
            A.KPIS_VIEW_PROJECT,
        }
    ),
    ProjectRole.DESIGN_TEAM_MEMBER: frozenset(
        {A.POINTS_EDIT_ASSIGNED, A.ATTACHMENTS_UPLOAD, A.COMMENTS_CREATE}
    ),
    ProjectRole.ENGINEER: frozenset(
        {A.POINTS_EDIT_ASSIGNED, A.ATTACHMENTS_UPLOAD, A.COMMENTS_CREATE}
    ),
    ProjectRole.EXTERNAL_CONSULTANT: frozenset({A.COMMENTS_CREATE}),
    ProjectRole.PROJECT_VIEWER: frozenset(),
}

# Company roles allowed to manage their own company's resources
COMPANY_MANAGER_ROLES: frozenset[CompanyRole] = frozenset(
    {CompanyRole.OWNER, CompanyRole.ADMIN}
)

ROLE_DISPLAY_NAMES: dict[GlobalRole, str] = {
    GlobalRole.BIM_MANAGER: "BIM Manager",
    GlobalRole.BIM_PROJECT_MANAGER: "BIM Project Manager",
    GlobalRole.BIM_COORDINATOR: "BIM Coordinator",
    GlobalRole.BIM_DESIGNER: "BIM Designer",
    GlobalRole.ENGINEER: "Engineer",
    GlobalRole.PROJECT_MANAGER: "Project Manager",
    GlobalRole.DESIGN_MANAGER: "Design Manager",
    GlobalRole.VIEWER: "Viewer",
}

ROLE_DESCRIPTIONS: dict[GlobalRole, str] = {
    GlobalRole.BIM_MANAGER: "Full access across all projects, global KPIs, user management",
    GlobalRole.BIM_PROJECT_MANAGER: "Full access within assigned projects, project-level KPIs",
    GlobalRole.BIM_COORDINATOR: "Add/edit points, attachments, statuses, attendance in assigned projects",
    GlobalRole.BIM_DESIGNER: "Edit assigned points, upload attachments, add comments",
    GlobalRole.ENGINEER: "Edit assigned points, upload attachments, add comments",
    GlobalRole.PROJECT_MANAGER: "Company-filtered view of points and KPIs in assigned projects",
    GlobalRole.DESIGN_MANAGER: "Review role: view all, comment and upload attachments only",
    GlobalRole.VIEWER: "Read-only access to assigned projects",
}

PROJECT_ROLE_DISPLAY_NAMES: dict[ProjectRole, str] = {
    ProjectRole.PROJECT_LEADER: "Project Leader",
    ProjectRole.BIM_MANAGER: "BIM Manager",
    ProjectRole.BIM_COORDINATOR: "BIM Coordinator",
    ProjectRole.DESIGN_LEAD: "Design Lead",
    ProjectRole.DESIGN_MANAGER: "Design Manager",
    ProjectRole.DESIGN_TEAM_MEMBER: "Design Team Member",
    ProjectRole.ENGINEER: "Engineer",
    ProjectRole.EXTERNAL_CONSULTANT: "External Consultant",
    ProjectRole.PROJECT_VIEWER: "Project Viewer",
}
