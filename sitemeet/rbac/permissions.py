# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Catalog of permission actions.

The catalog is closed: stored role tables may only reference actions
listed here, and it is versioned together with ``roles.py``.
"""

from enum import Enum


class PermissionAction(str, Enum):
    """Fine-grained action identifiers."""

    # Meetings
    MEETINGS_CREATE = "meetings:create"
    MEETINGS_EDIT = "meetings:edit"
    MEETINGS_CLOSE = "meetings:close"
    MEETINGS_SEND_MINUTES = "meetings:send_minutes"

    # Points
    POINTS_CREATE = "points:create"
    POINTS_EDIT_ANY = "points:edit:any"
    POINTS_EDIT_ASSIGNED = "points:edit:assigned"
    POINTS_ASSIGN = "points:assign"

    # Content
    ATTACHMENTS_UPLOAD = "attachments:upload"
    COMMENTS_CREATE = "comments:create"

    # Attendance
    ATTENDANCE_EDIT = "attendance:edit"

    # Projects
    PROJECTS_VIEW_ALL = "projects:view_all"
    PROJECTS_CREATE = "projects:create"
    PROJECTS_EDIT = "projects:edit"

    # Users
    USERS_MANAGE = "users:manage"

    # KPIs
    KPIS_VIEW_GLOBAL = "kpis:view_global"
    KPIS_VIEW_PROJECT = "kpis:view_project"
    KPIS_VIEW_COMPANY = "kpis:view_company"


ALL_PERMISSION_ACTIONS: list[PermissionAction] = list(PermissionAction)

PERMISSION_ACTION_LABELS: dict[PermissionAction, str] = {
    PermissionAction.MEETINGS_CREATE: "Create Meetings",
    PermissionAction.MEETINGS_EDIT: "Edit Meetings",
    PermissionAction.MEETINGS_CLOSE: "Close Meetings",
    PermissionAction.MEETINGS_SEND_MINUTES: "Send Minutes",
    PermissionAction.POINTS_CREATE: "Create Points",
    PermissionAction.POINTS_EDIT_ANY: "Edit Any Point",
    PermissionAction.POINTS_EDIT_ASSIGNED: "Edit Assigned Points",
    PermissionAction.POINTS_ASSIGN: "Assign Points",
    PermissionAction.ATTACHMENTS_UPLOAD: "Upload Attachments",
    PermissionAction.COMMENTS_CREATE: "Create Comments",
    PermissionAction.ATTENDANCE_EDIT: "Edit Attendance",
    PermissionAction.PROJECTS_VIEW_ALL: "View All Projects",
    PermissionAction.PROJECTS_CREATE: "Create Projects",
    PermissionAction.PROJECTS_EDIT: "Edit Projects",
    PermissionAction.USERS_MANAGE: "Manage Users",
    PermissionAction.KPIS_VIEW_GLOBAL: "View Global KPIs",
    PermissionAction.KPIS_VIEW_PROJECT: "View Project KPIs",
    PermissionAction.KPIS_VIEW_COMPANY: "View Company KPIs",
}

# Grouping used by the permission matrix editor
PERMISSION_CATEGORIES: list[dict] = [
    {
        "name": "Meetings",
        "actions": [
            PermissionAction.MEETINGS_CREATE,
            PermissionAction.MEETINGS_EDIT,
            PermissionAction.MEETINGS_CLOSE,
            PermissionAction.MEETINGS_SEND_MINUTES,
        ],
    },
    {
        "name": "Points",
        "actions": [
            PermissionAction.POINTS_CREATE,
            PermissionAction.POINTS_EDIT_ANY,
            PermissionAction.POINTS_EDIT_ASSIGNED,
            PermissionAction.POINTS_ASSIGN,
        ],
    },
    {
        "name": "Content",
        "actions": [
            PermissionAction.ATTACHMENTS_UPLOAD,
            PermissionAction.COMMENTS_CREATE,
        ],
    },
    {"name": "Attendance", "actions": [PermissionAction.ATTENDANCE_EDIT]},
    {
        "name": "Projects",
        "actions": [
            PermissionAction.PROJECTS_VIEW_ALL,
            PermissionAction.PROJECTS_CREATE,
            PermissionAction.PROJECTS_EDIT,
        ],
    },
    {"name": "Administration", "actions": [PermissionAction.USERS_MANAGE]},
    {
        "name": "KPIs & Analytics",
        "actions": [
            PermissionAction.KPIS_VIEW_GLOBAL,
            PermissionAction.KPIS_VIEW_PROJECT,
            PermissionAction.KPIS_VIEW_COMPANY,
        ],
    },
]
