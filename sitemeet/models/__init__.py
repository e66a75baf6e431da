# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from sitemeet.models.base import Base, TimestampMixin
from sitemeet.models.company import Company
from sitemeet.models.enums import (
    ClosureMode,
    CompanyRole,
    EntityType,
    GlobalRole,
    MeetingStatus,
    OccurrenceStatus,
    PointStatus,
    ProjectRole,
    SeriesStatus,
)
from sitemeet.models.meeting import Meeting
from sitemeet.models.meeting_series import MeetingOccurrence, MeetingSeries
from sitemeet.models.point import Point, PointOwner, StatusUpdate
from sitemeet.models.project import Project
from sitemeet.models.project_user import ProjectUser
from sitemeet.models.role_permission_override import RolePermissionOverride
from sitemeet.models.user import User
from sitemeet.models.user_role import UserRole

__all__ = [
    "Base",
    "ClosureMode",
    "Company",
    "CompanyRole",
    "EntityType",
    "GlobalRole",
    "Meeting",
    "MeetingOccurrence",
    "MeetingSeries",
    "MeetingStatus",
    "OccurrenceStatus",
    "Point",
    "PointOwner",
    "PointStatus",
    "Project",
    "ProjectRole",
    "ProjectUser",
    "RolePermissionOverride",
    "SeriesStatus",
    "StatusUpdate",
    "TimestampMixin",
    "User",
    "UserRole",
]
