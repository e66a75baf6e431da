# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types for database models and role tables."""

from enum import Enum


class GlobalRole(str, Enum):
    """Application-wide role. A user may hold several at once."""

    BIM_MANAGER = "BIM_MANAGER"
    BIM_PROJECT_MANAGER = "BIM_PROJECT_MANAGER"
    BIM_COORDINATOR = "BIM_COORDINATOR"
    BIM_DESIGNER = "BIM_DESIGNER"
    ENGINEER = "ENGINEER"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    DESIGN_MANAGER = "DESIGN_MANAGER"
    VIEWER = "VIEWER"


class CompanyRole(str, Enum):
    """Role of a user within their (single) company."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    DEPARTMENT_MANAGER = "DEPARTMENT_MANAGER"
    EMPLOYEE = "EMPLOYEE"
    GUEST = "GUEST"


class ProjectRole(str, Enum):
    """Role of a user within one project. At most one per project."""

    PROJECT_LEADER = "PROJECT_LEADER"
    BIM_MANAGER = "BIM_MANAGER"
    BIM_COORDINATOR = "BIM_COORDINATOR"
    DESIGN_LEAD = "DESIGN_LEAD"
    DESIGN_MANAGER = "DESIGN_MANAGER"
    DESIGN_TEAM_MEMBER = "DESIGN_TEAM_MEMBER"
    ENGINEER = "ENGINEER"
    EXTERNAL_CONSULTANT = "EXTERNAL_CONSULTANT"
    PROJECT_VIEWER = "PROJECT_VIEWER"


class EntityType(str, Enum):
    """Kind of schedulable entity that can own points."""

    MEETING = "meeting"
    SERIES = "series"


class ClosureMode(str, Enum):
    """What happens to open points when their meeting or series closes."""

    CLOSE = "close"  # Resolve the points together with their owner
    MOVE = "move"  # Hand the points over to another open meeting or series


class MeetingStatus(str, Enum):
    """Meeting status enumeration."""

    SCHEDULED = "scheduled"
    CLOSED = "closed"


class SeriesStatus(str, Enum):
    """Meeting series status enumeration."""

    ACTIVE = "active"
    CLOSED = "closed"


class OccurrenceStatus(str, Enum):
    """Status of a single occurrence within a series."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PointStatus(str, Enum):
    """Point (action item) status enumeration.

    Every status except CLOSED counts as open for closure purposes.
    """

    NEW = "new"
    OPEN = "open"
    ONGOING = "ongoing"
    CLOSED = "closed"
    POSTPONED = "postponed"
