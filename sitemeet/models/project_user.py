# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Project membership model."""

from __future__ import annotations

import uuid as uuid_lib
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitemeet.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from sitemeet.models.project import Project
    from sitemeet.models.user import User


class ProjectUser(Base, TimestampMixin):
    """Membership of a user in a project, carrying their project role."""

    __tablename__ = "project_users"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    user_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_role: Mapped[str] = mapped_column(
        String(50), default="PROJECT_VIEWER", nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="_project_user_uc"),
    )

    user: Mapped[User] = relationship("User", back_populates="project_memberships")
    project: Mapped[Project] = relationship("Project", back_populates="members")
