# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Construction project model."""

from __future__ import annotations

import uuid as uuid_lib
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitemeet.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from sitemeet.models.company import Company
    from sitemeet.models.meeting import Meeting
    from sitemeet.models.meeting_series import MeetingSeries
    from sitemeet.models.project_user import ProjectUser


class Project(Base, TimestampMixin):
    """Construction project grouping meetings, series and members."""

    __tablename__ = "projects"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(200), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # planning | active | on_hold | completed
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)
    owner_company_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    owner_company: Mapped[Company | None] = relationship(
        "Company", back_populates="owned_projects"
    )
    members: Mapped[list[ProjectUser]] = relationship(
        "ProjectUser",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    meetings: Mapped[list[Meeting]] = relationship(
        "Meeting",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    series: Mapped[list[MeetingSeries]] = relationship(
        "MeetingSeries",
        back_populates="project",
        cascade="all, delete-orphan",
    )
