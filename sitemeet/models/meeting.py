# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""One-off meeting model."""

from __future__ import annotations

import uuid as uuid_lib
import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitemeet.models.base import Base, TimestampMixin
from sitemeet.models.enums import EntityType, MeetingStatus

if TYPE_CHECKING:
    from sitemeet.models.point import Point
    from sitemeet.models.project import Project


class Meeting(Base, TimestampMixin):
    """A single scheduled meeting."""

    __tablename__ = "meetings"

    entity_type = EntityType.MEETING

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    project_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    location: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    agenda: Mapped[str | None] = mapped_column(Text, nullable=True)
    meeting_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[MeetingStatus] = mapped_column(
        Enum(MeetingStatus),
        default=MeetingStatus.SCHEDULED,
        nullable=False,
    )
    closed_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)

    # Relationships
    project: Mapped[Project | None] = relationship(
        "Project", back_populates="meetings"
    )
    points: Mapped[list[Point]] = relationship("Point", back_populates="meeting")

    @property
    def is_closed(self) -> bool:
        return self.status == MeetingStatus.CLOSED

    def mark_closed(self, when: dt.datetime) -> None:
        """Flip to closed; the timestamp is always set together with the status."""
        self.status = MeetingStatus.CLOSED
        self.closed_at = when
