# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Recurring meeting series and their occurrences."""

from __future__ import annotations

import uuid as uuid_lib
import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitemeet.models.base import Base, TimestampMixin
from sitemeet.models.enums import EntityType, OccurrenceStatus, SeriesStatus

if TYPE_CHECKING:
    from sitemeet.models.point import Point
    from sitemeet.models.project import Project


class MeetingSeries(Base, TimestampMixin):
    """A recurring meeting. Points may belong to the series as a whole."""

    __tablename__ = "meeting_series"

    entity_type = EntityType.SERIES

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
    # weekly | biweekly | monthly
    recurrence_rule: Mapped[str] = mapped_column(String(50), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    location: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    agenda: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[SeriesStatus] = mapped_column(
        Enum(SeriesStatus),
        default=SeriesStatus.ACTIVE,
        nullable=False,
    )
    closed_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)

    # Relationships
    project: Mapped[Project | None] = relationship("Project", back_populates="series")
    occurrences: Mapped[list[MeetingOccurrence]] = relationship(
        "MeetingOccurrence",
        back_populates="series",
        cascade="all, delete-orphan",
        order_by="MeetingOccurrence.date",
    )
    points: Mapped[list[Point]] = relationship("Point", back_populates="series")

    @property
    def is_closed(self) -> bool:
        return self.status == SeriesStatus.CLOSED

    def mark_closed(self, when: dt.datetime) -> None:
        """Flip to closed. Occurrences are left as they are."""
        self.status = SeriesStatus.CLOSED
        self.closed_at = when


class MeetingOccurrence(Base, TimestampMixin):
    """One dated instance of a series."""

    __tablename__ = "meeting_occurrences"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    series_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("meeting_series.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    status: Mapped[OccurrenceStatus] = mapped_column(
        Enum(OccurrenceStatus),
        default=OccurrenceStatus.SCHEDULED,
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    series: Mapped[MeetingSeries] = relationship(
        "MeetingSeries", back_populates="occurrences"
    )
