# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Discussion point (action item) and its status history."""

from __future__ import annotations

import datetime as dt
import uuid as uuid_lib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitemeet.models.base import Base, TimestampMixin
from sitemeet.models.enums import EntityType, PointStatus

if TYPE_CHECKING:
    from sitemeet.models.meeting import Meeting
    from sitemeet.models.meeting_series import MeetingSeries


@dataclass(frozen=True)
class PointOwner:
    """The meeting or series a point belongs to."""

    entity_type: EntityType
    entity_id: uuid_lib.UUID

    @classmethod
    def meeting(cls, meeting_id: uuid_lib.UUID) -> PointOwner:
        return cls(EntityType.MEETING, meeting_id)

    @classmethod
    def series(cls, series_id: uuid_lib.UUID) -> PointOwner:
        return cls(EntityType.SERIES, series_id)


class Point(Base, TimestampMixin):
    """Action item raised in a meeting or a series.

    A point is owned by exactly one of ``meeting_id`` / ``series_id``. Use
    the ``owner`` property to read or change ownership; it always sets one
    key and clears the other.
    """

    __tablename__ = "points"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    meeting_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("meetings.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    series_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("meeting_series.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    status: Mapped[PointStatus] = mapped_column(
        Enum(PointStatus),
        default=PointStatus.NEW,
        nullable=False,
    )
    # Display name kept for older clients
    assigned_to: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    # "user:{id}", "attendee:{id}" or "company:{name}"
    assigned_to_ref: Mapped[str | None] = mapped_column(String(255), nullable=True)
    due_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "(meeting_id IS NULL) <> (series_id IS NULL)",
            name="ck_points_single_owner",
        ),
    )

    # Relationships
    meeting: Mapped[Meeting | None] = relationship("Meeting", back_populates="points")
    series: Mapped[MeetingSeries | None] = relationship(
        "MeetingSeries", back_populates="points"
    )
    status_updates: Mapped[list[StatusUpdate]] = relationship(
        "StatusUpdate",
        back_populates="point",
        cascade="all, delete-orphan",
        order_by="StatusUpdate.created_at",
    )

    @property
    def owner(self) -> PointOwner:
        if self.meeting_id is not None:
            return PointOwner.meeting(self.meeting_id)
        return PointOwner.series(self.series_id)

    @owner.setter
    def owner(self, owner: PointOwner) -> None:
        if owner.entity_type == EntityType.MEETING:
            self.meeting_id, self.series_id = owner.entity_id, None
        else:
            self.meeting_id, self.series_id = None, owner.entity_id

    @property
    def is_open(self) -> bool:
        return self.status != PointStatus.CLOSED


class StatusUpdate(Base, TimestampMixin):
    """History entry recorded against a point."""

    __tablename__ = "status_updates"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    point_id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("points.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    action_on: Mapped[str] = mapped_column(String(200), nullable=False)

    point: Mapped[Point] = relationship("Point", back_populates="status_updates")
