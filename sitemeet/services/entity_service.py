# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Entity store: lookups for meetings, series and their points."""

import uuid
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from sitemeet.models import Meeting, MeetingSeries, Point
from sitemeet.models.enums import EntityType, MeetingStatus, PointStatus, SeriesStatus

ClosableEntity = Meeting | MeetingSeries

ENTITY_MODELS: dict[EntityType, type[Meeting] | type[MeetingSeries]] = {
    EntityType.MEETING: Meeting,
    EntityType.SERIES: MeetingSeries,
}


@dataclass
class OpenEntities:
    """Open meetings and series of one project, grouped for presentation."""

    meetings: list[Meeting] = field(default_factory=list)
    series: list[MeetingSeries] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.meetings and not self.series


def get_entity(
    db: Session,
    entity_type: EntityType,
    entity_id: uuid.UUID,
    lock: bool = False,
) -> ClosableEntity | None:
    """Get a meeting or series by id.

    With ``lock`` the row is selected FOR UPDATE until the transaction ends
    and re-read from the database even if the session already holds it.
    """
    model = ENTITY_MODELS[EntityType(entity_type)]
    query = db.query(model).filter(model.id == entity_id)
    if lock:
        query = query.with_for_update().populate_existing()
    return query.first()


def get_open_points(
    db: Session,
    entity_type: EntityType,
    entity_id: uuid.UUID,
    lock: bool = False,
) -> list[Point]:
    """Points owned by the entity whose status is anything but closed."""
    owner_column = (
        Point.meeting_id
        if EntityType(entity_type) == EntityType.MEETING
        else Point.series_id
    )
    query = db.query(Point).filter(
        owner_column == entity_id,
        Point.status != PointStatus.CLOSED,
    )
    if lock:
        query = query.with_for_update().populate_existing()
    return query.order_by(Point.created_at.desc()).all()


def list_open_entities_in_project(
    db: Session,
    project_id: uuid.UUID | None,
    exclude_id: uuid.UUID | None = None,
) -> OpenEntities:
    """List meetings and series of a project that are not closed.

    A ``project_id`` of None lists open entities that have no project.
    """
    meetings = db.query(Meeting).filter(Meeting.status != MeetingStatus.CLOSED)
    series = db.query(MeetingSeries).filter(
        MeetingSeries.status != SeriesStatus.CLOSED
    )

    if project_id is None:
        meetings = meetings.filter(Meeting.project_id.is_(None))
        series = series.filter(MeetingSeries.project_id.is_(None))
    else:
        meetings = meetings.filter(Meeting.project_id == project_id)
        series = series.filter(MeetingSeries.project_id == project_id)

    if exclude_id is not None:
        meetings = meetings.filter(Meeting.id != exclude_id)
        series = series.filter(MeetingSeries.id != exclude_id)

    return OpenEntities(
        meetings=meetings.order_by(Meeting.date.asc()).all(),
        series=series.order_by(MeetingSeries.created_at.desc()).all(),
    )
