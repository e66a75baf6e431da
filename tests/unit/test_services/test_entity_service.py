# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for entity_service."""

import datetime as dt
import uuid

from sitemeet.models import PointOwner
from sitemeet.models.enums import EntityType, PointStatus
from sitemeet.services import entity_service


def test_get_entity(db_session, make_meeting, make_series, project):
    meeting = make_meeting(project)
    series = make_series(project)

    assert entity_service.get_entity(db_session, EntityType.MEETING, meeting.id) == meeting
    assert entity_service.get_entity(db_session, "series", series.id) == series
    assert entity_service.get_entity(db_session, EntityType.MEETING, series.id) is None
    assert (
        entity_service.get_entity(db_session, EntityType.SERIES, uuid.uuid4(), lock=True)
        is None
    )


def test_get_open_points_excludes_closed(db_session, make_meeting, make_point, project):
    meeting = make_meeting(project)
    other = make_meeting(project, title="Other")
    owner = PointOwner.meeting(meeting.id)
    open_point = make_point(owner, PointStatus.OPEN)
    new_point = make_point(owner, PointStatus.NEW)
    postponed = make_point(owner, PointStatus.POSTPONED)
    make_point(owner, PointStatus.CLOSED)
    make_point(PointOwner.meeting(other.id), PointStatus.OPEN)

    points = entity_service.get_open_points(db_session, EntityType.MEETING, meeting.id)

    assert {p.id for p in points} == {open_point.id, new_point.id, postponed.id}


def test_get_open_points_for_series(db_session, make_series, make_point, project):
    series = make_series(project)
    point = make_point(PointOwner.series(series.id), PointStatus.ONGOING)

    points = entity_service.get_open_points(
        db_session, EntityType.SERIES, series.id, lock=True
    )

    assert [p.id for p in points] == [point.id]


def test_list_open_entities_in_project(
    db_session, make_meeting, make_series, project, other_project
):
    late = make_meeting(project, title="Late", date=dt.date(2026, 5, 1))
    early = make_meeting(project, title="Early", date=dt.date(2026, 4, 1))
    closed = make_meeting(project, title="Closed")
    closed.mark_closed(dt.datetime(2026, 3, 1))
    make_meeting(other_project, title="Elsewhere")
    make_meeting(None, title="No project")
    series = make_series(project)
    db_session.commit()

    result = entity_service.list_open_entities_in_project(
        db_session, project.id, exclude_id=late.id
    )

    assert [m.id for m in result.meetings] == [early.id]
    assert [s.id for s in result.series] == [series.id]
    assert not result.is_empty()


def test_list_open_entities_without_project(db_session, make_meeting, project):
    make_meeting(project)
    loose = make_meeting(None, title="No project")

    result = entity_service.list_open_entities_in_project(db_session, None)

    assert [m.id for m in result.meetings] == [loose.id]
    assert result.series == []
