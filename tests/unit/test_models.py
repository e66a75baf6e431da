# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for model invariants."""

import datetime as dt
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from sitemeet.models import Point, PointOwner
from sitemeet.models.enums import EntityType, MeetingStatus, PointStatus


def test_point_owner_setter_keeps_single_owner():
    meeting_id, series_id = uuid.uuid4(), uuid.uuid4()
    point = Point(title="Fire stopping detail")

    point.owner = PointOwner.meeting(meeting_id)
    assert (point.meeting_id, point.series_id) == (meeting_id, None)

    point.owner = PointOwner.series(series_id)
    assert (point.meeting_id, point.series_id) == (None, series_id)
    assert point.owner == PointOwner(EntityType.SERIES, series_id)


def test_point_without_owner_is_rejected(db_session):
    db_session.add(Point(title="Orphan", status=PointStatus.OPEN))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_point_with_two_owners_is_rejected(db_session, make_meeting, make_series):
    meeting = make_meeting()
    series = make_series()
    db_session.add(
        Point(title="Twice", meeting_id=meeting.id, series_id=series.id)
    )
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_point_is_open(make_meeting, make_point):
    meeting = make_meeting()
    owner = PointOwner.meeting(meeting.id)
    assert make_point(owner, PointStatus.POSTPONED).is_open
    assert not make_point(owner, PointStatus.CLOSED).is_open


def test_mark_closed_sets_status_and_timestamp(make_meeting):
    meeting = make_meeting()
    assert not meeting.is_closed

    when = dt.datetime(2026, 3, 2, 11, 0)
    meeting.mark_closed(when)

    assert meeting.status == MeetingStatus.CLOSED
    assert meeting.closed_at == when
    assert meeting.is_closed
