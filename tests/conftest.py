# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import datetime as dt
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from sitemeet.database import get_db
from sitemeet.events import event_bus
from sitemeet.main import app
from sitemeet.models import (
    Meeting,
    MeetingOccurrence,
    MeetingSeries,
    Point,
    Project,
    ProjectUser,
    User,
    UserRole,
)
from sitemeet.models.base import Base
from sitemeet.models.enums import PointStatus

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def other_session(db_session):
    """A second session on the same database, e.g. another request."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def clean_event_bus():
    """Drop subscriptions made by a test."""
    yield
    event_bus.clear()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def project(db_session) -> Project:
    project = Project(name="Riverside Tower", code="RT-01")
    db_session.add(project)
    db_session.commit()
    return project


@pytest.fixture
def other_project(db_session) -> Project:
    project = Project(name="Harbour Bridge", code="HB-02")
    db_session.add(project)
    db_session.commit()
    return project


@pytest.fixture
def make_user(db_session):
    """Factory for users with global roles and project memberships."""
    counter = iter(range(1, 1000))

    def _make_user(
        global_roles=(),
        project_roles=None,
        company_id=None,
        company_role="EMPLOYEE",
        email=None,
        is_active=True,
    ) -> User:
        n = next(counter)
        user = User(
            name=f"User {n}",
            email=email or f"user{n}@example.com",
            is_active=is_active,
            company_id=company_id,
            company_role=company_role,
        )
        db_session.add(user)
        db_session.flush()
        for role in global_roles:
            db_session.add(
                UserRole(user_id=user.id, role=str(getattr(role, "value", role)))
            )
        for project_id, role in (project_roles or {}).items():
            db_session.add(
                ProjectUser(
                    user_id=user.id,
                    project_id=project_id,
                    project_role=str(getattr(role, "value", role)),
                )
            )
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_meeting(db_session):
    def _make_meeting(project=None, title="Site coordination", date=None) -> Meeting:
        meeting = Meeting(
            project_id=project.id if project else None,
            title=title,
            date=date or dt.date(2026, 3, 2),
            start_time="09:00",
            end_time="10:00",
        )
        db_session.add(meeting)
        db_session.commit()
        return meeting

    return _make_meeting


@pytest.fixture
def make_series(db_session):
    def _make_series(project=None, title="Weekly design review", occurrences=0):
        series = MeetingSeries(
            project_id=project.id if project else None,
            title=title,
            recurrence_rule="weekly",
            start_time="14:00",
            end_time="15:00",
        )
        db_session.add(series)
        db_session.flush()
        for week in range(occurrences):
            db_session.add(
                MeetingOccurrence(
                    series_id=series.id,
                    date=dt.date(2026, 3, 4) + dt.timedelta(weeks=week),
                )
            )
        db_session.commit()
        return series

    return _make_series


@pytest.fixture
def make_point(db_session):
    def _make_point(owner, status=PointStatus.OPEN, title="Check rebar spacing"):
        point = Point(title=title, status=status)
        point.owner = owner
        db_session.add(point)
        db_session.commit()
        return point

    return _make_point


@pytest.fixture
def auth_headers():
    """Headers the auth gateway would set for ``user``."""

    def _auth_headers(user: User) -> dict[str, str]:
        return {"X-User-Id": str(user.id)}

    return _auth_headers
