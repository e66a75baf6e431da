# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for permission API endpoints."""

from sitemeet.models import RolePermissionOverride
from sitemeet.models.enums import GlobalRole, ProjectRole


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestMyPermissions:
    """Tests for GET /api/v1/permissions/me."""

    def test_bim_manager(self, client, auth_headers, make_user):
        user = make_user(global_roles=[GlobalRole.BIM_MANAGER])

        response = client.get("/api/v1/permissions/me", headers=auth_headers(user))

        assert response.status_code == 200
        assert all(response.json().values())

    def test_viewer(self, client, auth_headers, make_user):
        user = make_user(global_roles=[GlobalRole.VIEWER])

        response = client.get("/api/v1/permissions/me", headers=auth_headers(user))

        assert response.status_code == 200
        assert not any(response.json().values())

    def test_reflects_overrides(self, client, auth_headers, make_user, db_session):
        user = make_user(global_roles=[GlobalRole.ENGINEER])
        db_session.add(
            RolePermissionOverride(role="ENGINEER", action="meetings:close")
        )
        db_session.commit()

        response = client.get("/api/v1/permissions/me", headers=auth_headers(user))

        assert response.json()["can_close_meetings"] is True


class TestPermissionCheck:
    """Tests for GET /api/v1/permissions/check."""

    def test_project_scoped_check(self, client, auth_headers, make_user, project):
        user = make_user(project_roles={project.id: ProjectRole.PROJECT_LEADER})

        in_project = client.get(
            "/api/v1/permissions/check",
            params={"action": "meetings:close", "project_id": str(project.id)},
            headers=auth_headers(user),
        )
        global_scope = client.get(
            "/api/v1/permissions/check",
            params={"action": "meetings:close"},
            headers=auth_headers(user),
        )

        assert in_project.status_code == 200
        assert in_project.json()["allowed"] is True
        assert global_scope.json()["allowed"] is False

    def test_unknown_action(self, client, auth_headers, make_user):
        user = make_user()
        response = client.get(
            "/api/v1/permissions/check",
            params={"action": "meetings:delete"},
            headers=auth_headers(user),
        )
        assert response.status_code == 422


class TestPermissionMatrix:
    """Tests for the matrix endpoints."""

    def test_get_matrix(self, client, auth_headers, make_user):
        user = make_user()

        response = client.get("/api/v1/permissions/matrix", headers=auth_headers(user))

        assert response.status_code == 200
        data = response.json()
        assert data["global_roles"]["users:manage"] == ["BIM_MANAGER"]
        assert data["project_roles"]["PROJECT_VIEWER"] == []
        assert data["project_role_names"]["PROJECT_LEADER"] == "Project Leader"
        assert {r["role"] for r in data["roles"]} == {r.value for r in GlobalRole}
        meetings = next(c for c in data["categories"] if c["name"] == "Meetings")
        assert meetings["labels"]["meetings:close"] == "Close Meetings"

    def test_override_requires_user_management(self, client, auth_headers, make_user):
        user = make_user(global_roles=[GlobalRole.BIM_PROJECT_MANAGER])

        response = client.put(
            "/api/v1/permissions/overrides",
            json={"role": "ENGINEER", "action": "meetings:close", "is_enabled": True},
            headers=auth_headers(user),
        )

        assert response.status_code == 403

    def test_set_override(self, client, auth_headers, make_user):
        admin = make_user(global_roles=[GlobalRole.BIM_MANAGER])
        engineer = make_user(global_roles=[GlobalRole.ENGINEER])

        response = client.put(
            "/api/v1/permissions/overrides",
            json={"role": "ENGINEER", "action": "meetings:close", "is_enabled": True},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json() == {
            "role": "ENGINEER",
            "action": "meetings:close",
            "is_enabled": True,
        }
        me = client.get("/api/v1/permissions/me", headers=auth_headers(engineer))
        assert me.json()["can_close_meetings"] is True
