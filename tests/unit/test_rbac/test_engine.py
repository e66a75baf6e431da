# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for the permission decision functions."""

import itertools
import uuid

import pytest

from sitemeet.exceptions import UnknownIdentifierError
from sitemeet.models.enums import CompanyRole, GlobalRole, ProjectRole
from sitemeet.rbac import engine
from sitemeet.rbac.actor import Actor
from sitemeet.rbac.engine import DEFAULT_MATRIX, PermissionMatrix
from sitemeet.rbac.permissions import ALL_PERMISSION_ACTIONS, PermissionAction
from sitemeet.rbac.roles import DEFAULT_PERMISSION_MATRIX, PROJECT_ROLE_PERMISSIONS

PROJECT = uuid.uuid4()
OTHER_PROJECT = uuid.uuid4()


def make_actor(global_roles=(), project_roles=None, **kwargs) -> Actor:
    return Actor(
        id=kwargs.pop("id", uuid.uuid4()),
        email=kwargs.pop("email", "anna@example.com"),
        global_roles=frozenset(global_roles),
        project_roles=project_roles or {},
        **kwargs,
    )


def granted(roles) -> set[PermissionAction]:
    actor = make_actor(roles)
    return {a for a in ALL_PERMISSION_ACTIONS if engine.has_permission(actor, a)}


class TestGlobalPermissions:
    """Tests for the global matrix."""

    def test_bim_manager_holds_every_action(self):
        actor = make_actor([GlobalRole.BIM_MANAGER])
        for action in ALL_PERMISSION_ACTIONS:
            assert engine.has_permission(actor, action)

    def test_bim_manager_snapshot_has_every_flag(self):
        permissions = engine.resolve_global_permissions(
            make_actor([GlobalRole.BIM_MANAGER])
        )
        assert all(permissions.as_dict().values())

    def test_viewer_holds_nothing(self):
        assert granted([GlobalRole.VIEWER]) == set()
        permissions = engine.resolve_global_permissions(make_actor([GlobalRole.VIEWER]))
        assert permissions.true_flags() == set()

    def test_no_roles_holds_nothing(self):
        assert granted([]) == set()

    def test_engineer(self):
        assert granted([GlobalRole.ENGINEER]) == {
            PermissionAction.POINTS_EDIT_ASSIGNED,
            PermissionAction.ATTACHMENTS_UPLOAD,
            PermissionAction.COMMENTS_CREATE,
        }

    def test_project_manager_sees_company_kpis(self):
        permissions = engine.resolve_global_permissions(
            make_actor([GlobalRole.PROJECT_MANAGER])
        )
        assert permissions.can_view_company_kpis
        assert not permissions.can_close_meetings
        assert not permissions.is_bim_manager

    def test_roles_compose_by_union(self):
        combined = granted([GlobalRole.ENGINEER, GlobalRole.PROJECT_MANAGER])
        assert combined == granted([GlobalRole.ENGINEER]) | granted(
            [GlobalRole.PROJECT_MANAGER]
        )

    def test_adding_a_role_never_removes_a_permission(self):
        roles = list(GlobalRole)
        for size in range(len(roles) + 1):
            for subset in itertools.combinations(roles, size):
                base = granted(subset)
                for extra in roles:
                    assert base <= granted((*subset, extra))

    def test_snapshot_matches_has_permission(self):
        actor = make_actor([GlobalRole.BIM_COORDINATOR])
        permissions = engine.resolve_global_permissions(actor)
        assert permissions.can_create_points == engine.has_permission(
            actor, PermissionAction.POINTS_CREATE
        )
        assert permissions.can_close_meetings == engine.has_permission(
            actor, PermissionAction.MEETINGS_CLOSE
        )

    def test_snapshot_is_memoized(self):
        actor = make_actor([GlobalRole.ENGINEER])
        first = engine.resolve_global_permissions(actor)
        second = engine.resolve_global_permissions(
            make_actor([GlobalRole.ENGINEER])
        )
        assert first is second


class TestProjectPermissions:
    """Tests for project-scoped checks."""

    def test_project_leader_may_close_in_own_project(self):
        actor = make_actor(project_roles={PROJECT: ProjectRole.PROJECT_LEADER})
        assert engine.has_project_permission(
            actor, PermissionAction.MEETINGS_CLOSE, PROJECT
        )
        assert not engine.has_project_permission(
            actor, PermissionAction.MEETINGS_CLOSE, OTHER_PROJECT
        )

    def test_project_viewer_grants_nothing(self):
        actor = make_actor(project_roles={PROJECT: ProjectRole.PROJECT_VIEWER})
        assert PROJECT_ROLE_PERMISSIONS[ProjectRole.PROJECT_VIEWER] == frozenset()
        for action in ALL_PERMISSION_ACTIONS:
            assert not engine.has_project_permission(actor, action, PROJECT)

    def test_external_consultant_only_comments(self):
        actor = make_actor(project_roles={PROJECT: ProjectRole.EXTERNAL_CONSULTANT})
        allowed = {
            a
            for a in ALL_PERMISSION_ACTIONS
            if engine.has_project_permission(actor, a, PROJECT)
        }
        assert allowed == {PermissionAction.COMMENTS_CREATE}

    def test_global_roles_do_not_leak_into_projects(self):
        actor = make_actor([GlobalRole.BIM_PROJECT_MANAGER])
        assert not engine.has_project_permission(
            actor, PermissionAction.MEETINGS_CLOSE, PROJECT
        )

    def test_company_role_does_not_leak_into_projects(self):
        actor = make_actor(company_id=uuid.uuid4(), company_role=CompanyRole.OWNER)
        assert not engine.has_project_permission(
            actor, PermissionAction.MEETINGS_EDIT, PROJECT
        )

    def test_bim_manager_override(self):
        actor = make_actor([GlobalRole.BIM_MANAGER])
        assert engine.has_project_permission(
            actor, PermissionAction.MEETINGS_CLOSE, PROJECT
        )
        assert engine.has_project_permission(
            actor, PermissionAction.MEETINGS_CLOSE, None
        )

    def test_no_project_means_no_project_grant(self):
        actor = make_actor(project_roles={PROJECT: ProjectRole.PROJECT_LEADER})
        assert not engine.has_project_permission(
            actor, PermissionAction.MEETINGS_CLOSE, None
        )


class TestCheckPermission:
    """Tests for the authoritative combined check."""

    def test_global_grant_applies_without_project(self):
        actor = make_actor([GlobalRole.BIM_PROJECT_MANAGER])
        assert engine.check_permission(actor, PermissionAction.MEETINGS_CLOSE)

    def test_project_grant_requires_project_id(self):
        actor = make_actor(
            [GlobalRole.ENGINEER], {PROJECT: ProjectRole.PROJECT_LEADER}
        )
        assert engine.check_permission(
            actor, PermissionAction.MEETINGS_CLOSE, PROJECT
        )
        assert not engine.check_permission(actor, PermissionAction.MEETINGS_CLOSE)
        assert not engine.check_permission(
            actor, PermissionAction.MEETINGS_CLOSE, OTHER_PROJECT
        )

    def test_uses_given_matrix(self):
        actor = make_actor([GlobalRole.ENGINEER])
        matrix = engine.build_permission_matrix(
            [(GlobalRole.ENGINEER, PermissionAction.MEETINGS_CLOSE, True)]
        )
        assert engine.check_permission(
            actor, PermissionAction.MEETINGS_CLOSE, None, matrix
        )
        assert not engine.check_permission(actor, PermissionAction.MEETINGS_CLOSE)


class TestProjectAccess:
    """Tests for project visibility."""

    def test_member_can_access(self):
        actor = make_actor(project_roles={PROJECT: ProjectRole.PROJECT_VIEWER})
        assert engine.can_access_project(actor, PROJECT)
        assert not engine.can_access_project(actor, OTHER_PROJECT)

    def test_global_view_always_allowed(self):
        assert engine.can_access_project(make_actor(), None)

    def test_bim_manager_sees_every_project(self):
        actor = make_actor([GlobalRole.BIM_MANAGER])
        assert engine.can_access_project(actor, OTHER_PROJECT)
        assert engine.get_accessible_project_ids(actor) == "all"

    def test_accessible_project_ids(self):
        actor = make_actor(
            project_roles={
                PROJECT: ProjectRole.ENGINEER,
                OTHER_PROJECT: ProjectRole.PROJECT_VIEWER,
            }
        )
        assert engine.get_accessible_project_ids(actor) == {PROJECT, OTHER_PROJECT}


class TestCanEditPoint:
    """Tests for point edit checks."""

    def test_editor_can_edit_any_point(self):
        actor = make_actor(
            [GlobalRole.BIM_COORDINATOR], {PROJECT: ProjectRole.PROJECT_VIEWER}
        )
        assert engine.can_edit_point(actor, "user:someone-else", PROJECT)
        assert engine.can_edit_point(actor, None, PROJECT)

    def test_assigned_only_editor(self):
        actor_id = uuid.uuid4()
        actor = make_actor(
            [GlobalRole.ENGINEER],
            {PROJECT: ProjectRole.PROJECT_VIEWER},
            id=actor_id,
            email="eng@example.com",
        )
        assert engine.can_edit_point(actor, f"user:{actor_id}", PROJECT)
        assert engine.can_edit_point(actor, "attendee:eng@example.com", PROJECT)
        assert not engine.can_edit_point(actor, f"user:{uuid.uuid4()}", PROJECT)
        assert not engine.can_edit_point(actor, "company:Acme", PROJECT)
        assert not engine.can_edit_point(actor, None, PROJECT)

    def test_project_role_grants_edit(self):
        actor = make_actor(project_roles={PROJECT: ProjectRole.DESIGN_LEAD})
        assert engine.can_edit_point(actor, None, PROJECT)

    def test_outside_project_is_denied(self):
        actor = make_actor([GlobalRole.BIM_COORDINATOR])
        assert not engine.can_edit_point(actor, None, PROJECT)


class TestCompanyRoles:
    """Tests for company management and point filters."""

    def test_owner_and_admin_manage_own_company(self):
        company = uuid.uuid4()
        for role in (CompanyRole.OWNER, CompanyRole.ADMIN):
            actor = make_actor(company_id=company, company_role=role)
            assert engine.can_manage_company(actor, company)
            assert not engine.can_manage_company(actor, uuid.uuid4())

    def test_employee_cannot_manage_company(self):
        company = uuid.uuid4()
        actor = make_actor(company_id=company, company_role=CompanyRole.EMPLOYEE)
        assert not engine.can_manage_company(actor, company)

    def test_bim_manager_manages_any_company(self):
        actor = make_actor([GlobalRole.BIM_MANAGER])
        assert engine.can_manage_company(actor, uuid.uuid4())

    def test_points_filter_for_project_manager(self):
        company = uuid.uuid4()
        actor = make_actor([GlobalRole.PROJECT_MANAGER], company_id=company)
        assert engine.get_points_filter(actor) == {"company_id": company}

    def test_no_points_filter_without_company(self):
        assert engine.get_points_filter(make_actor([GlobalRole.PROJECT_MANAGER])) is None
        assert engine.get_points_filter(make_actor([GlobalRole.ENGINEER])) is None


class TestPermissionMatrix:
    """Tests for the matrix and its overrides."""

    def test_default_matrix_matches_table(self):
        for action, roles in DEFAULT_PERMISSION_MATRIX.items():
            assert DEFAULT_MATRIX.allowed_roles(action) == roles

    def test_matrix_is_hashable_and_comparable(self):
        rebuilt = PermissionMatrix.from_mapping(DEFAULT_PERMISSION_MATRIX)
        assert rebuilt == DEFAULT_MATRIX
        assert hash(rebuilt) == hash(DEFAULT_MATRIX)

    def test_override_grants_and_revokes(self):
        matrix = engine.build_permission_matrix(
            [
                ("ENGINEER", "meetings:close", True),
                ("BIM_PROJECT_MANAGER", "meetings:close", False),
            ]
        )
        assert GlobalRole.ENGINEER in matrix.allowed_roles(
            PermissionAction.MEETINGS_CLOSE
        )
        assert GlobalRole.BIM_PROJECT_MANAGER not in matrix.allowed_roles(
            PermissionAction.MEETINGS_CLOSE
        )
        # Defaults are untouched
        assert GlobalRole.ENGINEER not in DEFAULT_MATRIX.allowed_roles(
            PermissionAction.MEETINGS_CLOSE
        )

    def test_bim_manager_survives_revocation(self):
        matrix = engine.build_permission_matrix(
            [("BIM_MANAGER", "users:manage", False)]
        )
        actor = make_actor([GlobalRole.BIM_MANAGER])
        assert engine.has_permission(actor, PermissionAction.USERS_MANAGE, matrix)

    def test_unknown_override_is_rejected(self):
        with pytest.raises(UnknownIdentifierError):
            engine.build_permission_matrix([("SUPERUSER", "meetings:close", True)])
        with pytest.raises(UnknownIdentifierError):
            engine.build_permission_matrix([("ENGINEER", "meetings:delete", True)])

    def test_as_dict(self):
        data = DEFAULT_MATRIX.as_dict()
        assert data["users:manage"] == ["BIM_MANAGER"]
        assert set(data) == {a.value for a in ALL_PERMISSION_ACTIONS}


class TestParsing:
    """Tests for parsing stored identifiers."""

    def test_parse_known_values(self):
        assert engine.parse_global_roles(["BIM_MANAGER", "VIEWER"]) == {
            GlobalRole.BIM_MANAGER,
            GlobalRole.VIEWER,
        }
        assert engine.parse_project_role("ENGINEER") == ProjectRole.ENGINEER
        assert engine.parse_company_role("OWNER") == CompanyRole.OWNER
        assert engine.parse_company_role(None) is None
        assert engine.parse_action("points:edit:any") == PermissionAction.POINTS_EDIT_ANY

    def test_unknown_values_fail_closed(self):
        with pytest.raises(UnknownIdentifierError) as exc_info:
            engine.parse_project_role("SITE_BOSS")
        assert exc_info.value.kind == "project role"
        assert exc_info.value.value == "SITE_BOSS"

        with pytest.raises(UnknownIdentifierError):
            engine.parse_global_roles(["ENGINEER", "ROOT"])
        with pytest.raises(UnknownIdentifierError):
            engine.parse_company_role("CEO")

    def test_split_actions(self):
        valid, invalid = engine.split_actions(
            ["meetings:close", "bogus", "comments:create"]
        )
        assert valid == {
            PermissionAction.MEETINGS_CLOSE,
            PermissionAction.COMMENTS_CREATE,
        }
        assert invalid == ["bogus"]
