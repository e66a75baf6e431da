# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Permission decisions.

Everything here is a pure function of an ``Actor`` and the role tables: no
database or network access. Role sources are reconciled as follows:

- Global roles compose by union through the permission matrix. A
  BIM_MANAGER holds every global capability.
- Project-scoped actions come only from the actor's role in that project,
  plus the BIM_MANAGER override. Company and global roles do not leak in.
- Company roles only gate company resources (``can_manage_company``).
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Literal, TypeVar

from sitemeet.exceptions import UnknownIdentifierError
from sitemeet.models.enums import CompanyRole, GlobalRole, ProjectRole
from sitemeet.rbac.actor import Actor, Permissions
from sitemeet.rbac.permissions import ALL_PERMISSION_ACTIONS, PermissionAction
from sitemeet.rbac.roles import (
    COMPANY_MANAGER_ROLES,
    DEFAULT_PERMISSION_MATRIX,
    PROJECT_ROLE_PERMISSIONS,
)

E = TypeVar("E", bound=Enum)


# --- Parsing stored identifiers -------------------------------------------


def _parse(enum_cls: type[E], value: object, kind: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise UnknownIdentifierError(kind, value) from None


def parse_global_roles(values: Iterable[object]) -> frozenset[GlobalRole]:
    """Convert stored global role names, rejecting unknown ones."""
    return frozenset(_parse(GlobalRole, v, "global role") for v in values)


def parse_project_role(value: object) -> ProjectRole:
    return _parse(ProjectRole, value, "project role")


def parse_company_role(value: object | None) -> CompanyRole | None:
    if value is None:
        return None
    return _parse(CompanyRole, value, "company role")


def parse_action(value: object) -> PermissionAction:
    return _parse(PermissionAction, value, "permission action")


def split_actions(values: Iterable[str]) -> tuple[set[PermissionAction], list[str]]:
    """Split action strings into (valid actions, unrecognised strings)."""
    valid: set[PermissionAction] = set()
    invalid: list[str] = []
    for value in values:
        try:
            valid.add(PermissionAction(value))
        except ValueError:
            invalid.append(value)
    return valid, invalid


# --- Global permission matrix ---------------------------------------------


@dataclass(frozen=True)
class PermissionMatrix:
    """Action -> global roles allowed to perform it.

    Hashable, so resolved snapshots can be memoized per matrix.
    """

    grants: tuple[tuple[PermissionAction, frozenset[GlobalRole]], ...]
    _by_action: dict[PermissionAction, frozenset[GlobalRole]] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_action", dict(self.grants))

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[PermissionAction, Iterable[GlobalRole]]
    ) -> PermissionMatrix:
        return cls(
            tuple(
                (action, frozenset(mapping.get(action, ())))
                for action in ALL_PERMISSION_ACTIONS
            )
        )

    def allowed_roles(self, action: PermissionAction) -> frozenset[GlobalRole]:
        return self._by_action.get(action, frozenset())

    def actions_for(self, roles: Iterable[GlobalRole]) -> frozenset[PermissionAction]:
        held = frozenset(roles)
        return frozenset(
            action for action, allowed in self.grants if allowed & held
        )

    def as_dict(self) -> dict[str, list[str]]:
        return {
            action.value: sorted(role.value for role in allowed)
            for action, allowed in self.grants
        }


DEFAULT_MATRIX = PermissionMatrix.from_mapping(DEFAULT_PERMISSION_MATRIX)


def build_permission_matrix(
    overrides: Iterable[tuple[object, object, bool]],
    base: PermissionMatrix = DEFAULT_MATRIX,
) -> PermissionMatrix:
    """Apply ``(role, action, is_enabled)`` overrides on top of ``base``.

    Raises:
        UnknownIdentifierError: an override names a role or action outside
            the catalog. The whole load fails rather than skipping the row.
    """
    by_action = {action: set(roles) for action, roles in base.grants}
    for raw_role, raw_action, is_enabled in overrides:
        role = _parse(GlobalRole, raw_role, "global role")
        action = parse_action(raw_action)
        if is_enabled:
            by_action[action].add(role)
        else:
            by_action[action].discard(role)
    return PermissionMatrix.from_mapping(by_action)


# --- Decisions --------------------------------------------------------------


@lru_cache(maxsize=512)
def _granted_actions(
    roles: frozenset[GlobalRole], matrix: PermissionMatrix
) -> frozenset[PermissionAction]:
    if GlobalRole.BIM_MANAGER in roles:
        return frozenset(ALL_PERMISSION_ACTIONS)
    return matrix.actions_for(roles)


@lru_cache(maxsize=512)
def _resolve(roles: frozenset[GlobalRole], matrix: PermissionMatrix) -> Permissions:
    return Permissions.from_grants(
        _granted_actions(roles, matrix),
        is_bim_manager=GlobalRole.BIM_MANAGER in roles,
    )


def resolve_global_permissions(
    actor: Actor, matrix: PermissionMatrix = DEFAULT_MATRIX
) -> Permissions:
    """Fold the actor's global roles into a capability snapshot."""
    return _resolve(actor.global_roles, matrix)


def has_permission(
    actor: Actor,
    action: PermissionAction,
    matrix: PermissionMatrix = DEFAULT_MATRIX,
) -> bool:
    """Global-scope check: does any held global role grant ``action``?"""
    return action in _granted_actions(actor.global_roles, matrix)


def has_project_permission(
    actor: Actor,
    action: PermissionAction,
    project_id: uuid.UUID | None,
) -> bool:
    """Project-scoped check driven only by the actor's role in that project."""
    if actor.is_bim_manager:
        return True
    if project_id is None:
        return False
    project_role = actor.project_role(project_id)
    if project_role is None:
        return False
    return action in PROJECT_ROLE_PERMISSIONS[project_role]


def can_access_project(actor: Actor, project_id: uuid.UUID | None) -> bool:
    """Visibility gate. ``None`` means a global view and is always allowed."""
    if project_id is None:
        return True
    if actor.is_bim_manager:
        return True
    return project_id in actor.project_ids


def check_permission(
    actor: Actor,
    action: PermissionAction,
    project_id: uuid.UUID | None = None,
    matrix: PermissionMatrix = DEFAULT_MATRIX,
) -> bool:
    """Authoritative server-side check used before any mutation.

    Allowed when a global role grants the action, or when ``project_id``
    is given and the actor's role in that project grants it.
    """
    if has_permission(actor, action, matrix):
        return True
    return project_id is not None and has_project_permission(
        actor, action, project_id
    )


def can_edit_point(
    actor: Actor,
    assigned_to_ref: str | None,
    project_id: uuid.UUID | None,
    matrix: PermissionMatrix = DEFAULT_MATRIX,
) -> bool:
    """Edit check for a point, honouring the assigned-only restriction.

    ``assigned_to_ref`` is ``user:<id>``, ``attendee:<id>`` or
    ``company:<name>``; attendee references match on the actor's email.
    """
    if not can_access_project(actor, project_id):
        return False
    if check_permission(actor, PermissionAction.POINTS_EDIT_ANY, project_id, matrix):
        return True
    if not check_permission(
        actor, PermissionAction.POINTS_EDIT_ASSIGNED, project_id, matrix
    ):
        return False
    if not assigned_to_ref:
        return False
    if assigned_to_ref.startswith("user:"):
        return assigned_to_ref.removeprefix("user:") == str(actor.id)
    return actor.email in assigned_to_ref


def can_manage_company(actor: Actor, company_id: uuid.UUID) -> bool:
    """Company resources are managed by that company's owners and admins."""
    if actor.is_bim_manager:
        return True
    return (
        actor.company_id == company_id
        and actor.company_role in COMPANY_MANAGER_ROLES
    )


def get_points_filter(actor: Actor) -> dict[str, uuid.UUID] | None:
    """Row filter for point listings.

    Project managers only see points linked to their own company.
    """
    if GlobalRole.PROJECT_MANAGER in actor.global_roles and actor.company_id:
        return {"company_id": actor.company_id}
    return None


def get_accessible_project_ids(actor: Actor) -> frozenset[uuid.UUID] | Literal["all"]:
    if actor.is_bim_manager:
        return "all"
    return actor.project_ids
