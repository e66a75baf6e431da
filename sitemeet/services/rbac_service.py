# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Role store: loads actors and mutates role memberships."""

import logging
import uuid

from sqlalchemy.orm import Session

from sitemeet.events import AppEvent, event_bus
from sitemeet.exceptions import NotFoundError
from sitemeet.models import ProjectUser, RolePermissionOverride, User, UserRole
from sitemeet.models.enums import GlobalRole, ProjectRole
from sitemeet.rbac.actor import Actor
from sitemeet.rbac.engine import (
    PermissionMatrix,
    build_permission_matrix,
    parse_action,
    parse_company_role,
    parse_global_roles,
    parse_project_role,
)
from sitemeet.rbac.permissions import PermissionAction

logger = logging.getLogger(__name__)


def load_actor(db: Session, user_id: uuid.UUID) -> Actor:
    """Assemble an ``Actor`` from the user's persisted memberships.

    Raises:
        NotFoundError: the user does not exist or is inactive.
        UnknownIdentifierError: a stored role is not part of the catalog.
    """
    user = db.get(User, user_id)
    if not user or not user.is_active:
        raise NotFoundError("User not found or inactive")

    role_rows = db.query(UserRole.role).filter(UserRole.user_id == user.id).all()
    memberships = db.query(ProjectUser).filter(ProjectUser.user_id == user.id).all()

    return Actor(
        id=user.id,
        email=user.email,
        name=user.name,
        global_roles=parse_global_roles(row.role for row in role_rows),
        company_id=user.company_id,
        company_role=(
            parse_company_role(user.company_role) if user.company_id else None
        ),
        project_roles={
            m.project_id: parse_project_role(m.project_role) for m in memberships
        },
    )


def load_permission_matrix(db: Session) -> PermissionMatrix:
    """Build the effective global matrix: defaults plus stored overrides."""
    overrides = db.query(RolePermissionOverride).all()
    return build_permission_matrix(
        (o.role, o.action, o.is_enabled) for o in overrides
    )


def _require_user(db: Session, user_id: uuid.UUID) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def assign_global_role(
    db: Session, user_id: uuid.UUID, role: GlobalRole | str
) -> UserRole:
    """Give a user a global role. Assigning a held role is a no-op."""
    (global_role,) = parse_global_roles([role])
    _require_user(db, user_id)

    user_role = (
        db.query(UserRole)
        .filter(UserRole.user_id == user_id, UserRole.role == global_role.value)
        .first()
    )
    if user_role:
        return user_role

    user_role = UserRole(user_id=user_id, role=global_role.value)
    db.add(user_role)
    db.commit()
    logger.info(f"Assigned global role {global_role.value} to user {user_id}")
    event_bus.publish(
        AppEvent.PERMISSIONS_CHANGED,
        {"user_id": str(user_id), "global_role": global_role.value},
    )
    return user_role


def remove_global_role(
    db: Session, user_id: uuid.UUID, role: GlobalRole | str
) -> bool:
    """Remove a global role. Returns True if removed, False if not held."""
    (global_role,) = parse_global_roles([role])
    user_role = (
        db.query(UserRole)
        .filter(UserRole.user_id == user_id, UserRole.role == global_role.value)
        .first()
    )
    if not user_role:
        return False

    db.delete(user_role)
    db.commit()
    logger.info(f"Removed global role {global_role.value} from user {user_id}")
    event_bus.publish(
        AppEvent.PERMISSIONS_CHANGED,
        {"user_id": str(user_id), "global_role": global_role.value},
    )
    return True


def assign_project_role(
    db: Session,
    user_id: uuid.UUID,
    project_id: uuid.UUID,
    role: ProjectRole | str = ProjectRole.PROJECT_VIEWER,
) -> ProjectUser:
    """Add a user to a project or replace their role in it.

    A user holds at most one role per project.
    """
    project_role = parse_project_role(role)
    _require_user(db, user_id)

    membership = (
        db.query(ProjectUser)
        .filter(ProjectUser.user_id == user_id, ProjectUser.project_id == project_id)
        .first()
    )
    if membership:
        membership.project_role = project_role.value
    else:
        membership = ProjectUser(
            user_id=user_id, project_id=project_id, project_role=project_role.value
        )
        db.add(membership)
    db.commit()
    logger.info(
        f"User {user_id} now has project role {project_role.value} "
        f"in project {project_id}"
    )
    event_bus.publish(
        AppEvent.PERMISSIONS_CHANGED,
        {
            "user_id": str(user_id),
            "project_id": str(project_id),
            "project_role": project_role.value,
        },
    )
    return membership


def remove_project_member(
    db: Session, user_id: uuid.UUID, project_id: uuid.UUID
) -> bool:
    """Remove a user from a project. Returns True if removed."""
    membership = (
        db.query(ProjectUser)
        .filter(ProjectUser.user_id == user_id, ProjectUser.project_id == project_id)
        .first()
    )
    if not membership:
        return False

    db.delete(membership)
    db.commit()
    logger.info(f"Removed user {user_id} from project {project_id}")
    event_bus.publish(
        AppEvent.PERMISSIONS_CHANGED,
        {"user_id": str(user_id), "project_id": str(project_id)},
    )
    return True


def set_permission_override(
    db: Session,
    role: GlobalRole | str,
    action: PermissionAction | str,
    is_enabled: bool,
) -> RolePermissionOverride:
    """Grant or revoke ``action`` for a global role in the matrix."""
    (global_role,) = parse_global_roles([role])
    permission_action = parse_action(action)

    override = (
        db.query(RolePermissionOverride)
        .filter(
            RolePermissionOverride.role == global_role.value,
            RolePermissionOverride.action == permission_action.value,
        )
        .first()
    )
    if override:
        override.is_enabled = is_enabled
    else:
        override = RolePermissionOverride(
            role=global_role.value,
            action=permission_action.value,
            is_enabled=is_enabled,
        )
        db.add(override)
    db.commit()
    logger.info(
        f"Permission override: {permission_action.value} "
        f"{'granted to' if is_enabled else 'revoked from'} {global_role.value}"
    )
    event_bus.publish(
        AppEvent.PERMISSIONS_CHANGED,
        {
            "role": global_role.value,
            "action": permission_action.value,
            "is_enabled": is_enabled,
        },
    )
    return override
