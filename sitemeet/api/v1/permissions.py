# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Permission API endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sitemeet.api.deps import (
    get_current_actor,
    get_db,
    get_permission_matrix,
    require_permission,
    to_http_exception,
)
from sitemeet.exceptions import SiteMeetError
from sitemeet.models.enums import GlobalRole
from sitemeet.rbac import engine
from sitemeet.rbac.actor import Actor
from sitemeet.rbac.engine import PermissionMatrix
from sitemeet.rbac.permissions import (
    PERMISSION_ACTION_LABELS,
    PERMISSION_CATEGORIES,
    PermissionAction,
)
from sitemeet.rbac.roles import (
    PROJECT_ROLE_DISPLAY_NAMES,
    PROJECT_ROLE_PERMISSIONS,
    ROLE_DESCRIPTIONS,
    ROLE_DISPLAY_NAMES,
)
from sitemeet.schemas.rbac import (
    PermissionCategorySchema,
    PermissionCheckResponse,
    PermissionMatrixSchema,
    PermissionOverrideSchema,
    PermissionsSchema,
    RoleInfoSchema,
)
from sitemeet.services import rbac_service

router = APIRouter()


@router.get("/me", response_model=PermissionsSchema)
def get_my_permissions(
    actor: Actor = Depends(get_current_actor),
    matrix: PermissionMatrix = Depends(get_permission_matrix),
) -> PermissionsSchema:
    """Global capability snapshot of the caller, for UI gating."""
    permissions = engine.resolve_global_permissions(actor, matrix)
    return PermissionsSchema.model_validate(permissions)


@router.get("/check", response_model=PermissionCheckResponse)
def check_permission(
    action: PermissionAction,
    project_id: uuid.UUID | None = None,
    actor: Actor = Depends(get_current_actor),
    matrix: PermissionMatrix = Depends(get_permission_matrix),
) -> PermissionCheckResponse:
    """Check one action, optionally within a project."""
    return PermissionCheckResponse(
        action=action,
        project_id=project_id,
        allowed=engine.check_permission(actor, action, project_id, matrix),
    )


@router.get("/matrix", response_model=PermissionMatrixSchema)
def get_matrix(
    actor: Actor = Depends(get_current_actor),
    matrix: PermissionMatrix = Depends(get_permission_matrix),
) -> PermissionMatrixSchema:
    """Effective global matrix, the project-role table and display labels."""
    return PermissionMatrixSchema(
        global_roles=matrix.as_dict(),
        project_roles={
            role.value: sorted(action.value for action in actions)
            for role, actions in PROJECT_ROLE_PERMISSIONS.items()
        },
        project_role_names={
            role.value: name for role, name in PROJECT_ROLE_DISPLAY_NAMES.items()
        },
        roles=[
            RoleInfoSchema(
                role=role.value,
                display_name=ROLE_DISPLAY_NAMES[role],
                description=ROLE_DESCRIPTIONS[role],
            )
            for role in GlobalRole
        ],
        categories=[
            PermissionCategorySchema(
                name=category["name"],
                actions=category["actions"],
                labels={
                    action.value: PERMISSION_ACTION_LABELS[action]
                    for action in category["actions"]
                },
            )
            for category in PERMISSION_CATEGORIES
        ],
    )


@router.put("/overrides", response_model=PermissionOverrideSchema)
def set_override(
    data: PermissionOverrideSchema,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_permission(PermissionAction.USERS_MANAGE)),
) -> PermissionOverrideSchema:
    """Grant or revoke an action for a global role.

    Requires users:manage permission.
    """
    try:
        override = rbac_service.set_permission_override(
            db, data.role, data.action, data.is_enabled
        )
    except SiteMeetError as e:
        raise to_http_exception(e) from e
    return PermissionOverrideSchema.model_validate(override)
