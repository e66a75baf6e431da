# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""API dependencies for dependency injection."""

import logging
import uuid

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from sitemeet.config import settings
from sitemeet.database import get_db
from sitemeet.exceptions import (
    AlreadyClosedError,
    ForbiddenError,
    InvalidTargetError,
    NotFoundError,
    PersistenceFailureError,
    SiteMeetError,
)
from sitemeet.rbac import engine
from sitemeet.rbac.actor import Actor
from sitemeet.rbac.engine import PermissionMatrix
from sitemeet.rbac.permissions import PermissionAction
from sitemeet.schemas.common import ErrorResponse
from sitemeet.services import rbac_service

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[SiteMeetError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    AlreadyClosedError: status.HTTP_409_CONFLICT,
    InvalidTargetError: 422,
    PersistenceFailureError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: SiteMeetError) -> HTTPException:
    """Map a domain error to an HTTP error carrying its message."""
    status_code = ERROR_STATUS_CODES.get(
        type(error), status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return HTTPException(status_code=status_code, detail=str(error))


def get_current_actor(
    request: Request,
    db: Session = Depends(get_db),
) -> Actor:
    """Resolve the caller from the user id header set by the auth gateway."""
    raw_user_id = request.headers.get(settings.user_id_header)
    if not raw_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        user_id = uuid.UUID(raw_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id",
        ) from None

    try:
        return rbac_service.load_actor(db, user_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        ) from None
    except SiteMeetError as e:
        # Stored role outside the catalog
        logger.error(f"Cannot load user {user_id}: {e}")
        raise to_http_exception(e) from e


def get_permission_matrix(db: Session = Depends(get_db)) -> PermissionMatrix:
    """Effective global permission matrix (defaults plus overrides)."""
    try:
        return rbac_service.load_permission_matrix(db)
    except SiteMeetError as e:
        logger.error(f"Cannot load permission matrix: {e}")
        raise to_http_exception(e) from e


def require_permission(action: PermissionAction):
    """Dependency for global-scope permission checks."""

    def dependency(
        actor: Actor = Depends(get_current_actor),
        matrix: PermissionMatrix = Depends(get_permission_matrix),
    ) -> Actor:
        if not engine.has_permission(actor, action, matrix):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions for this action",
            )
        return actor

    return dependency


# OpenAPI documentation of the domain errors returned by closure endpoints
CLOSE_ERROR_RESPONSES: dict[int | str, dict] = {
    code: {"model": ErrorResponse}
    for code in sorted(set(ERROR_STATUS_CODES.values()))
}
