# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Meeting series closure endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sitemeet.api.deps import (
    CLOSE_ERROR_RESPONSES,
    get_current_actor,
    get_db,
    get_permission_matrix,
    to_http_exception,
)
from sitemeet.exceptions import SiteMeetError
from sitemeet.models.enums import EntityType
from sitemeet.rbac.actor import Actor
from sitemeet.rbac.engine import PermissionMatrix
from sitemeet.schemas.closure import (
    CloseRequest,
    CloseTargetsResponse,
    ClosureResultSchema,
)
from sitemeet.services import closure_service
from sitemeet.services.closure_service import ClosureTarget

router = APIRouter()


@router.get("/{series_id}/close-targets", response_model=CloseTargetsResponse)
def list_close_targets(
    series_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> CloseTargetsResponse:
    """Open meetings and series of the same project that can take over points."""
    try:
        targets = closure_service.list_close_targets(
            db, actor, EntityType.SERIES, series_id
        )
    except SiteMeetError as e:
        raise to_http_exception(e) from e
    return CloseTargetsResponse.model_validate(targets, from_attributes=True)


@router.post(
    "/{series_id}/close",
    response_model=ClosureResultSchema,
    responses=CLOSE_ERROR_RESPONSES,
)
def close_series(
    series_id: uuid.UUID,
    data: CloseRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    matrix: PermissionMatrix = Depends(get_permission_matrix),
) -> ClosureResultSchema:
    """Close a series, closing or moving its open points.

    Occurrences of the series are left unchanged.
    """
    target = ClosureTarget(data.target.type, data.target.id) if data.target else None
    try:
        result = closure_service.close_entity(
            db, actor, EntityType.SERIES, series_id, data.mode, target, matrix
        )
    except SiteMeetError as e:
        raise to_http_exception(e) from e
    return ClosureResultSchema.from_result(result)
