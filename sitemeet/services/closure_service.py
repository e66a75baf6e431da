# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Closing meetings and series together with their open points.

Closing flips the meeting or series to ``closed`` and resolves every point
it still owns that is not closed:

- ``close`` mode marks those points closed, leaving their owner as is.
- ``move`` mode re-owns them to another open meeting or series of the same
  project, leaving their status as is.

Validation happens first and writes nothing. The status flip, the point
changes and their history rows are then committed in one transaction, so
a store failure leaves the entity and all of its points untouched.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sitemeet.events import AppEvent, event_bus
from sitemeet.exceptions import (
    AlreadyClosedError,
    ForbiddenError,
    InvalidTargetError,
    NotFoundError,
    PersistenceFailureError,
    SiteMeetError,
)
from sitemeet.models import Point, PointOwner, StatusUpdate
from sitemeet.models.enums import ClosureMode, EntityType, PointStatus
from sitemeet.rbac import engine
from sitemeet.rbac.actor import Actor
from sitemeet.rbac.engine import DEFAULT_MATRIX, PermissionMatrix
from sitemeet.rbac.permissions import PermissionAction
from sitemeet.services import entity_service
from sitemeet.services.entity_service import ClosableEntity, OpenEntities

logger = logging.getLogger(__name__)

SYSTEM_AUTHOR = "System"

ENTITY_LABELS: dict[EntityType, str] = {
    EntityType.MEETING: "meeting",
    EntityType.SERIES: "series",
}

# Cache key prefixes used by clients for single-entity views
ENTITY_CACHE_KEYS: dict[EntityType, str] = {
    EntityType.MEETING: "meeting",
    EntityType.SERIES: "meeting-series",
}

LIST_CACHE_KEYS: list[tuple[str, ...]] = [("meetings",), ("meeting-series",), ("points",)]


@dataclass(frozen=True)
class ClosureTarget:
    """Meeting or series chosen to receive moved points."""

    type: EntityType
    id: uuid.UUID


@dataclass(frozen=True)
class ClosureResult:
    """Outcome of a successful closure."""

    entity_type: EntityType
    entity_id: uuid.UUID
    new_status: str
    affected_point_count: int
    target: ClosureTarget | None = None

    def invalidation_keys(self) -> list[tuple[str, ...]]:
        """Cache keys a client should drop after this closure."""
        keys = list(LIST_CACHE_KEYS)
        keys.append((ENTITY_CACHE_KEYS[self.entity_type], str(self.entity_id)))
        if self.target is not None:
            keys.append((ENTITY_CACHE_KEYS[self.target.type], str(self.target.id)))
        return keys

    def as_dict(self) -> dict[str, Any]:
        return {
            "entity_type": self.entity_type.value,
            "entity_id": str(self.entity_id),
            "new_status": self.new_status,
            "affected_point_count": self.affected_point_count,
            "target": (
                {"type": self.target.type.value, "id": str(self.target.id)}
                if self.target
                else None
            ),
        }


def can_close(
    actor: Actor,
    entity: ClosableEntity,
    matrix: PermissionMatrix = DEFAULT_MATRIX,
) -> bool:
    """Global close capability, or ``meetings:close`` in the entity's project."""
    return engine.check_permission(
        actor, PermissionAction.MEETINGS_CLOSE, entity.project_id, matrix
    )


def list_close_targets(
    db: Session,
    actor: Actor,
    entity_type: EntityType,
    entity_id: uuid.UUID,
) -> OpenEntities:
    """Open meetings and series that could receive the entity's points.

    Advisory only: ``close_entity`` validates the chosen target again.
    """
    entity_type = EntityType(entity_type)
    entity = entity_service.get_entity(db, entity_type, entity_id)
    if entity is None:
        raise NotFoundError(f"{ENTITY_LABELS[entity_type].capitalize()} not found")
    if not engine.can_access_project(actor, entity.project_id):
        raise ForbiddenError()
    return entity_service.list_open_entities_in_project(
        db, entity.project_id, exclude_id=entity.id
    )


def close_entity(
    db: Session,
    actor: Actor,
    entity_type: EntityType,
    entity_id: uuid.UUID,
    mode: ClosureMode,
    target: ClosureTarget | None = None,
    matrix: PermissionMatrix = DEFAULT_MATRIX,
) -> ClosureResult:
    """Close a meeting or series and resolve its open points.

    Args:
        db: Database session; committed on success, rolled back otherwise
        actor: Caller, re-authorized here regardless of earlier UI checks
        entity_type: Meeting or series
        entity_id: Id of the entity to close
        mode: ``close`` or ``move``
        target: Receiving meeting/series; required for ``move`` when there
            are open points, ignored otherwise
        matrix: Effective global permission matrix

    Raises:
        NotFoundError: entity or target does not exist
        ForbiddenError: actor may not close meetings here
        AlreadyClosedError: entity was closed before
        InvalidTargetError: target missing, closed, the entity itself, or
            in another project
        PersistenceFailureError: the store failed; nothing was written
    """
    entity_type = EntityType(entity_type)
    mode = ClosureMode(mode)
    label = ENTITY_LABELS[entity_type]
    try:
        entity, open_points, destination = _validate(
            db, actor, entity_type, entity_id, mode, target, matrix
        )
    except SiteMeetError:
        # Release row locks taken while validating
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to load {label} {entity_id} for closing: {e}")
        raise PersistenceFailureError(
            f"Could not close the {label}; no changes were saved. Please try again."
        ) from e

    now = datetime.now(timezone.utc)
    try:
        entity.mark_closed(now)
        if destination is not None:
            _move_points(db, entity, open_points, destination, now.date())
        else:
            _close_points(db, entity, open_points, now.date())
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to close {label} {entity_id}, rolled back: {e}")
        raise PersistenceFailureError(
            f"Could not close the {label}; no changes were saved. Please try again."
        ) from e

    result = ClosureResult(
        entity_type=entity_type,
        entity_id=entity_id,
        new_status=entity.status.value,
        affected_point_count=len(open_points),
        target=(
            ClosureTarget(destination.entity_type, destination.id)
            if destination is not None
            else None
        ),
    )
    logger.info(
        f"User {actor.id} closed {label} {entity_id} "
        f"(mode={mode.value}, points={result.affected_point_count})"
    )
    _publish(result, [p.id for p in open_points])
    return result


def _validate(
    db: Session,
    actor: Actor,
    entity_type: EntityType,
    entity_id: uuid.UUID,
    mode: ClosureMode,
    target: ClosureTarget | None,
    matrix: PermissionMatrix,
) -> tuple[ClosableEntity, list[Point], ClosableEntity | None]:
    label = ENTITY_LABELS[entity_type]

    entity = entity_service.get_entity(db, entity_type, entity_id, lock=True)
    if entity is None:
        raise NotFoundError(f"{label.capitalize()} not found")

    if not can_close(actor, entity, matrix):
        logger.info(f"User {actor.id} denied closing {label} {entity_id}")
        raise ForbiddenError()

    if entity.is_closed:
        raise AlreadyClosedError(f"This {label} is already closed")

    open_points = entity_service.get_open_points(db, entity_type, entity_id, lock=True)

    # Without open points the mode does not matter and any target is ignored
    if not open_points or mode == ClosureMode.CLOSE:
        return entity, open_points, None

    return entity, open_points, _resolve_target(db, entity, target)


def _resolve_target(
    db: Session, entity: ClosableEntity, target: ClosureTarget | None
) -> ClosableEntity:
    if target is None:
        raise InvalidTargetError(
            "Choose an open meeting or series to move the open points to"
        )

    target_type = EntityType(target.type)
    target_label = ENTITY_LABELS[target_type]
    if target_type == entity.entity_type and target.id == entity.id:
        raise InvalidTargetError(
            f"Open points cannot be moved to the {target_label} being closed"
        )

    destination = entity_service.get_entity(db, target_type, target.id)
    if destination is None:
        raise NotFoundError(f"Target {target_label} not found")
    if destination.is_closed:
        raise InvalidTargetError(
            f"Target {target_label} is already closed; choose an open one"
        )
    if destination.project_id != entity.project_id:
        raise InvalidTargetError(
            f"Target {target_label} must belong to the same project"
        )
    return destination


def _close_points(
    db: Session, entity: ClosableEntity, points: list[Point], today: date
) -> None:
    note = f"Closed with {ENTITY_LABELS[entity.entity_type]}"
    for point in points:
        point.status = PointStatus.CLOSED
        db.add(
            StatusUpdate(
                point_id=point.id, date=today, status=note, action_on=SYSTEM_AUTHOR
            )
        )


def _move_points(
    db: Session,
    entity: ClosableEntity,
    points: list[Point],
    destination: ClosableEntity,
    today: date,
) -> None:
    note = (
        f'Point moved from closed {ENTITY_LABELS[entity.entity_type]} "{entity.title}" '
        f'to {ENTITY_LABELS[destination.entity_type]} "{destination.title}"'
    )
    new_owner = PointOwner(destination.entity_type, destination.id)
    for point in points:
        point.owner = new_owner
        db.add(
            StatusUpdate(
                point_id=point.id, date=today, status=note, action_on=SYSTEM_AUTHOR
            )
        )


def _publish(result: ClosureResult, point_ids: list[uuid.UUID]) -> None:
    data = result.as_dict()
    data["invalidation_keys"] = [list(key) for key in result.invalidation_keys()]
    closed_event = (
        AppEvent.MEETING_CLOSED
        if result.entity_type == EntityType.MEETING
        else AppEvent.SERIES_CLOSED
    )
    event_bus.publish(closed_event, data)

    if point_ids:
        points_event = (
            AppEvent.POINTS_MOVED if result.target is not None else AppEvent.POINTS_CLOSED
        )
        event_bus.publish(
            points_event, {**data, "point_ids": [str(pid) for pid in point_ids]}
        )
