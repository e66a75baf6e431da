# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Closure schemas."""

import datetime
import uuid

from pydantic import BaseModel, ConfigDict

from sitemeet.models.enums import ClosureMode, EntityType
from sitemeet.services.closure_service import ClosureResult


class ClosureTargetSchema(BaseModel):
    """Meeting or series receiving moved points."""

    model_config = ConfigDict(from_attributes=True)

    type: EntityType
    id: uuid.UUID


class CloseRequest(BaseModel):
    """Request to close a meeting or series.

    ``target`` is only used in ``move`` mode when open points exist.
    """

    mode: ClosureMode
    target: ClosureTargetSchema | None = None


class ClosureResultSchema(BaseModel):
    """Outcome of a closure, including cache keys to invalidate."""

    entity_type: EntityType
    entity_id: uuid.UUID
    new_status: str
    affected_point_count: int
    target: ClosureTargetSchema | None = None
    invalidation_keys: list[list[str]]

    @classmethod
    def from_result(cls, result: ClosureResult) -> "ClosureResultSchema":
        return cls(
            entity_type=result.entity_type,
            entity_id=result.entity_id,
            new_status=result.new_status,
            affected_point_count=result.affected_point_count,
            target=(
                ClosureTargetSchema(type=result.target.type, id=result.target.id)
                if result.target
                else None
            ),
            invalidation_keys=[list(key) for key in result.invalidation_keys()],
        )


class OpenMeetingSchema(BaseModel):
    """Open meeting offered as a move target."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    date: datetime.date
    project_id: uuid.UUID | None


class OpenSeriesSchema(BaseModel):
    """Open series offered as a move target."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    recurrence_rule: str
    project_id: uuid.UUID | None


class CloseTargetsResponse(BaseModel):
    """Move targets grouped by kind."""

    meetings: list[OpenMeetingSchema]
    series: list[OpenSeriesSchema]
