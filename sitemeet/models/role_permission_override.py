# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Persisted overrides of the default global permission matrix."""

import uuid as uuid_lib

from sqlalchemy import Boolean, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from sitemeet.models.base import Base, TimestampMixin


class RolePermissionOverride(Base, TimestampMixin):
    """Grants (``is_enabled``) or revokes an action for a global role."""

    __tablename__ = "role_permission_overrides"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint("role", "action", name="_role_action_override_uc"),
    )
