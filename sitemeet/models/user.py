# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User model."""

from __future__ import annotations

import uuid as uuid_lib
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitemeet.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from sitemeet.models.company import Company
    from sitemeet.models.project_user import ProjectUser
    from sitemeet.models.user_role import UserRole


class User(Base, TimestampMixin):
    """User account with company membership and role assignments.

    ``company_role`` is stored as plain text and parsed when the actor is
    loaded, so unknown values are rejected instead of silently ignored.
    """

    __tablename__ = "users"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    company_id: Mapped[uuid_lib.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
    )
    company_role: Mapped[str | None] = mapped_column(
        String(50), default="EMPLOYEE", nullable=True
    )

    # Relationships
    company: Mapped[Company | None] = relationship(
        "Company", back_populates="employees"
    )
    user_roles: Mapped[list[UserRole]] = relationship(
        "UserRole",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    project_memberships: Mapped[list[ProjectUser]] = relationship(
        "ProjectUser",
        back_populates="user",
        cascade="all, delete-orphan",
    )
