# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Company model."""

from __future__ import annotations

import uuid as uuid_lib
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sitemeet.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from sitemeet.models.project import Project
    from sitemeet.models.user import User


class Company(Base, TimestampMixin):
    """A company whose employees take part in projects."""

    __tablename__ = "companies"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Used to match new users to their company (e.g. "acme.com")
    email_domain: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Relationships
    employees: Mapped[list[User]] = relationship("User", back_populates="company")
    owned_projects: Mapped[list[Project]] = relationship(
        "Project", back_populates="owner_company"
    )
