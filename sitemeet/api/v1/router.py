# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Main API router for v1 endpoints."""

from fastapi import APIRouter

from sitemeet.api.v1 import meetings, permissions, series

api_router = APIRouter()

api_router.include_router(
    permissions.router, prefix="/permissions", tags=["permissions"]
)
api_router.include_router(meetings.router, prefix="/meetings", tags=["meetings"])
api_router.include_router(
    series.router, prefix="/meeting-series", tags=["meeting-series"]
)
