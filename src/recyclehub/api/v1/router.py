"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the ``api.v1_prefix`` setting (/api/v1).
"""

from __future__ import annotations

from fastapi import APIRouter

from recyclehub.api.v1.endpoints import health, statuses, utilities


router = APIRouter()

router.include_router(health.router)
router.include_router(statuses.router)
router.include_router(utilities.router)
