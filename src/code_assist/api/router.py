"""API router aggregating all endpoint routers.

Assist routes are mounted at the root (``/completions``, ``/explain``, ...)
to keep the paths editor plugins already call.
"""

from __future__ import annotations

from fastapi import APIRouter

from code_assist.api.endpoints import assist, health


router = APIRouter()

router.include_router(health.router)
router.include_router(assist.router)
