from __future__ import annotations

import os

from fastapi import APIRouter

from graphhive import __version__
from graphhive.observability.metrics import inc_named

router = APIRouter()


@router.get("/health/live")
def live():
    inc_named("health_live")
    return {"status": "ok", "version": __version__, "env": (os.getenv("GRAPHHIVE_ENV") or "dev").strip().lower()}
