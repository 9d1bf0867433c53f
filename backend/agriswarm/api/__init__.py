# backend/agriswarm/api/__init__.py

from fastapi import APIRouter

from . import agents, location, workflow

router = APIRouter()
router.include_router(workflow.router, tags=["workflow"])
router.include_router(agents.router, tags=["agents"])
router.include_router(location.router, tags=["location"])
