"""
nexus.api.routes.seed — Development reset
==========================================

``POST /api/seed`` wipes the database and loads the demo workspace.  It
answers 404 unless ``enable_seed_endpoint: true`` is set in config.yaml.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from nexus.api.deps import get_config, get_engine
from nexus.config import NexusConfig
from nexus.database.engine import run_db
from nexus.exceptions import NotFoundError
from nexus.services.seed import reset_and_seed

logger = logging.getLogger(__name__)
router = APIRouter(tags=["seed"])


@router.post("/seed")
async def seed(cfg: NexusConfig = Depends(get_config), engine=Depends(get_engine)):
    if not cfg.enable_seed_endpoint:
        raise NotFoundError("Not found")
    counts = await run_db(reset_and_seed, engine)
    return {"message": "Database seeded successfully", "created": counts}
