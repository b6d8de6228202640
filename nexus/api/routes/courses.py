"""
nexus.api.routes.courses — Catalog, enrollment & progress
==========================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from nexus.api.deps import CurrentIdentity, get_config, get_engine
from nexus.config import NexusConfig
from nexus.database.models import CourseCategory
from nexus.services import course_service

router = APIRouter(prefix="/courses", tags=["courses"])


class ProgressUpdate(BaseModel):
    progress: int = Field(ge=0, le=100)


@router.get("")
def list_courses(
    identity: CurrentIdentity,
    category: CourseCategory | None = Query(default=None),
    engine=Depends(get_engine),
):
    return course_service.list_courses(engine, identity.account_id, category)


@router.get("/{course_id}")
def get_course(course_id: int, identity: CurrentIdentity, engine=Depends(get_engine)):
    return course_service.get_course(engine, course_id)


@router.post("/{course_id}/enroll")
def enroll(course_id: int, identity: CurrentIdentity, engine=Depends(get_engine)):
    course = course_service.enroll(engine, course_id, identity.account_id)
    return {"message": "Enrolled successfully", "course": course}


@router.put("/{course_id}/progress")
def update_progress(
    course_id: int,
    body: ProgressUpdate,
    identity: CurrentIdentity,
    cfg: NexusConfig = Depends(get_config),
    engine=Depends(get_engine),
):
    result = course_service.set_progress(
        engine,
        course_id,
        identity.account_id,
        body.progress,
        completion_xp_bonus=cfg.completion_xp_bonus,
    )
    return {"message": "Progress updated", **result}
