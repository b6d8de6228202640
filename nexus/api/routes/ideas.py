"""
nexus.api.routes.ideas — Team idea board
=========================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from nexus.api.deps import CurrentIdentity, get_engine
from nexus.database.models import IdeaCategory, IdeaSort
from nexus.services import idea_service

router = APIRouter(prefix="/ideas", tags=["ideas"])


class IdeaCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=5000)
    category: IdeaCategory


class CommentCreate(BaseModel):
    text: str = Field(min_length=1, max_length=2000)


@router.get("")
def list_ideas(
    identity: CurrentIdentity,
    category: IdeaCategory | None = Query(default=None),
    sort: IdeaSort = Query(default=IdeaSort.TRENDING),
    engine=Depends(get_engine),
):
    return idea_service.list_ideas(
        engine, identity.account_id, category=category, sort=sort
    )


@router.post("", status_code=201)
def create_idea(body: IdeaCreate, identity: CurrentIdentity, engine=Depends(get_engine)):
    idea = idea_service.create_idea(
        engine,
        identity.account_id,
        title=body.title,
        description=body.description,
        category=body.category,
    )
    return {"message": "Idea created", "idea": idea}


@router.post("/{idea_id}/vote")
def toggle_vote(idea_id: int, identity: CurrentIdentity, engine=Depends(get_engine)):
    result = idea_service.toggle_vote(engine, idea_id, identity.account_id)
    return {
        "message": "Vote added" if result["hasVoted"] else "Vote removed",
        **result,
    }


@router.post("/{idea_id}/comments")
def add_comment(
    idea_id: int,
    body: CommentCreate,
    identity: CurrentIdentity,
    engine=Depends(get_engine),
):
    comments = idea_service.add_comment(engine, idea_id, identity.account_id, body.text)
    return {"message": "Comment added", "comments": comments}
