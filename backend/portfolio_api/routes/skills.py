"""
Portfolio API - Skill Route Handlers
====================================

What:  Frontend skills (`skills`) and backend skills (`backendSkills`).

Routes:
    GET    /skills            list
    POST   /skills            insert one                  [bearer]
    DELETE /skills/{id}       delete one                  [bearer]
    GET    /backendskills     list
    POST   /backendskills     bulk insert of a JSON array [bearer]
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from portfolio_api.auth import require_token
from portfolio_api.database import Database, get_database
from portfolio_api.schemas.common import (
    DeleteResponse,
    ErrorResponse,
    InsertManyResponse,
    InsertOneResponse,
)
from portfolio_api.schemas.portfolio import BackendSkillCreate, SkillCreate
from portfolio_api.services.document_service import backend_skill_service, skill_service

router = APIRouter(tags=["Skills"])


@router.get("/skills", summary="List frontend skills")
async def list_skills(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return await skill_service.list_all(db)


@router.post(
    "/skills",
    response_model=InsertOneResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Add a frontend skill",
)
async def create_skill(
    skill: SkillCreate,
    db: Database = Depends(get_database),
    _claims: dict = Depends(require_token),
) -> InsertOneResponse:
    return await skill_service.insert_one(db, skill.model_dump(exclude_unset=True))


@router.delete(
    "/skills/{skill_id}",
    response_model=DeleteResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Delete a frontend skill",
)
async def delete_skill(
    skill_id: str,
    db: Database = Depends(get_database),
    _claims: dict = Depends(require_token),
) -> DeleteResponse:
    return await skill_service.delete_by_id(db, skill_id)


@router.get("/backendskills", summary="List backend skills")
async def list_backend_skills(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return await backend_skill_service.list_all(db)


@router.post(
    "/backendskills",
    response_model=InsertManyResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Add several backend skills at once",
)
async def create_backend_skills(
    skills: List[BackendSkillCreate],
    db: Database = Depends(get_database),
    _claims: dict = Depends(require_token),
) -> InsertManyResponse:
    """Body must be a non-empty JSON array; ids come back keyed by position."""
    return await backend_skill_service.insert_many(
        db, [skill.model_dump(exclude_unset=True) for skill in skills]
    )
