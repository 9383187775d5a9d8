"""
Portfolio API - Project Route Handlers
======================================

What:  CRUD over the `projects` collection.
How:   Thin handlers: validate the body through the schema, delegate to
       project_service, return the service result. Errors are raised as
       PortfolioError subclasses and rendered by the global handlers.

Routes:
    GET    /projects          list (404 when the collection is empty)
    POST   /projects          insert one                     [bearer]
    GET    /projects/{id}     fetch one
    PUT    /projects/{id}     $set merge of the sent fields  [bearer]
    DELETE /projects/{id}     delete one                     [bearer]
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from portfolio_api.auth import require_token
from portfolio_api.database import Database, get_database
from portfolio_api.exceptions import NotFoundError
from portfolio_api.schemas.common import (
    DeleteResponse,
    ErrorResponse,
    InsertOneResponse,
    UpdateResponse,
)
from portfolio_api.schemas.portfolio import ProjectCreate, ProjectUpdate
from portfolio_api.services.document_service import project_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get(
    "",
    responses={
        404: {"description": "No projects stored yet", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="List all projects",
)
async def list_projects(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    """
    Returns every project document.

    An empty collection is reported as 404 so the portfolio frontend can
    show its "no projects" state.
    """
    projects = await project_service.list_all(db)
    if not projects:
        raise NotFoundError(resource="project", message="No projects found")
    return projects


@router.post(
    "",
    response_model=InsertOneResponse,
    responses={401: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
    summary="Create a project",
)
async def create_project(
    project: ProjectCreate,
    db: Database = Depends(get_database),
    _claims: dict = Depends(require_token),
) -> InsertOneResponse:
    return await project_service.insert_one(db, project.model_dump(exclude_unset=True))


@router.get(
    "/{project_id}",
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Unknown id", "model": ErrorResponse},
    },
    summary="Get a single project by ID",
)
async def get_project(project_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    return await project_service.get_by_id(db, project_id)


@router.put(
    "/{project_id}",
    response_model=UpdateResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Update fields of a project",
)
async def update_project(
    project_id: str,
    changes: ProjectUpdate,
    db: Database = Depends(get_database),
    _claims: dict = Depends(require_token),
) -> UpdateResponse:
    """
    Merges the sent fields into the stored project.

    Responds `{"success": false}` (HTTP 200) when the id matches nothing or
    the values are unchanged; no document is ever created here.
    """
    return await project_service.update_by_id(
        db, project_id, changes.model_dump(exclude_unset=True)
    )


@router.delete(
    "/{project_id}",
    response_model=DeleteResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Delete a project",
)
async def delete_project(
    project_id: str,
    db: Database = Depends(get_database),
    _claims: dict = Depends(require_token),
) -> DeleteResponse:
    return await project_service.delete_by_id(db, project_id)
