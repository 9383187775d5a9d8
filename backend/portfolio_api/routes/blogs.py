"""
Portfolio API - Blog Route Handlers
===================================

Routes:
    GET  /blogs        list
    POST /blogs        insert one  [bearer]
    GET  /blogs/{id}   fetch one
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from portfolio_api.auth import require_token
from portfolio_api.database import Database, get_database
from portfolio_api.schemas.common import ErrorResponse, InsertOneResponse
from portfolio_api.schemas.portfolio import BlogCreate
from portfolio_api.services.document_service import blog_service

router = APIRouter(prefix="/blogs", tags=["Blogs"])


@router.get("", summary="List blog posts")
async def list_blogs(db: Database = Depends(get_database)) -> List[Dict[str, Any]]:
    return await blog_service.list_all(db)


@router.post(
    "",
    response_model=InsertOneResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Publish a blog post",
)
async def create_blog(
    blog: BlogCreate,
    db: Database = Depends(get_database),
    _claims: dict = Depends(require_token),
) -> InsertOneResponse:
    return await blog_service.insert_one(db, blog.model_dump(exclude_unset=True))


@router.get(
    "/{blog_id}",
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Unknown id", "model": ErrorResponse},
    },
    summary="Get a single blog post by ID",
)
async def get_blog(blog_id: str, db: Database = Depends(get_database)) -> Dict[str, Any]:
    return await blog_service.get_by_id(db, blog_id)
