"""
Portfolio API - Contact Route Handlers
======================================

What:  The portfolio's contact form inbox.

Routes:
    POST /contacts   store a visitor message (public)
    GET  /contacts   read the inbox          [bearer]
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from portfolio_api.auth import require_token
from portfolio_api.database import Database, get_database
from portfolio_api.schemas.common import ErrorResponse, InsertOneResponse
from portfolio_api.schemas.portfolio import ContactCreate
from portfolio_api.services.document_service import contact_service

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.post(
    "",
    response_model=InsertOneResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Submit a contact message",
)
async def create_contact(
    contact: ContactCreate,
    db: Database = Depends(get_database),
) -> InsertOneResponse:
    return await contact_service.insert_one(db, contact.model_dump(exclude_unset=True))


@router.get(
    "",
    responses={401: {"model": ErrorResponse}},
    summary="List contact messages",
)
async def list_contacts(
    db: Database = Depends(get_database),
    _claims: dict = Depends(require_token),
) -> List[Dict[str, Any]]:
    return await contact_service.list_all(db)
