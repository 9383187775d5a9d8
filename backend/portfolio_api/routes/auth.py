"""
Portfolio API - Token Issuance Route
====================================

What:  POST /jwt signs the JSON body into a one-hour bearer token.
How:   The body is taken as-is as the claim set (it must be a JSON object);
       TokenService adds `iat` and `exp` and signs with TOKEN_SECRET.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body

from portfolio_api.schemas.common import ErrorResponse, TokenResponse
from portfolio_api.services.token_service import token_service

router = APIRouter(tags=["Auth"])


@router.post(
    "/jwt",
    response_model=TokenResponse,
    responses={400: {"description": "Body is not a JSON object", "model": ErrorResponse}},
    summary="Issue a bearer token",
)
async def issue_token(claims: Dict[str, Any] = Body(...)) -> TokenResponse:
    return TokenResponse(token=token_service.issue(claims))
