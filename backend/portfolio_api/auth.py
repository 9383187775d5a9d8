"""
Portfolio API - Bearer Token Dependency
=======================================

What:  Guards protected routes with the tokens issued by POST /jwt.
How:   Reads the Authorization header, takes the token after the `Bearer`
       scheme, verifies it with TokenService and stores the decoded claims
       on `request.state.claims`. Every failure raises AuthenticationError,
       which the global handler turns into 401 {"message": "forbidden access"}.

Protected routes:
    POST/PUT/DELETE on projects, skills, backendskills and blogs,
    and GET /contacts. Setting REQUIRE_AUTH=false turns the guard off.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Header, Request

from portfolio_api.config import settings
from portfolio_api.exceptions import AuthenticationError
from portfolio_api.services.token_service import token_service

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise AuthenticationError(reason="missing authorization header")

    parts = raw.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError(reason="malformed authorization header")
    return parts[1]


async def require_token(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> Dict[str, Any]:
    """FastAPI dependency returning the verified claims of the caller."""
    if not settings.require_auth:
        return {}

    try:
        claims = token_service.verify(extract_bearer_token(authorization))
    except AuthenticationError as e:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, e.reason)
        raise

    request.state.claims = claims
    return claims
