"""
Portfolio API - Token Service
=============================

What:  Issues and verifies the HS256 JWTs handed out by POST /jwt.
How:   PyJWT signs the client-supplied claims with TOKEN_SECRET and adds
       `iat` plus an `exp` TOKEN_EXPIRE_MINUTES later. Verification checks
       signature and expiry only (VERIFY_OPTIONS); there is no audience,
       issuer, refresh or revocation. Registered claims PyJWT cannot encode
       (a non-string `iss`) are reported as invalid input.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from portfolio_api.config import settings
from portfolio_api.exceptions import AuthenticationError, InvalidInputError

logger = logging.getLogger(__name__)

# Only the signature and `exp` are checked. Claims are whatever the client
# asked to have signed, so `aud`, `iss`, `sub` and `jti` carry no meaning here.
VERIFY_OPTIONS = {
    "verify_aud": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
}


class TokenService:

    def issue(self, claims: Dict[str, Any], now: Optional[datetime] = None) -> str:
        """
        Sign `claims` into a token valid for TOKEN_EXPIRE_MINUTES.

        Client-supplied `iat`/`exp` values are overwritten.
        """
        if not isinstance(claims, dict):
            raise InvalidInputError(message="Token claims must be a JSON object", field="body")

        issued_at = now or datetime.now(timezone.utc)
        payload = dict(claims)
        payload["iat"] = issued_at
        payload["exp"] = issued_at + timedelta(minutes=settings.token_expire_minutes)

        try:
            token = jwt.encode(payload, settings.token_secret, algorithm=settings.token_algorithm)
        except TypeError as e:
            # PyJWT type-checks registered claims such as `iss` while encoding
            raise InvalidInputError(message=f"Invalid token claims: {e}", field="body") from e

        # Never log the token itself
        logger.info("Issued token with claims %s", sorted(claims))
        return token

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Decode `token` and return its claims.

        Raises:
            AuthenticationError: bad signature, malformed token, or expired
        """
        try:
            return jwt.decode(
                token,
                settings.token_secret,
                algorithms=[settings.token_algorithm],
                options=VERIFY_OPTIONS,
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError(reason="expired token")
        except jwt.InvalidTokenError as e:
            raise AuthenticationError(reason="invalid token", context={"error_type": type(e).__name__})


token_service = TokenService()
