"""Supabase JWT verification (HS256, shared project secret)."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from jose import jwt
from jose.constants import Algorithms
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError
from pydantic import ValidationError

from hr_autopilot.models.auth import TokenPayload, UserInfo

logger = logging.getLogger("supabase_auth")


def validate_token(token: str, secret: str, audience: str) -> dict[str, Any]:
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Missing Supabase JWT configuration",
        )

    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[Algorithms.HS256],
            audience=audience,
            options={"verify_aud": True, "verify_exp": True, "require_exp": True, "require_aud": True},
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is expired",
        ) from e
    except JWTClaimsError as e:
        detail = "Invalid authentication credentials"
        if "audience" in str(e).lower():
            detail = f"Invalid token audience. Expected: {audience}"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        ) from e
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
        ) from e


def user_from_payload(payload: dict[str, Any]) -> UserInfo:
    try:
        claims = TokenPayload.model_validate(payload)
    except ValidationError:
        logger.warning("Token claims have an unexpected shape; ignoring app_metadata")
        claims = TokenPayload(sub=payload.get("sub"), email=payload.get("email"))

    name = claims.user_metadata.get("full_name") or claims.user_metadata.get("name")
    return UserInfo(
        id=claims.sub,
        name=name,
        email=claims.email,
        roles=[str(r) for r in claims.app_metadata.roles],
        clearance_level=claims.app_metadata.clearance_level,
    )
