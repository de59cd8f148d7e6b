"""FastAPI dependencies for the current caller."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.auth.identity import IdentityResolver, InvalidTokenError, get_identity_resolver
from app.config import Settings, get_settings
from app.db import get_db
from app.models.user import User
from app.services.user_service import UserService

BEARER_PREFIX = "bearer "


def get_current_external_id(
    authorization: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> str:
    """
    External id of the caller.

    With DISABLE_AUTH the X-User-Id header is trusted as-is (local development
    and tests); otherwise a bearer token from the identity provider is required.
    """
    if settings.disable_auth:
        if not x_user_id:
            raise HTTPException(status_code=401, detail="Unauthorized - you must be logged in")
        return x_user_id
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise HTTPException(status_code=401, detail="Unauthorized - you must be logged in")
    token = authorization[len(BEARER_PREFIX):].strip()
    try:
        return resolver.resolve_token(token)
    except InvalidTokenError as e:
        raise HTTPException(status_code=401, detail="Invalid or expired token") from e


def get_current_user(
    external_id: str = Depends(get_current_external_id),
    db: Session = Depends(get_db),
) -> User:
    """The caller's user record; 404 until the client has synced its profile."""
    user = UserService(db).get_user_by_external_id(external_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Current user not found")
    return user


def is_admin(external_id: str, settings: Settings) -> bool:
    return bool(settings.admin_external_id) and external_id == settings.admin_external_id
