"""Users API: profile, directory, conversations, follows."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_external_id, get_current_user
from app.db import get_db
from app.models.user import User
from app.routers.utils.dependencies import get_user_by_external_id
from app.schemas.message import MessageRead
from app.schemas.user import FollowToggleResult, UserRead, UserSync
from app.services.message_service import MessageService
from app.services.user_service import UserService

users_router = APIRouter(prefix="/users", tags=["User"])


@users_router.get("/me", response_model=UserRead)
def get_me(current_user: User = Depends(get_current_user)) -> UserRead:
    """The caller's own user record."""
    return UserRead.model_validate(current_user)


@users_router.post("/sync", response_model=UserRead)
def sync_me(
    data: UserSync,
    external_id: str = Depends(get_current_external_id),
    db: Session = Depends(get_db),
) -> UserRead:
    """Create or refresh the caller's profile after sign-in."""
    user = UserService(db).sync_user(external_id, data)
    return UserRead.model_validate(user)


@users_router.get("", response_model=List[UserRead])
def list_users(
    external_id: str = Depends(get_current_external_id),
    db: Session = Depends(get_db),
) -> List[UserRead]:
    """Everyone except the caller."""
    users = UserService(db).get_users(exclude_external_id=external_id)
    return [UserRead.model_validate(u) for u in users]


@users_router.get("/messages/{external_id}")
def list_messages(
    current_user: User = Depends(get_current_user),
    other_user: User = Depends(get_user_by_external_id),
    db: Session = Depends(get_db),
) -> List[dict]:
    """Conversation between the caller and another user, oldest first."""
    messages = MessageService(db).get_conversation(current_user.id, other_user.id)
    return [MessageRead.model_validate(m).to_wire() for m in messages]


@users_router.post("/toggle-follow/{external_id}", response_model=FollowToggleResult)
def toggle_follow(
    external_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FollowToggleResult:
    """Follow the user, or unfollow if already following."""
    if external_id == current_user.external_id:
        raise HTTPException(status_code=400, detail="You cannot follow yourself.")
    svc = UserService(db)
    target = svc.get_user_by_external_id(external_id)
    if target is None:
        raise HTTPException(status_code=404, detail="User not found.")
    action = svc.toggle_follow(current_user, target)
    return FollowToggleResult(message=f"Successfully {action}.", action=action)
