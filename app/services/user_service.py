"""User lookups, profile sync and follow bookkeeping."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session

from app.models.user import User
from app.schemas.user import UserSync


class UserService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_user(self, user_id: UUID) -> Optional[User]:
        """Fetch a user by internal id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_external_id(self, external_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.external_id == external_id).first()

    def get_users_query(self, exclude_external_id: Optional[str] = None) -> Query[User]:
        """Query for all users, optionally excluding one (the caller)."""
        query = self.db.query(User).order_by(User.full_name)
        if exclude_external_id is not None:
            query = query.filter(User.external_id != exclude_external_id)
        return query

    def get_users(self, exclude_external_id: Optional[str] = None) -> List[User]:
        return self.get_users_query(exclude_external_id).all()

    def sync_user(self, external_id: str, data: UserSync) -> User:
        """Create the user on first sign-in, otherwise refresh the profile fields."""
        user = self.get_user_by_external_id(external_id)
        if user is None:
            user = User(external_id=external_id, **data.model_dump())
            self.db.add(user)
        else:
            user.full_name = data.full_name
            user.image_url = data.image_url
        self.db.commit()
        self.db.refresh(user)
        return user

    def toggle_follow(self, follower: User, target: User) -> str:
        """
        Follow `target` if not already following, otherwise unfollow.

        Returns:
            str: "followed" or "unfollowed".

        Raises:
            ValueError: if a user tries to follow themselves.
        """
        if follower.id == target.id:
            raise ValueError("You cannot follow yourself.")
        if target in follower.following:
            follower.following.remove(target)
            action = "unfollowed"
        else:
            follower.following.append(target)
            action = "followed"
        self.db.commit()
        return action

    def get_following_ids(self, user: User) -> List[UUID]:
        return [u.id for u in user.following]
