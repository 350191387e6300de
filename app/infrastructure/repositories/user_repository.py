"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.models import UserModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_verification_token(self, token: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.email_verification_token == token)
            .first()
        )
        return self._to_entity(model) if model else None

    def search(self, term: str, *, exclude_id: int | None = None, limit: int = 10) -> Sequence[User]:
        pattern = f"%{term.strip().lower()}%"
        query = self.session.query(UserModel).filter(
            or_(UserModel.name.ilike(pattern), UserModel.email.ilike(pattern))
        )
        if exclude_id is not None:
            query = query.filter(UserModel.id != exclude_id)
        query = query.order_by(UserModel.name.asc()).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}

        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int) -> None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            email_verified=bool(model.email_verified),
            email_verification_token=model.email_verification_token,
            email_verification_expires_at=ensure_app_timezone(
                model.email_verification_expires_at
            ),
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email.strip().lower()
        model.password = user.password
        model.email_verified = user.email_verified
        model.email_verification_token = user.email_verification_token
        model.email_verification_expires_at = ensure_app_naive_datetime(
            user.email_verification_expires_at
        )
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)


__all__ = ["UserRepository"]
