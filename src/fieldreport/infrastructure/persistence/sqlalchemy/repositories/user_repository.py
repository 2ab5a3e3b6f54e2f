"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldreport.domain.shared.time import ensure_tz_aware
from fieldreport.domain.user import User, UserRepository, UsernameAlreadyExistsError
from fieldreport.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: int) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_by_username(self, username: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def save(self, user: User) -> int:
        try:
            if user.is_persisted:
                existing = await self._find_model_by_id(user.id)
                if existing is None:
                    logger.debug("Update skipped, no user with id %s", user.id)
                    return 0
                self._update_model(existing, user)
                await self._session.flush()
                logger.debug("Updated user: %s", user.id)
                return 1

            model = self._map_to_model(user)
            self._session.add(model)
            await self._session.flush()
            user.assign_id(model.id)
            logger.info("Created user: %s (username: %s)", model.id, user.username)
            return 1
        except IntegrityError as e:
            # Handle unique constraint violation on username
            if "UNIQUE constraint failed" in str(e) or "unique" in str(e).lower():
                raise UsernameAlreadyExistsError(user.username) from e
            raise

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def _find_model_by_id(self, user_id: int) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            username=model.username,
            password_hash=model.password_hash,
            full_name=model.full_name,
            email=model.email,
            created_at=ensure_tz_aware(model.created_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            username=user.username,
            password_hash=user.password_hash,
            full_name=user.full_name,
            email=user.email,
            created_at=user.created_at,
        )

    def _update_model(self, model: UserModel, user: User):
        # Note: id and created_at never change
        model.username = user.username
        model.password_hash = user.password_hash
        model.full_name = user.full_name
        model.email = user.email
