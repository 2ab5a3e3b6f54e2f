"""Local incident store backed by SQLite.

The store is the single owner of durable state. Every public operation
runs in its own session and never raises for storage problems: errors are
logged and returned as a failed ``StoreResult`` whose value is the empty
default, so "nothing found" and "store failed" stay distinguishable.
Only ``initialize`` propagates, because the app cannot run without storage.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Optional, TypeVar, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldreport.application.dtos import IncidentStatistics, StoreResult
from fieldreport.domain.incident import ALL_STATUSES, Incident, IncidentStatus
from fieldreport.domain.shared import (
    DomainException,
    ErrorCode,
    StorageError,
    ValidationError,
    utc_now,
)
from fieldreport.domain.user import User, UsernameAlreadyExistsError
from fieldreport.infrastructure.persistence.sqlalchemy import (
    Database,
    IncidentRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from fieldreport.infrastructure.security import PasswordHashingService

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STORAGE_ERRORS = (SQLAlchemyError, OSError)


class LocalStore:
    """CRUD access to users and incidents.

    No business validation happens here; screen controllers validate
    input before calling the store.
    """

    def __init__(  # NOQA: PLR0913
        self,
        database: Database,
        password_service: PasswordHashingService,
        bootstrap_username: str = "user",
        bootstrap_password: str = "user",
        bootstrap_full_name: Optional[str] = "Default user",
        bootstrap_email: Optional[str] = "user@fieldreport.local",
    ):
        self._database = database
        self._password_service = password_service
        self._bootstrap_username = bootstrap_username
        self._bootstrap_password = bootstrap_password
        self._bootstrap_full_name = bootstrap_full_name
        self._bootstrap_email = bootstrap_email
        self._initialized = False

    @property
    def database_url(self) -> str:
        return self._database.url

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def initialize(self) -> None:
        """Create tables and the bootstrap user. No-op when already done.

        Raises
        ------
        StorageError
            If the database cannot be opened or the schema cannot be created
        """
        if self._initialized:
            return

        try:
            await self._database.create_tables()
        except _STORAGE_ERRORS as e:
            logger.exception("Could not initialize database at %s", self._database.url)
            msg = f"Could not initialize database: {e}"
            raise StorageError(msg, details={"url": self._database.url}) from e

        await self._ensure_bootstrap_user()
        self._initialized = True
        logger.info("Local store ready (%s)", self._database.url)

    async def close(self) -> None:
        await self._database.dispose()
        self._initialized = False

    async def _ensure_bootstrap_user(self) -> None:
        # Insert-if-missing; an existing account is never overwritten
        try:
            async with self._database.session() as session:
                repo = UserRepositorySQLAlchemy(session)
                if await repo.find_by_username(self._bootstrap_username) is not None:
                    return
                user = User.create(
                    username=self._bootstrap_username,
                    password_hash=self._password_service.hash(self._bootstrap_password),
                    full_name=self._bootstrap_full_name,
                    email=self._bootstrap_email,
                )
                await repo.save(user)
            logger.info("Bootstrap user created: %s", self._bootstrap_username)
        except (*_STORAGE_ERRORS, DomainException):
            logger.exception("Could not create bootstrap user")

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    async def get_user_by_username(self, username: str) -> StoreResult[Optional[User]]:
        async def work(session: AsyncSession) -> Optional[User]:
            return await UserRepositorySQLAlchemy(session).find_by_username(username)

        return await self._run("get_user_by_username", work, None)

    async def save_user(self, user: User) -> StoreResult[int]:
        """Insert a new user or update an existing one by id."""

        async def work(session: AsyncSession) -> int:
            return await UserRepositorySQLAlchemy(session).save(user)

        was_new = not user.is_persisted
        result = await self._run("save_user", work, 0)
        if was_new and not result.ok:
            user.assign_id(None)
        return result

    async def validate_user(
        self,
        username: str,
        password: str,
    ) -> StoreResult[Optional[User]]:
        """Return the user when username and password both match."""

        async def work(session: AsyncSession) -> Optional[User]:
            user = await UserRepositorySQLAlchemy(session).find_by_username(username)
            if user is None:
                return None
            if not self._password_service.verify(password, user.password_hash):
                return None
            return user

        return await self._run("validate_user", work, None)

    # -------------------------------------------------------------------------
    # Incidents
    # -------------------------------------------------------------------------

    async def get_all_incidents(self) -> StoreResult[list[Incident]]:
        async def work(session: AsyncSession) -> list[Incident]:
            return await IncidentRepositorySQLAlchemy(session).find_all()

        return await self._run("get_all_incidents", work, [])

    async def get_incidents_by_user(self, user_id: int) -> StoreResult[list[Incident]]:
        async def work(session: AsyncSession) -> list[Incident]:
            return await IncidentRepositorySQLAlchemy(session).find_by_user(user_id)

        return await self._run("get_incidents_by_user", work, [])

    async def get_incident_by_id(self, incident_id: int) -> StoreResult[Optional[Incident]]:
        async def work(session: AsyncSession) -> Optional[Incident]:
            return await IncidentRepositorySQLAlchemy(session).find_by_id(incident_id)

        return await self._run("get_incident_by_id", work, None)

    async def save_incident(self, incident: Incident) -> StoreResult[int]:
        """Insert (stamping created_at) or update (stamping updated_at).

        The update stamp is applied on every update, including writes that
        only persist the mirror flag after a sync.
        """
        was_new = not incident.is_persisted
        if was_new:
            incident.stamp_created(utc_now())
        else:
            incident.stamp_updated(utc_now())

        async def work(session: AsyncSession) -> int:
            return await IncidentRepositorySQLAlchemy(session).save(incident)

        result = await self._run("save_incident", work, 0)
        if was_new and not result.ok:
            incident.assign_id(None)
        return result

    async def delete_incident(self, incident_id: int) -> StoreResult[int]:
        async def work(session: AsyncSession) -> int:
            return await IncidentRepositorySQLAlchemy(session).delete(incident_id)

        return await self._run("delete_incident", work, 0)

    async def search_incidents(self, query: Optional[str]) -> StoreResult[list[Incident]]:
        """Case-insensitive search over title or description.

        A blank query returns every incident.
        """
        if not query or not query.strip():
            return await self.get_all_incidents()

        async def work(session: AsyncSession) -> list[Incident]:
            return await IncidentRepositorySQLAlchemy(session).search(query)

        return await self._run("search_incidents", work, [])

    async def get_incidents_by_status(
        self,
        status: Union[str, IncidentStatus, None],
    ) -> StoreResult[list[Incident]]:
        """Incidents in exactly ``status``; ``ALL_STATUSES`` returns all."""
        if status is None or str(status).strip() in ("", ALL_STATUSES):
            return await self.get_all_incidents()

        try:
            parsed = IncidentStatus.from_string(status)
        except ValidationError:
            logger.debug("Unknown status filter %r, nothing matches", status)
            return StoreResult.success([])

        async def work(session: AsyncSession) -> list[Incident]:
            return await IncidentRepositorySQLAlchemy(session).find_by_status(parsed)

        return await self._run("get_incidents_by_status", work, [])

    async def get_unsynced_incidents(self) -> StoreResult[list[Incident]]:
        async def work(session: AsyncSession) -> list[Incident]:
            return await IncidentRepositorySQLAlchemy(session).find_unmirrored()

        return await self._run("get_unsynced_incidents", work, [])

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    async def count_incidents(self) -> StoreResult[int]:
        return await self._count("count_incidents")

    async def count_pending(self) -> StoreResult[int]:
        return await self._count("count_pending", status=IncidentStatus.PENDING)

    async def count_resolved(self) -> StoreResult[int]:
        return await self._count("count_resolved", status=IncidentStatus.RESOLVED)

    async def count_mirrored(self) -> StoreResult[int]:
        return await self._count("count_mirrored", mirrored=True)

    async def get_statistics(self) -> StoreResult[IncidentStatistics]:
        async def work(session: AsyncSession) -> IncidentStatistics:
            repo = IncidentRepositorySQLAlchemy(session)
            return IncidentStatistics(
                total=await repo.count(),
                pending=await repo.count(status=IncidentStatus.PENDING),
                resolved=await repo.count(status=IncidentStatus.RESOLVED),
                mirrored=await repo.count(mirrored=True),
            )

        return await self._run("get_statistics", work, IncidentStatistics())

    async def _count(
        self,
        operation: str,
        status: Optional[IncidentStatus] = None,
        mirrored: Optional[bool] = None,
    ) -> StoreResult[int]:
        async def work(session: AsyncSession) -> int:
            return await IncidentRepositorySQLAlchemy(session).count(
                status=status,
                mirrored=mirrored,
            )

        return await self._run(operation, work, 0)

    # -------------------------------------------------------------------------
    # Error boundary
    # -------------------------------------------------------------------------

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
        default: T,
    ) -> StoreResult[T]:
        try:
            async with self._database.session() as session:
                value = await work(session)
        except UsernameAlreadyExistsError as e:
            logger.warning("%s rejected: %s", operation, e)
            return StoreResult.failure(str(e), default, code=ErrorCode.USERNAME_TAKEN)
        except DomainException as e:
            logger.exception("%s failed on stored data", operation)
            return StoreResult.failure(str(e), default, code=e.code)
        except _STORAGE_ERRORS as e:
            logger.exception("Storage error during %s", operation)
            return StoreResult.failure(f"{operation} failed: {e}", default)
        return StoreResult.success(value)
