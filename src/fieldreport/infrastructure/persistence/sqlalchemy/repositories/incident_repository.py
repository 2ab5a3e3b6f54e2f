"""SQLAlchemy implementation of IncidentRepository."""

import logging
from typing import Optional

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldreport.domain.incident import Incident, IncidentRepository, IncidentStatus
from fieldreport.domain.shared.time import ensure_tz_aware
from fieldreport.infrastructure.persistence.sqlalchemy.models import IncidentModel

logger = logging.getLogger(__name__)


class IncidentRepositorySQLAlchemy(IncidentRepository):
    """SQLAlchemy implementation of the IncidentRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, incident_id: int) -> Optional[Incident]:
        model = await self._find_model_by_id(incident_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_all(self) -> list[Incident]:
        return await self._fetch(select(IncidentModel))

    async def find_by_user(self, user_id: int) -> list[Incident]:
        stmt = select(IncidentModel).where(IncidentModel.user_id == user_id)
        return await self._fetch(stmt)

    async def find_by_status(self, status: IncidentStatus) -> list[Incident]:
        stmt = select(IncidentModel).where(IncidentModel.status == status.value)
        return await self._fetch(stmt)

    async def search(self, query: str) -> list[Incident]:
        needle = query.lower()
        stmt = select(IncidentModel).where(
            or_(
                func.lower(IncidentModel.title).contains(needle, autoescape=True),
                func.lower(IncidentModel.description).contains(
                    needle,
                    autoescape=True,
                ),
            ),
        )
        return await self._fetch(stmt)

    async def find_unmirrored(self) -> list[Incident]:
        stmt = (
            select(IncidentModel)
            .where(IncidentModel.mirrored.is_(False))
            .order_by(IncidentModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def save(self, incident: Incident) -> int:
        if incident.is_persisted:
            existing = await self._find_model_by_id(incident.id)
            if existing is None:
                logger.debug("Update skipped, no incident with id %s", incident.id)
                return 0
            self._update_model(existing, incident)
            await self._session.flush()
            logger.debug("Updated incident: %s", incident.id)
            return 1

        model = self._map_to_model(incident)
        self._session.add(model)
        await self._session.flush()
        incident.assign_id(model.id)
        logger.info("Created incident: %s (user: %s)", model.id, incident.user_id)
        return 1

    async def delete(self, incident_id: int) -> int:
        stmt = delete(IncidentModel).where(IncidentModel.id == incident_id)
        result = await self._session.execute(stmt)
        deleted = result.rowcount or 0
        if deleted:
            logger.info("Deleted incident: %s", incident_id)
        return deleted

    async def count(
        self,
        status: Optional[IncidentStatus] = None,
        mirrored: Optional[bool] = None,
    ) -> int:
        stmt = select(func.count()).select_from(IncidentModel)
        if status is not None:
            stmt = stmt.where(IncidentModel.status == status.value)
        if mirrored is not None:
            stmt = stmt.where(IncidentModel.mirrored.is_(mirrored))
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def _fetch(self, stmt: Select) -> list[Incident]:
        # Newest first; id breaks ties between rows stamped in the same instant
        stmt = stmt.order_by(IncidentModel.created_at.desc(), IncidentModel.id.desc())
        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def _find_model_by_id(self, incident_id: int) -> Optional[IncidentModel]:
        stmt = select(IncidentModel).where(IncidentModel.id == incident_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: IncidentModel) -> Incident:
        return Incident.reconstitute(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            category=model.category,
            status=model.status,
            priority=model.priority,
            photo_path=model.photo_path,
            latitude=model.latitude,
            longitude=model.longitude,
            location_name=model.location_name,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=(
                ensure_tz_aware(model.updated_at) if model.updated_at else None
            ),
            mirrored=model.mirrored,
            remote_id=model.remote_id,
        )

    def _map_to_model(self, incident: Incident) -> IncidentModel:
        model = IncidentModel(created_at=incident.created_at)
        self._update_model(model, incident)
        return model

    def _update_model(self, model: IncidentModel, incident: Incident):
        # Note: id, user_id and created_at are fixed after insert
        if model.user_id is None:
            model.user_id = incident.user_id
        model.title = incident.title
        model.description = incident.description
        model.category = incident.category
        model.status = incident.status.value
        model.priority = incident.priority.value
        model.photo_path = incident.photo_path
        model.latitude = incident.latitude
        model.longitude = incident.longitude
        model.location_name = incident.location_name
        model.updated_at = incident.updated_at
        model.mirrored = incident.mirrored
        model.remote_id = incident.remote_id
