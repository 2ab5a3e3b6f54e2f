"""SQLAlchemy repository implementations."""

from fieldreport.infrastructure.persistence.sqlalchemy.repositories.incident_repository import (  # noqa: E501
    IncidentRepositorySQLAlchemy,
)
from fieldreport.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # noqa: E501
    UserRepositorySQLAlchemy,
)

__all__ = [
    "IncidentRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
