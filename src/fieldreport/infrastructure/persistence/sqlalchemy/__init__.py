"""SQLAlchemy persistence for users and incidents."""

from fieldreport.infrastructure.persistence.sqlalchemy.database import Database
from fieldreport.infrastructure.persistence.sqlalchemy.models import (
    Base,
    IncidentModel,
    UserModel,
)
from fieldreport.infrastructure.persistence.sqlalchemy.repositories import (
    IncidentRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "Database",
    "IncidentModel",
    "IncidentRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
]
