"""SQLAlchemy models for persistence.

Importing this package registers every table with ``Base.metadata``.
"""

from fieldreport.infrastructure.persistence.sqlalchemy.models.base import Base
from fieldreport.infrastructure.persistence.sqlalchemy.models.incident_model import (
    IncidentModel,
)
from fieldreport.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "Base",
    "IncidentModel",
    "UserModel",
]
