"""Local persistence: SQLite database and the LocalStore facade."""

from fieldreport.infrastructure.persistence.local_store import LocalStore

__all__ = ["LocalStore"]
