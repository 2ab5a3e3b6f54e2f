"""Root pytest configuration.

Test Structure:
    tests/
    ├── fieldreport/
    │   ├── unit/            # Fast, isolated tests (mocks, no database)
    │   └── integration/     # Tests against a temporary SQLite file
    ├── fieldreport_config/  # Settings tests
    └── shared/              # Shared fixtures and factories
"""

import pytest
import pytest_asyncio

from fieldreport.infrastructure.persistence import LocalStore
from fieldreport.infrastructure.persistence.sqlalchemy import Database
from fieldreport.infrastructure.security import PasswordHashingService
from fieldreport_config import clear_settings_cache

# Minimum bcrypt work factor keeps hashing fast in tests
TEST_HASH_ROUNDS = 4


@pytest.fixture(autouse=True)
def fresh_settings():
    """Never leak cached settings between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def password_service() -> PasswordHashingService:
    return PasswordHashingService(rounds=TEST_HASH_ROUNDS)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'fieldreport.db'}"


@pytest_asyncio.fixture
async def store(database_url, password_service):
    """An initialized LocalStore on a fresh SQLite file (bootstrap user included)."""
    local_store = LocalStore(Database(database_url), password_service)
    await local_store.initialize()
    yield local_store
    await local_store.close()
