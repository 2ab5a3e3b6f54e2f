"""Fixtures for controller tests: real store, fake mirror, real photo files."""

import pytest
import pytest_asyncio

from fieldreport.application.services import IncidentSyncService, SessionService
from fieldreport.infrastructure.system.photo_storage import LocalPhotoStorage
from tests.shared.fixtures.factories import FakeMirror


@pytest.fixture
def mirror() -> FakeMirror:
    return FakeMirror()


@pytest.fixture
def photo_storage(tmp_path) -> LocalPhotoStorage:
    return LocalPhotoStorage(tmp_path / "photos")


@pytest.fixture
def sync_service(store, mirror) -> IncidentSyncService:
    return IncidentSyncService(store, mirror)


@pytest_asyncio.fixture
async def session(store, password_service) -> SessionService:
    """Session signed in as the bootstrap user."""
    service = SessionService(store, password_service)
    result = await service.login("user", "user")
    assert result.success
    return service
