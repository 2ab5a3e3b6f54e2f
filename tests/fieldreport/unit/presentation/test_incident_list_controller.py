"""Tests for the incident list screen."""

import pytest

from fieldreport.domain.incident import ALL_STATUSES
from fieldreport.presentation.controllers import STATUS_FILTERS, IncidentListController
from tests.shared.fixtures.factories import make_incident


@pytest.fixture
def controller(store, photo_storage) -> IncidentListController:
    return IncidentListController(store, photo_storage)


async def _seed(store) -> None:
    await store.save_incident(make_incident(title="Light outage", category="Maintenance"))
    server = make_incident(
        title="Server down",
        description="Mail server is not answering since 9am",
        category="IT Support",
    )
    server.change_status("InProgress")
    await store.save_incident(server)
    door = make_incident(
        title="Broken door",
        description="Back door lock is broken",
        category="Security",
    )
    door.change_status("Resolved")
    await store.save_incident(door)


class TestIncidentListFilters:
    """Test status filter and search."""

    def test_filter_options(self, controller):
        assert controller.status_filters == STATUS_FILTERS
        assert controller.status_filters[0] == ALL_STATUSES
        assert controller.selected_status == ALL_STATUSES

    @pytest.mark.asyncio
    async def test_load_all(self, controller, store):
        await _seed(store)

        await controller.load()

        assert controller.total_count == 3
        assert controller.is_empty is False

    @pytest.mark.asyncio
    async def test_status_filter(self, controller, store):
        await _seed(store)
        await controller.load()

        controller.set_status_filter("Resolved")

        assert [i.title for i in controller.incidents] == ["Broken door"]

    @pytest.mark.asyncio
    async def test_search_matches_category(self, controller, store):
        await _seed(store)
        await controller.load()

        controller.set_search_text("it supp")

        assert [i.title for i in controller.incidents] == ["Server down"]

    @pytest.mark.asyncio
    async def test_search_and_status_combine(self, controller, store):
        await _seed(store)
        await controller.load()

        controller.set_status_filter("Pending")
        controller.set_search_text("door")

        assert controller.is_empty is True
        assert controller.empty_message == "No results for 'door'"

    @pytest.mark.asyncio
    async def test_empty_message_for_status(self, controller, store):
        await store.save_incident(make_incident())
        await controller.load()

        controller.set_status_filter("Resolved")

        assert controller.empty_message == "No incidents with status 'Resolved'"

    @pytest.mark.asyncio
    async def test_empty_message_without_incidents(self, controller):
        await controller.load()

        assert controller.is_empty is True
        assert controller.empty_message == "No incidents yet. Create your first incident."

    @pytest.mark.asyncio
    async def test_clear_search(self, controller, store):
        await _seed(store)
        await controller.load()
        controller.set_search_text("door")

        controller.clear_search()

        assert controller.total_count == 3


class TestIncidentListDelete:
    """Test deleting from the list."""

    @pytest.mark.asyncio
    async def test_delete_reloads(self, controller, store):
        await _seed(store)
        await controller.load()
        victim = controller.incidents[0]

        assert await controller.delete(victim) is True

        assert controller.total_count == 2
        assert victim.id not in [i.id for i in controller.incidents]

    @pytest.mark.asyncio
    async def test_delete_missing(self, controller):
        ghost = make_incident()
        ghost.assign_id(999)

        assert await controller.delete(ghost) is False
        assert controller.error_message == "Could not delete the incident"

    @pytest.mark.asyncio
    async def test_delete_removes_photo(self, controller, store, photo_storage, tmp_path):
        source = tmp_path / "capture.jpg"
        source.write_bytes(b"\xff\xd8jpeg")
        stored = photo_storage.save_photo(source)
        incident = make_incident(photo_path=stored)
        await store.save_incident(incident)
        await controller.load()

        assert await controller.delete(incident) is True

        assert photo_storage.photo_exists(stored) is False
        assert (await store.get_incident_by_id(incident.id)).value is None
