"""
Integration tests for LocalStore against a temporary SQLite file.

Covers:
1. Insert/read round trips and id assignment
2. Unsynced selection, search and status filters
3. Counters and statistics
4. User bootstrap, registration conflicts and credential checks
5. Failure reporting through StoreResult
"""

import pytest

from fieldreport.domain.incident import ALL_STATUSES, IncidentStatus
from fieldreport.domain.shared import ErrorCode, StorageError
from fieldreport.domain.user import User
from fieldreport.infrastructure.persistence import LocalStore
from fieldreport.infrastructure.persistence.sqlalchemy import Database
from tests.shared.fixtures.factories import make_incident

pytestmark = pytest.mark.integration


# ============================================================================
# Incidents
# ============================================================================


class TestIncidentRoundTrip:
    """Test saving and reading incidents."""

    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_round_trips(self, store):
        incident = make_incident(
            user_id=4,
            category="Security",
            priority="High",
            photo_path="/tmp/photos/incident_20240101_120000.jpg",
            latitude=40.4168,
            longitude=-3.7038,
            location_name="Puerta del Sol",
        )

        result = await store.save_incident(incident)

        assert result.ok is True
        assert result.value == 1
        assert incident.id is not None

        loaded = (await store.get_incident_by_id(incident.id)).value
        assert loaded.user_id == 4
        assert loaded.title == incident.title
        assert loaded.description == incident.description
        assert loaded.category == "Security"
        assert loaded.priority.value == "High"
        assert loaded.status == IncidentStatus.PENDING
        assert loaded.photo_path == incident.photo_path
        assert loaded.latitude == pytest.approx(40.4168)
        assert loaded.longitude == pytest.approx(-3.7038)
        assert loaded.location_name == "Puerta del Sol"
        assert loaded.mirrored is False
        assert loaded.remote_id is None
        assert loaded.updated_at is None

    @pytest.mark.asyncio
    async def test_update_stamps_updated_at(self, store):
        incident = make_incident()
        await store.save_incident(incident)

        incident.change_status("Resolved")
        result = await store.save_incident(incident)

        assert result.value == 1
        loaded = (await store.get_incident_by_id(incident.id)).value
        assert loaded.status == IncidentStatus.RESOLVED
        assert loaded.updated_at is not None

    @pytest.mark.asyncio
    async def test_mirror_flag_round_trips(self, store):
        incident = make_incident()
        await store.save_incident(incident)

        incident.mark_mirrored(101)
        await store.save_incident(incident)

        loaded = (await store.get_incident_by_id(incident.id)).value
        assert loaded.mirrored is True
        assert loaded.remote_id == 101

    @pytest.mark.asyncio
    async def test_update_of_missing_row_affects_nothing(self, store):
        ghost = make_incident()
        ghost.assign_id(999)

        result = await store.save_incident(ghost)

        assert result.ok is True
        assert result.value == 0

    @pytest.mark.asyncio
    async def test_get_missing_incident(self, store):
        result = await store.get_incident_by_id(12345)

        assert result.ok is True
        assert result.value is None

    @pytest.mark.asyncio
    async def test_delete(self, store):
        incident = make_incident()
        await store.save_incident(incident)

        assert (await store.delete_incident(incident.id)).value == 1
        assert (await store.get_incident_by_id(incident.id)).value is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_zero(self, store):
        result = await store.delete_incident(4242)

        assert result.ok is True
        assert result.value == 0

    @pytest.mark.asyncio
    async def test_all_incidents_newest_first(self, store):
        first = make_incident(title="First incident")
        second = make_incident(title="Second incident")
        await store.save_incident(first)
        await store.save_incident(second)

        titles = [i.title for i in (await store.get_all_incidents()).value]

        assert titles == ["Second incident", "First incident"]

    @pytest.mark.asyncio
    async def test_incidents_by_user(self, store):
        await store.save_incident(make_incident(user_id=1))
        await store.save_incident(make_incident(user_id=2))

        result = await store.get_incidents_by_user(2)

        assert [i.user_id for i in result.value] == [2]


class TestIncidentQueries:
    """Test unsynced selection, search and status filter."""

    @pytest.mark.asyncio
    async def test_unsynced_is_exactly_the_unmirrored_subset(self, store):
        incidents = [make_incident(title=f"Incident {n}") for n in range(5)]
        for n, incident in enumerate(incidents):
            if n % 2 == 0:
                incident.mark_mirrored(500 + n)
            await store.save_incident(incident)

        all_rows = (await store.get_all_incidents()).value
        unsynced = (await store.get_unsynced_incidents()).value

        expected = {i.id for i in all_rows if not i.mirrored}
        assert {i.id for i in unsynced} == expected
        assert len(unsynced) == 2

    @pytest.mark.asyncio
    async def test_empty_search_equals_all(self, store):
        for title in ("Light outage", "Server down", "Broken door"):
            await store.save_incident(make_incident(title=title))

        all_ids = [i.id for i in (await store.get_all_incidents()).value]

        assert [i.id for i in (await store.search_incidents("")).value] == all_ids
        assert [i.id for i in (await store.search_incidents("   ")).value] == all_ids

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, store):
        await store.save_incident(make_incident(title="Light outage"))
        await store.save_incident(
            make_incident(title="Server down", description="Mail server unreachable"),
        )

        result = await store.search_incidents("ligh")

        assert [i.title for i in result.value] == ["Light outage"]

    @pytest.mark.asyncio
    async def test_search_matches_description(self, store):
        await store.save_incident(
            make_incident(title="Server down", description="Mail server unreachable"),
        )

        result = await store.search_incidents("MAIL")

        assert len(result.value) == 1

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, store):
        await store.save_incident(make_incident(title="Light outage"))

        assert (await store.search_incidents("%")).value == []

    @pytest.mark.asyncio
    async def test_status_filter(self, store):
        pending = make_incident(title="Pending one")
        resolved = make_incident(title="Resolved one")
        resolved.change_status("Resolved")
        await store.save_incident(pending)
        await store.save_incident(resolved)

        assert [i.title for i in (await store.get_incidents_by_status("Resolved")).value] == [
            "Resolved one",
        ]
        assert len((await store.get_incidents_by_status(ALL_STATUSES)).value) == 2
        assert len((await store.get_incidents_by_status(None)).value) == 2

    @pytest.mark.asyncio
    async def test_unknown_status_matches_nothing(self, store):
        await store.save_incident(make_incident())

        result = await store.get_incidents_by_status("Closed")

        assert result.ok is True
        assert result.value == []


class TestCounters:
    """Test dashboard counters."""

    @pytest.mark.asyncio
    async def test_counts_and_statistics(self, store):
        for n in range(3):
            await store.save_incident(make_incident(title=f"Pending {n}"))
        resolved = make_incident(title="Resolved one")
        resolved.change_status("Resolved")
        resolved.mark_mirrored(1)
        await store.save_incident(resolved)

        assert (await store.count_incidents()).value == 4
        assert (await store.count_pending()).value == 3
        assert (await store.count_resolved()).value == 1
        assert (await store.count_mirrored()).value == 1

        stats = (await store.get_statistics()).value
        assert stats.to_dict() == {
            "total": 4,
            "pending": 3,
            "resolved": 1,
            "mirrored": 1,
            "unmirrored": 3,
        }


# ============================================================================
# Users
# ============================================================================


class TestUsers:
    """Test bootstrap user, registration and credential checks."""

    @pytest.mark.asyncio
    async def test_bootstrap_user_exists(self, store):
        user = (await store.get_user_by_username("user")).value

        assert user is not None
        assert user.full_name == "Default user"
        assert user.password_hash != "user"

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, store, database_url, password_service):
        again = LocalStore(Database(database_url), password_service)
        await again.initialize()
        await again.initialize()

        assert again.is_initialized is True
        await again.close()

    @pytest.mark.asyncio
    async def test_bootstrap_does_not_overwrite(self, database_url, password_service):
        first = LocalStore(Database(database_url), password_service)
        await first.initialize()
        user = (await first.get_user_by_username("user")).value
        user.update_profile(full_name="Renamed", email=None)
        await first.save_user(user)
        await first.close()

        second = LocalStore(Database(database_url), password_service)
        await second.initialize()
        reloaded = (await second.get_user_by_username("user")).value
        await second.close()

        assert reloaded.full_name == "Renamed"

    @pytest.mark.asyncio
    async def test_validate_user(self, store):
        assert (await store.validate_user("user", "user")).value is not None
        assert (await store.validate_user("user", "wrong")).value is None
        assert (await store.validate_user("nobody", "user")).value is None

    @pytest.mark.asyncio
    async def test_username_lookup_is_case_sensitive(self, store):
        assert (await store.get_user_by_username("USER")).value is None

    @pytest.mark.asyncio
    async def test_duplicate_username_is_rejected(self, store, password_service):
        duplicate = User.create("user", password_service.hash("secret1"))

        result = await store.save_user(duplicate)

        assert result.ok is False
        assert result.error_code == ErrorCode.USERNAME_TAKEN
        assert duplicate.id is None


# ============================================================================
# Failure reporting
# ============================================================================


class TestFailureReporting:
    """Test that storage failures are distinguishable from empty results."""

    @pytest.mark.asyncio
    async def test_read_without_schema_fails_with_default(self, database_url, password_service):
        uninitialized = LocalStore(Database(database_url), password_service)

        result = await uninitialized.get_all_incidents()

        assert result.ok is False
        assert result.value == []
        assert result.error_code == ErrorCode.STORAGE_ERROR
        await uninitialized.close()

    @pytest.mark.asyncio
    async def test_count_without_schema_fails_with_zero(self, database_url, password_service):
        uninitialized = LocalStore(Database(database_url), password_service)

        result = await uninitialized.count_incidents()

        assert (result.ok, result.value) == (False, 0)
        with pytest.raises(StorageError):
            result.unwrap()
        await uninitialized.close()

    @pytest.mark.asyncio
    async def test_failed_insert_leaves_incident_unsaved(self, database_url, password_service):
        uninitialized = LocalStore(Database(database_url), password_service)
        incident = make_incident()

        result = await uninitialized.save_incident(incident)

        assert result.ok is False
        assert incident.id is None
        await uninitialized.close()

    @pytest.mark.asyncio
    async def test_initialize_failure_raises(self, tmp_path, password_service):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way")
        broken = LocalStore(
            Database(f"sqlite+aiosqlite:///{blocker / 'fieldreport.db'}"),
            password_service,
        )

        with pytest.raises(StorageError):
            await broken.initialize()
