"""Unit tests for application DTOs."""

from datetime import datetime, timezone

import pytest

from fieldreport.application.dtos import (
    IncidentStatistics,
    OperationResult,
    StoreResult,
    SyncSummary,
)
from fieldreport.domain.shared import ErrorCode, StorageError


class TestStoreResult:
    """Test the value-or-error store result."""

    def test_success(self):
        result = StoreResult.success([1, 2])

        assert result.ok is True
        assert result.value == [1, 2]
        assert result.error is None

    def test_failure_carries_default(self):
        result = StoreResult.failure("disk full", [])

        assert result.ok is False
        assert result.value == []
        assert result.error_code == ErrorCode.STORAGE_ERROR

    def test_unwrap_failure_raises(self):
        result = StoreResult.failure("taken", 0, code=ErrorCode.USERNAME_TAKEN)

        with pytest.raises(StorageError) as exc_info:
            result.unwrap()

        assert exc_info.value.code == ErrorCode.USERNAME_TAKEN

    def test_unwrap_success(self):
        assert StoreResult.success(3).unwrap() == 3


class TestSyncSummary:
    """Test SyncSummary derived values."""

    def test_total_and_dict(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        summary = SyncSummary(synced=2, failed=1, started_at=now, finished_at=now)

        assert summary.total == 3
        assert summary.nothing_to_do is False
        assert summary.to_dict()["total"] == 3
        assert summary.to_dict()["started_at"] == "2024-01-01T00:00:00+00:00"

    def test_nothing_to_do(self):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert SyncSummary(0, 0, now, now).nothing_to_do is True
        assert SyncSummary(0, 0, now, now, error="boom").nothing_to_do is False


class TestOperationResult:
    """Test OperationResult helpers."""

    def test_unpacks_to_tuple(self):
        success, message = OperationResult.fail("Password is required")

        assert success is False
        assert message == "Password is required"


class TestIncidentStatistics:
    """Test IncidentStatistics."""

    def test_unmirrored(self):
        stats = IncidentStatistics(total=5, pending=3, resolved=1, mirrored=2)

        assert stats.unmirrored == 3
        assert stats.to_dict()["mirrored"] == 2
