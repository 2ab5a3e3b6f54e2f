"""Unit tests for LocalPhotoStorage."""

import re
from pathlib import Path

from fieldreport.infrastructure.system.photo_storage import LocalPhotoStorage

NAME_PATTERN = re.compile(r"incident_\d{8}_\d{6}(-\d+)?\.jpg")


def _capture(tmp_path: Path, name: str = "capture.jpg") -> Path:
    source = tmp_path / name
    source.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return source


class TestLocalPhotoStorage:
    """Test storing and deleting photo files."""

    def test_save_copies_into_photo_dir(self, tmp_path):
        storage = LocalPhotoStorage(tmp_path / "photos")

        stored = storage.save_photo(_capture(tmp_path))

        assert stored is not None
        stored_path = Path(stored)
        assert stored_path.parent == tmp_path / "photos"
        assert NAME_PATTERN.fullmatch(stored_path.name)
        assert stored_path.read_bytes() == b"\xff\xd8\xff\xe0fake-jpeg"

    def test_two_saves_in_same_second_do_not_collide(self, tmp_path):
        storage = LocalPhotoStorage(tmp_path / "photos")
        source = _capture(tmp_path)

        first = storage.save_photo(source)
        second = storage.save_photo(source)

        assert first != second
        assert Path(first).exists()
        assert Path(second).exists()

    def test_missing_source(self, tmp_path):
        storage = LocalPhotoStorage(tmp_path / "photos")

        assert storage.save_photo(tmp_path / "missing.jpg") is None

    def test_delete(self, tmp_path):
        storage = LocalPhotoStorage(tmp_path / "photos")
        stored = storage.save_photo(_capture(tmp_path))

        assert storage.delete_photo(stored) is True
        assert storage.photo_exists(stored) is False
        assert storage.delete_photo(stored) is False

    def test_photo_exists(self, tmp_path):
        storage = LocalPhotoStorage(tmp_path / "photos")
        stored = storage.save_photo(_capture(tmp_path))

        assert storage.photo_exists(stored) is True
        assert storage.photo_exists(None) is False
        assert storage.photo_exists("") is False
