"""Photo files kept in the app data directory."""

from __future__ import annotations

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PHOTO_NAME_FORMAT = "incident_%Y%m%d_%H%M%S.jpg"


class LocalPhotoStorage:
    """Copies captured photos under ``photo_dir`` with timestamped names."""

    def __init__(self, photo_dir: Union[str, Path]):
        self._photo_dir = Path(photo_dir)

    @property
    def photo_dir(self) -> Path:
        return self._photo_dir

    def save_photo(self, source: Union[str, Path]) -> Optional[str]:
        source_path = Path(source)
        if not source_path.is_file():
            logger.warning("Photo source %s does not exist", source_path)
            return None

        try:
            self._photo_dir.mkdir(parents=True, exist_ok=True)
            target = self._unique_target(datetime.now())
            shutil.copyfile(source_path, target)
        except OSError:
            logger.exception("Could not store photo %s", source_path)
            return None

        logger.debug("Stored photo %s as %s", source_path, target)
        return str(target)

    def delete_photo(self, photo_path: str) -> bool:
        if not photo_path:
            return False
        path = Path(photo_path)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError:
            logger.exception("Could not delete photo %s", path)
            return False
        return True

    def photo_exists(self, photo_path: Optional[str]) -> bool:
        return bool(photo_path) and Path(photo_path).is_file()

    def _unique_target(self, now: datetime) -> Path:
        # Two captures within one second get a numeric suffix
        target = self._photo_dir / now.strftime(PHOTO_NAME_FORMAT)
        counter = 1
        while target.exists():
            target = target.with_name(f"{target.stem.split('-')[0]}-{counter}.jpg")
            counter += 1
        return target
