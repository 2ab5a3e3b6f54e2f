"""Photo storage port. Local files attached to incidents."""

from pathlib import Path
from typing import Optional, Protocol, Union


class PhotoStorage(Protocol):
    """Port for the photo files referenced by ``Incident.photo_path``."""

    def save_photo(self, source: Union[str, Path]) -> Optional[str]:
        """Copy a captured photo into app storage.

        Returns
        -------
        The stored file path, or None if the copy failed
        """
        ...

    def delete_photo(self, photo_path: str) -> bool:
        """Delete a stored photo. True if a file was removed."""
        ...

    def photo_exists(self, photo_path: Optional[str]) -> bool:
        """True if the path is set and points at an existing file."""
        ...
