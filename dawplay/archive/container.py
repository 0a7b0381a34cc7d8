"""
Access to packaged project archives.

A project archive is a ZIP container with project.xml at its root and
audio files at the paths referenced by the clips.
"""

import io
import logging
import threading
import zipfile
from pathlib import Path
from typing import FrozenSet, Optional

from ..constants import ProjectSchema
from ..errors import LoadError

logger = logging.getLogger(__name__)


class ProjectArchive:
    """
    Read-only view of an opened project archive.

    Entries are looked up by their exact archive path. Reads may be issued
    from several worker threads at once.
    """

    def __init__(self, zip_file: zipfile.ZipFile, source: Optional[Path] = None):
        self._zip = zip_file
        self._lock = threading.Lock()
        self.source = source
        self._entries = frozenset(info.filename for info in zip_file.infolist() if not info.is_dir())

    def list(self) -> FrozenSet[str]:
        """Return the paths of all file entries."""
        return self._entries

    def contains(self, path: str) -> bool:
        return path in self._entries

    def read(self, path: str) -> Optional[bytes]:
        """
        Read an entry's raw bytes.

        Args:
            path: Archive-relative path, used verbatim

        Returns:
            The entry bytes, or None if no such entry exists

        Raises:
            zipfile.BadZipFile: The entry exists but is corrupt
        """
        if path not in self._entries:
            return None
        with self._lock:
            return self._zip.read(path)

    def project_xml(self) -> str:
        """
        Return the text of the root project.xml entry.

        Raises:
            LoadError: The entry is missing, corrupt or not UTF-8
        """
        entry = ProjectSchema.PROJECT_ENTRY
        try:
            data = self.read(entry)
        except (zipfile.BadZipFile, OSError) as e:
            raise LoadError(f"{entry} could not be read: {e}") from e

        if data is None:
            raise LoadError(f"{entry} not found in archive")

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise LoadError(f"{entry} is not valid UTF-8: {e}") from e

    def close(self) -> None:
        self._zip.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"ProjectArchive(source={self.source}, entries={len(self._entries)})"


def open_archive(container_bytes: bytes, source: Optional[Path] = None) -> ProjectArchive:
    """
    Open a project archive held in memory.

    Args:
        container_bytes: Raw bytes of the ZIP container
        source: Optional path the bytes were read from (for reporting)

    Returns:
        ProjectArchive over the container

    Raises:
        LoadError: The bytes are not a readable ZIP container
    """
    try:
        zip_file = zipfile.ZipFile(io.BytesIO(container_bytes))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
        raise LoadError(f"Archive is not readable: {e}") from e

    archive = ProjectArchive(zip_file, source=source)
    logger.debug(f"Opened archive with {len(archive.list())} entries")
    return archive


def open_archive_file(path: Path) -> ProjectArchive:
    """Load and open a project archive from disk."""
    path = Path(path)
    if not path.exists():
        raise LoadError(f"File not found: {path}")

    try:
        data = path.read_bytes()
    except OSError as e:
        raise LoadError(f"Could not read {path}: {e}") from e

    return open_archive(data, source=path)
