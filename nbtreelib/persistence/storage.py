"""Storage adapters for nbtreelib persistence.

A StorageAdapter is the byte-stream capability the persistence layer is
written against: it reads and writes whole byte strings keyed by a
location. The tree never touches files directly, so the same save/restore
logic works with the filesystem, an in-memory store, or anything else a
caller plugs in.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Union

from ..errors import LocationUnavailableError

Location = Union[str, "os.PathLike[str]"]


class StorageAdapter(ABC):
    """Abstract byte-stream storage keyed by location."""

    @abstractmethod
    def read_bytes(self, location: Location) -> bytes:
        """Return the full contents stored at location.

        Raises:
            LocationUnavailableError: If nothing can be opened at location
            OSError: If the location was opened but reading it failed
        """
        pass

    @abstractmethod
    def write_bytes(self, location: Location, data: bytes) -> None:
        """Replace whatever is stored at location with data.

        Raises:
            OSError: If the write fails
        """
        pass

    def exists(self, location: Location) -> bool:
        """Check if something is stored at location.

        Default implementation attempts a read; adapters can override.
        """
        try:
            self.read_bytes(location)
        except LocationUnavailableError:
            return False
        return True


class FileStorageAdapter(StorageAdapter):
    """Stores encoded trees as files on the local filesystem.

    Writes go to a temporary file in the target directory which then
    replaces the target, so an interrupted write never leaves a truncated
    file behind.
    """

    # Failures that mean "there is nothing readable here" rather than a
    # fault of the medium
    _UNAVAILABLE = (FileNotFoundError, IsADirectoryError, NotADirectoryError, PermissionError)

    def __init__(self, base_dir: Union[str, Path, None] = None, atomic: bool = True):
        """Initialize the adapter.

        Args:
            base_dir: Directory that relative locations resolve against
                (None = current working directory)
            atomic: Write through a temporary file and rename into place
        """
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.atomic = atomic

    def resolve(self, location: Location) -> Path:
        path = Path(location)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path

    def read_bytes(self, location: Location) -> bytes:
        path = self.resolve(location)
        try:
            handle = open(path, "rb")
        except self._UNAVAILABLE as e:
            raise LocationUnavailableError(location, e.strerror or type(e).__name__) from e
        with handle:
            return handle.read()

    def write_bytes(self, location: Location, data: bytes) -> None:
        path = self.resolve(location)
        if not self.atomic:
            with open(path, "wb") as handle:
                handle.write(data)
            return

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def exists(self, location: Location) -> bool:
        return self.resolve(location).is_file()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_dir={self.base_dir!r}, atomic={self.atomic})"


class MemoryStorageAdapter(StorageAdapter):
    """Keeps encoded trees in a dictionary.

    Useful for tests and for callers that want to move trees around as
    bytes without touching the filesystem.
    """

    def __init__(self):
        self.blobs: Dict[str, bytes] = {}

    @staticmethod
    def _key(location: Location) -> str:
        return os.fspath(location)

    def read_bytes(self, location: Location) -> bytes:
        key = self._key(location)
        if key not in self.blobs:
            raise LocationUnavailableError(location, "no such entry")
        return self.blobs[key]

    def write_bytes(self, location: Location, data: bytes) -> None:
        self.blobs[self._key(location)] = bytes(data)

    def exists(self, location: Location) -> bool:
        return self._key(location) in self.blobs
