import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

from package_feed.domain.models import ServerPackage
from package_feed.storage.errors import ParseError
from package_feed.storage.serializer import PackagesSerializer

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILE_NAME = "packages.json"


class PackageCache:
    """
    File-backed package list kept in the data directory.

    The package store writes its whole package list here after a change and
    reads it back on startup instead of re-reading every package file.
    """

    def __init__(
        self,
        data_dir: Path,
        serializer: PackagesSerializer,
        file_name: str = DEFAULT_CACHE_FILE_NAME,
    ):
        self._data_dir = data_dir
        self._serializer = serializer
        self._file_name = file_name

        # Ensure data directory exists
        if not self._data_dir.exists():
            self._data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._data_dir / self._file_name

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, packages: Iterable[ServerPackage]) -> None:
        packages = list(packages)
        data = self._serializer.encode(packages)

        # Write next to the target, then swap it in so readers never see a half-written file.
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._file_name}.", suffix=".tmp", dir=self._data_dir)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.info("Saved %d packages to %s", len(packages), self.path)

    def load(self) -> List[ServerPackage]:
        if not self.exists():
            logger.debug("No package cache at %s", self.path)
            return []

        with self.path.open("rb") as stream:
            packages = self._serializer.deserialize(stream)

        logger.info("Loaded %d packages from %s", len(packages), self.path)
        return packages

    def load_or_discard(self) -> List[ServerPackage]:
        """
        Load the cache, deleting it if it cannot be parsed.

        The package store treats an unreadable cache as missing and rebuilds it.
        """
        try:
            return self.load()
        except ParseError as exc:
            logger.warning("Discarding unreadable package cache %s: %s", self.path, exc)
            self.clear()
            return []

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("Removed package cache %s", self.path)
