"""Per-provider clone URL cache files."""

import logging
import os
from pathlib import Path

from ..crawler.models import CloneUrl
from ..errors import CacheUnavailable

logger = logging.getLogger(__name__)


def is_valid_cache_name(name: str) -> bool:
    """A cache name must be a single, non-hidden path component."""
    return bool(name) and not name.startswith(".") and "/" not in name and "\\" not in name


class CacheStore:
    """Stores one newline-delimited URL list per provider.

    Symbols are not persisted; callers reattach them on load.
    """

    def __init__(self, cache_dir: Path | str):
        self.cache_dir = Path(cache_dir)

    def path_for(self, name: str) -> Path:
        """Return the cache file for ``name``, always directly inside ``cache_dir``."""
        if not is_valid_cache_name(name):
            raise CacheUnavailable(name, "name must be a plain file name")
        return self.cache_dir / name

    def open(self, name: str) -> Path:
        """Return the cache file for ``name``, creating it empty if absent."""
        path = self.path_for(name)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            if not path.exists():
                logger.debug("Creating cache file %s", path)
                path.touch()
            elif not path.is_file():
                raise CacheUnavailable(name, f"{path} is not a regular file")
        except OSError as e:
            raise CacheUnavailable(name, str(e)) from e
        return path

    def is_empty(self, name: str) -> bool:
        path = self.open(name)
        try:
            return path.stat().st_size == 0
        except OSError as e:
            raise CacheUnavailable(name, str(e)) from e

    def load(self, name: str, symbol: str = "") -> list[CloneUrl]:
        """Read cached URLs for ``name`` and attach ``symbol`` to each."""
        path = self.open(name)
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise CacheUnavailable(name, str(e)) from e
        return [CloneUrl(line, symbol) for line in lines if line.strip()]

    def save(self, name: str, clone_urls: list[CloneUrl]) -> None:
        """Replace the cache for ``name`` with ``clone_urls``."""
        path = self.open(name)
        tmp_path = path.with_name(f".{path.name}.tmp")
        content = "\n".join(clone_url.url for clone_url in clone_urls)
        try:
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise CacheUnavailable(name, str(e)) from e
        logger.info("Cached %d clone urls in %s", len(clone_urls), path)

    def clear(self, name: str) -> bool:
        """Delete the cache file for ``name``. Returns whether one existed."""
        path = self.path_for(name)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise CacheUnavailable(name, str(e)) from e
        return True
