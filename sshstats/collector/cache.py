"""
Result Cache.

One flat file per monitored host holding the last computed output line.
A cached line is served while its modification time is less than half a
poll interval old, which keeps Cacti from making two remote calls for the
same host within one polling cycle.

Refreshes are serialized per host with an advisory lock on a sibling
.lock file, and the line is written to a temporary file that is renamed
into place, so a concurrent reader sees either the old line or the new
one, never a truncated file.

Usage:
    cache = ResultCache(config.cache.dir, config.cache.poll_time)
    line = cache.get_or_refresh(host, compute_line)
"""

import fcntl
import os
import tempfile
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from sshstats.core.exceptions import CacheError
from sshstats.core.logging import get_logger
from sshstats.core.utils import safe_filename

logger = get_logger(__name__)

CACHE_SUFFIX = "-apache_cacti_stats.txt"


class ResultCache:
    """
    Per-host single-line file cache with a half-poll-interval freshness window.

    An empty cache_dir disables caching entirely.
    """

    def __init__(
        self,
        cache_dir: str,
        poll_time: int,
        now: Callable[[], float] = time.time,
    ) -> None:
        self.cache_dir = cache_dir
        self.poll_time = poll_time
        self._now = now

    @property
    def enabled(self) -> bool:
        return bool(self.cache_dir)

    def path_for(self, host: str) -> Path:
        """Cache file path for a host."""
        return Path(self.cache_dir) / f"{safe_filename(host)}{CACHE_SUFFIX}"

    def is_fresh(self, path: Path) -> bool:
        """True if the file exists, is non-empty and is inside the freshness window."""
        try:
            stat = path.stat()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheError(f"Cannot stat '{path}': {e}", path=str(path)) from e
        return stat.st_size > 0 and stat.st_mtime + (self.poll_time / 2) > self._now()

    def read(self, host: str) -> str | None:
        """
        Return the cached line for a host if it is fresh.

        An existing but empty or unreadable-as-text file yields None and a
        warning, so the caller falls through to a refresh.
        """
        path = self.path_for(host)
        if not path.exists():
            return None
        if not self.is_fresh(path):
            if path.stat().st_size == 0:
                logger.warning("Cache file is empty", path=str(path))
            return None

        try:
            with open(path, encoding="utf-8") as f:
                line = f.readline().rstrip("\r\n")
        except UnicodeDecodeError:
            logger.warning("Cache file is not valid text", path=str(path))
            return None
        except OSError as e:
            raise CacheError(f"Cannot read '{path}': {e}", path=str(path)) from e

        if not line:
            logger.warning("Cache file returned nothing", path=str(path))
            return None

        logger.debug("Cache hit", path=str(path))
        return line

    def get_or_refresh(self, host: str, compute: Callable[[], str]) -> str:
        """
        Return the cached line for a host, or compute, store and return a new one.

        The cache file's temporary sibling is opened before compute() runs,
        so an unwritable cache directory aborts the run before any remote work.

        Raises:
            CacheError: If the cache file cannot be opened, locked or written.
        """
        cached = self.read(host)
        if cached is not None:
            return cached

        path = self.path_for(host)
        with self._locked(path):
            # Another invocation may have refreshed while we waited for the lock.
            cached = self.read(host)
            if cached is not None:
                return cached

            with self._open_for_write(path) as fp:
                line = compute()
                try:
                    fp.write(line)
                    fp.flush()
                    os.fsync(fp.fileno())
                except OSError as e:
                    raise CacheError(f"Cannot write to '{path}': {e}", path=str(path)) from e

        logger.debug("Cache refreshed", path=str(path))
        return line

    @contextmanager
    def _locked(self, path: Path) -> Iterator[None]:
        lock_path = path.with_name(path.name + ".lock")
        try:
            lock_file = open(lock_path, "a")
        except OSError as e:
            raise CacheError(f"Cannot open file '{lock_path}': {e}", path=str(lock_path)) from e

        with lock_file:
            try:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            except OSError as e:
                raise CacheError(f"Cannot lock '{lock_path}': {e}", path=str(lock_path)) from e
            try:
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    @contextmanager
    def _open_for_write(self, path: Path) -> Iterator[IO[str]]:
        """Yield a temporary file that replaces path on clean exit and is removed otherwise."""
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        except OSError as e:
            raise CacheError(f"Cannot open file '{path}': {e}", path=str(path)) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                yield fp
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except OSError as e:
            os.unlink(tmp_name)
            raise CacheError(f"Cannot write to '{path}': {e}", path=str(path)) from e
        except BaseException:
            os.unlink(tmp_name)
            raise
