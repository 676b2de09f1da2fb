"""In-memory site content.

The whole site directory is read once at startup into a ``ContentStore``:
an immutable mapping from request path to file bytes. Directories named
in ``skip_dirs`` are pruned at any depth. Any read error aborts the load,
so the server never starts with a partial store.
"""

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from roost.errors import ContentLoadError

logger = logging.getLogger("roost.content")

DEFAULT_SKIP_DIRS: tuple[str, ...] = (".git",)


class ContentStore(Mapping[str, bytes]):
    """Immutable mapping of request path to raw file bytes.

    Keys always start with ``/`` and are case-sensitive. Values are the
    ``bytes`` read from disk; being immutable they can be handed to any
    number of concurrent requests without copying.
    """

    __slots__ = ("_files", "_total")

    def __init__(self, files: Mapping[str, bytes] | None = None) -> None:
        self._files: dict[str, bytes] = dict(files or {})
        self._total = sum(len(data) for data in self._files.values())

    def __getitem__(self, path: str) -> bytes:
        return self._files[path]

    def __contains__(self, path: object) -> bool:
        return path in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"ContentStore({len(self._files)} files, {self._total} bytes)"

    @property
    def total_bytes(self) -> int:
        """Sum of the sizes of all stored files."""
        return self._total


def request_path(root: str | Path, file_path: str | Path) -> str:
    """Map a file under *root* to the request path it is served at.

    ``<root>/blog/post.html`` becomes ``/blog/post.html`` regardless of
    a trailing separator on *root* or the platform's separator.
    """
    relative = Path(file_path).relative_to(root)
    return "/" + "/".join(relative.parts)


def walk(root: str | Path, skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS) -> dict[str, bytes]:
    """Read every regular file under *root* into a dict keyed by request path.

    Raises:
        ContentLoadError: If *root* is not a directory, a directory cannot
            be listed, or any file cannot be read.
    """
    root = Path(root)
    if not root.is_dir():
        raise ContentLoadError(str(root), "not a directory")

    skip = frozenset(skip_dirs)
    cache: dict[str, bytes] = {}

    def _raise(err: OSError) -> None:
        raise ContentLoadError(err.filename or str(root), err.strerror or err)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        # Prune in place so os.walk never descends into skipped directories
        dirnames[:] = [name for name in dirnames if name not in skip]
        for name in filenames:
            file_path = Path(dirpath, name)
            try:
                data = file_path.read_bytes()
            except OSError as exc:
                raise ContentLoadError(str(file_path), exc.strerror or exc) from exc
            key = request_path(root, file_path)
            cache[key] = data
            logger.debug("loaded %s (%d bytes)", key, len(data))
    return cache


def load_content(
    root: str | Path,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
) -> ContentStore:
    """Load the site under *root* into an immutable ``ContentStore``."""
    store = ContentStore(walk(root, skip_dirs))
    logger.info("Loaded %d files (%d bytes) from %s", len(store), store.total_bytes, root)
    return store
