"""Alias redirects loaded from a JSON file.

The alias file is a flat JSON object mapping a source path to a redirect
target::

    {"/old": "/new", "/gh": "https://github.com/example"}

A missing or broken alias file never stops the server: callers use
``load_aliases_or_empty()`` which logs and falls back to no aliases.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path

from roost.errors import AliasLoadError

logger = logging.getLogger("roost.aliases")


class AliasTable(Mapping[str, str]):
    """Immutable mapping of source path to redirect target.

    Targets are opaque strings (relative paths or absolute URLs); the
    resolver appends the request's query string to them verbatim.
    """

    __slots__ = ("_aliases",)

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self._aliases: dict[str, str] = dict(aliases or {})

    def __getitem__(self, path: str) -> str:
        return self._aliases[path]

    def __contains__(self, path: object) -> bool:
        return path in self._aliases

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def __repr__(self) -> str:
        return f"AliasTable({self._aliases!r})"


def parse_aliases(raw: str | bytes, source: str = "<string>") -> AliasTable:
    """Decode JSON text into an ``AliasTable``.

    Raises:
        AliasLoadError: If the text is not a JSON object of string keys
            to string values.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise AliasLoadError(source, f"json decoding: {exc}") from exc

    if not isinstance(data, dict):
        raise AliasLoadError(source, f"expected a JSON object, got {type(data).__name__}")
    for key, value in data.items():
        if not isinstance(value, str):
            msg = f"target for {key!r} must be a string, got {type(value).__name__}"
            raise AliasLoadError(source, msg)
    return AliasTable(data)


def load_aliases(path: str | Path | None) -> AliasTable:
    """Load the alias file at *path*.

    An empty path means no alias file is configured and yields an empty
    table without error.

    Raises:
        AliasLoadError: If the file cannot be read or decoded.
    """
    if not path:
        return AliasTable()
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise AliasLoadError(str(path), f"opening: {exc.strerror or exc}") from exc
    return parse_aliases(raw, str(path))


def load_aliases_or_empty(path: str | Path | None) -> AliasTable:
    """Load aliases, logging and degrading to an empty table on failure."""
    try:
        aliases = load_aliases(path)
    except AliasLoadError as exc:
        logger.warning("couldn't load aliases: %s", exc)
        return AliasTable()
    if path:
        logger.info("Loaded %d aliases from %s", len(aliases), path)
    return aliases
