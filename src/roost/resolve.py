"""Request path resolution.

Maps a request path (plus raw query string) onto the loaded site:

1. exact match in the content store  -> ``Serve``
2. alias for the path                -> ``Redirect`` (307, query appended)
3. ``path + ".html"`` in the store   -> ``Serve`` as HTML
4. otherwise                         -> ``NotFound``

Resolution is pure: it reads the two immutable tables and never blocks,
so any number of requests may resolve concurrently.
"""

import mimetypes
from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus

from roost.sniff import detect_content_type, sniff_window

# Suffix tried when a path misses both the store and the aliases
IMPLICIT_EXTENSION = "html"


@dataclass(frozen=True, slots=True)
class Serve:
    """Serve ``content`` with ``content_type``."""

    content: bytes
    content_type: str


@dataclass(frozen=True, slots=True)
class Redirect:
    """Send the client to ``location``."""

    location: str
    status: int = HTTPStatus.TEMPORARY_REDIRECT


@dataclass(frozen=True, slots=True)
class NotFound:
    """Nothing matched."""

    body: str = HTTPStatus.NOT_FOUND.phrase


type Outcome = Serve | Redirect | NotFound


def extension(path: str) -> str:
    """Return the suffix of the last path element, dot included.

    ``"/a/b.tar.gz"`` gives ``".gz"``; ``"/a.d/b"`` gives ``""``.
    """
    for i in range(len(path) - 1, -1, -1):
        char = path[i]
        if char == "/":
            break
        if char == ".":
            return path[i:]
    return ""


def type_by_extension(ext: str) -> str | None:
    """Look up *ext* (``".css"`` or ``"css"``) in the mimetypes registry.

    Only the extension-to-type tables are consulted. Compression
    suffixes (``.gz``, ``.tgz``, ``.svgz``) name an encoding rather than
    a type, so they come back as ``None`` and the content gets sniffed.
    """
    if not ext:
        return None
    if not ext.startswith("."):
        ext = "." + ext
    if not mimetypes.inited:
        mimetypes.init()
    for key in (ext, ext.lower()):
        if key in mimetypes.suffix_map or key in mimetypes.encodings_map:
            return None
    for key in (ext, ext.lower()):
        ctype = mimetypes.types_map.get(key) or mimetypes.common_types.get(key)
        if ctype is not None:
            return ctype
    return None


def content_type(ext: str, content: bytes) -> str:
    """Pick a content type from the extension, sniffing the content if unknown."""
    ctype = type_by_extension(ext)
    if ctype is None:
        # Decide between text and binary from the leading bytes
        ctype = detect_content_type(sniff_window(content))
    return ctype


def with_query(target: str, raw_query: str | None) -> str:
    """Append ``?raw_query`` to *target* when there is a query."""
    if raw_query:
        return f"{target}?{raw_query}"
    return target


def resolve(
    path: str,
    raw_query: str | None,
    content: Mapping[str, bytes],
    aliases: Mapping[str, str],
) -> Outcome:
    """Resolve *path* against the content store and alias table."""
    data = content.get(path)
    if data is not None:
        return Serve(data, content_type(extension(path), data))

    target = aliases.get(path)
    if target is not None:
        return Redirect(with_query(target, raw_query))

    # Allow .html files to be addressed without the suffix. The path's own
    # extension is ignored here.
    data = content.get(f"{path}.{IMPLICIT_EXTENSION}")
    if data is not None:
        return Serve(data, content_type(IMPLICIT_EXTENSION, data))

    return NotFound()
