"""Content sniffing for files without a recognised extension.

Implements the WHATWG MIME Sniffing algorithm (https://mimesniff.spec.whatwg.org/):
an ordered signature table, first match wins, with a text/binary
decision as the fallback. At most the first ``SNIFF_LEN`` bytes are
considered; shorter buffers are sniffed as they are.
"""

from dataclasses import dataclass
from typing import Protocol

# The algorithm uses at most this many bytes to make its decision.
SNIFF_LEN = 512

DEFAULT_TYPE = "application/octet-stream"
TEXT_UTF8 = "text/plain; charset=utf-8"

_WHITESPACE = frozenset(b"\t\n\x0c\r ")
_TAG_TERMINATORS = frozenset(b" >")


def sniff_window(data: bytes) -> bytes:
    """Return the prefix of *data* that sniffing may look at."""
    return data[: min(len(data), SNIFF_LEN)]


class Signature(Protocol):
    def match(self, data: bytes, first_non_ws: int) -> str | None: ...


@dataclass(frozen=True, slots=True)
class ExactSig:
    """Matches when *data* starts with ``sig``."""

    sig: bytes
    content_type: str

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if data.startswith(self.sig):
            return self.content_type
        return None


@dataclass(frozen=True, slots=True)
class MaskedSig:
    """Matches when ``data[i] & mask[i] == pattern[i]`` for every pattern byte."""

    mask: bytes
    pattern: bytes
    content_type: str
    skip_ws: bool = False

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if self.skip_ws:
            data = data[first_non_ws:]
        if len(self.pattern) != len(self.mask) or len(data) < len(self.pattern):
            return None
        for byte, mask, expected in zip(data, self.mask, self.pattern, strict=False):
            if byte & mask != expected:
                return None
        return self.content_type


@dataclass(frozen=True, slots=True)
class HTMLSig:
    """Case-insensitive HTML tag followed by a space or ``>``."""

    tag: bytes

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        data = data[first_non_ws:]
        if len(data) < len(self.tag) + 1:
            return None
        for i, expected in enumerate(self.tag):
            actual = data[i]
            if 0x41 <= expected <= 0x5A:  # A-Z: fold the input to upper case
                actual &= 0xDF
            if actual != expected:
                return None
        if data[len(self.tag)] not in _TAG_TERMINATORS:
            return None
        return "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class MP4Sig:
    """ISO base media file with an ``ftyp`` box naming an ``mp4`` brand."""

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        if len(data) < 12:
            return None
        box_size = int.from_bytes(data[:4], "big")
        if len(data) < box_size or box_size % 4 != 0:
            return None
        if data[4:8] != b"ftyp":
            return None
        for start in range(8, box_size, 4):
            if start == 12:
                # Bytes 12-15 hold the minor version, not a brand
                continue
            if data[start : start + 3] == b"mp4":
                return "video/mp4"
        return None


@dataclass(frozen=True, slots=True)
class TextSig:
    """Anything without binary control bytes is UTF-8 text. Must be last."""

    def match(self, data: bytes, first_non_ws: int) -> str | None:
        for byte in data[first_non_ws:]:
            if (
                byte <= 0x08
                or byte == 0x0B
                or 0x0E <= byte <= 0x1A
                or 0x1C <= byte <= 0x1F
            ):
                return None
        return TEXT_UTF8


_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"

SIGNATURES: tuple[Signature, ...] = (
    *(
        HTMLSig(tag)
        for tag in (
            b"<!DOCTYPE HTML",
            b"<HTML",
            b"<HEAD",
            b"<SCRIPT",
            b"<IFRAME",
            b"<H1",
            b"<DIV",
            b"<FONT",
            b"<TABLE",
            b"<A",
            b"<STYLE",
            b"<TITLE",
            b"<B",
            b"<BODY",
            b"<BR",
            b"<P",
            b"<!--",
        )
    ),
    MaskedSig(b"\xff\xff\xff\xff\xff", b"<?xml", "text/xml; charset=utf-8", skip_ws=True),
    ExactSig(b"%PDF-", "application/pdf"),
    ExactSig(b"%!PS-Adobe-", "application/postscript"),
    # Byte order marks
    MaskedSig(b"\xff\xff\x00\x00", b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be"),
    MaskedSig(b"\xff\xff\x00\x00", b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le"),
    MaskedSig(b"\xff\xff\xff\x00", b"\xef\xbb\xbf\x00", TEXT_UTF8),
    # Images
    ExactSig(b"\x00\x00\x01\x00", "image/x-icon"),
    ExactSig(b"\x00\x00\x02\x00", "image/x-icon"),
    ExactSig(b"BM", "image/bmp"),
    ExactSig(b"GIF87a", "image/gif"),
    ExactSig(b"GIF89a", "image/gif"),
    MaskedSig(
        b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff\xff\xff",
        b"RIFF\x00\x00\x00\x00WEBPVP",
        "image/webp",
    ),
    ExactSig(b"\x89PNG\r\n\x1a\n", "image/png"),
    ExactSig(b"\xff\xd8\xff", "image/jpeg"),
    # Audio and video
    MaskedSig(b"\xff\xff\xff\xff", b".snd", "audio/basic"),
    MaskedSig(_RIFF_MASK, b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    MaskedSig(b"\xff\xff\xff", b"ID3", "audio/mpeg"),
    MaskedSig(b"\xff\xff\xff\xff\xff", b"OggS\x00", "application/ogg"),
    MaskedSig(b"\xff" * 8, b"MThd\x00\x00\x00\x06", "audio/midi"),
    MaskedSig(_RIFF_MASK, b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    MaskedSig(_RIFF_MASK, b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    MP4Sig(),
    ExactSig(b"\x1a\x45\xdf\xa3", "video/webm"),
    # Fonts
    MaskedSig(b"\x00" * 34 + b"\xff\xff", b"\x00" * 34 + b"LP", "application/vnd.ms-fontobject"),
    ExactSig(b"\x00\x01\x00\x00", "font/ttf"),
    ExactSig(b"OTTO", "font/otf"),
    ExactSig(b"ttcf", "font/collection"),
    ExactSig(b"wOFF", "font/woff"),
    ExactSig(b"wOF2", "font/woff2"),
    # Archives
    ExactSig(b"\x1f\x8b\x08", "application/x-gzip"),
    ExactSig(b"PK\x03\x04", "application/zip"),
    ExactSig(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    ExactSig(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    ExactSig(b"\x00asm", "application/wasm"),
    TextSig(),
)


def detect_content_type(data: bytes) -> str:
    """Classify *data* by its leading bytes.

    Always returns a valid MIME type, falling back to
    ``application/octet-stream``. Empty input is plain text.
    """
    window = sniff_window(data)

    first_non_ws = 0
    while first_non_ws < len(window) and window[first_non_ws] in _WHITESPACE:
        first_non_ws += 1

    for sig in SIGNATURES:
        content_type = sig.match(window, first_non_ws)
        if content_type is not None:
            return content_type
    return DEFAULT_TYPE
