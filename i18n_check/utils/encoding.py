"""
Encoding helpers to read source files without crashing on bad bytes.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path

import chardet

from i18n_check.core.exceptions import EncodingError


@dataclass
class DecodedText:
    """Decoded file content plus what it took to decode it."""
    text: str
    encoding: str
    had_bom: bool = False
    # decoded with a guessed encoding, bad bytes replaced
    used_fallback: bool = False


_BOMS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def decode_bytes(raw: bytes) -> DecodedText:
    """
    Decode raw file content:
    - a UTF-8/UTF-16 byte-order mark decides the encoding (the mark is stripped)
    - then strict UTF-8
    - then chardet detection with errors='replace'
    """
    for bom, enc in _BOMS:
        if raw.startswith(bom):
            try:
                return DecodedText(raw[len(bom):].decode(enc), enc, had_bom=True)
            except UnicodeDecodeError:
                return DecodedText(raw[len(bom):].decode(enc, errors="replace"), enc,
                                   had_bom=True, used_fallback=True)

    try:
        return DecodedText(raw.decode("utf-8"), "utf-8")
    except UnicodeDecodeError:
        pass

    detected = chardet.detect(raw)
    enc = detected.get("encoding") or "latin-1"
    try:
        text = raw.decode(enc, errors="replace")
    except LookupError:
        enc = "latin-1"
        text = raw.decode(enc, errors="replace")
    return DecodedText(text, enc, used_fallback=True)


def read_source_file(path: Path) -> DecodedText:
    """Reads and decodes a file; raises ``EncodingError`` if it cannot be read."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise EncodingError(f"Unable to read {path}: {exc}") from exc
    return decode_bytes(raw)
