"""
CLI Leaf Input

Reads an ordered leaf sequence from a file or stdin.

Formats:
- lines: one leaf per line, newline stripped, text-encoded
- json:  a JSON array; strings are text-encoded, anything else is
         encoded as canonical JSON
- hex:   one 0x-prefixed hex value per line, decoded to raw bytes
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from arbor.crypto.hashing import from_hex
from arbor.schemas.canonical import encode_canonical


LEAF_FORMATS = ("lines", "json", "hex")


class LeafInputError(ValueError):
    """Raised when a leaf file cannot be parsed."""


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        raise LeafInputError(f"Leaves file not found: {path}")
    return path.read_text(encoding="utf-8")


def _encode(value: str, encoding: str, position: int) -> bytes:
    try:
        return value.encode(encoding)
    except UnicodeEncodeError as e:
        raise LeafInputError(
            f"Leaf {position} cannot be encoded as {encoding}: {e.reason}"
        ) from e


def parse_leaves(text: str, fmt: str = "lines", encoding: str = "utf-8") -> list[bytes]:
    """Parse leaf text in the given format into raw leaf bytes."""
    if fmt == "lines":
        # A single trailing newline ends the last line; it is not an empty leaf
        if text.endswith("\n"):
            text = text[:-1]
        if not text:
            return []
        return [
            _encode(line.rstrip("\r"), encoding, i)
            for i, line in enumerate(text.split("\n"))
        ]

    if fmt == "json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LeafInputError(f"Invalid JSON leaves: {e}") from e
        if not isinstance(data, list):
            raise LeafInputError("JSON leaves must be an array")
        return [
            _encode(item, encoding, i) if isinstance(item, str) else encode_canonical(item)
            for i, item in enumerate(data)
        ]

    if fmt == "hex":
        leaves = []
        for lineno, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            try:
                leaves.append(from_hex(line))
            except ValueError as e:
                raise LeafInputError(f"Line {lineno}: {e}") from e
        return leaves

    raise LeafInputError(f"Unknown leaf format: {fmt!r}")


def read_leaves(source: str, fmt: str = "lines", encoding: str = "utf-8") -> list[bytes]:
    """Read leaves from a path, or from stdin when source is '-'."""
    return parse_leaves(_read_text(source), fmt=fmt, encoding=encoding)
