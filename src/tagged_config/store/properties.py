"""
Parser for Java-style ``.properties`` text.

Supported syntax:

- ``key=value``, ``key: value`` and ``key value`` separators
- ``#`` and ``!`` comment lines
- backslash line continuation (leading whitespace of the next line is dropped)
- escapes ``\\t \\n \\r \\f \\\\`` and ``\\uXXXX``; any other escaped character
  stands for itself, so ``\\=`` and ``\\:`` can appear in keys
"""

from __future__ import annotations

import logging
import string
from typing import Iterator, List, Optional, Tuple

from tagged_config.exceptions import PropertiesFormatError

logger = logging.getLogger("tagged_config.store.properties")
logger.addHandler(logging.NullHandler())

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_COMMENT_MARKERS = "#!"
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _ends_with_continuation(line: str) -> bool:
    backslashes = len(line) - len(line.rstrip("\\"))
    return backslashes % 2 == 1


def _logical_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, logical_line)`` with continuations joined."""
    buffer: List[str] = []
    start = 0
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.lstrip(_WHITESPACE)
        if not buffer:
            if not line or line[0] in _COMMENT_MARKERS:
                continue
            start = number
        if _ends_with_continuation(line):
            buffer.append(line[:-1])
            continue
        buffer.append(line)
        yield start, "".join(buffer)
        buffer = []
    if buffer:
        # continuation on the last line of the input
        yield start, "".join(buffer)


def _decode_unicode_escape(raw: str, i: int, source: Optional[str], line: int) -> int:
    """Return the code unit of the ``\\uXXXX`` escape starting at ``raw[i]``."""
    digits = raw[i + 2 : i + 6]
    if len(digits) != 4 or any(c not in string.hexdigits for c in digits):
        logger.error("Malformed \\u escape %r in %s line %d", digits, source, line)
        raise PropertiesFormatError(f"Malformed \\uXXXX escape: \\u{digits}", source, line)
    return int(digits, 16)


def _unescape(raw: str, source: Optional[str], line: int) -> str:
    out: List[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch != "\\" or i + 1 >= len(raw):
            out.append(ch)
            i += 1
            continue
        nxt = raw[i + 1]
        if nxt == "u":
            unit = _decode_unicode_escape(raw, i, source, line)
            i += 6
            # UTF-16 surrogate pair written as two escapes
            if 0xD800 <= unit <= 0xDBFF and raw.startswith("\\u", i):
                low = _decode_unicode_escape(raw, i, source, line)
                if 0xDC00 <= low <= 0xDFFF:
                    unit = 0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00)
                    i += 6
            out.append(chr(unit))
            continue
        out.append(_SIMPLE_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_key_value(line: str) -> Tuple[str, str]:
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str, source: Optional[str] = None) -> Iterator[Tuple[str, str]]:
    """Yield ``(key, value)`` pairs from properties ``text`` in file order.

    Keys are returned raw, tag prefixes included; duplicates are yielded as
    they appear so the caller decides which one wins.
    """
    for number, line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        key = _unescape(raw_key, source, number)
        value = _unescape(raw_value, source, number)
        logger.debug("Parsed %s line %d key=%r", source or "<text>", number, key)
        yield key, value
