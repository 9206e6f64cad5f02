"""LZ77 block coder with a marker byte and variable-length references.

A compressed block starts with a marker byte, the least common byte value
of the input.  Every other byte of the stream is either a literal, the
marker followed by ``0`` (a literal marker byte), or the marker followed by
two variable-length integers giving the length and the backwards offset of
a repeated string.  The worst case output size is ``(257/256) * n + 1``.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable

__all__ = ["LZError", "MAX_OFFSET", "compress", "compress_fast", "uncompress"]

MAX_OFFSET = 100000
"""Largest distance searched backwards for a repeated string."""

_UINT32 = 0xFFFFFFFF

_MatchFinder = Callable[[int, int], "tuple[int, int]"]


class LZError(ValueError):
    """Raised when a compressed block is malformed."""


def _least_common_byte(data: bytes) -> int:
    counts = Counter(data)
    return min(range(256), key=lambda value: counts.get(value, 0))


def _write_varsize(value: int) -> bytes:
    """Encode an unsigned 32-bit integer, seven bits per byte, big end first."""
    probe = value >> 3
    for num_bytes in range(5, 1, -1):
        if probe & 0xFE000000:
            break
        probe = (probe << 7) & _UINT32
    else:
        num_bytes = 1
    encoded = bytearray()
    for shift in range(num_bytes - 1, -1, -1):
        byte = (value >> (shift * 7)) & 0x7F
        if shift > 0:
            byte |= 0x80
        encoded.append(byte)
    return bytes(encoded)


def _read_varsize(data: bytes, pos: int) -> tuple[int, int]:
    """Decode a variable-length integer; return it and the next position."""
    value = 0
    while True:
        if pos >= len(data):
            raise LZError("truncated length or offset in compressed data")
        byte = data[pos]
        pos += 1
        value = ((value << 7) | (byte & 0x7F)) & _UINT32
        if not byte & 0x80:
            return value, pos


def _match_length(data: bytes, here: int, there: int, start: int, limit: int) -> int:
    length = start
    while length < limit and data[here + length] == data[there + length]:
        length += 1
    return length


def _worth_coding(length: int, offset: int) -> bool:
    return (
        length >= 8
        or (length == 4 and offset <= 0x0000007F)
        or (length == 5 and offset <= 0x00003FFF)
        or (length == 6 and offset <= 0x001FFFFF)
        or (length == 7 and offset <= 0x0FFFFFFF)
    )


def _encode(data: bytes, find_match: _MatchFinder) -> bytes:
    if not data:
        return b""

    marker = _least_common_byte(data)
    out = bytearray([marker])

    def emit_literal(symbol: int) -> None:
        out.append(symbol)
        if symbol == marker:
            out.append(0)

    inpos = 0
    bytes_left = len(data)
    while True:
        length, offset = find_match(inpos, bytes_left)
        if _worth_coding(length, offset):
            out.append(marker)
            out += _write_varsize(length)
            out += _write_varsize(offset)
            inpos += length
            bytes_left -= length
        else:
            emit_literal(data[inpos])
            inpos += 1
            bytes_left -= 1
        if bytes_left <= 3:
            break

    for symbol in data[inpos:]:
        emit_literal(symbol)
    return bytes(out)


def compress(data: bytes) -> bytes:
    """Compress ``data`` with an exhaustive search of the history window."""
    data = bytes(data)
    size = len(data)

    def find_match(inpos: int, bytes_left: int) -> tuple[int, int]:
        best_length, best_offset = 3, 0
        for offset in range(3, min(inpos, MAX_OFFSET) + 1):
            candidate = inpos - offset
            if data[inpos] != data[candidate]:
                continue
            probe = inpos + best_length
            if probe >= size or data[probe] != data[candidate + best_length]:
                continue
            limit = min(bytes_left, offset)
            length = _match_length(data, inpos, candidate, 0, limit)
            if length > best_length:
                best_length, best_offset = length, offset
        return best_length, best_offset

    return _encode(data, find_match)


def compress_fast(data: bytes) -> bytes:
    """Compress ``data`` following a table of earlier occurrences of byte pairs."""
    data = bytes(data)
    size = len(data)

    jump = [-1] * size
    last_seen: dict[int, int] = {}
    for pos in range(size - 1):
        pair = (data[pos] << 8) | data[pos + 1]
        jump[pos] = last_seen.get(pair, -1)
        last_seen[pair] = pos

    def find_match(inpos: int, bytes_left: int) -> tuple[int, int]:
        best_length, best_offset = 3, 0
        index = jump[inpos]
        while index != -1 and inpos - index < MAX_OFFSET:
            probe = inpos + best_length
            if probe < size and data[index + best_length] == data[probe]:
                offset = inpos - index
                limit = min(bytes_left, offset)
                length = _match_length(data, inpos, index, 2, limit)
                if length > best_length:
                    best_length, best_offset = length, offset
            index = jump[index]
        return best_length, best_offset

    return _encode(data, find_match)


def uncompress(data: bytes) -> bytes:
    """Decode a block produced by :func:`compress` or :func:`compress_fast`."""
    data = bytes(data)
    size = len(data)
    if size == 0:
        return b""
    if size == 1:
        raise LZError("compressed data holds a marker but no content")

    marker = data[0]
    out = bytearray()
    pos = 1
    while pos < size:
        symbol = data[pos]
        pos += 1
        if symbol != marker:
            out.append(symbol)
            continue
        if pos >= size:
            raise LZError("truncated marker sequence in compressed data")
        if data[pos] == 0:
            out.append(marker)
            pos += 1
            continue
        length, pos = _read_varsize(data, pos)
        offset, pos = _read_varsize(data, pos)
        if offset == 0 or offset > len(out):
            raise LZError(
                f"offset {offset} points outside the {len(out)} bytes decoded so far"
            )
        start = len(out) - offset
        for step in range(length):
            out.append(out[start + step])
    return bytes(out)