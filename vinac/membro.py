"""Directory entry describing one file stored in an archive."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass

__all__ = ["Member", "NAME_SIZE", "RECORD_SIZE"]

NAME_SIZE = 100
"""Bytes reserved for a member name, including its terminating NUL."""

# name, uid, original size, disk size, mtime, offset, compressed, pad, order
_RECORD = struct.Struct(f"<{NAME_SIZE}si4q?3xi")
RECORD_SIZE = _RECORD.size
"""Size in bytes of one packed directory entry."""


def _encode_name(name: str) -> bytes:
    return os.fsencode(name)[: NAME_SIZE - 1]


@dataclass
class Member:
    """Metadata for a file held in an archive."""

    name: str
    uid: int = 0
    original_size: int = 0
    disk_size: int = 0
    mtime: int = 0
    offset: int = 0
    compressed: bool = False
    order: int = 0

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> Member:
        """Describe the file at ``path``; raises ``OSError`` if it cannot be read."""
        st = os.stat(path)
        getuid = getattr(os, "getuid", None)
        return cls(
            name=os.fsdecode(_encode_name(os.fspath(path))),
            uid=getuid() if getuid else 0,
            original_size=st.st_size,
            disk_size=st.st_size,
            mtime=int(st.st_mtime),
        )

    def pack(self) -> bytes:
        """Return the fixed-size binary directory entry."""
        return _RECORD.pack(
            _encode_name(self.name),
            self.uid,
            self.original_size,
            self.disk_size,
            self.mtime,
            self.offset,
            self.compressed,
            self.order,
        )

    @classmethod
    def unpack(cls, data: bytes) -> Member:
        """Read a directory entry produced by :meth:`pack`."""
        if len(data) != RECORD_SIZE:
            raise ValueError(
                f"directory entry must be {RECORD_SIZE} bytes, got {len(data)}"
            )
        raw_name, uid, original, disk, mtime, offset, compressed, order = (
            _RECORD.unpack(data)
        )
        return cls(
            name=os.fsdecode(raw_name.split(b"\0", 1)[0]),
            uid=uid,
            original_size=original,
            disk_size=disk,
            mtime=mtime,
            offset=offset,
            compressed=compressed,
            order=order,
        )