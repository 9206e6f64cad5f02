"""An archive file: a member count, a directory of entries, then member data.

Layout: a little-endian 32-bit member count, one fixed-size entry per
member (see :mod:`vinac.membro`), then the stored bytes of every member in
directory order.
"""

from __future__ import annotations

import os
import struct
import tempfile
from pathlib import Path

from .membro import RECORD_SIZE, Member

__all__ = ["Archive", "ArchiveError", "HEADER_SIZE"]

_COUNT = struct.Struct("<i")
HEADER_SIZE = _COUNT.size
"""Size in bytes of the member count at the start of an archive."""


class ArchiveError(Exception):
    """Raised when an archive file is malformed or a member cannot be read."""


class Archive:
    """Directory of an archive file together with data waiting to be written.

    ``staged`` maps member names to stored bytes that are not yet in the file;
    :meth:`save_directory` writes them and empties it.
    """

    def __init__(
        self, path: str | os.PathLike[str], members: list[Member] | None = None
    ) -> None:
        self.path = Path(path)
        self.members: list[Member] = list(members) if members else []
        self.staged: dict[str, bytes] = {}

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> Archive:
        """Read the directory of an existing archive."""
        with open(path, "rb") as fh:
            header = fh.read(HEADER_SIZE)
            if len(header) != HEADER_SIZE:
                raise ArchiveError(f"cannot read the member count of {path}")
            (count,) = _COUNT.unpack(header)
            if count < 0:
                raise ArchiveError(f"negative member count {count} in {path}")
            table = fh.read(count * RECORD_SIZE)
        if len(table) != count * RECORD_SIZE:
            raise ArchiveError(f"directory of {path} is truncated")
        members = [
            Member.unpack(table[start : start + RECORD_SIZE])
            for start in range(0, len(table), RECORD_SIZE)
        ]
        return cls(path, members)

    @classmethod
    def create(cls, path: str | os.PathLike[str]) -> Archive:
        """Start an empty archive at ``path``, overwriting any file there."""
        with open(path, "wb") as fh:
            fh.write(_COUNT.pack(0))
        return cls(path)

    def find(self, name: str) -> int | None:
        """Return the position of the member called ``name``, or ``None``."""
        return next(
            (index for index, member in enumerate(self.members) if member.name == name),
            None,
        )

    def read_member_data(self, member: Member) -> bytes:
        """Return the bytes stored for ``member``, as kept on disk."""
        if member.name in self.staged:
            return self.staged[member.name]
        if member.disk_size == 0:
            return b""
        with open(self.path, "rb") as fh:
            file_size = fh.seek(0, os.SEEK_END)
            if member.offset < 0 or member.offset >= file_size:
                raise ArchiveError(
                    f"invalid offset {member.offset} for member {member.name!r} "
                    f"in a file of {file_size} bytes"
                )
            fh.seek(member.offset)
            data = fh.read(member.disk_size)
        if len(data) != member.disk_size:
            raise ArchiveError(f"data of member {member.name!r} is truncated")
        return data

    def save_directory(self) -> None:
        """Rewrite the archive file with the current members, in order."""
        payloads = [self.read_member_data(member) for member in self.members]

        offset = HEADER_SIZE + RECORD_SIZE * len(self.members)
        for member in self.members:
            member.offset = offset
            offset += member.disk_size

        directory = self.path.parent if str(self.path.parent) else Path(".")
        fd, tmp_name = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(_COUNT.pack(len(self.members)))
                for member in self.members:
                    tmp.write(member.pack())
                for payload in payloads:
                    tmp.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
        self.staged.clear()