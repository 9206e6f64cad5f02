"""High-level archive operations: insert, move, extract, remove and list."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Iterable

from .archive import Archive, ArchiveError
from .lz import compress, uncompress
from .membro import Member

__all__ = [
    "extract_member",
    "extract_members",
    "insert_compressed",
    "insert_member",
    "insert_member_compressed",
    "insert_uncompressed",
    "list_members",
    "move_member",
    "remove_members",
]

PathLike = "str | os.PathLike[str]"

_Inserter = Callable[[Archive, "str | os.PathLike[str]"], Member]


def _warn(message: str) -> None:
    print(message, file=sys.stderr)


def _open_for_insert(archive_path: str | os.PathLike[str]) -> Archive:
    path = Path(archive_path)
    if path.exists() and path.stat().st_size > 0:
        return Archive.load(path)
    return Archive.create(path)


def _read_source(path: str | os.PathLike[str], member: Member) -> bytes:
    data = Path(path).read_bytes()
    if len(data) != member.original_size:
        raise ArchiveError(
            f"read {len(data)} bytes from {os.fspath(path)}, "
            f"expected {member.original_size}"
        )
    return data


def _stage(archive: Archive, member: Member, stored: bytes) -> Member:
    """Put ``member`` into the directory, replacing one of the same name."""
    member.disk_size = len(stored)
    archive.staged[member.name] = stored
    index = archive.find(member.name)
    if index is None:
        member.order = len(archive.members)
        archive.members.append(member)
    else:
        member.order = index
        archive.members[index] = member
    return member


def _renumber(archive: Archive) -> None:
    for position, member in enumerate(archive.members):
        member.order = position


def insert_member(archive: Archive, path: str | os.PathLike[str]) -> Member:
    """Add the file at ``path`` to ``archive`` as it is, replacing a namesake."""
    member = Member.from_path(path)
    data = _read_source(path, member)
    member.compressed = False
    return _stage(archive, member, data)


def insert_member_compressed(
    archive: Archive, path: str | os.PathLike[str]
) -> Member:
    """Add the file at ``path`` compressed, or as it is if that is not smaller."""
    member = Member.from_path(path)
    data = _read_source(path, member)
    packed = compress(data)
    if not packed:
        raise ArchiveError(f"compression of {os.fspath(path)} failed")
    if len(packed) >= member.original_size:
        member.compressed = False
        return _stage(archive, member, data)
    member.compressed = True
    return _stage(archive, member, packed)


def extract_member(archive: Archive, index: int) -> Path:
    """Write the member at ``index`` to the path it was stored under."""
    member = archive.members[index]
    stored = archive.read_member_data(member)
    if member.compressed:
        data = uncompress(stored)
        if len(data) != member.original_size:
            raise ArchiveError(
                f"member {member.name!r} decompressed to {len(data)} bytes, "
                f"expected {member.original_size}"
            )
    else:
        data = stored
    target = Path(member.name)
    target.write_bytes(data)
    return target


def _insert_all(
    archive_path: str | os.PathLike[str],
    paths: Iterable[str | os.PathLike[str]],
    insert: _Inserter,
) -> list[Member]:
    archive = _open_for_insert(archive_path)
    inserted = []
    for path in paths:
        try:
            inserted.append(insert(archive, path))
        except (OSError, ArchiveError) as exc:
            _warn(f"error inserting member {os.fspath(path)}: {exc}")
    archive.save_directory()
    return inserted


def insert_uncompressed(
    archive_path: str | os.PathLike[str],
    members: Iterable[str | os.PathLike[str]],
) -> list[Member]:
    """Insert files without compression; return the members inserted.

    Files that cannot be inserted are reported on standard error and skipped.
    """
    return _insert_all(archive_path, members, insert_member)


def insert_compressed(
    archive_path: str | os.PathLike[str],
    members: Iterable[str | os.PathLike[str]],
) -> list[Member]:
    """Insert files with compression; return the members inserted.

    Files that cannot be inserted are reported on standard error and skipped.
    """
    return _insert_all(archive_path, members, insert_member_compressed)


def move_member(
    archive_path: str | os.PathLike[str], member: str, target: str | None = None
) -> list[str]:
    """Move ``member`` right after ``target``, or to the front if it is ``None``.

    Returns the member names in their new order.
    """
    archive = Archive.load(archive_path)
    index = archive.find(member)
    if index is None:
        raise ArchiveError(f"member {member!r} not found")
    if target is not None and archive.find(target) is None:
        raise ArchiveError(f"target {target!r} not found")

    if member != target:
        moving = archive.members.pop(index)
        if target is None:
            destination = 0
        else:
            target_index = archive.find(target)
            assert target_index is not None
            destination = target_index + 1
        archive.members.insert(destination, moving)

    _renumber(archive)
    archive.save_directory()
    return [entry.name for entry in archive.members]


def extract_members(
    archive_path: str | os.PathLike[str], members: Iterable[str] = ()
) -> list[Path]:
    """Extract the named members, or all of them when none are named."""
    archive = Archive.load(archive_path)
    names = list(members)
    if not names:
        indices = list(range(len(archive.members)))
    else:
        indices = []
        for name in names:
            index = archive.find(name)
            if index is None:
                raise ArchiveError(f"member {name!r} not found in the archive")
            indices.append(index)
    return [extract_member(archive, index) for index in indices]


def remove_members(
    archive_path: str | os.PathLike[str], members: Iterable[str] = ()
) -> list[str]:
    """Remove the named members, or all of them when none are named.

    Names not in the archive are reported on standard error and skipped.
    Returns the names removed.
    """
    archive = Archive.load(archive_path)
    names = list(members)
    if not names:
        removed = [entry.name for entry in archive.members]
        archive.members.clear()
    else:
        removed = []
        for name in names:
            index = archive.find(name)
            if index is None:
                _warn(f"member {name} not found")
                continue
            del archive.members[index]
            removed.append(name)
    _renumber(archive)
    archive.save_directory()
    return removed


def list_members(archive_path: str | os.PathLike[str]) -> list[Member]:
    """Return the members of the archive in directory order."""
    return list(Archive.load(archive_path).members)