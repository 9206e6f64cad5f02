"""Command line entry point: ``vina <option> <archive> [members...]``."""

from __future__ import annotations

import sys
import time
from typing import Callable, Sequence

from .actions import (
    extract_members,
    insert_compressed,
    insert_uncompressed,
    list_members,
    move_member,
    remove_members,
)
from .archive import ArchiveError
from .lz import LZError
from .membro import Member

__all__ = ["main"]

_PROG = "vina"

_Handler = Callable[[str, "list[str]"], int]


def _insert_uncompressed(archive_path: str, rest: list[str]) -> int:
    print("VINAC MODE: [INSERT-NOCOMP]")
    for member in insert_uncompressed(archive_path, rest):
        print(f"[INSERT-NOCOMP]: {member.name}")
    print("[INSERT-NOCOMP]: SUCCESS!")
    return 0


def _insert_compressed(archive_path: str, rest: list[str]) -> int:
    print("VINAC MODE: [INSERT-COMP]")
    for member in insert_compressed(archive_path, rest):
        state = "compressed" if member.compressed else "stored"
        print(f"[INSERT-COMP]: {member.name} ({state})")
    print("[INSERT-COMP]: SUCCESS!")
    return 0


def _move(archive_path: str, rest: list[str]) -> int:
    if not rest:
        print("VINAC [MOVE]: Parâmetros insuficientes.", file=sys.stderr)
        return 1
    member = rest[0]
    target = rest[1] if len(rest) > 1 else None
    move_member(archive_path, member, target)
    print(f"[MOVE]: Membro {member} movido com sucesso.")
    return 0


def _extract(archive_path: str, rest: list[str]) -> int:
    for path in extract_members(archive_path, rest):
        print(f"[EXTRACT]: {path}")
    return 0


def _remove(archive_path: str, rest: list[str]) -> int:
    for name in remove_members(archive_path, rest):
        print(f"[REMOVE]: Membro {name} removido com sucesso.")
    return 0


def _format_row(position: int, member: Member) -> str:
    date = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(member.mtime))
    return (
        f"{position:5d} | {member.name:<20} | {member.uid:5d} | "
        f"{member.original_size:5d} | {member.disk_size:5d} | {date}"
    )


def _list(archive_path: str, rest: list[str]) -> int:
    members = list_members(archive_path)
    print(f"Lista de membros do arquivo '{archive_path}':")
    print("-" * 60)
    print("Ordem | Nome                 | UID   | Orig  | Disco | Data de modificação")
    print("-" * 70)
    for position, member in enumerate(members, start=1):
        print(_format_row(position, member))
    return 0


_COMMANDS: dict[str, _Handler] = {
    "-ip": _insert_uncompressed,
    "-p": _insert_uncompressed,
    "-ic": _insert_compressed,
    "-i": _insert_compressed,
    "-m": _move,
    "-x": _extract,
    "-r": _remove,
    "-c": _list,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one archive command and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print(f"Uso: {_PROG} archive.vc membro1 membro2 ...")
        return 1

    option, archive_path, *rest = args
    handler = _COMMANDS.get(option)
    if handler is None:
        print(f"Comando desconhecido: {option}")
        return 1

    try:
        return handler(archive_path, rest)
    except (OSError, ArchiveError, LZError) as exc:
        print(f"{_PROG}: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())