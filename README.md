# vinac

`vinac` is a small file archiver. It keeps files ("members") in a single
archive file, optionally compressing each one with a simple LZ77 coder, and
lets you list, reorder, extract and remove members afterwards.

## Installation

```
pip install .
```

This installs the `vinac` command.

## Command line

```
vinac <option> archive.vc [member ...]
```

| Option        | Action                                                                 |
|---------------|------------------------------------------------------------------------|
| `-ip`, `-p`   | Insert members without compression                                     |
| `-ic`, `-i`   | Insert members compressed; a member is stored as it is if compressing does not make it smaller |
| `-m`          | Move a member to just after a target member, or to the front without a target |
| `-x`          | Extract the named members, or all of them when none are named          |
| `-r`          | Remove the named members, or all of them when none are named           |
| `-c`          | List the archive's members in order                                    |

Examples:

```
vinac -ic backup.vc notes.txt data.csv
vinac -c backup.vc
vinac -m backup.vc data.csv notes.txt
vinac -x backup.vc
vinac -r backup.vc notes.txt
```

Inserting into an archive that does not exist yet creates it. Inserting a
file whose name is already in the archive replaces that member in place.
Files that cannot be inserted, and names given to `-r` that are not in the
archive, are reported on standard error and skipped. Extraction writes each
member to the path it was stored under, relative to the current directory.

The listing shows, for each member, its position, name, user id, original
size, size in the archive and modification time. Status messages are printed
in Portuguese. The command exits with status 0 on success and 1 on a usage
error, an unknown option, or a failure such as a missing member or a
malformed archive.

## Archive format

An archive starts with a little-endian 32-bit member count, followed by one
fixed-size directory entry per member (`vinac.membro.RECORD_SIZE` bytes:
name, user id, original size, stored size, modification time, offset,
compressed flag and order), followed by the stored bytes of every member in
directory order.

## Library use

The compressor can be used on its own:

```python
from vinac.lz import compress, uncompress

packed = compress(b"abcabcabcabcabcabc")
assert uncompress(packed) == b"abcabcabcabcabcabc"
```

`compress_fast` produces the same format with a faster match search.
Malformed input to `uncompress` raises `vinac.lz.LZError`.

Archives can be handled through `vinac.archive.Archive` (`Archive.load`,
`Archive.create`, `find`, `read_member_data`, `save_directory`), whose
directory entries are `vinac.membro.Member` objects (`Member.from_path`,
`pack`, `unpack`). The operations behind the command line are in
`vinac.actions`: `insert_uncompressed`, `insert_compressed`, `move_member`,
`extract_members`, `remove_members` and `list_members`, plus the
single-member helpers `insert_member`, `insert_member_compressed` and
`extract_member`. Failures are raised as `vinac.archive.ArchiveError`, or as
`OSError` when a file cannot be read or written.

`vinac.lista.IntList` is a small list of integers addressed by position,
where `-1` stands for the last item.

## Limitations

- Member names are stored in at most 99 bytes; longer names are cut short.
- Extraction restores file contents only, not modification times,
  ownership or permissions.
- Archives carry no checksums, so corruption is only noticed when the
  directory or compressed data cannot be decoded.
- Members are plain files given by path; directories are not walked.

## Running the tests

```
pip install ".[test]"
pytest
```