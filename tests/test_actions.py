from pathlib import Path

import pytest

from vinac.actions import (
    extract_member,
    extract_members,
    insert_compressed,
    insert_member_compressed,
    insert_uncompressed,
    list_members,
    move_member,
    remove_members,
)
from vinac.archive import HEADER_SIZE, Archive, ArchiveError
from vinac.membro import RECORD_SIZE

REPEATED = b"abcdefgh" * 200
ARCHIVE = "arq.vc"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write(name, data):
    Path(name).write_bytes(data)
    return name


@pytest.fixture
def three(workdir):
    contents = {"a.txt": b"first file", "b.txt": REPEATED, "c.txt": b"third"}
    for name, data in contents.items():
        write(name, data)
    insert_uncompressed(ARCHIVE, list(contents))
    return contents


def names():
    return [member.name for member in list_members(ARCHIVE)]


def test_insert_uncompressed_stores_members_in_order(workdir):
    write("a.txt", b"hello")
    write("b.txt", b"world!!")
    inserted = insert_uncompressed(ARCHIVE, ["a.txt", "b.txt"])
    assert [m.name for m in inserted] == ["a.txt", "b.txt"]
    loaded = list_members(ARCHIVE)
    assert [m.name for m in loaded] == ["a.txt", "b.txt"]
    for member in loaded:
        assert member.compressed is False
        assert member.disk_size == member.original_size
    assert loaded[0].original_size == len(b"hello")
    assert loaded[0].offset == HEADER_SIZE + 2 * RECORD_SIZE
    assert loaded[1].offset == loaded[0].offset + loaded[0].disk_size


def test_uncompressed_round_trip(workdir):
    write("a.txt", b"hello")
    write("b.txt", REPEATED)
    insert_uncompressed(ARCHIVE, ["a.txt", "b.txt"])
    Path("a.txt").unlink()
    Path("b.txt").unlink()
    written = extract_members(ARCHIVE)
    assert written == [Path("a.txt"), Path("b.txt")]
    assert Path("a.txt").read_bytes() == b"hello"
    assert Path("b.txt").read_bytes() == REPEATED


def test_compressed_round_trip(workdir):
    write("big.bin", REPEATED)
    (member,) = insert_compressed(ARCHIVE, ["big.bin"])
    assert member.compressed is True
    assert member.disk_size < member.original_size
    Path("big.bin").unlink()
    extract_members(ARCHIVE)
    assert Path("big.bin").read_bytes() == REPEATED


def test_incompressible_data_is_stored_plain(workdir):
    data = bytes(range(256))
    write("noise.bin", data)
    (member,) = insert_compressed(ARCHIVE, ["noise.bin"])
    assert member.compressed is False
    assert member.disk_size == len(data)
    Path("noise.bin").unlink()
    extract_members(ARCHIVE)
    assert Path("noise.bin").read_bytes() == data


def test_empty_file_cannot_be_compressed(workdir):
    write("empty.bin", b"")
    archive = Archive.create(ARCHIVE)
    with pytest.raises(ArchiveError):
        insert_member_compressed(archive, "empty.bin")
    assert insert_compressed(ARCHIVE, ["empty.bin"]) == []
    assert list_members(ARCHIVE) == []


def test_missing_file_is_skipped(workdir, capsys):
    write("a.txt", b"present")
    inserted = insert_uncompressed(ARCHIVE, ["a.txt", "missing.txt"])
    assert [m.name for m in inserted] == ["a.txt"]
    assert "missing.txt" in capsys.readouterr().err
    assert names() == ["a.txt"]


def test_reinsert_replaces_member(workdir):
    write("a.txt", b"one")
    insert_uncompressed(ARCHIVE, ["a.txt"])
    new = b"second version of the file"
    write("a.txt", new)
    insert_uncompressed(ARCHIVE, ["a.txt"])
    loaded = list_members(ARCHIVE)
    assert len(loaded) == 1
    assert loaded[0].original_size == len(new)
    Path("a.txt").unlink()
    extract_members(ARCHIVE)
    assert Path("a.txt").read_bytes() == new


def test_insert_into_existing_archive_appends(workdir):
    write("a.txt", b"aaa")
    write("b.txt", b"bbb")
    insert_uncompressed(ARCHIVE, ["a.txt"])
    insert_compressed(ARCHIVE, ["b.txt"])
    assert names() == ["a.txt", "b.txt"]


def test_move_to_front(three):
    assert move_member(ARCHIVE, "c.txt") == ["c.txt", "a.txt", "b.txt"]
    assert names() == ["c.txt", "a.txt", "b.txt"]
    assert [m.order for m in list_members(ARCHIVE)] == [0, 1, 2]
    for name in three:
        Path(name).unlink()
    extract_members(ARCHIVE)
    for name, data in three.items():
        assert Path(name).read_bytes() == data


def test_move_forward_after_target(three):
    assert move_member(ARCHIVE, "a.txt", "c.txt") == ["b.txt", "c.txt", "a.txt"]


def test_move_backward_after_target(three):
    assert move_member(ARCHIVE, "c.txt", "a.txt") == ["a.txt", "c.txt", "b.txt"]


def test_move_after_itself_keeps_order(three):
    assert move_member(ARCHIVE, "b.txt", "b.txt") == ["a.txt", "b.txt", "c.txt"]


def test_move_missing_member_or_target(three):
    with pytest.raises(ArchiveError):
        move_member(ARCHIVE, "nope.txt")
    with pytest.raises(ArchiveError):
        move_member(ARCHIVE, "a.txt", "nope.txt")
    assert names() == ["a.txt", "b.txt", "c.txt"]


def test_remove_named_member(three):
    assert remove_members(ARCHIVE, ["b.txt"]) == ["b.txt"]
    assert names() == ["a.txt", "c.txt"]
    Path("a.txt").unlink()
    Path("c.txt").unlink()
    extract_members(ARCHIVE)
    assert Path("a.txt").read_bytes() == three["a.txt"]
    assert Path("c.txt").read_bytes() == three["c.txt"]


def test_remove_all_members(three):
    assert remove_members(ARCHIVE) == ["a.txt", "b.txt", "c.txt"]
    assert list_members(ARCHIVE) == []
    assert Path(ARCHIVE).stat().st_size == HEADER_SIZE


def test_remove_missing_member_is_reported(three, capsys):
    assert remove_members(ARCHIVE, ["nope.txt"]) == []
    assert "nope.txt" in capsys.readouterr().err
    assert names() == ["a.txt", "b.txt", "c.txt"]


def test_extract_named_member_only(three):
    for name in three:
        Path(name).unlink()
    assert extract_members(ARCHIVE, ["b.txt"]) == [Path("b.txt")]
    assert Path("b.txt").read_bytes() == REPEATED
    assert not Path("a.txt").exists()


def test_extract_missing_member_raises(three):
    with pytest.raises(ArchiveError):
        extract_members(ARCHIVE, ["nope.txt"])


def test_extract_member_by_index(workdir):
    write("big.bin", REPEATED)
    insert_compressed(ARCHIVE, ["big.bin"])
    Path("big.bin").unlink()
    archive = Archive.load(ARCHIVE)
    assert extract_member(archive, 0) == Path("big.bin")
    assert Path("big.bin").read_bytes() == REPEATED
    with pytest.raises(IndexError):
        extract_member(archive, 5)


def test_list_missing_archive_raises(workdir):
    with pytest.raises(FileNotFoundError):
        list_members("absent.vc")