import os

import pytest

from rmdb.defs import PAGE_SIZE
from rmdb.disk_manager import DiskManager
from rmdb.errors import (
    FileAlreadyExistsError,
    FileNotClosedError,
    FileNotOpenError,
    InternalError,
    NoSuchFileError,
)


@pytest.fixture
def dm():
    return DiskManager()


@pytest.fixture
def opened(dm, tmp_path):
    path = str(tmp_path / "basic")
    dm.create_file(path)
    fd = dm.open_file(path)
    yield dm, fd, path
    if fd in dm._fd2path:
        dm.close_file(fd)


def test_open_without_create_raises(dm, tmp_path):
    with pytest.raises(NoSuchFileError):
        dm.open_file(str(tmp_path / "0.txt"))


def test_create_twice_raises(dm, tmp_path):
    path = str(tmp_path / "0.txt")
    dm.create_file(path)
    assert dm.is_file(path)
    with pytest.raises(FileAlreadyExistsError):
        dm.create_file(path)


def test_destroy_missing_raises(dm, tmp_path):
    path = str(tmp_path / "gone.txt")
    dm.create_file(path)
    dm.destroy_file(path)
    assert not dm.is_file(path)
    with pytest.raises(NoSuchFileError):
        dm.destroy_file(path)


def test_destroy_open_file_raises(opened):
    dm, _fd, path = opened
    with pytest.raises(FileNotClosedError):
        dm.destroy_file(path)


def test_open_twice_raises(opened):
    dm, _fd, path = opened
    with pytest.raises(FileNotClosedError):
        dm.open_file(path)


def test_write_read_page_roundtrip(opened):
    dm, fd, _ = opened
    first = bytes(range(256)) * (PAGE_SIZE // 256)
    second = b"\x7f" * PAGE_SIZE
    dm.write_page(fd, 0, first, PAGE_SIZE)
    dm.write_page(fd, 1, second, PAGE_SIZE)
    assert dm.read_page(fd, 0, PAGE_SIZE) == first
    assert dm.read_page(fd, 1, PAGE_SIZE) == second
    assert dm.get_file_size(dm.get_file_name(fd)) == 2 * PAGE_SIZE


def test_read_beyond_end_raises(opened):
    dm, fd, _ = opened
    with pytest.raises(InternalError):
        dm.read_page(fd, 3, PAGE_SIZE)


def test_allocate_page_increments(opened):
    dm, fd, _ = opened
    assert [dm.allocate_page(fd) for _ in range(3)] == [0, 1, 2]
    assert dm.get_fd2pageno(fd) == 3
    dm.set_fd2pageno(fd, 10)
    assert dm.allocate_page(fd) == 10


def test_allocate_page_out_of_range(dm):
    with pytest.raises(InternalError):
        dm.allocate_page(DiskManager.MAX_FD)


def test_close_unknown_fd_raises(dm):
    with pytest.raises(FileNotOpenError):
        dm.close_file(-1)


def test_close_then_names_forgotten(opened):
    dm, fd, path = opened
    assert dm.get_file_name(fd) == path
    dm.close_file(fd)
    with pytest.raises(FileNotOpenError):
        dm.get_file_name(fd)
    with pytest.raises(FileNotOpenError):
        dm.close_file(fd)


def test_get_file_fd_opens_when_needed(dm, tmp_path):
    path = str(tmp_path / "f")
    dm.create_file(path)
    fd = dm.get_file_fd(path)
    assert dm.get_file_fd(path) == fd
    assert dm.get_file_name(fd) == path
    dm.close_file(fd)


def test_get_file_size_missing(dm, tmp_path):
    assert dm.get_file_size(str(tmp_path / "none")) == -1


def test_directories(dm, tmp_path):
    path = str(tmp_path / "db")
    assert not dm.is_dir(path)
    dm.create_dir(path)
    assert dm.is_dir(path)
    with open(os.path.join(path, "x"), "w") as fh:
        fh.write("x")
    dm.destroy_dir(path)
    assert not dm.is_dir(path)


def test_log_append_and_read(dm, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    dm.create_file("db.log")
    dm.write_log(b"abc")
    dm.write_log(b"def")
    assert dm.read_log(4, 1) == b"bcde"
    assert dm.read_log(100, 0) == b"abcdef"
    assert dm.read_log(10, 6) == b""
    assert dm.read_log(10, 7) is None
    dm.close_file(dm.log_fd)
    assert dm.log_fd == -1