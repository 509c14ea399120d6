"""Low-level file and page I/O for database files and the write-ahead log."""

from __future__ import annotations

import os
import shutil
import stat
import threading

from rmdb.defs import LOG_FILE_NAME, PAGE_SIZE
from rmdb.errors import (
    FileAlreadyExistsError,
    FileNotClosedError,
    FileNotOpenError,
    InternalError,
    NoSuchFileError,
    UnixError,
)

__all__ = ["DiskManager"]


class DiskManager:
    """Opens, creates and removes files and reads and writes their pages."""

    MAX_FD = 8192

    def __init__(self) -> None:
        self._path2fd: dict[str, int] = {}
        self._fd2path: dict[int, str] = {}
        self.log_fd = -1
        self._fd2pageno = [0] * self.MAX_FD
        self._alloc_lock = threading.Lock()
        self._io_lock = threading.Lock()

    # Page operations

    def write_page(self, fd: int, page_no: int, data: bytes, num_bytes: int) -> None:
        """Write the first ``num_bytes`` of ``data`` at the start of page ``page_no``."""
        chunk = bytes(data[:num_bytes])
        with self._io_lock:
            try:
                os.lseek(fd, page_no * PAGE_SIZE, os.SEEK_SET)
                written = os.write(fd, chunk)
            except OSError as exc:
                raise UnixError(exc.errno) from exc
        if written != num_bytes:
            raise InternalError("DiskManager::write_page Error")

    def read_page(self, fd: int, page_no: int, num_bytes: int) -> bytes:
        """Read ``num_bytes`` from the start of page ``page_no``."""
        with self._io_lock:
            try:
                os.lseek(fd, page_no * PAGE_SIZE, os.SEEK_SET)
                data = os.read(fd, num_bytes)
            except OSError as exc:
                raise UnixError(exc.errno) from exc
        if len(data) != num_bytes:
            raise InternalError("DiskManager::read_page Error")
        return data

    def allocate_page(self, fd: int) -> int:
        """Hand out the next page number of the file."""
        if not 0 <= fd < self.MAX_FD:
            raise InternalError(f"file descriptor out of range: {fd}")
        with self._alloc_lock:
            page_no = self._fd2pageno[fd]
            self._fd2pageno[fd] = page_no + 1
        return page_no

    def deallocate_page(self, page_id: int) -> None:
        """Page numbers are never reused, so there is nothing to release."""

    def set_fd2pageno(self, fd: int, start_page_no: int) -> None:
        """Set how many pages of the file have been allocated."""
        with self._alloc_lock:
            self._fd2pageno[fd] = start_page_no

    def get_fd2pageno(self, fd: int) -> int:
        """Return how many pages of the file have been allocated."""
        return self._fd2pageno[fd]

    # Directory operations

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def create_dir(self, path: str) -> None:
        try:
            os.mkdir(path)
        except OSError as exc:
            raise UnixError(exc.errno) from exc

    def destroy_dir(self, path: str) -> None:
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise UnixError(exc.errno) from exc

    # File operations

    def is_file(self, path: str) -> bool:
        try:
            return stat.S_ISREG(os.stat(path).st_mode)
        except OSError:
            return False

    def create_file(self, path: str) -> None:
        """Create an empty file; it must not exist yet."""
        if self.is_file(path):
            raise FileAlreadyExistsError(path)
        try:
            fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_RDWR, 0o600)
        except FileExistsError as exc:
            raise FileAlreadyExistsError(path) from exc
        except OSError as exc:
            raise UnixError(exc.errno) from exc
        os.close(fd)

    def destroy_file(self, path: str) -> None:
        """Remove a file that is not open."""
        if path in self._path2fd:
            raise FileNotClosedError(path)
        if not self.is_file(path):
            raise NoSuchFileError(path)
        try:
            os.unlink(path)
        except OSError as exc:
            raise UnixError(exc.errno) from exc

    def open_file(self, path: str) -> int:
        """Open an existing file for reading and writing and return its descriptor."""
        if path in self._path2fd:
            raise FileNotClosedError(path)
        if not self.is_file(path):
            raise NoSuchFileError(path)
        try:
            fd = os.open(path, os.O_RDWR)
        except OSError as exc:
            raise UnixError(exc.errno) from exc
        self._path2fd[path] = fd
        self._fd2path[fd] = path
        return fd

    def close_file(self, fd: int) -> None:
        """Close a descriptor returned by :meth:`open_file`."""
        if not 0 <= fd < self.MAX_FD or fd not in self._fd2path:
            raise FileNotOpenError(fd)
        try:
            os.close(fd)
        except OSError as exc:
            raise UnixError(exc.errno) from exc
        path = self._fd2path.pop(fd)
        self._path2fd.pop(path, None)
        if fd == self.log_fd:
            self.log_fd = -1

    def get_file_size(self, file_name: str) -> int:
        """Return the size of the file in bytes, or -1 if it cannot be read."""
        try:
            return os.stat(file_name).st_size
        except OSError:
            return -1

    def get_file_name(self, fd: int) -> str:
        try:
            return self._fd2path[fd]
        except KeyError:
            raise FileNotOpenError(fd) from None

    def get_file_fd(self, file_name: str) -> int:
        """Return the descriptor of the file, opening it if needed."""
        fd = self._path2fd.get(file_name)
        return self.open_file(file_name) if fd is None else fd

    # Log operations

    def _ensure_log_open(self) -> None:
        if self.log_fd == -1:
            self.log_fd = self.get_file_fd(LOG_FILE_NAME)

    def read_log(self, size: int, offset: int) -> bytes | None:
        """Read up to ``size`` bytes of the log from ``offset``.

        Returns None when ``offset`` lies beyond the end of the log.
        """
        self._ensure_log_open()
        file_size = self.get_file_size(LOG_FILE_NAME)
        if offset > file_size:
            return None
        size = min(size, file_size - offset)
        if size <= 0:
            return b""
        with self._io_lock:
            try:
                os.lseek(self.log_fd, offset, os.SEEK_SET)
                return os.read(self.log_fd, size)
            except OSError as exc:
                raise UnixError(exc.errno) from exc

    def write_log(self, data: bytes) -> None:
        """Append ``data`` to the log."""
        self._ensure_log_open()
        with self._io_lock:
            try:
                os.lseek(self.log_fd, 0, os.SEEK_END)
                written = os.write(self.log_fd, bytes(data))
            except OSError as exc:
                raise UnixError(exc.errno) from exc
        if written != len(data):
            raise UnixError()