"""Page identifiers and in-memory page frames."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from rmdb.defs import INVALID_PAGE_ID, PAGE_SIZE

__all__ = ["PageId", "Page"]

_LSN_FORMAT = struct.Struct("<i")


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


@dataclass(frozen=True)
class PageId:
    """Identifies a page by the descriptor of its file and its page number."""

    fd: int
    page_no: int = INVALID_PAGE_ID

    def get(self) -> int:
        """Pack the id into one integer: fd in the high bits, page number in the low 16."""
        return _to_int32(self.fd << 16) | self.page_no

    def __hash__(self) -> int:
        return hash(self.get())

    def __lt__(self, other: PageId) -> bool:
        if not isinstance(other, PageId):
            return NotImplemented
        if self.fd < other.fd:
            return True
        return self.page_no < other.page_no

    def __str__(self) -> str:
        return f"{{fd: {self.fd} page_no: {self.page_no}}}"


@dataclass(eq=False)
class Page:
    """A buffer-pool frame holding one page of data."""

    OFFSET_PAGE_START = 0
    OFFSET_LSN = 0
    OFFSET_PAGE_HDR = 4

    page_id: PageId = field(default_factory=lambda: PageId(-1))
    data: bytearray = field(default_factory=lambda: bytearray(PAGE_SIZE))
    is_dirty: bool = False
    pin_count: int = 0

    def reset_memory(self) -> None:
        """Zero the page contents in place."""
        self.data[:] = bytes(PAGE_SIZE)

    @property
    def page_lsn(self) -> int:
        return _LSN_FORMAT.unpack_from(self.data, self.OFFSET_LSN)[0]

    @page_lsn.setter
    def page_lsn(self, lsn: int) -> None:
        _LSN_FORMAT.pack_into(self.data, self.OFFSET_LSN, lsn)