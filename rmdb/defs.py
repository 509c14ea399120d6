"""Core definitions: configuration constants, record ids, column types and values."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from rmdb.errors import InternalError, StringOverflowError

__all__ = [
    "BUFFER_LENGTH",
    "INVALID_FRAME_ID",
    "INVALID_PAGE_ID",
    "INVALID_TXN_ID",
    "INVALID_TIMESTAMP",
    "INVALID_LSN",
    "TXN_START_ID",
    "INVALID_TS",
    "HEADER_PAGE_ID",
    "PAGE_SIZE",
    "BUFFER_POOL_SIZE",
    "LOG_BUFFER_SIZE",
    "BUCKET_SIZE",
    "LOG_FILE_NAME",
    "REPLACER_TYPE",
    "DB_META_NAME",
    "Rid",
    "ColType",
    "coltype2str",
    "TabCol",
    "Value",
    "CompOp",
    "Condition",
    "SetClause",
]

BUFFER_LENGTH = 8192

INVALID_FRAME_ID = -1
INVALID_PAGE_ID = -1
INVALID_TXN_ID = -1
INVALID_TIMESTAMP = -1
INVALID_LSN = -1
TXN_START_ID = 1 << 62
INVALID_TS = -1
HEADER_PAGE_ID = 0
PAGE_SIZE = 4096
BUFFER_POOL_SIZE = 65536
LOG_BUFFER_SIZE = 1024 * PAGE_SIZE
BUCKET_SIZE = 50

LOG_FILE_NAME = "db.log"
REPLACER_TYPE = "LRU"
DB_META_NAME = "db.meta"

_INT_FORMAT = struct.Struct("<i")
_FLOAT_FORMAT = struct.Struct("<f")


@dataclass(frozen=True)
class Rid:
    """Location of a record: page number and slot number."""

    page_no: int
    slot_no: int


class ColType(IntEnum):
    INT = 0
    FLOAT = 1
    STRING = 2


_COLTYPE_NAMES = {ColType.INT: "INT", ColType.FLOAT: "FLOAT", ColType.STRING: "STRING"}


def coltype2str(col_type: ColType) -> str:
    """Return the SQL name of a column type; raises KeyError for unknown types."""
    return _COLTYPE_NAMES[col_type]


@dataclass(frozen=True, order=True)
class TabCol:
    """A column qualified by its table; ordered by (table, column)."""

    tab_name: str
    col_name: str


@dataclass
class Value:
    """A typed literal together with its optional fixed-width raw encoding."""

    type: ColType | None = None
    int_val: int = 0
    float_val: float = 0.0
    str_val: str = ""
    raw: bytes | None = None

    def set_int(self, value: int) -> None:
        self.type = ColType.INT
        self.int_val = value

    def set_float(self, value: float) -> None:
        self.type = ColType.FLOAT
        self.float_val = value

    def set_str(self, value: str) -> None:
        self.type = ColType.STRING
        self.str_val = value

    def init_raw(self, length: int) -> bytes:
        """Encode the value into ``length`` bytes, store it in ``raw`` and return it."""
        if self.raw is not None:
            raise InternalError("raw value already initialised")
        if self.type is ColType.INT:
            if length != _INT_FORMAT.size:
                raise InternalError(f"int value needs {_INT_FORMAT.size} bytes, got {length}")
            raw = _INT_FORMAT.pack(self.int_val)
        elif self.type is ColType.FLOAT:
            if length != _FLOAT_FORMAT.size:
                raise InternalError(f"float value needs {_FLOAT_FORMAT.size} bytes, got {length}")
            raw = _FLOAT_FORMAT.pack(self.float_val)
        elif self.type is ColType.STRING:
            encoded = self.str_val.encode()
            if length < len(encoded):
                raise StringOverflowError()
            raw = encoded.ljust(length, b"\0")
        else:
            raw = bytes(length)
        self.raw = raw
        return raw


class CompOp(IntEnum):
    EQ = 0
    NE = 1
    LT = 2
    GT = 3
    LE = 4
    GE = 5


@dataclass
class Condition:
    """A comparison of a column with another column or with a value."""

    lhs_col: TabCol
    op: CompOp
    is_rhs_val: bool
    rhs_col: TabCol | None = None
    rhs_val: Value = field(default_factory=Value)


@dataclass
class SetClause:
    """An assignment ``lhs = rhs`` in an UPDATE statement."""

    lhs: TabCol
    rhs: Value