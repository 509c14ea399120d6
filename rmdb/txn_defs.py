"""Transaction states, write records, lock identifiers and the abort exception."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from rmdb.defs import Rid

__all__ = [
    "TransactionState",
    "IsolationLevel",
    "WType",
    "WriteRecord",
    "LockDataType",
    "LockDataId",
    "AbortReason",
    "TransactionAbortException",
]


class TransactionState(Enum):
    DEFAULT = 0
    GROWING = 1
    SHRINKING = 2
    COMMITTED = 3
    ABORTED = 4


class IsolationLevel(Enum):
    READ_UNCOMMITTED = 0
    REPEATABLE_READ = 1
    READ_COMMITTED = 2
    SERIALIZABLE = 3


class WType(IntEnum):
    """Kind of write a transaction performed, kept for rollback."""

    INSERT_TUPLE = 0
    DELETE_TUPLE = 1
    UPDATE_TUPLE = 2


@dataclass
class WriteRecord:
    """One write of a transaction.

    Inserts carry only the record id; deletes and updates also carry the old
    record bytes so the write can be undone.
    """

    wtype: WType
    tab_name: str
    rid: Rid
    record: bytes | None = None


class LockDataType(IntEnum):
    """Granularity of a lock: a whole table or a single record."""

    TABLE = 0
    RECORD = 1


_NO_RID = Rid(-1, -1)


def _to_int64(value: int) -> int:
    value &= 0xFFFFFFFFFFFFFFFF
    return value - (1 << 64) if value & (1 << 63) else value


@dataclass(frozen=True)
class LockDataId:
    """Identifies the object a lock is held on."""

    fd: int
    type: LockDataType
    rid: Rid = field(default=_NO_RID)

    def __post_init__(self) -> None:
        if self.type is LockDataType.TABLE and self.rid != _NO_RID:
            raise ValueError("a table lock does not name a record")

    @staticmethod
    def table(fd: int) -> LockDataId:
        """Identifier of a lock on the whole table stored in file ``fd``."""
        return LockDataId(fd, LockDataType.TABLE)

    @staticmethod
    def record(fd: int, rid: Rid) -> LockDataId:
        """Identifier of a lock on record ``rid`` of the table in file ``fd``."""
        return LockDataId(fd, LockDataType.RECORD, rid)

    def get(self) -> int:
        """Pack the identifier into one signed 64-bit integer."""
        if self.type is LockDataType.TABLE:
            return self.fd
        return _to_int64(
            (int(self.type) << 63) | (self.fd << 31) | (self.rid.page_no << 16) | self.rid.slot_no
        )

    def __hash__(self) -> int:
        return hash(self.get())


class AbortReason(IntEnum):
    LOCK_ON_SHIRINKING = 0
    UPGRADE_CONFLICT = 1
    DEADLOCK_PREVENTION = 2


class TransactionAbortException(Exception):
    """Raised when a transaction must be rolled back."""

    def __init__(self, txn_id: int, abort_reason: AbortReason) -> None:
        self.txn_id = txn_id
        self.abort_reason = abort_reason
        super().__init__(self.info())

    def info(self) -> str:
        """A readable explanation of why the transaction was aborted."""
        if self.abort_reason is AbortReason.LOCK_ON_SHIRINKING:
            return (
                f"Transaction {self.txn_id} aborted because it cannot request locks on SHRINKING phase\n"
            )
        if self.abort_reason is AbortReason.UPGRADE_CONFLICT:
            return (
                f"Transaction {self.txn_id} aborted because another transaction is waiting for upgrading\n"
            )
        if self.abort_reason is AbortReason.DEADLOCK_PREVENTION:
            return f"Transaction {self.txn_id} aborted for deadlock prevention\n"
        return "Transaction aborted\n"