"""Transactions and the undo logs kept for multi-version reads."""

from __future__ import annotations

import copy
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from rmdb.defs import INVALID_LSN, INVALID_TS, INVALID_TXN_ID, Value
from rmdb.txn_defs import IsolationLevel, LockDataId, TransactionState, WriteRecord

__all__ = ["UndoLink", "UndoLog", "Transaction"]


@dataclass(frozen=True)
class UndoLink:
    """Points to a previous tuple version: a transaction and an index into its undo logs."""

    prev_txn: int = INVALID_TXN_ID
    prev_log_idx: int = 0

    def is_valid(self) -> bool:
        return self.prev_txn != INVALID_TXN_ID


@dataclass
class UndoLog:
    """The fields a write changed, so an older version of a tuple can be rebuilt."""

    is_deleted: bool = False
    modified_fields: list[bool] = field(default_factory=list)
    tuple: list[Value] = field(default_factory=list)
    tuple_test: bytes | None = None
    ts: int = INVALID_TS
    prev_version: UndoLink = field(default_factory=UndoLink)


class Transaction:
    """State of one transaction: its writes, locks, latched pages and undo logs."""

    def __init__(self, txn_id: int, isolation_level: IsolationLevel = IsolationLevel.SERIALIZABLE) -> None:
        self.txn_id = txn_id
        self.isolation_level = isolation_level
        self.state = TransactionState.DEFAULT
        self.txn_mode = False
        self.thread_id = threading.get_ident()
        self.prev_lsn = INVALID_LSN
        self.start_ts = 0
        self.read_ts = 0
        self.commit_ts = INVALID_TS
        self.write_set: deque[WriteRecord] = deque()
        self.lock_set: set[LockDataId] = set()
        self.index_latch_page_set: deque[Any] = deque()
        self.index_deleted_page_set: deque[Any] = deque()
        self._undo_logs: list[UndoLog] = []
        self._latch = threading.Lock()

    def append_write_record(self, write_record: WriteRecord) -> None:
        self.write_set.append(write_record)

    def append_index_deleted_page(self, page: Any) -> None:
        self.index_deleted_page_set.append(page)

    def append_index_latch_page(self, page: Any) -> None:
        self.index_latch_page_set.append(page)

    def append_undo_log(self, log: UndoLog) -> UndoLink:
        """Store an undo log and return the link that refers to it."""
        with self._latch:
            self._undo_logs.append(log)
            return UndoLink(self.txn_id, len(self._undo_logs) - 1)

    def modify_undo_log(self, log_idx: int, new_log: UndoLog) -> None:
        """Replace an existing undo log in place; raises IndexError if there is none."""
        with self._latch:
            if not 0 <= log_idx < len(self._undo_logs):
                raise IndexError(f"undo log index out of range: {log_idx}")
            self._undo_logs[log_idx] = new_log

    def get_undo_log(self, log_id: int) -> UndoLog:
        """Return a copy of the undo log; raises IndexError if there is none."""
        with self._latch:
            if not 0 <= log_id < len(self._undo_logs):
                raise IndexError(f"undo log index out of range: {log_id}")
            return copy.deepcopy(self._undo_logs[log_id])

    def undo_log_count(self) -> int:
        with self._latch:
            return len(self._undo_logs)