"""Query context and the fixed-width table printer that fills its result buffer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from rmdb.defs import BUFFER_LENGTH

__all__ = ["RECORD_COUNT_LENGTH", "Context", "RecordPrinter"]

# Room kept free at the end of the buffer for the record-count footer.
RECORD_COUNT_LENGTH = 40


@dataclass
class Context:
    """Per-statement state: managers, the current transaction and the result buffer."""

    lock_mgr: Any = None
    log_mgr: Any = None
    txn: Any = None
    data_send: bytearray = field(default_factory=bytearray)
    ellipsis: bool = False

    @property
    def offset(self) -> int:
        """Number of bytes written to the result buffer so far."""
        return len(self.data_send)

    def text(self) -> str:
        """The result buffer decoded as text."""
        return self.data_send.decode("utf-8", errors="replace")


class RecordPrinter:
    """Writes rows of a fixed number of columns as an ASCII table into a context."""

    COL_WIDTH = 16

    def __init__(self, num_cols: int) -> None:
        if num_cols <= 0:
            raise ValueError("a record printer needs at least one column")
        self.num_cols = num_cols

    @staticmethod
    def _emit(context: Context, text: str, *, mark_ellipsis: bool = True) -> None:
        chunk = text.encode("utf-8")
        if not context.ellipsis and context.offset + RECORD_COUNT_LENGTH + len(chunk) < BUFFER_LENGTH:
            context.data_send += chunk
        elif mark_ellipsis:
            context.ellipsis = True

    def print_separator(self, context: Context) -> None:
        """Write a horizontal rule such as ``+----...----+``."""
        segment = "+" + "-" * (self.COL_WIDTH + 2)
        for _ in range(self.num_cols):
            self._emit(context, segment)
        self._emit(context, "+\n")

    def print_record(self, rec_str: Sequence[str], context: Context) -> None:
        """Write one row; values longer than the column width are cut and end in '...'."""
        if len(rec_str) != self.num_cols:
            raise ValueError(f"expected {self.num_cols} values, got {len(rec_str)}")
        for col in rec_str:
            if len(col) > self.COL_WIDTH:
                col = col[: self.COL_WIDTH - 3] + "..."
            self._emit(context, f"| {col:>{self.COL_WIDTH}} ")
        self._emit(context, "|\n", mark_ellipsis=False)

    @staticmethod
    def print_record_count(num_rec: int, context: Context) -> None:
        """Write the footer with the number of records, noting any truncated output."""
        text = "... ...\n" if context.ellipsis else ""
        text += f"Total record(s): {num_rec}\n"
        context.data_send += text.encode("utf-8")