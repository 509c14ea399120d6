"""Exception hierarchy used throughout the database engine."""

from __future__ import annotations

import os
from collections.abc import Iterable
from enum import IntEnum

__all__ = [
    "RMDBError",
    "InternalError",
    "UnixError",
    "FileNotOpenError",
    "FileNotClosedError",
    "FileAlreadyExistsError",
    "NoSuchFileError",
    "RecordNotFoundError",
    "InvalidRecordSizeError",
    "InvalidColLengthError",
    "IndexEntryNotFoundError",
    "DatabaseNotFoundError",
    "DatabaseExistsError",
    "TableNotFoundError",
    "TableExistsError",
    "ColumnNotFoundError",
    "IndexNotFoundError",
    "IndexExistsError",
    "InvalidValueCountError",
    "StringOverflowError",
    "IncompatibleTypeError",
    "AmbiguousColumnError",
    "PageNotExistError",
    "ExceptionType",
    "DbException",
    "NotImplementedException",
    "ExecutionException",
    "exception_type_to_string",
]


class RMDBError(Exception):
    """Base class of all errors reported to clients; messages start with 'Error: '."""

    def __init__(self, msg: str = "") -> None:
        self.msg = "Error: " + msg
        super().__init__(self.msg)

    def __str__(self) -> str:
        return self.msg


class InternalError(RMDBError):
    """An unexpected internal condition."""


class UnixError(RMDBError):
    """An operating-system call failed."""

    def __init__(self, errno_code: int | None = None) -> None:
        self.errno = errno_code
        super().__init__(os.strerror(errno_code) if errno_code is not None else "Unknown error")


# Storage errors


class FileNotOpenError(RMDBError):
    def __init__(self, fd: int) -> None:
        self.fd = fd
        super().__init__(f"Invalid file descriptor: {fd}")


class FileNotClosedError(RMDBError):
    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"File is opened: {filename}")


class FileAlreadyExistsError(RMDBError):
    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"File already exists: {filename}")


class NoSuchFileError(RMDBError):
    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"File not found: {filename}")


# Record errors


class RecordNotFoundError(RMDBError):
    def __init__(self, page_no: int, slot_no: int) -> None:
        self.page_no = page_no
        self.slot_no = slot_no
        super().__init__(f"Record not found: ({page_no},{slot_no})")


class InvalidRecordSizeError(RMDBError):
    def __init__(self, record_size: int) -> None:
        self.record_size = record_size
        super().__init__(f"Invalid record size: {record_size}")


# Index errors


class InvalidColLengthError(RMDBError):
    def __init__(self, col_len: int) -> None:
        self.col_len = col_len
        super().__init__(f"Invalid column length: {col_len}")


class IndexEntryNotFoundError(RMDBError):
    def __init__(self) -> None:
        super().__init__("Index entry not found")


# System-manager errors


class DatabaseNotFoundError(RMDBError):
    def __init__(self, db_name: str) -> None:
        self.db_name = db_name
        super().__init__(f"Database not found: {db_name}")


class DatabaseExistsError(RMDBError):
    def __init__(self, db_name: str) -> None:
        self.db_name = db_name
        super().__init__(f"Database already exists: {db_name}")


class TableNotFoundError(RMDBError):
    def __init__(self, tab_name: str) -> None:
        self.tab_name = tab_name
        super().__init__(f"Table not found: {tab_name}")


class TableExistsError(RMDBError):
    def __init__(self, tab_name: str) -> None:
        self.tab_name = tab_name
        super().__init__(f"Table already exists: {tab_name}")


class ColumnNotFoundError(RMDBError):
    def __init__(self, col_name: str) -> None:
        self.col_name = col_name
        super().__init__(f"Column not found: {col_name}")


class IndexNotFoundError(RMDBError):
    def __init__(self, tab_name: str, col_names: Iterable[str]) -> None:
        self.tab_name = tab_name
        self.col_names = list(col_names)
        super().__init__(f"Index not found: {tab_name}.({', '.join(self.col_names)})")


class IndexExistsError(RMDBError):
    def __init__(self, tab_name: str, col_names: Iterable[str]) -> None:
        self.tab_name = tab_name
        self.col_names = list(col_names)
        super().__init__(f"Index already exists: {tab_name}.({', '.join(self.col_names)})")


# Query-layer errors


class InvalidValueCountError(RMDBError):
    def __init__(self) -> None:
        super().__init__("Invalid value count")


class StringOverflowError(RMDBError):
    def __init__(self) -> None:
        super().__init__("String is too long")


class IncompatibleTypeError(RMDBError):
    def __init__(self, lhs: str, rhs: str) -> None:
        self.lhs = lhs
        self.rhs = rhs
        super().__init__(f"Incompatible type error: lhs {lhs}, rhs {rhs}")


class AmbiguousColumnError(RMDBError):
    def __init__(self, col_name: str) -> None:
        self.col_name = col_name
        super().__init__(f"Ambiguous column: {col_name}")


class PageNotExistError(RMDBError):
    def __init__(self, table_name: str, page_no: int) -> None:
        self.table_name = table_name
        self.page_no = page_no
        super().__init__(f"Page {page_no} in table {table_name}not exits")


# Typed execution exceptions


class ExceptionType(IntEnum):
    """Kinds of typed exception the engine can raise."""

    INVALID = 0
    OUT_OF_RANGE = 1
    CONVERSION = 2
    UNKNOWN_TYPE = 3
    DECIMAL = 4
    MISMATCH_TYPE = 5
    DIVIDE_BY_ZERO = 6
    INCOMPATIBLE_TYPE = 8
    OUT_OF_MEMORY = 9
    NOT_IMPLEMENTED = 11
    EXECUTION = 12


_EXCEPTION_TYPE_NAMES = {
    ExceptionType.INVALID: "Invalid",
    ExceptionType.OUT_OF_RANGE: "Out of Range",
    ExceptionType.CONVERSION: "Conversion",
    ExceptionType.UNKNOWN_TYPE: "Unknown Type",
    ExceptionType.DECIMAL: "Decimal",
    ExceptionType.MISMATCH_TYPE: "Mismatch Type",
    ExceptionType.DIVIDE_BY_ZERO: "Divide by Zero",
    ExceptionType.INCOMPATIBLE_TYPE: "Incompatible type",
    ExceptionType.OUT_OF_MEMORY: "Out of Memory",
    ExceptionType.NOT_IMPLEMENTED: "Not implemented",
    ExceptionType.EXECUTION: "Execution",
}


def exception_type_to_string(exception_type: ExceptionType | int) -> str:
    """Return a readable name for an exception type, or 'Unknown'."""
    return _EXCEPTION_TYPE_NAMES.get(exception_type, "Unknown")


class DbException(RuntimeError):
    """A runtime error carrying an :class:`ExceptionType`."""

    def __init__(self, message: str, exception_type: ExceptionType = ExceptionType.INVALID) -> None:
        super().__init__(message)
        self.message = message
        self.exception_type = exception_type


class NotImplementedException(DbException):
    def __init__(self, message: str) -> None:
        super().__init__(message, ExceptionType.NOT_IMPLEMENTED)


class ExecutionException(DbException):
    def __init__(self, message: str) -> None:
        super().__init__(message, ExceptionType.EXECUTION)