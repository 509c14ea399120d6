"""System manager: database directories, catalog metadata and catalog commands."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from typing import Any

from rmdb.buffer_pool import BufferPoolManager
from rmdb.defs import DB_META_NAME, LOG_FILE_NAME, ColType, coltype2str
from rmdb.disk_manager import DiskManager
from rmdb.errors import DatabaseExistsError, DatabaseNotFoundError, UnixError
from rmdb.output import Context, RecordPrinter
from rmdb.sm_meta import DbMeta, dump_db_meta

__all__ = ["OUTPUT_FILE_NAME", "ColDef", "SmManager"]

OUTPUT_FILE_NAME = "output.txt"


@dataclass
class ColDef:
    """A column as declared in CREATE TABLE."""

    name: str
    type: ColType
    len: int


@dataclass
class SmManager:
    """Owns the metadata of the open database and runs catalog statements."""

    disk_manager: DiskManager
    buffer_pool_manager: BufferPoolManager
    rm_manager: Any = None
    ix_manager: Any = None
    db: DbMeta = field(default_factory=DbMeta)
    fhs: dict[str, Any] = field(default_factory=dict)
    ihs: dict[str, Any] = field(default_factory=dict)

    def is_dir(self, db_name: str) -> bool:
        return os.path.isdir(db_name)

    def create_db(self, db_name: str) -> None:
        """Create the database directory with an empty catalog and an empty log."""
        if self.is_dir(db_name):
            raise DatabaseExistsError(db_name)
        try:
            os.mkdir(db_name)
        except OSError as exc:
            raise UnixError(exc.errno) from exc
        with open(os.path.join(db_name, DB_META_NAME), "w", encoding="utf-8") as meta_file:
            meta_file.write(dump_db_meta(DbMeta(name=db_name)))
        self.disk_manager.create_file(os.path.join(db_name, LOG_FILE_NAME))

    def drop_db(self, db_name: str) -> None:
        """Remove the database directory and everything in it."""
        if not self.is_dir(db_name):
            raise DatabaseNotFoundError(db_name)
        try:
            shutil.rmtree(db_name)
        except OSError as exc:
            raise UnixError(exc.errno) from exc

    def flush_meta(self) -> None:
        """Rewrite the catalog file in the current directory."""
        with open(DB_META_NAME, "w", encoding="utf-8") as meta_file:
            meta_file.write(dump_db_meta(self.db))

    def show_tables(self, context: Context) -> None:
        """List the tables into the context and append them to the output file."""
        printer = RecordPrinter(1)
        with open(OUTPUT_FILE_NAME, "a", encoding="utf-8") as outfile:
            outfile.write("| Tables |\n")
            printer.print_separator(context)
            printer.print_record(["Tables"], context)
            printer.print_separator(context)
            for tab in self.db.sorted_tables():
                printer.print_record([tab.name], context)
                outfile.write(f"| {tab.name} |\n")
            printer.print_separator(context)

    def desc_table(self, tab_name: str, context: Context) -> None:
        """Describe the columns of a table into the context."""
        tab = self.db.get_table(tab_name)
        captions = ["Field", "Type", "Index"]
        printer = RecordPrinter(len(captions))
        printer.print_separator(context)
        printer.print_record(captions, context)
        printer.print_separator(context)
        for col in tab.cols:
            printer.print_record([col.name, coltype2str(col.type), "YES" if col.index else "NO"], context)
        printer.print_separator(context)