"""Catalog metadata for columns, indexes, tables and databases, and its text format."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from rmdb.defs import ColType
from rmdb.errors import ColumnNotFoundError, IndexNotFoundError, TableNotFoundError

__all__ = ["ColMeta", "IndexMeta", "TabMeta", "DbMeta", "dump_db_meta", "load_db_meta"]


@dataclass
class ColMeta:
    """A column: its table, name, type, byte length and offset within a record."""

    tab_name: str
    name: str
    type: ColType
    len: int
    offset: int
    index: bool = False


@dataclass
class IndexMeta:
    """An index over one or more columns of a table."""

    tab_name: str
    col_tot_len: int = 0
    col_num: int = 0
    cols: list[ColMeta] = field(default_factory=list)


@dataclass
class TabMeta:
    """A table: its columns and the indexes built on it."""

    name: str = ""
    cols: list[ColMeta] = field(default_factory=list)
    indexes: list[IndexMeta] = field(default_factory=list)

    def is_col(self, col_name: str) -> bool:
        return any(col.name == col_name for col in self.cols)

    def is_index(self, col_names: Sequence[str]) -> bool:
        """Whether an index exists on exactly these columns, in this order."""
        return self._find_index(col_names) is not None

    def get_index_meta(self, col_names: Sequence[str]) -> IndexMeta:
        index = self._find_index(col_names)
        if index is None:
            raise IndexNotFoundError(self.name, col_names)
        return index

    def get_col(self, col_name: str) -> ColMeta:
        for col in self.cols:
            if col.name == col_name:
                return col
        raise ColumnNotFoundError(col_name)

    def _find_index(self, col_names: Sequence[str]) -> IndexMeta | None:
        wanted = list(col_names)
        for index in self.indexes:
            if index.col_num == len(wanted) and [col.name for col in index.cols[: len(wanted)]] == wanted:
                return index
        return None


@dataclass
class DbMeta:
    """A database: its name and its tables by name."""

    name: str = ""
    tabs: dict[str, TabMeta] = field(default_factory=dict)

    def is_table(self, tab_name: str) -> bool:
        return tab_name in self.tabs

    def set_tab_meta(self, tab_name: str, meta: TabMeta) -> None:
        self.tabs[tab_name] = meta

    def get_table(self, tab_name: str) -> TabMeta:
        try:
            return self.tabs[tab_name]
        except KeyError:
            raise TableNotFoundError(tab_name) from None

    def sorted_tables(self) -> list[TabMeta]:
        """Tables in order of their names."""
        return [self.tabs[name] for name in sorted(self.tabs)]


def _dump_col(col: ColMeta) -> str:
    return f"{col.tab_name} {col.name} {int(col.type)} {col.len} {col.offset} {int(col.index)}"


def _dump_index(index: IndexMeta) -> str:
    return f"{index.tab_name} {index.col_tot_len} {index.col_num}" + "".join(
        "\n" + _dump_col(col) for col in index.cols
    )


def _dump_tab(tab: TabMeta) -> str:
    parts = [f"{tab.name}\n{len(tab.cols)}\n"]
    parts.extend(_dump_col(col) + "\n" for col in tab.cols)
    parts.append(f"{len(tab.indexes)}\n")
    parts.extend(_dump_index(index) + "\n" for index in tab.indexes)
    return "".join(parts)


def dump_db_meta(db_meta: DbMeta) -> str:
    """Serialise database metadata to its whitespace-separated text form."""
    parts = [f"{db_meta.name}\n{len(db_meta.tabs)}\n"]
    parts.extend(_dump_tab(tab) + "\n" for tab in db_meta.sorted_tables())
    return "".join(parts)


class _Tokens:
    def __init__(self, text: str) -> None:
        self._it: Iterator[str] = iter(text.split())

    def word(self) -> str:
        try:
            return next(self._it)
        except StopIteration:
            raise ValueError("truncated database metadata") from None

    def number(self) -> int:
        token = self.word()
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected a number in database metadata, got {token!r}") from None


def _load_col(tokens: _Tokens) -> ColMeta:
    return ColMeta(
        tab_name=tokens.word(),
        name=tokens.word(),
        type=ColType(tokens.number()),
        len=tokens.number(),
        offset=tokens.number(),
        index=bool(tokens.number()),
    )


def _load_index(tokens: _Tokens) -> IndexMeta:
    index = IndexMeta(tab_name=tokens.word(), col_tot_len=tokens.number(), col_num=tokens.number())
    index.cols = [_load_col(tokens) for _ in range(index.col_num)]
    return index


def _load_tab(tokens: _Tokens) -> TabMeta:
    tab = TabMeta(name=tokens.word())
    tab.cols = [_load_col(tokens) for _ in range(tokens.number())]
    tab.indexes = [_load_index(tokens) for _ in range(tokens.number())]
    return tab


def load_db_meta(text: str) -> DbMeta:
    """Parse database metadata written by :func:`dump_db_meta`."""
    tokens = _Tokens(text)
    db_meta = DbMeta(name=tokens.word())
    for _ in range(tokens.number()):
        tab = _load_tab(tokens)
        db_meta.tabs[tab.name] = tab
    return db_meta