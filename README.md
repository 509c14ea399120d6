# rmdb

The storage and catalog core of a small relational database engine. It is
written in plain Python and has no third-party dependencies.

## What it provides

- **`rmdb.disk_manager.DiskManager`** reads and writes fixed-size pages
  (`PAGE_SIZE` = 4096 bytes) in data files.
  - It hands out increasing page numbers for each file descriptor
    (`allocate_page`, `set_fd2pageno`, `get_fd2pageno`).
  - It tracks which files are open (`open_file`, `close_file`,
    `get_file_name`, `get_file_fd`).
  - It creates and removes files and directories.
  - It appends to and reads from the log file `db.log` (`write_log`,
    `read_log`). `read_log` returns `None` when the offset lies past the end
    of the log.
- **`rmdb.buffer_pool.BufferPoolManager`** caches pages in a fixed number of
  memory frames.
  - `new_page(fd)` and `fetch_page(page_id)` return a pinned page. They
    return `None` when every frame is pinned.
  - `unpin_page` releases a pin and can mark the page dirty.
  - When no frame is free, the least recently unpinned frame is reused. A
    dirty page in that frame is written back first.
  - `flush_page`, `flush_all_pages` and `delete_page` complete the interface.
- **`rmdb.page`** defines `PageId` (a file descriptor and a page number) and
  `Page`. A `Page` holds a `bytearray` named `data`, together with
  `page_id`, `is_dirty`, `pin_count` and a `page_lsn` property.
- **`rmdb.sm_meta`** describes the catalog with `ColMeta`, `IndexMeta`,
  `TabMeta` and `DbMeta`. `dump_db_meta` writes the catalog to a
  whitespace-separated text form and `load_db_meta` reads it back.
- **`rmdb.sm_manager.SmManager`** manages databases and their catalog.
  - `create_db` makes a database directory holding an empty catalog
    (`db.meta`) and an empty log (`db.log`). `drop_db` removes it.
  - `flush_meta` rewrites `db.meta` in the current directory.
  - `show_tables` and `desc_table` print catalog tables into a `Context`.
    `show_tables` also appends the table names to `output.txt`.
- **`rmdb.output`** provides `Context` and `RecordPrinter`. `RecordPrinter`
  writes fixed-width ASCII tables into the result buffer of a `Context`. The
  buffer is bounded, and once output no longer fits, the record-count footer
  notes it with `... ...`.
- **`rmdb.defs`** holds configuration constants and the shared value types:
  - `Rid`, `ColType`, `TabCol`, `CompOp`, `Condition` and `SetClause`.
  - `Value`, whose `init_raw` encodes an int, float or string into a
    fixed-width byte string.
- **`rmdb.txn_defs`** and **`rmdb.transaction`** hold transaction bookkeeping:
  - transaction states and isolation levels;
  - `WriteRecord`;
  - `LockDataId`, built by `LockDataId.table(fd)` or
    `LockDataId.record(fd, rid)`;
  - `TransactionAbortException`;
  - `Transaction`, with its write set, lock set and undo logs (`UndoLog`,
    `UndoLink`).
- **`rmdb.errors`** holds the exception hierarchy.
  - The root is `RMDBError`, and every message starts with `Error: `.
    Examples are `NoSuchFileError`, `FileAlreadyExistsError`,
    `FileNotClosedError` and `TableNotFoundError`.
  - Typed execution errors derive from `DbException` and carry an
    `ExceptionType`.

## What it does not do

This package is a library of building blocks, not a running database. It
does not have:

- a server or command-line program;
- an SQL parser, planner or query executor;
- record files or index files;
- a lock manager, a transaction manager or crash recovery.

`SmManager` cannot create tables, drop tables or build indexes. It can list
and describe tables that are already in its `DbMeta`. Lock identifiers and
transactions are data structures only; nothing in the package grants locks,
commits transactions or rolls them back.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from rmdb.disk_manager import DiskManager
from rmdb.buffer_pool import BufferPoolManager
from rmdb.page import PageId

disk = DiskManager()
disk.create_file("table.dat")
fd = disk.open_file("table.dat")

pool = BufferPoolManager(10, disk)
page = pool.new_page(fd)
page.data[:5] = b"Hello"
pool.unpin_page(page.page_id, True)
pool.flush_all_pages(fd)

again = pool.fetch_page(PageId(fd, page.page_id.page_no))
assert bytes(again.data[:5]) == b"Hello"
pool.unpin_page(again.page_id, False)
disk.close_file(fd)
```

Catalog metadata round-trips through text:

```python
from rmdb.defs import ColType
from rmdb.sm_meta import ColMeta, DbMeta, TabMeta, dump_db_meta, load_db_meta

db = DbMeta(name="shop")
db.set_tab_meta("item", TabMeta(name="item", cols=[
    ColMeta(tab_name="item", name="id", type=ColType.INT, len=4, offset=0),
]))
assert load_db_meta(dump_db_meta(db)) == db
```