"""Buffer pool caching file pages in memory frames with LRU replacement."""

from __future__ import annotations

import threading
from collections import OrderedDict, deque

from rmdb.defs import INVALID_PAGE_ID, PAGE_SIZE
from rmdb.disk_manager import DiskManager
from rmdb.page import Page, PageId

__all__ = ["BufferPoolManager"]


class _LRUReplacer:
    """Tracks unpinned frames; the least recently unpinned one is evicted first."""

    def __init__(self) -> None:
        self._frames: OrderedDict[int, None] = OrderedDict()

    def victim(self) -> int | None:
        if not self._frames:
            return None
        frame_id, _ = self._frames.popitem(last=False)
        return frame_id

    def pin(self, frame_id: int) -> None:
        self._frames.pop(frame_id, None)

    def unpin(self, frame_id: int) -> None:
        if frame_id not in self._frames:
            self._frames[frame_id] = None

    def __len__(self) -> int:
        return len(self._frames)


class BufferPoolManager:
    """A fixed number of frames holding pages of files managed by a DiskManager."""

    def __init__(self, pool_size: int, disk_manager: DiskManager) -> None:
        self.pool_size = pool_size
        self.disk_manager = disk_manager
        self._pages = [Page() for _ in range(pool_size)]
        self._page_table: dict[PageId, int] = {}
        self._free_list: deque[int] = deque(range(pool_size))
        self._replacer = _LRUReplacer()
        self._latch = threading.RLock()

    @staticmethod
    def mark_dirty(page: Page) -> None:
        page.is_dirty = True

    def _find_victim(self) -> int | None:
        if self._free_list:
            return self._free_list.popleft()
        return self._replacer.victim()

    def _write_back(self, page: Page) -> None:
        self.disk_manager.write_page(page.page_id.fd, page.page_id.page_no, page.data, PAGE_SIZE)
        page.is_dirty = False

    def _evict(self, page: Page) -> None:
        if page.is_dirty:
            self._write_back(page)
        self._page_table.pop(page.page_id, None)

    def fetch_page(self, page_id: PageId) -> Page | None:
        """Pin and return the page, reading it from disk if needed; None if no frame is free."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is not None:
                page = self._pages[frame_id]
                page.pin_count += 1
                self._replacer.pin(frame_id)
                return page

            frame_id = self._find_victim()
            if frame_id is None:
                return None
            page = self._pages[frame_id]
            self._evict(page)
            try:
                data = self.disk_manager.read_page(page_id.fd, page_id.page_no, PAGE_SIZE)
            except Exception:
                page.reset_memory()
                page.page_id = PageId(-1, INVALID_PAGE_ID)
                page.pin_count = 0
                self._free_list.append(frame_id)
                raise
            page.data[:] = data
            page.page_id = page_id
            page.pin_count = 1
            self._page_table[page_id] = frame_id
            self._replacer.pin(frame_id)
            return page

    def unpin_page(self, page_id: PageId, is_dirty: bool) -> bool:
        """Drop one pin; returns False if the page is absent or not pinned."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            page = self._pages[frame_id]
            if page.pin_count <= 0:
                return False
            page.pin_count -= 1
            if is_dirty:
                page.is_dirty = True
            if page.pin_count == 0:
                self._replacer.unpin(frame_id)
            return True

    def flush_page(self, page_id: PageId) -> bool:
        """Write the page to disk whether dirty or not; False if it is not cached."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return False
            self._write_back(self._pages[frame_id])
            return True

    def new_page(self, fd: int) -> Page | None:
        """Allocate a new zeroed page in file ``fd`` and pin it; None if no frame is free."""
        with self._latch:
            frame_id = self._find_victim()
            if frame_id is None:
                return None
            page_id = PageId(fd, self.disk_manager.allocate_page(fd))
            page = self._pages[frame_id]
            self._evict(page)
            self._page_table[page_id] = frame_id
            page.reset_memory()
            page.page_id = page_id
            page.pin_count = 1
            self._replacer.pin(frame_id)
            return page

    def delete_page(self, page_id: PageId) -> bool:
        """Drop the page from the pool; False only if it is still pinned."""
        with self._latch:
            frame_id = self._page_table.get(page_id)
            if frame_id is None:
                return True
            page = self._pages[frame_id]
            if page.pin_count > 0:
                return False
            self._evict(page)
            page.reset_memory()
            page.page_id = PageId(-1, INVALID_PAGE_ID)
            page.pin_count = 0
            self._replacer.pin(frame_id)
            self._free_list.append(frame_id)
            return True

    def flush_all_pages(self, fd: int) -> None:
        """Write every cached page of file ``fd`` to disk."""
        with self._latch:
            for page_id, frame_id in self._page_table.items():
                if page_id.fd == fd:
                    self._write_back(self._pages[frame_id])