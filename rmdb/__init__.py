"""Disk and buffer-pool management, catalog metadata and transaction bookkeeping for a small relational database."""

__version__ = "0.1.0"