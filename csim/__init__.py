"""LRU set-associative cache simulator for valgrind memory traces."""

__version__ = "0.1.0"
