"""Oblivious primitives, sorting networks, compaction, shuffling, ORAM structures and page storage."""

__version__ = "0.1.0"