# src/timekeep/__init__.py

"""Command-line time tracking: one running task, an append-only SQLite log."""

__version__ = "0.3.0"
