# src/timekeep/errors.py

"""
Exception taxonomy shared by the core and the CLI.

The CLI catches TimekeepError, prints it and exits non-zero.
Anything else escaping is a bug.
"""

from __future__ import annotations


class TimekeepError(Exception):
    """Base class for every error the application reports to the user."""


class ValidationError(TimekeepError):
    """Input rejected before any persisted state was touched."""


class EndBeforeStartError(ValidationError):
    def __init__(self, start_time, end_time) -> None:
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            f"task cannot have end time ({end_time.isoformat()}) "
            f"before start time ({start_time.isoformat()})"
        )


class NotFoundError(TimekeepError):
    """A record that the operation requires does not exist."""


class StorageError(TimekeepError):
    """Database failure, or stored records that cannot be decoded."""

    def __init__(self, message: str, failures: list[str] | None = None) -> None:
        self.failures = list(failures or [])
        if self.failures:
            message = message + ":\n  " + "\n  ".join(self.failures)
        super().__init__(message)


class SerializationError(StorageError):
    """The current-task record could not be encoded or decoded."""


class SlotIOError(TimekeepError):
    """Filesystem failure while reading/writing/removing the current-task file."""
