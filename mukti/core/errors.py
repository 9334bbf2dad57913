"""Exit codes for the mukti-bin CLI.

Release automation branches on these values, so they must stay stable:
- 0: Success
- 1: User error (bad record, bad alias, duplicate version, unknown release)
- 5: I/O error (registry unreadable or not writable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes."""

    OK = 0
    USER_ERROR = 1
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

