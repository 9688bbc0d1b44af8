# filewriter/files/file_lock.py
"""
Advisory locking for single writes.

The lock is taken with ``fcntl.flock`` on the already-open target file, so it
only serializes writers that also lock; readers are not blocked.
"""
from __future__ import annotations

import fcntl
from contextlib import contextmanager
from typing import IO, Iterator


@contextmanager
def exclusive_lock(handle: IO) -> Iterator[IO]:
    """Hold an exclusive lock on ``handle`` for the duration of the context."""

    fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
    try:
        yield handle
    finally:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
