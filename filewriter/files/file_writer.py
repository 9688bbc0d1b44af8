# filewriter/files/file_writer.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from filewriter.errors import (
    DeleteError,
    DirectoryCreateError,
    FileCreateError,
    FileMissingError,
    FileWriterError,
    ReadError,
    WriteError,
)
from filewriter.files.file_lock import exclusive_lock
from filewriter.logger import BasicLogger

DEFAULT_DIR_MODE = 0o755
DEFAULT_ENCODING = "utf-8"


class FileWriter:
    """
    Whole-file text mutation for a single path.

    The parent directory and an empty file are created on construction.
    Every public operation reports success as a bool and never raises for
    filesystem failures; the cause is logged instead. Existence is probed
    on each call, nothing about the file is cached.

    Example:
        writer = FileWriter("example/newfile.txt")
        writer.overwrite("This will overwrite the file.\\n")
        writer.append("This will be appended to the file.\\n")
        writer.prepend("This will be prepended to the file.\\n")
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        *,
        encoding: str = DEFAULT_ENCODING,
        dir_mode: int = DEFAULT_DIR_MODE,
        logger: Optional[logging.Logger] = None,
    ):
        self.path = os.fspath(path)
        self.encoding = encoding
        self.dir_mode = dir_mode
        self.logger = logger or BasicLogger(self.__class__.__name__).get_logger()

        # Errors surface on the first operation, never here.
        try:
            self._ensure_directory_exists()
            self._create_if_needed()
        except FileWriterError as e:
            self.logger.debug("[FileWriter] Setup incomplete (%s): %s", e.kind, e)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path!r})"

    # ----------------------------------------------------------------------
    # Public operations
    # ----------------------------------------------------------------------
    def overwrite(self, content: str) -> bool:
        """Replace the whole file with ``content``."""
        try:
            self._create_if_needed()
            self._write_to_file(content)
        except FileWriterError as e:
            return self._failed("overwrite", e)
        self.logger.debug("[FileWriter] Overwrote %s (%d chars)", self.path, len(content))
        return True

    def append(self, content: str) -> bool:
        """Write ``current + content``. The file is untouched if the read fails."""
        try:
            self._create_if_needed()
            current = self._read_file()
            self._write_to_file(current + content)
        except FileWriterError as e:
            return self._failed("append", e)
        self.logger.debug("[FileWriter] Appended to %s (%d chars)", self.path, len(content))
        return True

    def prepend(self, content: str) -> bool:
        """Write ``content + current``. The file is untouched if the read fails."""
        try:
            self._create_if_needed()
            current = self._read_file()
            self._write_to_file(content + current)
        except FileWriterError as e:
            return self._failed("prepend", e)
        self.logger.debug("[FileWriter] Prepended to %s (%d chars)", self.path, len(content))
        return True

    def delete(self) -> bool:
        """
        Remove the file.

        Returns False when there was nothing to delete or removal failed. The
        handle stays usable; the next mutating call recreates the file.
        """
        if not self.exists():
            self.logger.debug("[FileWriter] Nothing to delete at %s", self.path)
            return False

        try:
            os.unlink(self.path)
        except OSError as exc:
            return self._failed("delete", DeleteError(self.path, str(exc)))
        self.logger.debug("[FileWriter] Deleted %s", self.path)
        return True

    def read(self) -> Optional[str]:
        """Return the full content, or None if the file is missing or unreadable."""
        try:
            return self._read_file()
        except FileMissingError:
            self.logger.debug("[FileWriter] Nothing to read at %s", self.path)
            return None
        except FileWriterError as e:
            self._failed("read", e)
            return None

    def exists(self) -> bool:
        return os.path.exists(self.path)

    # ----------------------------------------------------------------------
    # Helpers
    # ----------------------------------------------------------------------
    def _failed(self, operation: str, error: FileWriterError) -> bool:
        self.logger.warning(
            "[FileWriter] %s failed (%s): %s",
            operation,
            error.kind,
            error,
            extra={"path": error.path, "operation": operation, "failure": error.kind},
        )
        return False

    def _ensure_directory_exists(self) -> None:
        directory = Path(self.path).parent
        if directory.is_dir():
            return
        try:
            os.makedirs(directory, mode=self.dir_mode, exist_ok=True)
        except (OSError, ValueError) as exc:
            raise DirectoryCreateError(directory, str(exc)) from exc

    def _create_if_needed(self) -> None:
        # Any entry counts, including a directory; the write will then fail.
        if self.exists():
            return
        try:
            self._write_to_file("")
        except WriteError as exc:
            raise FileCreateError(self.path, str(exc)) from exc

    def _read_file(self) -> str:
        try:
            with open(self.path, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except FileNotFoundError as exc:
            raise FileMissingError(self.path, str(exc)) from exc
        # ValueError covers undecodable content and NUL bytes in the path
        except (OSError, ValueError, LookupError) as exc:
            raise ReadError(self.path, str(exc)) from exc

    def _write_to_file(self, content: str) -> None:
        # Encode up front: nothing may be truncated for content that cannot be written.
        try:
            data = content.encode(self.encoding)
        except (UnicodeError, LookupError) as exc:
            raise WriteError(self.path, str(exc)) from exc

        try:
            with open(self.path, "wb", opener=_open_untruncated) as f, exclusive_lock(f):
                f.truncate(0)
                f.write(data)
                f.flush()
        except (OSError, ValueError) as exc:
            raise WriteError(self.path, str(exc)) from exc


def _open_untruncated(path: str, flags: int) -> int:
    # Truncation happens under the lock, not at open time.
    return os.open(path, flags & ~os.O_TRUNC, 0o666)
