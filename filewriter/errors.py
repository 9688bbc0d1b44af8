# filewriter/errors.py
from __future__ import annotations

import os
from typing import Union


class FileWriterError(Exception):
    """
    Base class for failures while touching the file behind a FileWriter.

    FileWriter itself never lets these escape its public methods; they exist
    so the private helpers can say *what* went wrong and the boundary can log it.
    """

    kind = "io"

    def __init__(self, path: Union[str, os.PathLike], message: str = "") -> None:
        self.path = os.fspath(path)
        super().__init__(message or f"{self.kind} failed for '{self.path}'")


class DirectoryCreateError(FileWriterError):
    kind = "directory-create"


class FileCreateError(FileWriterError):
    kind = "file-create"


class ReadError(FileWriterError):
    kind = "read"


class FileMissingError(ReadError):
    kind = "missing"


class WriteError(FileWriterError):
    kind = "write"


class DeleteError(FileWriterError):
    kind = "delete"


class PlanError(ValueError):
    """Raised when a write plan is malformed."""
