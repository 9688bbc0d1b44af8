# filewriter/__init__.py
from filewriter.errors import (
    DeleteError,
    DirectoryCreateError,
    FileCreateError,
    FileMissingError,
    FileWriterError,
    PlanError,
    ReadError,
    WriteError,
)
from filewriter.files.file_writer import FileWriter

__version__ = "0.1.0"

__all__ = [
    "FileWriter",
    "FileWriterError",
    "DirectoryCreateError",
    "FileCreateError",
    "ReadError",
    "FileMissingError",
    "WriteError",
    "DeleteError",
    "PlanError",
]
