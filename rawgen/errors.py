"""Errors raised while generating code. Every one of them ends the run."""

from pathlib import Path
from typing import Optional, Union


class RawgenError(Exception):
    def __init__(self, message: str, path: Optional[Union[str, Path]] = None, lineno: int = 0):
        super().__init__(message)
        self.message = message
        self.path = path
        self.lineno = lineno

    def __str__(self):
        if self.path is not None and self.lineno:
            return f"{self.path}:{self.lineno}: {self.message}"
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class DiscoveryError(RawgenError):
    """The tree walk could not find or read a file."""


class ParseError(RawgenError):
    def __init__(self, message: str, path=None, lineno: int = 0, col: int = 0):
        super().__init__(message, path, lineno)
        self.col = col

    def __str__(self):
        if self.path is not None and self.lineno:
            return f"{self.path}:{self.lineno}:{self.col}: {self.message}"
        return super().__str__()


class IllegalExportedRawTypeError(RawgenError):
    """A raw record is already exported."""


class InvalidRawTypeError(RawgenError):
    """A field type has no entry in the raw type table."""


class WriteError(RawgenError):
    pass
