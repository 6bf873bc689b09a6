"""Error taxonomy for the minifier.

Every failure surfaces as a ``MinifyError`` subclass and aborts the run; the
batch layer in :mod:`svdmin.minifier` is the only place errors become values.
"""
from __future__ import annotations


class MinifyError(Exception):
    """Base class for all minifier failures."""


class MinifyIOError(MinifyError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not read file: {reason}")
        self.path = path


class UnsupportedFileTypeError(MinifyError):
    def __init__(self, extension: str) -> None:
        super().__init__(f"unsupported file type: {extension}")
        self.extension = extension


class NoFileExtensionError(MinifyError):
    def __init__(self) -> None:
        super().__init__("file has no extension")


class MalformedInputError(MinifyError):
    """The markup tokenizer rejected the document."""


class EncodingError(MinifyError):
    """Source bytes are not valid UTF-8."""


class CapacityExceededError(MinifyError):
    def __init__(self, name: str, capacity: int) -> None:
        super().__init__(f"too many distinct tags: cannot assign a symbol to {name!r} (alphabet holds {capacity})")
        self.name = name
        self.capacity = capacity
