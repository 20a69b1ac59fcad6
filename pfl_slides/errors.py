"""Exceptions raised while loading generator inputs."""

from pathlib import Path
from typing import Optional, Sequence


class DeckLoadError(Exception):
    """A required input file could not be loaded. Generation cannot continue."""


class MissingFileError(DeckLoadError):
    """The file (or every candidate name for it) does not exist."""

    def __init__(self, what: str, path: Path, tried: Optional[Sequence[Path]] = None):
        self.what = what
        self.path = path
        self.tried = list(tried) if tried else [path]
        if len(self.tried) > 1:
            names = ", ".join(p.name for p in self.tried)
            message = f"{what} not found in {path.parent} (tried: {names})"
        else:
            message = f"{what} not found. Expected file: {path}"
        super().__init__(message)


class InvalidDocumentError(DeckLoadError):
    """The file exists but could not be read or parsed into the expected shape."""

    def __init__(self, what: str, path: Path, reason: str):
        self.what = what
        self.path = path
        self.reason = reason
        super().__init__(f"Error loading {what} ({path}): {reason}")
