"""Exception types raised by the mdlinks pipeline."""

from __future__ import annotations

from pathlib import Path


class MdLinksError(Exception):
    """Base class for every error the pipeline surfaces to callers."""


class NotFoundError(MdLinksError):
    """The target path does not exist on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Path not found: {self.path}")


class InvalidInputError(MdLinksError):
    """The target exists but is neither a directory nor a Markdown file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Not a Markdown file or directory: {self.path}")


class FileAccessError(MdLinksError):
    """A filesystem operation (stat, listdir, read) failed."""

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot access {self.path}: {cause}")


class ValidationCancelled(MdLinksError):
    """Stored as a link's status when validation was cancelled before it ran.

    Never raised out of the validator.
    """

    def __init__(self, href: str) -> None:
        self.href = href
        super().__init__(f"Validation cancelled before requesting {href}")
