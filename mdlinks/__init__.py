"""mdlinks — extract, validate and count links in Markdown files.

Public re-exports so callers can write::

    from mdlinks import run, md_links
"""

from mdlinks.errors import (
    FileAccessError,
    InvalidInputError,
    MdLinksError,
    NotFoundError,
    ValidationCancelled,
)
from mdlinks.pipeline import FailurePolicy, md_links, run

__all__ = [
    "run",
    "md_links",
    "FailurePolicy",
    "MdLinksError",
    "NotFoundError",
    "InvalidInputError",
    "FileAccessError",
    "ValidationCancelled",
]
