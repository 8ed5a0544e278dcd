"""File discovery and reading for the link pipeline.

Directory traversal is synchronous (metadata only).  Reading file contents is
asynchronous so several files can be read concurrently.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
from pathlib import Path
from typing import List, Tuple

from mdlinks.errors import FileAccessError
from mdlinks.links.models import FileFailure

logger = logging.getLogger("mdlinks.collector")

MARKDOWN_SUFFIX = ".md"


def resolve_target(path: str | os.PathLike[str]) -> Path:
    """Return *path* as an absolute path without requiring it to exist."""
    return Path(path).expanduser().resolve()


def is_markdown(path: Path) -> bool:
    return path.name.endswith(MARKDOWN_SUFFIX)


def walk_files(root: Path) -> Tuple[List[Path], List[FileFailure]]:
    """Recursively list every file below *root*.

    A directory that cannot be listed, or an entry that cannot be stat-ed
    (such as a dangling symlink), is logged, recorded as a
    :class:`FileFailure` and skipped; the walk carries on with its siblings.
    Directories already visited (by device and inode) are not entered again,
    which guards against symlink cycles.
    """
    files: List[Path] = []
    failures: List[FileFailure] = []
    visited: set[tuple[int, int]] = set()

    def _visit(directory: Path) -> None:
        try:
            info = directory.stat()
            key = (info.st_dev, info.st_ino)
            if key in visited:
                logger.warning("Skipping already visited directory %s", directory)
                return
            visited.add(key)
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            logger.warning("Cannot scan directory %s: %s", directory, exc)
            failures.append(FileFailure(file=str(directory), error=FileAccessError(directory, exc)))
            return

        for entry in entries:
            try:
                mode = entry.stat().st_mode
            except OSError as exc:
                logger.warning("Cannot stat %s: %s", entry, exc)
                failures.append(FileFailure(file=str(entry), error=FileAccessError(entry, exc)))
                continue
            if stat.S_ISDIR(mode):
                _visit(entry)
            else:
                files.append(entry)

    _visit(root)
    return files, failures


async def read_markdown(path: Path) -> str:
    """Read *path* as UTF-8 text without blocking the event loop.

    Raises:
        FileAccessError: If the file cannot be opened or decoded.
    """
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read %s: %s", path, exc)
        raise FileAccessError(path, exc) from exc
