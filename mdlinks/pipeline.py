"""Link-checking pipeline — from a path on disk to links and statistics.

``run`` orchestrates the full pipeline:

    resolve path → collect .md files → read (concurrently) → extract
    → validate (optional, bounded concurrency) → compute statistics

Statistics are always computed once, over the complete merged set of links.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import os
import stat
from pathlib import Path
from typing import List, Optional, Sequence

import httpx

from mdlinks.collector import is_markdown, read_markdown, resolve_target, walk_files
from mdlinks.config import settings
from mdlinks.errors import FileAccessError, InvalidInputError, NotFoundError
from mdlinks.links.extractor import extract_links
from mdlinks.links.models import FileFailure, LinkRecord, RunResult
from mdlinks.links.stats import compute_statistics
from mdlinks.links.validator import CancelToken, validate_all

logger = logging.getLogger("mdlinks.pipeline")


class FailurePolicy(str, enum.Enum):
    """What to do when a file or directory cannot be read."""

    ABORT = "abort"
    CONTINUE = "continue"


def _markdown_files(path: Path) -> tuple[List[Path], List[FileFailure]]:
    """Resolve *path* to the Markdown files it designates.

    Raises:
        NotFoundError: If *path* does not exist.
        InvalidInputError: If *path* is neither a directory nor a ``.md`` file.
        FileAccessError: If *path* cannot be stat-ed for any other reason.
    """
    try:
        mode = path.stat().st_mode
    except FileNotFoundError:
        raise NotFoundError(path) from None
    except OSError as exc:
        raise FileAccessError(path, exc) from exc

    if stat.S_ISDIR(mode):
        files, failures = walk_files(path)
        markdown = [f for f in files if is_markdown(f)]
        logger.info("Found %d Markdown file(s) under %s", len(markdown), path)
        return markdown, failures
    if stat.S_ISREG(mode) and is_markdown(path):
        return [path], []
    raise InvalidInputError(path)


def _coerce_policy(policy: FailurePolicy | str) -> FailurePolicy:
    if isinstance(policy, FailurePolicy):
        return policy
    return FailurePolicy(policy.strip().lower())


async def _read_all(
    files: Sequence[Path],
    policy: FailurePolicy,
) -> tuple[List[Optional[str]], List[FileFailure]]:
    """Read *files* concurrently.

    Under ``ABORT`` the first read failure propagates.  Under ``CONTINUE``
    unreadable files yield ``None`` and are reported as failures.
    """
    if policy is FailurePolicy.ABORT:
        return list(await asyncio.gather(*(read_markdown(f) for f in files))), []

    results = await asyncio.gather(
        *(read_markdown(f) for f in files), return_exceptions=True
    )
    texts: List[Optional[str]] = []
    failures: List[FileFailure] = []
    for path, result in zip(files, results):
        if isinstance(result, FileAccessError):
            failures.append(FileFailure(file=str(path), error=result))
            texts.append(None)
        elif isinstance(result, BaseException):
            raise result
        else:
            texts.append(result)
    return texts, failures


async def run(
    target: str | os.PathLike[str],
    *,
    validate: bool = False,
    policy: FailurePolicy | str | None = None,
    client: Optional[httpx.AsyncClient] = None,
    cancel: Optional[CancelToken] = None,
    max_concurrency: Optional[int] = None,
    request_timeout: Optional[float] = None,
) -> RunResult:
    """Extract (and optionally validate) every link under *target*.

    Args:
        target: A ``.md`` file or a directory searched recursively.
        validate: Issue one HTTP request per link before computing statistics.
        policy: ``"abort"`` re-raises the first file-read failure;
            ``"continue"`` skips unreadable files.  Defaults to
            ``settings.failure_policy``.  Directories or entries the walk
            cannot stat are skipped under either policy.  Every skipped
            path is listed in :attr:`RunResult.failures`.
        client: Optional shared ``httpx.AsyncClient`` for validation.
        cancel: Token that stops outstanding validations when cancelled.
        max_concurrency: Override ``settings.max_concurrency``.
        request_timeout: Override ``settings.request_timeout``.

    Returns:
        A :class:`RunResult` with links in discovery order, then in order of
        appearance within each file.

    Raises:
        NotFoundError: *target* does not exist.
        InvalidInputError: *target* is not a directory or a ``.md`` file.
        FileAccessError: A file could not be read (``ABORT`` policy only).
    """
    failure_policy = _coerce_policy(policy or settings.failure_policy)
    path = resolve_target(target)

    # Walk failures are skipped under every policy; they stay in the report.
    files, failures = _markdown_files(path)

    texts, read_failures = await _read_all(files, failure_policy)
    failures.extend(read_failures)
    for failure in read_failures:
        logger.warning("Skipping unreadable file %s", failure.file)

    links: List[LinkRecord] = []
    for file_path, text in zip(files, texts):
        if text is None:
            continue
        links.extend(extract_links(text, str(file_path)))
    logger.info("Extracted %d link(s) from %d file(s)", len(links), len(files))

    if validate:
        links = list(
            await validate_all(
                links,
                client=client,
                max_concurrency=max_concurrency,
                timeout=request_timeout,
                cancel=cancel,
            )
        )

    return RunResult(links=links, statistics=compute_statistics(links), failures=failures)


def md_links(target: str | os.PathLike[str], *, validate: bool = False, **kwargs) -> RunResult:
    """Synchronous wrapper around :func:`run` for scripts and the CLI."""
    return asyncio.run(run(target, validate=validate, **kwargs))
