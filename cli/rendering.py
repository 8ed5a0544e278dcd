"""Utilities for rendering link results in the CLI."""

from __future__ import annotations

from typing import List

from mdlinks.links.models import FileFailure, LinkRecord, Statistics, ValidatedLinkRecord


def _status_label(link: ValidatedLinkRecord) -> str:
    if isinstance(link.status, int):
        return str(link.status)
    return type(link.status).__name__


def render_link(link: LinkRecord) -> str:
    """Render one link as ``file href [ok status] text``."""
    parts = [link.file, link.href]
    if isinstance(link, ValidatedLinkRecord):
        parts += [link.ok, _status_label(link)]
    if link.text:
        parts.append(link.text)
    return " ".join(parts)


def render_links(links: List[LinkRecord]) -> str:
    return "\n".join(render_link(link) for link in links)


def render_statistics(stats: Statistics, *, include_broken: bool) -> str:
    lines = [f"Total: {stats.total}", f"Unique: {stats.unique}"]
    if include_broken:
        lines.append(f"Broken: {stats.broken}")
    return "\n".join(lines)


def render_failure(failure: FileFailure) -> str:
    return f"⚠️ Skipped {failure.file}: {failure.error.cause}"
