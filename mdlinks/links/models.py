"""Data models for the link pipeline.

These are plain, immutable Python objects.  Validation never mutates a
:class:`LinkRecord`; it builds a new :class:`ValidatedLinkRecord` instead.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Union

from mdlinks.errors import FileAccessError

OkFlag = Literal["ok", "fail"]


@dataclass(frozen=True)
class LinkRecord:
    """A Markdown inline link found in a source document."""

    text: str
    href: str
    file: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ValidatedLinkRecord(LinkRecord):
    """A :class:`LinkRecord` annotated with the outcome of one HTTP request.

    ``status`` is the numeric response code, or the exception raised while
    trying to reach ``href``.
    """

    status: Union[int, BaseException]
    ok: OkFlag

    @classmethod
    def from_link(
        cls,
        link: LinkRecord,
        status: Union[int, BaseException],
        ok: OkFlag,
    ) -> ValidatedLinkRecord:
        return cls(text=link.text, href=link.href, file=link.file, status=status, ok=ok)

    def to_dict(self) -> dict[str, Any]:
        status = self.status if isinstance(self.status, int) else str(self.status)
        return {
            "text": self.text,
            "href": self.href,
            "file": self.file,
            "status": status,
            "ok": self.ok,
        }


@dataclass(frozen=True)
class Statistics:
    total: int
    unique: int
    broken: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class FileFailure:
    """A file or directory the pipeline could not read."""

    file: str
    error: FileAccessError

    def to_dict(self) -> dict[str, str]:
        return {"file": self.file, "error": str(self.error)}


@dataclass
class RunResult:
    """Everything one pipeline run produces."""

    links: list[LinkRecord] = field(default_factory=list)
    statistics: Statistics = field(default_factory=lambda: Statistics(0, 0, 0))
    failures: list[FileFailure] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "links": [link.to_dict() for link in self.links],
            "statistics": self.statistics.to_dict(),
            "failures": [failure.to_dict() for failure in self.failures],
        }
