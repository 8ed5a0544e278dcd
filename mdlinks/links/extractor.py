"""Link extraction: turns Markdown text into :class:`LinkRecord` objects."""

from __future__ import annotations

import os
import re
from typing import Iterator, List

from mdlinks.links.models import LinkRecord

# ``[label](http(s)://...)``: label has no square brackets, the URL has no
# whitespace and its first character after the scheme is not ``?``, ``#``
# or ``.``.  Image syntax ``![alt](url)`` matches as well.
LINK_PATTERN = re.compile(r"\[([^\[\]]*?)\]\((https?://[^\s?#.].[^\s]*)\)")


def iter_links(text: str, source: str) -> Iterator[LinkRecord]:
    """Yield every inline link in *text*, in order of appearance.

    Each record is stamped with the base name of *source*.
    """
    file_name = os.path.basename(source)
    for match in LINK_PATTERN.finditer(text):
        yield LinkRecord(text=match.group(1), href=match.group(2), file=file_name)


def extract_links(text: str, source: str) -> List[LinkRecord]:
    """Return all inline links in *text* as a list."""
    return list(iter_links(text, source))
