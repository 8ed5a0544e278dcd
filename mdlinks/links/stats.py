"""Aggregate counts over a batch of link records."""

from __future__ import annotations

from typing import Iterable

from mdlinks.links.models import LinkRecord, Statistics


def compute_statistics(records: Iterable[LinkRecord]) -> Statistics:
    """Return total, unique-by-href and broken counts for *records*.

    Only records carrying ``ok == "fail"`` count as broken, so unvalidated
    records always report ``broken == 0``.
    """
    total = 0
    broken = 0
    hrefs: set[str] = set()
    for record in records:
        total += 1
        hrefs.add(record.href)
        if getattr(record, "ok", None) == "fail":
            broken += 1
    return Statistics(total=total, unique=len(hrefs), broken=broken)
