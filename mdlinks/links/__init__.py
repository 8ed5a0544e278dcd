"""Links package — extraction, validation & statistics."""

from mdlinks.links.extractor import extract_links, iter_links
from mdlinks.links.models import LinkRecord, Statistics, ValidatedLinkRecord
from mdlinks.links.stats import compute_statistics
from mdlinks.links.validator import CancelToken, validate, validate_all

__all__ = [
    "extract_links",
    "iter_links",
    "validate",
    "validate_all",
    "compute_statistics",
    "CancelToken",
    "LinkRecord",
    "ValidatedLinkRecord",
    "Statistics",
]
