"""Asynchronous link reachability checks.

Every input record maps to exactly one :class:`ValidatedLinkRecord`.  Network
errors, timeouts and cancellation are stored on the record as its ``status``
and never raised to the caller.

Concurrency is bounded by an ``asyncio.Semaphore`` and each request carries a
timeout, so one slow endpoint cannot hold up the whole batch indefinitely.
A :class:`CancelToken` stops pending and in-flight requests on demand.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Optional, Sequence, TypeVar

import httpx

from mdlinks.config import settings
from mdlinks.errors import ValidationCancelled
from mdlinks.links.models import LinkRecord, ValidatedLinkRecord

logger = logging.getLogger("mdlinks.validator")

T = TypeVar("T")


class CancelToken:
    """Cooperative cancellation signal shared by a batch of validations."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


async def _race(awaitable: Awaitable[T], token: CancelToken) -> Optional[T]:
    """Await *awaitable* unless *token* fires first; return ``None`` if it does."""
    work = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not work.done():
            work.cancel()
    if work in done:
        return work.result()
    return None


def _cancelled(record: LinkRecord) -> ValidatedLinkRecord:
    return ValidatedLinkRecord.from_link(record, ValidationCancelled(record.href), "fail")


async def validate(
    record: LinkRecord,
    client: httpx.AsyncClient,
    *,
    timeout: Optional[float] = None,
    cancel: Optional[CancelToken] = None,
) -> ValidatedLinkRecord:
    """Issue one GET to ``record.href`` and annotate the outcome.

    ``ok`` is ``"ok"`` for any non-error response (below 400) and ``"fail"``
    otherwise.  Exceptions from the transport become the record's status.
    """
    if cancel is not None and cancel.cancelled:
        return _cancelled(record)

    request_timeout = settings.request_timeout if timeout is None else timeout
    try:
        request = client.get(record.href, timeout=request_timeout)
        if cancel is None:
            response = await request
        else:
            response = await _race(request, cancel)
            if response is None:
                logger.debug("Cancelled %s", record.href)
                return _cancelled(record)
    except Exception as exc:  # pylint: disable=broad-except
        logger.debug("Request to %s failed: %r", record.href, exc)
        return ValidatedLinkRecord.from_link(record, exc, "fail")

    ok = "fail" if response.is_error else "ok"
    logger.debug("%s -> %d (%s)", record.href, response.status_code, ok)
    return ValidatedLinkRecord.from_link(record, response.status_code, ok)


async def validate_all(
    records: Sequence[LinkRecord],
    *,
    client: Optional[httpx.AsyncClient] = None,
    max_concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
    cancel: Optional[CancelToken] = None,
) -> list[ValidatedLinkRecord]:
    """Validate every record concurrently and return results in input order.

    At most *max_concurrency* requests are in flight at once.  When *client*
    is omitted a client is created for the batch and closed afterwards.
    """
    limit = settings.max_concurrency if max_concurrency is None else max_concurrency
    if limit < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {limit}")
    request_timeout = settings.request_timeout if timeout is None else timeout
    semaphore = asyncio.Semaphore(limit)

    async def validate_one(http: httpx.AsyncClient, record: LinkRecord) -> ValidatedLinkRecord:
        async with semaphore:
            return await validate(record, http, timeout=request_timeout, cancel=cancel)

    async def run_batch(http: httpx.AsyncClient) -> list[ValidatedLinkRecord]:
        return list(await asyncio.gather(*(validate_one(http, r) for r in records)))

    if client is not None:
        results = await run_batch(client)
    else:
        async with httpx.AsyncClient(
            timeout=request_timeout,
            follow_redirects=settings.follow_redirects,
        ) as owned:
            results = await run_batch(owned)

    broken = sum(1 for r in results if r.ok == "fail")
    logger.info("Validated %d link(s), %d broken", len(results), broken)
    return results
