from __future__ import annotations
import time
import logging
from typing import Callable, Iterator
from config import MAX_PAGES, CURSOR_MAX_POLLS, CURSOR_POLL_PAUSE, HTTP_TIMEOUT
from services.zendesk import (
    zd_get,
    CursorTimeoutError,
    PaginationError,
)

log = logging.getLogger(__name__)


def iter_pages(session, url_for_page: Callable[[int], str], *, max_pages: int = MAX_PAGES, **retry) -> Iterator[dict]:
    """Yield page bodies 1, 2, 3... until ``next_page`` comes back null.

    Only ``next_page`` decides when to stop. An empty page that still points
    at a next one keeps the loop going.
    """
    page = 1
    while True:
        if page > max_pages:
            raise PaginationError(f"Still paging after {max_pages} pages; giving up")
        body = zd_get(session, url_for_page(page), **retry)
        yield body
        if body.get("next_page") is None:
            log.debug("Last page reached at %d", page)
            return
        page += 1


def acquire_cursor(session, url: str, *, max_polls: int = CURSOR_MAX_POLLS,
                   pause: float = CURSOR_POLL_PAUSE, timeout: float = HTTP_TIMEOUT) -> dict:
    """Poll the time-based incremental endpoint until it hands out a cursor.

    No retry wrapper here: any response without an ``after_cursor``, error
    statuses included, just burns one poll. Returns the body that carried the
    cursor since its tickets belong in the export too.
    """
    for poll in range(1, max_polls + 1):
        resp = session.get(url, timeout=timeout)
        body = None
        if resp.ok:
            body = resp.json()
            if body.get("after_cursor") is not None:
                log.info("Got ticket cursor after %d poll(s)", poll)
                return body
        log.info("No cursor yet from %s (poll %d/%d, status %s)", url, poll, max_polls, resp.status_code)
        if poll < max_polls:
            time.sleep(pause)
    raise CursorTimeoutError(f"No after_cursor from {url} after {max_polls} polls")


def walk_cursor(session, url_for_cursor: Callable[[str], str], cursor: str, *,
                max_pages: int = MAX_PAGES, **retry) -> list[dict]:
    """Follow ``after_cursor`` links until ``end_of_stream`` is true.

    Always makes at least one request, starting from ``cursor``.
    """
    bodies: list[dict] = []
    while True:
        if len(bodies) >= max_pages:
            raise PaginationError(f"Cursor walk still going after {max_pages} pages; giving up")
        body = zd_get(session, url_for_cursor(cursor), **retry)
        bodies.append(body)
        if body.get("end_of_stream") is True:
            return bodies
        cursor = body.get("after_cursor")
        if cursor is None:
            # Not end of stream but nowhere to go; treat as a broken page.
            raise PaginationError("Cursor page had no after_cursor and no end_of_stream")
