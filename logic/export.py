"""Pull whole Zendesk collections into DataFrames.

Each function takes the account email, an API token and the subdomain
(``acme`` for ``acme.zendesk.com``) and returns one flat table. Nothing is
cached between calls; keep the token out of source control.
"""
from __future__ import annotations
import logging
from urllib.parse import urlencode
import pandas as pd
from services.zendesk import (
    Credentials,
    open_session,
    zd_get,
    USERS_PATH,
    TICKET_FIELDS_PATH,
    INCREMENTAL_TICKETS_PATH,
)
from logic.pagination import iter_pages, acquire_cursor, walk_cursor
from logic.flatten import flatten_page, pivot_custom_fields
from logic.merge import merge_tables, duplicate_ids
from logic.timeutil import to_unixtime

log = logging.getLogger(__name__)


def get_users(email: str, token: str, subdomain: str) -> pd.DataFrame:
    """All end users, 100 per page, until ``next_page`` runs out."""
    creds = Credentials(email, token, subdomain)
    base = creds.url(USERS_PATH)

    def url_for_page(page: int) -> str:
        return f"{base}?{urlencode({'role': 'end-user', 'page': page})}"

    with open_session(creds) as s:
        pages = [flatten_page(body, "users") for body in iter_pages(s, url_for_page)]
    users = merge_tables(pages)
    log.info("Fetched %d users over %d page(s) from %s", len(users), len(pages), subdomain)
    return users


def get_tickets(email: str, token: str, subdomain: str, start_time=0) -> pd.DataFrame:
    """Every ticket updated at or after ``start_time``, custom fields as columns.

    Uses the incremental export: the time-based call yields the first 1000
    tickets plus an ``after_cursor``, and the cursor calls fetch the rest.
    ``start_time`` is UTC (see :func:`logic.timeutil.to_unixtime`); the default
    ``0`` returns all non-archived tickets.

    The first page and the cursor pages are not deduplicated. If the same
    ticket id shows up in both a warning is logged and both rows are kept.
    """
    creds = Credentials(email, token, subdomain)
    base = creds.url(INCREMENTAL_TICKETS_PATH)
    start_url = f"{base}?{urlencode({'start_time': to_unixtime(start_time)})}"

    def url_for_cursor(cursor: str) -> str:
        return f"{base}?{urlencode({'cursor': cursor})}"

    with open_session(creds) as s:
        first = acquire_cursor(s, start_url)
        rest = walk_cursor(s, url_for_cursor, first["after_cursor"])

    tickets = merge_tables([flatten_page(first, "tickets")] + [flatten_page(b, "tickets") for b in rest])
    dups = duplicate_ids(tickets)
    if dups:
        log.warning("⚠️ %d ticket id(s) appear more than once in the export (e.g. %s)", len(dups), dups[:5])
    tickets = pivot_custom_fields(tickets)
    log.info("Fetched %d tickets (%d cursor page(s)) from %s", len(tickets), len(rest), subdomain)
    return tickets


def get_custom_fields(email: str, token: str, subdomain: str) -> pd.DataFrame:
    """Ticket field definitions, system and custom, from one request."""
    creds = Credentials(email, token, subdomain)
    with open_session(creds) as s:
        body = zd_get(s, creds.url(TICKET_FIELDS_PATH))
    fields = flatten_page(body, "ticket_fields")
    log.info("Fetched %d ticket fields from %s", len(fields), subdomain)
    return fields
