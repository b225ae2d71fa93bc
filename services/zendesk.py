from __future__ import annotations
import time
import random
import logging
from dataclasses import dataclass, field
import requests
from requests.adapters import HTTPAdapter
from config import (
    HTTP_TIMEOUT,
    RETRY_TIMES,
    PAUSE_BASE,
    PAUSE_MIN,
    PAUSE_CAP,
)

log = logging.getLogger(__name__)

USERS_PATH = "/api/v2/users.json"
TICKET_FIELDS_PATH = "/api/v2/ticket_fields.json"
INCREMENTAL_TICKETS_PATH = "/api/v2/incremental/tickets/cursor.json"

# Statuses where Zendesk tells us how long to back off.
_RETRY_AFTER_STATUS = {429, 503}


class ZendeskError(RuntimeError):
    """Base class for everything this client raises on purpose."""


class ZendeskApiError(ZendeskError):
    """A request kept failing after the retry budget ran out."""

    def __init__(self, message: str, *, status: int | None = None, url: str | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.url = url
        self.body = body


class CursorTimeoutError(ZendeskError):
    """The incremental endpoint never handed back an ``after_cursor``."""


class PaginationError(ZendeskError):
    """Raised when a paged endpoint keeps claiming there is another page."""


@dataclass(frozen=True)
class Credentials:
    email: str
    token: str = field(repr=False)
    subdomain: str

    def __post_init__(self):
        for name in ("email", "token", "subdomain"):
            if not str(getattr(self, name) or "").strip():
                raise ValueError(f"Zendesk {name} is required")

    @property
    def auth(self) -> tuple[str, str]:
        # API token auth: "<email>/token" as the user, the token as password.
        return (f"{self.email}/token", self.token)

    @property
    def base_url(self) -> str:
        return f"https://{self.subdomain}.zendesk.com"

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"


def open_session(creds: Credentials) -> requests.Session:
    # One session per export so the pool and auth ride along on every page.
    s = requests.Session()
    s.auth = creds.auth
    s.headers.update({"Accept": "application/json"})
    s.mount("https://", HTTPAdapter(pool_connections=4, pool_maxsize=4))
    return s


def backoff_pause(attempt: int, *, pause_base: float = PAUSE_BASE, pause_min: float = PAUSE_MIN,
                  pause_cap: float = PAUSE_CAP) -> float:
    """Seconds to wait after failed attempt number ``attempt`` (1-based).

    Full-jitter exponential backoff capped at ``pause_cap``, but never shorter
    than ``pause_min``. With the default knobs the floor wins every time.
    """
    ceiling = min(pause_cap, pause_base * (2 ** attempt))
    return max(pause_min, random.uniform(0, ceiling))


def _retry_after(resp: requests.Response | None) -> float | None:
    if resp is None or resp.status_code not in _RETRY_AFTER_STATUS:
        return None
    raw = resp.headers.get("Retry-After")
    try:
        return float(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None


def get_with_retry(
    session: requests.Session,
    url: str,
    *,
    params: dict | None = None,
    times: int = RETRY_TIMES,
    pause_base: float = PAUSE_BASE,
    pause_min: float = PAUSE_MIN,
    pause_cap: float = PAUSE_CAP,
    timeout: float = HTTP_TIMEOUT,
) -> requests.Response:
    """GET ``url`` up to ``times`` times, returning the first 2xx response.

    Anything else, a non-2xx status or a ``requests`` exception, counts as a
    failed attempt. When the last attempt fails a :class:`ZendeskApiError` is
    raised. A 2xx with an empty result set is a normal answer and is returned
    as is.
    """
    times = max(1, int(times))
    last_exc: requests.RequestException | None = None
    resp: requests.Response | None = None
    for attempt in range(1, times + 1):
        last_exc, resp = None, None
        try:
            resp = session.get(url, params=params, timeout=timeout)
        except requests.RequestException as e:
            last_exc = e
            log.warning("ZD GET %s failed on attempt %d/%d (%s)", url, attempt, times, e)
        else:
            if 200 <= resp.status_code < 300:
                return resp
            log.warning("ZD GET %s -> %s on attempt %d/%d", url, resp.status_code, attempt, times)

        if attempt < times:
            wait = backoff_pause(attempt, pause_base=pause_base, pause_min=pause_min, pause_cap=pause_cap)
            hinted = _retry_after(resp)
            if hinted is not None and hinted > wait:
                wait = hinted
            log.debug("Sleeping %.1fs before retrying %s", wait, url)
            time.sleep(wait)

    if last_exc is not None:
        log.error("❌ ZD GET %s -> %s", url, last_exc)
        raise ZendeskApiError(f"GET {url} failed after {times} attempts: {last_exc}", url=url) from last_exc

    body = (resp.text or "")[:800] if resp is not None else ""
    status = resp.status_code if resp is not None else None
    log.error("❌ ZD GET %s -> %s %s", url, status, body)
    raise ZendeskApiError(f"GET {url} returned HTTP {status} after {times} attempts", status=status, url=url, body=body)


def zd_get(session: requests.Session, url: str, params: dict | None = None, **retry) -> dict:
    # Retried GET plus JSON decode; bad JSON is left to blow up on purpose.
    return get_with_retry(session, url, params=params, **retry).json()
