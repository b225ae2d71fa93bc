import os
import logging
from dotenv import load_dotenv

# I want logging ready right away, so I'm pulling in env vars first thing.
load_dotenv()
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s"
)

def _as_bool(v: str | None, default=False):
    # Tiny helper so I stop rewriting the same truthy checks everywhere.
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}

# Only the debug app reads these; the export functions take creds per call.
ZENDESK_EMAIL     = os.getenv("ZENDESK_EMAIL") or ""
ZENDESK_API_TOKEN = os.getenv("ZENDESK_API_TOKEN") or ""
ZENDESK_SUBDOMAIN = os.getenv("ZENDESK_SUBDOMAIN") or ""

HTTP_TIMEOUT = float(os.getenv("ZENDESK_HTTP_TIMEOUT", "30.0"))

# Retry pacing. With these defaults the floor wins, so every pause is 10s.
RETRY_TIMES = int(os.getenv("ZENDESK_RETRY_TIMES", "4"))
PAUSE_BASE  = float(os.getenv("ZENDESK_PAUSE_BASE", "1"))
PAUSE_MIN   = float(os.getenv("ZENDESK_PAUSE_MIN", "10"))
PAUSE_CAP   = float(os.getenv("ZENDESK_PAUSE_CAP", "5"))

# How long to keep polling the incremental endpoint for its first cursor.
CURSOR_MAX_POLLS   = int(os.getenv("ZENDESK_CURSOR_MAX_POLLS", "10"))
CURSOR_POLL_PAUSE  = float(os.getenv("ZENDESK_CURSOR_POLL_PAUSE", "1.0"))

MAX_PAGES = int(os.getenv("ZENDESK_MAX_PAGES", "10000"))

# Handy when I'm poking at the debug routes and don't want giant payloads.
DEBUG_PREVIEW_ROWS = int(os.getenv("DEBUG_PREVIEW_ROWS", "5"))
DEBUG_ROUTES = _as_bool(os.getenv("DEBUG_ROUTES"), True)
