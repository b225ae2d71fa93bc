from __future__ import annotations
import json
import logging
import requests
from flask import Blueprint, request, jsonify
from config import ZENDESK_EMAIL, ZENDESK_API_TOKEN, ZENDESK_SUBDOMAIN, DEBUG_PREVIEW_ROWS
from services.zendesk import ZendeskError
from logic.export import get_users, get_tickets, get_custom_fields

log = logging.getLogger(__name__)
bp = Blueprint("debug", __name__)


def _creds():
    return ZENDESK_EMAIL, ZENDESK_API_TOKEN, ZENDESK_SUBDOMAIN


def _summary(name: str, df):
    # Round-trip through to_json so NaN/Timestamps come out as plain JSON.
    preview = json.loads(df.head(DEBUG_PREVIEW_ROWS).to_json(orient="records", date_format="iso"))
    return jsonify({
        "table": name,
        "rows": int(len(df)),
        "columns": [str(c) for c in df.columns],
        "preview": preview,
    }), 200


def _run(name: str, fn, *args, **kwargs):
    try:
        df = fn(*_creds(), *args, **kwargs)
    except requests.JSONDecodeError as e:
        log.exception("Debug export %s got a bad body from Zendesk: %s", name, e)
        return jsonify({"error": f"Malformed Zendesk response: {e}"}), 502
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except ZendeskError as e:
        log.exception("Debug export %s failed: %s", name, e)
        return jsonify({"error": str(e), "status": getattr(e, "status", None)}), 502
    return _summary(name, df)


@bp.get("/debug/users")
def debug_users():
    return _run("users", get_users)


@bp.get("/debug/tickets")
def debug_tickets():
    start = (request.args.get("start_time") or "").strip() or 0
    if isinstance(start, str) and start.isdigit() and len(start) != 8:
        # Raw epoch seconds; eight digits is a compact date like 20200801.
        start = int(start)
    return _run("tickets", get_tickets, start_time=start)


@bp.get("/debug/fields")
def debug_fields():
    return _run("ticket_fields", get_custom_fields)
