import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

import pandas as pd
import requests
from flask import Flask
from routes import debug
from services.zendesk import ZendeskApiError


def _client():
    app = Flask(__name__)
    app.register_blueprint(debug.bp)
    return app.test_client()


def test_debug_users_summarizes_table(monkeypatch):
    monkeypatch.setattr(debug, "_creds", lambda: ("me@acme.com", "tok", "acme"))
    df = pd.DataFrame({"id": [1, 2], "name": ["A", None]})
    monkeypatch.setattr(debug, "get_users", lambda email, token, sub: df)
    resp = _client().get("/debug/users")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["rows"] == 2
    assert data["columns"] == ["id", "name"]
    assert data["preview"][1] == {"id": 2, "name": None}


def test_debug_tickets_passes_start_time(monkeypatch):
    seen = {}

    def fake_tickets(email, token, sub, start_time=0):
        seen["start_time"] = start_time
        return pd.DataFrame({"id": [5]})

    monkeypatch.setattr(debug, "_creds", lambda: ("me@acme.com", "tok", "acme"))
    monkeypatch.setattr(debug, "get_tickets", fake_tickets)
    resp = _client().get("/debug/tickets?start_time=2020-08-01")
    assert resp.status_code == 200
    assert seen["start_time"] == "2020-08-01"


def test_debug_fields_maps_api_error_to_502(monkeypatch):
    def fail(*a, **k):
        raise ZendeskApiError("boom", status=500)

    monkeypatch.setattr(debug, "_creds", lambda: ("me@acme.com", "tok", "acme"))
    monkeypatch.setattr(debug, "get_custom_fields", fail)
    resp = _client().get("/debug/fields")
    assert resp.status_code == 502
    assert resp.get_json()["status"] == 500


def test_debug_missing_creds_is_400(monkeypatch):
    monkeypatch.setattr(debug, "_creds", lambda: ("", "", ""))
    resp = _client().get("/debug/users")
    assert resp.status_code == 400


def test_debug_malformed_upstream_body_is_502(monkeypatch):
    def bad_json(*a, **k):
        raise requests.JSONDecodeError("Expecting value", "<html>", 0)

    monkeypatch.setattr(debug, "_creds", lambda: ("me@acme.com", "tok", "acme"))
    monkeypatch.setattr(debug, "get_users", bad_json)
    resp = _client().get("/debug/users")
    assert resp.status_code == 502


def test_debug_tickets_epoch_digits_become_int(monkeypatch):
    seen = {}

    def fake_tickets(email, token, sub, start_time=0):
        seen["start_time"] = start_time
        return pd.DataFrame({"id": [5]})

    monkeypatch.setattr(debug, "_creds", lambda: ("me@acme.com", "tok", "acme"))
    monkeypatch.setattr(debug, "get_tickets", fake_tickets)
    _client().get("/debug/tickets?start_time=1596240000")
    assert seen["start_time"] == 1596240000
    _client().get("/debug/tickets?start_time=20200801")
    assert seen["start_time"] == "20200801"
