import json
from config import ZENDESK_EMAIL, ZENDESK_API_TOKEN, ZENDESK_SUBDOMAIN
from services.zendesk import Credentials, open_session, zd_get, TICKET_FIELDS_PATH

# Quick helper script for me to dump raw field metadata when a pivot looks off.
creds = Credentials(ZENDESK_EMAIL, ZENDESK_API_TOKEN, ZENDESK_SUBDOMAIN)

with open_session(creds) as s:
    data = zd_get(s, creds.url(TICKET_FIELDS_PATH))

with open("ticket_fields.json", "w", encoding="utf-8") as f:
    json.dump(data, f, indent=2)

print(f"✅ Saved {len(data.get('ticket_fields') or [])} fields to ticket_fields.json")
