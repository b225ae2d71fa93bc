from __future__ import annotations
from datetime import date, datetime, timezone
import pandas as pd


def to_unixtime(value) -> int:
    """Turn a start time into the epoch seconds Zendesk's incremental API wants.

    Zendesk reads ``start_time`` in UTC. Naive datetimes and date strings are
    taken as UTC already, so callers in other zones need to shift first
    (``"2020-08-01 04:00:00"`` for midnight US Eastern in summer). A bare date
    means midnight UTC on that day. Numbers pass straight through and ``None``
    or ``0`` means "from the beginning".
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Unsupported start_time: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if isinstance(value, date):
        return int(datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp())
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return 0
        ts = pd.Timestamp(raw)
        if ts is pd.NaT:
            raise ValueError(f"Unsupported start_time: {value!r}")
        if ts.tzinfo is None:
            ts = ts.tz_localize("UTC")
        return int(ts.timestamp())
    raise ValueError(f"Unsupported start_time: {value!r}")
