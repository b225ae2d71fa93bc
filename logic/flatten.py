from __future__ import annotations
import logging
import pandas as pd

log = logging.getLogger(__name__)


def flatten_page(body: dict, key: str) -> pd.DataFrame:
    """One row per record in ``body[key]``; nested objects become dotted columns.

    Lists (like ``custom_fields`` or ``tags``) stay as lists in their cell.
    A missing ``key`` raises ``KeyError``; that means the API answered with
    something we don't understand.
    """
    records = body[key]
    if not records:
        return pd.DataFrame()
    return pd.json_normalize(records)


def _pairs_to_row(pairs) -> dict:
    row = {}
    if not isinstance(pairs, list):
        return row
    for item in pairs:
        if isinstance(item, dict) and item.get("id") is not None:
            row[str(item["id"])] = item.get("value")
    return row


def pivot_custom_fields(table: pd.DataFrame, column: str = "custom_fields") -> pd.DataFrame:
    """Widen each row's ``[{id, value}, ...]`` list into one column per id.

    Custom fields differ per Zendesk account, so the columns are whatever ids
    show up. Rows without a given id get an empty cell there; rows with no
    custom fields at all are kept as is. The ``custom_fields`` list itself stays.
    """
    if table.empty or column not in table.columns:
        return table
    wide = pd.DataFrame([_pairs_to_row(v) for v in table[column]], index=table.index)
    if wide.columns.empty:
        return table
    renames = {}
    for c in wide.columns:
        if c not in table.columns:
            continue
        new = f"{c}_custom"
        while new in table.columns or new in wide.columns or new in renames.values():
            new += "_"
        renames[c] = new
    if renames:
        log.warning("Custom field ids clash with existing columns; renamed %s", renames)
        wide = wide.rename(columns=renames)
    log.debug("Pivoted %d custom field column(s)", len(wide.columns))
    return pd.concat([table, wide], axis=1)
