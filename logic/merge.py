from __future__ import annotations
from typing import Iterable
import pandas as pd


def merge_tables(tables: Iterable[pd.DataFrame]) -> pd.DataFrame:
    # Stack in order; columns are the union, holes stay empty.
    frames = [t for t in tables if t is not None and not (t.empty and t.columns.empty)]
    if not frames:
        return pd.DataFrame()
    return pd.concat(frames, ignore_index=True, sort=False)


def duplicate_ids(table: pd.DataFrame, column: str = "id") -> list:
    if table.empty or column not in table.columns:
        return []
    dup = table[column][table[column].duplicated(keep="first")]
    return list(dict.fromkeys(dup.tolist()))
