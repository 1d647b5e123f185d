"""Attribute table preparation before labelling.

Nothing here drops, deduplicates or reorders rows: row i must stay aligned
with shape i on the map.
"""

from __future__ import annotations

import logging

import pandas as pd

logger = logging.getLogger(__name__)

# Attribute names seen in Irish boundary datasets (CSO / Tailte Eireann exports).
NAME_CANDIDATES = ["LEA", "ENGLISH", "COUNTY", "CONSTITUEN", "NAME", "name"]
POPULATION_CANDIDATES = ["Pop2016", "Pop2022", "POPULATION", "T1_1AGETT", "population", "pop"]


def strip_strings(df: pd.DataFrame) -> pd.DataFrame:
    """Strip leading/trailing whitespace from string columns."""
    df = df.copy()
    str_cols = [c for c in df.columns if df[c].dtype == object or pd.api.types.is_string_dtype(df[c])]
    for col in str_cols:
        df[col] = df[col].map(lambda v: v.strip() if isinstance(v, str) else v)
    return df


def coerce_numeric(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """Force columns to numeric, coercing errors to NaN."""
    df = df.copy()
    for col in columns:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def find_attribute(df: pd.DataFrame, candidates: list[str]) -> str | None:
    for c in candidates:
        if c in df.columns:
            return c
    return None


def prepare_attributes(df: pd.DataFrame, numeric: list[str] | None = None) -> pd.DataFrame:
    """Strip strings and coerce *numeric* columns, keeping every row in place."""
    df = strip_strings(df)
    if numeric:
        df = coerce_numeric(df, numeric)
        unparsed = {col: int(df[col].isna().sum()) for col in numeric if col in df.columns}
        unparsed = {col: n for col, n in unparsed.items() if n}
        if unparsed:
            logger.warning("Null numeric values after coercion: %s", unparsed)
    logger.info("Prepared attributes: %d rows x %d cols", len(df), len(df.columns))
    return df
