"""
Data Preprocessor Module
Handles column renaming, type coercion and grouping of MPI poverty records.
"""

import pandas as pd
import numpy as np
from typing import List, Optional, Tuple
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
from config import (
    COLUMN_NAMES, NUMERIC_COLUMNS, DATE_COLUMNS, FLAG_COLUMNS, STRING_COLUMNS,
    COUNTRY_KEY, REGION_KEY
)
from src.utils.errors import ParseError

TRUE_VALUES = {'y', 'yes', 'true', 't', '1'}
FALSE_VALUES = {'n', 'no', 'false', 'f', '0'}


def _normalize_text(series: pd.Series) -> pd.Series:
    """Strip surrounding whitespace and turn blank cells into NaN."""
    series = series.astype(object)
    series = series.map(lambda v: v.strip() if isinstance(v, str) else v)
    return series.where(series != '', np.nan)


def _coerce_numeric(series: pd.Series, column: str, strict: bool = False) -> Tuple[pd.Series, int]:
    """
    Cast a column to float, turning unparseable and infinite cells into NaN.

    Args:
        series: Text column
        column: Column name (for error messages)
        strict: Raise ParseError instead of coercing

    Returns:
        Tuple of (float series, number of coerced cells)
    """
    parsed = pd.to_numeric(series, errors='coerce').astype(float)
    parsed = parsed.replace([np.inf, -np.inf], np.nan)
    failed = series.notna() & parsed.isna()

    if strict and failed.any():
        raise ParseError(column, series[failed].tolist())

    return parsed, int(failed.sum())


def _coerce_date(series: pd.Series, column: str, strict: bool = False) -> Tuple[pd.Series, int]:
    """
    Cast a column to calendar dates, turning unparseable cells into NaT.

    Args:
        series: Text column
        column: Column name (for error messages)
        strict: Raise ParseError instead of coercing

    Returns:
        Tuple of (datetime series, number of coerced cells)
    """
    # Offsets are converted to UTC so mixed naive and aware cells parse together
    parsed = pd.to_datetime(series, errors='coerce', format='ISO8601', utc=True)
    parsed = parsed.dt.tz_convert(None).dt.normalize()
    failed = series.notna() & parsed.isna()

    if strict and failed.any():
        raise ParseError(column, series[failed].tolist())

    return parsed, int(failed.sum())


def _parse_flag(series: pd.Series) -> pd.Series:
    """Map Y/N style flags to a nullable boolean column."""
    def to_bool(value):
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        return pd.NA

    return series.map(to_bool, na_action='ignore').astype('boolean')


def clean_data(raw_df: pd.DataFrame, strict: bool = False) -> pd.DataFrame:
    """
    Clean raw poverty records into typed columns.

    Columns are renamed by position. Numeric and date cells that cannot be
    parsed become missing instead of aborting the row. Negative indicator
    values and inverted reference periods are treated as missing too.

    Args:
        raw_df: Raw DataFrame from the loader
        strict: If True, raise ParseError on the first unparseable column

    Returns:
        Cleaned DataFrame
    """
    if raw_df.shape[1] < len(COLUMN_NAMES):
        raise ValueError(
            f"Expected {len(COLUMN_NAMES)} columns, got {raw_df.shape[1]}"
        )

    df_clean = raw_df.iloc[:, :len(COLUMN_NAMES)].copy()
    df_clean.columns = COLUMN_NAMES

    for col in COLUMN_NAMES:
        df_clean[col] = _normalize_text(df_clean[col])

    # Identifiers
    for col in STRING_COLUMNS:
        df_clean[col] = df_clean[col].astype('string')

    # Flags
    for col in FLAG_COLUMNS:
        df_clean[col] = _parse_flag(df_clean[col])

    # Numeric indicators
    for col in NUMERIC_COLUMNS:
        df_clean[col], n_failed = _coerce_numeric(df_clean[col], col, strict=strict)
        if n_failed:
            print(f"  Warning: {n_failed} unparseable value(s) in '{col}' set to missing")

        negative = df_clean[col] < 0
        if negative.any():
            print(f"  Warning: {negative.sum()} negative value(s) in '{col}' set to missing")
            df_clean.loc[negative, col] = np.nan

    # Reference period
    for col in DATE_COLUMNS:
        df_clean[col], n_failed = _coerce_date(df_clean[col], col, strict=strict)
        if n_failed:
            print(f"  Warning: {n_failed} unparseable date(s) in '{col}' set to missing")

    inverted = (
        df_clean['reference_period_start'].notna() &
        df_clean['reference_period_end'].notna() &
        (df_clean['reference_period_start'] > df_clean['reference_period_end'])
    )
    if inverted.any():
        print(f"  Warning: {inverted.sum()} record(s) with start after end; period set to missing")
        df_clean.loc[inverted, DATE_COLUMNS] = pd.NaT

    print(f"Cleaned data: {len(df_clean):,} records")

    return df_clean.reset_index(drop=True)


def group_means(df: pd.DataFrame,
                key: str,
                fields: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Mean of each numeric field per group, ignoring missing values.

    Groups keep the order in which their key first appears in the input.
    Rows with a missing key are excluded.

    Args:
        df: Cleaned DataFrame
        key: Grouping column (e.g. 'location_code' or 'admin1_name')
        fields: Numeric columns to average (default: all indicators)

    Returns:
        DataFrame with one row per group and an 'n_records' column
    """
    if fields is None:
        fields = NUMERIC_COLUMNS

    data = df[df[key].notna()]
    grouped = data.groupby(key, sort=False)

    means = grouped[fields].mean()
    means['n_records'] = grouped.size()

    return means.reset_index()


def aggregate_by_country(df: pd.DataFrame) -> pd.DataFrame:
    """Mean indicators per country code."""
    return group_means(df, COUNTRY_KEY)


def aggregate_by_region(df: pd.DataFrame) -> pd.DataFrame:
    """Mean indicators per first-level administrative region."""
    return group_means(df, REGION_KEY)


def time_series_means(df: pd.DataFrame,
                      date_col: str = 'reference_period_start') -> pd.DataFrame:
    """
    Get mean indicators per reference period across all locations.

    Args:
        df: Cleaned DataFrame
        date_col: Date column to group on

    Returns:
        DataFrame sorted by date
    """
    ts_df = df[df[date_col].notna()].groupby(date_col)[NUMERIC_COLUMNS].mean().reset_index()

    return ts_df.sort_values(date_col).reset_index(drop=True)


if __name__ == "__main__":
    # Test preprocessor
    from loader import load_raw_data

    print("Testing preprocessor...")
    raw_df = load_raw_data()

    print("\nCleaning data...")
    df_clean = clean_data(raw_df)

    print("\nAggregating by country...")
    country_df = aggregate_by_country(df_clean)
    print(f"Country aggregation: {len(country_df)} records")
    print(country_df.head())
