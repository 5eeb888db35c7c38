"""
Data Loader Module
Handles loading of the Global Multidimensional Poverty Index CSV file.
"""

import pandas as pd
import os
from typing import Optional
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
from config import INPUT_FILE, COLUMN_NAMES, NUMERIC_COLUMNS
from src.utils.errors import LoadError


def load_raw_data(filepath: Optional[str] = None) -> pd.DataFrame:
    """
    Load the poverty CSV file as raw string cells.

    The first row after the header is a metadata artifact (HXL hashtags)
    and is discarded. Columns beyond the expected 13 are dropped.

    Args:
        filepath: Path to the CSV file (default: INPUT_FILE from config)

    Returns:
        DataFrame with one string-typed row per record

    Raises:
        LoadError: If the file is missing, unreadable or has too few columns
    """
    if filepath is None:
        filepath = INPUT_FILE

    if not os.path.isfile(filepath):
        raise LoadError(f"Input file not found: {filepath}")

    try:
        df = pd.read_csv(
            filepath,
            dtype=str,
            keep_default_na=False,
            encoding='utf-8'
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise LoadError(f"Could not read {filepath}: {e}") from e

    if len(df.columns) < len(COLUMN_NAMES):
        raise LoadError(
            f"Expected at least {len(COLUMN_NAMES)} columns in {filepath}, "
            f"found {len(df.columns)}"
        )

    # Drop metadata row and any trailing extra columns
    df = df.iloc[1:, :len(COLUMN_NAMES)].reset_index(drop=True)

    print(f"Loaded {len(df):,} records from {os.path.basename(filepath)}")

    return df


def get_data_summary(df: pd.DataFrame) -> dict:
    """
    Generate summary statistics for the cleaned data.

    Args:
        df: Cleaned DataFrame with poverty records

    Returns:
        Dictionary with summary statistics
    """
    start = df['reference_period_start'].min()
    end = df['reference_period_end'].max()

    summary = {
        'total_records': len(df),
        'countries': df['location_code'].nunique(),
        'regions': df['admin1_name'].nunique(),
        'date_range': {
            'start': start.strftime('%Y-%m-%d') if pd.notna(start) else 'N/A',
            'end': end.strftime('%Y-%m-%d') if pd.notna(end) else 'N/A'
        },
        'indicator_counts': {
            col: int(df[col].notna().sum())
            for col in NUMERIC_COLUMNS if col in df.columns
        }
    }

    return summary


if __name__ == "__main__":
    # Test data loading
    print("Testing data loader...")
    raw_df = load_raw_data()
    print(raw_df.head())
