"""
Statistical Analysis Module
Descriptive statistics, rankings, correlation, ANOVA and inequality measures
for MPI poverty indicators.
"""

import pandas as pd
import numpy as np
from scipy import stats
from typing import Optional, List
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
from config import NUMERIC_COLUMNS


def get_distribution_stats(df: pd.DataFrame, value_col: str) -> dict:
    """
    Calculate distribution statistics over the non-missing values of a column.

    Args:
        df: DataFrame with values
        value_col: Column to analyze

    Returns:
        Dictionary with distribution statistics
    """
    values = df[value_col].dropna().astype(float)

    stats_dict = {
        'count': int(len(values)),
        'missing': int(df[value_col].isna().sum()),
        'mean': values.mean(),
        'std': values.std(),
        'min': values.min(),
        'q1': values.quantile(0.25),
        'median': values.median(),
        'q3': values.quantile(0.75),
        'max': values.max()
    }

    return stats_dict


def summary_statistics(df: pd.DataFrame, fields: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Per-field count, mean, spread and quartiles.

    Args:
        df: Cleaned DataFrame
        fields: Numeric columns to describe (default: all indicators)

    Returns:
        DataFrame indexed by field name
    """
    if fields is None:
        fields = NUMERIC_COLUMNS

    rows = {field: get_distribution_stats(df, field) for field in fields}
    summary = pd.DataFrame.from_dict(rows, orient='index')
    summary.index.name = 'field'

    return summary


def top_n(table: pd.DataFrame, field: str, n: int) -> pd.DataFrame:
    """
    First n rows of a table sorted descending by a field.

    The sort is stable, so rows with equal values keep their prior order.
    Missing values sort last.

    Args:
        table: DataFrame to rank
        field: Column to sort on
        n: Number of rows to keep

    Returns:
        Sorted DataFrame with at most n rows
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    ranked = table.sort_values(field, ascending=False, kind='mergesort', na_position='last')

    return ranked.head(n).reset_index(drop=True)


def correlation_matrix(df: pd.DataFrame, fields: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Pairwise Pearson correlation over complete cases.

    Rows with a missing value in any of the selected fields are dropped
    before computing every pair.

    Args:
        df: DataFrame with numeric columns
        fields: Columns to correlate (default: all indicators)

    Returns:
        Square correlation DataFrame
    """
    if fields is None:
        fields = NUMERIC_COLUMNS

    complete = df[fields].dropna().astype(float)
    corr = complete.corr(method='pearson')

    for field in fields:
        if len(complete) > 1 and complete[field].std() > 0:
            corr.loc[field, field] = 1.0

    return corr


def one_way_anova(df: pd.DataFrame, value: str, group_key: str) -> dict:
    """
    One-way ANOVA F-test of a value across groups.

    Args:
        df: DataFrame with values and group labels
        value: Numeric column to test
        group_key: Grouping column

    Returns:
        Dictionary with sums of squares, degrees of freedom, F and p-value
    """
    data = df[[group_key, value]].dropna()
    groups = [
        g[value].to_numpy(dtype=float)
        for _, g in data.groupby(group_key, sort=False)
        if len(g) > 0
    ]

    n_groups = len(groups)
    n_obs = sum(len(g) for g in groups)

    if n_groups < 2:
        raise ValueError(f"ANOVA needs at least 2 groups with data, got {n_groups}")

    df_between = n_groups - 1
    df_within = n_obs - n_groups

    if df_within <= 0:
        raise ValueError("ANOVA needs more observations than groups")

    grand_mean = np.concatenate(groups).mean()
    ss_between = sum(len(g) * (g.mean() - grand_mean) ** 2 for g in groups)
    ss_within = sum(((g - g.mean()) ** 2).sum() for g in groups)

    ms_between = ss_between / df_between
    ms_within = ss_within / df_within

    if ms_within > 0:
        f_stat = ms_between / ms_within
        p_value = stats.f.sf(f_stat, df_between, df_within)
    elif ms_between > 0:
        f_stat, p_value = np.inf, 0.0
    else:
        f_stat, p_value = np.nan, np.nan

    ss_total = ss_between + ss_within

    return {
        'n_groups': n_groups,
        'n_observations': n_obs,
        'ss_between': float(ss_between),
        'ss_within': float(ss_within),
        'df_between': df_between,
        'df_within': df_within,
        'ms_between': float(ms_between),
        'ms_within': float(ms_within),
        'f_statistic': float(f_stat),
        'p_value': float(p_value),
        'eta_squared': float(ss_between / ss_total) if ss_total > 0 else np.nan
    }


def gini_coefficient(values) -> float:
    """
    Gini coefficient from the mean absolute difference.

    G = sum_i sum_j |x_i - x_j| / (2 * n^2 * mean), over non-missing values.
    Returns NaN for no values and 0.0 when the mean is zero.
    """
    x = np.asarray(values, dtype=float)
    x = x[~np.isnan(x)]

    n = len(x)
    if n == 0:
        return np.nan

    mean = x.mean()
    if mean == 0:
        return 0.0

    abs_diff = np.abs(np.subtract.outer(x, x)).sum()

    return float(abs_diff / (2 * n ** 2 * mean))


def gini_per_group(df: pd.DataFrame, value: str, group_key: str) -> pd.DataFrame:
    """
    Gini coefficient of a value within each group.

    Args:
        df: DataFrame with values and group labels
        value: Numeric column
        group_key: Grouping column

    Returns:
        DataFrame with group key, 'gini' and 'n' (non-missing count)
    """
    data = df[df[group_key].notna()]
    grouped = data.groupby(group_key, sort=False)[value]

    result = pd.DataFrame({
        'gini': grouped.apply(gini_coefficient),
        'n': grouped.count()
    })

    return result.reset_index()


if __name__ == "__main__":
    print("Testing statistical analysis module...")

    np.random.seed(42)
    sample_data = pd.DataFrame({
        'location_code': ['AFG'] * 20 + ['ETH'] * 20 + ['NER'] * 20,
        'mpi': np.concatenate([
            np.random.uniform(0.2, 0.4, 20),
            np.random.uniform(0.3, 0.5, 20),
            np.random.uniform(0.5, 0.7, 20)
        ]),
        'headcount_ratio': np.random.uniform(30, 90, 60)
    })

    print("\nSummary statistics:")
    print(summary_statistics(sample_data, ['mpi', 'headcount_ratio']))

    print("\nANOVA:")
    for key, value in one_way_anova(sample_data, 'mpi', 'location_code').items():
        print(f"  {key}: {value:.4f}" if isinstance(value, float) else f"  {key}: {value}")

    print("\nGini per country:")
    print(gini_per_group(sample_data, 'mpi', 'location_code'))
