"""
Clustering Module
Fixed-seed k-means partition of locations by their poverty indicator profile.
"""

import pandas as pd
import numpy as np
from sklearn.cluster import KMeans
from sklearn.preprocessing import StandardScaler
from typing import Optional, List
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
from config import NUMERIC_COLUMNS, KMEANS_CLUSTERS, KMEANS_SEED, KMEANS_N_INIT


class PovertyClusterer:
    """
    K-means clusterer over complete-case rows of selected indicators.
    """

    def __init__(self, n_clusters: int = None, random_state: int = None, standardize: bool = False):
        """
        Initialize the clusterer.

        Args:
            n_clusters: Number of clusters (default from config)
            random_state: Random seed for reproducibility (default from config)
            standardize: Scale features to zero mean and unit variance first
        """
        if n_clusters is None:
            n_clusters = KMEANS_CLUSTERS
        if random_state is None:
            random_state = KMEANS_SEED

        self.n_clusters = n_clusters
        self.random_state = random_state
        self.standardize = standardize
        self.model = None
        self.scaler = StandardScaler() if standardize else None
        self.feature_names = None

    def _prepare(self, df: pd.DataFrame, fit: bool = False) -> pd.DataFrame:
        X = df[self.feature_names].dropna().astype(float)
        if self.scaler is None or len(X) == 0:
            return X
        values = self.scaler.fit_transform(X) if fit else self.scaler.transform(X)
        return pd.DataFrame(values, index=X.index, columns=self.feature_names)

    def fit(self, df: pd.DataFrame, feature_cols: List[str]) -> 'PovertyClusterer':
        """
        Fit k-means on rows with no missing value among the features.

        Args:
            df: DataFrame with features
            feature_cols: List of feature columns to use

        Returns:
            Self for method chaining
        """
        self.feature_names = list(feature_cols)

        X = self._prepare(df, fit=True)
        if len(X) < self.n_clusters:
            raise ValueError(
                f"Need at least {self.n_clusters} complete rows for k-means, got {len(X)}"
            )

        self.model = KMeans(
            n_clusters=self.n_clusters,
            random_state=self.random_state,
            n_init=KMEANS_N_INIT
        )
        self.model.fit(X.to_numpy())

        return self

    def predict(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Assign clusters to rows.

        Args:
            df: DataFrame with features

        Returns:
            Copy of df with a nullable integer 'cluster' column; rows with a
            missing feature get <NA>
        """
        if self.model is None:
            raise RuntimeError("Model not fitted. Call fit() first.")

        df = df.copy()
        X = self._prepare(df)

        clusters = pd.Series(pd.NA, index=df.index, dtype='Int64')
        if len(X) > 0:
            clusters.loc[X.index] = self.model.predict(X.to_numpy())
        df['cluster'] = clusters

        return df

    def fit_predict(self, df: pd.DataFrame, feature_cols: List[str]) -> pd.DataFrame:
        """Fit and predict in one step."""
        self.fit(df, feature_cols)
        return self.predict(df)

    def cluster_centers(self) -> pd.DataFrame:
        """Cluster centers in the original feature units."""
        if self.model is None:
            raise RuntimeError("Model not fitted")

        centers = self.model.cluster_centers_
        if self.scaler is not None:
            centers = self.scaler.inverse_transform(centers)

        centers_df = pd.DataFrame(centers, columns=self.feature_names)
        centers_df.index.name = 'cluster'
        return centers_df


def kmeans_cluster(df: pd.DataFrame,
                   fields: Optional[List[str]] = None,
                   k: int = None,
                   seed: int = None,
                   standardize: bool = False) -> pd.DataFrame:
    """
    Partition rows into k clusters with a fixed seed.

    The assignment is deterministic for the same seed and input order.

    Args:
        df: DataFrame with indicator columns
        fields: Columns to cluster on (default: all indicators)
        k: Number of clusters (default: 5)
        seed: Random seed (default: 123)
        standardize: Scale features before clustering

    Returns:
        Copy of df with a 'cluster' column
    """
    if fields is None:
        fields = NUMERIC_COLUMNS

    clusterer = PovertyClusterer(n_clusters=k, random_state=seed, standardize=standardize)
    return clusterer.fit_predict(df, fields)


def get_cluster_summary(df: pd.DataFrame, fields: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Size and mean indicator profile per cluster.

    Args:
        df: DataFrame with a 'cluster' column
        fields: Columns to average (default: all indicators present)

    Returns:
        DataFrame with one row per cluster, ordered by cluster id
    """
    if 'cluster' not in df.columns:
        raise ValueError("DataFrame must contain clustering results")

    if fields is None:
        fields = [col for col in NUMERIC_COLUMNS if col in df.columns]

    assigned = df[df['cluster'].notna()]
    grouped = assigned.groupby('cluster')

    summary = grouped[fields].mean()
    summary.insert(0, 'size', grouped.size())

    return summary.reset_index()


if __name__ == "__main__":
    print("Testing k-means clustering...")

    np.random.seed(42)
    n_samples = 60

    sample_data = pd.DataFrame({
        'location_code': [f'C{i:02d}' for i in range(n_samples)],
        'mpi': np.random.uniform(0, 0.6, n_samples),
        'headcount_ratio': np.random.uniform(0, 90, n_samples),
        'intensity_of_deprivation': np.random.uniform(35, 65, n_samples)
    })
    sample_data.loc[3, 'mpi'] = np.nan

    fields = ['mpi', 'headcount_ratio', 'intensity_of_deprivation']
    result = kmeans_cluster(sample_data, fields)

    print("\nCluster Summary:")
    print(get_cluster_summary(result, fields))
