"""
Unit Tests for Clustering Module
"""

import pytest
import pandas as pd
import numpy as np
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.models.clustering import PovertyClusterer, kmeans_cluster, get_cluster_summary


class TestPovertyClusterer:
    """Test PovertyClusterer class."""

    def setup_method(self):
        """Set up five well separated groups of ten locations."""
        np.random.seed(42)
        centers = [(0.05, 10.0), (0.15, 30.0), (0.30, 50.0), (0.45, 70.0), (0.60, 90.0)]

        frames = []
        for i, (mpi, headcount) in enumerate(centers):
            frames.append(pd.DataFrame({
                'location_code': [f'L{i}{j}' for j in range(10)],
                'mpi': np.random.normal(mpi, 0.005, 10),
                'headcount_ratio': np.random.normal(headcount, 0.5, 10)
            }))
        self.df = pd.concat(frames, ignore_index=True)
        self.fields = ['mpi', 'headcount_ratio']

    def test_clusterer_initialization(self):
        """Defaults come from config."""
        clusterer = PovertyClusterer()
        assert clusterer.n_clusters == 5
        assert clusterer.random_state == 123
        assert clusterer.model is None
        assert clusterer.feature_names is None

    def test_fit_predict(self):
        """Every complete row gets one of k clusters."""
        result = PovertyClusterer().fit_predict(self.df, self.fields)

        assert 'cluster' in result.columns
        assert result['cluster'].notna().all()
        assert set(result['cluster'].unique()) == {0, 1, 2, 3, 4}

    def test_separated_groups_recovered(self):
        """Each generated group lands in its own cluster."""
        result = PovertyClusterer(standardize=True).fit_predict(self.df, self.fields)

        for i in range(5):
            labels = result.loc[i * 10:(i + 1) * 10 - 1, 'cluster']
            assert labels.nunique() == 1
        assert result['cluster'].nunique() == 5

    def test_deterministic(self):
        """Same seed and input order give the same assignment."""
        first = kmeans_cluster(self.df, self.fields, k=5, seed=123)
        second = kmeans_cluster(self.df, self.fields, k=5, seed=123)

        assert first['cluster'].tolist() == second['cluster'].tolist()

    def test_incomplete_rows_unassigned(self):
        """Rows missing a selected field get no cluster."""
        df = self.df.copy()
        df.loc[3, 'mpi'] = np.nan

        result = kmeans_cluster(df, self.fields)

        assert pd.isna(result.loc[3, 'cluster'])
        assert result['cluster'].notna().sum() == len(df) - 1

    def test_too_few_rows(self):
        """Fewer complete rows than clusters is rejected."""
        with pytest.raises(ValueError):
            kmeans_cluster(self.df.head(3), self.fields, k=5)

    def test_predict_before_fit(self):
        """Predicting without fitting raises."""
        with pytest.raises(RuntimeError):
            PovertyClusterer().predict(self.df)

    def test_cluster_centers_original_units(self):
        """Centers are reported in the original feature scale."""
        clusterer = PovertyClusterer(standardize=True)
        clusterer.fit(self.df, self.fields)

        centers = clusterer.cluster_centers()

        assert centers.shape == (5, 2)
        assert sorted(centers['headcount_ratio'].round(-1).tolist()) == [10.0, 30.0, 50.0, 70.0, 90.0]

    def test_source_not_mutated(self):
        """Clustering returns a new frame."""
        before = self.df.copy()
        kmeans_cluster(self.df, self.fields)

        pd.testing.assert_frame_equal(self.df, before)


class TestClusterSummary:
    """Test get_cluster_summary."""

    def test_summary_sizes(self):
        """Sizes add up to the assigned rows."""
        df = pd.DataFrame({
            'mpi': [0.1, 0.2, 0.5, 0.6, 0.9],
            'cluster': pd.array([0, 0, 1, 1, pd.NA], dtype='Int64')
        })

        summary = get_cluster_summary(df, ['mpi'])

        assert summary['size'].tolist() == [2, 2]
        assert summary['mpi'].tolist() == pytest.approx([0.15, 0.55])

    def test_requires_cluster_column(self):
        """A frame without clusters is rejected."""
        with pytest.raises(ValueError):
            get_cluster_summary(pd.DataFrame({'mpi': [0.1]}))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
