"""
Unit Tests for the Streamlit Dashboard Helpers
"""

import pandas as pd
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.app import prepare_summaries
from src.data.preprocessor import clean_data


def make_frame(codes):
    """Cleaned frame with one region row per country code."""
    rows = [[code, 'Y', 'Y', f'{code} North', '', f'{code} North', '0.3', '50', '45', '10', '20',
             '2015-01-01', '2016-12-31'] for code in codes]
    return clean_data(pd.DataFrame(rows, columns=[f'col{i}' for i in range(13)]))


class TestPrepareSummaries:
    """Test the cached dashboard summaries."""

    def setup_method(self):
        """Start every test with an empty cache."""
        prepare_summaries.clear()

    def test_switching_files_refreshes_summaries(self):
        """A different input file gets its own country and region tables."""
        first = make_frame(['AFG', 'ETH'])
        second = make_frame(['NER'])

        country_df, region_df, _ = prepare_summaries('first.csv', first)
        assert country_df['location_code'].tolist() == ['AFG', 'ETH']

        country_df, region_df, ts_df = prepare_summaries('second.csv', second)
        assert country_df['location_code'].tolist() == ['NER']
        assert region_df['admin1_name'].tolist() == ['NER North']
        assert len(ts_df) == 1
