"""
Unit Tests for Data Loader Module
"""

import pytest
import pandas as pd
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.data.loader import load_raw_data, get_data_summary
from src.data.preprocessor import clean_data
from src.utils.errors import LoadError

HEADER = ('location_code,has_hrp,in_gho,provider_admin1_name,admin1_code,admin1_name,'
          'mpi,headcount_ratio,intensity_of_deprivation,vulnerable_to_poverty,'
          'in_severe_poverty,reference_period_start,reference_period_end')
TAGS = ('#country+code,#meta+has_hrp,#meta+in_gho,#adm1+name+provider,#adm1+code,#adm1+name,'
        '#poverty+mpi,#poverty+headcount,#poverty+intensity,#poverty+vulnerable,'
        '#poverty+severe,#date+start,#date+end')
ROWS = [
    'AFG,Y,Y,Badakhshan,AF15,Badakhshan,0.31,65.2,47.5,22.1,35.4,2015-01-01,2016-12-31',
    'AFG,Y,Y,Badghis,AF29,Badghis,0.42,80.1,52.3,10.2,50.1,2015-01-01,2016-12-31',
    'BFA,Y,N,,,,0.52,84.2,61.8,7.4,64.8,2010-01-01,2010-12-31',
]


def write_csv(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding='utf-8')
    return str(path)


class TestLoadRawData:
    """Test load_raw_data."""

    def test_drops_metadata_row(self, tmp_path):
        """The row after the header is discarded."""
        filepath = write_csv(tmp_path / 'mpi.csv', [HEADER, TAGS] + ROWS)

        df = load_raw_data(filepath)

        assert len(df) == 3
        assert df.iloc[0, 0] == 'AFG'
        assert not df.iloc[:, 0].str.startswith('#').any()

    def test_cells_are_strings(self, tmp_path):
        """Cells are kept as raw strings, blanks as empty strings."""
        filepath = write_csv(tmp_path / 'mpi.csv', [HEADER, TAGS] + ROWS)

        df = load_raw_data(filepath)

        assert df.iloc[0, 6] == '0.31'
        assert df.iloc[2, 5] == ''

    def test_missing_file(self, tmp_path):
        """A missing file raises LoadError."""
        with pytest.raises(LoadError):
            load_raw_data(str(tmp_path / 'does_not_exist.csv'))

    def test_empty_file(self, tmp_path):
        """An empty file raises LoadError."""
        filepath = write_csv(tmp_path / 'empty.csv', [''])

        with pytest.raises(LoadError):
            load_raw_data(filepath)

    def test_too_few_columns(self, tmp_path):
        """Fewer than 13 columns raises LoadError."""
        filepath = write_csv(tmp_path / 'short.csv', ['a,b,c', '#a,#b,#c', '1,2,3'])

        with pytest.raises(LoadError, match='13'):
            load_raw_data(filepath)

    def test_extra_columns_dropped(self, tmp_path):
        """Columns beyond the 13th are ignored."""
        lines = [HEADER + ',extra', TAGS + ',#extra'] + [row + ',x' for row in ROWS]
        filepath = write_csv(tmp_path / 'wide.csv', lines)

        df = load_raw_data(filepath)

        assert df.shape == (3, 13)


class TestDataSummary:
    """Test get_data_summary."""

    def test_summary_counts(self, tmp_path):
        """Summary reports records, countries, regions and date range."""
        filepath = write_csv(tmp_path / 'mpi.csv', [HEADER, TAGS] + ROWS)
        df = clean_data(load_raw_data(filepath))

        summary = get_data_summary(df)

        assert summary['total_records'] == 3
        assert summary['countries'] == 2
        assert summary['regions'] == 2
        assert summary['date_range']['start'] == '2010-01-01'
        assert summary['date_range']['end'] == '2016-12-31'
        assert summary['indicator_counts']['mpi'] == 3


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
