"""
End-to-End Tests for the Analysis Pipeline
"""

import pytest
import pandas as pd
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import main
from src.utils.errors import LoadError

HEADER = ('location_code,has_hrp,in_gho,provider_admin1_name,admin1_code,admin1_name,'
          'mpi,headcount_ratio,intensity_of_deprivation,vulnerable_to_poverty,'
          'in_severe_poverty,reference_period_start,reference_period_end')
TAGS = '#country+code,,,,,,,,,,,,'


def build_rows():
    """Two regions for each of six countries, plus one malformed row."""
    rows = []
    countries = {
        'NER': 0.60, 'TCD': 0.52, 'BFA': 0.45, 'ETH': 0.37, 'AFG': 0.27, 'HTI': 0.20
    }
    for code, mpi in countries.items():
        for k, delta in enumerate([-0.02, 0.02]):
            value = mpi + delta
            rows.append(
                f"{code},Y,Y,{code} Region {k},{code}0{k},{code} Region {k},"
                f"{value:.3f},{value * 150:.1f},{45 + value * 20:.1f},{20 - value * 10:.1f},"
                f"{value * 100:.1f},2015-01-01,2016-12-31"
            )
    rows.append("HTI,Y,Y,,,,n/a,bad,,,,not-a-date,2016-12-31")
    return rows


class TestRunFullAnalysis:
    """Test run_full_analysis end to end."""

    def setup_method(self):
        """Nothing shared; files are written per test."""
        self.rows = build_rows()

    def write_input(self, tmp_path):
        path = tmp_path / 'hdx_hapi_poverty_rate_global.csv'
        path.write_text("\n".join([HEADER, TAGS] + self.rows) + "\n", encoding='utf-8')
        return str(path)

    def test_report_written(self, tmp_path):
        """The report holds the four labeled sections."""
        input_path = self.write_input(tmp_path)
        output_path = str(tmp_path / 'poverty_analysis_report.txt')

        main.run_full_analysis(input_path, output_path)

        with open(output_path, encoding='utf-8') as f:
            report = f.read()
        assert "1. Summary Statistics" in report
        assert "2. Top 10 Countries with Highest MPI" in report
        assert "3. Correlation Analysis" in report
        assert "4. Top 20 Regions with Highest MPI" in report

    def test_results(self, tmp_path):
        """Aggregates reflect the input rows."""
        input_path = self.write_input(tmp_path)

        results = main.run_full_analysis(input_path, str(tmp_path / 'report.txt'))

        assert len(results['country_summary']) == 6
        assert results['top_countries']['location_code'].tolist()[0] == 'NER'
        assert results['top_countries']['mpi'].iloc[0] == pytest.approx(0.60)
        assert len(results['top_regions']) == 12
        assert results['summary_statistics'].loc['mpi', 'count'] == 12
        assert results['clusters']['cluster'].notna().sum() == 6
        assert results['anova']['n_groups'] == 6

    def test_extended_outputs(self, tmp_path):
        """Workbook, charts and extended sections are produced on request."""
        input_path = self.write_input(tmp_path)
        output_path = tmp_path / 'report.txt'
        excel_path = tmp_path / 'results.xlsx'
        charts_dir = tmp_path / 'charts'

        main.run_full_analysis(input_path, str(output_path), str(charts_dir),
                               str(excel_path), extended=True)

        report = output_path.read_text(encoding='utf-8')
        assert "7. K-Means Cluster Profiles" in report
        assert excel_path.exists()
        assert (charts_dir / 'top_countries_mpi.html').exists()
        assert (charts_dir / 'correlation_heatmap.html').exists()

    def test_missing_input(self, tmp_path):
        """A missing input file is a LoadError."""
        with pytest.raises(LoadError):
            main.run_full_analysis(str(tmp_path / 'missing.csv'), str(tmp_path / 'report.txt'))


class TestMain:
    """Test the command line entry point."""

    def test_load_error_exits(self, tmp_path, monkeypatch):
        """Fatal errors end the run with status 1."""
        monkeypatch.setattr(sys, 'argv', [
            'main.py', '--input', str(tmp_path / 'missing.csv'),
            '--output', str(tmp_path / 'report.txt')
        ])

        with pytest.raises(SystemExit) as exc_info:
            main.main()

        assert exc_info.value.code == 1


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
