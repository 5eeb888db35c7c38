"""
Data Quality Checks Module
Validation of cleaned MPI poverty records against the expected schema and bounds.
"""

import pandas as pd
import numpy as np
from typing import Dict, List, Tuple, Optional
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
from config import COLUMN_NAMES, NUMERIC_COLUMNS, VALUE_RANGES, MISSING_VALUE_THRESHOLD


class DataQualityReport:
    """Container for data quality assessment results."""

    def __init__(self):
        self.checks = []
        self.warnings = []
        self.errors = []
        self.metadata = {}

    def add_check(self, name: str, passed: bool, message: str, details: Dict = None):
        """Add a quality check result."""
        self.checks.append({
            'name': name,
            'passed': passed,
            'message': message,
            'details': details or {}
        })

        if not passed:
            self.errors.append(message)

    def add_warning(self, message: str):
        """Add a warning."""
        self.warnings.append(message)

    def is_valid(self) -> bool:
        """Check if all critical checks passed."""
        return len(self.errors) == 0

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {
            'valid': self.is_valid(),
            'total_checks': len(self.checks),
            'passed': sum(1 for c in self.checks if c['passed']),
            'failed': sum(1 for c in self.checks if not c['passed']),
            'warnings': len(self.warnings),
            'checks': self.checks,
            'errors': self.errors,
            'warnings_list': self.warnings,
            'metadata': self.metadata
        }

    def __repr__(self):
        status = "PASSED" if self.is_valid() else "FAILED"
        return f"DataQualityReport({status}: {len(self.checks)} checks, {len(self.warnings)} warnings)"


class DataQualityValidator:
    """Validator for cleaned poverty records."""

    def __init__(self):
        self.report = DataQualityReport()

    def validate_schema(self, df: pd.DataFrame, expected_columns: List[str]) -> bool:
        """Validate that expected columns are present."""
        missing_cols = [col for col in expected_columns if col not in df.columns]

        if missing_cols:
            self.report.add_check(
                'schema_validation',
                False,
                f"Missing required columns: {missing_cols}",
                {'missing_columns': missing_cols}
            )
            return False

        self.report.add_check(
            'schema_validation',
            True,
            "All required columns present"
        )
        return True

    def check_missing_values(self, df: pd.DataFrame,
                             columns: Optional[List[str]] = None,
                             threshold: float = 0.1) -> bool:
        """Check for excessive missing values in the indicator columns."""
        if columns is None:
            columns = [col for col in NUMERIC_COLUMNS if col in df.columns]

        if len(df) == 0:
            missing_pct = pd.Series(0.0, index=columns)
        else:
            missing_pct = df[columns].isnull().sum() / len(df)
        problematic = missing_pct[missing_pct > threshold]

        if len(problematic) > 0:
            self.report.add_warning(
                f"Columns with >{threshold*100:.0f}% missing values: {problematic.round(3).to_dict()}"
            )
            self.report.add_check(
                'missing_values',
                False,
                f"{len(problematic)} columns have excessive missing values",
                {'problematic_columns': problematic.to_dict()}
            )
            return False

        self.report.add_check(
            'missing_values',
            True,
            "Missing values within acceptable range"
        )
        return True

    def check_duplicates(self, df: pd.DataFrame, subset: Optional[List[str]] = None) -> int:
        """
        Count duplicate observations.

        Duplicates are tolerated (they only weight the group means), so this
        check always passes and reports the count as a warning.
        """
        if subset:
            duplicates = int(df.duplicated(subset=subset).sum())
        else:
            duplicates = int(df.duplicated().sum())

        if duplicates > 0:
            self.report.add_warning(f"Found {duplicates} duplicate records")

        self.report.add_check(
            'duplicates',
            True,
            f"{duplicates} duplicate records found" if duplicates else "No duplicate records found",
            {'count': duplicates}
        )
        return duplicates

    def check_reference_periods(self, df: pd.DataFrame,
                                start_col: str = 'reference_period_start',
                                end_col: str = 'reference_period_end') -> bool:
        """Check that every reference period starts on or before its end."""
        if start_col not in df.columns or end_col not in df.columns:
            return True

        inverted = int((df[start_col] > df[end_col]).sum())
        missing = int((df[start_col].isna() | df[end_col].isna()).sum())

        if missing > 0:
            self.report.add_warning(f"{missing} records without a complete reference period")

        self.report.add_check(
            'reference_periods',
            inverted == 0,
            "Reference periods are ordered" if inverted == 0
            else f"{inverted} records have start after end",
            {'inverted': inverted, 'missing': missing}
        )
        return inverted == 0

    def check_value_ranges(self, df: pd.DataFrame, columns: Dict[str, Tuple[float, float]]) -> bool:
        """Check if values are within expected ranges."""
        all_valid = True

        for col, (min_val, max_val) in columns.items():
            if col not in df.columns:
                continue

            out_of_range = ((df[col] < min_val) | (df[col] > max_val)).sum()

            if out_of_range > 0:
                all_valid = False
                self.report.add_warning(
                    f"{col}: {out_of_range} values out of range [{min_val}, {max_val}]"
                )

        self.report.add_check(
            'value_ranges',
            all_valid,
            "All values within expected ranges" if all_valid else "Some values out of range"
        )

        return all_valid

    def check_negative_values(self, df: pd.DataFrame, columns: List[str]) -> bool:
        """Check for unexpected negative values."""
        all_valid = True

        for col in columns:
            if col not in df.columns:
                continue

            negative_count = (df[col] < 0).sum()

            if negative_count > 0:
                all_valid = False
                self.report.add_warning(
                    f"{col}: {negative_count} negative values found"
                )

        self.report.add_check(
            'negative_values',
            all_valid,
            "No unexpected negative values" if all_valid else "Some negative values found"
        )

        return all_valid

    def check_completeness(self, df: pd.DataFrame, columns: Optional[List[str]] = None) -> float:
        """Share of non-missing indicator cells, recorded in metadata."""
        if columns is None:
            columns = [col for col in NUMERIC_COLUMNS if col in df.columns]

        total_cells = len(df) * len(columns)
        missing_cells = df[columns].isnull().sum().sum()
        completeness_pct = (1 - missing_cells / total_cells) * 100 if total_cells else 0.0

        self.report.add_check(
            'completeness',
            True,
            f"Indicator completeness: {completeness_pct:.2f}%",
            {'completeness_percentage': completeness_pct}
        )

        self.report.metadata['completeness'] = completeness_pct

        return completeness_pct

    def validate_all(self, df: pd.DataFrame) -> DataQualityReport:
        """Run all validation checks."""
        self.report = DataQualityReport()

        if not self.validate_schema(df, COLUMN_NAMES):
            self.report.metadata['total_records'] = len(df)
            return self.report

        self.check_missing_values(df, threshold=MISSING_VALUE_THRESHOLD)
        self.check_duplicates(df, subset=['location_code', 'admin1_code', 'reference_period_start'])
        self.check_reference_periods(df)
        self.check_negative_values(df, NUMERIC_COLUMNS)
        self.check_value_ranges(df, VALUE_RANGES)
        self.check_completeness(df)

        # Store metadata
        start = df['reference_period_start'].min()
        end = df['reference_period_end'].max()
        self.report.metadata.update({
            'total_records': len(df),
            'countries': int(df['location_code'].nunique()),
            'regions': int(df['admin1_name'].nunique()),
            'date_range': {
                'start': str(start.date()) if pd.notna(start) else None,
                'end': str(end.date()) if pd.notna(end) else None
            }
        })

        return self.report


def generate_quality_report_summary(report: DataQualityReport) -> str:
    """Generate a human-readable summary of the quality report."""
    lines = [
        "=" * 60,
        "DATA QUALITY REPORT",
        "=" * 60,
        f"\nStatus: {'PASSED' if report.is_valid() else 'FAILED'}",
        f"\nChecks: {sum(1 for c in report.checks if c['passed'])}/{len(report.checks)} passed",
        f"Warnings: {len(report.warnings)}",
        f"Errors: {len(report.errors)}",
    ]

    if report.errors:
        lines.append("\n" + "-" * 40)
        lines.append("ERRORS:")
        lines.append("-" * 40)
        for error in report.errors:
            lines.append(f"  [!] {error}")

    if report.warnings:
        lines.append("\n" + "-" * 40)
        lines.append("WARNINGS:")
        lines.append("-" * 40)
        for warning in report.warnings:
            lines.append(f"  [?] {warning}")

    lines.append("\n" + "-" * 40)
    lines.append("DETAILED CHECKS:")
    lines.append("-" * 40)
    for check in report.checks:
        symbol = "[OK]" if check['passed'] else "[!!]"
        lines.append(f"  {symbol} {check['name']}: {check['message']}")

    lines.append("\n" + "=" * 60)

    return "\n".join(lines)


if __name__ == "__main__":
    print("Testing data quality validation...")

    sample_data = pd.DataFrame({
        'location_code': ['AFG', 'AFG', 'BFA', 'BFA'],
        'has_hrp': [True, True, True, True],
        'in_gho': [True, True, False, False],
        'provider_admin1_name': ['Badakhshan', 'Badghis', 'Boucle du Mouhoun', 'Cascades'],
        'admin1_code': ['AF15', 'AF29', 'BF46', 'BF47'],
        'admin1_name': ['Badakhshan', 'Badghis', 'Boucle du Mouhoun', 'Cascades'],
        'mpi': [0.3, 0.4, np.nan, 0.5],
        'headcount_ratio': [60.1, 70.2, 80.3, 90.4],
        'intensity_of_deprivation': [45.0, 50.0, 55.0, 60.0],
        'vulnerable_to_poverty': [20.0, 15.0, 10.0, 5.0],
        'in_severe_poverty': [30.0, 35.0, 40.0, 45.0],
        'reference_period_start': pd.to_datetime(['2015-01-01'] * 4),
        'reference_period_end': pd.to_datetime(['2016-12-31'] * 4)
    })

    validator = DataQualityValidator()
    report = validator.validate_all(sample_data)

    print(generate_quality_report_summary(report))
