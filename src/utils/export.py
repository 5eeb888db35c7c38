"""
Export & Reporting Module
Generates the plain-text poverty report and an Excel workbook of the result tables.
"""

import pandas as pd
import os
from typing import Dict, Optional
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
from config import TOP_COUNTRIES, TOP_REGIONS
from src.utils.errors import WriteError

REPORT_TITLE = "Poverty Rate Analysis Report"

# Result key -> workbook sheet name
SHEETS = {
    'summary_statistics': 'Summary Statistics',
    'country_summary': 'Countries',
    'regional_summary': 'Regions',
    'correlation': 'Correlation',
    'time_series': 'Time Series',
    'gini': 'Gini',
    'cluster_summary': 'Clusters'
}


def format_table(df: Optional[pd.DataFrame], index: bool = False) -> str:
    """Render a DataFrame as a fixed-width text table."""
    if df is None or df.empty:
        return "(no data)"
    return df.to_string(index=index, float_format=lambda v: f"{v:.4f}", na_rep='NA')


def _format_anova(anova: dict) -> str:
    lines = [
        f"Groups: {anova['n_groups']}  Observations: {anova['n_observations']}",
        f"{'Source':<10}{'SS':>14}{'df':>8}{'MS':>14}",
        f"{'Between':<10}{anova['ss_between']:>14.4f}{anova['df_between']:>8}{anova['ms_between']:>14.4f}",
        f"{'Within':<10}{anova['ss_within']:>14.4f}{anova['df_within']:>8}{anova['ms_within']:>14.4f}",
        f"F = {anova['f_statistic']:.4f}, p = {anova['p_value']:.4g}, eta^2 = {anova['eta_squared']:.4f}"
    ]
    return "\n".join(lines)


def generate_text_report(results: Dict, extended: bool = False) -> str:
    """
    Generate the text report.

    The four core sections always appear in the same order; ANOVA, Gini and
    cluster sections are appended when extended is True and the result is
    present.

    Args:
        results: Analysis outputs keyed by name
        extended: Append the extended statistics sections

    Returns:
        Report as string
    """
    report_lines = [
        REPORT_TITLE,
        "",
        "1. Summary Statistics",
        format_table(results.get('summary_statistics'), index=True),
        "",
        f"2. Top {TOP_COUNTRIES} Countries with Highest MPI",
        format_table(results.get('top_countries')),
        "",
        "3. Correlation Analysis",
        format_table(results.get('correlation'), index=True),
        "",
        f"4. Top {TOP_REGIONS} Regions with Highest MPI",
        format_table(results.get('top_regions')),
    ]

    if extended:
        if results.get('anova') is not None:
            report_lines.extend([
                "",
                "5. ANOVA of MPI by Country",
                _format_anova(results['anova'])
            ])
        if results.get('gini') is not None:
            report_lines.extend([
                "",
                "6. Gini Coefficient of MPI by Country",
                format_table(results['gini'])
            ])
        if results.get('cluster_summary') is not None:
            report_lines.extend([
                "",
                "7. K-Means Cluster Profiles",
                format_table(results['cluster_summary'])
            ])

    return "\n".join(report_lines) + "\n"


def save_report(
    content: str,
    output_path: str
) -> str:
    """
    Save text report to file.

    Args:
        content: Report content
        output_path: Path for output file

    Returns:
        Path to created file

    Raises:
        WriteError: If the file cannot be written
    """
    try:
        # Ensure output directory exists
        os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise WriteError(f"Could not write report to {output_path}: {e}") from e

    return output_path


def export_to_excel(
    results: Dict,
    output_path: str
) -> str:
    """
    Export result tables to an Excel workbook, one sheet per table.

    Args:
        results: Analysis outputs keyed by name
        output_path: Path for output file

    Returns:
        Path to created file

    Raises:
        WriteError: If the workbook cannot be written
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)

        with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
            for key, sheet_name in SHEETS.items():
                table = results.get(key)
                if table is None:
                    continue
                keep_index = key in ('summary_statistics', 'correlation')
                table.to_excel(writer, sheet_name=sheet_name, index=keep_index)

            if results.get('anova') is not None:
                anova_df = pd.DataFrame(
                    list(results['anova'].items()), columns=['Metric', 'Value']
                )
                anova_df.to_excel(writer, sheet_name='ANOVA', index=False)
    except OSError as e:
        raise WriteError(f"Could not write workbook to {output_path}: {e}") from e

    return output_path


if __name__ == "__main__":
    print("Testing export module...")

    sample_results = {
        'top_countries': pd.DataFrame({
            'location_code': ['NER', 'TCD', 'BFA'],
            'mpi': [0.601, 0.517, 0.523]
        })
    }

    print(generate_text_report(sample_results))
