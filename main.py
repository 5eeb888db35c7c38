"""
Global MPI Poverty Analysis - Main Entry Point
Descriptive statistics and exploratory charts for Multidimensional Poverty Index data.
"""

import argparse
import sys
import os

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from config import (
    INPUT_FILE, REPORT_FILE, CHARTS_DIR, NUMERIC_COLUMNS, COUNTRY_KEY,
    TOP_COUNTRIES, TOP_REGIONS, KMEANS_CLUSTERS, KMEANS_SEED
)
from src.data.loader import load_raw_data, get_data_summary
from src.data.preprocessor import clean_data, aggregate_by_country, aggregate_by_region, time_series_means
from src.data.quality import DataQualityValidator
from src.models.statistical import summary_statistics, top_n, correlation_matrix, one_way_anova, gini_per_group
from src.models.clustering import kmeans_cluster, get_cluster_summary
from src.utils.errors import LoadError, WriteError
from src.utils.export import generate_text_report, save_report, export_to_excel
from src.visualization.charts import (
    create_top_bar_chart, create_correlation_heatmap, create_time_series_chart,
    create_cluster_scatter, save_figures
)
from src.visualization.geographic import create_indicator_choropleth


def run_full_analysis(input_path: str = None,
                      output_path: str = None,
                      charts_dir: str = None,
                      excel_path: str = None,
                      extended: bool = False) -> dict:
    """
    Run the complete analysis pipeline.

    Args:
        input_path: CSV file to analyze (default from config)
        output_path: Text report path (default from config)
        charts_dir: Directory for HTML charts (skipped if None)
        excel_path: Excel workbook path (skipped if None)
        extended: Include ANOVA, Gini and cluster sections in the report

    Returns:
        Dictionary of analysis results
    """
    if input_path is None:
        input_path = INPUT_FILE
    if output_path is None:
        output_path = REPORT_FILE

    print("=" * 60)
    print("Global MPI Poverty Analysis")
    print("=" * 60)

    # 1. Load Data
    print("\n[1/5] Loading data...")
    raw_df = load_raw_data(input_path)

    # 2. Clean and Validate
    print("\n[2/5] Cleaning and validating data...")
    df = clean_data(raw_df)
    quality_report = DataQualityValidator().validate_all(df)
    print(f"Validation: {'PASSED' if quality_report.is_valid() else 'FAILED'}")
    if quality_report.warnings:
        print(f"Warnings: {quality_report.warnings}")

    # 3. Aggregate Data
    print("\n[3/5] Aggregating data...")
    country_summary = aggregate_by_country(df)
    regional_summary = aggregate_by_region(df)
    time_series = time_series_means(df)
    print(f"  Country aggregation: {len(country_summary)} records")
    print(f"  Regional aggregation: {len(regional_summary)} records")
    print(f"  Reference periods: {len(time_series)}")

    results = {
        'summary_statistics': summary_statistics(df),
        'country_summary': country_summary,
        'regional_summary': regional_summary,
        'time_series': time_series,
        'top_countries': top_n(country_summary, 'mpi', TOP_COUNTRIES),
        'top_regions': top_n(regional_summary, 'mpi', TOP_REGIONS),
        'correlation': correlation_matrix(df, NUMERIC_COLUMNS),
    }

    # 4. Statistical Tests
    print("\n[4/5] Running statistical tests...")
    try:
        results['anova'] = one_way_anova(df, 'mpi', COUNTRY_KEY)
        print(f"  ANOVA of MPI by country: F={results['anova']['f_statistic']:.3f}, "
              f"p={results['anova']['p_value']:.4g}")
    except ValueError as e:
        print(f"  Warning: ANOVA skipped ({e})")

    results['gini'] = gini_per_group(df, 'mpi', COUNTRY_KEY)
    print(f"  Gini coefficients: {results['gini']['gini'].notna().sum()} countries")

    try:
        clustered = kmeans_cluster(country_summary, NUMERIC_COLUMNS,
                                   k=KMEANS_CLUSTERS, seed=KMEANS_SEED)
        results['clusters'] = clustered
        results['cluster_summary'] = get_cluster_summary(clustered, NUMERIC_COLUMNS)
        print(f"  K-means: {clustered['cluster'].notna().sum()} countries in {KMEANS_CLUSTERS} clusters")
    except ValueError as e:
        print(f"  Warning: clustering skipped ({e})")

    # 5. Report
    print("\n[5/5] Writing report...")
    report = generate_text_report(results, extended=extended)
    save_report(report, output_path)
    print(f"  Report saved as '{output_path}'")

    if excel_path:
        export_to_excel(results, excel_path)
        print(f"  Workbook saved as '{excel_path}'")

    if charts_dir:
        paths = save_charts(results, charts_dir)
        print(f"  {len(paths)} charts saved to {charts_dir}")

    # Summary
    summary = get_data_summary(df)
    print("\n" + "=" * 60)
    print("ANALYSIS COMPLETE")
    print("=" * 60)
    print(f"  Total records: {summary['total_records']:,}")
    print(f"  Countries: {summary['countries']}")
    print(f"  Regions: {summary['regions']}")
    print(f"  Reference periods: {summary['date_range']['start']} to {summary['date_range']['end']}")

    return results


def save_charts(results: dict, charts_dir: str) -> list:
    """Build the analysis charts and write them as HTML."""
    figures = {
        'top_countries_mpi': create_top_bar_chart(
            results['top_countries'], 'location_code',
            title=f'Top {TOP_COUNTRIES} Countries with Highest MPI'
        ),
        'top_regions_mpi': create_top_bar_chart(
            results['top_regions'], 'admin1_name',
            title=f'Top {TOP_REGIONS} Regions with Highest MPI', color='darkgreen'
        ),
        'correlation_heatmap': create_correlation_heatmap(results['correlation']),
        'mpi_trend': create_time_series_chart(results['time_series']),
        'mpi_map': create_indicator_choropleth(results['country_summary']),
    }
    if 'clusters' in results:
        figures['clusters'] = create_cluster_scatter(results['clusters'])

    return save_figures(figures, charts_dir)


def run_dashboard():
    """Launch the Streamlit dashboard."""
    import subprocess
    app_path = os.path.join(PROJECT_ROOT, 'app', 'app.py')

    print("Launching MPI Poverty Dashboard...")
    print("Open your browser at http://localhost:8501")

    subprocess.run(['streamlit', 'run', app_path])


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Global MPI Poverty Analysis - descriptive statistics and charts'
    )

    parser.add_argument(
        '--mode', '-m',
        choices=['analysis', 'dashboard', 'both'],
        default='analysis',
        help='Run mode: analysis (CLI), dashboard (Streamlit), or both'
    )

    parser.add_argument(
        '--input', '-i',
        type=str,
        default=None,
        help='Input CSV file (default: data/raw/hdx_hapi_poverty_rate_global.csv)'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=None,
        help=f'Text report path (default: {REPORT_FILE})'
    )

    parser.add_argument(
        '--charts-dir',
        type=str,
        default=None,
        help=f'Directory for HTML charts (e.g. {CHARTS_DIR})'
    )

    parser.add_argument(
        '--excel',
        type=str,
        default=None,
        help='Excel workbook path for the result tables'
    )

    parser.add_argument(
        '--extended',
        action='store_true',
        help='Add ANOVA, Gini and cluster sections to the report'
    )

    args = parser.parse_args()

    if args.mode in ['analysis', 'both']:
        try:
            run_full_analysis(args.input, args.output, args.charts_dir, args.excel, args.extended)
        except (LoadError, WriteError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    if args.mode in ['dashboard', 'both']:
        run_dashboard()


if __name__ == "__main__":
    main()
