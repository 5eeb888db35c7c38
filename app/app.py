"""
Global MPI Poverty Analysis - Streamlit Dashboard
Interactive exploration of Multidimensional Poverty Index records.
"""

import streamlit as st
import pandas as pd
import plotly.express as px
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import INPUT_FILE, NUMERIC_COLUMNS, COUNTRY_KEY, REGION_KEY, KMEANS_SEED
from src.data.loader import load_raw_data, get_data_summary
from src.data.preprocessor import clean_data, aggregate_by_country, aggregate_by_region, time_series_means
from src.data.quality import DataQualityValidator, generate_quality_report_summary
from src.models.statistical import summary_statistics, top_n, correlation_matrix, one_way_anova, gini_per_group
from src.models.clustering import kmeans_cluster, get_cluster_summary
from src.visualization.geographic import create_indicator_choropleth, INDICATOR_LABELS
from src.visualization.charts import (
    create_top_bar_chart,
    create_correlation_heatmap,
    create_time_series_chart,
    create_cluster_scatter
)
from src.utils.errors import PovertyAnalysisError
from src.utils.export import generate_text_report

# Page configuration
st.set_page_config(
    page_title="Global MPI Poverty Analysis",
    page_icon="🌍",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_data(ttl=3600)
def load_and_process_data(filepath: str):
    """Load and clean the poverty records."""
    with st.spinner("Loading data..."):
        raw_df = load_raw_data(filepath)
        return clean_data(raw_df)


@st.cache_data(ttl=3600)
def prepare_summaries(filepath: str, _df):
    """Country, regional and time-series summaries, cached per input file."""
    return aggregate_by_country(_df), aggregate_by_region(_df), time_series_means(_df)


def render_header():
    """Render the dashboard header."""
    st.title("🌍 Global Multidimensional Poverty Index")
    st.caption("Descriptive statistics and exploratory charts of MPI records")
    st.divider()


def render_kpis(df):
    """Render key indicators."""
    summary = get_data_summary(df)
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Total Records", f"{summary['total_records']:,}")
    with col2:
        st.metric("Countries", summary['countries'])
    with col3:
        st.metric("Regions", summary['regions'])
    with col4:
        st.metric("Mean MPI", f"{df['mpi'].mean():.3f}")


def render_rankings(country_df, region_df, options):
    """Top countries and regions by the selected indicator."""
    st.subheader("🏆 Highest Poverty Rankings")
    indicator = options['indicator']
    label = INDICATOR_LABELS[indicator]

    col1, col2 = st.columns(2)
    with col1:
        top_countries = top_n(country_df, indicator, options['top_countries'])
        fig = create_top_bar_chart(top_countries, COUNTRY_KEY, indicator,
                                   title=f"Top {options['top_countries']} Countries by {label}")
        st.plotly_chart(fig, use_container_width=True)
    with col2:
        top_regions = top_n(region_df, indicator, options['top_regions'])
        fig = create_top_bar_chart(top_regions, REGION_KEY, indicator,
                                   title=f"Top {options['top_regions']} Regions by {label}",
                                   color='darkgreen')
        st.plotly_chart(fig, use_container_width=True)


def render_map(country_df, options):
    """World map of the selected indicator."""
    st.subheader("🗺️ Geographic Analysis")
    fig = create_indicator_choropleth(country_df, value_col=options['indicator'],
                                      title=f"{INDICATOR_LABELS[options['indicator']]} by Country")
    fig.update_layout(height=600)
    st.plotly_chart(fig, use_container_width=True)


def render_statistics(df):
    """Summary statistics, correlation and ANOVA."""
    st.subheader("📊 Summary Statistics")
    st.dataframe(summary_statistics(df))

    st.subheader("🔗 Correlation Analysis")
    st.plotly_chart(create_correlation_heatmap(correlation_matrix(df)), use_container_width=True)

    st.subheader("🧪 ANOVA of MPI by Country")
    try:
        anova = one_way_anova(df, 'mpi', COUNTRY_KEY)
        col1, col2, col3 = st.columns(3)
        with col1: st.metric("F statistic", f"{anova['f_statistic']:.3f}")
        with col2: st.metric("p-value", f"{anova['p_value']:.3g}")
        with col3: st.metric("Eta squared", f"{anova['eta_squared']:.3f}")
    except ValueError as e:
        st.info(f"ANOVA not available: {e}")


def render_trends(ts_df, options):
    """Indicator trend over reference periods."""
    st.subheader("📈 Trend Over Time")
    indicator = options['indicator']
    fig = create_time_series_chart(ts_df, value_col=indicator,
                                   title=f"Global {INDICATOR_LABELS[indicator]} Trend Over Time")
    st.plotly_chart(fig, use_container_width=True)


def render_inequality(df):
    """Within-country Gini of regional MPI."""
    st.subheader("⚖️ Within-Country Inequality")
    gini_df = gini_per_group(df, 'mpi', COUNTRY_KEY).dropna(subset=['gini'])
    gini_df = top_n(gini_df, 'gini', len(gini_df))
    fig = px.bar(gini_df, x=COUNTRY_KEY, y='gini', title='Gini Coefficient of MPI by Country')
    st.plotly_chart(fig, use_container_width=True)


def render_clusters(country_df, options):
    """K-means clusters of country profiles."""
    st.subheader("🧩 Country Clusters")
    try:
        clustered = kmeans_cluster(country_df, NUMERIC_COLUMNS,
                                   k=options['n_clusters'], seed=KMEANS_SEED,
                                   standardize=options['standardize'])
    except ValueError as e:
        st.info(f"Clustering not available: {e}")
        return

    st.plotly_chart(create_cluster_scatter(clustered), use_container_width=True)
    st.dataframe(get_cluster_summary(clustered))


def render_quality(df):
    """Data quality checks."""
    st.subheader("✅ Data Quality")
    report = DataQualityValidator().validate_all(df)
    st.code(generate_quality_report_summary(report))


def render_sidebar():
    """Render sidebar controls."""
    st.sidebar.title("🎛️ Dashboard Controls")

    filepath = st.sidebar.text_input("Input CSV", value=INPUT_FILE)
    indicator = st.sidebar.selectbox(
        "Indicator", NUMERIC_COLUMNS, format_func=lambda c: INDICATOR_LABELS[c]
    )

    st.sidebar.subheader("Rankings")
    top_countries = st.sidebar.slider("Countries", 5, 30, 10)
    top_regions = st.sidebar.slider("Regions", 5, 50, 20)

    st.sidebar.subheader("Clustering")
    n_clusters = st.sidebar.slider("Clusters", 2, 10, 5)
    standardize = st.sidebar.checkbox("Standardize indicators", value=False)

    return {
        'filepath': filepath,
        'indicator': indicator,
        'top_countries': top_countries,
        'top_regions': top_regions,
        'n_clusters': n_clusters,
        'standardize': standardize
    }


def render_download(df, country_df, region_df):
    """Download button for the text report."""
    results = {
        'summary_statistics': summary_statistics(df),
        'top_countries': top_n(country_df, 'mpi', 10),
        'correlation': correlation_matrix(df),
        'top_regions': top_n(region_df, 'mpi', 20)
    }
    st.sidebar.download_button(
        "📄 Download Report",
        generate_text_report(results),
        file_name="poverty_analysis_report.txt"
    )


def main():
    """Main dash entry."""
    render_header()
    options = render_sidebar()

    try:
        df = load_and_process_data(options['filepath'])
    except PovertyAnalysisError as e:
        st.error(f"Error: {str(e)}")
        return

    country_df, region_df, ts_df = prepare_summaries(options['filepath'], df)

    render_kpis(df)
    render_download(df, country_df, region_df)

    tabs = st.tabs(["🏆 Rankings", "🗺️ Map", "📊 Statistics", "📈 Trends",
                    "⚖️ Inequality", "🧩 Clusters", "✅ Quality"])

    with tabs[0]: render_rankings(country_df, region_df, options)
    with tabs[1]: render_map(country_df, options)
    with tabs[2]: render_statistics(df)
    with tabs[3]: render_trends(ts_df, options)
    with tabs[4]: render_inequality(df)
    with tabs[5]: render_clusters(country_df, options)
    with tabs[6]: render_quality(df)


if __name__ == "__main__":
    main()
