"""
Chart Module
Bar, heatmap, time-series and cluster charts for the poverty analysis.
"""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import os
from typing import Dict, List, Optional

from .geographic import INDICATOR_LABELS
from src.utils.errors import WriteError


def create_top_bar_chart(df: pd.DataFrame,
                         label_col: str,
                         value_col: str = 'mpi',
                         title: str = 'Top Countries with Highest MPI',
                         color: str = 'steelblue') -> go.Figure:
    """
    Horizontal bar chart of a ranked table, largest value on top.

    Args:
        df: Ranked table (e.g. output of top_n)
        label_col: Column with bar labels
        value_col: Column with bar lengths
        title: Chart title
        color: Bar color

    Returns:
        Plotly Figure object
    """
    plot_df = df[[label_col, value_col]].dropna().sort_values(value_col, kind='mergesort')
    plot_df[label_col] = plot_df[label_col].astype(str)

    fig = px.bar(
        plot_df,
        x=value_col,
        y=label_col,
        orientation='h',
        title=title,
        labels={value_col: INDICATOR_LABELS.get(value_col, value_col), label_col: ''}
    )
    fig.update_traces(marker_color=color)
    fig.update_layout(
        template='plotly_white',
        height=max(400, 25 * len(plot_df) + 100),
        yaxis={'categoryorder': 'array', 'categoryarray': plot_df[label_col].tolist()}
    )

    return fig


def create_correlation_heatmap(corr: pd.DataFrame,
                               title: str = 'Correlation Heatmap of Poverty Indicators') -> go.Figure:
    """
    Annotated heatmap of a correlation matrix.

    Args:
        corr: Square correlation DataFrame
        title: Chart title

    Returns:
        Plotly Figure object
    """
    fig = px.imshow(
        corr.round(2),
        text_auto=True,
        color_continuous_scale='RdBu_r',
        zmin=-1,
        zmax=1,
        aspect='auto',
        title=title
    )
    fig.update_layout(template='plotly_white', xaxis_tickangle=-45)

    return fig


def create_time_series_chart(ts_df: pd.DataFrame,
                             date_col: str = 'reference_period_start',
                             value_col: str = 'mpi',
                             title: str = 'Global MPI Trend Over Time') -> go.Figure:
    """
    Line chart with markers of an indicator over reference periods.

    Args:
        ts_df: Output of time_series_means
        date_col: Date column
        value_col: Indicator to plot
        title: Chart title

    Returns:
        Plotly Figure object
    """
    fig = px.line(
        ts_df,
        x=date_col,
        y=value_col,
        markers=True,
        title=title,
        labels={
            date_col: 'Year',
            value_col: f"Average {INDICATOR_LABELS.get(value_col, value_col)}"
        }
    )
    fig.update_layout(template='plotly_white')

    return fig


def create_cluster_scatter(df: pd.DataFrame,
                           x_col: str = 'headcount_ratio',
                           y_col: str = 'intensity_of_deprivation',
                           label_col: Optional[str] = 'location_code',
                           title: str = 'K-Means Clusters of Poverty Profiles') -> go.Figure:
    """
    Scatter of two indicators colored by cluster.

    Args:
        df: DataFrame with a 'cluster' column
        x_col: Indicator on the x axis
        y_col: Indicator on the y axis
        label_col: Column shown on hover
        title: Chart title

    Returns:
        Plotly Figure object
    """
    plot_df = df[df['cluster'].notna()].copy()
    plot_df['cluster'] = plot_df['cluster'].astype(int).astype(str)
    if label_col in plot_df.columns:
        plot_df[label_col] = plot_df[label_col].astype(str)

    fig = px.scatter(
        plot_df,
        x=x_col,
        y=y_col,
        color='cluster',
        hover_name=label_col if label_col in plot_df.columns else None,
        category_orders={'cluster': sorted(plot_df['cluster'].unique(), key=int)},
        title=title,
        labels={
            x_col: INDICATOR_LABELS.get(x_col, x_col),
            y_col: INDICATOR_LABELS.get(y_col, y_col)
        }
    )
    fig.update_layout(template='plotly_white')

    return fig


def save_figures(figures: Dict[str, go.Figure], output_dir: str) -> List[str]:
    """
    Write figures as standalone HTML files.

    Args:
        figures: Mapping of file stem to figure
        output_dir: Directory for the HTML files

    Returns:
        List of written paths
    """
    paths = []
    try:
        os.makedirs(output_dir, exist_ok=True)
        for name, fig in figures.items():
            path = os.path.join(output_dir, f"{name}.html")
            fig.write_html(path, include_plotlyjs='cdn')
            paths.append(path)
    except OSError as e:
        raise WriteError(f"Could not write charts to {output_dir}: {e}") from e

    return paths
