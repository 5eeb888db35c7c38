"""
Geographic Visualization Module
Creates world choropleth maps of country-level poverty indicators.
"""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

INDICATOR_LABELS = {
    'mpi': 'MPI',
    'headcount_ratio': 'Headcount Ratio (%)',
    'intensity_of_deprivation': 'Intensity of Deprivation (%)',
    'vulnerable_to_poverty': 'Vulnerable to Poverty (%)',
    'in_severe_poverty': 'In Severe Poverty (%)'
}


def normalize_country_code(code) -> str:
    """
    Normalize a location code to the upper-case ISO-3 form Plotly expects.

    Args:
        code: Location code from data

    Returns:
        Normalized code
    """
    return str(code).strip().upper()


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, xref="paper", yref="paper", x=0.5, y=0.5,
                       showarrow=False)
    return fig


def create_indicator_choropleth(df: pd.DataFrame,
                                country_col: str = 'location_code',
                                value_col: str = 'mpi',
                                title: str = 'Multidimensional Poverty Index by Country') -> go.Figure:
    """
    Create a world choropleth of one indicator per country.

    Args:
        df: Country-level DataFrame (e.g. country summary)
        country_col: Column with ISO-3 country codes
        value_col: Indicator to color by
        title: Map title

    Returns:
        Plotly Figure object
    """
    country_data = df[df[country_col].notna() & df[value_col].notna()].copy()
    if country_data.empty:
        return _empty_figure(f"No {INDICATOR_LABELS.get(value_col, value_col)} data available")

    country_data[country_col] = country_data[country_col].astype(str)
    country_data['iso3'] = country_data[country_col].map(normalize_country_code)
    country_data[value_col] = country_data[value_col].astype(float)

    hover_data = {value_col: ':.3f', 'iso3': False}
    if 'n_records' in country_data.columns:
        hover_data['n_records'] = True

    fig = px.choropleth(
        country_data,
        locations='iso3',
        locationmode='ISO-3',
        color=value_col,
        color_continuous_scale='YlOrRd',
        hover_name=country_col,
        hover_data=hover_data,
        labels={value_col: INDICATOR_LABELS.get(value_col, value_col)},
        title=title
    )

    fig.update_geos(
        showframe=False,
        showcoastlines=True,
        projection_type='natural earth',
        bgcolor='rgba(0,0,0,0)'
    )

    fig.update_layout(
        margin={"r": 0, "t": 50, "l": 0, "b": 0},
        coloraxis_colorbar={'title': INDICATOR_LABELS.get(value_col, value_col)},
        paper_bgcolor='rgba(0,0,0,0)'
    )

    return fig


if __name__ == "__main__":
    print("Testing geographic visualization module...")

    sample_data = pd.DataFrame({
        'location_code': ['AFG', 'ETH', 'NER', 'HTI', 'MLI'],
        'mpi': [0.27, 0.37, 0.59, 0.20, 0.38]
    })

    fig = create_indicator_choropleth(sample_data)
    fig.write_html("test_choropleth.html")
    print("  Saved to test_choropleth.html")
