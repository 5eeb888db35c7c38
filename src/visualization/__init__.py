# Visualization module
from .geographic import create_indicator_choropleth
from .charts import (
    create_top_bar_chart,
    create_correlation_heatmap,
    create_time_series_chart,
    create_cluster_scatter,
    save_figures
)
