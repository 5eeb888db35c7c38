# Data module - Loading, cleaning and grouping of MPI poverty records
from .loader import load_raw_data, get_data_summary
from .preprocessor import clean_data, group_means, aggregate_by_country, aggregate_by_region, time_series_means
