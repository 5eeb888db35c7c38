# Global MPI Poverty Analysis Configuration

import os

# Project paths
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(PROJECT_ROOT, 'data')
RAW_DATA_DIR = os.path.join(DATA_DIR, 'raw')
REPORTS_DIR = os.path.join(PROJECT_ROOT, 'reports')
CHARTS_DIR = os.path.join(REPORTS_DIR, 'charts')

# Input / output files (the only settings overridable from the environment)
INPUT_FILE = os.environ.get(
    'MPI_INPUT_FILE',
    os.path.join(RAW_DATA_DIR, 'hdx_hapi_poverty_rate_global.csv')
)
REPORT_FILE = os.environ.get('MPI_REPORT_FILE', 'poverty_analysis_report.txt')

# Positional column layout of the source file
COLUMN_NAMES = [
    'location_code',
    'has_hrp',
    'in_gho',
    'provider_admin1_name',
    'admin1_code',
    'admin1_name',
    'mpi',
    'headcount_ratio',
    'intensity_of_deprivation',
    'vulnerable_to_poverty',
    'in_severe_poverty',
    'reference_period_start',
    'reference_period_end'
]

NUMERIC_COLUMNS = [
    'mpi',
    'headcount_ratio',
    'intensity_of_deprivation',
    'vulnerable_to_poverty',
    'in_severe_poverty'
]
DATE_COLUMNS = ['reference_period_start', 'reference_period_end']
FLAG_COLUMNS = ['has_hrp', 'in_gho']
STRING_COLUMNS = ['location_code', 'provider_admin1_name', 'admin1_code', 'admin1_name']

COUNTRY_KEY = 'location_code'
REGION_KEY = 'admin1_name'

# Aggregation parameters
TOP_COUNTRIES = 10
TOP_REGIONS = 20

# Clustering parameters
KMEANS_CLUSTERS = 5
KMEANS_SEED = 123
KMEANS_N_INIT = 10

# Quality check bounds (MPI is a 0-1 index, the ratios are percentages)
VALUE_RANGES = {
    'mpi': (0, 1),
    'headcount_ratio': (0, 100),
    'intensity_of_deprivation': (0, 100),
    'vulnerable_to_poverty': (0, 100),
    'in_severe_poverty': (0, 100)
}
MISSING_VALUE_THRESHOLD = 0.5  # Max share of missing cells per indicator

# Dashboard settings
DASHBOARD_HOST = '0.0.0.0'
DASHBOARD_PORT = 8501
