# Models module - Statistical tests and clustering
from .statistical import summary_statistics, top_n, correlation_matrix, one_way_anova, gini_coefficient, gini_per_group
from .clustering import PovertyClusterer, kmeans_cluster, get_cluster_summary
