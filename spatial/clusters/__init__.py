"""
Clusters package for spatial.
Iterating property-based clusters and building them with DBSCAN or k-means.
"""

from spatial.clusters.clusters import get_cluster, cluster_each, cluster_reduce

from spatial.clusters.dbscan import clusters_dbscan

from spatial.clusters.kmeans import clusters_kmeans

__all__ = [
    "get_cluster",
    "cluster_each",
    "cluster_reduce",
    "clusters_dbscan",
    "clusters_kmeans",
]
