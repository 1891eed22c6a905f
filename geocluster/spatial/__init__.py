"""
geocluster/spatial: DBSCAN clustering of geo-tagged points.

This module provides the R-tree backed neighborhood oracle and the DBSCAN
driver that turns a batch of points into centroid + member-id clusters.
"""

from .assembler import assemble_clusters
from .clustering import (
    ClusteringDiagnostics,
    DBSCANConfig,
    cluster_points,
    dbscan,
    find_clusters,
)
from .errors import InvalidParameterError
from .index import Rect, SpatialIndex
from .neighborhood import NeighborhoodOracle
from .points import ClusterOutput, Point

__all__ = [
    "ClusterOutput",
    "ClusteringDiagnostics",
    "DBSCANConfig",
    "InvalidParameterError",
    "NeighborhoodOracle",
    "Point",
    "Rect",
    "SpatialIndex",
    "assemble_clusters",
    "cluster_points",
    "dbscan",
    "find_clusters",
]
