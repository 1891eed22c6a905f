"""Reduce discovered clusters (lists of point indices) to output records."""

from __future__ import annotations

from typing import List, Sequence

from .points import ClusterOutput, Point


def assemble_cluster(points: Sequence[Point], members: Sequence[int]) -> ClusterOutput:
    """
    Compute the centroid and identifier list for one cluster.
    
    The centroid is the naive componentwise mean of member coordinates;
    identifiers keep the member (discovery) order.
    """
    sum_lat = 0.0
    sum_lon = 0.0
    ids: List[str] = []
    for idx in members:
        p = points[idx]
        sum_lat += p.lat
        sum_lon += p.lon
        ids.append(p.id)
    
    n = float(len(members))
    return ClusterOutput(centroid_lat=sum_lat / n, centroid_lon=sum_lon / n, ids=ids)


def assemble_clusters(
    points: Sequence[Point],
    clusters: Sequence[Sequence[int]],
) -> List[ClusterOutput]:
    """Assemble every cluster, preserving discovery order."""
    return [assemble_cluster(points, members) for members in clusters]
