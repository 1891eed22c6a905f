"""
Density-based spatial clustering (DBSCAN) over geo-tagged points.

This module provides:
1. Parameter validation (``eps`` / ``min_pts`` / index fanout)
2. The DBSCAN driver over an R-tree accelerated neighborhood oracle
3. Deterministic cluster assembly (discovery order, member order)
4. Diagnostics for logging and the HTTP surface

Ordering guarantees:
- Clusters are emitted in the order their seed appears in the input
- Members are ordered by when expansion appended them
- Neighborhoods are ascending point-index order, so output is reproducible
  for a fixed input sequence and parameters

Coordinates are planar; no geodesic correction is applied. Callers that need
metric clustering must project first.
"""

from __future__ import annotations

import json
import logging
import math
import numbers
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .assembler import assemble_clusters
from .errors import InvalidParameterError
from .index import DEFAULT_NODE_CAPACITY
from .neighborhood import NeighborhoodOracle
from .points import ClusterOutput, Point, coordinates_array


logger = logging.getLogger(__name__)

UNASSIGNED = -1


@dataclass
class DBSCANConfig:
    """Configuration for a clustering run."""
    
    eps: float = 0.01
    """Neighborhood radius, in the same units as the input coordinates."""
    
    min_pts: int = 5
    """Minimum neighborhood size (counting the point itself) for a core point."""
    
    node_capacity: int = DEFAULT_NODE_CAPACITY
    """R-tree node fanout."""
    
    def validate(self) -> None:
        """
        Check parameter ranges.
        
        Raises:
            InvalidParameterError: If any parameter is out of range
        """
        problems = []
        
        if isinstance(self.eps, bool) or not isinstance(self.eps, numbers.Real):
            problems.append(f"eps must be a number, got {self.eps!r}")
        elif not math.isfinite(self.eps) or self.eps < 0:
            problems.append(f"eps must be a finite value >= 0, got {self.eps}")
        
        if isinstance(self.min_pts, bool) or not isinstance(self.min_pts, numbers.Integral):
            problems.append(f"min_pts must be an integer, got {self.min_pts!r}")
        elif self.min_pts < 1:
            problems.append(f"min_pts must be >= 1, got {self.min_pts}")
        
        if isinstance(self.node_capacity, bool) or not isinstance(self.node_capacity, numbers.Integral):
            problems.append(f"node_capacity must be an integer, got {self.node_capacity!r}")
        elif self.node_capacity < 2:
            problems.append(f"node_capacity must be >= 2, got {self.node_capacity}")
        
        if problems:
            raise InvalidParameterError("; ".join(problems))


@dataclass
class ClusteringDiagnostics:
    """Summary of a clustering run."""
    
    num_points: int
    """Total number of points provided."""
    
    num_clusters: int
    """Number of clusters found."""
    
    num_noise: int
    """Points left out of every cluster."""
    
    num_core: int = 0
    """Points whose neighborhood reached ``min_pts``."""
    
    neighbor_queries: int = 0
    """Neighborhood lookups performed (one per visited point)."""
    
    cluster_sizes: List[int] = field(default_factory=list)
    """Size of each cluster, in discovery order."""
    
    config_used: Optional[DBSCANConfig] = None
    """Configuration the run used."""
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
    
    def to_json(self) -> str:
        """Convert to JSON string for logging."""
        return json.dumps(self.to_dict(), ensure_ascii=False)


def _expand_cluster(
    oracle: NeighborhoodOracle,
    cluster_id: int,
    cluster: List[int],
    work: List[int],
    visited: np.ndarray,
    assigned: np.ndarray,
    core: np.ndarray,
    min_pts: int,
) -> None:
    """
    Grow ``cluster`` by transitive density-reachability.
    
    ``work`` is extended while it is walked; duplicates are expected and are
    filtered by the assignment check. Already-visited entries must still reach
    that check, otherwise border points visited earlier as noise are lost.
    """
    pos = 0
    while pos < len(work):
        j = work[pos]
        pos += 1
        
        if not visited[j]:
            visited[j] = True
            nbrs = oracle.neighbors(j)
            if len(nbrs) >= min_pts:
                core[j] = True
                work.extend(nbrs)
        
        if assigned[j] == UNASSIGNED:
            assigned[j] = cluster_id
            cluster.append(j)


def find_clusters(
    oracle: NeighborhoodOracle,
    min_pts: int,
) -> Tuple[List[List[int]], np.ndarray]:
    """
    Run the DBSCAN traversal.
    
    Args:
        oracle: Neighborhood oracle over the input points
        min_pts: Core-point threshold (neighborhood includes the point itself)
        
    Returns:
        (clusters, core_mask) where clusters are lists of point indices in
        discovery order and ``core_mask[i]`` marks points found to be core.
    """
    n = len(oracle)
    visited = np.zeros(n, dtype=bool)
    assigned = np.full(n, UNASSIGNED, dtype=np.intp)
    core = np.zeros(n, dtype=bool)
    clusters: List[List[int]] = []
    
    for i in range(n):
        if visited[i]:
            continue
        visited[i] = True
        
        nbrs = oracle.neighbors(i)
        if len(nbrs) < min_pts:
            continue
        core[i] = True
        
        cluster_id = len(clusters)
        assigned[i] = cluster_id
        cluster = [i]
        _expand_cluster(oracle, cluster_id, cluster, list(nbrs), visited, assigned, core, min_pts)
        clusters.append(cluster)
    
    return clusters, core


def cluster_points(
    points: Sequence[Point],
    config: Optional[DBSCANConfig] = None,
) -> Tuple[List[ClusterOutput], ClusteringDiagnostics]:
    """
    Cluster ``points`` with DBSCAN and assemble the output records.
    
    Args:
        points: Input points; their position is the point index
        config: Clustering configuration (uses defaults if None)
        
    Returns:
        (clusters, diagnostics)
        
    Raises:
        InvalidParameterError: If the configuration is out of range
    """
    if config is None:
        config = DBSCANConfig()
    config.validate()
    
    num_points = len(points)
    if num_points == 0:
        logger.info("No points provided, nothing to cluster")
        return [], ClusteringDiagnostics(
            num_points=0, num_clusters=0, num_noise=0, config_used=config
        )
    
    oracle = NeighborhoodOracle(
        coordinates_array(points), config.eps, node_capacity=config.node_capacity
    )
    clusters, core = find_clusters(oracle, config.min_pts)
    outputs = assemble_clusters(points, clusters)
    
    cluster_sizes = [len(c) for c in clusters]
    diagnostics = ClusteringDiagnostics(
        num_points=num_points,
        num_clusters=len(clusters),
        num_noise=num_points - sum(cluster_sizes),
        num_core=int(core.sum()),
        neighbor_queries=oracle.queries,
        cluster_sizes=cluster_sizes,
        config_used=config,
    )
    
    logger.info(
        "Clustered %d points into %d clusters (%d noise, eps=%g, min_pts=%d)",
        num_points, diagnostics.num_clusters, diagnostics.num_noise,
        config.eps, config.min_pts,
    )
    if logger.isEnabledFor(logging.DEBUG):
        for cid, out in enumerate(outputs):
            logger.debug(
                "Cluster %d: size=%d centroid=(%.6f, %.6f)",
                cid, len(out.ids), out.centroid_lat, out.centroid_lon,
            )
        logger.debug("Diagnostics: %s", diagnostics.to_json())
    
    return outputs, diagnostics


def dbscan(
    points: Sequence[Point],
    eps: float = 0.01,
    min_pts: int = 5,
) -> List[ClusterOutput]:
    """Pure function from ``(points, eps, min_pts)`` to clusters."""
    clusters, _diagnostics = cluster_points(points, DBSCANConfig(eps=eps, min_pts=min_pts))
    return clusters
