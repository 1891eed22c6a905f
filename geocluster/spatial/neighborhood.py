"""
Exact epsilon-neighborhood lookup.

Candidates come from the R-tree (rectangles over-approximate disks); an exact
planar Euclidean filter ``hypot(dlat, dlon) <= eps`` removes the false
positives. Neighborhoods are returned in ascending point-index order and
always include the query point itself.
"""

from __future__ import annotations

import math
from typing import List

import numpy as np

from .errors import InvalidParameterError
from .index import DEFAULT_NODE_CAPACITY, Rect, SpatialIndex


class NeighborhoodOracle:
    """Answers ``neighbors(i)`` queries over a fixed coordinate array."""
    
    def __init__(
        self,
        coords: np.ndarray,
        eps: float,
        node_capacity: int = DEFAULT_NODE_CAPACITY,
    ):
        """
        Build the index for ``coords``.
        
        Args:
            coords: ``(N, 2)`` array of ``(lat, lon)`` rows
            eps: Neighborhood radius in coordinate units (>= 0)
            node_capacity: R-tree node fanout
        """
        if not math.isfinite(eps) or eps < 0:
            raise InvalidParameterError(f"eps must be a finite value >= 0, got {eps}")
        
        self.coords = np.asarray(coords, dtype=float).reshape(-1, 2)
        self.eps = float(eps)
        self.queries = 0
        self.index = SpatialIndex.build(
            (
                (Rect.around(lat, lon, self.eps), i)
                for i, (lat, lon) in enumerate(self.coords)
            ),
            node_capacity=node_capacity,
        )
    
    def __len__(self) -> int:
        return len(self.coords)
    
    def neighbors(self, i: int) -> List[int]:
        """Return indices within ``eps`` of point ``i`` (self included), ascending."""
        self.queries += 1
        lat, lon = self.coords[i]
        
        candidates = np.sort(self.index.search_intersect(Rect.around(lat, lon, self.eps)))
        if candidates.size == 0:
            return []
        
        deltas = self.coords[candidates] - self.coords[i]
        dist = np.hypot(deltas[:, 0], deltas[:, 1])
        return candidates[dist <= self.eps].tolist()
