"""
Spatial index over axis-aligned rectangles.

Wraps a bulk-loaded shapely ``STRtree`` (Sort-Tile-Recursive R-tree). The
index is built once from ``(Rect, point_index)`` entries and is read-only
afterwards; queries return every entry whose rectangle intersects the query
rectangle, so results may contain false positives but never false negatives.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np
import shapely
from shapely import STRtree


DEFAULT_NODE_CAPACITY = 25


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in (lat, lon) space."""
    
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float
    
    @classmethod
    def around(cls, lat: float, lon: float, half_extent: float) -> "Rect":
        """Rectangle centred on ``(lat, lon)`` extending ``half_extent`` on each axis."""
        return cls(
            min_lat=lat - half_extent,
            min_lon=lon - half_extent,
            max_lat=lat + half_extent,
            max_lon=lon + half_extent,
        )
    
    def to_geometry(self) -> shapely.Polygon:
        return shapely.box(self.min_lat, self.min_lon, self.max_lat, self.max_lon)


class SpatialIndex:
    """
    Immutable R-tree over ``(Rect, point_index)`` entries.
    
    Use :meth:`build` to construct. Tree slots are mapped back to the point
    index each entry was built with, so entry order only affects throughput.
    """
    
    def __init__(
        self,
        tree: Optional[STRtree],
        point_indices: np.ndarray,
        node_capacity: int,
    ):
        self._tree = tree
        self._point_indices = point_indices
        self.node_capacity = node_capacity
    
    @classmethod
    def build(
        cls,
        entries: Iterable[Tuple[Rect, int]],
        node_capacity: int = DEFAULT_NODE_CAPACITY,
    ) -> "SpatialIndex":
        """
        Bulk-load an index from a finite sequence of entries.
        
        Args:
            entries: ``(rect, point_index)`` pairs
            node_capacity: Maximum children per tree node
            
        Returns:
            A read-only :class:`SpatialIndex`
        """
        entries = list(entries)
        point_indices = np.array([idx for _, idx in entries], dtype=np.intp)
        
        if not entries:
            return cls(None, point_indices, node_capacity)
        
        bounds = np.array(
            [(r.min_lat, r.min_lon, r.max_lat, r.max_lon) for r, _ in entries],
            dtype=float,
        )
        geoms = shapely.box(bounds[:, 0], bounds[:, 1], bounds[:, 2], bounds[:, 3])
        tree = STRtree(geoms, node_capacity=node_capacity)
        return cls(tree, point_indices, node_capacity)
    
    def __len__(self) -> int:
        return len(self._point_indices)
    
    def search_intersect(self, rect: Rect) -> np.ndarray:
        """Return point indices of all entries whose rectangle intersects ``rect``."""
        if self._tree is None:
            return np.empty(0, dtype=np.intp)
        
        slots = self._tree.query(rect.to_geometry())
        return self._point_indices[slots]
