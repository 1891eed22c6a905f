"""Point and cluster records shared by the clustering engine."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Sequence

import numpy as np


@dataclass(frozen=True)
class Point:
    """A geo-tagged point. Coordinates are treated as planar values."""
    
    id: str
    """Opaque identifier carried through to the output."""
    
    lat: float
    """Latitude (first planar axis)."""
    
    lon: float
    """Longitude (second planar axis)."""


@dataclass
class ClusterOutput:
    """One discovered cluster: centroid and member identifiers."""
    
    centroid_lat: float
    centroid_lon: float
    ids: List[str] = field(default_factory=list)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def coordinates_array(points: Sequence[Point]) -> np.ndarray:
    """Return an ``(N, 2)`` float array of ``(lat, lon)`` rows."""
    if len(points) == 0:
        return np.empty((0, 2), dtype=float)
    return np.array([(p.lat, p.lon) for p in points], dtype=float)
