"""
Pytest configuration and shared fixtures for geocluster tests.

This file provides:
- Scenario point sets (dense blob + noise, separated blobs, chains, bridges)
- Random blob generators for property-style checks
- A brute-force reference for neighborhoods and core points
"""

import json
from typing import Dict, List, Sequence, Tuple

import pytest
import numpy as np

from geocluster.spatial.points import Point


def make_points(rows: Sequence[Tuple[str, float, float]]) -> List[Point]:
    """Build points from ``(id, lat, lon)`` tuples."""
    return [Point(id=pid, lat=lat, lon=lon) for pid, lat, lon in rows]


def to_jsonl(points: Sequence[Point]) -> str:
    """Encode points as line-delimited JSON records."""
    return "".join(
        json.dumps({"id": p.id, "lat": p.lat, "lon": p.lon}) + "\n" for p in points
    )


def brute_neighbors(points: Sequence[Point], i: int, eps: float) -> List[int]:
    """O(N) reference neighborhood, ascending index order."""
    p = points[i]
    return [
        j for j, q in enumerate(points)
        if float(np.hypot(p.lat - q.lat, p.lon - q.lon)) <= eps
    ]


def rects_intersect(a, b) -> bool:
    """Closed-interval overlap of two Rects (edges touching counts)."""
    return (
        a.min_lat <= b.max_lat
        and b.min_lat <= a.max_lat
        and a.min_lon <= b.max_lon
        and b.min_lon <= a.max_lon
    )


def id_partition(clusters) -> frozenset:
    """Clusters as a set of frozensets of ids (order-free comparison)."""
    return frozenset(frozenset(c.ids) for c in clusters)


# ==============================================================================
# Scenario Points
# ==============================================================================

@pytest.fixture
def dense_with_noise() -> List[Point]:
    """Five points around the origin plus one far-away outlier."""
    return make_points([
        ("a", 0.0, 0.0),
        ("b", 0.001, 0.0),
        ("c", 0.0, 0.001),
        ("d", 0.001, 0.001),
        ("e", 0.0005, 0.0005),
        ("f", 10.0, 10.0),
    ])


@pytest.fixture
def two_blobs() -> List[Point]:
    """Five points at (0, 0) +- 0.001 followed by five at (5, 5) +- 0.001."""
    offsets = [(0.0, 0.0), (0.001, 0.0), (0.0, 0.001), (-0.001, 0.0), (0.0, -0.001)]
    rows = [(f"o{k}", dlat, dlon) for k, (dlat, dlon) in enumerate(offsets)]
    rows += [(f"f{k}", 5.0 + dlat, 5.0 + dlon) for k, (dlat, dlon) in enumerate(offsets)]
    return make_points(rows)


@pytest.fixture
def sparse_points() -> List[Point]:
    """Four points far apart from each other."""
    return make_points([
        ("p0", 0.0, 0.0),
        ("p1", 1.0, 1.0),
        ("p2", 2.0, 2.0),
        ("p3", 3.0, 3.0),
    ])


@pytest.fixture
def chain_points() -> List[Point]:
    """Five points 0.005 apart along the lat axis."""
    return make_points([
        ("x0", 0.0, 0.0),
        ("x1", 0.005, 0.0),
        ("x2", 0.010, 0.0),
        ("x3", 0.015, 0.0),
        ("x4", 0.020, 0.0),
    ])


@pytest.fixture
def bridged_blobs() -> Dict[str, List[Point]]:
    """
    Two blobs of four points joined by a single bridge point.
    
    With eps=0.9 and min_pts=4 every blob point is core, the nearest cores of
    the two blobs are 1.5 apart, and the bridge at lat -1.5 sees exactly one
    core of each blob (neighborhood size 3 < 4), so it is a border point.
    """
    blob_a = make_points([("a0", -3.0, 0.0), ("a1", -2.75, 0.0), ("a2", -2.5, 0.0), ("a3", -2.25, 0.0)])
    blob_b = make_points([("b0", -0.75, 0.0), ("b1", -0.5, 0.0), ("b2", -0.25, 0.0), ("b3", 0.0, 0.0)])
    bridge = make_points([("bridge", -1.5, 0.0)])
    return {"a": blob_a, "b": blob_b, "bridge": bridge}


@pytest.fixture
def random_blobs() -> List[Point]:
    """Three well-separated Gaussian blobs plus uniform noise (seeded)."""
    rng = np.random.default_rng(42)
    centers = [(0.0, 0.0), (1.0, 1.0), (-1.0, 2.0)]
    rows = []
    for c, (clat, clon) in enumerate(centers):
        for k, (dlat, dlon) in enumerate(rng.normal(scale=0.01, size=(40, 2))):
            rows.append((f"c{c}-{k}", clat + dlat, clon + dlon))
    for k, (lat, lon) in enumerate(rng.uniform(-3.0, 3.0, size=(15, 2))):
        rows.append((f"n{k}", float(lat), float(lon)))
    return make_points([(pid, float(lat), float(lon)) for pid, lat, lon in rows])
