"""Pydantic models for the geocluster HTTP service."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from geocluster.tools.records import PointRecord


class ClusterRequest(BaseModel):
    points: List[PointRecord] = Field(default_factory=list)
    eps: Optional[float] = Field(
        default=None, ge=0, allow_inf_nan=False, description="Neighborhood radius in coordinate units"
    )
    min_pts: Optional[int] = Field(
        default=None, ge=1, alias="minPts", description="Core-point neighborhood size"
    )
    profile: Optional[str] = Field(
        default=None, description="Configuration profile supplying missing parameters"
    )

    model_config = {"populate_by_name": True}


class ClusterRecord(BaseModel):
    centroid_lat: float
    centroid_lon: float
    ids: List[str]


class ClusterDiagnostics(BaseModel):
    num_points: int
    num_clusters: int
    num_noise: int
    num_core: int
    neighbor_queries: int
    cluster_sizes: List[int] = Field(default_factory=list)
    eps: float
    min_pts: int = Field(..., alias="minPts")

    model_config = {"populate_by_name": True}


class ClusterResponse(BaseModel):
    clusters: List[ClusterRecord]
    diagnostics: ClusterDiagnostics


class ProfilesResponse(BaseModel):
    profiles: List[str]
    default: str
