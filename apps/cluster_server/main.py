"""FastAPI service exposing DBSCAN clustering over HTTP."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException

from .schemas.models import (
    ClusterDiagnostics,
    ClusterRecord,
    ClusterRequest,
    ClusterResponse,
    ProfilesResponse,
)
from geocluster.spatial import InvalidParameterError, cluster_points
from geocluster.tools.config_loader import (
    DEFAULT_PROFILE,
    ConfigLoader,
    get_config,
    get_dbscan_config,
)

app = FastAPI(title="Geo Cluster Server", version="1.0.0")


@app.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/profiles")
async def list_profiles() -> ProfilesResponse:
    default = ConfigLoader.get_profile_from_env() or DEFAULT_PROFILE
    return ProfilesResponse(profiles=ConfigLoader.available_profiles(), default=default)


def _load_profile(name: Optional[str]) -> Dict[str, Any]:
    try:
        return get_config(name)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/actions/cluster")
def cluster_action(request: ClusterRequest) -> Dict[str, Any]:
    profile = _load_profile(request.profile)
    config = get_dbscan_config(profile, eps=request.eps, min_pts=request.min_pts)

    points = [record.to_point() for record in request.points]
    try:
        clusters, diagnostics = cluster_points(points, config)
    except InvalidParameterError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    response = ClusterResponse(
        clusters=[ClusterRecord(**c.to_dict()) for c in clusters],
        diagnostics=ClusterDiagnostics(
            num_points=diagnostics.num_points,
            num_clusters=diagnostics.num_clusters,
            num_noise=diagnostics.num_noise,
            num_core=diagnostics.num_core,
            neighbor_queries=diagnostics.neighbor_queries,
            cluster_sizes=diagnostics.cluster_sizes,
            eps=config.eps,
            min_pts=config.min_pts,
        ),
    )
    return response.model_dump(by_alias=True)


__all__ = ["app"]
