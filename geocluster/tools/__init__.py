"""Configuration and record I/O utilities."""

from .config_loader import ConfigLoader, get_config, get_dbscan_config, get_log_level
from .records import (
    PointRecord,
    RecordError,
    encode_clusters,
    parse_point,
    read_points,
    write_clusters,
)

__all__ = [
    "ConfigLoader",
    "get_config",
    "get_dbscan_config",
    "get_log_level",
    "PointRecord",
    "RecordError",
    "encode_clusters",
    "parse_point",
    "read_points",
    "write_clusters",
]
