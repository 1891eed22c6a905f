"""
Line-delimited JSON reader for input points and JSON writer for clusters.

Each input line is an object ``{"id": str, "lat": number, "lon": number}``.
The output is a single JSON array of
``{"centroid_lat", "centroid_lon", "ids"}`` objects followed by a newline.
"""

from __future__ import annotations

import json
from typing import IO, Iterable, List, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from geocluster.spatial.points import ClusterOutput, Point


class RecordError(ValueError):
    """Raised when an input line cannot be parsed as a point record."""
    
    def __init__(self, line_no: int, message: str):
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no
        self.message = message


class PointRecord(BaseModel):
    """One input record."""
    
    id: str = Field(..., description="Opaque point identifier")
    lat: float = Field(..., allow_inf_nan=False, description="Latitude (planar)")
    lon: float = Field(..., allow_inf_nan=False, description="Longitude (planar)")
    
    model_config = ConfigDict(strict=True)
    
    def to_point(self) -> Point:
        return Point(id=self.id, lat=self.lat, lon=self.lon)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ())) or "record"
    return f"{loc}: {err['msg']}"


def parse_point(line: str, line_no: int) -> Point:
    """
    Parse one JSON line into a :class:`Point`.
    
    Raises:
        RecordError: If the line is not a valid point record
    """
    try:
        return PointRecord.model_validate_json(line).to_point()
    except ValidationError as exc:
        raise RecordError(line_no, _first_error(exc)) from exc


def read_points(stream: Iterable[Union[str, bytes]]) -> List[Point]:
    """
    Read points until end of stream. Line numbers in errors are 1-based.
    
    Binary streams are decoded as UTF-8 one line at a time, so an encoding
    error is reported on the line that holds it. Text streams decode ahead in
    chunks and report the line being read when decoding failed.
    
    Raises:
        RecordError: If a line is not valid UTF-8 or not a valid point record
    """
    points: List[Point] = []
    lines = iter(stream)
    line_no = 0
    while True:
        line_no += 1
        try:
            raw = next(lines)
        except StopIteration:
            break
        except UnicodeDecodeError as exc:
            raise RecordError(line_no, f"invalid UTF-8: {exc.reason}") from exc
        
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise RecordError(line_no, f"invalid UTF-8: {exc.reason}") from exc
        
        points.append(parse_point(raw.rstrip("\r\n"), line_no))
    return points


def encode_clusters(clusters: Sequence[ClusterOutput]) -> str:
    """Encode clusters as a JSON array; an empty result is ``[]``."""
    return json.dumps([c.to_dict() for c in clusters], ensure_ascii=False)


def write_clusters(clusters: Sequence[ClusterOutput], stream: IO[str]) -> None:
    stream.write(encode_clusters(clusters))
    stream.write("\n")
    stream.flush()
