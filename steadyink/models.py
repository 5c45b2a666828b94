"""Pydantic models for recorded strokes and replay results."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .types import Point, PointerPoint


class RecordedPoint(BaseModel):
    """A single pointer sample as stored in a recording."""
    x: float
    y: float
    timestamp: float = Field(description="Monotonic time in milliseconds")
    pressure: Optional[float] = None

    def to_pointer_point(self) -> PointerPoint:
        return PointerPoint(x=self.x, y=self.y, timestamp=self.timestamp, pressure=self.pressure)

    @classmethod
    def from_pointer_point(cls, point: PointerPoint) -> "RecordedPoint":
        return cls(x=point.x, y=point.y, timestamp=point.timestamp, pressure=point.pressure)


class StrokeRecording(BaseModel):
    """A recorded stroke: raw samples in arrival order."""
    points: List[RecordedPoint]

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "points": [
                {"x": 0.0, "y": 0.0, "timestamp": 0, "pressure": 0.4},
                {"x": 10.0, "y": 10.5, "timestamp": 16, "pressure": 0.5},
            ]
        }
    })


class StrokePoint(BaseModel):
    x: float
    y: float

    @classmethod
    def from_point(cls, point: Point) -> "StrokePoint":
        return cls(x=point.x, y=point.y)


class ReplayStats(BaseModel):
    """Statistics about a replayed stroke."""
    points_in: int = 0
    points_accepted: int = 0
    points_rejected: int = 0
    processing_time_ms: Optional[float] = None


class ReplayResult(BaseModel):
    """Real-time preview plus the finished, post-processed stroke."""
    realtime: List[RecordedPoint]
    stroke: List[StrokePoint]
    stats: ReplayStats
