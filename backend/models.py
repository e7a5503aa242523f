"""Request and response models for the HTTP API."""

from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, model_validator

# Finite numbers only; ints are accepted, numeric strings are not
Coordinate = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class PointModel(BaseModel):
    """A single point of a stroke or anchor."""

    model_config = ConfigDict(extra="ignore")

    x: Coordinate
    y: Coordinate


class BoundsModel(BaseModel):
    """Bounding box in drawing space."""

    model_config = ConfigDict(extra="ignore")

    minX: Coordinate
    minY: Coordinate
    maxX: Coordinate
    maxY: Coordinate

    @model_validator(mode="after")
    def check_order(self) -> "BoundsModel":
        if self.minX > self.maxX:
            raise ValueError("bounds.minX must not exceed bounds.maxX")
        if self.minY > self.maxY:
            raise ValueError("bounds.minY must not exceed bounds.maxY")
        return self


class AnchorsModel(BaseModel):
    """Mouth and back anchors."""

    model_config = ConfigDict(extra="ignore")

    mouth: PointModel
    back: PointModel


class DrawingSubmission(BaseModel):
    """Body of ``POST /api/drawings``."""

    model_config = ConfigDict(extra="ignore")

    strokes: List[List[PointModel]]
    bounds: BoundsModel
    anchors: Optional[AnchorsModel] = None
    id: Optional[Union[StrictStr, StrictInt]] = None


class SubmitResponse(BaseModel):
    """Successful submission response."""

    ok: bool = True
    id: str


class HealthData(BaseModel):
    """Liveness summary."""

    status: str
    actors: int
    drawings: int
    clients: int
    tick_count: int
    uptime_seconds: float
