"""Pydantic schemas for the layout API."""

from pydantic import BaseModel, Field

from annolayout.models.annotation import (
    DEFAULT_CONTAINER_HEIGHT,
    DEFAULT_CONTAINER_WIDTH,
    MAX_CONTAINER_SIZE,
    Annotation,
)
from annolayout.services.geometry import Bounds, Position


class PositionSchema(BaseModel):
    x: float
    y: float

    @classmethod
    def from_position(cls, position: Position) -> "PositionSchema":
        return cls(x=position.x, y=position.y)

    def to_position(self) -> Position:
        return Position(self.x, self.y)


class ContainerSchema(BaseModel):
    """Rendered page size in px."""
    width: float = Field(default=DEFAULT_CONTAINER_WIDTH, gt=0, le=MAX_CONTAINER_SIZE)
    height: float = Field(default=DEFAULT_CONTAINER_HEIGHT, gt=0, le=MAX_CONTAINER_SIZE)

    def to_bounds(self) -> Bounds:
        return Bounds(0, 0, self.width, self.height)


class AnnotationIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=255)
    x: float | None = None
    y: float | None = None
    width: float | None = Field(None, gt=0)
    height: float | None = Field(None, gt=0)
    leader_x: float | None = None
    leader_y: float | None = None
    content: str | None = None
    document_id: str | None = None
    page_number: int = Field(default=1, ge=1)

    def to_annotation(self) -> Annotation:
        return Annotation(**self.model_dump())


class AnnotationOut(AnnotationIn):
    @classmethod
    def from_annotation(cls, annotation: Annotation) -> "AnnotationOut":
        return cls(
            id=annotation.id,
            x=annotation.x,
            y=annotation.y,
            width=annotation.width,
            height=annotation.height,
            leader_x=annotation.leader_x,
            leader_y=annotation.leader_y,
            content=annotation.content,
            document_id=annotation.document_id,
            page_number=annotation.page_number,
        )


class AnnotationSet(BaseModel):
    annotations: list[AnnotationIn] = Field(default_factory=list, max_length=1000)


class OverlapResponse(BaseModel):
    annotation1_id: str
    annotation2_id: str
    overlap_area: float


class CollisionResponse(BaseModel):
    has_collision: bool
    overlaps: list[OverlapResponse]
    total_overlap_area: float


class AdjustRequest(AnnotationSet):
    container: ContainerSchema = Field(default_factory=ContainerSchema)


class AdjustmentItem(BaseModel):
    annotation: AnnotationOut
    new_position: PositionSchema
    moved: bool


class AdjustResponse(BaseModel):
    results: list[AdjustmentItem]
    iterations: int
    # Overlaps still present when the iteration budget ran out
    remaining_collisions: CollisionResponse


class NearestPositionRequest(BaseModel):
    annotation: AnnotationIn
    others: list[AnnotationIn] = Field(default_factory=list, max_length=1000)
    container: ContainerSchema = Field(default_factory=ContainerSchema)


class NewPositionRequest(AnnotationSet):
    leader_x: float
    leader_y: float
    container: ContainerSchema = Field(default_factory=ContainerSchema)


class ConstrainRequest(BaseModel):
    annotation: AnnotationIn
    delta_x: float = 0.0
    delta_y: float = 0.0
    container: ContainerSchema = Field(default_factory=ContainerSchema)


class LeaderLineRequest(BaseModel):
    leader_x: float
    leader_y: float
    box_x: float
    box_y: float
    box_width: float = Field(..., ge=0)
    box_height: float = Field(..., ge=0)


class BoxSizeRequest(BaseModel):
    content: str = ""


class BoxSizeResponse(BaseModel):
    """Wrapped content and the box size that fits it."""
    content: str
    width: int
    height: int


class PreviewRequest(AdjustRequest):
    # Positions of boxes mid-drag, keyed by annotation id
    overlay: dict[str, PositionSchema] = Field(default_factory=dict)
