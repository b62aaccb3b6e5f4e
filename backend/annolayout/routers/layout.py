"""Auto-layout API routes (collision check, resolve, placement, leader line, preview).

The service is stateless: every request carries the annotations of one page
and the page size.  Persisting the returned positions is up to the caller.
"""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from annolayout.config import get_settings
from annolayout.deps import LayoutService
from annolayout.models.annotation import Annotation
from annolayout.schemas.layout import (
    AdjustmentItem,
    AdjustRequest,
    AdjustResponse,
    AnnotationIn,
    AnnotationOut,
    AnnotationSet,
    BoxSizeRequest,
    BoxSizeResponse,
    CollisionResponse,
    ConstrainRequest,
    LeaderLineRequest,
    NearestPositionRequest,
    NewPositionRequest,
    OverlapResponse,
    PositionSchema,
    PreviewRequest,
)
from annolayout.services.collision import CollisionResult
from annolayout.services.drag_overlay import DragOverlay
from annolayout.services.geometry import line_box_intersection
from annolayout.services.renderer import render_page_preview
from annolayout.services.sizing import apply_auto_line_breaks, calculate_box_size

logger = logging.getLogger("annolayout.api")

router = APIRouter(prefix="/api/v1/layout", tags=["layout"])


def _to_annotations(items: list[AnnotationIn]) -> list[Annotation]:
    """Convert request items, rejecting duplicate ids (the engine keys on id)."""
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise HTTPException(status_code=400, detail=f"Duplicate annotation id: {item.id}")
        seen.add(item.id)
    return [item.to_annotation() for item in items]


def _collision_response(result: CollisionResult) -> CollisionResponse:
    return CollisionResponse(
        has_collision=result.has_collision,
        overlaps=[
            OverlapResponse(
                annotation1_id=o.annotation1.id,
                annotation2_id=o.annotation2.id,
                overlap_area=o.overlap_area,
            )
            for o in result.overlaps
        ],
        total_overlap_area=result.total_overlap_area,
    )


@router.post("/collisions", response_model=CollisionResponse)
async def check_collisions(body: AnnotationSet, service: LayoutService) -> CollisionResponse:
    """List every overlapping pair of comment boxes."""
    annotations = _to_annotations(body.annotations)
    return _collision_response(service.detect_collisions(annotations))


@router.post("/adjust", response_model=AdjustResponse)
async def adjust_layout(body: AdjustRequest, service: LayoutService) -> AdjustResponse:
    """Resolve overlaps; one result per input annotation, in input order."""
    annotations = _to_annotations(body.annotations)
    report = service.adjust(annotations, body.container.to_bounds())

    moved = sum(1 for r in report.results if r.moved)
    logger.info("Adjusted %d annotations: %d moved in %d iterations",
                len(annotations), moved, report.iterations)

    return AdjustResponse(
        results=[
            AdjustmentItem(
                annotation=AnnotationOut.from_annotation(r.annotation),
                new_position=PositionSchema.from_position(r.new_position),
                moved=r.moved,
            )
            for r in report.results
        ],
        iterations=report.iterations,
        remaining_collisions=_collision_response(report.remaining),
    )


@router.post("/nearest-position", response_model=PositionSchema)
async def nearest_position(body: NearestPositionRequest, service: LayoutService) -> PositionSchema:
    """Nearest collision-free position for one existing annotation."""
    annotation = body.annotation.to_annotation()
    others = _to_annotations(body.others)
    position = service.find_nearest_valid_position(annotation, others, body.container.to_bounds())
    return PositionSchema.from_position(position)


@router.post("/new-position", response_model=PositionSchema)
async def new_position(body: NewPositionRequest, service: LayoutService) -> PositionSchema:
    """Where to put the comment box of a new annotation anchored at the leader point."""
    annotations = _to_annotations(body.annotations)
    position = service.find_non_overlapping_position(
        body.leader_x, body.leader_y, annotations, body.container.to_bounds(),
    )
    return PositionSchema.from_position(position)


@router.post("/constrain", response_model=PositionSchema)
async def constrain(body: ConstrainRequest, service: LayoutService) -> PositionSchema:
    """Apply a drag delta, keeping the box on the page."""
    position = service.constrain_position(
        body.annotation.to_annotation(), body.delta_x, body.delta_y, body.container.to_bounds(),
    )
    return PositionSchema.from_position(position)


@router.post("/leader-line", response_model=PositionSchema)
async def leader_line(body: LeaderLineRequest) -> PositionSchema:
    """Endpoint of the leader line on the box boundary."""
    point = line_box_intersection(
        body.leader_x, body.leader_y, body.box_x, body.box_y, body.box_width, body.box_height,
    )
    return PositionSchema.from_position(point)


@router.post("/box-size", response_model=BoxSizeResponse)
async def box_size(body: BoxSizeRequest) -> BoxSizeResponse:
    """Wrap comment text and size its box."""
    wrapped = apply_auto_line_breaks(body.content)
    width, height = calculate_box_size(wrapped)
    return BoxSizeResponse(content=wrapped, width=width, height=height)


@router.post("/preview")
async def preview(body: PreviewRequest) -> Response:
    """PNG preview of the page's comment boxes and leader lines."""
    max_size = get_settings().preview_max_size
    if body.container.width > max_size or body.container.height > max_size:
        raise HTTPException(
            status_code=400,
            detail=f"Preview is limited to {max_size}x{max_size} px",
        )
    annotations = _to_annotations(body.annotations)
    overlay = DragOverlay({k: v.to_position() for k, v in body.overlay.items()})
    png = render_page_preview(annotations, body.container.to_bounds(), overlay=overlay)
    return Response(content=png, media_type="image/png")
