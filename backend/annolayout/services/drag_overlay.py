"""In-flight drag positions, applied on top of committed annotation positions.

The overlay only feeds rendering.  The layout resolver always works from the
committed positions the caller hands in.
"""

from annolayout.models.annotation import Annotation
from annolayout.services.geometry import Position


class DragOverlay:
    """Mapping of annotation id -> position proposed by an unfinished drag."""

    def __init__(self, proposed: dict[str, Position] | None = None) -> None:
        self._proposed: dict[str, Position] = dict(proposed or {})

    def __len__(self) -> int:
        return len(self._proposed)

    def position_for(self, annotation: Annotation) -> Position | None:
        """Position to draw *annotation* at: the drag proposal first, then the committed one."""
        proposed = self._proposed.get(annotation.id)
        if proposed is not None:
            return proposed
        if annotation.is_placed:
            return Position(annotation.x, annotation.y)
        return None
