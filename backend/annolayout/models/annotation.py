"""Comment-box annotation value type consumed by the layout engine."""

from dataclasses import dataclass

# Box size used wherever an annotation has no explicit width / height.
DEFAULT_BOX_WIDTH = 150
DEFAULT_BOX_HEIGHT = 40

# Page size assumed when the caller cannot report the rendered page size.
DEFAULT_CONTAINER_WIDTH = 800
DEFAULT_CONTAINER_HEIGHT = 600

# Upper bound on a reported page size in px.
MAX_CONTAINER_SIZE = 20_000


@dataclass(frozen=True)
class Annotation:
    """A leader-lined comment box on one document page.

    ``x``/``y`` is the top-left corner of the box and may be unset before the
    first placement.  ``leader_x``/``leader_y`` is the fixed point the leader
    line starts from; it does not move with the box.
    """
    id: str
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    leader_x: float | None = None
    leader_y: float | None = None
    content: str | None = None
    document_id: str | None = None
    page_number: int = 1

    @property
    def is_placed(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def has_leader(self) -> bool:
        return self.leader_x is not None and self.leader_y is not None
