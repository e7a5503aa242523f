"""Drawing registry for submitted creature drawings.

This module provides the DrawingRegistry class, the append-only store of
every drawing submitted during the process lifetime. Records live in memory
only and are never mutated or deleted.
"""

import logging
import random
from typing import Any, List, Optional

from pydantic import ValidationError

from backend.models import DrawingSubmission
from core.config.server import DEFAULT_DUPLICATE_ID_POLICY, DUPLICATE_ID_POLICIES
from core.drawing import Anchors, Bounds, Drawing, Point, generate_drawing_id, now_millis
from core.exceptions import ConfigurationError, DuplicateDrawing, InvalidPayload

logger = logging.getLogger(__name__)

INVALID_SHAPE_MESSAGE = "Invalid payload: expected strokes[] and bounds{}"


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid payload: {location}: {first.get('msg', 'invalid value')}"


def parse_submission(payload: Any) -> DrawingSubmission:
    """Validate a raw JSON body.

    Raises:
        InvalidPayload: If strokes or bounds are missing or malformed, or a
            stroke point lies outside the bounds.
    """
    if not isinstance(payload, dict):
        raise InvalidPayload(INVALID_SHAPE_MESSAGE)
    if not isinstance(payload.get("strokes"), list) or not payload.get("bounds"):
        raise InvalidPayload(INVALID_SHAPE_MESSAGE)

    try:
        submission = DrawingSubmission.model_validate(payload)
    except ValidationError as e:
        raise InvalidPayload(_describe_validation_error(e)) from e

    b = submission.bounds
    for stroke in submission.strokes:
        for p in stroke:
            if not (b.minX <= p.x <= b.maxX and b.minY <= p.y <= b.maxY):
                raise InvalidPayload(
                    f"Invalid payload: point ({p.x}, {p.y}) lies outside bounds"
                )
    return submission


class DrawingRegistry:
    """Append-only store of drawings, in submission order.

    Args:
        duplicate_policy: ``"append"`` stores repeated ids as distinct
            records; ``"reject"`` refuses them with ``DuplicateDrawing``.
        rng: Random source for generated ids.
    """

    def __init__(
        self,
        duplicate_policy: str = DEFAULT_DUPLICATE_ID_POLICY,
        rng: Optional[random.Random] = None,
    ) -> None:
        if duplicate_policy not in DUPLICATE_ID_POLICIES:
            raise ConfigurationError(
                f"Unknown duplicate id policy {duplicate_policy!r}, "
                f"expected one of {', '.join(DUPLICATE_ID_POLICIES)}"
            )
        self.duplicate_policy = duplicate_policy
        self._drawings: List[Drawing] = []
        self._ids = set()
        self._rng = rng or random.Random()
        logger.info("DrawingRegistry initialized (duplicate ids: %s)", duplicate_policy)

    def __len__(self) -> int:
        return len(self._drawings)

    @property
    def count(self) -> int:
        return len(self._drawings)

    def submit(self, payload: Any) -> Drawing:
        """Validate and store a submitted drawing.

        Nothing is stored and no id is assigned when validation fails.

        Raises:
            InvalidPayload: Malformed strokes or bounds.
            DuplicateDrawing: Repeated id under the ``reject`` policy.
        """
        submission = parse_submission(payload)

        timestamp = now_millis()
        drawing_id = str(submission.id) if submission.id not in (None, "") else None
        if drawing_id is not None and drawing_id in self._ids:
            if self.duplicate_policy == "reject":
                raise DuplicateDrawing(f"Drawing id already registered: {drawing_id}")
            logger.warning("Drawing id %s submitted again, storing a second record", drawing_id)
        if drawing_id is None:
            drawing_id = generate_drawing_id(timestamp, self._rng)
            while drawing_id in self._ids:
                drawing_id = generate_drawing_id(timestamp, self._rng)

        drawing = Drawing(
            id=drawing_id,
            strokes=tuple(
                tuple(Point(p.x, p.y) for p in stroke) for stroke in submission.strokes
            ),
            bounds=Bounds(
                min_x=submission.bounds.minX,
                min_y=submission.bounds.minY,
                max_x=submission.bounds.maxX,
                max_y=submission.bounds.maxY,
            ),
            anchors=(
                Anchors(
                    mouth=Point(submission.anchors.mouth.x, submission.anchors.mouth.y),
                    back=Point(submission.anchors.back.x, submission.anchors.back.y),
                )
                if submission.anchors is not None
                else None
            ),
            timestamp=timestamp,
        )

        self._drawings.append(drawing)
        self._ids.add(drawing_id)
        logger.info(
            "Registered drawing %s (%d strokes, %d points), %d total",
            drawing_id,
            len(drawing.strokes),
            drawing.point_count,
            len(self._drawings),
        )
        return drawing

    def list_all(self) -> List[Drawing]:
        """All drawings in insertion order."""
        return list(self._drawings)

    def get(self, drawing_id: str) -> Optional[Drawing]:
        """First record stored under ``drawing_id``."""
        for drawing in self._drawings:
            if drawing.id == drawing_id:
                return drawing
        return None

    def to_list(self) -> List[dict]:
        return [drawing.to_dict() for drawing in self._drawings]
