"""Visual grab anchor for pieces, used by drag ergonomics only."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from digits.game.core.rotation import segments_for
from digits.game.core.segments import Orientation, Segment

# Per-digit tweak (grid units, +x right, +y down) towards the perceived centre.
PIECE_ANCHOR_OFFSETS: dict[int, tuple[float, float]] = {
    0: (2.0, 2.0),
    1: (1.0, 1.0),
    2: (1.5, 1.0),
    3: (1.0, 1.5),
    4: (1.3, 1.2),
    5: (1.1, 1.5),
    6: (1.5, 1.5),
    7: (1.2, 1.5),
    8: (2.0, 1.4),
    9: (1.5, 1.5),
}


def segment_midpoints(segments: Sequence[Segment]) -> np.ndarray:
    """Return an ``(n, 2)`` array of segment midpoints."""
    points = np.array([(seg.x, seg.y) for seg in segments], dtype=np.float64).reshape(-1, 2)
    horizontal = np.array([seg.orientation is Orientation.HORIZONTAL for seg in segments], dtype=bool)
    points[horizontal, 0] += 0.5
    points[~horizontal, 1] += 0.5
    return points


def anchor_for(number: int, rotation: int) -> tuple[float, float]:
    """Anchor in piece-local grid coordinates for a digit at a rotation."""
    segments = segments_for(number, rotation)
    if not segments:
        return 0.0, 0.0
    midpoints = segment_midpoints(segments)
    center = (midpoints.min(axis=0) + midpoints.max(axis=0)) / 2.0
    offset_x, offset_y = PIECE_ANCHOR_OFFSETS[number]
    return float(center[0] + offset_x), float(center[1] + offset_y)
