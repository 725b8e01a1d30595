import numpy as np
import pytest

from digits.game.core.anchor import PIECE_ANCHOR_OFFSETS, anchor_for, segment_midpoints
from digits.game.core.models import Piece
from digits.game.core.segments import PIECE_NUMBERS, Orientation, Segment


def test_segment_midpoints() -> None:
    points = segment_midpoints([Segment(0, 0, Orientation.HORIZONTAL), Segment(1, 1, Orientation.VERTICAL)])
    np.testing.assert_allclose(points, [[0.5, 0.0], [1.0, 1.5]])


def test_anchor_of_one_and_eight() -> None:
    assert anchor_for(1, 0) == pytest.approx((2.0, 2.0))
    assert anchor_for(8, 0) == pytest.approx((2.5, 2.4))


def test_anchor_follows_rotation() -> None:
    # Digit 1 at 90 degrees: two horizontals side by side.
    assert anchor_for(1, 90) == pytest.approx((2.0, 1.0))


@pytest.mark.parametrize("number", PIECE_NUMBERS)
def test_anchor_is_reproducible_from_number_and_rotation(number: int) -> None:
    piece = Piece(piece_id="any", number=number, rotation=270)
    assert piece.anchor == anchor_for(number, 270)
    assert number in PIECE_ANCHOR_OFFSETS
