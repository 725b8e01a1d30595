from digits.game.core.models import BoardPosition, Piece, PlacedPiece
from digits.game.core.occupancy import (
    OccupancyOp,
    collides,
    derive,
    fits_on_board,
    ids_of,
    occupancy_masks,
    positions_of,
    update,
)
from digits.game.core.segments import Orientation, Segment

ONE = Piece("piece-1", 1)
EIGHT = Piece("piece-8", 8)


def test_positions_of_translates_local_segments() -> None:
    assert positions_of(ONE, BoardPosition(2, 1)) == [
        Segment(3, 1, Orientation.VERTICAL),
        Segment(3, 2, Orientation.VERTICAL),
    ]


def test_positions_round_trip_through_position() -> None:
    position = BoardPosition(3, 2)
    absolute = positions_of(EIGHT, position)
    recovered = [seg.translated(-position.x, -position.y) for seg in absolute]
    assert tuple(recovered) == EIGHT.segments


def test_collides_on_overlap_and_off_grid() -> None:
    occupied = ids_of(EIGHT, BoardPosition(0, 0))
    assert collides(ONE, BoardPosition(0, 0), occupied)
    assert not collides(ONE, BoardPosition(3, 0), occupied)
    assert not collides(ONE, BoardPosition(4, 0), frozenset())
    assert collides(ONE, BoardPosition(5, 0), frozenset())
    assert collides(EIGHT, BoardPosition(0, 3), frozenset())
    assert not collides(EIGHT, BoardPosition(0, 2), frozenset())
    assert collides(EIGHT, BoardPosition(4, 3), frozenset())


def test_fits_on_board_ignores_occupancy() -> None:
    assert fits_on_board(ONE, BoardPosition(-1, 0))
    assert not fits_on_board(ONE, BoardPosition(-2, 0))


def test_update_add_remove_is_idempotent_per_element() -> None:
    once = update(frozenset(), ONE, BoardPosition(2, 1), OccupancyOp.ADD)
    assert once == frozenset({"3,1,v", "3,2,v"})
    assert update(once, ONE, BoardPosition(2, 1), OccupancyOp.ADD) == once
    empty = update(once, ONE, BoardPosition(2, 1), OccupancyOp.REMOVE)
    assert empty == frozenset()
    assert update(empty, ONE, BoardPosition(2, 1), OccupancyOp.REMOVE) == frozenset()


def test_derive_is_union_of_placements() -> None:
    placed = [PlacedPiece(ONE, BoardPosition(3, 0)), PlacedPiece(EIGHT, BoardPosition(0, 0))]
    assert derive(placed) == ids_of(ONE, BoardPosition(3, 0)) | ids_of(EIGHT, BoardPosition(0, 0))
    assert len(derive(placed)) == 9


def test_occupancy_masks_project_ids() -> None:
    horizontal, vertical = occupancy_masks({"3,1,v", "3,2,v", "4,4,h", "9,9,h"})
    assert horizontal.shape == (5, 5)
    assert vertical.shape == (4, 6)
    assert vertical[1, 3] and vertical[2, 3]
    assert horizontal[4, 4]
    assert int(horizontal.sum()) == 1
    assert int(vertical.sum()) == 2
