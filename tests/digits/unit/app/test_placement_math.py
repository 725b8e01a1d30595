from digits.game.app.placement_math import (
    BoardGeometry,
    board_position_at_pixel,
    board_position_for_cursor,
    cursor_for_board_position,
)
from digits.game.core.models import BoardPosition, Piece

ONE = Piece("piece-1", 1)
EIGHT = Piece("piece-8", 8)


def test_board_geometry_pixels() -> None:
    geometry = BoardGeometry()
    assert geometry.pixel_size() == (320.0, 260.0)
    assert geometry.grid_to_pixel(0, 0) == (10.0, 10.0)
    assert geometry.grid_to_pixel(5, 4) == (310.0, 250.0)
    assert geometry.pixel_to_grid(39, 10) == (0, 0)
    assert geometry.pixel_to_grid(40, 10) == (1, 0)
    assert BoardGeometry(scale=2.0).grid_to_pixel(1, 1) == (140.0, 140.0)


def test_cursor_is_anchor_not_corner() -> None:
    assert board_position_for_cursor(ONE, 4, 3) == BoardPosition(2, 1)
    assert cursor_for_board_position(ONE, BoardPosition(2, 1)) == (4, 3)


def test_cursor_rounding_is_half_up() -> None:
    assert board_position_for_cursor(EIGHT, 3, 3) == BoardPosition(1, 1)
    assert board_position_for_cursor(EIGHT, 2, 2) == BoardPosition(0, 0)


def test_cursor_round_trip_for_rotated_piece() -> None:
    turned = Piece("piece-7", 7, rotation=270)
    position = BoardPosition(1, 2)
    assert board_position_for_cursor(turned, *cursor_for_board_position(turned, position)) == position


def test_board_position_at_pixel() -> None:
    geometry = BoardGeometry()
    assert board_position_at_pixel(geometry, ONE, 250, 190) == BoardPosition(2, 1)
    assert board_position_at_pixel(geometry, ONE, -1, 100) is None
    assert board_position_at_pixel(geometry, ONE, 100, 261) is None
