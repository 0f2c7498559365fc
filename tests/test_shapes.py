import pytest

from models import ORIENTATIONS, Orientation
from pieces import PIECES, make_piece, piece_by_name
from shapes import (
    distinct_orientations,
    flip_horizontal,
    normalize,
    orientations,
    rotate90,
    shape_cells,
    shape_from_rows,
    shape_to_text,
    unorient,
)


def _grid(*cells, size=4):
    rows = [[0] * size for _ in range(size)]
    for r, c in cells:
        rows[r][c] = 1
    return shape_from_rows(rows)


def test_normalize_moves_bounding_box_to_origin():
    shape = _grid((2, 3), (3, 3), (3, 2))
    assert shape_cells(normalize(shape)) == ((0, 1), (1, 0), (1, 1))


def test_normalize_keeps_empty_shape():
    empty = _grid()
    assert normalize(empty) is empty


def test_rotate90_is_clockwise():
    # (r, c) -> (c, N-1-r)
    assert shape_cells(rotate90(_grid((0, 0)))) == ((0, 3),)
    assert shape_cells(rotate90(_grid((1, 2)))) == ((2, 2),)


def test_four_rotations_are_identity():
    shape = _grid((0, 0), (0, 1), (1, 1), (2, 1))
    out = shape
    for _ in range(4):
        out = rotate90(out)
    assert out == shape


def test_flip_horizontal_reverses_rows():
    assert shape_cells(flip_horizontal(_grid((0, 0), (1, 0)))) == ((0, 3), (1, 3))


@pytest.mark.parametrize("piece", PIECES, ids=lambda p: p.name)
def test_every_piece_has_eight_normalized_orientations(piece):
    assert len(piece.orientations) == 8
    for shape in piece.orientations:
        assert normalize(shape) == shape
        assert len(shape_cells(shape)) == piece.size


@pytest.mark.parametrize("piece", PIECES, ids=lambda p: p.name)
def test_unorient_recovers_the_canonical_shape(piece):
    for idx, shape in enumerate(piece.orientations):
        assert unorient(shape, idx) == normalize(piece.shape)


def test_orientation_table_order_for_tromino():
    # .#
    # ##
    tromino = piece_by_name(PIECES, "F")
    assert shape_cells(tromino.orientations[0]) == ((0, 1), (1, 0), (1, 1))
    assert shape_cells(tromino.orientations[1]) == ((0, 0), (1, 0), (1, 1))
    # mirrored, not rotated
    assert shape_cells(tromino.orientations[4]) == ((0, 0), (1, 0), (1, 1))


def test_straight_piece_turns_vertical():
    line = piece_by_name(PIECES, "J")
    assert shape_cells(line.orientations[0]) == ((0, 0), (0, 1), (0, 2), (0, 3))
    assert shape_cells(line.orientations[1]) == ((0, 0), (1, 0), (2, 0), (3, 0))


def test_symmetric_piece_keeps_duplicate_entries():
    square = piece_by_name(PIECES, "K")
    assert len(set(square.orientations)) == 1
    assert len(square.orientations) == 8
    assert distinct_orientations(square.orientations) == [0]


def test_orientations_are_deterministic():
    piece = make_piece("Z", [[1, 1, 0, 0], [0, 1, 0, 0], [0, 1, 1, 0], [0, 0, 0, 0]])
    assert orientations(piece.shape) == orientations(piece.shape)
    assert len(distinct_orientations(piece.orientations)) == 4


def test_orientation_index_round_trip():
    for idx, o in enumerate(ORIENTATIONS):
        assert o.index == idx
        assert Orientation.from_index(idx) == o
    assert Orientation(3, True).index == 7
    with pytest.raises(ValueError):
        Orientation.from_index(8)


def test_shape_to_text():
    assert shape_to_text(_grid((0, 0), (1, 1), size=2)) == "#.\n.#"
