import logging

import pytest

from board import (
    apply_placement,
    apply_solution,
    board_to_text,
    check_board,
    create_empty_board,
    empty_cells,
    footprint,
    is_board_complete,
    is_legal,
    move_piece,
    piece_at,
    placed_piece_names,
    remove_piece,
    remove_placement,
)
from layouts import CROSS, STANDARD, get_layout
from models import BoardMismatchError, Layout, Orientation, Placement
from pieces import PIECES, piece_by_name

LINE = piece_by_name(PIECES, "J")      # ####
SQUARE = piece_by_name(PIECES, "K")    # 2x2
TROMINO = piece_by_name(PIECES, "F")   # .# / ##


def test_create_empty_board_matches_layout():
    board = create_empty_board(STANDARD)
    assert len(board) == 5
    assert all(len(row) == 11 for row in board)
    assert all(cell is None for row in board for cell in row)


def test_is_legal_accepts_in_bounds_empty_cells():
    board = create_empty_board(STANDARD)
    assert is_legal(board, STANDARD, LINE, 0, 0, 0)
    assert is_legal(board, STANDARD, LINE, 7, 4, 0)
    assert is_legal(board, STANDARD, LINE, 10, 1, Orientation(1))


def test_is_legal_rejects_out_of_bounds():
    board = create_empty_board(STANDARD)
    assert not is_legal(board, STANDARD, LINE, 8, 0, 0)
    assert not is_legal(board, STANDARD, LINE, -1, 0, 0)
    assert not is_legal(board, STANDARD, LINE, 0, 2, 1)


def test_is_legal_only_checks_occupied_shape_cells():
    board = create_empty_board(CROSS)
    # the shape's empty (0, 0) cell lands on the blocked (0, 1) mask cell
    assert is_legal(board, CROSS, TROMINO, 0, 1, 0)
    board[2][1] = "X"
    assert not is_legal(board, CROSS, TROMINO, 0, 1, 0)


def test_is_legal_rejects_blocked_mask_cells():
    board = create_empty_board(CROSS)
    assert not is_legal(board, CROSS, SQUARE, 0, 0, 0)
    assert is_legal(board, CROSS, SQUARE, 1, 1, 0)


def test_is_legal_rejects_occupied_cells():
    board = create_empty_board(STANDARD)
    board[1][1] = "X"
    assert not is_legal(board, STANDARD, SQUARE, 0, 0, 0)
    assert is_legal(board, STANDARD, SQUARE, 2, 0, 0)


def test_is_legal_rejects_bad_arguments(caplog):
    board = create_empty_board(STANDARD)
    with caplog.at_level(logging.ERROR, logger="board"):
        assert not is_legal(board, STANDARD, None, 0, 0, 0)
        assert not is_legal(board, STANDARD, LINE, 0, 0, 8)
        assert not is_legal(board, STANDARD, LINE, 0, 0, "0")
    assert len(caplog.records) == 3


def test_apply_then_remove_restores_board():
    board = create_empty_board(STANDARD)
    board[4][10] = "X"
    placement = Placement(TROMINO, 3, 2, 5)

    placed = apply_placement(board, placement, STANDARD)

    assert placed is not None
    assert placed is not board
    assert all(cell is None for row in board[:4] for cell in row)
    assert {(x, y) for y, row in enumerate(placed) for x, v in enumerate(row) if v == "F"} == set(placement.cells())
    assert remove_placement(placed, placement) == board


def test_apply_rejects_overlap_and_leaves_board_untouched():
    board = create_empty_board(STANDARD)
    first = apply_placement(board, Placement(SQUARE, 0, 0, 0), STANDARD)
    snapshot = [list(row) for row in first]

    assert apply_placement(first, Placement(LINE, 1, 1, 0), STANDARD) is None
    assert apply_placement(first, Placement(LINE, 9, 0, 0), STANDARD) is None
    assert first == snapshot


def test_apply_never_writes_blocked_cells():
    board = create_empty_board(CROSS)

    assert apply_placement(board, Placement(SQUARE, 0, 0, 0), CROSS) is None
    assert apply_solution(board, [Placement(SQUARE, 1, 1, 0), Placement(LINE, 0, 0, 0)], CROSS) is None
    assert board == create_empty_board(CROSS)
    check_board(board, CROSS)


def test_placement_stores_orientation_index():
    placement = Placement(LINE, 0, 0, Orientation(1))

    assert placement.orientation == 1
    assert placement == Placement(LINE, 0, 0, 1)
    assert placement.rotation == 1
    assert not placement.flipped
    assert placement.cells() == ((0, 0), (0, 1), (0, 2), (0, 3))

    board = apply_placement(create_empty_board(STANDARD), placement, STANDARD)
    assert [piece_at(board, 0, y) for y in range(4)] == ["J"] * 4
    assert remove_placement(board, placement) == create_empty_board(STANDARD)


def test_apply_and_remove_reject_malformed_placements(caplog):
    board = create_empty_board(STANDARD)
    with caplog.at_level(logging.ERROR, logger="board"):
        assert apply_placement(board, None, STANDARD) is None
        assert apply_placement(board, Placement(None, 0, 0, 0), STANDARD) is None
        assert remove_placement(board, Placement(SQUARE, 0, 0, 9)) is None
    assert len(caplog.records) == 3


def test_remove_requires_ownership():
    board = apply_placement(create_empty_board(STANDARD), Placement(SQUARE, 0, 0, 0), STANDARD)
    assert remove_placement(board, Placement(SQUARE, 1, 0, 0)) is None
    assert remove_placement(board, Placement(LINE, 0, 0, 0)) is None


def test_footprint_follows_orientation():
    assert footprint(LINE, 2, 1, 1) == ((2, 1), (2, 2), (2, 3), (2, 4))
    assert footprint(LINE, 2, 1, Orientation(1)) == footprint(LINE, 2, 1, 1)
    with pytest.raises(ValueError):
        footprint(LINE, 0, 0, 8)


def test_move_piece_lifts_previous_copy():
    board = apply_placement(create_empty_board(STANDARD), Placement(SQUARE, 0, 0, 0), STANDARD)

    moved = move_piece(board, STANDARD, Placement(SQUARE, 1, 1, 0))

    assert moved is not None
    assert piece_at(moved, 0, 0) is None
    assert piece_at(moved, 2, 2) == "K"
    assert move_piece(board, STANDARD, Placement(SQUARE, 10, 0, 0)) is None


def test_board_queries():
    board = apply_solution(
        create_empty_board(STANDARD),
        [Placement(SQUARE, 0, 0, 0), Placement(LINE, 2, 0, 0)],
        STANDARD,
    )
    assert placed_piece_names(board) == {"K", "J"}
    assert piece_at(board, 5, 0) == "J"
    assert piece_at(board, 11, 0) is None
    assert empty_cells(board, STANDARD)[0] == (6, 0)
    assert len(empty_cells(board, STANDARD)) == 47
    assert not is_board_complete(board, STANDARD)
    assert placed_piece_names(remove_piece(board, "J")) == {"K"}


def test_apply_solution_rejects_conflicts():
    board = create_empty_board(STANDARD)
    assert apply_solution(board, [Placement(SQUARE, 0, 0, 0), Placement(SQUARE, 1, 1, 0)], STANDARD) is None


def test_board_complete_and_text():
    tiny = Layout.from_strings("tiny", ["##", "##", "#."])
    board = apply_placement(create_empty_board(tiny), Placement(SQUARE, 0, 0, 0), tiny)
    assert board_to_text(board, tiny) == "KK\nKK\n. "
    board[2][0] = "Z"
    assert is_board_complete(board, tiny)


def test_check_board_rejects_mismatch():
    with pytest.raises(BoardMismatchError):
        check_board(create_empty_board(CROSS), STANDARD)
    board = create_empty_board(CROSS)
    board[0][0] = "K"
    with pytest.raises(BoardMismatchError):
        check_board(board, CROSS)


def test_layout_lookup_and_validation():
    assert get_layout("standard") is STANDARD
    assert get_layout("Pyramid").cell_count == 25
    assert get_layout("Diamond").cell_count == 25
    assert CROSS.cell_count == 13
    with pytest.raises(KeyError):
        get_layout("Hexagon")
    with pytest.raises(ValueError):
        Layout("bad", 2, 2, ((True, True),))
