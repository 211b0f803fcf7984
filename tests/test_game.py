"""Tests for the board model."""

import pytest

from ttt_search.game import GameState, Piece, slot_col, slot_index, slot_row

TOP_ROW_WIN = [0, 3, 1, 4, 2]              # X: 0 1 2, O: 3 4
DRAW = [0, 1, 2, 4, 3, 5, 7, 6, 8]         # X O X / X O O / O X X
LAST_MOVE_WIN = [0, 1, 2, 3, 4, 5, 7, 6, 8]  # X completes 0-4-8 on a full board


def observable(state):
    return state.rows(), state.turn, state.winner(), state.is_over(), state.legal_moves()


def test_fresh_state():
    state = GameState()
    assert state.turn is Piece.X
    assert not state.is_over()
    assert state.winner() is None
    assert state.legal_moves() == frozenset(range(9))
    assert all(state.piece_at(s) is None for s in range(9))


@pytest.mark.parametrize("slot,row,col", [(0, 0, 0), (2, 0, 2), (3, 1, 0), (5, 1, 2), (7, 2, 1), (8, 2, 2)])
def test_slot_layout(slot, row, col):
    assert slot_row(slot) == row
    assert slot_col(slot) == col
    assert slot_index(row, col) == slot

    state = GameState()
    state.place(slot)
    assert state.cells[row][col] is Piece.X


def test_piece_at_empty_iff_legal():
    state = GameState()
    for slot in [4, 0, 8, 2, 6]:
        state.place(slot)
        for s in range(9):
            assert (state.piece_at(s) is None) == (s in state.legal_moves())
        assert len(state.legal_moves()) + state.moves_played() == 9


def test_turn_alternates_on_success_only():
    state = GameState()
    assert state.place(4)
    assert state.turn is Piece.O
    assert not state.place(4)
    assert state.turn is Piece.O
    assert state.place(0)
    assert state.turn is Piece.X


@pytest.mark.parametrize("bad", [-1, 9, 100, "3", 1.0, None, True])
def test_invalid_slot_is_noop(bad):
    state = GameState.from_moves([4, 0])
    before = observable(state)
    assert state.place(bad) is False
    assert observable(state) == before


@pytest.mark.parametrize("bad", [-1, -9, 9, 100, "3", 1.0, None, True])
def test_piece_at_outside_board_is_empty(bad):
    # Slot 8 holds X, so -1 must not wrap around to it
    state = GameState.from_moves([4, 0, 8])
    assert state.piece_at(bad) is None
    assert state.piece_at(8) is Piece.X


def test_occupied_slot_is_noop():
    state = GameState.from_moves([4, 0])
    before = observable(state)
    assert not state.place(0)
    assert not state.place(4)
    assert observable(state) == before


def test_top_row_win():
    state = GameState()
    for slot in TOP_ROW_WIN[:-1]:
        assert state.place(slot)
        assert not state.is_over()

    assert state.place(2)
    assert state.is_over()
    assert state.winner() is Piece.X
    # Turn still flips on the winning move
    assert state.turn is Piece.O


def test_no_moves_after_game_over():
    state = GameState.from_moves(TOP_ROW_WIN)
    before = observable(state)
    for slot in sorted(state.legal_moves()):
        assert not state.place(slot)
    assert observable(state) == before


def test_draw():
    state = GameState.from_moves(DRAW)
    assert state.is_over()
    assert state.winner() is None
    assert not state.legal_moves()
    assert state.turn is Piece.O


def test_win_on_full_board():
    state = GameState.from_moves(LAST_MOVE_WIN)
    assert state.is_over()
    assert state.winner() is Piece.X


def test_second_player_win():
    # O takes the middle column
    state = GameState.from_moves([0, 1, 2, 4, 8, 7])
    assert state.is_over()
    assert state.winner() is Piece.O
    assert state.turn is Piece.X


def test_winning_line_checks_current_turn_only():
    state = GameState.from_moves(TOP_ROW_WIN)
    # X owns the top row but it is O's turn now
    assert state.turn is Piece.O
    assert not state.winning_line_exists()


def test_reset_round_trip():
    moves = [4, 0, 8, 2, 1]
    state = GameState.from_moves(TOP_ROW_WIN)
    state.reset()
    assert state == GameState()

    for slot in moves:
        state.place(slot)
    assert observable(state) == observable(GameState.from_moves(moves))


def test_snapshot_is_independent():
    state = GameState.from_moves([4, 0])
    copy = state.snapshot()
    assert copy == state

    copy.place(8)
    assert state.piece_at(8) is None
    assert 8 in state.legal_moves()
    assert state.turn is Piece.X
    assert copy != state


def test_legal_moves_is_read_only_view():
    state = GameState()
    moves = state.legal_moves()
    with pytest.raises(AttributeError):
        moves.discard(0)
    assert 0 in state.legal_moves()


def test_str_layout():
    state = GameState.from_moves([0, 1])
    lines = str(state).splitlines()
    assert lines[0] == " X | O |   "
    assert lines[1] == "---+---+---"
    assert len(lines) == 5


def test_piece_other():
    assert Piece.X.other is Piece.O
    assert Piece.O.other is Piece.X
    assert Piece("O") is Piece.O
    with pytest.raises(ValueError):
        Piece("-")
