"""Tests for minimax and alpha-beta move selection."""

import pytest

from ttt_search import (
    AlphaBeta,
    GameState,
    MiniMax,
    Piece,
    RandomMove,
    get_strategy,
    iter_reachable_states,
    leaf_score,
)

STRATEGIES = [MiniMax(), AlphaBeta()]
FORCED_BLOCK = [0, 4, 1]  # X threatens 0-1-2, O to move


def test_leaf_score():
    x_won = GameState.from_moves([0, 3, 1, 4, 2])
    assert leaf_score(x_won, Piece.X) == 1
    assert leaf_score(x_won, Piece.O) == -1
    assert leaf_score(GameState(), Piece.X) == 0
    assert leaf_score(GameState.from_moves([0, 1, 2, 4, 3, 5, 7, 6, 8]), Piece.O) == 0


@pytest.mark.parametrize("strategy", STRATEGIES, ids=["minimax", "alphabeta"])
def test_forced_block(strategy):
    state = GameState.from_moves(FORCED_BLOCK)
    result = strategy.search(state, Piece.O)
    assert result.slot == 2
    assert result.value == 0


@pytest.mark.parametrize("strategy", STRATEGIES, ids=["minimax", "alphabeta"])
def test_takes_immediate_win(strategy):
    state = GameState.from_moves([0, 3, 1, 4])
    result = strategy.search(state, Piece.X)
    assert result.slot == 2
    assert result.value == 1


@pytest.mark.parametrize("strategy", STRATEGIES, ids=["minimax", "alphabeta"])
def test_depth_one_sees_only_immediate_win(strategy):
    # O wins at 5 right away; slot 2 also wins but only two plies later
    state = GameState.from_moves([0, 3, 1, 4, 8])
    assert strategy.search(state, Piece.O, max_depth=1).slot == 5
    assert strategy.search(state, Piece.O, max_depth=0).slot == 5
    full = strategy.search(state, Piece.O)
    assert full.value == 1
    assert full.slot == 2  # lowest of the winning slots


@pytest.mark.parametrize("strategy", STRATEGIES, ids=["minimax", "alphabeta"])
def test_opponent_perspective_root(strategy):
    # O to move but searched from X's side: root minimizes for X
    state = GameState.from_moves(FORCED_BLOCK)
    result = strategy.search(state, Piece.X)
    assert result.slot == 2
    assert result.value == 0


@pytest.mark.parametrize("strategy", STRATEGIES, ids=["minimax", "alphabeta"])
def test_empty_board_is_a_draw(strategy):
    result = strategy.search(GameState(), Piece.X)
    assert result.value == 0
    assert result.slot == 0  # every opening draws, lowest slot wins the tie


@pytest.mark.parametrize("strategy", STRATEGIES, ids=["minimax", "alphabeta"])
def test_terminal_state(strategy):
    state = GameState.from_moves([0, 3, 1, 4, 2])
    result = strategy.search(state, Piece.X)
    assert result.slot is None
    assert result.value == 1
    assert strategy.best_move(state, Piece.O) is None


@pytest.mark.parametrize("strategy", STRATEGIES, ids=["minimax", "alphabeta"])
def test_search_does_not_touch_state(strategy):
    state = GameState.from_moves([4, 0])
    before = state.snapshot()
    strategy.search(state, Piece.X)
    assert state == before


def test_alphabeta_visits_fewer_leaves_from_empty_board():
    mm = MiniMax().search(GameState(), Piece.X)
    ab = AlphaBeta().search(GameState(), Piece.X)
    assert ab.value == mm.value
    assert ab.stats.leaves < mm.stats.leaves
    assert ab.stats.nodes < mm.stats.nodes
    # Every complete game is a minimax leaf
    assert mm.stats.leaves == 255168


@pytest.mark.parametrize("depth", [2, 9])
def test_strategies_agree_on_value(depth):
    mm, ab = MiniMax(), AlphaBeta()
    for state in iter_reachable_states(canonical=True):
        if state.moves_played() < 4:
            continue
        for side in Piece:
            r_mm = mm.search(state, side, depth)
            r_ab = ab.search(state, side, depth)
            assert r_ab.value == r_mm.value
            assert r_ab.stats.leaves <= r_mm.stats.leaves
            assert r_ab.slot in state.legal_moves()
            assert r_mm.slot in state.legal_moves()


def test_random_move_is_legal_and_seeded():
    state = GameState.from_moves([4, 0, 8])
    r1, r2 = RandomMove(seed=7), RandomMove(seed=7)
    a = [r1.best_move(state, Piece.O) for _ in range(5)]
    b = [r2.best_move(state, Piece.O) for _ in range(5)]
    assert a == b
    assert all(s in state.legal_moves() for s in a)


@pytest.mark.parametrize("name,cls", [
    ("minimax", MiniMax),
    ("alphabeta", AlphaBeta),
    ("Alpha-Beta", AlphaBeta),
    ("random", RandomMove),
])
def test_get_strategy(name, cls):
    assert isinstance(get_strategy(name), cls)


def test_get_strategy_unknown():
    with pytest.raises(ValueError):
        get_strategy("mcts")


@pytest.mark.parametrize("strategy", STRATEGIES, ids=["minimax", "alphabeta"])
def test_move_value(strategy):
    state = GameState.from_moves(FORCED_BLOCK)
    assert strategy.move_value(state, 2, Piece.O) == 0
    assert strategy.move_value(state, 3, Piece.O) == -1
    # Depth 1: the child is scored as a leaf
    assert strategy.move_value(state, 3, Piece.O, max_depth=1) == 0
    assert state == GameState.from_moves(FORCED_BLOCK)
