"""
ttt_search - Perfect TicTacToe play by exhaustive game-tree search.

This package implements the board model and two interchangeable search
strategies (plain minimax and alpha-beta pruning) behind one interface.
"""

from .game import GameState, Piece, WIN_LINES, slot_row, slot_col, slot_index
from .search import (
    DEFAULT_DEPTH,
    SearchStrategy,
    SearchResult,
    SearchStats,
    RandomMove,
    leaf_score,
    get_strategy,
)
from .minimax import MiniMax
from .alphabeta import AlphaBeta
from .symmetries import apply_symmetry_slot, apply_symmetry_state, canonical_key, SYM_MAPS
from .policy import legal_move_mask, move_values, optimal_policy
from .session import GameSession
from .eval import (
    EvalConfig,
    play_game,
    eval_vs_random,
    eval_head_to_head,
    iter_reachable_states,
    eval_strategy_agreement_all_states,
)

__version__ = "0.1.0"
__all__ = [
    "GameState",
    "Piece",
    "WIN_LINES",
    "slot_row",
    "slot_col",
    "slot_index",
    "DEFAULT_DEPTH",
    "SearchStrategy",
    "SearchResult",
    "SearchStats",
    "RandomMove",
    "leaf_score",
    "get_strategy",
    "MiniMax",
    "AlphaBeta",
    "apply_symmetry_slot",
    "apply_symmetry_state",
    "canonical_key",
    "SYM_MAPS",
    "legal_move_mask",
    "move_values",
    "optimal_policy",
    "GameSession",
    "EvalConfig",
    "play_game",
    "eval_vs_random",
    "eval_head_to_head",
    "iter_reachable_states",
    "eval_strategy_agreement_all_states",
]
