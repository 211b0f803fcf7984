"""
Alpha-beta pruned search.

Same tree, leaf scoring and depth semantics as MiniMax, but siblings are
skipped as soon as they can no longer change the result.
"""

import math
from typing import Optional, Tuple

from .game import GameState, Piece
from .search import SearchStats, SearchStrategy, leaf_score


class AlphaBeta(SearchStrategy):
    """
    Fail-hard alpha-beta search.

    alpha: best score the perspective side can already guarantee
    beta:  best score the opponent can already guarantee
    """

    name = "alphabeta"

    def _search_root(self, state, perspective, depth, stats):
        return self._alphabeta(state, perspective, -math.inf, math.inf, depth, stats)

    def _alphabeta(
        self,
        state: GameState,
        perspective: Piece,
        alpha: float,
        beta: float,
        depth: int,
        stats: SearchStats,
    ) -> Tuple[Optional[int], int]:
        """
        Returns:
            (best_slot, bound) where bound is alpha for perspective nodes and
            beta for opponent nodes
        """
        stats.nodes += 1
        if depth <= 0 or state.is_over():
            stats.leaves += 1
            return None, leaf_score(state, perspective)

        maximizing = state.turn is perspective
        best_slot = None

        for slot in sorted(state.legal_moves()):
            child = state.snapshot()
            child.place(slot)

            _, score = self._alphabeta(child, perspective, alpha, beta, depth - 1, stats)
            if maximizing and score > alpha:
                alpha = score
                best_slot = slot
            elif not maximizing and score < beta:
                beta = score
                best_slot = slot

            if alpha >= beta:
                break  # cutoff

        # Every non-terminal node has a child, so the bound is a real score here
        return best_slot, alpha if maximizing else beta
