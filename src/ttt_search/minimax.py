"""
Exhaustive minimax search.

Every legal move is tried on a snapshot of the position and the game tree
is expanded down to terminal states or the depth limit.
"""

from typing import Optional, Tuple

from .game import GameState, Piece
from .search import SearchStats, SearchStrategy, leaf_score


class MiniMax(SearchStrategy):
    """
    Plain minimax over the full game tree.

    Nodes where the perspective side is about to move take the maximum of
    their children; nodes where the opponent moves take the minimum.
    """

    name = "minimax"

    def _search_root(self, state, perspective, depth, stats):
        return self._minimax(state, perspective, depth, stats)

    def _minimax(
        self,
        state: GameState,
        perspective: Piece,
        depth: int,
        stats: SearchStats,
    ) -> Tuple[Optional[int], int]:
        """
        Returns:
            (best_slot, value) where best_slot is None at a leaf
        """
        stats.nodes += 1
        if depth <= 0 or state.is_over():
            stats.leaves += 1
            return None, leaf_score(state, perspective)

        maximizing = state.turn is perspective
        best_slot = None
        best_v = -2 if maximizing else 2

        # Ascending order + strict comparison: lowest slot wins ties
        for slot in sorted(state.legal_moves()):
            child = state.snapshot()
            child.place(slot)

            _, v = self._minimax(child, perspective, depth - 1, stats)
            if (maximizing and v > best_v) or (not maximizing and v < best_v):
                best_v = v
                best_slot = slot

        return best_slot, best_v
