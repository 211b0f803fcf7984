"""
Search strategy interface shared by the move-selection algorithms.

A strategy is a stateless object mapping (state, perspective, depth) to a
slot. Callers pick the strategy they want; nothing is dispatched globally.
"""

import abc
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .game import GameState, Piece

# Deep enough to reach every terminal state from any position (9 plies max).
DEFAULT_DEPTH = 9


@dataclass
class SearchStats:
    """Counters collected during one search call."""
    nodes: int = 0   # every visited node, root included
    leaves: int = 0  # nodes scored by leaf_score


@dataclass
class SearchResult:
    slot: Optional[int]  # None when the root was already terminal
    value: int           # +1 / 0 / -1 from the perspective's side
    stats: SearchStats = field(default_factory=SearchStats)


def leaf_score(state: GameState, perspective: Piece) -> int:
    """
    Score a leaf from perspective's point of view.

    Returns:
        +1 if perspective won, -1 if the other piece won, 0 for a draw or
        a position cut off before it was decided.
    """
    winner = state.winner()
    if winner is None:
        return 0
    return 1 if winner is perspective else -1


class SearchStrategy(abc.ABC):
    """Base class for move selection."""

    name = "base"

    def search(
        self,
        state: GameState,
        perspective: Piece,
        max_depth: int = DEFAULT_DEPTH,
    ) -> SearchResult:
        """
        Pick a move for the position.

        Args:
            state: Position to search. Never modified.
            perspective: Side whose outcome is maximized
            max_depth: Plies to look ahead. The root is always expanded.

        Returns:
            SearchResult with the chosen slot, its value and node counters
        """
        stats = SearchStats()
        if state.is_over():
            stats.nodes = stats.leaves = 1
            return SearchResult(None, leaf_score(state, perspective), stats)
        slot, value = self._search_root(state, perspective, max(1, max_depth), stats)
        return SearchResult(slot, value, stats)

    def best_move(
        self,
        state: GameState,
        perspective: Piece,
        max_depth: int = DEFAULT_DEPTH,
    ) -> Optional[int]:
        return self.search(state, perspective, max_depth).slot

    def move_value(
        self,
        state: GameState,
        slot: int,
        perspective: Piece,
        max_depth: int = DEFAULT_DEPTH,
    ) -> int:
        """
        Value of playing slot, as seen from the root of a max_depth search.

        The child gets max_depth - 1 plies; a terminal child or one with no
        plies left is scored directly.
        """
        child = state.snapshot()
        child.place(slot)
        if child.is_over() or max_depth <= 1:
            return leaf_score(child, perspective)
        return self.search(child, perspective, max_depth - 1).value

    @abc.abstractmethod
    def _search_root(self, state, perspective, depth, stats):
        """Return (slot, value) for a non-terminal root."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RandomMove(SearchStrategy):
    """Uniformly random legal move. Used as a weak baseline opponent."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def _search_root(self, state, perspective, depth, stats):
        stats.nodes += 1
        moves = sorted(state.legal_moves())
        return int(self.rng.choice(moves)), 0


def get_strategy(name: str, **kwargs) -> SearchStrategy:
    """Build a strategy by name: 'minimax', 'alphabeta' or 'random'."""
    from .alphabeta import AlphaBeta
    from .minimax import MiniMax

    registry = {
        MiniMax.name: MiniMax,
        AlphaBeta.name: AlphaBeta,
        RandomMove.name: RandomMove,
    }
    key = name.strip().lower().replace("-", "")
    if key not in registry:
        raise ValueError(f"Unknown strategy {name!r}, expected one of {sorted(registry)}")
    return registry[key](**kwargs)
