"""
Game session: owns the live GameState and fetches the automated reply.

This is the seam a front end talks to. It turns input into slot indices
(row * 3 + col), calls play_and_reply(), and draws whatever it likes.
"""

from typing import List, Optional

from .game import GameState, Piece
from .search import DEFAULT_DEPTH, SearchStrategy


class GameSession:
    """
    One game between a human and (optionally) a search strategy.

    In single-player mode the strategy plays ai_piece and human moves are
    refused while it is ai_piece's turn. In two-player mode every move is
    a human move and reply() does nothing.
    """

    def __init__(
        self,
        strategy: SearchStrategy,
        ai_piece: Piece = Piece.O,
        single_player: bool = True,
        depth: int = DEFAULT_DEPTH,
    ):
        self.strategy = strategy
        self.ai_piece = ai_piece
        self.single_player = single_player
        self.depth = depth
        self.state = GameState()
        self.history: List[int] = []

    @property
    def ai_to_move(self) -> bool:
        return (
            self.single_player
            and not self.state.is_over()
            and self.state.turn is self.ai_piece
        )

    def play(self, slot: int) -> bool:
        """Apply a human move. Returns False if it was refused."""
        if self.ai_to_move or not self.state.place(slot):
            return False
        self.history.append(int(slot))
        return True

    def reply(self) -> Optional[int]:
        """Let the strategy move if it is its turn. Returns the slot played."""
        if not self.ai_to_move:
            return None
        slot = self.strategy.best_move(self.state, self.ai_piece, self.depth)
        if slot is None or not self.state.place(slot):
            return None
        self.history.append(slot)
        return slot

    def play_and_reply(self, slot: int) -> Optional[int]:
        """Human move followed by the automated reply, if any."""
        if not self.play(slot):
            return None
        return self.reply()

    def reset(self):
        self.state.reset()
        self.history.clear()
