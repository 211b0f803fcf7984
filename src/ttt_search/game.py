"""
TicTacToe game rules and state management.

Board representation: 3x3 grid of Piece or None (empty), stored row-major.

Slots are numbered left-to-right, top-to-bottom:

     0 | 1 | 2
    ---+---+---
     3 | 4 | 5
    ---+---+---
     6 | 7 | 8

so that row(slot) = slot // 3 and col(slot) = slot % 3.
"""

import enum
import numbers
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple


class Piece(enum.Enum):
    """The two sides. X always moves first."""
    X = "X"
    O = "O"

    @property
    def other(self) -> "Piece":
        return Piece.O if self is Piece.X else Piece.X


# Winning lines (rows, columns, diagonals)
WIN_LINES = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),              # diagonals
]

ALL_SLOTS = tuple(range(9))


def slot_row(slot: int) -> int:
    return slot // 3


def slot_col(slot: int) -> int:
    return slot % 3


def slot_index(row: int, col: int) -> int:
    """Convert (row, col) to flat slot index."""
    return row * 3 + col


def _is_slot(slot) -> bool:
    if isinstance(slot, bool) or not isinstance(slot, numbers.Integral):
        return False
    return 0 <= slot < 9


def _empty_cells() -> List[List[Optional[Piece]]]:
    return [[None] * 3 for _ in range(3)]


@dataclass
class GameState:
    """
    Mutable game state.

    All mutation goes through place() and reset(). Search code works on
    snapshot() copies and never touches the caller's instance.
    """
    cells: List[List[Optional[Piece]]] = field(default_factory=_empty_cells)
    available: Set[int] = field(default_factory=lambda: set(ALL_SLOTS))
    turn: Piece = Piece.X  # Side whose piece goes down next
    over: bool = False
    won_by: Optional[Piece] = None

    @classmethod
    def from_moves(cls, moves: Iterable[int]) -> "GameState":
        """Replay slots on a fresh board. Rejected moves are skipped."""
        state = cls()
        for slot in moves:
            state.place(slot)
        return state

    def place(self, slot: int) -> bool:
        """
        Place the current turn's piece on a slot.

        Returns:
            False (and changes nothing) if the game is over or the slot is
            not available, True otherwise.
        """
        if not _is_slot(slot):
            return False
        slot = int(slot)
        if self.over or slot not in self.available:
            return False

        self.available.discard(slot)
        self.cells[slot_row(slot)][slot_col(slot)] = self.turn
        if not self.available:
            self.over = True

        if self.winning_line_exists():
            self.over = True
            self.won_by = self.turn

        # Flips even after the final move; search reads the post-move turn.
        self.turn = self.turn.other
        return True

    def winning_line_exists(self) -> bool:
        """Check for three in a row of the current turn's piece."""
        for line in WIN_LINES:
            if all(self.piece_at(s) is self.turn for s in line):
                return True
        return False

    def legal_moves(self) -> FrozenSet[int]:
        """Return the empty slots (read-only)."""
        return frozenset(self.available)

    def piece_at(self, slot: int) -> Optional[Piece]:
        """Piece on a slot, None when empty or not a slot in 0..8."""
        if not _is_slot(slot):
            return None
        slot = int(slot)
        return self.cells[slot_row(slot)][slot_col(slot)]

    def is_over(self) -> bool:
        return self.over

    def winner(self) -> Optional[Piece]:
        """Winning piece, or None on a draw or an unfinished game."""
        return self.won_by

    def reset(self):
        """Restore the empty-board state."""
        for row in self.cells:
            for c in range(3):
                row[c] = None
        self.available.clear()
        self.available.update(ALL_SLOTS)
        self.turn = Piece.X
        self.won_by = None
        self.over = False

    def snapshot(self) -> "GameState":
        """Independent deep copy."""
        return GameState(
            cells=[row[:] for row in self.cells],
            available=set(self.available),
            turn=self.turn,
            over=self.over,
            won_by=self.won_by,
        )

    def rows(self) -> Tuple[Tuple[Optional[Piece], ...], ...]:
        return tuple(tuple(row) for row in self.cells)

    def flat(self) -> Tuple[Optional[Piece], ...]:
        """Cells in slot order."""
        return tuple(self.piece_at(s) for s in ALL_SLOTS)

    def moves_played(self) -> int:
        return 9 - len(self.available)

    def __str__(self) -> str:
        lines = []
        for r, row in enumerate(self.cells):
            lines.append(" " + " | ".join(p.value if p else " " for p in row) + " ")
            if r < 2:
                lines.append("---+---+---")
        return "\n".join(lines)
