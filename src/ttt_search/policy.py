"""
Tensor views of a position.

Per-slot search values and the uniform policy over optimal moves, as [9]
tensors indexed by slot.
"""

from typing import Optional, Tuple

import torch

from .game import ALL_SLOTS, GameState, Piece
from .alphabeta import AlphaBeta
from .search import DEFAULT_DEPTH, SearchStrategy, leaf_score


def legal_move_mask(state: GameState) -> torch.BoolTensor:
    """Return [9] boolean mask of legal moves."""
    mask = torch.zeros(9, dtype=torch.bool)
    if state.is_over():
        return mask
    for slot in state.legal_moves():
        mask[slot] = True
    return mask


def move_values(
    state: GameState,
    perspective: Piece,
    strategy: Optional[SearchStrategy] = None,
    max_depth: int = DEFAULT_DEPTH,
) -> torch.Tensor:
    """
    Value of every legal move from perspective's side.

    Each move is applied to a snapshot and the resulting position is
    searched with max_depth - 1 plies left.

    Returns:
        [9] float tensor, nan for illegal slots
    """
    strategy = strategy or AlphaBeta()
    values = torch.full((9,), float("nan"), dtype=torch.float32)
    if state.is_over():
        return values

    for slot in ALL_SLOTS:
        if slot not in state.available:
            continue
        values[slot] = float(strategy.move_value(state, slot, perspective, max_depth))
    return values


def optimal_policy(
    state: GameState,
    perspective: Piece,
    strategy: Optional[SearchStrategy] = None,
    max_depth: int = DEFAULT_DEPTH,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Compute optimal targets (policy and value).

    Optimal means best for the side to move: the maximum of move_values
    when perspective is to move, the minimum otherwise.

    Returns:
        pi_star: [9] tensor with uniform distribution over optimal moves
        v_star: scalar tensor in {-1, 0, +1}
    """
    values = move_values(state, perspective, strategy, max_depth)
    pi = torch.zeros(9, dtype=torch.float32)
    legal = ~torch.isnan(values)
    if not legal.any():
        return pi, torch.tensor(float(leaf_score(state, perspective)), dtype=torch.float32)

    if state.turn is perspective:
        v = values[legal].max()
    else:
        v = values[legal].min()
    best = legal & (values == v)
    pi[best] = 1.0 / int(best.sum().item())

    return pi, v.clone()
