"""
D4 symmetries of the board (8 transforms).

Rotations: 0°, 90°, 180°, 270°
Reflections: horizontal, vertical, main diagonal, anti-diagonal

Each transform is a permutation tensor mp with new_cells[i] = cells[mp[i]].
"""

from typing import List, Tuple

import torch

from .game import ALL_SLOTS, GameState, slot_col, slot_index, slot_row


def _build_symmetry_maps():
    """
    Build 8 permutation maps for D4 symmetries.

    Transform k sends the cell at (r, c) to (rt, ct), so mp is indexed by
    destination and holds the source slot. INV_MAPS below flips that to
    source -> destination for single slots.
    """
    maps = []
    for k in range(8):
        mp = [0] * 9
        for r in range(3):
            for c in range(3):
                # Apply transform k
                if k == 0:   rt, ct = r, c                # identity
                elif k == 1: rt, ct = c, 2 - r            # rotate 90
                elif k == 2: rt, ct = 2 - r, 2 - c        # rotate 180
                elif k == 3: rt, ct = 2 - c, r            # rotate 270
                elif k == 4: rt, ct = r, 2 - c            # reflect horizontal
                elif k == 5: rt, ct = 2 - r, c            # reflect vertical
                elif k == 6: rt, ct = c, r                # reflect main diag
                else:        rt, ct = 2 - c, 2 - r        # reflect anti-diag
                mp[slot_index(rt, ct)] = slot_index(r, c)
        maps.append(torch.tensor(mp, dtype=torch.long))
    return maps


# Pre-computed symmetry maps
SYM_MAPS = _build_symmetry_maps()

# Inverse permutations: slot s moves to INV_MAPS[k][s] under transform k
INV_MAPS = [torch.argsort(mp) for mp in SYM_MAPS]


def _check_sym_id(sym_id: int):
    if not 0 <= sym_id < len(SYM_MAPS):
        raise ValueError(f"sym_id must be in 0..7, got {sym_id}")


def apply_symmetry_slot(slot: int, sym_id: int) -> int:
    """Where a slot lands after applying transform sym_id."""
    _check_sym_id(sym_id)
    return int(INV_MAPS[sym_id][slot].item())


def apply_symmetry_state(state: GameState, sym_id: int) -> GameState:
    """
    Apply symmetry transform to a state.

    Returns:
        New GameState with permuted cells and the same turn, winner and
        game-over flag
    """
    _check_sym_id(sym_id)
    mp = SYM_MAPS[sym_id]
    out = state.snapshot()
    for i in ALL_SLOTS:
        src = int(mp[i].item())
        out.cells[slot_row(i)][slot_col(i)] = state.piece_at(src)
    out.available = {int(INV_MAPS[sym_id][s].item()) for s in state.available}
    return out


def get_all_symmetries(state: GameState) -> List[GameState]:
    """Return all 8 symmetric versions of a state."""
    return [apply_symmetry_state(state, k) for k in range(8)]


def _cell_key(state: GameState) -> Tuple[str, ...]:
    return tuple(p.value if p else "." for p in state.flat())


def canonical_key(state: GameState) -> Tuple[str, ...]:
    """Smallest cell tuple over the 8 transforms, identical for symmetric states."""
    return min(_cell_key(s) for s in get_all_symmetries(state))
