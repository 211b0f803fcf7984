"""
Evaluation functions.

Plays strategies against each other and against a random opponent, and
checks two strategies against each other on every reachable position.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from tqdm.auto import tqdm

from .game import GameState, Piece
from .search import DEFAULT_DEPTH, RandomMove, SearchStrategy
from .symmetries import canonical_key


@dataclass
class EvalConfig:
    """Evaluation configuration."""

    # Random seed
    seed: int = 0

    # Games per match
    games: int = 100

    # Search depth (plies)
    depth: int = DEFAULT_DEPTH

    # Strategy under test and the reference it is checked against
    strategy: str = "alphabeta"
    reference: str = "minimax"

    # Reduce the all-states check by board symmetry
    canonical: bool = True

    # Paths
    save_dir: str = "runs"
    run_name: str = "ttt_eval"


def _check_games(games: int):
    if games < 1:
        raise ValueError(f"games must be at least 1, got {games}")


def play_game(
    x_strategy: SearchStrategy,
    o_strategy: SearchStrategy,
    depth: int = DEFAULT_DEPTH,
) -> Tuple[Optional[Piece], List[int]]:
    """
    Play one game, each side searching for its own piece.

    Returns:
        (winner, moves) where winner is None for a draw
    """
    state = GameState()
    moves = []
    players = {Piece.X: x_strategy, Piece.O: o_strategy}

    while not state.is_over():
        side = state.turn
        slot = players[side].best_move(state, side, depth)
        state.place(slot)
        moves.append(slot)

    return state.winner(), moves


def eval_vs_random(
    strategy: SearchStrategy,
    games: int = 100,
    depth: int = DEFAULT_DEPTH,
    seed: int = 0,
    progress: bool = False,
) -> Tuple[float, float, float]:
    """
    Evaluate a strategy vs a random opponent, alternating first move.

    Returns:
        (win_rate, draw_rate, loss_rate)
    """
    _check_games(games)
    opponent = RandomMove(seed)
    wins = draws = losses = 0

    for g in tqdm(range(games), desc="vs random", disable=not progress):
        side = Piece.X if g % 2 == 0 else Piece.O
        if side is Piece.X:
            winner, _ = play_game(strategy, opponent, depth)
        else:
            winner, _ = play_game(opponent, strategy, depth)

        if winner is None:
            draws += 1
        elif winner is side:
            wins += 1
        else:
            losses += 1

    total = wins + draws + losses
    return wins / total, draws / total, losses / total


def eval_head_to_head(
    first: SearchStrategy,
    second: SearchStrategy,
    games: int = 2,
    depth: int = DEFAULT_DEPTH,
) -> Dict[str, float]:
    """
    Match two strategies, swapping sides every game.

    Returns:
        Dict with 'games', 'first_w', 'draws', 'second_w'
    """
    _check_games(games)
    first_w = draws = second_w = 0

    for g in range(games):
        if g % 2 == 0:
            winner, _ = play_game(first, second, depth)
            first_side = Piece.X
        else:
            winner, _ = play_game(second, first, depth)
            first_side = Piece.O

        if winner is None:
            draws += 1
        elif winner is first_side:
            first_w += 1
        else:
            second_w += 1

    total = first_w + draws + second_w
    return {
        "games": total,
        "first_w": first_w / total,
        "draws": draws / total,
        "second_w": second_w / total,
    }


def iter_reachable_states(canonical: bool = False) -> Iterator[GameState]:
    """
    Iterate over all reachable non-terminal states.

    Args:
        canonical: Yield one representative per symmetry class

    Yields:
        GameState copies, depth-first in ascending slot order
    """
    seen = set()

    def explore(state: GameState):
        key = canonical_key(state) if canonical else state.flat()
        if key in seen:
            return
        seen.add(key)
        if state.is_over():
            return

        yield state.snapshot()
        for slot in sorted(state.legal_moves()):
            child = state.snapshot()
            child.place(slot)
            yield from explore(child)

    yield from explore(GameState())


def eval_strategy_agreement_all_states(
    reference: SearchStrategy,
    candidate: SearchStrategy,
    depth: int = DEFAULT_DEPTH,
    canonical: bool = False,
    progress: bool = False,
) -> Dict[str, object]:
    """
    Compare two strategies on every reachable position, searching for
    the side to move.

    Returns:
        Dict with metrics and per-state rows (prefixed with '_')
    """
    n = 0
    value_agree = 0
    same_slot = 0
    opt_slot = 0
    legal_slot = 0
    more_leaves = 0
    ref_leaves = cand_leaves = 0
    ref_nodes = cand_nodes = 0
    rows = []

    states = iter_reachable_states(canonical=canonical)
    for state in tqdm(states, desc="all states", disable=not progress):
        side = state.turn
        ref = reference.search(state, side, depth)
        cand = candidate.search(state, side, depth)

        n += 1
        value_agree += int(ref.value == cand.value)
        same_slot += int(ref.slot == cand.slot)
        legal_slot += int(cand.slot in state.legal_moves())
        # Candidate's move scored by the reference search
        cand_slot_value = reference.move_value(state, cand.slot, side, depth)
        opt_slot += int(cand_slot_value == ref.value)
        more_leaves += int(cand.stats.leaves > ref.stats.leaves)
        ref_leaves += ref.stats.leaves
        cand_leaves += cand.stats.leaves
        ref_nodes += ref.stats.nodes
        cand_nodes += cand.stats.nodes

        rows.append({
            "moves_played": state.moves_played(),
            "side": side.value,
            "ref_value": ref.value,
            "cand_value": cand.value,
            "ref_slot": ref.slot,
            "cand_slot": cand.slot,
            "cand_slot_value": cand_slot_value,
            "ref_leaves": ref.stats.leaves,
            "cand_leaves": cand.stats.leaves,
        })

    return {
        "n_states": n,
        "value_agree_rate": value_agree / n,
        "same_slot_rate": same_slot / n,
        "legal_slot_rate": legal_slot / n,
        "opt_slot_rate": opt_slot / n,
        "cand_more_leaves": more_leaves,
        "ref_leaves": ref_leaves,
        "cand_leaves": cand_leaves,
        "ref_nodes": ref_nodes,
        "cand_nodes": cand_nodes,
        "leaf_ratio": cand_leaves / ref_leaves,
        "_rows": rows,
    }
