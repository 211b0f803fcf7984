#!/usr/bin/env python3
"""
Evaluate the TicTacToe search strategies.

Runs the strategy against a random opponent and against a reference
strategy, then checks both on every reachable position.

Usage:
    python eval.py
    python eval.py --strategy alphabeta --reference minimax --games 200
    python eval.py --all-states-full       # no symmetry reduction (slow)
"""

import sys
import json
import random
import argparse
from dataclasses import asdict
from pathlib import Path

import numpy as np
import pandas as pd
import torch
from tqdm.auto import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from ttt_search import (
    EvalConfig,
    GameState,
    Piece,
    get_strategy,
    eval_vs_random,
    eval_head_to_head,
    eval_strategy_agreement_all_states,
    optimal_policy,
)


def set_seed(seed: int):
    """Set random seeds for reproducibility."""
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


def main():
    parser = argparse.ArgumentParser(description="Evaluate TicTacToe search strategies")
    parser.add_argument("--strategy", type=str, default="alphabeta", help="Strategy under test")
    parser.add_argument("--reference", type=str, default="minimax", help="Reference strategy")
    parser.add_argument("--games", type=int, default=100, help="Games vs random")
    parser.add_argument("--depth", type=int, default=9, help="Search depth in plies")
    parser.add_argument("--all-states-full", action="store_true",
                        help="Check all 4520 positions instead of one per symmetry class")
    parser.add_argument("--skip-all-states", action="store_true", help="Skip the all-states check")
    parser.add_argument("--run-name", type=str, default="ttt_eval", help="Run name for saving")
    parser.add_argument("--save-dir", type=str, default="runs", help="Save directory")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")

    args = parser.parse_args()

    if args.games < 1:
        parser.error("--games must be at least 1")

    # Config
    config = EvalConfig(
        seed=args.seed,
        games=args.games,
        depth=args.depth,
        strategy=args.strategy,
        reference=args.reference,
        canonical=not args.all_states_full,
        save_dir=args.save_dir,
        run_name=args.run_name,
    )

    try:
        strategy = get_strategy(config.strategy)
        reference = get_strategy(config.reference)
    except ValueError as e:
        parser.error(str(e))

    set_seed(config.seed)

    # Create save directory
    run_dir = Path(config.save_dir) / config.run_name
    try:
        run_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        parser.error(f"cannot create {run_dir}: {e}")

    # Save config
    with open(run_dir / "config.json", "w") as f:
        json.dump(asdict(config), f, indent=2)

    print(f"Strategy: {strategy!r} | Reference: {reference!r} | Depth: {config.depth}")
    results = {"strategy": config.strategy, "reference": config.reference, "depth": config.depth}

    # Opening
    print("\n=== Opening ===")
    pi, v = optimal_policy(GameState(), Piece.X, strategy, config.depth)
    opening = [s for s in range(9) if pi[s] > 0]
    print(f"  Empty board value: {v.item():+.0f}")
    print(f"  Optimal first moves: {opening}")
    results["opening_value"] = float(v.item())

    # vs Random
    print(f"\n=== vs Random ({config.games} games) ===")
    w, d, l = eval_vs_random(strategy, config.games, config.depth, seed=config.seed, progress=True)
    tqdm.write(f"  Wins:   {w:.2%}")
    tqdm.write(f"  Draws:  {d:.2%}")
    tqdm.write(f"  Losses: {l:.2%}")
    results.update({"random_w": w, "random_d": d, "random_l": l})

    # vs Reference
    print(f"\n=== vs {config.reference} ===")
    h2h = eval_head_to_head(strategy, reference, games=2, depth=config.depth)
    print(f"  {h2h['first_w']:.0%} W / {h2h['draws']:.0%} D / {h2h['second_w']:.0%} L")
    results.update({"h2h_w": h2h["first_w"], "h2h_d": h2h["draws"], "h2h_l": h2h["second_w"]})

    # All states
    if not args.skip_all_states:
        label = "symmetry classes" if config.canonical else "positions"
        print(f"\n=== All reachable {label} ===")
        agree = eval_strategy_agreement_all_states(
            reference, strategy,
            depth=config.depth,
            canonical=config.canonical,
            progress=True,
        )
        tqdm.write(f"  States:        {agree['n_states']}")
        tqdm.write(f"  Value agree:   {agree['value_agree_rate']:.2%}")
        tqdm.write(f"  Same slot:     {agree['same_slot_rate']:.2%}")
        tqdm.write(f"  Optimal slot:  {agree['opt_slot_rate']:.2%}")
        tqdm.write(f"  Leaves:        {agree['cand_leaves']:,} vs {agree['ref_leaves']:,} "
                   f"({agree['leaf_ratio']:.3f})")
        tqdm.write(f"  More leaves:   {agree['cand_more_leaves']}")
        for k, v in agree.items():
            if not k.startswith("_"):
                results[f"all_{k}"] = v

        pd.DataFrame(agree["_rows"]).to_csv(run_dir / "states.csv", index=False)

    pd.DataFrame([results]).to_csv(run_dir / "results.csv", index=False)
    print(f"\n✓ All outputs saved to: {run_dir}")


if __name__ == "__main__":
    main()
