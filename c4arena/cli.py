#!/usr/bin/env python3
"""
Harness entry point for scripted bot games.

  c4arena match smart-random enhanced-smart --games 10
  c4arena tournament --rounds 5
  c4arena hint 3,3,4 --level 2
"""

import argparse
import random
import sys
from typing import List, Optional

from c4arena.core.config import configure_logging
from c4arena.engine.bot import BotEngine
from c4arena.engine.game import GameState
from c4arena.engine.hints import get_hints, strategic_evaluation
from c4arena.models.enums import BotPersonality, HintLevel
from c4arena.services.game_runner import GameRunner
from c4arena.services.tournament_service import TournamentService

PERSONALITY_NAMES = [p.value for p in BotPersonality]


def _parse_moves(text: str) -> List[int]:
    if not text.strip():
        return []
    try:
        return [int(part) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Moves must be comma-separated column numbers, got '{text}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="c4arena", description="Connect Four bot arena")
    parser.add_argument("--log-level", default=None, help="Overrides C4ARENA_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    match = sub.add_parser("match", help="Play a series between two personalities")
    match.add_argument("player_1", choices=PERSONALITY_NAMES)
    match.add_argument("player_2", choices=PERSONALITY_NAMES)
    match.add_argument("--games", type=int, default=1)
    match.add_argument("--seed", type=int, default=None)
    match.add_argument("--show-board", action="store_true")

    tournament = sub.add_parser("tournament", help="Round-robin between personalities")
    tournament.add_argument("--bots", nargs="+", choices=PERSONALITY_NAMES, default=PERSONALITY_NAMES)
    tournament.add_argument("--rounds", type=int, default=1)
    tournament.add_argument("--seed", type=int, default=None)

    hint = sub.add_parser("hint", help="Hints and bot suggestions for a position")
    hint.add_argument("moves", type=_parse_moves, help="Columns played so far, e.g. 3,3,4")
    hint.add_argument("--level", type=int, choices=[int(h) for h in HintLevel], default=int(HintLevel.TRAP_AVOIDANCE))
    return parser


def run_match(args) -> int:
    runner = GameRunner(BotEngine(rng=random.Random(args.seed)))
    results = {1: 0, 2: 0, None: 0}
    for _ in range(args.games):
        summary = runner.play(args.player_1, args.player_2)
        results[summary.winner] += 1
        if args.show_board:
            state = GameState.from_moves([m.column for m in summary.history])
            print(state.get_visual_board())
            print()

    print(f"{args.player_1} (P1): {results[1]} wins")
    print(f"{args.player_2} (P2): {results[2]} wins")
    print(f"Draws: {results[None]}")
    return 0


def run_tournament(args) -> int:
    report = TournamentService(seed=args.seed).run(args.bots, rounds=args.rounds)
    print(f"{'BOT':<18} | {'RATING':>7} | {'W':>5} | {'L':>5} | {'D':>5}")
    print("-" * 52)
    for s in report.standings:
        print(f"{s.personality.value:<18} | {s.rating:>7.1f} | {s.wins:>5} | {s.losses:>5} | {s.draws:>5}")
    print("-" * 52)
    print(f"Games: {report.total_games}, draws: {report.draws}, "
          f"first player wins: {report.first_player_wins}, second player wins: {report.second_player_wins}")
    return 0


def run_hint(args) -> int:
    try:
        state = GameState.from_moves(args.moves)
    except ValueError as e:
        print(f"Invalid position: {e}", file=sys.stderr)
        return 1

    print(state.get_visual_board())
    if state.is_terminal():
        print("Game over.")
        return 0

    report = get_hints(state, HintLevel(args.level))
    if report.required_moves:
        print(f"Required moves: {report.required_moves}")
    if report.trapped:
        print("Trapped: every column hands the opponent a win.")
    for h in report.opportunities + report.threats + report.suggestions:
        print(f"[{h.priority}] {h.message}")

    evaluation = strategic_evaluation(state)
    if evaluation.recommended_move is not None:
        print(f"Strategic pick: column {evaluation.recommended_move} ({evaluation.confidence} confidence)")

    engine = BotEngine(rng=random.Random(0))
    for personality in BotPersonality:
        decision = engine.decide(state, personality)
        print(f"{personality.value:<18} -> {decision.column} ({decision.stage})")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    if args.command == "match":
        return run_match(args)
    if args.command == "tournament":
        return run_tournament(args)
    return run_hint(args)


if __name__ == "__main__":
    sys.exit(main())
