"""
Selfish CLI - Command-line interface for the engine.

Usage:
    selfish simulate [--players N] [--seed S] [--games K]   Run random agents
    selfish play [--players N] [--seed S]                   Play against random agents
"""

import argparse
import sys

from .config import get_settings
from .utils.logging import configure_logging


def main(argv=None):
    """Main CLI entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Selfish - Space Edition simulation engine",
        prog="selfish",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    parser.add_argument("--json-logs", action="store_true", default=settings.json_logs, help="JSON log output")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run games between random agents")
    simulate_parser.add_argument("--players", type=int, default=settings.players, help="Number of players")
    simulate_parser.add_argument("--seed", type=int, default=settings.seed, help="Seed of the first game")
    simulate_parser.add_argument("--games", type=int, default=1, help="Number of games")
    simulate_parser.add_argument("--max-turns", type=int, default=settings.max_turns, help="Turn limit per game")
    simulate_parser.add_argument("--trace", action="store_true", help="Print every game event")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play against random agents")
    play_parser.add_argument("--players", type=int, default=settings.players, help="Number of players")
    play_parser.add_argument("--seed", type=int, default=settings.seed, help="Game seed")

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, json_format=args.json_logs)

    if args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "play":
        cmd_play(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args):
    """Run one or more games between random agents."""
    from .session import simulate

    wins: dict[int, int] = {}
    unfinished = 0
    for game_index in range(args.games):
        seed = None if args.seed is None else args.seed + game_index
        try:
            game, result = simulate(args.players, seed=seed, max_turns=args.max_turns)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

        if args.trace:
            for event in game.history:
                print(f"  {event.describe()}")

        if result.finished:
            wins[result.winner] = wins.get(result.winner, 0) + 1
            print(f"Game {game_index + 1} (seed {result.seed}): player {result.winner} won after {result.turns} turns")
        else:
            unfinished += 1
            print(f"Game {game_index + 1} (seed {result.seed}): stopped after {result.turns} turns")

    if args.games > 1:
        print("\nWins:")
        for player in sorted(wins):
            print(f"  player {player}: {wins[player]}")
        if unfinished:
            print(f"  unfinished: {unfinished}")


def cmd_play(args):
    """Seat a human as player 0 against random agents."""
    from .agents import InteractiveAgent, PlayerQuit
    from .engine_core import new_game
    from .session import GameLoop, random_agents

    try:
        game = new_game(args.players, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    agents = [InteractiveAgent()] + random_agents(game.seed, args.players)[1:]
    loop = GameLoop(game, agents)

    print(f"New game, seed {game.seed}. You are player 0.")
    seen = len(game.history)
    while not game.game_over:
        try:
            loop.play_turn()
        except PlayerQuit:
            print(f"\nGame abandoned. Replay it with --seed {game.seed}.")
            return
        for event in game.history[seen:]:
            print(f"  {event.describe()}")
        seen = len(game.history)

    if game.winner is not None and game.winner.index == 0:
        print("\nYou are the last one breathing. You win!")
    else:
        print(f"\nPlayer {game.winner} wins.")


if __name__ == "__main__":
    main()
