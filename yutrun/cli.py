"""
Yut Run CLI - Command-line interface for the engine.

Usage:
    yutrun new [--seed S]                               Start a game, print the snapshot
    yutrun simulate [--seed S] [--games N] [--policy P] Auto-play games with a bot
    yutrun replay <script.json>                         Replay recorded actions

Replay scripts look like:
    {"seed": "abc", "actions": [{"type": "THROW_STICKS"}, ...]}
"""

import argparse
import json
import sys

from .config import YUTRUN_LOG_LEVEL, configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Yut Run - Single-player yut race engine",
        prog="yutrun",
    )
    parser.add_argument("--log-level", default=YUTRUN_LOG_LEVEL, help="Log level for stderr")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # New command
    new_parser = subparsers.add_parser("new", help="Start a new game")
    new_parser.add_argument("--seed", help="Seed, up to 10 characters")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Auto-play games with a bot")
    simulate_parser.add_argument("--seed", help="Seed for the first game")
    simulate_parser.add_argument("--games", type=int, default=1, help="Number of games")
    simulate_parser.add_argument(
        "--policy", choices=["random", "first"], default="random", help="Bot policy"
    )

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Replay a recorded game")
    replay_parser.add_argument("script", help="Path to replay script (JSON)")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "new":
        cmd_new(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "replay":
        cmd_replay(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_new(args):
    """Start a game and print its snapshot."""
    from .api import GameService, ErrorResponse, NewGameRequest

    service = GameService()
    response = service.new_game(NewGameRequest(seed=args.seed))
    if isinstance(response, ErrorResponse):
        print(f"Error: {response.error}")
        sys.exit(1)

    print(f"Seed: {response.seed}")
    print(response.model_dump_json(indent=2))


def cmd_simulate(args):
    """Auto-play games and report turns and artifacts per game."""
    from pydantic import ValidationError
    from .bots import make_policy, play_game
    from .engine_core import GameConfig

    try:
        config = GameConfig(seed=args.seed)
    except ValidationError as e:
        print(f"Error: {e.errors()[0]['msg']}")
        sys.exit(1)

    for game in range(args.games):
        policy = make_policy(args.policy, seed=game)
        game_config = config if game == 0 else config.model_copy(update={"seed": None})
        record = play_game(policy, game_config)
        artifacts = ", ".join(a.name for a in record.final_state.artifacts) or "none"
        status = "finished" if record.finished else "unfinished"
        print(f"Game {game + 1} [{record.seed}]: {status} in {record.turns} turns; artifacts: {artifacts}")


def cmd_replay(args):
    """Replay a recorded script and print the final snapshot as JSON."""
    from .api import GameService, ErrorResponse, NewGameRequest
    from .engine_core import Action, YutError

    try:
        with open(args.script, "r", encoding="utf-8") as f:
            script = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.script}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.script}: {e}")
        sys.exit(1)

    service = GameService()
    response = service.new_game(NewGameRequest(seed=script.get("seed")))
    for step, entry in enumerate(script.get("actions", []), start=1):
        if isinstance(response, ErrorResponse):
            break
        try:
            action = Action.from_dict(entry)
        except YutError as e:
            print(f"Error at step {step}: {e.message}")
            sys.exit(1)
        response = service.apply(action)

    if isinstance(response, ErrorResponse):
        print(f"Error: {response.error} ({response.error_code.value})")
        sys.exit(1)

    print(response.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
