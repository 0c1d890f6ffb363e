#!/usr/bin/env python3
"""
Minesweeper Levels - Main entry point.

Usage:
    python main.py play [--width W] [--height H] [--mines M]
    python main.py demo [--player {random,logic}] [--rounds N] [--delay S]
    python main.py evaluate [--player {random,logic}] [--rounds N]
    python main.py compare [--rounds N]
"""
import argparse
import logging
import os
import time

from engine import (
    BoardConfig,
    MinesweeperEnv,
    OutOfBoundsError,
    Session,
    render_board,
    status_line,
)
from evaluation import Evaluator
from players import PLAYERS

# Default board: 16x16 with 40 mines
BOARD_WIDTH = 16
BOARD_HEIGHT = 16
MINE_COUNT = 40

HELP_TEXT = "Commands: r X Y reveal | f X Y flag | n new game | q quit"


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


def board_config(args: argparse.Namespace) -> BoardConfig:
    """Build the board configuration from command line options."""
    return BoardConfig(width=args.width, height=args.height, num_mines=args.mines)


def show(session: Session) -> None:
    """Print the header and board for the current frame."""
    session.update_timer()
    print(status_line(session))
    print(render_board(session))


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    session = Session(board_config(args))
    print(HELP_TEXT)

    while True:
        show(session)
        if session.is_won:
            print("You cleared the board! 'n' for the next level.")
        elif session.is_lost:
            print("Boom. 'n' to start over at level 1.")

        try:
            command = input("> ").split()
        except EOFError:
            break
        if not command:
            continue

        verb = command[0].lower()
        if verb == "q":
            break
        if verb == "n":
            session.new_game()
            continue
        if verb not in ("r", "f") or len(command) != 3:
            print(HELP_TEXT)
            continue

        try:
            x, y = int(command[1]), int(command[2])
            if verb == "r":
                session.handle_primary_input(x, y)
            else:
                session.handle_secondary_input(x, y)
        except ValueError:
            print("Coordinates must be whole numbers")
        except OutOfBoundsError as error:
            print(error)


def demo(args: argparse.Namespace) -> None:
    """Watch a player go through successive rounds."""
    config = board_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    player = PLAYERS[args.player](config.width, config.height)

    wins = 0
    for round_number in range(args.rounds):
        observation, info = env.reset()
        player.reset()
        done = False
        step = 0

        while not done:
            action = player.select_action(observation, env.get_action_mask())
            observation, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Round {round_number + 1}/{args.rounds} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(status_line(env.session))
            print(env.render())
            time.sleep(args.delay)

        if info["game_state"] == "WON":
            wins += 1
            print("\n*** WIN! ***")
        else:
            print("\n*** LOST (hit mine) ***")
        time.sleep(1.0)

    print(f"\n=== Final: {wins}/{args.rounds} wins ===")


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a single player and print results."""
    config = board_config(args)
    player = PLAYERS[args.player](config.width, config.height)
    evaluator = Evaluator(config, num_rounds=args.rounds)

    print(f"\nEvaluating {args.player} over {args.rounds} rounds...")
    results = evaluator.evaluate(player)

    print(f"Results for {args.player}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")
    print(f"  Highest level: {results['max_level']}")


def compare(args: argparse.Namespace) -> None:
    """Compare all players."""
    config = board_config(args)
    players = {
        name: cls(config.width, config.height) for name, cls in PLAYERS.items()
    }
    results = Evaluator(config, num_rounds=args.rounds).compare(players)

    print("\n" + "=" * 56)
    print("Player Comparison Results")
    print("=" * 56)
    print(f"{'Player':<12} {'Win Rate':<12} {'Avg Reward':<12} {'Avg Steps':<10} {'Level':<6}")
    print("-" * 56)

    for name, metrics in results.items():
        print(
            f"{name:<12} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_reward']:>10.2f} "
            f"{metrics['avg_steps']:>10.1f} "
            f"{metrics['max_level']:>6}"
        )


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=BOARD_WIDTH, help="Board columns")
    parser.add_argument("--height", type=int, default=BOARD_HEIGHT, help="Board rows")
    parser.add_argument("--mines", type=int, default=MINE_COUNT, help="Starting mine count")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper Levels - play or watch the endless mode"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch a player")
    add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--player", choices=sorted(PLAYERS), default="logic", help="Player to watch"
    )
    demo_parser.add_argument(
        "--rounds", type=int, default=5, help="Number of rounds"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate a player")
    add_board_arguments(eval_parser)
    eval_parser.add_argument(
        "--player", choices=sorted(PLAYERS), default="logic", help="Player to evaluate"
    )
    eval_parser.add_argument(
        "--rounds", type=int, default=100, help="Number of rounds to play"
    )

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare all players")
    add_board_arguments(compare_parser)
    compare_parser.add_argument(
        "--rounds", type=int, default=100, help="Number of rounds per player"
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        board_config(args)
    except ValueError as error:
        parser.error(str(error))

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    elif args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)


if __name__ == "__main__":
    main()
