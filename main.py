#!/usr/bin/env python3
"""
Minesweeper - Console entry point.

Usage:
    python main.py play [--rows R] [--cols C] [--mines M] [--seed S]
    python main.py simulate [--games N] [--rows R] [--cols C] [--mines M]
"""
import argparse
import logging
import random
from typing import Optional, Tuple

import numpy as np

from src.minesweeper.board import Board, BoardConfig
from src.minesweeper.environment import MinesweeperEnv
from src.minesweeper.render import render_board


MENU = """Choose Action
_____________
(1) Left Click
(2) Right Click
(3) Left Right Hold
(4) Reset
"""


def read_int(prompt: str) -> Optional[int]:
    """Read an integer from the user, or None if it does not parse."""
    try:
        return int(input(prompt))
    except ValueError:
        return None


def positive_int(text: str) -> int:
    """argparse type for counts that must be at least one."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def read_config() -> BoardConfig:
    """Ask for rows, columns and mines until all three parse."""
    while True:
        rows = read_int("Number of rows: ")
        cols = read_int("Number of columns: ")
        mines = read_int("Number of bombs: ")
        print()
        if None not in (rows, cols, mines):
            return BoardConfig(rows, cols, mines)


def read_coordinate(board: Board) -> Tuple[int, int]:
    """Ask for a row and column until they name a cell on the board."""
    while True:
        row = read_int("Row: ")
        col = read_int("Col: ")
        print()
        if row is not None and col is not None and board.is_valid_coordinate(row, col):
            return row, col


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    if None in (args.rows, args.cols, args.mines):
        config = read_config()
    else:
        config = BoardConfig(args.rows, args.cols, args.mines)

    rng = random.Random(args.seed) if args.seed is not None else None
    board = Board(config, rng=rng)
    colour = not args.no_colour
    held = (0, 0)

    while board.is_running:
        print()
        print(render_board(board, colour=colour))
        print()

        if board.is_held_down:
            input("Press enter to release buttons!")
            board.hold_release(*held)
            continue

        print(MENU)
        option = input("Action: ").strip()
        while option not in ("1", "2", "3", "4"):
            option = input("Action: ").strip()
        print()

        if option == "1":
            board.reveal(*read_coordinate(board))
            print("Left Click!")
        elif option == "2":
            board.flag(*read_coordinate(board))
            print("Right Click!")
        elif option == "3":
            held = read_coordinate(board)
            board.hold_start(*held)
            print("Buttons held!")
        else:
            board.reset()
            print("Game reset")

    print()
    print(render_board(board, colour=colour))
    print()
    if board.is_won:
        print("Woohoo you won!")
    else:
        print("You lost, poor you!")


def simulate(args: argparse.Namespace) -> None:
    """Play random valid moves through the environment and tally results."""
    config = BoardConfig(args.rows, args.cols, args.mines)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)

    print(f"Simulating {args.games} games on {config.rows}x{config.cols} "
          f"with {config.num_mines} mines...")

    wins = 0
    total_steps = 0
    for game in range(args.games):
        env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        info = {}

        while not done:
            valid = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        total_steps += info["steps"]
        if info["game_state"] == "WON":
            wins += 1

    played = max(args.games, 1)
    print(f"Wins: {wins}/{args.games} ({wins / played:.1%})")
    print(f"Average steps: {total_steps / played:.1f}")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Minesweeper in the terminal"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log board events at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    play_parser = subparsers.add_parser("play", help="Play interactively")
    play_parser.add_argument("--rows", type=int, default=None, help="Board rows")
    play_parser.add_argument("--cols", type=int, default=None, help="Board columns")
    play_parser.add_argument("--mines", type=int, default=None, help="Number of mines")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument(
        "--no-colour",
        action="store_true",
        help="Disable ANSI colours",
    )

    sim_parser = subparsers.add_parser("simulate", help="Play random games")
    sim_parser.add_argument("--games", type=positive_int, default=100, help="Number of games")
    sim_parser.add_argument("--rows", type=int, default=9, help="Board rows")
    sim_parser.add_argument("--cols", type=int, default=9, help="Board columns")
    sim_parser.add_argument("--mines", type=int, default=10, help="Number of mines")
    sim_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        try:
            play(args)
        except (EOFError, KeyboardInterrupt):
            print("\nInput closed; quitting.")
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
