"""Command-line driver for playing Broadside against the computer."""

from __future__ import annotations

import argparse
import logging
import random
import re
from typing import Sequence

from broadside import __version__
from broadside.ai import HuntTargetStrategy
from broadside.engine.board import Board, CellState, ShotOutcome
from broadside.engine.coordinate import Coordinate, row_index_from_letter, row_letter_from_index
from broadside.engine.errors import FireError, PlacementError
from broadside.engine.game import BattleshipGame, Player
from broadside.engine.ship import Direction, Ship
from broadside.telemetry import init_telemetry, load_telemetry_config, record_game_metric

logger = logging.getLogger(__name__)

CELL_SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.MISS: "o",
    CellState.HIT: "X",
    CellState.SHIP: "S",
}

_LETTER_FIRST = re.compile(r"^([A-Za-z])\s*,?\s*(\d+)$")
_NUMBER_FIRST = re.compile(r"^(\d+)\s*,?\s*([A-Za-z])$")


def _coordinate_from_input(text: str, board: Board) -> Coordinate:
    """Parse ``A5``, ``5A`` or ``5 A`` into a coordinate on ``board``."""
    cleaned = text.strip()
    if not cleaned:
        raise ValueError("Empty coordinate.")
    letter_first = _LETTER_FIRST.match(cleaned)
    number_first = _NUMBER_FIRST.match(cleaned)
    if letter_first:
        letter, column_text = letter_first.groups()
    elif number_first:
        column_text, letter = number_first.groups()
    else:
        raise ValueError("Use formats like A5 or '5 A'.")

    last_row = row_letter_from_index(board.height)
    row = row_index_from_letter(letter)
    column = int(column_text)
    if row > board.height:
        raise ValueError(f"Row must be between A and {last_row}.")
    if not 1 <= column <= board.width:
        raise ValueError(f"Column must be a number between 1 and {board.width}.")
    return Coordinate(column, row)


def _format_board(board: Board, show_ships: bool) -> str:
    header = "    " + " ".join(f"{column:>2}" for column in range(1, board.width + 1))
    rows = [header]
    for row in range(1, board.height + 1):
        symbols = [
            f"{CELL_SYMBOLS[board.cell_state(Coordinate(column, row), reveal_ships=show_ships)]:>2}"
            for column in range(1, board.width + 1)
        ]
        rows.append(f"{row_letter_from_index(row)} |" + " ".join(symbols))
    return "\n".join(rows)


def _describe_shot(shooter: str, coord: Coordinate, outcome: ShotOutcome, sunk: bool) -> str:
    if sunk:
        description = "hit and sank a ship!"
    elif outcome is ShotOutcome.HIT:
        description = "hit"
    else:
        description = "miss"
    return f"{shooter} fired at {coord.label}: {description}"


def _prompt_for_target(board: Board) -> tuple[Coordinate, ShotOutcome]:
    while True:
        raw = input("Enter target coordinate (e.g., A5) or 'q' to quit: ").strip()
        if raw.lower() == "q":
            raise SystemExit("Goodbye!")
        try:
            coord = _coordinate_from_input(raw, board)
        except ValueError as exc:
            print(f"Invalid input: {exc}")
            continue
        try:
            return coord, board.fire(coord)
        except FireError as exc:
            print(f"Couldn't fire there: {exc}")


def _prompt_direction(length: int) -> Direction:
    while True:
        raw = input(f"Place your ship of length {length}. Direction [H/V]: ").strip().upper()
        if raw in {"H", "HOR", "HORIZONTAL"}:
            return Direction.HORIZONTAL
        if raw in {"V", "VER", "VERTICAL"}:
            return Direction.VERTICAL
        print("Please enter H for horizontal or V for vertical.")


def _manual_ship_placement(board: Board, fleet: Sequence[int]) -> None:
    board.ships.clear()
    board.shots.clear()
    for length in fleet:
        while True:
            print("\nCurrent layout:")
            print(_format_board(board, show_ships=True))
            direction = _prompt_direction(length)
            start_raw = input("Enter starting coordinate (e.g., A1): ")
            try:
                start = _coordinate_from_input(start_raw, board)
            except ValueError as exc:
                print(f"Invalid coordinate: {exc}")
                continue
            try:
                board.add_ship(Ship(start, direction, length))
            except PlacementError as exc:
                print(f"{exc} Try again.")
                continue
            break


def _prompt_manual_setup() -> bool:
    while True:
        raw = input("Would you like to place your ships manually? [Y/n]: ").strip().lower()
        if raw in {"", "y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False
        print("Please answer with 'y' or 'n'.")


def play_game(seed: int | None = None, auto_place: bool | None = None) -> Player:
    """Run one interactive match and return the winner."""
    print("Welcome to Broadside!\n")
    rng = random.Random(seed)
    game = BattleshipGame()
    computer = HuntTargetStrategy(rng)
    human_board = game.board(Player.HUMAN)
    computer_board = game.board(Player.COMPUTER)

    print("Letting the computer place its fleet...")
    game.setup_computer(rng)

    if auto_place is None:
        auto_place = not _prompt_manual_setup()
    if auto_place:
        human_board.random_placement(game.fleet, rng)
        print("\nYour ships have been positioned automatically.")
    else:
        _manual_ship_placement(human_board, game.fleet)

    turns = 0
    while not game.ended():
        print("\nYour Board:")
        print(_format_board(human_board, show_ships=True))
        print("\nEnemy Waters:")
        print(_format_board(computer_board, show_ships=False))

        coord, outcome = _prompt_for_target(computer_board)
        turns += 1
        print(_describe_shot("You", coord, outcome, computer_board.sunk_ship_at(coord)))
        if game.ended():
            break

        result = computer.fire(human_board)
        print(_describe_shot("The computer", result.coordinate, result.outcome, result.sunk))

    winner = game.winner()
    if winner is None:
        raise RuntimeError("The game ended without a winner.")
    record_game_metric("broadside_games_completed_total", 1, {"winner": winner.name.lower()})
    logger.info("game_finished", extra={"winner": winner.name, "turns": turns})
    if winner is Player.HUMAN:
        print("\nCongratulations, you won!")
    else:
        print("\nThe computer won this time. Better luck next battle!")
    return winner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Broadside via the CLI.")
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--auto-place",
        action="store_true",
        default=None,
        help="Place your fleet at random instead of being asked.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    init_telemetry(load_telemetry_config())
    play_game(seed=args.seed, auto_place=args.auto_place)


if __name__ == "__main__":
    main()
