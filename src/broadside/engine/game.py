"""Two-player Broadside game container."""

from __future__ import annotations

import logging
import random
from enum import Enum

from broadside.telemetry import get_tracer

from .board import Board

logger = logging.getLogger(__name__)
tracer = get_tracer("broadside.engine.game")

DEFAULT_FLEET: tuple[int, ...] = (5, 4, 3, 3, 2)


class Player(Enum):
    """The two sides; the value is the index of the side's own board."""

    HUMAN = 0
    COMPUTER = 1

    def opponent(self) -> Player:
        """Return the opposing player."""
        return Player.COMPUTER if self is Player.HUMAN else Player.HUMAN


class BattleshipGame:
    """Owns both boards for the lifetime of a match.

    Each board holds its side's own ships and records the shots fired at it,
    so the human fires at ``board(Player.COMPUTER)`` and vice versa.
    """

    def __init__(
        self,
        width: int = 10,
        height: int = 10,
        fleet: tuple[int, ...] = DEFAULT_FLEET,
    ) -> None:
        self.fleet = fleet
        self.boards: dict[Player, Board] = {
            player: Board(width=width, height=height, owner=player.name.lower())
            for player in Player
        }

    def board(self, side: Player | int) -> Board:
        """Return the board of ``side`` (``0``/``HUMAN`` or ``1``/``COMPUTER``)."""
        return self.boards[Player(side)]

    def ended(self) -> bool:
        return any(board.is_game_over() for board in self.boards.values())

    def winner(self) -> Player | None:
        """Return the side whose opponent has no ships left, if any."""
        for player, board in self.boards.items():
            if board.is_game_over():
                return player.opponent()
        return None

    def setup_computer(self, rng: random.Random) -> None:
        """Randomly place the computer's fleet."""
        with tracer.start_as_current_span("game.setup_computer") as span:
            board = self.board(Player.COMPUTER)
            board.random_placement(self.fleet, rng)
            span.set_attribute("ships", len(board.ships))
            logger.info("computer_fleet_placed", extra={"ships": len(board.ships)})
