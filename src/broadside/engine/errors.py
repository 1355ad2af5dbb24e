"""Recoverable errors raised by the Broadside engine.

All of them derive from :class:`ValueError`: they signal a bad move or a bad
placement that the caller is expected to report and retry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .coordinate import Coordinate
    from .ship import Ship


class PlacementError(ValueError):
    """A ship could not be added to a board."""

    reason = "invalid_placement"

    def __init__(self, ship: Ship, message: str) -> None:
        super().__init__(message)
        self.ship = ship


class OutOfBoundsError(PlacementError):
    reason = "out_of_bounds"

    def __init__(self, ship: Ship) -> None:
        super().__init__(ship, "The ship does not fit on the board.")


class CollisionError(PlacementError):
    reason = "collision"

    def __init__(self, ship: Ship) -> None:
        super().__init__(ship, "The ship overlaps another ship.")


class FireError(ValueError):
    """A shot could not be taken."""

    reason = "invalid_shot"


class OutOfRangeError(FireError):
    reason = "out_of_range"

    def __init__(self, target: Coordinate) -> None:
        super().__init__(f"({target.column}, {target.row}) is off the board.")
        self.target = target


class AlreadyShotError(FireError):
    reason = "already_shot"

    def __init__(self, target: Coordinate) -> None:
        super().__init__(f"({target.column}, {target.row}) has already been shot.")
        self.target = target


class BoardExhaustedError(FireError):
    reason = "board_exhausted"

    def __init__(self) -> None:
        super().__init__("Every cell on the board has already been shot.")
