"""Single-player board management for the Broadside engine."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from broadside.telemetry import get_meter, get_tracer

from .coordinate import Coordinate
from .errors import (
    AlreadyShotError,
    CollisionError,
    OutOfBoundsError,
    OutOfRangeError,
    PlacementError,
)
from .ship import Direction, Ship

logger = logging.getLogger(__name__)
tracer = get_tracer("broadside.engine.board")
meter = get_meter("broadside.engine.board")

PLACEMENT_COUNTER = meter.create_counter(
    "broadside_engine_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

SHOT_COUNTER = meter.create_counter(
    "broadside_engine_shots",
    unit="1",
    description="Shots received by a board",
)

MAX_PLACEMENT_ATTEMPTS = 1000
MAX_LAYOUT_ATTEMPTS = 100


class ShotOutcome(Enum):
    """Result of a shot that the board accepted."""

    HIT = "hit"
    MISS = "miss"


class CellState(Enum):
    """What a renderer should show for a single cell."""

    EMPTY = "empty"
    MISS = "miss"
    HIT = "hit"
    SHIP = "ship"


@dataclass
class Board:
    """One player's fleet and the shots fired at it."""

    width: int = 10
    height: int = 10
    ships: list[Ship] = field(default_factory=list)
    # Insertion order is the chronological shot history.
    shots: dict[Coordinate, ShotOutcome] = field(default_factory=dict)
    owner: str = "unknown"

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive.")

    def in_bounds(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 1 <= coord.column <= self.width and 1 <= coord.row <= self.height

    def placement_error(self, ship: Ship) -> PlacementError | None:
        """Return the most specific reason ``ship`` cannot be placed, if any."""
        out_of_bounds = not all(self.in_bounds(cell) for cell in ship.occupied_cells())
        collides = any(ship.collides_with(existing) for existing in self.ships)
        if out_of_bounds:
            return OutOfBoundsError(ship)
        if collides:
            return CollisionError(ship)
        return None

    def can_place(self, ship: Ship) -> bool:
        return self.placement_error(ship) is None

    def add_ship(self, ship: Ship) -> None:
        """Add ``ship`` to the board or raise the reason it does not fit."""
        with tracer.start_as_current_span("board.add_ship") as span:
            span.set_attribute("ship.length", ship.length)
            span.set_attribute("ship.direction", ship.direction.value)
            span.set_attribute("ship.origin.column", ship.origin.column)
            span.set_attribute("ship.origin.row", ship.origin.row)
            span.set_attribute("board.owner", self.owner)
            error = self.placement_error(ship)
            if error is not None:
                PLACEMENT_COUNTER.add(1, attributes={"result": error.reason, "owner": self.owner})
                span.set_attribute("placement.result", error.reason)
                logger.warning(
                    "ship_placement_failed",
                    extra={
                        "owner": self.owner,
                        "reason": error.reason,
                        "length": ship.length,
                        "direction": ship.direction.name,
                        "column": ship.origin.column,
                        "row": ship.origin.row,
                    },
                )
                raise error

            self.ships.append(ship)
            PLACEMENT_COUNTER.add(1, attributes={"result": "success", "owner": self.owner})
            span.set_attribute("placement.result", "success")
            logger.info(
                "ship_placed",
                extra={
                    "owner": self.owner,
                    "length": ship.length,
                    "direction": ship.direction.name,
                    "column": ship.origin.column,
                    "row": ship.origin.row,
                },
            )

    def fire(self, target: Coordinate) -> ShotOutcome:
        """Register a shot at this board and return its outcome."""
        with tracer.start_as_current_span("board.fire") as span:
            span.set_attribute("shot.column", target.column)
            span.set_attribute("shot.row", target.row)
            span.set_attribute("board.owner", self.owner)
            if not self.in_bounds(target):
                logger.warning(
                    "shot_out_of_range",
                    extra={"column": target.column, "row": target.row, "owner": self.owner},
                )
                raise OutOfRangeError(target)
            if target in self.shots:
                logger.warning(
                    "shot_duplicate",
                    extra={"column": target.column, "row": target.row, "owner": self.owner},
                )
                raise AlreadyShotError(target)

            outcome = ShotOutcome.HIT if self.has_ship(target) else ShotOutcome.MISS
            self.shots[target] = outcome
            span.set_attribute("shot.outcome", outcome.value)
            SHOT_COUNTER.add(1, attributes={"outcome": outcome.value, "owner": self.owner})
            logger.info(
                f"shot_{outcome.value}",
                extra={"column": target.column, "row": target.row, "owner": self.owner},
            )
            return outcome

    def has_been_shot(self, target: Coordinate) -> bool:
        return target in self.shots

    def has_ship(self, target: Coordinate) -> bool:
        return self.ship_at(target) is not None

    def ship_at(self, target: Coordinate) -> Ship | None:
        """Return the ship occupying ``target``, if any."""
        for ship in self.ships:
            if ship.occupies(target):
                return ship
        return None

    def is_ship_sunk(self, ship: Ship) -> bool:
        """Determine whether every cell of ``ship`` has been shot."""
        return all(cell in self.shots for cell in ship.occupied_cells())

    def sunk_ship_at(self, target: Coordinate) -> bool:
        ship = self.ship_at(target)
        return ship is not None and self.is_ship_sunk(ship)

    def is_live_hit(self, target: Coordinate) -> bool:
        """A shot that landed on a ship which is still afloat."""
        if target not in self.shots:
            return False
        ship = self.ship_at(target)
        return ship is not None and not self.is_ship_sunk(ship)

    def is_game_over(self) -> bool:
        """Check whether every ship on the board is sunk.

        An empty board counts as over; place the fleet before asking.
        """
        return all(self.is_ship_sunk(ship) for ship in self.ships)

    def remaining_ships(self) -> list[Ship]:
        return [ship for ship in self.ships if not self.is_ship_sunk(ship)]

    def last_unresolved_hit(self) -> Coordinate | None:
        """Return the most recent hit whose ship has not been sunk yet.

        The shot history is scanned newest first, so earlier hits on ships
        that have since gone down are skipped.
        """
        for shot in reversed(self.shots):
            if self.is_live_hit(shot):
                return shot
        return None

    def unshot_coordinates(self) -> list[Coordinate]:
        """Return every in-bounds coordinate that has not been fired at."""
        return [
            Coordinate(column, row)
            for row in range(1, self.height + 1)
            for column in range(1, self.width + 1)
            if Coordinate(column, row) not in self.shots
        ]

    def cell_state(self, target: Coordinate, reveal_ships: bool = False) -> CellState:
        """Return what a renderer should draw at ``target``.

        Un-shot ship cells are only revealed when ``reveal_ships`` is set,
        i.e. when the board is shown to its owner.
        """
        outcome = self.shots.get(target)
        if outcome is ShotOutcome.HIT:
            return CellState.HIT
        if outcome is ShotOutcome.MISS:
            return CellState.MISS
        if reveal_ships and self.has_ship(target):
            return CellState.SHIP
        return CellState.EMPTY

    def random_placement(self, lengths: Iterable[int], rng: random.Random) -> None:
        """Replace the fleet with one ship per length at random positions.

        Raises ``ValueError`` when the fleet cannot be laid out; the board is
        left untouched in that case.
        """
        lengths = list(lengths)
        with tracer.start_as_current_span("board.random_placement") as span:
            span.set_attribute("board.owner", self.owner)
            for length in lengths:
                if length > max(self.width, self.height):
                    raise ValueError(f"A ship of length {length} cannot fit on this board.")
            if sum(lengths) > self.width * self.height:
                raise ValueError(f"A fleet of {sum(lengths)} cells cannot fit on this board.")

            for layout_attempt in range(1, MAX_LAYOUT_ATTEMPTS + 1):
                layout = self._random_layout(lengths, rng)
                if layout is not None:
                    break
                logger.debug(
                    "random_layout_retry",
                    extra={"attempt": layout_attempt, "owner": self.owner},
                )
            else:
                span.set_attribute("placement.result", "gave_up")
                raise ValueError(f"Could not lay out a fleet of {lengths} on this board.")

            self.ships.clear()
            self.shots.clear()
            for ship in layout:
                self.add_ship(ship)
            span.set_attribute("ships", len(self.ships))

    def _random_layout(self, lengths: list[int], rng: random.Random) -> list[Ship] | None:
        placed: list[Ship] = []
        for length in lengths:
            for _ in range(MAX_PLACEMENT_ATTEMPTS):
                candidate = Ship(
                    Coordinate(rng.randint(1, self.width), rng.randint(1, self.height)),
                    rng.choice(list(Direction)),
                    length,
                )
                if all(self.in_bounds(cell) for cell in candidate.occupied_cells()) and not any(
                    candidate.collides_with(ship) for ship in placed
                ):
                    placed.append(candidate)
                    break
            else:
                return None
        return placed
