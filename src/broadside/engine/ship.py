"""Ship domain model for the Broadside engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .coordinate import Coordinate


class Direction(Enum):
    """Axis along which a ship extends from its origin."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> tuple[int, int]:
        """Return the (dx, dy) delta between two consecutive ship cells."""
        if self is Direction.HORIZONTAL:
            return (1, 0)
        return (0, 1)


@dataclass(frozen=True)
class Ship:
    """A straight ship of fixed length anchored at ``origin``."""

    origin: Coordinate
    direction: Direction
    length: int

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"Ship length must be positive, got {self.length}.")

    def occupied_cells(self) -> list[Coordinate]:
        """Return the ordered list of coordinates occupied by this ship."""
        dx, dy = self.direction.step
        return [self.origin.offset(dx * index, dy * index) for index in range(self.length)]

    def occupies(self, target: Coordinate) -> bool:
        return target in self.occupied_cells()

    def collides_with(self, other: Ship) -> bool:
        """Return True if any coordinate overlaps with another ship."""
        return bool(set(self.occupied_cells()) & set(other.occupied_cells()))
