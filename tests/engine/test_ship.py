"""Tests for Ship domain logic."""

import pytest
from broadside.engine.coordinate import Coordinate
from broadside.engine.ship import Direction, Ship


def test_ship_cells_horizontal() -> None:
    ship = Ship(Coordinate(1, 1), Direction.HORIZONTAL, 3)
    assert ship.occupied_cells() == [Coordinate(1, 1), Coordinate(2, 1), Coordinate(3, 1)]


def test_ship_cells_vertical() -> None:
    ship = Ship(Coordinate(4, 2), Direction.VERTICAL, 2)
    assert ship.occupied_cells() == [Coordinate(4, 2), Coordinate(4, 3)]


def test_occupies() -> None:
    ship = Ship(Coordinate(4, 2), Direction.VERTICAL, 3)
    assert ship.occupies(Coordinate(4, 4))
    assert not ship.occupies(Coordinate(4, 5))
    assert not ship.occupies(Coordinate(5, 2))


def test_collision_is_symmetric() -> None:
    horizontal = Ship(Coordinate(1, 1), Direction.HORIZONTAL, 3)
    crossing = Ship(Coordinate(2, 1), Direction.VERTICAL, 2)
    parallel = Ship(Coordinate(1, 2), Direction.HORIZONTAL, 5)
    assert horizontal.collides_with(crossing)
    assert crossing.collides_with(horizontal)
    assert not horizontal.collides_with(parallel)
    assert not parallel.collides_with(horizontal)


def test_ship_length_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Ship(Coordinate(1, 1), Direction.HORIZONTAL, 0)
