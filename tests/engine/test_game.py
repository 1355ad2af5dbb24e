"""High-level game container tests."""

import random

import pytest
from broadside.engine.coordinate import Coordinate
from broadside.engine.game import DEFAULT_FLEET, BattleshipGame, Player
from broadside.engine.ship import Direction, Ship


def _sink_everything(game: BattleshipGame, side: Player) -> None:
    board = game.board(side)
    for ship in board.ships:
        for cell in ship.occupied_cells():
            board.fire(cell)


def test_board_lookup_by_index_or_player() -> None:
    game = BattleshipGame()
    assert game.board(0) is game.board(Player.HUMAN)
    assert game.board(1) is game.board(Player.COMPUTER)
    assert game.board(0) is not game.board(1)
    with pytest.raises(ValueError):
        game.board(2)


def test_default_fleet_and_size() -> None:
    game = BattleshipGame()
    assert game.fleet == DEFAULT_FLEET == (5, 4, 3, 3, 2)
    board = game.board(Player.HUMAN)
    assert (board.width, board.height) == (10, 10)


def test_player_opponent() -> None:
    assert Player.HUMAN.opponent() is Player.COMPUTER
    assert Player.COMPUTER.opponent() is Player.HUMAN


def test_setup_computer_places_full_fleet() -> None:
    game = BattleshipGame()
    game.setup_computer(random.Random(7))
    ships = game.board(Player.COMPUTER).ships
    assert sorted(ship.length for ship in ships) == sorted(DEFAULT_FLEET)
    assert game.board(Player.HUMAN).ships == []


def test_game_ends_when_either_side_is_sunk() -> None:
    game = BattleshipGame()
    game.board(Player.HUMAN).add_ship(Ship(Coordinate(1, 1), Direction.HORIZONTAL, 2))
    game.setup_computer(random.Random(3))
    assert not game.ended()
    assert game.winner() is None

    _sink_everything(game, Player.COMPUTER)
    assert game.ended()
    assert game.winner() is Player.HUMAN


def test_computer_wins_when_human_fleet_sunk() -> None:
    game = BattleshipGame()
    game.board(Player.HUMAN).random_placement(game.fleet, random.Random(1))
    game.setup_computer(random.Random(2))

    _sink_everything(game, Player.HUMAN)
    assert game.ended()
    assert game.winner() is Player.COMPUTER


def test_setup_computer_rejects_oversized_fleet() -> None:
    game = BattleshipGame(width=4, height=4, fleet=(4, 4, 4, 4, 4))
    with pytest.raises(ValueError):
        game.setup_computer(random.Random(0))
    assert game.board(Player.COMPUTER).ships == []
