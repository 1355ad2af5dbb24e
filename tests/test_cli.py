"""Tests for the command-line driver."""

from __future__ import annotations

import pytest
from broadside import cli
from broadside.engine.board import Board, ShotOutcome
from broadside.engine.coordinate import Coordinate
from broadside.engine.game import Player
from broadside.engine.ship import Direction, Ship


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("A5", Coordinate(5, 1)),
        ("c10", Coordinate(10, 3)),
        ("5 A", Coordinate(5, 1)),
        ("7,j", Coordinate(7, 10)),
        ("  B 3 ", Coordinate(3, 2)),
    ],
)
def test_coordinate_from_input(text: str, expected: Coordinate) -> None:
    assert cli._coordinate_from_input(text, Board()) == expected


@pytest.mark.parametrize("text", ["", "Z", "K1", "A11", "A0", "55", "hello", "1 2"])
def test_coordinate_from_input_rejects_bad_text(text: str) -> None:
    with pytest.raises(ValueError):
        cli._coordinate_from_input(text, Board())


def test_format_board_hides_enemy_ships() -> None:
    board = Board(width=3, height=2)
    board.add_ship(Ship(Coordinate(1, 1), Direction.HORIZONTAL, 2))
    board.fire(Coordinate(1, 1))
    board.fire(Coordinate(3, 2))

    own = cli._format_board(board, show_ships=True).splitlines()
    enemy = cli._format_board(board, show_ships=False).splitlines()
    assert own[0] == "     1  2  3"
    assert own[1] == "A | X  S  ."
    assert enemy[1] == "A | X  .  ."
    assert enemy[2] == "B | .  .  o"


def test_describe_shot() -> None:
    coord = Coordinate(4, 2)
    assert cli._describe_shot("You", coord, ShotOutcome.MISS, False) == "You fired at B4: miss"
    assert cli._describe_shot("You", coord, ShotOutcome.HIT, False) == "You fired at B4: hit"
    assert "sank" in cli._describe_shot("You", coord, ShotOutcome.HIT, True)


def test_manual_placement_retries_after_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    answers = iter(["H", "A1", "V", "A2", "x", "V", "B1"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))
    board = Board()

    cli._manual_ship_placement(board, [3, 2])

    assert board.ships == [
        Ship(Coordinate(1, 1), Direction.HORIZONTAL, 3),
        Ship(Coordinate(1, 2), Direction.VERTICAL, 2),
    ]
    output = capsys.readouterr().out
    assert "overlaps" in output
    assert "Please enter H" in output


def test_play_game_runs_to_a_winner(monkeypatch: pytest.MonkeyPatch) -> None:
    targets = iter(
        [f"{letter}{column}" for letter in "ABCDEFGHIJ" for column in range(1, 11)]
    )
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(targets))

    winner = cli.play_game(seed=11, auto_place=True)
    assert winner in {Player.HUMAN, Player.COMPUTER}


def test_main_parses_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: dict[str, object] = {}
    monkeypatch.setattr(cli, "init_telemetry", lambda config: config)
    monkeypatch.setattr(
        cli, "play_game", lambda seed, auto_place: calls.update(seed=seed, auto_place=auto_place)
    )

    cli.main(["--seed", "3", "--auto-place"])
    assert calls == {"seed": 3, "auto_place": True}


def test_play_game_raises_when_no_winner(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli.BattleshipGame, "ended", lambda self: True)
    monkeypatch.setattr(cli.BattleshipGame, "winner", lambda self: None)

    with pytest.raises(RuntimeError):
        cli.play_game(seed=1, auto_place=True)
