"""Hunt-and-target firing strategy for the computer player."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from broadside.engine.board import Board, ShotOutcome
from broadside.engine.coordinate import Coordinate
from broadside.engine.errors import BoardExhaustedError
from broadside.telemetry import get_meter, get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer("broadside.ai.targeting")
meter = get_meter("broadside.ai.targeting")

TARGETING_COUNTER = meter.create_counter(
    "broadside_targeting_shots",
    unit="1",
    description="Shots fired by the computer player",
)

# Probe order around a lead: right, left, down, up.
PROBE_DIRECTIONS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class TargetingMode(Enum):
    HUNT = "hunt"
    TARGET = "target"


@dataclass(frozen=True)
class TargetingResult:
    """What the computer fired at and what happened."""

    coordinate: Coordinate
    outcome: ShotOutcome
    sunk: bool
    mode: TargetingMode


class HuntTargetStrategy:
    """Random search until something is hit, then work around the hit.

    Nothing is remembered between turns: the current lead is recovered from
    :meth:`Board.last_unresolved_hit` every time, so the strategy always
    agrees with the board it is shooting at.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def choose(self, board: Board) -> tuple[Coordinate, TargetingMode]:
        """Pick the next coordinate to shoot without firing it."""
        lead = board.last_unresolved_hit()
        if lead is not None:
            candidates = self.target_candidates(board, lead)
            if candidates:
                return candidates[0], TargetingMode.TARGET
            logger.debug("targeting_lead_exhausted", extra={"column": lead.column, "row": lead.row})

        unshot = board.unshot_coordinates()
        if not unshot:
            raise BoardExhaustedError()
        return self.rng.choice(unshot), TargetingMode.HUNT

    def fire(self, board: Board) -> TargetingResult:
        """Choose a coordinate, fire at it and report the outcome."""
        with tracer.start_as_current_span("targeting.fire") as span:
            span.set_attribute("board.owner", board.owner)
            coordinate, mode = self.choose(board)
            outcome = board.fire(coordinate)
            sunk = outcome is ShotOutcome.HIT and board.sunk_ship_at(coordinate)

            span.set_attribute("targeting.mode", mode.value)
            span.set_attribute("shot.column", coordinate.column)
            span.set_attribute("shot.row", coordinate.row)
            span.set_attribute("shot.outcome", outcome.value)
            span.set_attribute("shot.sunk", sunk)
            TARGETING_COUNTER.add(1, attributes={"mode": mode.value, "outcome": outcome.value})
            logger.info(
                "targeting_fired",
                extra={
                    "mode": mode.value,
                    "column": coordinate.column,
                    "row": coordinate.row,
                    "outcome": outcome.value,
                    "sunk": sunk,
                },
            )
            return TargetingResult(coordinate, outcome, sunk, mode)

    def target_candidates(self, board: Board, lead: Coordinate) -> list[Coordinate]:
        """Return the legal follow-up shots around ``lead``, best first.

        When the neighbour opposite a probe direction is itself a live hit,
        the ship lies along that axis: the cells just past both ends of the
        run of hits come first. The four plain neighbours follow.
        """
        candidates: list[Coordinate] = []
        for dx, dy in PROBE_DIRECTIONS:
            if board.is_live_hit(lead.offset(-dx, -dy)):
                candidates.append(self._past_line(board, lead, dx, dy))
                candidates.append(self._past_line(board, lead, -dx, -dy))
        candidates.extend(lead.offset(dx, dy) for dx, dy in PROBE_DIRECTIONS)

        legal = [cell for cell in candidates if board.in_bounds(cell) and not board.has_been_shot(cell)]
        return list(dict.fromkeys(legal))

    @staticmethod
    def _past_line(board: Board, start: Coordinate, dx: int, dy: int) -> Coordinate:
        cell = start.offset(dx, dy)
        while board.is_live_hit(cell):
            cell = cell.offset(dx, dy)
        return cell
