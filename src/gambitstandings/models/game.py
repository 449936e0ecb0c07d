"""Per-round game and score records."""

# Gambit Standings
# Copyright (C) 2025  Gambit Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Dict, Optional

from gambitstandings.models.enums import (
    DRAWN_GAME_RESULTS,
    FORFEIT_RESULTS,
    WON_GAME_RESULTS,
    Colour,
    GameResult,
    Tiebreaker,
)


@dataclass
class Game:
    """One player's own record of a round.

    Both participants of a pairing hold their own ``Game``; the two copies
    must agree (see ``gambitstandings.tournament.consistency``).

    Attributes
    ----------
    round : int
        Round number, starting at 1.
    opponent : str or None
        Id of the opponent, ``None`` for byes and absences.
    colour : Colour
        Colour played, ``Colour.NONE`` when there was no game.
    result : GameResult
        Result from this player's point of view.
    """

    round: int
    opponent: Optional[str] = None
    colour: Colour = Colour.NONE
    result: GameResult = GameResult.UNASSIGNED

    @classmethod
    def default(cls, round_number: int) -> "Game":
        """Placeholder for a round the player has no record of."""
        return cls(round=round_number, result=GameResult.ZERO_POINT_BYE)

    @property
    def was_played(self) -> bool:
        """True for an actual game on the board (forfeits excluded)."""
        return (
            self.opponent is not None
            and self.colour is not Colour.NONE
            and self.result not in FORFEIT_RESULTS
        )

    @property
    def is_unplayed_win(self) -> bool:
        return (self.opponent is None and self.result in WON_GAME_RESULTS) or (
            self.result in (GameResult.FORFEIT_WIN, GameResult.FULL_POINT_BYE)
        )

    @property
    def is_unplayed_draw(self) -> bool:
        return (
            self.opponent is None and self.result in DRAWN_GAME_RESULTS
        ) or self.result is GameResult.HALF_POINT_BYE

    @property
    def participated_in_pairing(self) -> bool:
        """True when the pairing engine accounted for the player this round."""
        return (
            self.opponent is not None
            or self.result is GameResult.PAIRING_ALLOCATED_BYE
        )

    def copy(self) -> "Game":
        return Game(self.round, self.opponent, self.colour, self.result)


@dataclass
class Score:
    """Running score of a player after a round.

    ``points`` includes the acceleration bonus credited for this round;
    ``game_points`` is the same total without it.
    """

    round: int
    points: float = 0.0
    acceleration: float = 0.0
    tiebreakers: Dict[Tiebreaker, float] = field(default_factory=dict)

    @property
    def game_points(self) -> float:
        return self.points - self.acceleration
