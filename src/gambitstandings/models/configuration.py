"""Tournament configuration: point schedule and tiebreak order."""

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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Sequence

from gambitstandings.constants import (
    DRAW_SCORE,
    FORFEIT_LOSS_SCORE,
    LOSS_SCORE,
    PAIRING_ALLOCATED_BYE_SCORE,
    WIN_SCORE,
    ZERO_POINT_BYE_SCORE,
)
from gambitstandings.models.enums import Colour, Tiebreaker

_POINT_FIELDS = (
    "points_for_win",
    "points_for_draw",
    "points_for_loss",
    "points_for_zero_point_bye",
    "points_for_forfeit_loss",
    "points_for_pairing_allocated_bye",
)


@dataclass
class Configuration:
    """Tournament configuration settings.

    Attributes
    ----------
    match_by_rank : bool
        Pair by positional rank instead of starting number.
    initial_colour : Colour
        Colour of the top board's first player in round 1.
    expected_rounds : int
        Number of rounds the tournament is planned for (0 if unknown).
    points_for_win, points_for_draw, points_for_loss : float
        Points for played games. Forfeit wins, unrated wins and full-point
        byes score as a win; unrated draws and half-point byes as a draw.
    points_for_zero_point_bye, points_for_forfeit_loss : float
        Points for a zero-point bye and for a forfeit loss.
    points_for_pairing_allocated_bye : float
        Points for the bye assigned by the pairing engine.
    tiebreakers : list of Tiebreaker
        Tiebreaks in priority order.
    """

    match_by_rank: bool = False
    initial_colour: Colour = Colour.NONE
    expected_rounds: int = 0
    points_for_win: float = WIN_SCORE
    points_for_draw: float = DRAW_SCORE
    points_for_loss: float = LOSS_SCORE
    points_for_zero_point_bye: float = ZERO_POINT_BYE_SCORE
    points_for_forfeit_loss: float = FORFEIT_LOSS_SCORE
    points_for_pairing_allocated_bye: float = PAIRING_ALLOCATED_BYE_SCORE
    tiebreakers: List[Tiebreaker] = field(default_factory=list)

    def with_tiebreakers(self, tiebreakers: Sequence[Tiebreaker]) -> "Configuration":
        """Copy of this configuration with a different tiebreak order."""
        return replace(self, tiebreakers=list(tiebreakers))

    def point_schedule_differs(self, other: "Configuration") -> bool:
        return any(getattr(self, name) != getattr(other, name) for name in _POINT_FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        data: Dict[str, Any] = {name: getattr(self, name) for name in _POINT_FIELDS}
        data.update(
            {
                "match_by_rank": self.match_by_rank,
                "initial_colour": self.initial_colour.value,
                "expected_rounds": self.expected_rounds,
                "tiebreakers": [tb.value for tb in self.tiebreakers],
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Configuration":
        """Deserialize configuration from dictionary."""
        defaults = cls()
        points = {
            name: float(data.get(name, getattr(defaults, name)))
            for name in _POINT_FIELDS
        }
        return cls(
            match_by_rank=data.get("match_by_rank", False),
            initial_colour=Colour(data.get("initial_colour", Colour.NONE.value)),
            expected_rounds=data.get("expected_rounds", 0),
            tiebreakers=[Tiebreaker(key) for key in data.get("tiebreakers", [])],
            **points,
        )
