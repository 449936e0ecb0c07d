"""A chess player taking part in a tournament."""

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

from __future__ import annotations

from datetime import date
from typing import List, Optional, Set

from dateutil.relativedelta import relativedelta

from gambitstandings.models.enums import Tiebreaker
from gambitstandings.models.game import Game, Score
from gambitstandings.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class Player:
    """Represents a player in the tournament.

    The ``id`` is an opaque key that never changes for the lifetime of the
    player; every ``Game.opponent`` refers to it. ``pairing_number`` is the
    starting number shown to arbiters and written to reports, and can be
    reassigned freely.

    Attributes:
        id: Stable identifier
        name: Player's full name
        rating: Player's rating (0 when unrated)
        pairing_number: Starting number, 1-based
        rank: Positional starting rank, used when pairing by rank
        federation: Three-letter federation code
        fide_id: FIDE identifier, if known
        title: Chess title (GM, IM, ...)
        sex: Sex as recorded by the federation
        dob: Date of birth
        games: One ``Game`` per round, index = round - 1
        scores: One ``Score`` per round, parallel to games
        accelerations: Acceleration bonus per round, index = round - 1
        not_played: Rounds the player announced absence for
        withdrawn: First round the player no longer takes part in
        late: First round the player takes part in
        declared_points: Total score taken from an imported report
    """

    def __init__(
        self,
        name: str,
        rating: Optional[int] = None,
        pairing_number: int = 0,
        federation: Optional[str] = None,
        fide_id: Optional[int] = None,
        title: Optional[str] = None,
        sex: Optional[str] = None,
        date_of_birth: Optional[date] = None,
        player_id: Optional[str] = None,
        **kwargs,  # Accept additional arguments for flexibility
    ) -> None:
        self.id: str = (
            player_id
            if player_id is not None
            else generate_id(self.__class__.__name__)
        )

        # Core attributes
        self.name: str = name
        self.rating: int = rating if rating is not None else 0
        self.pairing_number: int = pairing_number
        self.rank: int = kwargs.pop("rank", pairing_number)

        # Federation metadata
        self.federation: Optional[str] = federation
        self.fide_id: Optional[int] = fide_id
        self.title: Optional[str] = title
        self.sex: Optional[str] = sex
        self.dob: Optional[date] = date_of_birth

        # Tournament history
        self.games: List[Game] = []
        self.scores: List[Score] = []
        self.accelerations: List[float] = []

        # Absences
        self.not_played: Set[int] = set()
        self.withdrawn: Optional[int] = kwargs.pop("withdrawn", None)
        self.late: Optional[int] = kwargs.pop("late", None)

        self.declared_points: Optional[float] = kwargs.pop("declared_points", None)

        if kwargs:
            logger.debug("Ignoring unknown player fields for %s: %s", name, kwargs)

    @property
    def age(self) -> Optional[int]:
        """Age in whole years, or None if no date of birth is known."""
        if self.dob is None:
            return None
        return relativedelta(date.today(), self.dob).years

    @property
    def points(self) -> float:
        """Score after the last recorded round."""
        return self.scores[-1].points if self.scores else 0.0

    def game_for_round(self, round_number: int) -> Optional[Game]:
        if 1 <= round_number <= len(self.games):
            return self.games[round_number - 1]
        return None

    def score_after(self, round_number: int) -> float:
        """Points after ``round_number``; 0 before the first round."""
        if round_number < 1 or not self.scores:
            return 0.0
        index = min(round_number, len(self.scores)) - 1
        return self.scores[index].points

    def tiebreaker_after(self, round_number: int, tiebreaker: Tiebreaker) -> float:
        if round_number < 1 or not self.scores:
            return 0.0
        index = min(round_number, len(self.scores)) - 1
        return self.scores[index].tiebreakers.get(tiebreaker, 0.0)

    def acceleration_for(self, round_number: int) -> float:
        if 1 <= round_number <= len(self.accelerations):
            return self.accelerations[round_number - 1]
        return 0.0

    def is_withdrawn_or_late(self, round_number: int) -> bool:
        if self.withdrawn is not None and round_number >= self.withdrawn:
            return True
        return self.late is not None and round_number < self.late

    def is_absent_from_round(self, round_number: int) -> bool:
        return round_number in self.not_played or self.is_withdrawn_or_late(
            round_number
        )

    def __repr__(self) -> str:
        return f"Player({self.pairing_number}: {self.name}, {self.rating})"
