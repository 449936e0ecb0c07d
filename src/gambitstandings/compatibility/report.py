"""Standings rows formatted for tournament report exporters.

Exporters write fixed-width columns: ratings have four digits, scores at most
``99.9`` with one decimal, and each tiebreak its own number of decimals.
"""

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
from typing import Dict, List, Optional

from gambitstandings.constants import MAX_EXPORT_POINTS, MAX_EXPORT_RATING
from gambitstandings.models import Tiebreaker
from gambitstandings.tournament.tournament import Tournament


def format_points(points: float) -> str:
    return f"{min(points, MAX_EXPORT_POINTS):>4.1f}"


def format_rating(rating: int) -> str:
    return f"{max(0, min(rating, MAX_EXPORT_RATING)):>4}"


def format_tiebreak(tiebreaker: Tiebreaker, value: float) -> str:
    return f"{value:.{tiebreaker.decimal_places}f}"


@dataclass
class StandingsRow:
    rank: int
    pairing_number: int
    name: str
    rating: str
    points: str
    tiebreakers: Dict[str, str] = field(default_factory=dict)


def standings_rows(
    tournament: Tournament, for_round: Optional[int] = None
) -> List[StandingsRow]:
    """Ranked rows, tiebreak columns keyed by abbreviation in configured order."""
    round_number = tournament.played_rounds if for_round is None else for_round
    standings = tournament.standings(round_number)
    tiebreakers = [
        tiebreaker
        for tiebreaker in tournament.configuration.tiebreakers
        if tiebreaker is not Tiebreaker.DIRECT_ENCOUNTER
    ]

    rows = []
    for player in standings.players:
        rows.append(
            StandingsRow(
                rank=standings.ranks[player.id],
                pairing_number=player.pairing_number,
                name=player.name,
                rating=format_rating(player.rating),
                points=format_points(player.score_after(round_number)),
                tiebreakers={
                    tiebreaker.abbreviation: format_tiebreak(
                        tiebreaker, player.tiebreaker_after(round_number, tiebreaker)
                    )
                    for tiebreaker in tiebreakers
                },
            )
        )
    return rows
