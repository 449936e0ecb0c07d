"""Cross-record checks for imported or freshly paired tournament data.

Each player keeps an independent copy of every game, so nothing guarantees
that the two copies of a pairing agree. These checks must run after every
import and every pairing application.
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

import math
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from gambitstandings.models import Configuration, Game, Player
from gambitstandings.tournament.scoring import calculate_points, get_points
from gambitstandings.type_hints import PlayersById
from gambitstandings.utils import setup_logger
from gambitstandings.validation.errors import (
    AccMissingEntry,
    PairingContradiction,
    PointsMismatch,
    TooManyAccelerations,
    TournamentError,
)

logger = setup_logger(__name__)


def _reciprocal_game(players: PlayersById, game: Game, index: int) -> Optional[Game]:
    opponent = players.get(game.opponent)
    if opponent is None or index >= len(opponent.games):
        return None
    return opponent.games[index]


def _contradicts(player: Player, game: Game, reply: Optional[Game]) -> bool:
    return (
        reply is None
        or not reply.was_played
        or reply.colour is game.colour
        or reply.opponent != player.id
    )


def find_pair_contradictions(players: PlayersById) -> List[PairingContradiction]:
    """Every played game whose reciprocal record disagrees.

    A disagreeing pair of players is reported once per round, from the side
    that is checked first.

    Args:
        players: All players keyed by id

    Returns:
        Contradictions in player order; empty when the data is consistent
    """
    contradictions: List[PairingContradiction] = []
    reported: Set[Tuple[int, FrozenSet[str]]] = set()

    for player in players.values():
        for index, game in enumerate(player.games):
            if not game.was_played:
                continue
            reply = _reciprocal_game(players, game, index)
            if not _contradicts(player, game, reply):
                continue

            key = (index, frozenset((player.id, game.opponent)))
            if key in reported:
                continue
            reported.add(key)

            opponent = players.get(game.opponent)
            contradiction = PairingContradiction(
                round=index + 1,
                first_player=player.pairing_number,
                second_player=opponent.pairing_number if opponent else 0,
            )
            logger.warning(contradiction.details())
            contradictions.append(contradiction)

    return contradictions


def validate_pair_consistency(players: PlayersById) -> Optional[PairingContradiction]:
    """First pairing contradiction found, or None if all records agree."""
    for player in players.values():
        for index, game in enumerate(player.games):
            if game.was_played and _contradicts(
                player, game, _reciprocal_game(players, game, index)
            ):
                opponent = players.get(game.opponent)
                return PairingContradiction(
                    round=index + 1,
                    first_player=player.pairing_number,
                    second_player=opponent.pairing_number if opponent else 0,
                )
    return None


def check_and_assign_accelerations(
    players_by_number: Dict[int, Player],
    accelerations: Iterable[Tuple[int, Sequence[float]]],
    expected_rounds: int = 0,
) -> List[TournamentError]:
    """Attach imported acceleration bonuses to their players.

    Args:
        players_by_number: Players keyed by starting number
        accelerations: (starting number, bonus per round) entries
        expected_rounds: Planned round count; 0 means unlimited

    Returns:
        ``AccMissingEntry`` / ``TooManyAccelerations`` errors. Entries that
        fail are not assigned.
    """
    errors: List[TournamentError] = []
    for number, values in accelerations:
        player = players_by_number.get(number)
        if player is None:
            errors.append(AccMissingEntry(player=number))
            continue
        if expected_rounds and len(values) > expected_rounds:
            errors.append(TooManyAccelerations(player=number))
            continue
        player.accelerations = list(values)
    return errors


def validate_scores(
    players: Iterable[Player], configuration: Configuration, played_rounds: int
) -> List[PointsMismatch]:
    """Compare imported declared totals with the totals of the results.

    Reports often print the score including the acceleration bonus or the
    result of an already entered next round. A declared total that matches
    after removing one or both of these is accepted and corrected.
    """
    mismatches: List[PointsMismatch] = []
    for player in players:
        if player.declared_points is None:
            continue

        calculated = calculate_points(played_rounds, player.games, configuration)
        if math.isclose(player.declared_points, calculated):
            continue

        acceleration = player.acceleration_for(played_rounds + 1)
        next_round = (
            get_points(player.games[played_rounds], configuration)
            if played_rounds < len(player.games)
            else 0.0
        )
        candidates = (
            player.declared_points - acceleration,
            player.declared_points - next_round,
            player.declared_points - acceleration - next_round,
        )
        if any(math.isclose(value, calculated) for value in candidates):
            logger.debug(
                "Corrected declared points of %s from %s to %s",
                player.name,
                player.declared_points,
                calculated,
            )
            player.declared_points = calculated
        else:
            mismatches.append(PointsMismatch(player=player.pairing_number))
    return mismatches
