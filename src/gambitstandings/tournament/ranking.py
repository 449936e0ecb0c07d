"""Ordering players by score and tiebreaks."""

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

import functools
from typing import Callable, Dict, Iterable, NamedTuple, Sequence, Tuple

from gambitstandings.models import Player, Tiebreaker
from gambitstandings.tournament.tiebreak_calculator import compare_head_to_head
from gambitstandings.type_hints import PlayerComparator, Players

IndexedPlayer = Tuple[int, Player]


class Standings(NamedTuple):
    """Result of ``compute_ranks``: rank per player id and the ranked list."""

    ranks: Dict[str, int]
    players: Players


def create_comparator(
    comparators: Sequence[PlayerComparator],
) -> Callable[[IndexedPlayer, IndexedPlayer], float]:
    """Chain comparators; the first non-zero answer decides.

    The comparator works on ``(index, player)`` tuples and falls back to the
    index, so equal players keep their original order whatever the sort.
    """

    def compare(first: IndexedPlayer, second: IndexedPlayer) -> float:
        for comparator in comparators:
            result = comparator(first[1], second[1])
            if result != 0:
                return result
        return first[0] - second[0]

    return compare


def sort_players(
    players: Iterable[Player], comparators: Sequence[PlayerComparator]
) -> Players:
    indexed = list(enumerate(players))
    indexed.sort(key=functools.cmp_to_key(create_comparator(comparators)))
    return [player for _, player in indexed]


def sort_by_score(for_round: int) -> PlayerComparator:
    """Higher score after ``for_round`` first."""

    def compare(first: Player, second: Player) -> float:
        return second.score_after(for_round) - first.score_after(for_round)

    return compare


def sort_by_tiebreaker(for_round: int, tiebreaker: Tiebreaker) -> PlayerComparator:
    """Higher tiebreak value first; direct encounter compares the pair itself."""
    if tiebreaker is Tiebreaker.DIRECT_ENCOUNTER:
        return functools.partial(compare_head_to_head, for_round=for_round)

    def compare(first: Player, second: Player) -> float:
        return second.tiebreaker_after(
            for_round, tiebreaker
        ) - first.tiebreaker_after(for_round, tiebreaker)

    return compare


def sort_by_rank(
    players: Iterable[Player], tiebreakers: Sequence[Tiebreaker], for_round: int
) -> Players:
    """Players ordered by score after ``for_round``, then by each tiebreak.

    Players that are tied on everything stay in the order they were given.
    """
    comparators = [sort_by_score(for_round)]
    comparators.extend(
        sort_by_tiebreaker(for_round, tiebreaker) for tiebreaker in tiebreakers
    )
    return sort_players(players, comparators)


def compute_ranks(
    players: Iterable[Player], tiebreakers: Sequence[Tiebreaker], for_round: int
) -> Standings:
    ranked = sort_by_rank(players, tiebreakers, for_round)
    ranks = {player.id: position for position, player in enumerate(ranked, start=1)}
    return Standings(ranks=ranks, players=ranked)


def pairing_order(players: Iterable[Player], match_by_rank: bool) -> Players:
    """Players in the order the pairing engine numbers them."""
    if match_by_rank:
        return sorted(players, key=lambda player: (player.rank, player.pairing_number))
    return sorted(players, key=lambda player: player.pairing_number)
