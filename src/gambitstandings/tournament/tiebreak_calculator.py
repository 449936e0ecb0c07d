"""Tiebreak calculation for tournaments.

This module handles calculation of the tiebreak systems used in chess
tournaments. Every system is a pure function of the players' games and
running scores up to a given round; the dispatch table ``CALCULATORS`` maps
each ``Tiebreaker`` to its function and is checked for completeness when the
module is imported.
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
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from gambitstandings.constants import (
    MODIFIED_MEDIAN_LONG_EVENT_ROUNDS,
    PERFORMANCE_RATING_DELTA,
)
from gambitstandings.exceptions import ConfigurationException, PlayerNotFoundException
from gambitstandings.models import Colour, Configuration, GameResult, Player, Tiebreaker
from gambitstandings.models.enums import (
    DRAWN_GAME_RESULTS,
    LOST_GAME_RESULTS,
    LOST_ROUND_RESULTS,
    WON_GAME_RESULTS,
    WON_ROUND_RESULTS,
)
from gambitstandings.tournament.scoring import calculate_points, get_points
from gambitstandings.type_hints import PlayersById
from gambitstandings.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class TiebreakContext:
    """Everything a tiebreak calculator may read besides the player itself."""

    players: PlayersById
    configuration: Configuration

    def player(self, player_id: Optional[str]) -> Player:
        try:
            return self.players[player_id]
        except KeyError:
            raise PlayerNotFoundException(f"Unknown opponent id: {player_id}") from None

    def points(
        self, player: Player, for_round: int, not_played_is_draw: bool = False
    ) -> float:
        return calculate_points(
            for_round, player.games, self.configuration, not_played_is_draw
        )


Calculator = Callable[[TiebreakContext, Player, int], float]


def _round_half_up(value: float) -> int:
    """Nearest integer, 0.5 rounded upwards, as the FIDE Tie-Break Regulations
    (C.07) require for average ratings and performances."""
    return int(math.floor(value + 0.5))


def _running_points(context: TiebreakContext, player: Player, index: int) -> float:
    """Points after round ``index + 1`` without acceleration bonuses."""
    if index < len(player.scores):
        return player.scores[index].game_points
    return context.points(player, index + 1)


def virtual_opponent_score(
    context: TiebreakContext, player: Player, index: int, for_round: int
) -> float:
    """Score of the stand-in opponent for a round the player did not play.

    The player's running score after the round, plus the points the player
    missed compared to a win, plus a draw for every remaining round up to
    ``for_round``.
    """
    configuration = context.configuration
    game = player.games[index]
    return (
        _running_points(context, player, index)
        + (configuration.points_for_win - get_points(game, configuration))
        + 0.5 * (for_round - (index + 1))
    )


def _opponent_scores(
    context: TiebreakContext, player: Player, for_round: int, use_virtual: bool
) -> List[float]:
    # Opponents' own unplayed games count as draws.
    scores = []
    for index, game in enumerate(player.games[:for_round]):
        if game.was_played:
            opponent = context.player(game.opponent)
            scores.append(context.points(opponent, for_round, not_played_is_draw=True))
        elif use_virtual:
            scores.append(virtual_opponent_score(context, player, index, for_round))
    return scores


# ========== Direct encounter ==========


def _direct_encounter(context: TiebreakContext, player: Player, for_round: int) -> float:
    # Only meaningful between two players, see compare_head_to_head
    return 0.0


def compare_head_to_head(
    first: Player, second: Player, for_round: Optional[int] = None
) -> int:
    """Compare two players by the result of their first game.

    Args:
        first: First player
        second: Second player
        for_round: Only games up to this round are considered

    Returns:
        -1 if ``first`` won, 1 if ``second`` won, 0 if they drew, never
        met or the game was decided by forfeit
    """
    window = len(first.games) if for_round is None else for_round
    for index, game in enumerate(first.games[:window]):
        if game.opponent != second.id:
            continue
        if game.result in WON_GAME_RESULTS:
            return -1
        reply = second.game_for_round(index + 1)
        if reply is not None and reply.result in WON_GAME_RESULTS:
            return 1
        return 0
    return 0


# ========== Cumulative / Progressive ==========


def _cumulative_sum(
    context: TiebreakContext, player: Player, for_round: int, first_index: int
) -> float:
    configuration = context.configuration
    total = 0.0
    for index in range(first_index, min(for_round, len(player.games))):
        total += _running_points(context, player, index)
        game = player.games[index]
        if (
            game.is_unplayed_win
            or game.is_unplayed_draw
            or game.result is GameResult.PAIRING_ALLOCATED_BYE
        ):
            total -= get_points(game, configuration)
    return total


def _cumulative(context: TiebreakContext, player: Player, for_round: int) -> float:
    return _cumulative_sum(context, player, for_round, 0)


def _cumulative_cut_1(context: TiebreakContext, player: Player, for_round: int) -> float:
    return _cumulative_sum(context, player, for_round, 1)


def _progressive_sum(
    context: TiebreakContext, player: Player, for_round: int, first_index: int
) -> float:
    return sum(
        (
            _running_points(context, player, index)
            for index in range(first_index, min(for_round, len(player.games)))
        ),
        0.0,
    )


def _progressive(context: TiebreakContext, player: Player, for_round: int) -> float:
    return _progressive_sum(context, player, for_round, 0)


def _progressive_cut_1(context: TiebreakContext, player: Player, for_round: int) -> float:
    return _progressive_sum(context, player, for_round, 1)


def _opposition_cumulative(
    context: TiebreakContext, player: Player, for_round: int
) -> float:
    return sum(
        (
            _cumulative(context, context.player(game.opponent), for_round)
            for game in player.games[:for_round]
            if game.opponent is not None
        ),
        0.0,
    )


# ========== Counting systems ==========


def _rounds_won(context: TiebreakContext, player: Player, for_round: int) -> float:
    return float(
        sum(
            1
            for game in player.games[:for_round]
            if game.opponent is not None and game.result in WON_ROUND_RESULTS
        )
    )


def _rounds_won_black_pieces(
    context: TiebreakContext, player: Player, for_round: int
) -> float:
    return float(
        sum(
            1
            for game in player.games[:for_round]
            if game.opponent is not None
            and game.colour is Colour.BLACK
            and game.result in WON_GAME_RESULTS
        )
    )


def _time_of_loss(context: TiebreakContext, player: Player, for_round: int) -> float:
    games = player.games[:for_round]
    for index, game in enumerate(games):
        if game.result in LOST_ROUND_RESULTS or game.result is GameResult.ZERO_POINT_BYE:
            return float(index + 1)
    return float(len(games) + 1)


def _played_blacks(context: TiebreakContext, player: Player, for_round: int) -> float:
    return float(
        sum(
            1
            for game in player.games[:for_round]
            if game.was_played and game.colour is Colour.BLACK
        )
    )


def _kashdan(context: TiebreakContext, player: Player, for_round: int) -> float:
    total = 0
    for game in player.games[:for_round]:
        if not game.was_played:
            continue
        if game.result in WON_GAME_RESULTS:
            total += 4
        elif game.result in DRAWN_GAME_RESULTS:
            total += 2
        elif game.result in LOST_GAME_RESULTS:
            total += 1
    return float(total)


# ========== Opponent score systems ==========


def _sonneborn_berger(context: TiebreakContext, player: Player, for_round: int) -> float:
    total = 0.0
    for index, game in enumerate(player.games[:for_round]):
        if not game.was_played:
            total += virtual_opponent_score(context, player, index, for_round)
            continue
        opponent = context.player(game.opponent)
        opponent_points = context.points(opponent, for_round, not_played_is_draw=True)
        if game.result in WON_GAME_RESULTS:
            total += opponent_points
        elif game.result in DRAWN_GAME_RESULTS:
            total += opponent_points / 2
    return total


def _buchholz(context: TiebreakContext, player: Player, for_round: int) -> float:
    # An opponent met twice is counted twice
    return sum(_opponent_scores(context, player, for_round, use_virtual=True), 0.0)


def _buchholz_cut_1(context: TiebreakContext, player: Player, for_round: int) -> float:
    scores = _opponent_scores(context, player, for_round, use_virtual=True)
    if not scores:
        return 0.0
    return sum(scores) - min(scores)


def _median_buchholz(context: TiebreakContext, player: Player, for_round: int) -> float:
    scores = sorted(_opponent_scores(context, player, for_round, use_virtual=True))
    return sum(scores[1:-1], 0.0)


def _solkoff(context: TiebreakContext, player: Player, for_round: int) -> float:
    return sum(_opponent_scores(context, player, for_round, use_virtual=False), 0.0)


def _modified_median(context: TiebreakContext, player: Player, for_round: int) -> float:
    """USCF modified median.

    Unplayed rounds count as opponents with a score of 0. Players above 50%
    drop their lowest opponents, players below 50% their highest, players
    on exactly 50% both. From nine rounds on two scores are dropped per end.
    """
    games = player.games[:for_round]
    scores = _opponent_scores(context, player, for_round, use_virtual=False)
    scores.extend(0.0 for game in games if not game.was_played)
    scores.sort()

    cut = 2 if for_round >= MODIFIED_MEDIAN_LONG_EVENT_ROUNDS else 1
    half = context.configuration.points_for_win * for_round / 2
    own_points = context.points(player, for_round)

    if own_points > half:
        kept = scores[cut:]
    elif own_points < half:
        kept = scores[:-cut]
    else:
        kept = scores[cut:-cut]
    return sum(kept, 0.0)


def _koya(context: TiebreakContext, player: Player, for_round: int) -> float:
    configuration = context.configuration
    half = configuration.points_for_win * for_round / 2
    total = 0.0
    for game in player.games[:for_round]:
        if game.opponent is None:
            continue
        opponent = context.player(game.opponent)
        if context.points(opponent, for_round) >= half:
            total += get_points(game, configuration)
    return total


# ========== Rating systems ==========


def _average(ratings: Iterable[float]) -> float:
    ratings = list(ratings)
    if not ratings:
        return 0.0
    return float(_round_half_up(sum(ratings) / len(ratings)))


def _aro(context: TiebreakContext, player: Player, for_round: int) -> float:
    return _average(
        context.player(game.opponent).rating
        for game in player.games[:for_round]
        if game.opponent is not None
    )


def _aroc_1(context: TiebreakContext, player: Player, for_round: int) -> float:
    games = player.games[:for_round]
    ratings = [
        context.player(game.opponent).rating for game in games if game.was_played
    ]
    # Players with a bye or forfeit keep all their opponents
    if ratings and all(game.was_played for game in games):
        ratings.remove(min(ratings))
    return _average(ratings)


def _opposition_performance(
    context: TiebreakContext, player: Player, for_round: int
) -> float:
    ratings = []
    for game in player.games[:for_round]:
        if game.opponent is None:
            continue
        rating = context.player(game.opponent).rating
        if game.result in WON_ROUND_RESULTS:
            rating += PERFORMANCE_RATING_DELTA
        elif game.result in LOST_ROUND_RESULTS:
            rating -= PERFORMANCE_RATING_DELTA
        ratings.append(rating)
    return _average(ratings)


CALCULATORS: Dict[Tiebreaker, Calculator] = {
    Tiebreaker.DIRECT_ENCOUNTER: _direct_encounter,
    Tiebreaker.CUMULATIVE: _cumulative,
    Tiebreaker.CUMULATIVE_CUT_1: _cumulative_cut_1,
    Tiebreaker.OPPOSITION_CUMULATIVE: _opposition_cumulative,
    Tiebreaker.PROGRESSIVE: _progressive,
    Tiebreaker.PROGRESSIVE_CUT_1: _progressive_cut_1,
    Tiebreaker.ROUNDS_WON: _rounds_won,
    Tiebreaker.ROUNDS_WON_BLACK_PIECES: _rounds_won_black_pieces,
    Tiebreaker.TIME_OF_LOSS: _time_of_loss,
    Tiebreaker.PLAYED_BLACKS: _played_blacks,
    Tiebreaker.KASHDAN: _kashdan,
    Tiebreaker.SONNEBORN_BERGER: _sonneborn_berger,
    Tiebreaker.BUCHHOLZ: _buchholz,
    Tiebreaker.BUCHHOLZ_CUT_1: _buchholz_cut_1,
    Tiebreaker.MEDIAN_BUCHHOLZ: _median_buchholz,
    Tiebreaker.SOLKOFF: _solkoff,
    Tiebreaker.MODIFIED_MEDIAN: _modified_median,
    Tiebreaker.ARO: _aro,
    Tiebreaker.AROC_1: _aroc_1,
    Tiebreaker.OPPOSITION_PERFORMANCE: _opposition_performance,
    Tiebreaker.KOYA: _koya,
}

_missing = [tiebreaker.name for tiebreaker in Tiebreaker if tiebreaker not in CALCULATORS]
if _missing:
    raise ConfigurationException(f"No calculator registered for: {', '.join(_missing)}")


def calculate_value(
    tiebreaker: Tiebreaker, context: TiebreakContext, player: Player, for_round: int
) -> float:
    """Value of one tiebreak for ``player`` after ``for_round`` rounds."""
    return CALCULATORS[tiebreaker](context, player, for_round)


class TiebreakCalculator:
    """Writes the configured tiebreak values into players' scores.

    Scores of every player must be up to date before this runs, since most
    systems read opponents' running scores.
    """

    def __init__(self, players: PlayersById, configuration: Configuration) -> None:
        self.context = TiebreakContext(players, configuration)

    def calculate_player_tiebreaks(
        self, player: Player, from_round: int = 1, to_round: Optional[int] = None
    ) -> None:
        """Recompute tiebreaks of rounds ``[from_round, to_round)``.

        Each round's mapping is rebuilt from scratch, so it only ever holds
        the configured tiebreaks.
        """
        tiebreakers = self.context.configuration.tiebreakers
        end = len(player.scores) + 1
        if to_round is not None:
            end = min(end, to_round)

        for round_number in range(max(from_round, 1), end):
            player.scores[round_number - 1].tiebreakers = {
                tiebreaker: calculate_value(
                    tiebreaker, self.context, player, round_number
                )
                for tiebreaker in tiebreakers
            }

    def calculate_all_tiebreaks(
        self, from_round: int = 1, to_round: Optional[int] = None
    ) -> None:
        for player in self.context.players.values():
            self.calculate_player_tiebreaks(player, from_round, to_round)
