"""Resolve game results into points and keep running scores up to date."""

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

from typing import Iterable, Optional, Sequence

from gambitstandings.models import Configuration, Game, GameResult, Player, Score
from gambitstandings.utils import setup_logger

logger = setup_logger(__name__)


def get_points_for_result(result: GameResult, configuration: Configuration) -> float:
    """Points a result is worth under ``configuration``."""
    if result is GameResult.FORFEIT_LOSS:
        return configuration.points_for_forfeit_loss
    if result in (GameResult.LOSS, GameResult.UNRATED_LOSS):
        return configuration.points_for_loss
    if result is GameResult.ZERO_POINT_BYE:
        return configuration.points_for_zero_point_bye
    if result is GameResult.PAIRING_ALLOCATED_BYE:
        return configuration.points_for_pairing_allocated_bye
    if result in (
        GameResult.WIN,
        GameResult.FORFEIT_WIN,
        GameResult.UNRATED_WIN,
        GameResult.FULL_POINT_BYE,
    ):
        return configuration.points_for_win
    if result in (
        GameResult.DRAW,
        GameResult.UNRATED_DRAW,
        GameResult.HALF_POINT_BYE,
    ):
        return configuration.points_for_draw
    return 0.0


def get_points(
    game: Game, configuration: Configuration, not_played_is_draw: bool = False
) -> float:
    """Points for a single game.

    Args:
        game: The player's record of the round
        configuration: Tournament point schedule
        not_played_is_draw: Score games that were not played as draws, as
            required when an opponent's score is read for a tiebreak

    Returns:
        Point value of the game
    """
    if not_played_is_draw and not game.was_played:
        return configuration.points_for_draw
    return get_points_for_result(game.result, configuration)


def calculate_points(
    for_round: int,
    games: Sequence[Game],
    configuration: Configuration,
    not_played_is_draw: bool = False,
) -> float:
    """Sum of game points over the first ``for_round`` rounds."""
    return sum(
        (
            get_points(game, configuration, not_played_is_draw)
            for game in games[: max(for_round, 0)]
        ),
        0.0,
    )


def recalculate_scores(
    player: Player,
    configuration: Configuration,
    from_round: int = 1,
    to_round: Optional[int] = None,
) -> None:
    """Recompute the running scores of rounds ``[from_round, to_round)``.

    The total before ``from_round`` is taken from the stored score of the
    previous round, so only the window is rescanned. Scores beyond the
    player's last game are dropped.

    Args:
        player: Player whose ``scores`` are updated in place
        configuration: Tournament point schedule
        from_round: First round to recompute, 1-based
        to_round: Round after the last one to recompute; all remaining
            rounds when None
    """
    games = player.games
    scores = player.scores
    del scores[len(games) :]

    end = len(games) + 1 if to_round is None else min(to_round, len(games) + 1)
    start = max(1, min(from_round, len(scores) + 1))

    running = scores[start - 2].game_points if start > 1 else 0.0
    for round_number in range(start, end):
        running += get_points(games[round_number - 1], configuration)
        acceleration = player.acceleration_for(round_number)
        if round_number <= len(scores):
            score = scores[round_number - 1]
            score.round = round_number
            score.points = running + acceleration
            score.acceleration = acceleration
        else:
            scores.append(
                Score(
                    round=round_number,
                    points=running + acceleration,
                    acceleration=acceleration,
                )
            )


def calculate_played_rounds(players: Iterable[Player]) -> int:
    """Last round in which any player took part in a pairing.

    Records after that round, such as a bye requested for the next round,
    do not make it a played round.
    """
    played = 0
    for player in players:
        for index in range(len(player.games) - 1, played - 1, -1):
            if player.games[index].participated_in_pairing:
                played = index + 1
                break
    return played


def even_up_games_history(players: Iterable[Player], played_rounds: int) -> None:
    """Pad every history to ``played_rounds`` with zero-point bye records."""
    for player in players:
        for round_number in range(len(player.games) + 1, played_rounds + 1):
            player.games.append(Game.default(round_number))
