from typing import Dict, List, Optional

import pytest

from gambitstandings.models import (
    Colour,
    Configuration,
    Game,
    GameResult,
    Player,
    ResultType,
    Tiebreaker,
)
from gambitstandings.tournament.pipeline import StandingsPipeline
from gambitstandings.tournament.results import RESULT_CODES


def build_players(ratings: List[int]) -> Dict[str, Player]:
    players = {}
    for number, rating in enumerate(ratings, start=1):
        player = Player(
            f"Player {number}", rating=rating, pairing_number=number, player_id=f"p{number}"
        )
        players[player.id] = player
    return players


def play(
    white: Player,
    black: Player,
    round_number: int,
    result: ResultType = ResultType.WHITE_WIN,
) -> None:
    white_result, black_result = RESULT_CODES[result]
    white.games.append(Game(round_number, black.id, Colour.WHITE, white_result))
    black.games.append(Game(round_number, white.id, Colour.BLACK, black_result))


def bye(player: Player, round_number: int, result: GameResult) -> None:
    player.games.append(Game(round_number, result=result))


def refresh(
    players: Dict[str, Player], configuration: Optional[Configuration] = None
) -> StandingsPipeline:
    pipeline = StandingsPipeline(players, configuration or Configuration())
    pipeline.refresh()
    return pipeline


@pytest.fixture
def configuration():
    return Configuration()


@pytest.fixture
def round_robin_players():
    """Four players, three rounds, every game played.

    Final scores: p1 3.0, p2 1.5, p3 1.0, p4 0.5.
    """
    players = build_players([2000, 1900, 1800, 1700])
    p1, p2, p3, p4 = players.values()
    play(p1, p2, 1, ResultType.WHITE_WIN)
    play(p3, p4, 1, ResultType.DRAW)
    play(p1, p3, 2, ResultType.WHITE_WIN)
    play(p4, p2, 2, ResultType.BLACK_WIN)
    play(p2, p3, 3, ResultType.DRAW)
    play(p4, p1, 3, ResultType.BLACK_WIN)
    return players


@pytest.fixture
def bye_players():
    """Three players: p3 gets the pairing-allocated bye in round 1, p2 sits
    out round 2 with a zero-point bye."""
    players = build_players([2100, 2000, 1900])
    p1, p2, p3 = players.values()
    play(p1, p2, 1, ResultType.WHITE_WIN)
    bye(p3, 1, GameResult.PAIRING_ALLOCATED_BYE)
    play(p3, p1, 2, ResultType.DRAW)
    bye(p2, 2, GameResult.ZERO_POINT_BYE)
    return players


@pytest.fixture
def all_tiebreakers():
    return list(Tiebreaker)
