import pytest

from conftest import build_players, bye, play, refresh

from gambitstandings.constants import TIEBREAK_ABBREVIATIONS, TIEBREAK_NAMES
from gambitstandings.exceptions import PlayerNotFoundException
from gambitstandings.models import (
    Colour,
    Configuration,
    Game,
    GameResult,
    ResultType,
    Tiebreaker,
)
from gambitstandings.tournament.tiebreak_calculator import (
    CALCULATORS,
    TiebreakCalculator,
    TiebreakContext,
    calculate_value,
    compare_head_to_head,
    virtual_opponent_score,
)


def _value(players, tiebreaker, player_id, for_round, configuration=None):
    context = TiebreakContext(players, configuration or Configuration())
    return calculate_value(tiebreaker, context, players[player_id], for_round)


def test_every_tiebreaker_has_a_calculator():
    assert set(CALCULATORS) == set(Tiebreaker)
    assert len(Tiebreaker) == 21
    for tiebreaker in Tiebreaker:
        assert tiebreaker.value in TIEBREAK_NAMES
        assert tiebreaker.value in TIEBREAK_ABBREVIATIONS


@pytest.mark.parametrize(
    "tiebreaker, expected",
    [
        (Tiebreaker.BUCHHOLZ, {"p1": 3.0, "p2": 4.5, "p4": 5.5}),
        (Tiebreaker.BUCHHOLZ_CUT_1, {"p1": 2.5}),
        (Tiebreaker.MEDIAN_BUCHHOLZ, {"p1": 1.0}),
        (Tiebreaker.SOLKOFF, {"p1": 3.0}),
        (Tiebreaker.SONNEBORN_BERGER, {"p1": 3.0, "p2": 1.0, "p3": 1.0}),
        (Tiebreaker.CUMULATIVE, {"p1": 6.0, "p2": 2.5}),
        (Tiebreaker.CUMULATIVE_CUT_1, {"p1": 5.0}),
        (Tiebreaker.PROGRESSIVE, {"p1": 6.0}),
        (Tiebreaker.PROGRESSIVE_CUT_1, {"p1": 5.0}),
        (Tiebreaker.OPPOSITION_CUMULATIVE, {"p1": 6.0}),
        (Tiebreaker.ROUNDS_WON, {"p1": 3.0, "p2": 1.0, "p4": 0.0}),
        (Tiebreaker.ROUNDS_WON_BLACK_PIECES, {"p1": 1.0, "p2": 1.0, "p3": 0.0}),
        (Tiebreaker.PLAYED_BLACKS, {"p1": 1.0, "p2": 2.0, "p3": 2.0, "p4": 1.0}),
        (Tiebreaker.TIME_OF_LOSS, {"p1": 4.0, "p2": 1.0, "p3": 2.0, "p4": 2.0}),
        (Tiebreaker.KASHDAN, {"p1": 12.0, "p2": 7.0, "p3": 5.0, "p4": 4.0}),
        (Tiebreaker.ARO, {"p1": 1800.0, "p2": 1833.0}),
        (Tiebreaker.AROC_1, {"p1": 1850.0}),
        (Tiebreaker.OPPOSITION_PERFORMANCE, {"p1": 2200.0, "p2": 1833.0}),
        (Tiebreaker.KOYA, {"p1": 1.0, "p2": 0.0, "p4": 0.0}),
        (Tiebreaker.MODIFIED_MEDIAN, {"p1": 2.5, "p2": 1.0, "p3": 2.0, "p4": 2.5}),
        (Tiebreaker.DIRECT_ENCOUNTER, {"p1": 0.0}),
    ],
)
def test_round_robin_values(round_robin_players, tiebreaker, expected):
    refresh(round_robin_players)
    for player_id, value in expected.items():
        assert _value(round_robin_players, tiebreaker, player_id, 3) == pytest.approx(
            value
        )


def test_values_only_look_at_rounds_up_to_for_round(round_robin_players):
    refresh(round_robin_players)
    # After round 1 only p2 has met p1, with 0 points
    assert _value(round_robin_players, Tiebreaker.BUCHHOLZ, "p1", 1) == 0.0
    assert _value(round_robin_players, Tiebreaker.ROUNDS_WON, "p1", 2) == 2.0


def test_virtual_opponent_for_pairing_allocated_bye(bye_players):
    refresh(bye_players)
    context = TiebreakContext(bye_players, Configuration())
    # 1.0 after the bye, nothing missed against a win, one round to go
    assert virtual_opponent_score(context, bye_players["p3"], 0, 2) == 1.5


@pytest.mark.parametrize(
    "tiebreaker, player_id, expected",
    [
        (Tiebreaker.BUCHHOLZ, "p3", 3.0),
        (Tiebreaker.BUCHHOLZ_CUT_1, "p3", 1.5),
        (Tiebreaker.SOLKOFF, "p3", 1.5),
        (Tiebreaker.SONNEBORN_BERGER, "p3", 2.25),
        (Tiebreaker.MODIFIED_MEDIAN, "p3", 1.5),
        (Tiebreaker.CUMULATIVE, "p3", 1.5),
        (Tiebreaker.ROUNDS_WON, "p3", 0.0),
        (Tiebreaker.TIME_OF_LOSS, "p3", 3.0),
        (Tiebreaker.ARO, "p3", 2100.0),
        (Tiebreaker.AROC_1, "p3", 2100.0),
        (Tiebreaker.AROC_1, "p1", 2000.0),
        # The bye of p3 and the absence of p2 count as draws for opponents
        (Tiebreaker.BUCHHOLZ, "p1", 1.5),
        (Tiebreaker.BUCHHOLZ, "p2", 2.5),
        (Tiebreaker.SOLKOFF, "p2", 1.5),
        (Tiebreaker.TIME_OF_LOSS, "p2", 1.0),
    ],
)
def test_unplayed_rounds(bye_players, tiebreaker, player_id, expected):
    refresh(bye_players)
    assert _value(bye_players, tiebreaker, player_id, 2) == pytest.approx(expected)


def test_cumulative_removes_points_of_full_point_bye():
    players = build_players([2000, 1900])
    p1, p2 = players.values()
    bye(p1, 1, GameResult.FULL_POINT_BYE)
    bye(p2, 1, GameResult.ZERO_POINT_BYE)
    play(p1, p2, 2, ResultType.WHITE_WIN)
    refresh(players)
    assert _value(players, Tiebreaker.CUMULATIVE, "p1", 2) == 2.0
    assert _value(players, Tiebreaker.PROGRESSIVE, "p1", 2) == 3.0


def test_tiebreaks_use_configured_points(round_robin_players):
    configuration = Configuration(points_for_win=3.0, points_for_draw=1.0)
    refresh(round_robin_players, configuration)
    assert _value(
        round_robin_players, Tiebreaker.BUCHHOLZ, "p1", 3, configuration
    ) == pytest.approx(4.0 + 2.0 + 1.0)


def test_buchholz_counts_repeated_opponent_twice():
    players = build_players([2000, 1900])
    p1, p2 = players.values()
    play(p1, p2, 1, ResultType.WHITE_WIN)
    play(p2, p1, 2, ResultType.DRAW)
    refresh(players)
    assert _value(players, Tiebreaker.BUCHHOLZ, "p1", 2) == 1.0


def test_buchholz_is_never_below_cut_1(round_robin_players, bye_players):
    for players in (round_robin_players, bye_players):
        refresh(players)
        rounds = max(len(player.games) for player in players.values())
        for player_id in players:
            for for_round in range(1, rounds + 1):
                full = _value(players, Tiebreaker.BUCHHOLZ, player_id, for_round)
                cut = _value(players, Tiebreaker.BUCHHOLZ_CUT_1, player_id, for_round)
                assert full >= cut


def test_head_to_head(round_robin_players):
    p1, p2, p3, p4 = round_robin_players.values()
    assert compare_head_to_head(p1, p2) == -1
    assert compare_head_to_head(p2, p1) == 1
    assert compare_head_to_head(p2, p3) == 0
    # p2 and p3 only meet in round 3
    assert compare_head_to_head(p2, p3, for_round=2) == 0
    assert compare_head_to_head(p4, p1, for_round=2) == 0
    assert compare_head_to_head(p4, p1) == 1


def test_head_to_head_ignores_forfeits():
    players = build_players([2000, 1900])
    p1, p2 = players.values()
    play(p1, p2, 1, ResultType.WHITE_FORFEIT_WIN)
    assert compare_head_to_head(p1, p2) == 0
    assert compare_head_to_head(p2, p1) == 0


def test_calculator_writes_only_configured_keys(round_robin_players):
    configuration = Configuration(tiebreakers=[Tiebreaker.BUCHHOLZ, Tiebreaker.KOYA])
    refresh(round_robin_players, configuration)
    calculator = TiebreakCalculator(
        round_robin_players, configuration.with_tiebreakers([Tiebreaker.ARO])
    )
    calculator.calculate_all_tiebreaks()
    for player in round_robin_players.values():
        for score in player.scores:
            assert set(score.tiebreakers) == {Tiebreaker.ARO}


def test_unknown_opponent_raises():
    players = build_players([2000])
    (player,) = players.values()
    player.games.append(Game(1, "missing", Colour.WHITE, GameResult.WIN))
    with pytest.raises(PlayerNotFoundException):
        _value(players, Tiebreaker.BUCHHOLZ, player.id, 1)
