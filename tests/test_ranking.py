from conftest import build_players, bye, play, refresh

from gambitstandings.models import Configuration, GameResult, ResultType, Tiebreaker
from gambitstandings.tournament.ranking import (
    compute_ranks,
    create_comparator,
    pairing_order,
    sort_by_rank,
    sort_by_score,
    sort_players,
)


def test_winner_ranks_first():
    players = build_players([1900, 2000])
    p1, p2 = players.values()
    play(p1, p2, 1, ResultType.WHITE_WIN)
    configuration = Configuration(
        tiebreakers=[Tiebreaker.CUMULATIVE, Tiebreaker.BUCHHOLZ]
    )
    refresh(players, configuration)

    standings = compute_ranks([p2, p1], configuration.tiebreakers, for_round=1)
    assert standings.ranks == {"p1": 1, "p2": 2}
    assert [player.score_after(1) for player in standings.players] == [1.0, 0.0]
    assert p1.tiebreaker_after(1, Tiebreaker.BUCHHOLZ) == 0.0


def test_round_robin_order(round_robin_players):
    refresh(round_robin_players)
    ranked = sort_by_rank(round_robin_players.values(), [], 3)
    assert [player.id for player in ranked] == ["p1", "p2", "p3", "p4"]

    # After round 1 p1 leads, p3 and p4 share 0.5 and keep their given order
    ranked = sort_by_rank(reversed(list(round_robin_players.values())), [], 1)
    assert [player.id for player in ranked] == ["p1", "p4", "p3", "p2"]


def test_equal_players_keep_input_order():
    players = build_players([2000, 1900])
    p1, p2 = players.values()
    play(p1, p2, 1, ResultType.DRAW)
    refresh(players)

    assert sort_by_rank([p1, p2], [], 1) == [p1, p2]
    assert sort_by_rank([p2, p1], [], 1) == [p2, p1]


def test_tiebreaker_separates_equal_scores(bye_players):
    configuration = Configuration(tiebreakers=[Tiebreaker.BUCHHOLZ])
    refresh(bye_players, configuration)
    p1, p2, p3 = bye_players.values()

    standings = compute_ranks([p1, p2, p3], configuration.tiebreakers, 2)
    assert [player.id for player in standings.players] == ["p3", "p1", "p2"]

    standings = compute_ranks([p1, p2, p3], [], 2)
    assert [player.id for player in standings.players] == ["p1", "p3", "p2"]


def test_direct_encounter_decides_between_two_players():
    players = build_players([2000, 1900, 1800])
    p1, p2, p3 = players.values()
    play(p2, p1, 1, ResultType.WHITE_WIN)
    bye(p3, 1, GameResult.ZERO_POINT_BYE)
    play(p1, p3, 2, ResultType.WHITE_WIN)
    bye(p2, 2, GameResult.ZERO_POINT_BYE)
    configuration = Configuration(tiebreakers=[Tiebreaker.DIRECT_ENCOUNTER])
    refresh(players, configuration)

    standings = compute_ranks([p1, p2, p3], configuration.tiebreakers, 2)
    assert standings.ranks == {"p2": 1, "p1": 2, "p3": 3}


def test_comparator_chain_falls_back_to_index():
    players = build_players([2000, 1900, 1800])
    compare = create_comparator([lambda first, second: 0])
    indexed = list(enumerate(players.values()))
    assert compare(indexed[0], indexed[2]) < 0
    assert compare(indexed[2], indexed[0]) > 0


def test_sort_players_with_rating_comparator():
    players = build_players([1800, 2000, 1900])
    by_rating = sort_players(
        players.values(), [lambda first, second: second.rating - first.rating]
    )
    assert [player.id for player in by_rating] == ["p2", "p3", "p1"]


def test_sort_by_score_before_first_round(round_robin_players):
    refresh(round_robin_players)
    compare = sort_by_score(0)
    assert compare(round_robin_players["p1"], round_robin_players["p4"]) == 0


def test_pairing_order_by_number_or_rank():
    players = build_players([2000, 1900, 1800])
    players["p1"].rank = 3
    players["p3"].rank = 1
    assert [p.id for p in pairing_order(players.values(), False)] == ["p1", "p2", "p3"]
    assert [p.id for p in pairing_order(players.values(), True)] == ["p3", "p2", "p1"]
