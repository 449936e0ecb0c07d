from conftest import build_players

from gambitstandings.compatibility.bbp import (
    BbpResult,
    BbpStatusCode,
    interpret_bbp_result,
)
from gambitstandings.compatibility.report import (
    format_points,
    format_rating,
    format_tiebreak,
    standings_rows,
)
from gambitstandings.models import Configuration, ResultType, Tiebreaker
from gambitstandings.tournament import Tournament
from gambitstandings.tournament.tiebreak_sets import (
    FIDE_INDIVIDUAL_ROUND_ROBIN,
    TIEBREAK_SETS,
)
from gambitstandings.validation.errors import NoValidPairing, PairingEngineFailure


def test_successful_engine_run_feeds_the_reader():
    result = BbpResult(BbpStatusCode.SUCCESS, "1\n2 1\n\n", "")
    assert result
    assert result.data == ["1", "2 1"]
    assert repr(result) == "BbpResult(SUCCESS, 2 line(s))"

    players = build_players([2000, 1900])
    tournament = Tournament(players.values())
    reader = tournament.read_pairings(interpret_bbp_result(result, 1))
    assert tournament.apply_pairings(reader) is None
    assert [(pair.white, pair.black) for pair in tournament.pairs[0]] == [("p2", "p1")]


def test_engine_without_valid_pairing():
    result = BbpResult(1, "", "no valid pairing exists\n")
    assert not result
    assert interpret_bbp_result(result, 4) == NoValidPairing(round=4)


def test_engine_failure_keeps_error_output():
    result = BbpResult(3, "", "invalid request\nline 7\n")
    assert interpret_bbp_result(result, 2) == PairingEngineFailure(
        status_code=3, message="invalid request line 7"
    )
    assert repr(BbpResult(42)) == "BbpResult(42, 0 line(s))"


def test_formatting_limits():
    assert format_points(3) == " 3.0"
    assert format_points(120.5) == "99.9"
    assert format_rating(2345) == "2345"
    assert format_rating(12000) == "9999"
    assert format_rating(-5) == "   0"
    assert format_tiebreak(Tiebreaker.ARO, 1850.0) == "1850"
    assert format_tiebreak(Tiebreaker.SONNEBORN_BERGER, 2.3) == "2.3"


def test_standings_rows():
    players = build_players([2000, 1900])
    configuration = Configuration(tiebreakers=list(FIDE_INDIVIDUAL_ROUND_ROBIN))
    tournament = Tournament(players.values(), configuration)
    tournament.apply_pairings(tournament.read_pairings(["1", "2 1"]))
    tournament.set_result(1, 1, ResultType.BLACK_WIN)

    first, second = standings_rows(tournament)
    assert (first.rank, first.pairing_number, first.name) == (1, 1, "Player 1")
    assert first.rating == "2000"
    assert first.points == " 1.0"
    assert first.tiebreakers == {"RWon": "1", "SoBe": "0.0", "Koya": "0.0"}
    assert second.points == " 0.0"
    assert second.tiebreakers["RWon"] == "0"


def test_named_tiebreak_sets_are_configurable():
    for tiebreakers in TIEBREAK_SETS.values():
        configuration = Configuration(tiebreakers=list(tiebreakers))
        assert configuration.tiebreakers
        assert all(isinstance(tb, Tiebreaker) for tb in configuration.tiebreakers)
