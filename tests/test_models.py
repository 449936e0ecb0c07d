import logging
from datetime import date

import pytest
from dateutil.relativedelta import relativedelta

from gambitstandings.models import (
    Colour,
    Configuration,
    Game,
    GameResult,
    Player,
    Score,
    Tiebreaker,
)
from gambitstandings.utils import generate_id, setup_logger


def test_player_defaults():
    player = Player("Ada Lovelace")
    assert player.id.startswith("player_")
    assert player.rating == 0
    assert player.age is None
    assert player.points == 0.0
    assert player.score_after(3) == 0.0
    assert player.game_for_round(1) is None


def test_player_age_in_whole_years():
    born = date.today() - relativedelta(years=17, days=1)
    player = Player("Junior", rating=1500, date_of_birth=born)
    assert player.age == 17

    tomorrow_birthday = date.today() - relativedelta(years=17) + relativedelta(days=1)
    assert Player("Junior", date_of_birth=tomorrow_birthday).age == 16


def test_player_optional_fields():
    player = Player("Late", pairing_number=4, rank=2, late=3, declared_points=1.5)
    assert player.rank == 2
    assert player.declared_points == 1.5
    assert player.is_absent_from_round(2)
    assert not player.is_absent_from_round(3)

    withdrawn = Player("Gone", withdrawn=5)
    assert not withdrawn.is_absent_from_round(4)
    assert withdrawn.is_absent_from_round(5)


def test_player_lookups_clamp_to_recorded_rounds():
    player = Player("Ada", player_id="ada")
    player.scores = [
        Score(1, 1.0, tiebreakers={Tiebreaker.BUCHHOLZ: 2.0}),
        Score(2, 2.5, acceleration=0.5),
    ]
    player.accelerations = [0.0, 0.5]

    assert player.score_after(0) == 0.0
    assert player.score_after(9) == 2.5
    assert player.points == 2.5
    assert player.scores[1].game_points == 2.0
    assert player.tiebreaker_after(1, Tiebreaker.BUCHHOLZ) == 2.0
    assert player.tiebreaker_after(2, Tiebreaker.BUCHHOLZ) == 0.0
    assert player.acceleration_for(2) == 0.5
    assert player.acceleration_for(3) == 0.0


def test_game_properties():
    played = Game(1, "p2", Colour.WHITE, GameResult.WIN)
    forfeit = Game(1, "p2", Colour.WHITE, GameResult.FORFEIT_WIN)
    pab = Game(1, result=GameResult.PAIRING_ALLOCATED_BYE)
    half = Game(1, result=GameResult.HALF_POINT_BYE)

    assert played.was_played and not played.is_unplayed_win
    assert not forfeit.was_played and forfeit.is_unplayed_win
    assert not pab.was_played and pab.participated_in_pairing
    assert half.is_unplayed_draw and not half.participated_in_pairing
    assert Game.default(3).result is GameResult.ZERO_POINT_BYE

    copy = played.copy()
    copy.result = GameResult.LOSS
    assert played.result is GameResult.WIN


def test_colour_invert():
    assert Colour.WHITE.invert() is Colour.BLACK
    assert Colour.BLACK.invert() is Colour.WHITE
    assert Colour.NONE.invert() is Colour.NONE


def test_tiebreaker_metadata():
    assert Tiebreaker.BUCHHOLZ.abbreviation == "Buch"
    assert Tiebreaker.ROUNDS_WON.decimal_places == 0
    assert Tiebreaker.SONNEBORN_BERGER.decimal_places == 1
    assert Tiebreaker.KOYA.display_name


def test_configuration_round_trip_through_dict():
    configuration = Configuration(
        match_by_rank=True,
        initial_colour=Colour.BLACK,
        expected_rounds=7,
        points_for_win=3.0,
        tiebreakers=[Tiebreaker.DIRECT_ENCOUNTER, Tiebreaker.ARO],
    )
    data = configuration.to_dict()
    assert data["initial_colour"] == "b"
    assert data["tiebreakers"] == ["direct_encounter", "aro"]
    assert Configuration.from_dict(data) == configuration
    assert Configuration.from_dict({}) == Configuration()


def test_configuration_detects_point_changes():
    base = Configuration(tiebreakers=[Tiebreaker.KOYA])
    assert not base.point_schedule_differs(base.with_tiebreakers([Tiebreaker.ARO]))
    assert base.point_schedule_differs(Configuration(points_for_loss=0.5))
    assert base.with_tiebreakers([Tiebreaker.ARO]).tiebreakers == [Tiebreaker.ARO]
    assert base.tiebreakers == [Tiebreaker.KOYA]


def test_generate_id_is_unique():
    assert generate_id("Player") != generate_id("Player")
    assert generate_id("Player").startswith("player_")


def test_setup_logger_reads_level_from_environment(monkeypatch):
    monkeypatch.setenv("GAMBIT_STANDINGS_LOG_LEVEL", "debug")
    logger = setup_logger("gambitstandings.tests.verbose")
    assert logger.level == logging.DEBUG
    assert len(setup_logger("gambitstandings.tests.verbose").handlers) == 1


def test_setup_logger_ignores_unknown_level(monkeypatch):
    monkeypatch.setenv("GAMBIT_STANDINGS_LOG_LEVEL", "chatty")
    logger = setup_logger("gambitstandings.tests.fallback")
    assert logger.level == logging.INFO


@pytest.mark.parametrize("result", [GameResult.ZERO_POINT_BYE, GameResult.FULL_POINT_BYE])
def test_bye_results(result):
    assert result.is_bye
    assert not GameResult.WIN.is_bye
