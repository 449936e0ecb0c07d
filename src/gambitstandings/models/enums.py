"""Enumerations shared across the data model."""

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

from enum import Enum

from gambitstandings import constants


class Colour(Enum):
    """Piece colour a player had in a round (tournament report codes)."""

    WHITE = "w"
    BLACK = "b"
    NONE = "-"

    def invert(self) -> "Colour":
        if self is Colour.WHITE:
            return Colour.BLACK
        if self is Colour.BLACK:
            return Colour.WHITE
        return Colour.NONE


class GameResult(Enum):
    """Outcome of a round from one player's point of view.

    Values are the single-character codes used by tournament report files.
    """

    FORFEIT_LOSS = "-"
    FORFEIT_WIN = "+"
    UNRATED_WIN = "W"
    UNRATED_DRAW = "D"
    UNRATED_LOSS = "L"
    LOSS = "0"
    DRAW = "="
    WIN = "1"
    HALF_POINT_BYE = "H"
    FULL_POINT_BYE = "F"
    PAIRING_ALLOCATED_BYE = "U"
    ZERO_POINT_BYE = "Z"
    UNASSIGNED = " "

    @property
    def is_bye(self) -> bool:
        return self in BYE_RESULTS


BYE_RESULTS = frozenset(
    {
        GameResult.HALF_POINT_BYE,
        GameResult.FULL_POINT_BYE,
        GameResult.PAIRING_ALLOCATED_BYE,
        GameResult.ZERO_POINT_BYE,
    }
)
FORFEIT_RESULTS = frozenset({GameResult.FORFEIT_WIN, GameResult.FORFEIT_LOSS})
# Results that count as a won game over the board
WON_GAME_RESULTS = frozenset({GameResult.WIN, GameResult.UNRATED_WIN})
DRAWN_GAME_RESULTS = frozenset({GameResult.DRAW, GameResult.UNRATED_DRAW})
LOST_GAME_RESULTS = frozenset({GameResult.LOSS, GameResult.UNRATED_LOSS})
# Results that count as a won/lost round, forfeits included
WON_ROUND_RESULTS = WON_GAME_RESULTS | {GameResult.FORFEIT_WIN}
LOST_ROUND_RESULTS = LOST_GAME_RESULTS | {GameResult.FORFEIT_LOSS}


class Tiebreaker(Enum):
    """Closed set of tiebreak systems the calculator knows about."""

    DIRECT_ENCOUNTER = constants.TB_DIRECT_ENCOUNTER
    CUMULATIVE = constants.TB_CUMULATIVE
    CUMULATIVE_CUT_1 = constants.TB_CUMULATIVE_CUT_1
    OPPOSITION_CUMULATIVE = constants.TB_OPPOSITION_CUMULATIVE
    PROGRESSIVE = constants.TB_PROGRESSIVE
    PROGRESSIVE_CUT_1 = constants.TB_PROGRESSIVE_CUT_1
    ROUNDS_WON = constants.TB_ROUNDS_WON
    ROUNDS_WON_BLACK_PIECES = constants.TB_ROUNDS_WON_BLACK_PIECES
    TIME_OF_LOSS = constants.TB_TIME_OF_LOSS
    PLAYED_BLACKS = constants.TB_PLAYED_BLACKS
    KASHDAN = constants.TB_KASHDAN
    SONNEBORN_BERGER = constants.TB_SONNEBORN_BERGER
    BUCHHOLZ = constants.TB_BUCHHOLZ
    BUCHHOLZ_CUT_1 = constants.TB_BUCHHOLZ_CUT_1
    MEDIAN_BUCHHOLZ = constants.TB_MEDIAN_BUCHHOLZ
    SOLKOFF = constants.TB_SOLKOFF
    MODIFIED_MEDIAN = constants.TB_MODIFIED_MEDIAN
    ARO = constants.TB_ARO
    AROC_1 = constants.TB_AROC_1
    OPPOSITION_PERFORMANCE = constants.TB_OPPOSITION_PERFORMANCE
    KOYA = constants.TB_KOYA

    @property
    def display_name(self) -> str:
        return constants.TIEBREAK_NAMES[self.value]

    @property
    def abbreviation(self) -> str:
        return constants.TIEBREAK_ABBREVIATIONS[self.value]

    @property
    def decimal_places(self) -> int:
        if self.value in constants.INTEGER_TIEBREAKS:
            return 0
        return constants.DEFAULT_DECIMAL_PLACES


class ResultType(Enum):
    """Board results an arbiter can enter for a pairing."""

    UNASSIGNED = "unassigned"
    WHITE_WIN = "1-0"
    BLACK_WIN = "0-1"
    DRAW = "1/2-1/2"
    WHITE_FORFEIT_WIN = "+--"
    BLACK_FORFEIT_WIN = "--+"
    FORFEIT = "---"
    WHITE_HALF_POINT = "1/2-0"
    BLACK_HALF_POINT = "0-1/2"
    ZERO_ZERO = "0-0"
