"""Constants for Gambit Standings."""

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

# Logging
LOG_LEVEL_ENV_VAR = "GAMBIT_STANDINGS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Default point schedule (configurable per tournament)
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0
ZERO_POINT_BYE_SCORE = 0.0
FORFEIT_LOSS_SCORE = 0.0
PAIRING_ALLOCATED_BYE_SCORE = 1.0

# Export limits of the fixed-width tournament report format
MAX_EXPORT_RATING = 9999
MAX_EXPORT_POINTS = 99.9
DEFAULT_DECIMAL_PLACES = 1

# Modified median cuts two scores from each end from this round count on
MODIFIED_MEDIAN_LONG_EVENT_ROUNDS = 9

# Opposition performance rating adjustment per win/loss
PERFORMANCE_RATING_DELTA = 400

# Tiebreaker Keys
TB_DIRECT_ENCOUNTER = "direct_encounter"
TB_CUMULATIVE = "cumulative"
TB_CUMULATIVE_CUT_1 = "cumulative_cut1"
TB_OPPOSITION_CUMULATIVE = "opposition_cumulative"
TB_PROGRESSIVE = "progressive"
TB_PROGRESSIVE_CUT_1 = "progressive_cut1"
TB_ROUNDS_WON = "rounds_won"
TB_ROUNDS_WON_BLACK_PIECES = "rounds_won_black"
TB_TIME_OF_LOSS = "time_of_loss"
TB_PLAYED_BLACKS = "played_blacks"
TB_KASHDAN = "kashdan"
TB_SONNEBORN_BERGER = "sonneborn_berger"
TB_BUCHHOLZ = "buchholz"
TB_BUCHHOLZ_CUT_1 = "buchholz_cut1"
TB_MEDIAN_BUCHHOLZ = "median_buchholz"
TB_SOLKOFF = "solkoff"
TB_MODIFIED_MEDIAN = "modified_median"
TB_ARO = "aro"
TB_AROC_1 = "aroc1"
TB_OPPOSITION_PERFORMANCE = "opposition_performance"
TB_KOYA = "koya"

# Default display names for tiebreaks
TIEBREAK_NAMES = {
    TB_DIRECT_ENCOUNTER: "Direct Encounter",
    TB_CUMULATIVE: "Cumulative",
    TB_CUMULATIVE_CUT_1: "Cumulative Cut 1",
    TB_OPPOSITION_CUMULATIVE: "Opposition Cumulative",
    TB_PROGRESSIVE: "Progressive",
    TB_PROGRESSIVE_CUT_1: "Progressive Cut 1",
    TB_ROUNDS_WON: "Rounds Won",
    TB_ROUNDS_WON_BLACK_PIECES: "Rounds Won with Black",
    TB_TIME_OF_LOSS: "Time of Loss",
    TB_PLAYED_BLACKS: "Games Played with Black",
    TB_KASHDAN: "Kashdan",
    TB_SONNEBORN_BERGER: "Sonneborn-Berger",
    TB_BUCHHOLZ: "Buchholz",
    TB_BUCHHOLZ_CUT_1: "Buchholz Cut 1",
    TB_MEDIAN_BUCHHOLZ: "Median Buchholz",
    TB_SOLKOFF: "Solkoff",
    TB_MODIFIED_MEDIAN: "Modified Median",
    TB_ARO: "Average Rating of Opponents",
    TB_AROC_1: "Average Rating of Opponents Cut 1",
    TB_OPPOSITION_PERFORMANCE: "Opposition Performance",
    TB_KOYA: "Koya System",
}

# Short column headers used in standings exports
TIEBREAK_ABBREVIATIONS = {
    TB_DIRECT_ENCOUNTER: "DirEn",
    TB_CUMULATIVE: "Cumul",
    TB_CUMULATIVE_CUT_1: "Cuml1",
    TB_OPPOSITION_CUMULATIVE: "OpCuml",
    TB_PROGRESSIVE: "Prog",
    TB_PROGRESSIVE_CUT_1: "Prog1",
    TB_ROUNDS_WON: "RWon",
    TB_ROUNDS_WON_BLACK_PIECES: "RWnB",
    TB_TIME_OF_LOSS: "TmOL",
    TB_PLAYED_BLACKS: "Blks",
    TB_KASHDAN: "Kash",
    TB_SONNEBORN_BERGER: "SoBe",
    TB_BUCHHOLZ: "Buch",
    TB_BUCHHOLZ_CUT_1: "Bch1",
    TB_MEDIAN_BUCHHOLZ: "MBch",
    TB_SOLKOFF: "SOff",
    TB_MODIFIED_MEDIAN: "ModM",
    TB_ARO: "ARO",
    TB_AROC_1: "ARO1",
    TB_OPPOSITION_PERFORMANCE: "OpPf",
    TB_KOYA: "Koya",
}

# Tiebreaks that are counts or ratings; everything else uses DEFAULT_DECIMAL_PLACES
INTEGER_TIEBREAKS = {
    TB_DIRECT_ENCOUNTER,
    TB_ROUNDS_WON,
    TB_ROUNDS_WON_BLACK_PIECES,
    TB_TIME_OF_LOSS,
    TB_PLAYED_BLACKS,
    TB_ARO,
    TB_AROC_1,
    TB_OPPOSITION_PERFORMANCE,
}
