"""Tiebreak orders prescribed by federations and leagues."""

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

from typing import Dict, Tuple

from gambitstandings.models import Tiebreaker

# US Chess rulebook 34E, Swiss tiebreaks
USCF_SWISS: Tuple[Tiebreaker, ...] = (
    Tiebreaker.MODIFIED_MEDIAN,
    Tiebreaker.SOLKOFF,
    Tiebreaker.CUMULATIVE,
    Tiebreaker.OPPOSITION_CUMULATIVE,
)

MADISON_CITY_SWISS: Tuple[Tiebreaker, ...] = (
    Tiebreaker.MODIFIED_MEDIAN,
    Tiebreaker.CUMULATIVE,
    Tiebreaker.SOLKOFF,
    Tiebreaker.OPPOSITION_CUMULATIVE,
)

MADISON_CITY_ROUND_ROBIN: Tuple[Tiebreaker, ...] = (
    Tiebreaker.SONNEBORN_BERGER,
    Tiebreaker.DIRECT_ENCOUNTER,
)

# FIDE Handbook C.02 13.16.4
FIDE_SWISS_RATINGS_NOT_CONSISTENT: Tuple[Tiebreaker, ...] = (
    Tiebreaker.BUCHHOLZ_CUT_1,
    Tiebreaker.BUCHHOLZ,
    Tiebreaker.SONNEBORN_BERGER,
    Tiebreaker.PROGRESSIVE,
    Tiebreaker.DIRECT_ENCOUNTER,
    Tiebreaker.ROUNDS_WON,
    Tiebreaker.ROUNDS_WON_BLACK_PIECES,
)

# FIDE Handbook C.02 13.16.5
FIDE_SWISS_RATINGS_CONSISTENT: Tuple[Tiebreaker, ...] = (
    Tiebreaker.BUCHHOLZ_CUT_1,
    Tiebreaker.BUCHHOLZ,
    Tiebreaker.DIRECT_ENCOUNTER,
    Tiebreaker.AROC_1,
    Tiebreaker.ROUNDS_WON,
    Tiebreaker.ROUNDS_WON_BLACK_PIECES,
    Tiebreaker.PLAYED_BLACKS,
    Tiebreaker.SONNEBORN_BERGER,
)

# FIDE Handbook C.02 13.16.2
FIDE_INDIVIDUAL_ROUND_ROBIN: Tuple[Tiebreaker, ...] = (
    Tiebreaker.DIRECT_ENCOUNTER,
    Tiebreaker.ROUNDS_WON,
    Tiebreaker.SONNEBORN_BERGER,
    Tiebreaker.KOYA,
)

TIEBREAK_SETS: Dict[str, Tuple[Tiebreaker, ...]] = {
    "USCF Swiss": USCF_SWISS,
    "Madison City Swiss": MADISON_CITY_SWISS,
    "Madison City Round Robin": MADISON_CITY_ROUND_ROBIN,
    "FIDE Swiss (ratings not consistent)": FIDE_SWISS_RATINGS_NOT_CONSISTENT,
    "FIDE Swiss (ratings consistent)": FIDE_SWISS_RATINGS_CONSISTENT,
    "FIDE Individual Round Robin": FIDE_INDIVIDUAL_ROUND_ROBIN,
}
