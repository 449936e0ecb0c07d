"""Board results entered by the arbiter and their per-player result codes."""

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

import re
from typing import Dict, Optional, Tuple, Union

from gambitstandings.models import GameResult, ResultType
from gambitstandings.validation.errors import InvalidResult

RESULT_CODES: Dict[ResultType, Tuple[GameResult, GameResult]] = {
    ResultType.UNASSIGNED: (GameResult.UNASSIGNED, GameResult.UNASSIGNED),
    ResultType.WHITE_WIN: (GameResult.WIN, GameResult.LOSS),
    ResultType.BLACK_WIN: (GameResult.LOSS, GameResult.WIN),
    ResultType.DRAW: (GameResult.DRAW, GameResult.DRAW),
    ResultType.WHITE_FORFEIT_WIN: (GameResult.FORFEIT_WIN, GameResult.FORFEIT_LOSS),
    ResultType.BLACK_FORFEIT_WIN: (GameResult.FORFEIT_LOSS, GameResult.FORFEIT_WIN),
    ResultType.FORFEIT: (GameResult.FORFEIT_LOSS, GameResult.FORFEIT_LOSS),
    ResultType.WHITE_HALF_POINT: (GameResult.DRAW, GameResult.LOSS),
    ResultType.BLACK_HALF_POINT: (GameResult.LOSS, GameResult.DRAW),
    ResultType.ZERO_ZERO: (GameResult.LOSS, GameResult.LOSS),
}

_RESULT_TYPES = {codes: result_type for result_type, codes in RESULT_CODES.items()}

# One result code per side, "1-0", "1:0", "=-=", "+:-", "1/2-1/2", "½-0" ...
_RESULT_PATTERN = re.compile(r"^\s*([10=+\-])\s*[-:]\s*([10=+\-])\s*$")
_RESULT_CHARS = {
    "1": GameResult.WIN,
    "0": GameResult.LOSS,
    "=": GameResult.DRAW,
    "+": GameResult.FORFEIT_WIN,
    "-": GameResult.FORFEIT_LOSS,
}


def compute_result(white: GameResult, black: GameResult) -> Optional[ResultType]:
    """Board result matching the two per-player codes, or None."""
    return _RESULT_TYPES.get((white, black))


def parse_result(text: str) -> Union[ResultType, InvalidResult]:
    """Parse a result typed by the arbiter.

    Example:
        >>> parse_result("1/2-1/2")
        <ResultType.DRAW: '1/2-1/2'>
    """
    normalized = text.replace("1/2", "=").replace("½", "=")
    match = _RESULT_PATTERN.match(normalized)
    if match is None:
        return InvalidResult(value=text)

    white, black = (_RESULT_CHARS[char] for char in match.groups())
    result_type = compute_result(white, black)
    if result_type is None:
        return InvalidResult(value=text)
    return result_type
