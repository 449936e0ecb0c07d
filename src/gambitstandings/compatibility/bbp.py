"""BBP Pairings output handling.

The pairing engine runs outside this package. Its caller hands over the exit
status together with the captured output; this module turns that into the
raw lines ``PairingReader.from_raw`` expects, or into an error value.
"""

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

from enum import IntEnum
from typing import List, Union

from gambitstandings.utils import setup_logger
from gambitstandings.validation.errors import (
    NoValidPairing,
    PairingEngineFailure,
    TournamentError,
)

logger = setup_logger(__name__)


class BbpStatusCode(IntEnum):
    """Exit codes of the bbpPairings executable."""

    SUCCESS = 0
    NO_VALID_PAIRING = 1
    UNEXPECTED_ERROR = 2
    INVALID_REQUEST = 3
    LIMIT_EXCEEDED = 4
    FILE_ERROR = 5


class BbpResult:
    """Captured run of the pairing engine.

    Attributes:
        status_code: Exit code of the engine
        data: Lines of the pairings file
        error_output: Lines the engine wrote to stderr
    """

    def __init__(self, status_code: int, data: str = "", error_output: str = ""):
        self.status_code = status_code
        self.data: List[str] = [line for line in data.splitlines() if line.strip()]
        self.error_output: List[str] = [
            line for line in error_output.splitlines() if line.strip()
        ]

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.status_code == BbpStatusCode.SUCCESS

    def __repr__(self) -> str:
        try:
            status = BbpStatusCode(self.status_code).name
        except ValueError:
            status = str(self.status_code)
        return f"BbpResult({status}, {len(self.data)} line(s))"


def interpret_bbp_result(
    result: BbpResult, round_number: int
) -> Union[List[str], TournamentError]:
    """Pairing lines of a successful run, or the matching error value."""
    if result:
        return result.data

    logger.warning(
        "BBP pairing failed for round %d with status %s: %s",
        round_number,
        result.status_code,
        " ".join(result.error_output) or "no output",
    )
    if result.status_code == BbpStatusCode.NO_VALID_PAIRING:
        return NoValidPairing(round=round_number)
    return PairingEngineFailure(
        status_code=result.status_code, message=" ".join(result.error_output)
    )
