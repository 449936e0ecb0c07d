"""Error values returned by validators and tournament operations.

Problems with tournament data are never raised. Operations return one of the
``TournamentError`` subclasses below (or a list of them for batch imports),
each tagged with an ``ErrorKind`` and carrying the round and player
information an arbiter needs to fix the source data.
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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    INVALID_LINE = "invalid_line"
    INVALID_VALUE = "invalid_value"
    POINTS_MISMATCH = "points_mismatch"
    PAIRING_CONTRADICTION = "pairing_contradiction"
    ACC_MISSING_ENTRY = "acc_missing_entry"
    TOO_MANY_ACCELERATIONS = "too_many_accelerations"
    INVALID_PAIR = "invalid_pair"
    PAIRING_ERROR = "pairing_error"
    INVALID_RESULT = "invalid_result"
    NO_VALID_PAIRING = "no_valid_pairing"
    PAIRING_ENGINE_FAILURE = "pairing_engine_failure"
    RESULTS_MISSING = "results_missing"
    ALL_ROUNDS_PLAYED = "all_rounds_played"
    PLAYER_HAS_GAMES = "player_has_games"


@dataclass(frozen=True)
class TournamentError:
    """Base class of all error values. ``kind`` identifies the variant."""

    @property
    def kind(self) -> ErrorKind:
        raise NotImplementedError

    def details(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.details()


def is_error(value: Any) -> bool:
    """True if ``value`` is an error value rather than a regular result."""
    return isinstance(value, TournamentError)


@dataclass(frozen=True)
class InvalidLine(TournamentError):
    line_number: int
    line: str

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.INVALID_LINE

    def details(self) -> str:
        return f"Invalid line {self.line_number}: {self.line!r}"


@dataclass(frozen=True)
class InvalidValue(TournamentError):
    value: str
    what: Optional[str] = None

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.INVALID_VALUE

    def details(self) -> str:
        if self.what:
            return f"Invalid value of {self.what}: {self.value!r}"
        return f"Invalid value: {self.value!r}"


@dataclass(frozen=True)
class PointsMismatch(TournamentError):
    player: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.POINTS_MISMATCH

    def details(self) -> str:
        return (
            f"Declared points of player {self.player} do not match "
            "the points calculated from the results"
        )


@dataclass(frozen=True)
class PairingContradiction(TournamentError):
    """A played game whose reciprocal record disagrees.

    ``round`` is 1-based; ``first_player`` and ``second_player`` are starting
    numbers, with ``first_player`` the side whose record was being checked.
    """

    round: int
    first_player: int
    second_player: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.PAIRING_CONTRADICTION

    def details(self) -> str:
        return (
            "Match contradicts the entry for the opponent. "
            f"Round {self.round}, players: {self.first_player}, {self.second_player}"
        )


@dataclass(frozen=True)
class AccMissingEntry(TournamentError):
    player: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.ACC_MISSING_ENTRY

    def details(self) -> str:
        return f"Acceleration entry for player {self.player} who is not registered"


@dataclass(frozen=True)
class TooManyAccelerations(TournamentError):
    player: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.TOO_MANY_ACCELERATIONS

    def details(self) -> str:
        return f"Player {self.player} has more acceleration entries than rounds"


@dataclass(frozen=True)
class InvalidPair(TournamentError):
    """A player appears on more than one board; ``number`` is the 1-based board."""

    number: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.INVALID_PAIR

    def details(self) -> str:
        return f"Pair {self.number} contains a player already assigned in this round"


@dataclass(frozen=True)
class PairingError(TournamentError):
    """A player cannot be given the new round's record.

    ``has_pairing`` is True when the player already has a game for the round,
    False when the player was left unpaired without a bye or absence.
    """

    round: int
    player: int
    has_pairing: bool

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.PAIRING_ERROR

    def details(self) -> str:
        if self.has_pairing:
            return f"Player {self.player} already has a game in round {self.round}"
        return f"Player {self.player} is not paired in round {self.round} and has no bye"


@dataclass(frozen=True)
class InvalidResult(TournamentError):
    value: str

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.INVALID_RESULT

    def details(self) -> str:
        return f"Cannot interpret {self.value!r} as a game result"


@dataclass(frozen=True)
class NoValidPairing(TournamentError):
    round: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.NO_VALID_PAIRING

    def details(self) -> str:
        return f"The pairing engine found no valid pairing for round {self.round}"


@dataclass(frozen=True)
class PairingEngineFailure(TournamentError):
    status_code: int
    message: str = ""

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.PAIRING_ENGINE_FAILURE

    def details(self) -> str:
        text = f"Pairing engine failed with status {self.status_code}"
        return f"{text}: {self.message}" if self.message else text


@dataclass(frozen=True)
class ResultsMissing(TournamentError):
    round: int
    board: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.RESULTS_MISSING

    def details(self) -> str:
        return f"Result on board {self.board} of round {self.round} is missing"


@dataclass(frozen=True)
class AllRoundsPlayed(TournamentError):
    rounds: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.ALL_ROUNDS_PLAYED

    def details(self) -> str:
        return f"All {self.rounds} rounds have already been played"


@dataclass(frozen=True)
class PlayerHasGames(TournamentError):
    player: int
    round: int

    @property
    def kind(self) -> ErrorKind:
        return ErrorKind.PLAYER_HAS_GAMES

    def details(self) -> str:
        return (
            f"Player {self.player} took part in round {self.round} "
            "and cannot be deleted"
        )
