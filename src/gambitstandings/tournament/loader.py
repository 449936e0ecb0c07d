"""Post-processing of tournament data read from a report file.

The file parser hands over players with their raw game histories. Before
standings can be trusted the data is checked as a whole: every problem is
collected, so the arbiter can fix the file in one go.
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

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from gambitstandings.models import Colour, Configuration, Player
from gambitstandings.tournament.consistency import (
    check_and_assign_accelerations,
    find_pair_contradictions,
    validate_scores,
)
from gambitstandings.tournament.pairings import PairingReader
from gambitstandings.tournament.ranking import pairing_order
from gambitstandings.tournament.scoring import (
    calculate_played_rounds,
    even_up_games_history,
)
from gambitstandings.tournament.tournament import Tournament
from gambitstandings.utils import setup_logger
from gambitstandings.validation.errors import InvalidLine, InvalidValue, TournamentError

logger = setup_logger(__name__)

# Acceleration record: four characters of record type, the starting number,
# then one "pp.p" bonus per round
_ACCELERATION_PATTERN = re.compile(
    r"^.{4}(?P<number>[ \d]{4})(?P<values>(?: [ \d]\d[.,]\d)*)\s*$"
)


class LoadWarning(Enum):
    INITIAL_COLOUR_INFERRED = "initial_colour_inferred"
    ROUND_COUNT_EXTENDED = "round_count_extended"
    HOLES_IN_NUMBERS = "holes_in_numbers"


@dataclass
class LoadReport:
    """Outcome of ``load_tournament``.

    Attributes:
        tournament: The loaded tournament, None when there were errors
        errors: Every problem found, in the order the checks ran
        warnings: Non-fatal adjustments made to the data
    """

    tournament: Optional[Tournament] = None
    errors: List[TournamentError] = field(default_factory=list)
    warnings: List[LoadWarning] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow using report in boolean context: if report: ..."""
        return self.tournament is not None and not self.errors


def parse_acceleration(line: str) -> Union[Tuple[int, List[float]], TournamentError]:
    """Parse an acceleration record into (starting number, bonus per round).

    Example:
        >>> parse_acceleration("XXA    3  1.0  1.0")
        (3, [1.0, 1.0])
    """
    match = _ACCELERATION_PATTERN.match(line)
    if match is None:
        return InvalidLine(line_number=0, line=line)

    number_text = match.group("number").strip()
    if not number_text:
        return InvalidValue(value=match.group("number"), what="starting number")
    values = [
        float(token.replace(",", ".")) for token in match.group("values").split()
    ]
    return int(number_text), values


def infer_initial_colour(players: Sequence[Player], played_rounds: int) -> Colour:
    """Colour the top board had in round 1, derived from the first coloured game.

    Walks the pairing order round by round; each earlier participant flips
    the expected colour, since colours alternate down the boards.
    """
    invert = False
    for index in range(played_rounds):
        for player in players:
            if index >= len(player.games):
                continue
            game = player.games[index]
            if not game.participated_in_pairing:
                continue
            if game.colour is not Colour.NONE:
                return game.colour.invert() if invert else game.colour
            invert = not invert
    return Colour.NONE


def assign_byes_and_lates(
    players: Iterable[Player], played_rounds: int, byes: Iterable[int] = ()
) -> None:
    """Derive absences from the imported histories.

    Rounds without a pairing become ``not_played``; a player whose first
    pairing comes after round 1 is marked late from that round.

    Args:
        players: Imported players
        played_rounds: Last round in which anybody was paired
        byes: Starting numbers of players who asked to sit out the next round
    """
    players = list(players)
    next_round = played_rounds + 1
    for player in players:
        player.not_played = {
            game.round for game in player.games if not game.participated_in_pairing
        }
        late = next(
            (game.round for game in player.games if game.participated_in_pairing),
            next_round,
        )
        if late > 1:
            player.late = late

    by_number = {player.pairing_number: player for player in players}
    for number in byes:
        player = by_number.get(number)
        if player is None:
            logger.warning("Ignoring bye request of unknown player %d", number)
            continue
        player.not_played.add(next_round)


def detect_holes_in_numbers(players: Iterable[Player]) -> bool:
    numbers = [player.pairing_number for player in players]
    return bool(numbers) and max(numbers) != len(numbers)


def load_tournament(
    players: Sequence[Player],
    configuration: Configuration,
    accelerations: Iterable[Tuple[int, Sequence[float]]] = (),
    name: str = "Untitled Tournament",
    byes: Iterable[int] = (),
) -> LoadReport:
    """Validate imported players and build a tournament from them.

    Records after the last paired round stay in the histories and are
    treated as absences from the next round.

    Args:
        players: Players with their game histories and declared totals
        configuration: Configuration read from the same file
        accelerations: (starting number, bonus per round) records
        name: Tournament name
        byes: Starting numbers of players absent from the next round

    Returns:
        LoadReport with the tournament, or with every error found
    """
    report = LoadReport()
    by_number = {player.pairing_number: player for player in players}
    by_id = {player.id: player for player in players}

    report.errors.extend(
        check_and_assign_accelerations(
            by_number, accelerations, configuration.expected_rounds
        )
    )

    played_rounds = calculate_played_rounds(players)
    report.errors.extend(validate_scores(players, configuration, played_rounds))

    even_up_games_history(players, played_rounds)
    report.errors.extend(find_pair_contradictions(by_id))

    if report.errors:
        logger.warning("Import rejected with %d error(s)", len(report.errors))
        return report

    assign_byes_and_lates(players, played_rounds, byes)

    if configuration.expected_rounds < played_rounds:
        configuration = replace(configuration, expected_rounds=played_rounds)
        report.warnings.append(LoadWarning.ROUND_COUNT_EXTENDED)

    if configuration.initial_colour is Colour.NONE:
        ordered = pairing_order(players, configuration.match_by_rank)
        colour = infer_initial_colour(ordered, played_rounds)
        if colour is not Colour.NONE:
            configuration = replace(configuration, initial_colour=colour)
            report.warnings.append(LoadWarning.INITIAL_COLOUR_INFERRED)

    if detect_holes_in_numbers(players):
        report.warnings.append(LoadWarning.HOLES_IN_NUMBERS)

    pairs = [
        PairingReader.from_games(by_id, round_number, configuration).pairs
        for round_number in range(1, played_rounds + 1)
    ]
    tournament = Tournament(players, configuration, name=name, pairs=pairs)
    tournament.refresh()
    report.tournament = tournament
    logger.info(
        "Loaded %s: %d players, %d rounds", name, len(players), played_rounds
    )
    return report
