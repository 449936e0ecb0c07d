"""Reading pairings for a round and writing them into players' histories.

A ``PairingReader`` holds the boards and unpaired players of one round.
It can be built from the pairing engine's output, from the games already
recorded for a round, or by hand through ``add_pair``/``remove_pair``.
``validate_and_assign_pairs`` then writes the round's ``Game`` records to
both sides of every board, or to nobody if anything is wrong.
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
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from gambitstandings.models import Colour, Configuration, Game, GameResult
from gambitstandings.models.enums import BYE_RESULTS
from gambitstandings.tournament.ranking import pairing_order
from gambitstandings.type_hints import PlayersById
from gambitstandings.utils import setup_logger
from gambitstandings.validation.errors import (
    InvalidLine,
    InvalidPair,
    InvalidValue,
    PairingError,
    TournamentError,
)

logger = setup_logger(__name__)

UNPAIRED_STATUSES = BYE_RESULTS | {GameResult.UNASSIGNED}


@dataclass
class Pair:
    """A board of one round, players referenced by id."""

    round: int
    number: int
    white: str
    black: str


def _parse_index(token: str, player_count: int) -> Union[int, InvalidValue]:
    try:
        index = int(token)
    except ValueError:
        return InvalidValue(value=token, what="player index")
    if not 0 <= index <= player_count:
        return InvalidValue(value=token, what="player index")
    return index


class PairingReader:
    """Boards and unpaired players of one round.

    Attributes:
        players: All players keyed by id
        round: Round the pairings are for, 1-based
        pairs: Boards, kept sorted and numbered from 1
        unpaired: Status of every player without a board (a bye result, or
            ``GameResult.UNASSIGNED`` while undecided)
    """

    def __init__(
        self,
        players: PlayersById,
        round_number: int,
        configuration: Configuration,
        pairs: Iterable[Tuple[str, str]] = (),
        unpaired: Optional[Dict[str, GameResult]] = None,
    ) -> None:
        self.players = players
        self.round = round_number
        self.configuration = configuration
        self.pairs: List[Pair] = [
            Pair(round_number, number, white, black)
            for number, (white, black) in enumerate(pairs, start=1)
        ]
        self.unpaired: Dict[str, GameResult] = dict(unpaired or {})
        self.calculate_not_paired_players()
        self.sort_pairs()

    # ========== Construction ==========

    @classmethod
    def from_raw(
        cls,
        players: PlayersById,
        round_number: int,
        configuration: Configuration,
        lines: Sequence[str],
    ) -> Union["PairingReader", TournamentError]:
        """Read the pairing engine's output.

        The first line holds the number of boards; every following line two
        1-based player indices (white, black) in pairing order. Index 0, or
        the same index twice, gives the player the pairing-allocated bye.

        Returns:
            The reader, or ``InvalidLine``/``InvalidValue`` for malformed output
        """
        ordered = pairing_order(players.values(), configuration.match_by_rank)
        content = [(number, line.strip()) for number, line in enumerate(lines, start=1)]
        content = [(number, line) for number, line in content if line]
        if not content:
            return InvalidLine(line_number=1, line="")

        count_line, count_text = content[0]
        try:
            expected = int(count_text)
        except ValueError:
            return InvalidLine(line_number=count_line, line=count_text)
        if expected != len(content) - 1:
            return InvalidValue(value=count_text, what="number of pairs")

        pairs: List[Tuple[str, str]] = []
        unpaired: Dict[str, GameResult] = {}
        for line_number, line in content[1:]:
            tokens = line.split()
            if len(tokens) != 2:
                return InvalidLine(line_number=line_number, line=line)
            indices = []
            for token in tokens:
                index = _parse_index(token, len(ordered))
                if isinstance(index, InvalidValue):
                    return index
                indices.append(index)

            white, black = indices
            if white == 0 and black == 0:
                return InvalidLine(line_number=line_number, line=line)
            if white == 0 or black == 0 or white == black:
                bye_player = ordered[max(white, black) - 1]
                unpaired[bye_player.id] = GameResult.PAIRING_ALLOCATED_BYE
            else:
                pairs.append((ordered[white - 1].id, ordered[black - 1].id))

        return cls(players, round_number, configuration, pairs, unpaired)

    @classmethod
    def from_games(
        cls, players: PlayersById, round_number: int, configuration: Configuration
    ) -> "PairingReader":
        """Recover the boards of a round from the recorded games."""
        pairs: List[Tuple[str, str]] = []
        unpaired: Dict[str, GameResult] = {}
        seen: Set[str] = set()

        for player in pairing_order(players.values(), configuration.match_by_rank):
            if player.id in seen:
                continue
            game = player.game_for_round(round_number)
            if game is None:
                continue
            if game.opponent is None or game.opponent not in players:
                unpaired[player.id] = (
                    game.result
                    if game.result in UNPAIRED_STATUSES
                    else GameResult.UNASSIGNED
                )
                seen.add(player.id)
                continue

            if game.colour is Colour.BLACK:
                pairs.append((game.opponent, player.id))
            else:
                pairs.append((player.id, game.opponent))
            seen.update((player.id, game.opponent))

        return cls(players, round_number, configuration, pairs, unpaired)

    # ========== Board order ==========

    def _strength(self, player_id: str) -> Tuple[float, int]:
        player = self.players[player_id]
        return (-player.score_after(self.round - 1), player.rank)

    def sort_pairs(self) -> None:
        """Order boards by their stronger player, then by the weaker one.

        Strength is the score before this round, ties broken by starting rank.
        """
        self.pairs.sort(
            key=lambda pair: sorted(
                (self._strength(pair.white), self._strength(pair.black))
            )
        )
        for number, pair in enumerate(self.pairs, start=1):
            pair.number = number

    # ========== Manual edits ==========

    def add_pair(self, white_id: str, black_id: str) -> bool:
        """Put two unpaired players on a new board."""
        if white_id == black_id:
            logger.warning("Cannot pair player %s against themselves", white_id)
            return False
        if white_id not in self.unpaired or black_id not in self.unpaired:
            logger.warning(
                "Round %d: %s and %s must both be unpaired",
                self.round,
                white_id,
                black_id,
            )
            return False

        del self.unpaired[white_id]
        del self.unpaired[black_id]
        self.pairs.append(Pair(self.round, len(self.pairs) + 1, white_id, black_id))
        self.sort_pairs()
        return True

    def remove_pair(self, number: int) -> bool:
        """Dissolve board ``number``; both players become unpaired."""
        for pair in self.pairs:
            if pair.number == number:
                self.pairs.remove(pair)
                self.unpaired[pair.white] = GameResult.UNASSIGNED
                self.unpaired[pair.black] = GameResult.UNASSIGNED
                self.sort_pairs()
                return True
        logger.warning("Round %d has no board %d", self.round, number)
        return False

    def change_unpaired_status(self, player_id: str, status: GameResult) -> bool:
        """Set the bye (or undecided status) of an unpaired player."""
        if player_id not in self.unpaired or status not in UNPAIRED_STATUSES:
            return False
        self.unpaired[player_id] = status
        return True

    def calculate_not_paired_players(self) -> None:
        """Add every player without a board or status to ``unpaired``.

        Absent players get a zero-point bye, everybody else is undecided.
        """
        paired = {pair.white for pair in self.pairs} | {pair.black for pair in self.pairs}
        for player in self.players.values():
            if player.id in paired or player.id in self.unpaired:
                continue
            self.unpaired[player.id] = (
                GameResult.ZERO_POINT_BYE
                if player.is_absent_from_round(self.round)
                else GameResult.UNASSIGNED
            )

    # ========== Applying ==========

    def validate_and_assign_pairs(self) -> Optional[TournamentError]:
        """Write this round's games to every player, all or nothing.

        Returns:
            None on success; ``InvalidPair`` if a player sits on two boards
            (or on a board and in the unpaired pool); ``PairingError`` if a
            player already has a game for the round, or is unpaired without
            a bye or absence.
        """
        new_games: Dict[str, Game] = {}
        for pair in self.pairs:
            if (
                pair.white == pair.black
                or pair.white in new_games
                or pair.black in new_games
                or pair.white in self.unpaired
                or pair.black in self.unpaired
            ):
                logger.warning("Round %d: invalid pair %d", self.round, pair.number)
                return InvalidPair(number=pair.number)
            new_games[pair.white] = Game(self.round, pair.black, Colour.WHITE)
            new_games[pair.black] = Game(self.round, pair.white, Colour.BLACK)

        ordered = pairing_order(self.players.values(), self.configuration.match_by_rank)
        for player in ordered:
            existing = player.game_for_round(self.round)
            if player.id in new_games:
                if existing is not None:
                    return PairingError(self.round, player.pairing_number, True)
                continue
            if existing is not None:
                continue
            status = self.unpaired.get(player.id, GameResult.UNASSIGNED)
            if status is GameResult.UNASSIGNED:
                logger.warning(
                    "Round %d: player %s left without a pairing",
                    self.round,
                    player.name,
                )
                return PairingError(self.round, player.pairing_number, False)
            new_games[player.id] = Game(self.round, result=status)

        for player in ordered:
            game = new_games.get(player.id)
            if game is None:
                continue
            while len(player.games) < self.round - 1:
                player.games.append(Game.default(len(player.games) + 1))
            player.games.append(game)

        logger.info(
            "Round %d: assigned %d board(s) and %d bye(s)",
            self.round,
            len(self.pairs),
            len(new_games) - 2 * len(self.pairs),
        )
        return None
