"""Tournament facade tying players, pairings and recalculation together."""

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

from typing import Dict, List, Optional, Sequence, Union

from gambitstandings.exceptions import PlayerNotFoundException, RoundNotFoundException
from gambitstandings.models import Configuration, Game, Player, ResultType
from gambitstandings.models.enums import GameResult
from gambitstandings.tournament.consistency import validate_pair_consistency
from gambitstandings.tournament.pairings import Pair, PairingReader
from gambitstandings.tournament.pipeline import StandingsPipeline
from gambitstandings.tournament.ranking import Standings, compute_ranks, pairing_order
from gambitstandings.tournament.results import RESULT_CODES
from gambitstandings.tournament.scoring import (
    calculate_played_rounds,
    even_up_games_history,
)
from gambitstandings.utils import setup_logger
from gambitstandings.validation.errors import (
    AllRoundsPlayed,
    InvalidPair,
    PlayerHasGames,
    ResultsMissing,
    TournamentError,
)

logger = setup_logger(__name__)


class Tournament:
    """Manages the players of a tournament and keeps their standings current.

    Every mutation goes through this class so the recalculation pipeline
    knows what became stale. Standings are recomputed lazily when read.

    Attributes:
        name: Tournament name
        configuration: Point schedule and tiebreak order
        players: Players keyed by their stable id
        pairs: Boards of every played round, index = round - 1
    """

    def __init__(
        self,
        players: Sequence[Player] = (),
        configuration: Optional[Configuration] = None,
        name: str = "Untitled Tournament",
        pairs: Optional[List[List[Pair]]] = None,
    ) -> None:
        self.name = name
        self.configuration = configuration or Configuration()
        self.players: Dict[str, Player] = {player.id: player for player in players}
        self.pairs: List[List[Pair]] = pairs if pairs is not None else []
        self.pipeline = StandingsPipeline(self.players, self.configuration)

    # ========== Lookup ==========

    @property
    def played_rounds(self) -> int:
        return calculate_played_rounds(self.players.values())

    def get_player(self, player_id: str) -> Player:
        try:
            return self.players[player_id]
        except KeyError:
            raise PlayerNotFoundException(f"No player with id {player_id}") from None

    def get_player_by_number(self, pairing_number: int) -> Player:
        for player in self.players.values():
            if player.pairing_number == pairing_number:
                return player
        raise PlayerNotFoundException(f"No player with starting number {pairing_number}")

    def pairing_order(self) -> List[Player]:
        return pairing_order(self.players.values(), self.configuration.match_by_rank)

    def _check_round(self, round_number: int) -> None:
        if not 1 <= round_number <= len(self.pairs):
            raise RoundNotFoundException(f"Round {round_number} has not been paired")

    # ========== Standings ==========

    def refresh(self) -> None:
        self.pipeline.refresh()

    def standings(self, for_round: Optional[int] = None) -> Standings:
        """Ranked players after ``for_round`` (default: last played round)."""
        self.refresh()
        self.pipeline.require_fresh()
        round_number = self.played_rounds if for_round is None else for_round
        return compute_ranks(
            self.pairing_order(), self.configuration.tiebreakers, round_number
        )

    def update_configuration(self, configuration: Configuration) -> None:
        """Replace the configuration, invalidating whatever depends on it."""
        previous = self.configuration
        self.configuration = configuration
        self.pipeline.configuration = configuration
        if previous.point_schedule_differs(configuration):
            self.pipeline.invalidate()
        elif previous.tiebreakers != configuration.tiebreakers:
            self.pipeline.invalidate_tiebreakers()

    # ========== Players ==========

    def add_player(self, player: Player) -> None:
        """Register a player; rounds already played count as zero-point byes."""
        if not player.pairing_number:
            player.pairing_number = (
                max((p.pairing_number for p in self.players.values()), default=0) + 1
            )
            player.rank = player.pairing_number
        played = self.played_rounds
        for round_number in range(len(player.games) + 1, played + 1):
            player.games.append(Game.default(round_number))
            player.not_played.add(round_number)
        self.players[player.id] = player
        self.pipeline.invalidate([player.id])
        logger.info("Added player %s as number %d", player.name, player.pairing_number)

    def delete_player(
        self, player_id: str, renumber: bool = False
    ) -> Optional[TournamentError]:
        """Remove a player that has not taken part in any pairing.

        Args:
            player_id: Id of the player to remove
            renumber: Close the gap in starting numbers afterwards
        """
        player = self.get_player(player_id)
        for game in player.games:
            if game.participated_in_pairing:
                return PlayerHasGames(player=player.pairing_number, round=game.round)

        del self.players[player_id]
        logger.info("Deleted player %s", player.name)
        if renumber:
            self.renumber_players()
        return None

    def numbering(self) -> Dict[str, int]:
        """Consecutive starting numbers in the current order, keyed by id."""
        ordered = sorted(self.players.values(), key=lambda p: p.pairing_number)
        return {player.id: number for number, player in enumerate(ordered, start=1)}

    def renumber_players(self) -> None:
        """Close gaps in starting numbers and positional ranks.

        Games and pairs refer to ids, so nothing else has to change.
        """
        for player_id, number in self.numbering().items():
            self.players[player_id].pairing_number = number
        by_rank = sorted(self.players.values(), key=lambda p: (p.rank, p.pairing_number))
        for rank, player in enumerate(by_rank, start=1):
            player.rank = rank

    # ========== Rounds ==========

    def verify_next_round_conditions(self) -> Optional[TournamentError]:
        """Error if another round cannot be paired yet."""
        expected = self.configuration.expected_rounds
        if expected and len(self.pairs) >= expected:
            return AllRoundsPlayed(rounds=expected)
        if self.pairs:
            return self.check_pairings_filled(len(self.pairs))
        return None

    def check_pairings_filled(self, round_number: int) -> Optional[ResultsMissing]:
        """First board of ``round_number`` still waiting for a result."""
        self._check_round(round_number)
        for pair in self.pairs[round_number - 1]:
            game = self.get_player(pair.white).games[round_number - 1]
            if game.result is GameResult.UNASSIGNED:
                return ResultsMissing(round=round_number, board=pair.number)
        return None

    def read_pairings(
        self, lines: Sequence[str]
    ) -> Union[PairingReader, TournamentError]:
        """Reader for the next round from the pairing engine's output."""
        self.refresh()
        return PairingReader.from_raw(
            self.players, len(self.pairs) + 1, self.configuration, lines
        )

    def manual_pairings(self) -> PairingReader:
        """Empty reader for pairing the next round by hand."""
        self.refresh()
        return PairingReader(self.players, len(self.pairs) + 1, self.configuration)

    def pairings_for_round(self, round_number: int) -> PairingReader:
        """Reader over the boards recorded for an existing round."""
        self._check_round(round_number)
        self.refresh()
        return PairingReader.from_games(self.players, round_number, self.configuration)

    def apply_pairings(self, reader: PairingReader) -> Optional[TournamentError]:
        """Write the reader's round into the tournament.

        Nothing changes if the pairings are rejected or would leave the game
        records inconsistent.
        """
        if reader.round != len(self.pairs) + 1:
            raise RoundNotFoundException(
                f"Round {reader.round} is not the next round ({len(self.pairs) + 1})"
            )

        error = reader.validate_and_assign_pairs()
        if error is not None:
            return error

        even_up_games_history(self.players.values(), reader.round)
        contradiction = validate_pair_consistency(self.players)
        if contradiction is not None:
            logger.error("Rolling back round %d: %s", reader.round, contradiction)
            self._truncate(reader.round)
            return contradiction

        self.pairs.append(list(reader.pairs))
        self.pipeline.invalidate(from_round=reader.round)
        logger.info("Round %d applied with %d board(s)", reader.round, len(reader.pairs))
        return None

    def set_result(
        self, round_number: int, board: int, result: ResultType
    ) -> Optional[TournamentError]:
        """Record the result of a board and mark dependent standings stale."""
        self._check_round(round_number)
        pair = next((p for p in self.pairs[round_number - 1] if p.number == board), None)
        if pair is None:
            return InvalidPair(number=board)

        white = self.get_player(pair.white)
        black = self.get_player(pair.black)
        white_result, black_result = RESULT_CODES[result]
        white.games[round_number - 1].result = white_result
        black.games[round_number - 1].result = black_result

        self.pipeline.invalidate([white.id, black.id], from_round=round_number)
        logger.debug(
            "Round %d board %d: %s vs %s -> %s",
            round_number,
            board,
            white.name,
            black.name,
            result.value,
        )
        return None

    def delete_round(self) -> None:
        """Drop the last round with all its games and scores."""
        if not self.pairs:
            return
        round_number = len(self.pairs)
        self._truncate(round_number)
        self.pairs.pop()
        self.pipeline.invalidate(from_round=round_number)
        logger.info("Deleted round %d", round_number)

    def _truncate(self, round_number: int) -> None:
        for player in self.players.values():
            del player.games[round_number - 1 :]
            del player.scores[round_number - 1 :]
