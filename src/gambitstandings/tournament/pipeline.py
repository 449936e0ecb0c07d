"""Staged recalculation of scores and tiebreaks.

Most tiebreaks read the running scores of opponents, so the score pass has
to finish for every affected player before the tiebreak pass starts for any
of them. ``StandingsPipeline`` tracks which pass is pending and refuses to
run them out of order or to hand out standings in between.
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

from collections import deque
from enum import Enum
from typing import Dict, Iterable, Optional, Set

from gambitstandings.exceptions import PipelineStateException
from gambitstandings.models import Configuration
from gambitstandings.tournament.scoring import recalculate_scores
from gambitstandings.tournament.tiebreak_calculator import TiebreakCalculator
from gambitstandings.type_hints import PlayersById
from gambitstandings.utils import setup_logger

logger = setup_logger(__name__)


class PipelineState(Enum):
    SCORES_STALE = "scores_stale"
    SCORES_FRESH = "scores_fresh"
    TIEBREAKERS_FRESH = "tiebreakers_fresh"


def affected_players(players: PlayersById, seeds: Iterable[str]) -> Set[str]:
    """Ids reachable from ``seeds`` through the opponent relation."""
    reached: Set[str] = set()
    queue = deque(player_id for player_id in seeds if player_id in players)
    while queue:
        player_id = queue.popleft()
        if player_id in reached:
            continue
        reached.add(player_id)
        for game in players[player_id].games:
            if game.opponent is not None and game.opponent not in reached:
                if game.opponent in players:
                    queue.append(game.opponent)
    return reached


class StandingsPipeline:
    """State machine ``SCORES_STALE -> SCORES_FRESH -> TIEBREAKERS_FRESH``.

    Mutations call ``invalidate`` (or ``invalidate_tiebreakers``); readers
    call ``refresh`` and then ``require_fresh``.
    """

    def __init__(self, players: PlayersById, configuration: Configuration) -> None:
        self.players = players
        self.configuration = configuration
        self.state = PipelineState.SCORES_STALE
        # player id -> first round whose score is stale
        self._stale_scores: Dict[str, int] = {}
        self._tiebreak_seeds: Set[str] = set()
        self._tiebreak_from: Optional[int] = None
        self.invalidate()

    def invalidate(
        self, player_ids: Optional[Iterable[str]] = None, from_round: int = 1
    ) -> None:
        """Mark scores of ``player_ids`` (all players if None) stale from a round.

        Tiebreaks of every player connected to them become stale as well.
        """
        ids = list(self.players) if player_ids is None else list(player_ids)
        for player_id in ids:
            current = self._stale_scores.get(player_id, from_round)
            self._stale_scores[player_id] = min(current, from_round)
        self._mark_tiebreaks(ids, from_round)
        self.state = PipelineState.SCORES_STALE
        logger.debug(
            "Scores of %d player(s) stale from round %d", len(ids), from_round
        )

    def invalidate_tiebreakers(self, from_round: int = 1) -> None:
        """Mark every tiebreak stale, e.g. after the tiebreak order changed."""
        self._mark_tiebreaks(list(self.players), from_round)
        if self.state is PipelineState.TIEBREAKERS_FRESH:
            self.state = PipelineState.SCORES_FRESH

    def _mark_tiebreaks(self, ids: Iterable[str], from_round: int) -> None:
        self._tiebreak_seeds.update(ids)
        if self._tiebreak_from is None:
            self._tiebreak_from = from_round
        else:
            self._tiebreak_from = min(self._tiebreak_from, from_round)

    def recalculate_scores(self) -> None:
        """Score pass. Always completes for all pending players."""
        if self.state is not PipelineState.SCORES_STALE:
            return
        for player_id, from_round in self._stale_scores.items():
            player = self.players.get(player_id)
            if player is not None:
                recalculate_scores(player, self.configuration, from_round)
        self._stale_scores.clear()
        self.state = PipelineState.SCORES_FRESH

    def recalculate_tiebreakers(self) -> None:
        """Tiebreak pass. Requires the score pass to have run."""
        if self.state is PipelineState.SCORES_STALE:
            raise PipelineStateException(
                "Tiebreaks cannot be calculated while scores are stale"
            )
        if self.state is PipelineState.TIEBREAKERS_FRESH:
            return

        targets = affected_players(self.players, self._tiebreak_seeds)
        from_round = self._tiebreak_from or 1
        calculator = TiebreakCalculator(self.players, self.configuration)
        for player_id in targets:
            calculator.calculate_player_tiebreaks(self.players[player_id], from_round)

        logger.debug(
            "Recalculated tiebreaks of %d player(s) from round %d",
            len(targets),
            from_round,
        )
        self._tiebreak_seeds.clear()
        self._tiebreak_from = None
        self.state = PipelineState.TIEBREAKERS_FRESH

    def refresh(self) -> None:
        """Run whichever passes are pending, in order."""
        self.recalculate_scores()
        self.recalculate_tiebreakers()

    def require_fresh(self) -> None:
        if self.state is not PipelineState.TIEBREAKERS_FRESH:
            raise PipelineStateException(
                f"Standings are not available in state {self.state.name}"
            )
