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

from gambitstandings.tournament.scoring import (
    calculate_played_rounds,
    calculate_points,
    get_points,
    get_points_for_result,
    recalculate_scores,
)
from gambitstandings.tournament.consistency import (
    find_pair_contradictions,
    validate_pair_consistency,
)
from gambitstandings.tournament.tiebreak_calculator import (
    TiebreakCalculator,
    compare_head_to_head,
)
from gambitstandings.tournament.pipeline import PipelineState, StandingsPipeline
from gambitstandings.tournament.ranking import Standings, compute_ranks, sort_by_rank
from gambitstandings.tournament.results import parse_result
from gambitstandings.tournament.pairings import Pair, PairingReader
from gambitstandings.tournament.tournament import Tournament
from gambitstandings.tournament.loader import LoadReport, load_tournament

__all__ = [
    "LoadReport",
    "Pair",
    "PairingReader",
    "PipelineState",
    "Standings",
    "StandingsPipeline",
    "TiebreakCalculator",
    "Tournament",
    "calculate_played_rounds",
    "calculate_points",
    "compare_head_to_head",
    "compute_ranks",
    "find_pair_contradictions",
    "get_points",
    "get_points_for_result",
    "load_tournament",
    "parse_result",
    "recalculate_scores",
    "sort_by_rank",
    "validate_pair_consistency",
]
