"""Type aliases used across Gambit Standings."""

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

from typing import TYPE_CHECKING, Callable, Dict, List

if TYPE_CHECKING:
    from gambitstandings.models import Player

# Players keyed by their stable id
PlayersById = Dict[str, "Player"]
# List of players, in pairing or ranking order
Players = List["Player"]
# Returns < 0 when the first player ranks higher, > 0 when the second does
PlayerComparator = Callable[["Player", "Player"], float]
