"""Exceptions for use in Gambit Standings.

Data problems found in tournament input are reported as error values (see
``gambitstandings.validation.errors``). The exceptions below signal misuse
of the API, such as asking for a player that does not exist.
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


# ========== Base Application Exception ==========


class GambitStandingsException(Exception):
    """Base exception for all Gambit Standings errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(GambitStandingsException):
    """Base exception for tournament-related errors."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a round number is outside the played rounds."""

    pass


class PipelineStateException(TournamentException):
    """Raised when standings are read before the recalculation pipeline is fresh,
    or when a pass is run out of order."""

    pass


# ========== Player Exceptions ==========


class PlayerException(GambitStandingsException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a player id cannot be resolved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(GambitStandingsException):
    """Raised when the tiebreak dispatch table or configuration is invalid."""

    pass
