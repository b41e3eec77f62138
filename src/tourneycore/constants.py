# Tourney Core
# Copyright (C) 2025  Tourney Core developers
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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Tournament formats
FORMAT_SINGLE_ELIMINATION = "single-elimination"
FORMAT_ROUND_ROBIN = "round-robin"
FORMAT_DOUBLE_ELIMINATION = "double-elimination"  # Deferred, never accepted
SUPPORTED_FORMATS = (FORMAT_SINGLE_ELIMINATION, FORMAT_ROUND_ROBIN)
DEFAULT_FORMAT = FORMAT_SINGLE_ELIMINATION

# Tournament status values
STATUS_REGISTRATION = "registration"
STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_CANCELLED)

# Points awarded per round-robin outcome
DEFAULT_WIN_POINTS = 3
DEFAULT_LOSS_POINTS = 0
DEFAULT_DRAW_POINTS = 1

# Winner id used to record a drawn round-robin match
DRAW = "draw"

# Participant count bounds
STRUCTURAL_MIN_PARTICIPANTS = 2  # What the schedulers can build
DEFAULT_MIN_PARTICIPANTS = 4  # Product policy applied by Tournament.start()

# Match id templates
BRACKET_MATCH_ID = "R{round}M{number}"
ROUND_ROBIN_MATCH_ID = "M{number}"

DEFAULT_TOURNAMENT_NAME = "Untitled Tournament"
