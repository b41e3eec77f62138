"""Type hints used in Tourney Core."""

from typing import Any, Dict, List, Literal, Optional, Tuple

# Tournament format literals
TournamentFormat = Literal["single-elimination", "round-robin"]

# Tournament status literals
TournamentStatus = Literal["registration", "active", "completed", "cancelled"]

# Participant identifier as supplied by the caller
ParticipantId = str
MaybeParticipantId = Optional[str]

# Opaque score payload: an ordered pair of numbers or any caller-defined stats
Score = Any

# Arena address of a bracket match: (round_number, position)
MatchAddress = Tuple[int, int]

# Serialised forms
MatchDict = Dict[str, Any]
BracketView = List[List[MatchDict]]

#  LocalWords:  MatchAddress BracketView
