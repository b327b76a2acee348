"""Type hints used in Team Pairing."""

from typing import Dict, Literal, Mapping

# Which roster a selection is drawn from
Side = Literal["my", "opponent"]

Status = Literal["in-progress", "completed"]

# 1 = gold, 2 = silver, 3 = bronze
MedalRank = Literal[1, 2, 3]
LastChanceThreshold = Literal[6, 5, 4]

# my list name -> opponent list name -> score (1-6)
MatchupMatrix = Mapping[str, Mapping[str, int]]

# Plain JSON-ish payloads as read from disk
JsonDict = Dict[str, object]
