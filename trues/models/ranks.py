# models/ranks.py – rank and scouting handles hanging off a Player

from __future__ import annotations

import time
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from trues.models.lazy import Lazy
from trues.riot.models import GameQueue, LeagueEntry, MatchType

if TYPE_CHECKING:
    from trues.models.player import Player

SOLO_QUEUE = "RANKED_SOLO_5x5"
FLEX_QUEUE = "RANKED_FLEX_SR"


class ScoutingGameType(str, Enum):
    MATCHMADE = "matchmade"
    PRM_CLASH = "prm_clash"
    PRM_ONLY = "prm_only"


# Queue and match type requested per scouting type
_SCOUTING_FILTERS: Dict[ScoutingGameType, tuple] = {
    ScoutingGameType.MATCHMADE: (GameQueue.RANKED_SOLO, MatchType.RANKED),
    ScoutingGameType.PRM_CLASH: (GameQueue.CLASH, None),
    ScoutingGameType.PRM_ONLY: (None, MatchType.TOURNEY),
}


class PlayerRanks:
    """Ranked entries of a player, fetched once."""

    def __init__(self, player: "Player"):
        self.player = player
        self._entries: Lazy[Dict[str, LeagueEntry]] = Lazy()

    def _load(self) -> Dict[str, LeagueEntry]:
        puuid = self.player.get_puuid()
        if puuid is None:
            return {}
        entries = self.player.context.game_data.league_entries(puuid)
        return {entry.queue_type: entry for entry in entries}

    @property
    def entries(self) -> Dict[str, LeagueEntry]:
        return self._entries.get_or_resolve(self._load)

    @property
    def current(self) -> Optional[LeagueEntry]:
        """Solo queue rank, flex if the player has no solo rank."""
        return self.entries.get(SOLO_QUEUE) or self.entries.get(FLEX_QUEUE)


class PlayerAnalysis:
    """Match window of a player used for scouting."""

    def __init__(self, player: "Player", game_type: ScoutingGameType, days: int):
        self.player = player
        self.game_type = game_type
        self.days = days
        self._match_ids: Lazy[List[str]] = Lazy()

    @property
    def start_epoch(self) -> int:
        return int(time.time()) - self.days * 86400

    def match_ids(self) -> List[str]:
        """First page of matching game ids in the window."""
        queue, match_type = _SCOUTING_FILTERS[self.game_type]
        return self._match_ids.get_or_resolve(lambda: self.player.get_match_ids(
            int(queue) if queue is not None else None,
            match_type.value if match_type is not None else None,
            0,
            self.start_epoch,
        ))
