# riot/models.py
# ============================================================================
# Records returned by the Riot API, reduced to the fields the graph uses
# ============================================================================

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class GameQueue(int, Enum):
    """Queue ids accepted by match-v5."""
    NORMAL_DRAFT = 400
    RANKED_SOLO = 420
    RANKED_FLEX = 440
    CLASH = 700
    TOURNAMENT_CODE = 0


class MatchType(str, Enum):
    RANKED = "ranked"
    NORMAL = "normal"
    TOURNEY = "tourney"
    TUTORIAL = "tutorial"


@dataclass(frozen=True)
class Account:
    """Account-v1 record: cross-region Riot ID of a puuid."""
    __slots__ = ('puuid', 'game_name', 'tag_line')

    puuid: str
    game_name: str
    tag_line: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Account":
        return cls(
            puuid=data["puuid"],
            game_name=data.get("gameName", ""),
            tag_line=data.get("tagLine", ""),
        )


@dataclass(frozen=True)
class Summoner:
    """Summoner-v4 record: per-platform game-play profile of a puuid."""
    puuid: str
    summoner_id: Optional[str] = None
    level: int = 0
    name: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Summoner":
        return cls(
            puuid=data["puuid"],
            summoner_id=data.get("id"),
            level=data.get("summonerLevel", 0),
            name=data.get("name"),
        )


@dataclass(frozen=True)
class LeagueEntry:
    queue_type: str      # RANKED_SOLO_5x5, RANKED_FLEX_SR …
    tier: str
    division: str
    league_points: int = 0
    wins: int = 0
    losses: int = 0

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "LeagueEntry":
        return cls(
            queue_type=data["queueType"],
            tier=data.get("tier", "UNRANKED"),
            division=data.get("rank", ""),
            league_points=data.get("leaguePoints", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
        )

    @property
    def games(self) -> int:
        return self.wins + self.losses

    def __str__(self) -> str:
        return f"{self.tier} {self.division} {self.league_points} LP"


@dataclass(frozen=True, order=True)
class ChampionMastery:
    """Ordered by points so that sorted() puts the main champions last."""
    points: int
    champion_id: int
    level: int = 0

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ChampionMastery":
        return cls(
            points=data.get("championPoints", 0),
            champion_id=data["championId"],
            level=data.get("championLevel", 0),
        )
