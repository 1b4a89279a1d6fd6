"""
Interfaces the entity graph depends on.

The graph never talks to SQL or HTTP directly. It consumes three ports:

- ``Repository``: fetch entities by id / column, update columns by id.
- ``GameDataSource``: accounts, summoners, match ids and ranks from Riot.
- ``GameLoader``: ingestion of a player's games and champion mastery.

``Context`` bundles them; every entity keeps a reference to the context it
was loaded with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING, Any, List, Mapping, Optional, Protocol, Type, TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    from trues.models.events import LoaderGameType
    from trues.models.player import Player
    from trues.riot.models import Account, ChampionMastery, LeagueEntry, Summoner

E = TypeVar("E")


@runtime_checkable
class Repository(Protocol):
    """Persistence port. Every call is atomic and visible to later reads."""

    def fetch_by_id(self, entity_type: Type[E], entity_id: int) -> Optional[E]:
        ...

    def fetch_by_column(self, entity_type: Type[E], column: str, value: Any) -> Optional[E]:
        ...

    def fetch_all_by_column(self, entity_type: Type[E], column: str, value: Any) -> List[E]:
        ...

    def update_columns(self, entity_type: type, entity_id: int, values: Mapping[str, Any]) -> None:
        ...

    def create(self, entity_type: type, values: Mapping[str, Any]) -> int:
        """Insert a row and return its generated id."""
        ...


@runtime_checkable
class GameDataSource(Protocol):
    """Game-data port. ``None`` means the source has no such record."""

    def account_by_puuid(self, puuid: str) -> Optional["Account"]:
        ...

    def account_by_identity(self, name: str, tag: str) -> Optional["Account"]:
        ...

    def summoner_by_puuid(self, puuid: str) -> Optional["Summoner"]:
        ...

    def summoner_by_identity(self, name: str, tag: Optional[str]) -> Optional["Summoner"]:
        ...

    def match_ids(self, puuid: str, queue: Optional[int], match_type: Optional[str],
                  start: int, start_epoch: Optional[int], end_epoch: Optional[int],
                  count: int = 100) -> List[str]:
        ...

    def champion_masteries(self, puuid: str) -> List["ChampionMastery"]:
        ...

    def league_entries(self, puuid: str) -> List["LeagueEntry"]:
        ...


@runtime_checkable
class GameLoader(Protocol):
    """Ingests a player's games. Failures propagate to the caller."""

    def analyze_games(self, player: "Player", game_type: "LoaderGameType", force: bool) -> None:
        ...

    def analyze_mastery(self, player: "Player") -> None:
        ...


@dataclass
class Context:
    repository: Repository
    game_data: GameDataSource
    loader: Optional[GameLoader] = None

    def __post_init__(self) -> None:
        # Adapters that build entities need the context those entities carry.
        bind = getattr(self.repository, "bind", None)
        if callable(bind):
            bind(self)

