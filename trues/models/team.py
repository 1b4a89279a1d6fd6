# models/team.py
# ============================================================================
# Entities a Player points to: teams, leagues and the linked Discord account
# ============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from trues.models.lazy import Lazy

if TYPE_CHECKING:
    from trues.models.player import Player
    from trues.ports import Context


@dataclass(frozen=True)
class League:
    id: int
    name: str
    orga_league: bool = False


@dataclass(frozen=True)
class LinkedAccount:
    """Discord user linked to a player."""
    id: int
    discord_id: int
    name: str = ""


class Team:
    """A team; its roster is loaded on first access."""

    def __init__(self, context: "Context", id: int, name: str, abbreviation: Optional[str] = None,
                 players: Optional[List["Player"]] = None):
        self.context = context
        self.id = id
        self.name = name
        self.abbreviation = abbreviation
        self._players: Lazy[List["Player"]] = Lazy() if players is None else Lazy.of(players)

    @property
    def players(self) -> List["Player"]:
        from trues.models.player import Player

        return self._players.get_or_resolve(
            lambda: self.context.repository.fetch_all_by_column(Player, "team", self.id)
        )

    def add_player(self, player: "Player") -> bool:
        """
        Append ``player`` to the roster unless it is already there.

        A stored copy with the same id (fetched after the team column was
        written) is replaced by ``player`` so the roster holds the live instance.
        """
        players = self.players
        for index, member in enumerate(players):
            if member == player:
                if member is not player:
                    players[index] = player
                return False
        players.append(player)
        return True

    def set_name(self, name: str) -> None:
        if name != self.name:
            self.context.repository.update_columns(Team, self.id, {"name": name})
        self.name = name

    def set_abbreviation(self, abbreviation: Optional[str]) -> None:
        if abbreviation != self.abbreviation:
            self.context.repository.update_columns(Team, self.id, {"abbreviation": abbreviation})
        self.abbreviation = abbreviation

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Team) and self.id == other.id

    def __hash__(self) -> int:
        return hash((Team, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, name={self.name!r})"

    def __str__(self) -> str:
        return f"{self.name} ({self.abbreviation})" if self.abbreviation else self.name


class RosterTeam(Team):
    """A team managed on primeleague.gg, optionally playing in a league."""

    def __init__(self, context: "Context", id: int, name: str, abbreviation: Optional[str] = None,
                 prm_id: Optional[int] = None, current_league: Optional[League] = None,
                 players: Optional[List["Player"]] = None):
        super().__init__(context, id, name, abbreviation, players)
        self.prm_id = prm_id
        self.current_league = current_league

    @property
    def plays_orga_league(self) -> bool:
        return self.current_league is not None and self.current_league.orga_league
