# coverage/team_loader.py
# ============================================================================
# Applies a scraped primeleague team page to the entity graph.
#
# The scraper hands over a TeamPage; this module updates the team, resolves
# the roster to players and reports who left. Teams loaded during one batch
# are kept in a LoadedTeams cache owned by whoever runs the batch.
# ============================================================================

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from trues.coverage.team_history import HistoryRow, TeamHistory, find_history
from trues.models.player import Player
from trues.models.team import RosterTeam
from trues.ports import Context
from trues.riot.identity import PlayerIdentity
from trues.services.players import player_from_identity

log = logging.getLogger(__name__)

_TEAM_URL = re.compile(r"/teams/(\d+)-")


def team_id_from_url(url: str) -> int:
    """primeleague team id from ``.../teams/<id>-<slug>``."""
    match = _TEAM_URL.search(url)
    if match is None:
        raise ValueError(f"Not a team url: {url}")
    return int(match.group(1))


def split_title(title: str) -> Tuple[str, Optional[str]]:
    """``"Name (ABBR)"`` → ``("Name", "ABBR")``; the last bracket wins."""
    cut = title.rfind(" (")
    if cut < 0:
        return title.strip(), None
    return title[:cut].strip(), title[cut + 2:].rstrip(")").strip()


@dataclass(frozen=True)
class RosterEntry:
    prm_id: int
    name: str


@dataclass
class TeamPage:
    """What the scraper extracts from one team page."""
    title: Optional[str]
    roster: List[RosterEntry] = field(default_factory=list)
    seasons: List[Sequence[HistoryRow]] = field(default_factory=list)
    closed: bool = False  # roster hidden by the page


@dataclass
class TeamRoster:
    team: RosterTeam
    players: List[Player]
    departed: List[Player]


class LoadedTeams:
    """Teams loaded during one batch. Cleared when the batch ends."""

    def __init__(self):
        self._teams: Dict[int, RosterTeam] = {}

    def __enter__(self) -> "LoadedTeams":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.clear()

    def add(self, team: RosterTeam) -> None:
        self._teams[team.id] = team

    def get(self, team_id: int) -> Optional[RosterTeam]:
        return self._teams.get(team_id)

    def clear(self) -> None:
        self._teams.clear()

    def __contains__(self, team: object) -> bool:
        return isinstance(team, RosterTeam) and team.id in self._teams

    def __iter__(self) -> Iterator[RosterTeam]:
        return iter(self._teams.values())

    def __len__(self) -> int:
        return len(self._teams)


class TeamLoader:

    def __init__(self, context: Context, team: RosterTeam, page: TeamPage,
                 loaded: Optional[LoadedTeams] = None):
        self.context = context
        self.team = team
        self.page = page
        self.loaded = loaded if loaded is not None else LoadedTeams()

    def load(self) -> TeamRoster:
        if self.page.title is None:
            log.warning("Team page of %s has no title", self.team.id)
        else:
            name, abbreviation = split_title(self.page.title)
            self.team.set_name(name)
            self.team.set_abbreviation(abbreviation)

        if self.page.closed:
            # hidden roster: nothing is known, so nobody left either
            players, departed = [], []
        else:
            previous = list(self.team.players)
            players = self._roster()
            departed = [p for p in previous if p not in players]
        for player in departed:
            log.info("%s left %s", player, self.team)

        self.loaded.add(self.team)
        return TeamRoster(self.team, players, departed)

    def get_player(self, prm_id: int) -> Optional[Player]:
        """Resolve a single roster entry by its primeleague id and assign it to the team."""
        if self.page.closed:
            return None
        for entry in self.page.roster:
            if entry.prm_id == prm_id:
                return self._join(entry)
        return None

    def _roster(self) -> List[Player]:
        players: List[Player] = []
        for entry in self.page.roster:
            player = self._join(entry)
            if player is not None:
                players.append(player)
        return players

    def _join(self, entry: RosterEntry) -> Optional[Player]:
        result = player_from_identity(self.context, PlayerIdentity.parse(entry.name))
        if result is None:
            log.info("Skipping roster entry %s (%s) of %s", entry.name, entry.prm_id, self.team)
            return None
        result.player.set_team(self.team)
        return result.player

    def history_of(self, name: str) -> Optional[TeamHistory]:
        return find_history(self.page.seasons, name)
