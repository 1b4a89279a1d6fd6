# models/player.py
# ============================================================================
# Player aggregate: persisted identity + lazily resolved relations
#
# Every setter writes through the Repository first and only then updates the
# in-memory state, so a failed write leaves the old value in place.
# Relation changes that call for follow-up work (reloading games) are handed
# to listeners after the write, never run from inside the setter itself.
# ============================================================================

from __future__ import annotations

import logging
from datetime import datetime
from functools import total_ordering
from typing import TYPE_CHECKING, List, Optional

from trues.errors import LoaderNotConfigured
from trues.models.events import Listener, LoaderGameType, ReloadGames
from trues.models.lazy import Lazy
from trues.models.ranks import PlayerAnalysis, PlayerRanks, ScoutingGameType
from trues.models.team import LinkedAccount, RosterTeam, Team
from trues.riot.account import AccountResolver
from trues.riot.identity import PlayerIdentity

if TYPE_CHECKING:
    from trues.ports import Context, GameLoader

log = logging.getLogger(__name__)

# Column names in the players table
COL_PUUID = "lol_puuid"
COL_SUMMONER = "lol_summoner"
COL_NAME = "lol_name"
COL_TAG = "lol_tag"
COL_LINKED_ACCOUNT = "discord_user"
COL_TEAM = "team"
COL_UPDATED = "updated"
COL_PLAYED = "played"

SCOUTING_CACHE_DAYS = 180


@total_ordering
class Player:
    """A tracked player. Equal to any other Player with the same id."""

    def __init__(self, context: "Context", id: int, puuid: Optional[str] = None,
                 identity: Optional[PlayerIdentity] = None, summoner_id: Optional[str] = None,
                 linked_account_id: Optional[int] = None, team_id: Optional[int] = None,
                 updated: Optional[datetime] = None, played: bool = False):
        if puuid is None and identity is None:
            raise ValueError("A player needs a puuid or an identity")
        self.context = context
        self.id = id
        self.puuid = puuid
        self._summoner_id = summoner_id
        self.identity = identity
        self.linked_account_id = linked_account_id
        self.team_id = team_id
        self.updated = updated
        self.played = played

        # transient
        self._team: Lazy[Team] = Lazy()
        self._linked_account: Lazy[LinkedAccount] = Lazy()
        self._account: Lazy[AccountResolver] = Lazy()
        self._ranks: Optional[PlayerRanks] = None
        self._analysis: Optional[PlayerAnalysis] = None
        self._listeners: List[Listener] = []

    # ───────────────────────────── events ──────────────────────────────
    def add_listener(self, listener: Listener) -> None:
        """Subscribe to post-commit events of this instance."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: ReloadGames) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _update(self, **columns) -> None:
        self.context.repository.update_columns(Player, self.id, columns)

    # ───────────────────────────── team ────────────────────────────────
    @property
    def team(self) -> Optional[Team]:
        if self.team_id is None:
            return None
        return self._team.get_or_resolve(
            lambda: self.context.repository.fetch_by_id(Team, self.team_id)
        )

    def set_team(self, team: Optional[Team]) -> None:
        if self._team.resolved and self._team.peek() is team:
            return
        new_id = team.id if team is not None else None
        if new_id == self.team_id:
            return

        self._update(**{COL_TEAM: new_id})
        self._team.set(team)
        self.team_id = new_id

        if team is None:
            return
        team.add_player(self)
        if isinstance(team, RosterTeam) and team.plays_orga_league:
            self._emit(ReloadGames(self, LoaderGameType.CLASH_PLUS, f"joined {team.name}"))

    # ───────────────────────────── linked account ──────────────────────
    @property
    def linked_account(self) -> Optional[LinkedAccount]:
        if self.linked_account_id is None:
            return None
        return self._linked_account.get_or_resolve(
            lambda: self.context.repository.fetch_by_id(LinkedAccount, self.linked_account_id)
        )

    def set_linked_account(self, account: Optional[LinkedAccount]) -> None:
        if self._linked_account.resolved and self._linked_account.peek() is account:
            return
        new_id = account.id if account is not None else None
        if new_id == self.linked_account_id:
            return

        self._update(**{COL_LINKED_ACCOUNT: new_id})
        self._linked_account.set(account)
        self.linked_account_id = new_id
        self._emit(ReloadGames(self, LoaderGameType.CLASH_PLUS, "linked account changed"))

    # ───────────────────────────── scalars ─────────────────────────────
    def set_played(self, played: bool) -> None:
        if played != self.played:
            self._update(**{COL_PLAYED: played})
        self.played = played

    def set_updated(self, updated: datetime) -> None:
        if updated != self.updated:
            self._update(**{COL_UPDATED: updated})
        self.updated = updated

    def set_identity(self, identity: Optional[PlayerIdentity]) -> None:
        if identity is None:
            log.info("Player %s not found.", self.id)
            return
        if self.identity is None or (identity.name, identity.tag) != (self.identity.name, self.identity.tag):
            self._update(**{COL_NAME: identity.name, COL_TAG: identity.tag})
        self.identity = identity

    def set_puuid_and_identity(self, puuid: str, summoner_id: Optional[str],
                               identity: PlayerIdentity) -> None:
        """Move this player onto another game account."""
        self._update(**{
            COL_PUUID: puuid,
            COL_SUMMONER: summoner_id,
            COL_NAME: identity.name,
            COL_TAG: identity.tag,
        })
        self.puuid = puuid
        self._summoner_id = summoner_id
        self.identity = identity
        self._account.reset()
        self._ranks = None
        self._analysis = None

    def set_summoner_id(self, summoner_id: Optional[str]) -> None:
        if summoner_id != self._summoner_id:
            self._update(**{COL_SUMMONER: summoner_id})
        self._summoner_id = summoner_id

    @property
    def known_summoner_id(self) -> Optional[str]:
        """Stored summoner id, without resolving it."""
        return self._summoner_id

    @property
    def summoner_id(self) -> Optional[str]:
        """External summoner id, resolved and stored on first use."""
        if self._summoner_id is None:
            summoner_id = self.account.summoner_id
            if summoner_id is not None:
                self._update(**{COL_SUMMONER: summoner_id})
                self._summoner_id = summoner_id
        return self._summoner_id

    # ───────────────────────────── game account ────────────────────────
    @property
    def account(self) -> AccountResolver:
        return self._account.get_or_resolve(
            lambda: AccountResolver(self.context.game_data, self.puuid, self.identity)
        )

    def get_puuid(self) -> Optional[str]:
        if self.puuid is not None:
            return self.puuid
        return self.account.get_puuid()

    def get_name(self) -> Optional[PlayerIdentity]:
        return self.account.get_identity() or self.identity

    def update_name(self) -> Optional[PlayerIdentity]:
        """Refresh the stored name from the game account."""
        self.set_identity(self.account.update_identity())
        return self.identity

    def exists(self) -> bool:
        return self.account.exists()

    def get_match_ids(self, queue: Optional[int], match_type: Optional[str], start: int = 0,
                      start_epoch: Optional[int] = None,
                      end_epoch: Optional[int] = None) -> List[str]:
        return self.account.get_match_ids(queue, match_type, start, start_epoch, end_epoch)

    # ───────────────────────────── ranks / scouting ────────────────────
    @property
    def ranks(self) -> PlayerRanks:
        if self._ranks is None:
            self._ranks = PlayerRanks(self)
        return self._ranks

    def analyze(self, game_type: ScoutingGameType, days: int) -> PlayerAnalysis:
        # Only the default scouting window is worth keeping around
        if game_type == ScoutingGameType.MATCHMADE and days == SCOUTING_CACHE_DAYS:
            if self._analysis is None:
                self._analysis = PlayerAnalysis(self, game_type, days)
            return self._analysis
        return PlayerAnalysis(self, game_type, days)

    # ───────────────────────────── ingestion ───────────────────────────
    def _loader(self) -> "GameLoader":
        if self.context.loader is None:
            raise LoaderNotConfigured(f"No game loader configured for player {self.id}")
        return self.context.loader

    def load_games(self, game_type: LoaderGameType) -> None:
        self._loader().analyze_games(self, game_type, False)

    def load_mastery(self) -> None:
        self._loader().analyze_mastery(self)

    def force_load(self) -> None:
        self._loader().analyze_games(self, LoaderGameType.MATCHMADE, True)

    # ───────────────────────────── identity ────────────────────────────
    def __eq__(self, other: object) -> bool:
        return isinstance(other, Player) and self.id == other.id

    def __lt__(self, other: "Player") -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id < other.id

    def __hash__(self) -> int:
        return hash((Player, self.id))

    def __repr__(self) -> str:
        return f"Player(id={self.id}, puuid={self.puuid!r}, identity={self.identity})"

    def __str__(self) -> str:
        return str(self.identity) if self.identity is not None else f"Player {self.id}"
