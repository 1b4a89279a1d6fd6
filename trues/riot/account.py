# riot/account.py
# ============================================================================
# Lazy resolution of one game account from whatever identity is known
#
# Priority: puuid (canonical) > Riot ID with tag > bare name (ambiguous).
# Every terminal result, including "not found", is cached for the lifetime
# of the resolver.
# ============================================================================

from __future__ import annotations

import logging
import time
from typing import List, Optional

from trues.config import settings
from trues.errors import UpstreamUnavailable
from trues.models.lazy import Lazy
from trues.ports import GameDataSource
from trues.riot.identity import PlayerIdentity
from trues.riot.models import Account, ChampionMastery, Summoner

log = logging.getLogger(__name__)


class AccountResolver:
    """Resolves the account and summoner records behind one player."""

    def __init__(self, game_data: GameDataSource, puuid: Optional[str] = None,
                 identity: Optional[PlayerIdentity] = None):
        if puuid is None and identity is None:
            raise ValueError("AccountResolver needs a puuid or an identity")
        self._game_data = game_data
        self.puuid = puuid
        self.identity = identity
        self._account: Lazy[Account] = Lazy()
        self._summoner: Lazy[Summoner] = Lazy()

    def __repr__(self) -> str:
        return f"AccountResolver(puuid={self.puuid!r}, identity={self.identity})"

    # ───────────────────────────── account ─────────────────────────────
    def resolve_account(self) -> Optional[Account]:
        """Account record, or None if the source does not know it."""
        return self._account.get_or_resolve(self._fetch_account)

    def _fetch_account(self) -> Optional[Account]:
        if self.puuid is not None:
            account = self._game_data.account_by_puuid(self.puuid)
        elif not self.identity.tagged:
            # A bare name has to go through the summoner to learn the puuid
            self.resolve_summoner()
            if self.puuid is None:
                return None
            account = self._game_data.account_by_puuid(self.puuid)
        else:
            account = self._game_data.account_by_identity(self.identity.name, self.identity.tag)

        if account is not None:
            if self.puuid is None:
                self.puuid = account.puuid
            self.identity = PlayerIdentity.of(account)
        return account

    # ───────────────────────────── summoner ────────────────────────────
    def resolve_summoner(self) -> Optional[Summoner]:
        """Summoner record, or None if the source does not know it."""
        return self._summoner.get_or_resolve(self._fetch_summoner)

    def _fetch_summoner(self) -> Optional[Summoner]:
        if self.puuid is not None:
            summoner = self._game_data.summoner_by_puuid(self.puuid)
        elif self.identity.tagged:
            self.resolve_account()
            if self.puuid is None:
                return None
            summoner = self._game_data.summoner_by_puuid(self.puuid)
        else:
            summoner = self._game_data.summoner_by_identity(self.identity.name, None)

        if summoner is not None and self.puuid is None:
            self.puuid = summoner.puuid
        return summoner

    # ───────────────────────────── identity ────────────────────────────
    def get_puuid(self) -> Optional[str]:
        if self.puuid is None:
            account = self.resolve_account()
            if account is not None:
                self.puuid = account.puuid
            else:
                summoner = self.resolve_summoner()
                if summoner is not None:
                    self.puuid = summoner.puuid
        return self.puuid

    def get_identity(self) -> Optional[PlayerIdentity]:
        """Identity with tag; resolves the account when the tag is unknown."""
        if self.identity is None or not self.identity.tagged:
            if self.resolve_account() is None:
                return None
        return self.identity

    def update_identity(self) -> Optional[PlayerIdentity]:
        """Refresh the identity from the account; unchanged if unresolvable."""
        account = self.resolve_account()
        if account is not None:
            self.identity = PlayerIdentity.of(account)
        else:
            log.info("Could not load account of %s", self.identity)
        return self.identity

    def exists(self) -> bool:
        return self.resolve_account() is not None or self.resolve_summoner() is not None

    # ───────────────────────────── summoner data ───────────────────────
    @property
    def summoner_id(self) -> Optional[str]:
        summoner = self.resolve_summoner()
        return summoner.summoner_id if summoner is not None else None

    def get_mastery(self) -> List[ChampionMastery]:
        if self.resolve_summoner() is None:
            return []
        return sorted(self._game_data.champion_masteries(self.puuid))

    def get_match_ids(self, queue: Optional[int], match_type: Optional[str], start: int = 0,
                      start_epoch: Optional[int] = None,
                      end_epoch: Optional[int] = None) -> List[str]:
        """
        One page of match ids between two epochs (end defaults to now).

        Raises:
            UpstreamUnavailable: the summoner cannot be resolved
        """
        if self.resolve_summoner() is None:
            log.info("Cannot load summoner of %s", self.identity)
            raise UpstreamUnavailable(f"Cannot load summoner of {self.identity}")

        if end_epoch is None:
            end_epoch = int(time.time())
        return sorted(self._game_data.match_ids(
            self.puuid, queue, match_type, start, start_epoch, end_epoch,
            count=settings.MATCH_PAGE_SIZE,
        ))
