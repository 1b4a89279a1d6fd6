# riot/source.py – GameDataSource implemented with the Riot API client

from __future__ import annotations

import logging
from typing import List, Optional

from trues.config import settings
from trues.riot.client import RiotClient
from trues.riot.models import Account, ChampionMastery, LeagueEntry, Summoner

log = logging.getLogger(__name__)


class RiotDataSource:
    """Game-data port for one platform (euw1 by default)."""

    def __init__(self, client: RiotClient, region: Optional[str] = None):
        self.client = client
        self.region = region or settings.DEFAULT_REGION

    @classmethod
    def from_settings(cls) -> "RiotDataSource":
        return cls(RiotClient(settings.RIOT_API_KEY, timeout=settings.RIOT_TIMEOUT))

    def account_by_puuid(self, puuid: str) -> Optional[Account]:
        data = self.client.get_account_by_puuid(self.region, puuid)
        return Account.from_json(data) if data else None

    def account_by_identity(self, name: str, tag: str) -> Optional[Account]:
        data = self.client.get_account_by_name_tag(self.region, name, tag)
        return Account.from_json(data) if data else None

    def summoner_by_puuid(self, puuid: str) -> Optional[Summoner]:
        data = self.client.get_summoner_by_puuid(self.region, puuid)
        return Summoner.from_json(data) if data else None

    def summoner_by_identity(self, name: str, tag: Optional[str]) -> Optional[Summoner]:
        if tag is not None:
            account = self.account_by_identity(name, tag)
            return self.summoner_by_puuid(account.puuid) if account else None
        # Bare names are only unique per platform
        data = self.client.get_summoner_by_name(self.region, name)
        return Summoner.from_json(data) if data else None

    def match_ids(self, puuid: str, queue: Optional[int], match_type: Optional[str],
                  start: int, start_epoch: Optional[int], end_epoch: Optional[int],
                  count: int = 100) -> List[str]:
        return self.client.get_match_ids(
            self.region, puuid, count=count, start=start, queue=queue,
            match_type=match_type, start_time=start_epoch, end_time=end_epoch,
        )

    def champion_masteries(self, puuid: str) -> List[ChampionMastery]:
        return [ChampionMastery.from_json(d)
                for d in self.client.get_champion_masteries_by_puuid(self.region, puuid)]

    def league_entries(self, puuid: str) -> List[LeagueEntry]:
        return [LeagueEntry.from_json(d)
                for d in self.client.get_league_entries_by_puuid(self.region, puuid)]
