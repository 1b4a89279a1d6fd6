# services/players.py
# ============================================================================
# Creating players: one entry point that either rehydrates the stored row of a
# puuid or inserts a new one, and tells the caller which of the two happened.
# ============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from trues.models.player import (
    COL_LINKED_ACCOUNT, COL_NAME, COL_PLAYED, COL_PUUID, COL_SUMMONER, COL_TAG,
    COL_TEAM, COL_UPDATED, Player,
)
from trues.ports import Context
from trues.riot.account import AccountResolver
from trues.riot.identity import PlayerIdentity

log = logging.getLogger(__name__)

# New players look stale so the first refresh loads their history
NEW_PLAYER_AGE = timedelta(days=365)


@dataclass(frozen=True)
class Created:
    player: Player


@dataclass(frozen=True)
class Rehydrated:
    player: Player
    previous: Player


PlayerResult = Union[Created, Rehydrated]


def find_or_create(context: Context, puuid: str, identity: PlayerIdentity,
                   summoner_id: Optional[str] = None) -> PlayerResult:
    """
    Player for ``puuid``.

    If a row with the same puuid is stored, its id, update time, played flag,
    team and linked account carry over and a changed name is written back.
    Otherwise a fresh row is inserted that has never played and was last
    updated a year ago.
    """
    repository = context.repository
    previous = repository.fetch_by_column(Player, COL_PUUID, puuid)
    if previous is not None:
        player = Player(
            context, previous.id,
            puuid=puuid,
            identity=previous.identity,
            summoner_id=previous.known_summoner_id,
            linked_account_id=previous.linked_account_id,
            team_id=previous.team_id,
            updated=previous.updated,
            played=previous.played,
        )
        player.set_identity(identity)
        if summoner_id is not None:
            player.set_summoner_id(summoner_id)
        log.debug("Rehydrated player %s for %s", player.id, identity)
        return Rehydrated(player, previous)

    updated = datetime.now() - NEW_PLAYER_AGE
    player_id = repository.create(Player, {
        COL_PUUID: puuid,
        COL_SUMMONER: summoner_id,
        COL_NAME: identity.name,
        COL_TAG: identity.tag,
        COL_LINKED_ACCOUNT: None,
        COL_TEAM: None,
        COL_UPDATED: updated,
        COL_PLAYED: False,
    })
    log.info("Created player %s for %s", player_id, identity)
    return Created(Player(
        context, player_id,
        puuid=puuid,
        identity=identity,
        summoner_id=summoner_id,
        updated=updated,
        played=False,
    ))


def player_from_identity(context: Context, identity: PlayerIdentity) -> Optional[PlayerResult]:
    """
    Player behind a Riot ID as typed on a team page.

    Returns None when the account cannot be found at Riot.
    """
    resolver = AccountResolver(context.game_data, identity=identity)
    puuid = resolver.get_puuid()
    if puuid is None:
        log.info("Could not resolve account of %s", identity)
        return None
    return find_or_create(context, puuid, resolver.identity or identity, resolver.summoner_id)
