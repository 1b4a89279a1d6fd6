# models/events.py – events emitted by Player setters once the write is committed

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from trues.models.player import Player


class LoaderGameType(str, Enum):
    """Which games the ingestion collaborator should load."""
    MATCHMADE = "matchmade"
    CLASH_PLUS = "clash_plus"   # clash + tournament games
    CLASH = "clash"


@dataclass(frozen=True)
class ReloadGames:
    """A committed change made this player's recent games worth reloading."""
    player: "Player"
    game_type: LoaderGameType
    reason: str


Listener = Callable[[ReloadGames], None]


def reload_games(event: ReloadGames) -> None:
    """Stock listener: run the reload synchronously."""
    event.player.load_games(event.game_type)
