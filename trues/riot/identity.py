# riot/identity.py – Riot ID value object (game name + optional tag)

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from trues.riot.models import Account


@dataclass(frozen=True, eq=False)
class PlayerIdentity:
    """
    Human-facing address of a game account.

    The name is compared case-insensitively, the tag exactly. A missing tag
    (None) is not the same thing as an empty tag ("").
    """
    name: str
    tag: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "PlayerIdentity":
        """Parse ``"Name#Tag"`` or ``"Name"``."""
        raw = raw.strip()
        if "#" not in raw:
            return cls(raw, None)
        name, _, tag = raw.partition("#")
        return cls(name.strip(), tag.strip())

    @classmethod
    def of(cls, account: "Account") -> "PlayerIdentity":
        return cls(account.game_name, account.tag_line)

    @property
    def tagged(self) -> bool:
        return self.tag is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayerIdentity):
            return NotImplemented
        return self.name.lower() == other.name.lower() and self.tag == other.tag

    def __hash__(self) -> int:
        return hash((self.name.lower(), self.tag))

    def __str__(self) -> str:
        return self.name if self.tag is None else f"{self.name}#{self.tag}"
