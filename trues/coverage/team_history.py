# coverage/team_history.py
# ============================================================================
# Season results of a team, rebuilt from the rows of its primeleague page
#
# A season block holds (at least) three rows, header excluded:
#   1. qualifier  – result "... (3/8) ..."
#   2. group      – label "Gruppe 4.2" / "Starter", result "Rang: 5." / "(2/8)"
#   3. playoffs   – label "Playoffs  1.", result ending with the reached round
# ============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

NO_RESULT = ("-", "Disqualifiziert")
STARTER_GROUP = 9   # synthetic id of the starter division


@dataclass(frozen=True)
class HistoryRow:
    label: str
    result: str
    href: Optional[str] = None


@dataclass(frozen=True)
class TeamHistory:
    qualifier_result: Optional[int]
    group: Optional[int]
    group_result: Optional[int]
    playoff: Optional[int]
    won_playoff: Optional[bool]


def between(text: str, start: str, end: str) -> str:
    """Text between the first ``start`` and the next ``end`` (open-ended if missing)."""
    begin = text.find(start)
    begin = 0 if begin < 0 else begin + len(start)
    stop = text.find(end, begin)
    return text[begin:] if stop < 0 else text[begin:stop]


def _number(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    text = text.strip()
    return int(text) if text.lstrip("-").isdigit() else None


def history_from_season(rows: Sequence[HistoryRow]) -> TeamHistory:
    if len(rows) < 3:
        raise ValueError(f"Season block needs 3 rows, got {len(rows)}")
    qualifier, group, playoffs = rows[0], rows[1], rows[2]

    qualifier_result = None if qualifier.result in NO_RESULT else between(qualifier.result, "(", "/")

    if "Starter" in group.label:
        group_id: Optional[int] = STARTER_GROUP
    elif group.label == "-":
        group_id = None
    else:
        group_id = _number(between(group.label, "Gruppe ", "."))

    if group.result in NO_RESULT:
        group_result = None
    elif group_id == STARTER_GROUP:
        group_result = between(group.result, "(", "/")
    else:
        group_result = between(group.result, "Rang: ", ".")

    playoff_label = playoffs.label.strip()
    playoff = None if playoff_label == "-" else between(playoff_label, "Playoffs  ", ".")

    # TODO: confirm against archived seasons whether the last result character
    # really encodes the final playoff round before trusting this flag
    last_result = playoffs.result[-1:]
    won = None if playoff is None else last_result == playoff

    return TeamHistory(
        qualifier_result=_number(qualifier_result),
        group=group_id,
        group_result=_number(group_result),
        playoff=_number(playoff),
        won_playoff=won,
    )


def find_history(seasons: Iterable[Sequence[HistoryRow]], name: str) -> Optional[TeamHistory]:
    """History of the first season whose group link contains ``name``."""
    for rows in seasons:
        if len(rows) < 3:
            continue
        ref = rows[1].href
        if ref is not None and name in ref:
            return history_from_season(rows)
    return None
