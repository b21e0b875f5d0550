# draft_session.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional


class SnapshotError(ValueError):
    """세션 스냅샷에서 로컬 플레이어를 특정할 수 없음 (이 스냅샷은 건너뜀)."""


class DraftPhase(str, Enum):
    PLANNING = "PLANNING"
    BAN_PICK = "BAN_PICK"
    FINALIZATION = "FINALIZATION"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, raw: Any) -> "DraftPhase":
        s = str(raw or "").strip().upper()
        for p in (cls.PLANNING, cls.BAN_PICK, cls.FINALIZATION):
            if s == p.value:
                return p
        return cls.OTHER


class ActionKind(str, Enum):
    BAN = "ban"
    PICK = "pick"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: Any) -> "ActionKind":
        s = str(raw or "").strip().lower()
        if s == "ban":
            return cls.BAN
        if s == "pick":
            return cls.PICK
        return cls.OTHER


def _int_or(x: Any, default: Optional[int]) -> Optional[int]:
    if isinstance(x, bool):
        return default
    try:
        return int(x)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Action:
    id: int
    kind: ActionKind
    actor_cell_id: Optional[int]
    champion_id: int = 0
    completed: bool = False
    in_progress: bool = False

    @classmethod
    def from_raw(cls, a: Dict[str, Any]) -> Optional["Action"]:
        aid = _int_or(a.get("id"), None)
        if aid is None:
            return None
        return cls(
            id=aid,
            kind=ActionKind.parse(a.get("type")),
            actor_cell_id=_int_or(a.get("actorCellId"), None),
            champion_id=_int_or(a.get("championId"), 0) or 0,
            completed=a.get("completed") is True,
            in_progress=a.get("isInProgress") is True,
        )


@dataclass(frozen=True)
class DraftFacts:
    phase: DraftPhase
    local_cell_id: int
    assigned_position: Optional[str] = None
    is_assigned: bool = False
    current_action: Optional[Action] = None
    pending_pick_action: Optional[Action] = None
    banned_champions: FrozenSet[int] = field(default_factory=frozenset)


def flatten_actions(raw_actions: Any) -> List[Action]:
    """actions[][] (동시 행동 그룹들의 리스트)를 한 줄로 편다. 이상한 항목은 버림."""
    out: List[Action] = []
    if not isinstance(raw_actions, list):
        return out
    for group in raw_actions:
        if not isinstance(group, list):
            continue
        for a in group:
            if not isinstance(a, dict):
                continue
            act = Action.from_raw(a)
            if act is not None:
                out.append(act)
    return out


def _ban_list_ids(bans: Any) -> Iterable[int]:
    if not isinstance(bans, dict):
        return []
    out = []
    for key in ("myTeamBans", "theirTeamBans"):
        for x in bans.get(key) or []:
            xi = _int_or(x, 0) or 0
            if xi > 0:
                out.append(xi)
    return out


def interpret(raw: Any) -> DraftFacts:
    """
    /lol-champ-select/v1/session 페이로드 -> DraftFacts.

    필드가 비어 있으면 기본값으로 떨어진다 (phase=OTHER, 빈 리스트).
    localPlayerCellId 자체가 없으면 SnapshotError.
    """
    if not isinstance(raw, dict):
        raise SnapshotError(f"session payload is not an object: {type(raw).__name__}")

    local_cell_id = _int_or(raw.get("localPlayerCellId"), None)
    if local_cell_id is None:
        raise SnapshotError("session payload has no localPlayerCellId")

    timer = raw.get("timer")
    phase = DraftPhase.parse(timer.get("phase") if isinstance(timer, dict) else None)

    assigned_position = None
    is_assigned = False
    for mate in raw.get("myTeam") or []:
        if not isinstance(mate, dict):
            continue
        if _int_or(mate.get("cellId"), None) == local_cell_id:
            assigned_position = str(mate.get("assignedPosition") or "") or None
            is_assigned = True
            break

    actions = flatten_actions(raw.get("actions"))

    banned = set(_ban_list_ids(raw.get("bans")))
    for a in actions:
        if a.kind == ActionKind.BAN and a.completed and a.champion_id > 0:
            banned.add(a.champion_id)

    current = None
    pending_pick = None
    for a in actions:
        if a.actor_cell_id != local_cell_id:
            continue
        if current is None and a.in_progress:
            current = a
        if pending_pick is None and a.kind == ActionKind.PICK and not a.completed:
            pending_pick = a

    return DraftFacts(
        phase=phase,
        local_cell_id=local_cell_id,
        assigned_position=assigned_position,
        is_assigned=is_assigned,
        current_action=current,
        pending_pick_action=pending_pick,
        banned_champions=frozenset(banned),
    )
