# action_resolver.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, FrozenSet, Mapping, Optional, Tuple

from draft_session import Action, ActionKind, DraftFacts, DraftPhase
from preference_list import PreferenceList


@dataclass(frozen=True)
class ResolverState:
    """
    엔진 루프가 스냅샷 사이에 들고 다니는 유일한 상태.
    - cursor는 한 턴이 끝나면(성공이든 목록 소진이든) 0으로 돌아간다.
      is_banning / is_picking 도 resolve() 호출 안에서만 True 이고 나올 때는 False.
      즉 호출 사이에는 항상 0 / False (로그/디버그용 필드).
    - have_prepicked는 PLANNING이 아닌 스냅샷을 보면 False로 리셋.
    - in_game은 한 번 True가 되면 끝 (terminal).
    """
    ban_cursor: int = 0
    pick_cursor: int = 0
    is_banning: bool = False
    is_picking: bool = False
    have_prepicked: bool = False
    in_game: bool = False


@dataclass(frozen=True)
class SubmissionIntent:
    action_id: int
    champion_id: int
    completed: bool


Submit = Callable[[SubmissionIntent], bool]


def _scan(
    tag: str,
    action: Action,
    plist: PreferenceList,
    cursor: int,
    champions: Mapping[str, int],
    submit: Submit,
    unavailable: FrozenSet[int] = frozenset(),
) -> Optional[SubmissionIntent]:
    """cursor부터 목록을 훑으며 하나가 성공할 때까지 제출한다. 성공한 intent 또는 None."""
    for _, name in plist.scan(cursor):
        cid = plist.lookup(name, champions)
        if cid is None:
            print(f"[{tag}] {name}: not in champion table, skip", flush=True)
            continue
        if cid in unavailable:
            print(f"[{tag}] {name} is banned, trying next", flush=True)
            continue

        intent = SubmissionIntent(action_id=action.id, champion_id=cid, completed=True)
        if submit(intent):
            print(f"[{tag}] OK {name} (championId={cid}, action={action.id})", flush=True)
            return intent

        print(f"[{tag}] FAILED {name} (championId={cid}), trying next", flush=True)

    # 목록 소진: 다음 스냅샷에서 처음부터 다시
    print(f"[{tag}] preference list exhausted, will retry from the top", flush=True)
    return None


def _is_turn(facts: DraftFacts, kind: ActionKind) -> bool:
    a = facts.current_action
    return (
        a is not None
        and a.kind == kind
        and a.in_progress
        and facts.phase == DraftPhase.BAN_PICK
    )


def resolve(
    facts: DraftFacts,
    state: ResolverState,
    ban_list: PreferenceList,
    pick_list: PreferenceList,
    champions: Mapping[str, int],
    submit: Submit,
    check_started: Optional[Callable[[], bool]] = None,
) -> Tuple[Optional[SubmissionIntent], ResolverState]:
    """
    스냅샷 하나에 대해 다음 행동을 결정한다.

    submit(intent) -> bool 은 실제 제출(네트워크)이고, 실패하면 같은 호출 안에서
    다음 후보로 넘어간다. 반환되는 intent는 성공한 것 하나뿐이다 (없으면 None).
    """
    if state.in_game:
        return None, state

    if facts.phase != DraftPhase.PLANNING and state.have_prepicked:
        state = replace(state, have_prepicked=False)

    if _is_turn(facts, ActionKind.BAN):
        state = replace(state, is_banning=True)
        intent = _scan("BAN", facts.current_action, ban_list, state.ban_cursor, champions, submit)
        return intent, replace(state, ban_cursor=0, is_banning=False)

    if _is_turn(facts, ActionKind.PICK):
        state = replace(state, is_picking=True)
        intent = _scan(
            "PICK",
            facts.current_action,
            pick_list,
            state.pick_cursor,
            champions,
            submit,
            unavailable=facts.banned_champions,
        )
        return intent, replace(state, pick_cursor=0, is_picking=False)

    if facts.phase == DraftPhase.PLANNING and not state.have_prepicked:
        target = facts.current_action or facts.pending_pick_action
        if target is None:
            return None, state

        name = pick_list.first()
        cid = pick_list.lookup(name, champions) if name else None
        if cid is None:
            print(f"[PREPICK] {name}: not in champion table, skip", flush=True)
            return None, state

        intent = SubmissionIntent(action_id=target.id, champion_id=cid, completed=False)
        if submit(intent):
            print(f"[PREPICK] OK {name} (championId={cid}, action={target.id})", flush=True)
            return intent, replace(state, have_prepicked=True)

        # 같은 사이클에서 재시도하지 않음. 다음 PLANNING 스냅샷에서 다시.
        print(f"[PREPICK] FAILED {name} (championId={cid})", flush=True)
        return None, state

    if facts.phase == DraftPhase.FINALIZATION and check_started is not None:
        if check_started():
            print("[GAME] game started", flush=True)
            return None, replace(state, in_game=True)

    return None, state
