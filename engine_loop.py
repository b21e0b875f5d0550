# engine_loop.py
from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional

from action_resolver import ResolverState, SubmissionIntent, resolve
from draft_session import DraftPhase, SnapshotError, interpret
from game_start import GameStartDetector
from lcu_client import READY_CHECK_URI, SESSION_URI
from preference_list import PreferenceList


class LoopStatus(str, Enum):
    IN_GAME = "in_game"
    DISCONNECTED = "disconnected"
    INTERRUPTED = "interrupted"


def unwrap_event(msg: Any) -> Optional[Dict[str, Any]]:
    """{uri, eventType, data} envelope 이면 그대로, 아니면 None (heartbeat 등)."""
    if isinstance(msg, dict) and "uri" in msg:
        return msg
    return None


def should_accept_ready_check(data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    return data.get("state") == "InProgress" and data.get("playerResponse") == "None"


class EngineLoop:
    """
    이벤트 envelope 를 하나씩 끝까지 처리한다 (동시 처리 없음).
    ResolverState 는 이 객체만 들고 있다.

    client 는 submit_action(action_id, champion_id, completed) -> (ok, msg)
    와 accept_ready_check() -> (ok, msg) 만 있으면 된다.
    """

    def __init__(
        self,
        client: Any,
        champions: Mapping[str, int],
        bans: PreferenceList,
        picks: PreferenceList,
        detector: GameStartDetector | None = None,
        log_idle: bool = False,
    ):
        self.client = client
        self.champions = champions
        self.bans = bans
        self.picks = picks
        self.detector = detector
        self.log_idle = log_idle
        self.state = ResolverState()
        self.n_events = 0
        self.n_skipped = 0
        self._last_position: Optional[str] = None
        self._finalizing = False

    @property
    def in_game(self) -> bool:
        return self.state.in_game

    def _submit(self, intent: SubmissionIntent) -> bool:
        try:
            ok, msg = self.client.submit_action(intent.action_id, intent.champion_id, intent.completed)
        except Exception as e:
            # 원인이 뭐든 제출 실패로 취급 -> 다음 후보로
            ok, msg = False, f"{type(e).__name__}: {e}"
        if not ok:
            print(f"[LCU] submit failed: action={intent.action_id} championId={intent.champion_id} ({msg})", flush=True)
        return ok

    def _poll_game_start(self):
        if not self._finalizing or self.detector is None:
            return
        if self.detector.check_started():
            print("[GAME] game started", flush=True)
            self.state = replace(self.state, in_game=True)

    def _end_draft(self):
        """세션이 사라짐 (닷지/로비 종료/게임 로딩). 드래프트 단위 상태는 새로."""
        self.state = ResolverState(in_game=self.state.in_game)
        self._last_position = None

    def _on_ready_check(self, data: Any):
        if not should_accept_ready_check(data):
            return
        ok, msg = self.client.accept_ready_check()
        print(f"[READY] accept ready-check: ok={ok} {msg}", flush=True)

    def _on_session(self, data: Any):
        try:
            facts = interpret(data)
        except SnapshotError as e:
            self.n_skipped += 1
            print(f"[ENGINE] skip snapshot: {e}", flush=True)
            return

        if facts.is_assigned and facts.assigned_position != self._last_position:
            self._last_position = facts.assigned_position
            print(f"[ENGINE] assigned position: {facts.assigned_position or '(none)'}", flush=True)

        check = self.detector.check_started if self.detector is not None else None
        intent, self.state = resolve(
            facts,
            self.state,
            self.bans,
            self.picks,
            self.champions,
            self._submit,
            check_started=check,
        )

        self._finalizing = facts.phase == DraftPhase.FINALIZATION

        if intent is None and self.log_idle:
            act = facts.current_action
            print(
                f"[ENGINE] idle phase={facts.phase.value} "
                f"action={act.kind.value + '#' + str(act.id) if act else '-'} "
                f"banned={len(facts.banned_champions)}",
                flush=True,
            )

    def handle(self, msg: Any) -> bool:
        """envelope 하나 처리. 게임이 시작됐으면(terminal) True."""
        if self.state.in_game:
            return True

        ev = unwrap_event(msg)
        if ev is None:
            # heartbeat (None) 등: 챔피언 선택이 끝난 뒤에도 게임 시작은 계속 확인
            self._poll_game_start()
            return self.state.in_game
        self.n_events += 1

        uri = ev.get("uri")
        data = ev.get("data")
        if ev.get("eventType") == "Delete" or data is None:
            self._poll_game_start()
            if uri == SESSION_URI and not self.state.in_game:
                self._end_draft()
            return self.state.in_game

        try:
            if uri == READY_CHECK_URI:
                self._on_ready_check(data)
            elif uri == SESSION_URI:
                self._on_session(data)
        except Exception as e:
            # 이벤트 하나 때문에 프로세스가 죽으면 안 됨
            self.n_skipped += 1
            print(f"[ENGINE] ERROR while handling {uri}: {type(e).__name__}: {e}", flush=True)

        return self.state.in_game

    def run(self, events: Iterable[Any]) -> LoopStatus:
        try:
            for msg in events:
                if self.handle(msg):
                    return LoopStatus.IN_GAME
        except KeyboardInterrupt:
            return LoopStatus.INTERRUPTED
        return LoopStatus.DISCONNECTED
