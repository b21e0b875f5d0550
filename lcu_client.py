from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import requests

try:
    import urllib3
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
except Exception:
    pass


SESSION_URI = "/lol-champ-select/v1/session"
READY_CHECK_URI = "/lol-matchmaking/v1/ready-check"
GAMEFLOW_URI = "/lol-gameflow/v1/gameflow-phase"


@dataclass
class LCUConn:
    port: int
    password: str
    protocol: str = "https"
    host: str = "127.0.0.1"

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"

    @property
    def auth(self) -> Tuple[str, str]:
        return ("riot", self.password)


def read_lockfile(path: str) -> LCUConn:
    """
    Riot lockfile format:
      name:pid:port:password:protocol
    """
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        raw = f.read().strip()
    parts = raw.split(":")
    if len(parts) < 5:
        raise ValueError(f"Invalid lockfile format: {raw}")
    return LCUConn(port=int(parts[2]), password=parts[3], protocol=parts[4])


def guess_lockfile_paths() -> List[str]:
    candidates: List[str] = []
    env_path = os.getenv("LOL_LOCKFILE")
    if env_path:
        candidates.append(env_path.strip())

    candidates.extend([
        "C:/Riot Games/League of Legends/lockfile",
        "C:/Program Files/Riot Games/League of Legends/lockfile",
        "C:/Program Files (x86)/Riot Games/League of Legends/lockfile",
        "/Applications/League of Legends.app/Contents/LoL/lockfile",
    ])
    for var in ("ProgramFiles", "ProgramFiles(x86)"):
        pf = os.environ.get(var)
        if pf:
            candidates.append(str(Path(pf) / "Riot Games" / "League of Legends" / "lockfile"))

    seen = set()
    uniq = []
    for p in candidates:
        if not p or p in seen:
            continue
        seen.add(p)
        uniq.append(p)
    return uniq


class LCUClient:
    """
    League Client (LCU) 로컬 REST 전송 계층.
    - 제출/수락 계열은 (ok, msg) 를 돌려준다. 네트워크 예외는 여기서 잡는다.
    - 조회 계열은 실패하면 None / "Unknown".
    """

    def __init__(self, conn: LCUConn, timeout: float = 2.0, session: Any = None):
        self.conn = conn
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.verify = False
            session.auth = conn.auth
            session.headers.update({"Content-Type": "application/json"})
        self._session = session

    @classmethod
    def from_env_or_guess(cls, lockfile: str | None = None, timeout: float | None = None) -> "LCUClient":
        if timeout is None:
            timeout = float(os.getenv("LCU_TIMEOUT") or "2.0")

        paths = [lockfile] if lockfile else guess_lockfile_paths()
        last_err = None
        for p in paths:
            try:
                if os.path.exists(p):
                    return cls(read_lockfile(p), timeout=timeout)
            except (OSError, ValueError) as e:
                last_err = e
                continue

        raise FileNotFoundError(
            "LCU lockfile을 찾지 못했어. (League client가 켜져 있는지 확인)\n"
            "해결: .env(또는 환경변수)에 LOL_LOCKFILE=... 를 설정하거나 --lockfile 로 넘겨줘.\n"
            '예) LOL_LOCKFILE=C:/Riot Games/League of Legends/lockfile\n'
            f"(마지막 에러: {last_err})"
        )

    # ---- low level ----
    def _url(self, path: str) -> str:
        return self.conn.base_url + path

    def _get(self, path: str) -> Any:
        r = self._session.get(self._url(path), timeout=self.timeout)
        if r.status_code >= 400:
            raise requests.HTTPError(f"{r.status_code} GET {path}: {r.text[:200]}")
        return r.json() if r.text else None

    def _send(self, method: str, path: str, body: Any = None) -> Tuple[bool, str]:
        try:
            fn = getattr(self._session, method)
            if body is None:
                r = fn(self._url(path), timeout=self.timeout)
            else:
                r = fn(self._url(path), json=body, timeout=self.timeout)
        except requests.RequestException as e:
            return False, f"{type(e).__name__}: {e}"

        if r.status_code >= 400:
            return False, f"HTTP {r.status_code} {method.upper()} {path}: {r.text[:200]}"
        return True, f"HTTP {r.status_code}"

    # ---- reads ----
    def ping(self) -> Tuple[bool, str]:
        try:
            phase = self._get(GAMEFLOW_URI)
            return True, f"OK (phase={phase})"
        except Exception as e:
            return False, str(e)

    def get_gameflow_phase(self) -> str:
        try:
            return str(self._get(GAMEFLOW_URI))
        except (requests.RequestException, ValueError):
            return "Unknown"

    def get_champ_select_session(self) -> Optional[Dict[str, Any]]:
        try:
            return self._get(SESSION_URI)
        except (requests.RequestException, ValueError):
            return None

    def get_ready_check(self) -> Optional[Dict[str, Any]]:
        try:
            return self._get(READY_CHECK_URI)
        except (requests.RequestException, ValueError):
            return None

    # ---- writes ----
    def submit_action(self, action_id: int, champion_id: int, completed: bool) -> Tuple[bool, str]:
        path = f"{SESSION_URI}/actions/{int(action_id)}"
        return self._send("patch", path, {"championId": int(champion_id), "completed": bool(completed)})

    def accept_ready_check(self) -> Tuple[bool, str]:
        return self._send("post", READY_CHECK_URI + "/accept")

    # ---- event source ----
    def poll_events(
        self,
        interval: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
        max_polls: int | None = None,
        heartbeat: bool = True,
    ) -> Iterator[Optional[Dict[str, Any]]]:
        """
        push 채널 대용: ready-check / session 리소스를 주기적으로 읽어서
        내용이 바뀔 때만 {uri, eventType, data} envelope 를 내보낸다.
        heartbeat=True 면 바뀐 게 없는 주기마다 None 을 하나 내보낸다.
        """
        last: Dict[str, str] = {}
        readers = (
            (READY_CHECK_URI, self.get_ready_check),
            (SESSION_URI, self.get_champ_select_session),
        )
        n = 0
        while max_polls is None or n < max_polls:
            n += 1
            emitted = False
            for uri, read in readers:
                data = read()
                key = json.dumps(data, sort_keys=True, default=str)
                prev = last.get(uri)
                if prev == key:
                    continue
                last[uri] = key
                if data is None:
                    if prev is not None:
                        emitted = True
                        yield {"uri": uri, "eventType": "Delete", "data": None}
                    continue
                emitted = True
                yield {"uri": uri, "eventType": "Update", "data": data}
            if heartbeat and not emitted:
                yield None
            sleep(interval)
