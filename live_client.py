# live_client.py
"""Live Client Data API (in-game, https://127.0.0.1:2999). 게임 중에만 응답, 인증 없음."""
from __future__ import annotations

from typing import Any, Optional

import requests

BASE_URL = "https://127.0.0.1:2999/liveclientdata"


class LiveClient:
    def __init__(self, base_url: str = BASE_URL, timeout: float = 1.0, session: Any = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            session.verify = False  # self-signed
        self._session = session

    def _get(self, endpoint: str) -> Any:
        r = self._session.get(f"{self.base_url}/{endpoint}", timeout=self.timeout)
        if r.status_code >= 400:
            raise requests.HTTPError(f"{r.status_code} GET {endpoint}: {r.text[:200]}")
        return r.json() if r.text else None

    def game_stats(self) -> Optional[dict]:
        try:
            obj = self._get("gamestats")
        except (requests.RequestException, ValueError):
            return None
        return obj if isinstance(obj, dict) else None

    def game_time(self) -> Optional[float]:
        """경과 게임 시간(초). 게임이 없거나 응답이 이상하면 None."""
        stats = self.game_stats()
        if not stats:
            return None
        try:
            return float(stats.get("gameTime"))
        except (TypeError, ValueError):
            return None
