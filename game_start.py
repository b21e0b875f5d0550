# game_start.py
from __future__ import annotations

import time
from typing import Callable, Optional


class GameStartDetector:
    """
    라이브 클라이언트 텔레메트리(경과 시간)로 게임 시작을 판단.
    한 번 True가 되면 계속 True (edge-triggered, one-shot).

    telemetry() -> float | None  (게임에 연결 안 되면 None)
    """

    def __init__(
        self,
        telemetry: Callable[[], Optional[float]],
        min_interval: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.telemetry = telemetry
        self.min_interval = max(0.0, float(min_interval))
        self._clock = clock
        self._last_poll: Optional[float] = None
        self._started = False
        self.n_polls = 0

    @property
    def started(self) -> bool:
        return self._started

    def check_started(self) -> bool:
        if self._started:
            return True

        now = self._clock()
        if self._last_poll is not None and now - self._last_poll < self.min_interval:
            return False
        self._last_poll = now
        self.n_polls += 1

        elapsed = self.telemetry()
        if elapsed is not None and elapsed > 0:
            self._started = True
        return self._started
