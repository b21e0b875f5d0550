# env_loader.py
from __future__ import annotations

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

_LOADED: List[str] | None = None


def _project_dir() -> Path:
    # 이 파일이 있는 폴더를 "프로젝트 루트"로 가정
    return Path(__file__).resolve().parent


def load_project_env(profile: str | None = None, base_dir: Path | None = None) -> List[str]:
    """
    로드 우선순위 (먼저 로드된 값 우선, 이미 있는 환경변수는 덮지 않음):
      1) .env.<profile>   (profile 인자 > APP_PROFILE)
      2) .env
    반환: 실제로 로드한 파일 경로 목록
    """
    global _LOADED
    if _LOADED is not None and base_dir is None:
        # 중복 로드 방지 (여러 모듈에서 호출해도 OK)
        return list(_LOADED)

    proj = base_dir or _project_dir()
    p = (profile or os.getenv("APP_PROFILE") or "").strip().lower()

    candidates: List[Path] = []
    if p:
        candidates.append(proj / f".env.{p}")
    candidates.append(proj / ".env")

    loaded: List[str] = []
    for c in candidates:
        if c.exists():
            load_dotenv(dotenv_path=c, override=False)
            loaded.append(str(c))

    if base_dir is None:
        _LOADED = loaded
    return loaded


def env_float(key: str, default: float) -> float:
    raw = (os.getenv(key) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_truthy(key: str, default: str = "0") -> bool:
    s = (os.getenv(key) or default).strip().lower()
    return s in ("1", "true", "yes", "y", "on")
