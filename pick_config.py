# pick_config.py
from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from preference_list import PreferenceList

DEFAULT_CONFIG = "config.toml"


@dataclass(frozen=True)
class PickConfig:
    bans: PreferenceList
    picks: PreferenceList
    source: str = ""


def _names(raw: Any) -> List[str]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, list):
        return []
    return [str(x) for x in raw if isinstance(x, (str, int))]


def _read_file(path: Path) -> Dict[str, Any]:
    if path.suffix.lower() == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a table/object with 'bans' and 'picks'")
    return data


def load_pick_config(path: str | None = None) -> PickConfig:
    """
    설정 파일(.toml 또는 .json) 읽기:
      bans  = ["Zed", "Yasuo"]
      picks = ["Ahri", "Lux"]

    AUTOPICK_BANS / AUTOPICK_PICKS (쉼표 구분) 가 있으면 파일 값 대신 사용.
    두 목록 다 비어 있으면 안 됨.
    """
    p = Path(path or os.getenv("AUTOPICK_CONFIG") or DEFAULT_CONFIG)

    data: Dict[str, Any] = {}
    source = "env"
    if p.exists():
        data = _read_file(p)
        source = str(p)

    bans_raw = os.getenv("AUTOPICK_BANS")
    picks_raw = os.getenv("AUTOPICK_PICKS")
    bans = PreferenceList.of(_names(bans_raw) if bans_raw else _names(data.get("bans")))
    picks = PreferenceList.of(_names(picks_raw) if picks_raw else _names(data.get("picks")))

    if not bans or not picks:
        raise ValueError(
            f"Picks or bans list is empty (config={p}, exists={p.exists()}).\n"
            "Fix: put bans = [...] and picks = [...] in config.toml,\n"
            "  OR set AUTOPICK_BANS=Zed,Yasuo and AUTOPICK_PICKS=Ahri,Lux in .env"
        )

    return PickConfig(bans=bans, picks=picks, source=source)
