import json
import os
import time
import requests

DDRAGON = "https://ddragon.leagueoflegends.com"
DEFAULT_LOCALE = "en_US"

def _cache_path(locale: str) -> str:
    return f"ddragon_champions_{locale}.json"

def _get_latest_ddragon_version(timeout=10) -> str:
    # 최신 Data Dragon 버전
    return requests.get(f"{DDRAGON}/api/versions.json", timeout=timeout).json()[0]

def _download_champion_json(version: str, locale: str, timeout=15) -> dict:
    return requests.get(f"{DDRAGON}/cdn/{version}/data/{locale}/champion.json", timeout=timeout).json()

def build_tables(raw: dict) -> dict:
    """
    champion.json -> {"id_to_name": {...}, "name_to_id": {...}}
    name_to_id 에는 Data Dragon id("MonkeyKing")와 표시 이름("Wukong") 둘 다 넣는다.
    """
    id_to_name = {}
    name_to_id = {}

    for ddid, champ in (raw.get("data") or {}).items():
        # champ["key"] = "21" (championId)
        try:
            cid = int(champ["key"])
        except (KeyError, TypeError, ValueError):
            continue
        name = champ.get("name") or ddid
        id_to_name[cid] = name
        name_to_id[ddid] = cid
        name_to_id.setdefault(name, cid)

    return {"id_to_name": id_to_name, "name_to_id": name_to_id}

def _read_cache(cache_path: str) -> dict | None:
    if not os.path.exists(cache_path):
        return None
    try:
        with open(cache_path, "r", encoding="utf-8") as f:
            cached = json.load(f)
    except (OSError, ValueError):
        return None
    if not isinstance(cached, dict) or "id_to_name" not in cached or "name_to_id" not in cached:
        return None
    # json 저장하면 int key가 str이 되니까 되돌림
    cached["id_to_name"] = {int(k): v for k, v in (cached.get("id_to_name") or {}).items()}
    cached["name_to_id"] = {k: int(v) for k, v in (cached.get("name_to_id") or {}).items()}
    return cached

def load_champions(locale: str | None = None, force_refresh: bool = False) -> dict:
    """
    반환:
      {
        "version": "15.24.1",
        "locale": "en_US",
        "id_to_name": { 21: "Miss Fortune", ... },
        "name_to_id": { "MissFortune": 21, "Miss Fortune": 21, ... },
        "all_names": [...]
      }

    Data Dragon에 못 붙으면 버전 상관없이 캐시를 쓴다. 캐시도 없으면 예외 그대로.
    """
    locale = (locale or os.getenv("DDRAGON_LOCALE") or DEFAULT_LOCALE).strip()
    cache_path = _cache_path(locale)
    cached = _read_cache(cache_path)

    try:
        latest = _get_latest_ddragon_version()
    except (requests.RequestException, ValueError, IndexError) as e:
        if cached is None:
            raise
        print(f"[DDRAGON] version check failed ({type(e).__name__}), using cache {cached.get('version')}", flush=True)
        return cached

    if not force_refresh and cached is not None and cached.get("version") == latest:
        return cached

    tables = build_tables(_download_champion_json(latest, locale))

    out = {
        "version": latest,
        "locale": locale,
        "fetched_at": int(time.time()),
        "id_to_name": tables["id_to_name"],
        "name_to_id": tables["name_to_id"],
        "all_names": sorted(tables["name_to_id"].keys()),
    }

    with open(cache_path, "w", encoding="utf-8") as f:
        json.dump(out, f, ensure_ascii=False, indent=2)

    return out
