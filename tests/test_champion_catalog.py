import json

import pytest
import requests

import champion_catalog
from champion_catalog import build_tables, load_champions

RAW = {
    "data": {
        "Ahri": {"key": "103", "name": "Ahri"},
        "MonkeyKing": {"key": "62", "name": "Wukong"},
        "Broken": {"name": "no key"},
    }
}


def test_build_tables():
    t = build_tables(RAW)
    assert t["id_to_name"] == {103: "Ahri", 62: "Wukong"}
    assert t["name_to_id"]["MonkeyKing"] == 62
    assert t["name_to_id"]["Wukong"] == 62
    assert "Broken" not in t["name_to_id"]


def test_load_champions_caches(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    downloads = []
    monkeypatch.setattr(champion_catalog, "_get_latest_ddragon_version", lambda timeout=10: "15.1.1")

    def fake_download(version, locale, timeout=15):
        downloads.append((version, locale))
        return RAW

    monkeypatch.setattr(champion_catalog, "_download_champion_json", fake_download)

    first = load_champions(locale="en_US")
    assert first["version"] == "15.1.1"
    assert first["name_to_id"]["Ahri"] == 103
    assert (tmp_path / "ddragon_champions_en_US.json").exists()

    # 캐시에서 읽으면 int key 로 복원
    second = load_champions(locale="en_US")
    assert second["id_to_name"][62] == "Wukong"
    assert downloads == [("15.1.1", "en_US")]


def test_stale_cache_is_refetched(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "ddragon_champions_en_US.json").write_text(
        json.dumps({"version": "14.1.1", "id_to_name": {}, "name_to_id": {}}), encoding="utf-8"
    )
    monkeypatch.setattr(champion_catalog, "_get_latest_ddragon_version", lambda timeout=10: "15.1.1")
    monkeypatch.setattr(champion_catalog, "_download_champion_json", lambda v, l, timeout=15: RAW)

    out = load_champions(locale="en_US")
    assert out["version"] == "15.1.1"
    assert out["name_to_id"]["Ahri"] == 103


def _unreachable(*a, **kw):
    raise requests.ConnectionError("ddragon unreachable")


def test_offline_uses_cache(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "ddragon_champions_en_US.json").write_text(
        json.dumps({"version": "14.1.1", "id_to_name": {"103": "Ahri"}, "name_to_id": {"Ahri": 103}}),
        encoding="utf-8",
    )
    monkeypatch.setattr(champion_catalog.requests, "get", _unreachable)

    out = load_champions(locale="en_US")
    assert out["version"] == "14.1.1"
    assert out["id_to_name"] == {103: "Ahri"}


def test_offline_without_cache_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(champion_catalog.requests, "get", _unreachable)
    with pytest.raises(requests.ConnectionError):
        load_champions(locale="en_US")
