import json

import pytest

from pick_config import load_pick_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for k in ("AUTOPICK_BANS", "AUTOPICK_PICKS", "AUTOPICK_CONFIG"):
        monkeypatch.delenv(k, raising=False)


def test_load_toml(tmp_path):
    p = tmp_path / "config.toml"
    p.write_text('bans = ["Zed", "Yasuo", "Zed"]\npicks = ["Ahri", "Lux"]\n', encoding="utf-8")
    cfg = load_pick_config(str(p))
    assert cfg.bans.names == ("Zed", "Yasuo")
    assert cfg.picks.names == ("Ahri", "Lux")
    assert cfg.source == str(p)


def test_load_json(tmp_path):
    p = tmp_path / "picks.json"
    p.write_text(json.dumps({"bans": ["Zed"], "picks": ["Ahri"]}), encoding="utf-8")
    cfg = load_pick_config(str(p))
    assert cfg.bans.names == ("Zed",)
    assert cfg.picks.names == ("Ahri",)


def test_env_overrides_file(tmp_path, monkeypatch):
    p = tmp_path / "config.toml"
    p.write_text('bans = ["Zed"]\npicks = ["Ahri"]\n', encoding="utf-8")
    monkeypatch.setenv("AUTOPICK_PICKS", "Jinx, Lux")
    cfg = load_pick_config(str(p))
    assert cfg.bans.names == ("Zed",)
    assert cfg.picks.names == ("Jinx", "Lux")


def test_env_only(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTOPICK_BANS", "Zed")
    monkeypatch.setenv("AUTOPICK_PICKS", "Ahri")
    cfg = load_pick_config(str(tmp_path / "missing.toml"))
    assert cfg.source == "env"
    assert cfg.picks.first() == "Ahri"


def test_empty_lists_rejected(tmp_path):
    p = tmp_path / "config.toml"
    p.write_text('bans = []\npicks = ["Ahri"]\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_pick_config(str(p))


def test_bad_top_level_json(tmp_path):
    p = tmp_path / "picks.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_pick_config(str(p))
