from preference_list import PreferenceList


def test_of_dedups_and_drops_blanks():
    pl = PreferenceList.of(["Ahri", " Zed ", "", "Ahri", None, "Lux"])
    assert pl.names == ("Ahri", "Zed", "Lux")
    assert len(pl) == 3
    assert pl.first() == "Ahri"


def test_empty_list():
    pl = PreferenceList.of([])
    assert not pl
    assert pl.first() is None
    assert list(pl.scan(0)) == []


def test_scan_starts_at_cursor():
    pl = PreferenceList.of(["Ahri", "Zed", "Lux"])
    assert list(pl.scan(1)) == [(1, "Zed"), (2, "Lux")]
    assert list(pl.scan(3)) == []


def test_out_of_range_cursor_is_clamped_to_zero():
    pl = PreferenceList.of(["Ahri", "Zed"])
    assert pl.clamp(5) == 0
    assert pl.clamp(-1) == 0
    assert [n for _, n in pl.scan(7)] == ["Ahri", "Zed"]


def test_lookup():
    pl = PreferenceList.of(["Ahri"])
    assert pl.lookup("Ahri", {"Ahri": 103}) == 103
    assert pl.lookup("Ahri", {"Ahri": "103"}) == 103
    assert pl.lookup("Zed", {"Ahri": 103}) is None
    assert pl.lookup("Ahri", {"Ahri": 0}) is None
