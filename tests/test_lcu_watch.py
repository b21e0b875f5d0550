from lcu_watch import describe


def test_describe_session(make_session, make_action):
    sess = make_session(
        phase="BAN_PICK",
        actions=[[make_action(4, 2, "ban", in_progress=True)]],
        bans={"myTeamBans": [157], "theirTeamBans": [103]},
    )
    line = describe(sess)
    assert "phase=BAN_PICK" in line
    assert "cell=2" in line
    assert "pos=middle" in line
    assert "current=ban#4" in line
    assert "banned=[103, 157]" in line


def test_describe_bad_snapshot():
    assert describe({"timer": {"phase": "PLANNING"}}).startswith("(skip:")
