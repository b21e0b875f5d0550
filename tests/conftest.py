import pytest


def _action(aid, actor, kind, champ=0, completed=False, in_progress=False):
    return {
        "id": aid,
        "actorCellId": actor,
        "type": kind,
        "championId": champ,
        "completed": completed,
        "isInProgress": in_progress,
    }


def _session(phase="BAN_PICK", local=2, actions=None, my_team=None, bans=None):
    return {
        "timer": {"phase": phase},
        "localPlayerCellId": local,
        "myTeam": my_team if my_team is not None else [
            {"cellId": 0, "assignedPosition": "top"},
            {"cellId": 1, "assignedPosition": "jungle"},
            {"cellId": local, "assignedPosition": "middle"},
        ],
        "actions": actions or [],
        "bans": bans or {"myTeamBans": [], "theirTeamBans": []},
    }


@pytest.fixture
def make_action():
    return _action


@pytest.fixture
def make_session():
    return _session


@pytest.fixture
def champions():
    return {"Ahri": 103, "Zed": 238, "Lux": 99, "Yasuo": 157, "Jinx": 222}
