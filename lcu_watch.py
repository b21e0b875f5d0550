# lcu_watch.py
import time

from draft_session import SnapshotError, interpret
from env_loader import load_project_env
from lcu_client import LCUClient


def describe(sess) -> str:
    try:
        f = interpret(sess)
    except SnapshotError as e:
        return f"(skip: {e})"
    act = f.current_action
    cur = f"{act.kind.value}#{act.id}" if act else "-"
    return (
        f"phase={f.phase.value} cell={f.local_cell_id} pos={f.assigned_position} "
        f"current={cur} banned={sorted(f.banned_champions)}"
    )


def main():
    load_project_env()
    lcu = LCUClient.from_env_or_guess()
    ok, msg = lcu.ping()
    print("PING:", ok, msg)
    for i in range(10):
        flow = lcu.get_gameflow_phase()
        sess = lcu.get_champ_select_session()
        rc = lcu.get_ready_check() or {}
        line = describe(sess) if sess else "(no session)"
        print(f"[{i}] gameflow={flow} ready={rc.get('state')}/{rc.get('playerResponse')} {line}")
        time.sleep(1)


if __name__ == "__main__":
    main()
