# autopick.py
from __future__ import annotations

import argparse
import os

from env_loader import env_float, env_truthy, load_project_env
from champion_catalog import load_champions
from engine_loop import EngineLoop, LoopStatus
from game_start import GameStartDetector
from lcu_client import LCUClient
from live_client import LiveClient
from pick_config import load_pick_config

EXIT_OK = 0
EXIT_ERROR = 1


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Champion select auto ban/pick")
    ap.add_argument("--config", default=None, help="bans/picks 설정 파일 (.toml/.json). 기본: AUTOPICK_CONFIG 또는 config.toml")
    ap.add_argument("--lockfile", default=None, help="LCU lockfile 경로. 기본: LOL_LOCKFILE 또는 설치 경로 추측")
    ap.add_argument("--poll_interval", type=float, default=None, help="LCU 폴링 주기(초)")
    ap.add_argument("--game_check_interval", type=float, default=None, help="게임 시작 확인 최소 간격(초)")
    ap.add_argument("--locale", default=None, help="Data Dragon locale (기본 en_US)")
    ap.add_argument("--refresh_champions", action="store_true", help="챔피언 캐시 무시하고 다시 받기")
    ap.add_argument("--profile", default=None, help="APP_PROFILE (.env.<profile>)")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    loaded_envs = load_project_env(profile=args.profile)

    poll_interval = args.poll_interval if args.poll_interval is not None else env_float("AUTOPICK_POLL_INTERVAL", 0.5)
    game_check_interval = (
        args.game_check_interval
        if args.game_check_interval is not None
        else env_float("AUTOPICK_GAME_CHECK_INTERVAL", 2.0)
    )

    try:
        cfg = load_pick_config(args.config)
        lcu = LCUClient.from_env_or_guess(lockfile=args.lockfile)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}")
        return EXIT_ERROR

    ok, msg = lcu.ping()
    if not ok:
        print(f"ERROR: LCU not reachable: {msg}")
        return EXIT_ERROR

    try:
        champs = load_champions(locale=args.locale, force_refresh=args.refresh_champions)
    except (OSError, ValueError, IndexError) as e:
        # requests.RequestException 도 OSError
        print(f"ERROR: champion table (Data Dragon) not available: {type(e).__name__}: {e}")
        return EXIT_ERROR
    name_to_id = champs["name_to_id"]

    for label, plist in (("bans", cfg.bans), ("picks", cfg.picks)):
        missing = [n for n in plist.names if n not in name_to_id]
        if missing:
            print(f"WARN: {label} not in champion table (will be skipped): {missing}")

    print("==================================================")
    print("autopick running")
    print(f"- APP_PROFILE : {os.getenv('APP_PROFILE')}")
    print(f"- config      : {cfg.source}")
    print(f"- bans        : {list(cfg.bans.names)}")
    print(f"- picks       : {list(cfg.picks.names)}")
    print(f"- lcu         : {lcu.conn.base_url} ({msg})")
    print(f"- champions   : {len(champs['id_to_name'])} (ddragon {champs.get('version')} {champs.get('locale')})")
    print(f"- poll        : {poll_interval}s, game check {game_check_interval}s")
    print(f"- loaded env  : {', '.join(loaded_envs) if loaded_envs else '(none)'}")
    print("==================================================")

    live = LiveClient()
    detector = GameStartDetector(live.game_time, min_interval=game_check_interval)
    loop = EngineLoop(
        lcu,
        name_to_id,
        cfg.bans,
        cfg.picks,
        detector=detector,
        log_idle=env_truthy("AUTOPICK_LOG_IDLE"),
    )

    status = loop.run(lcu.poll_events(interval=poll_interval))

    print(f"DONE status={status.value} events={loop.n_events} skipped={loop.n_skipped}")
    if status == LoopStatus.IN_GAME:
        print("Game started! Exiting champion select bot...")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
