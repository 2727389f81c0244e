"""Command-line interface for running planespotter without the HTTP API.

Usage examples:
    planespotter init --from-env
    planespotter set-config --latitude 51.5 --longitude -0.12 --username me --password secret
    planespotter poll
    planespotter run --notifier log
    planespotter show --json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from pydantic import ValidationError

from planespotter import storage
from planespotter.config import load_env_config, settings
from planespotter.domain import LoopState
from planespotter.errors import PlanespotterError
from planespotter.ingestors import OpenSkyClient
from planespotter.models.spotter import ConfigUpdate, ConfigView
from planespotter.services import (
    LoopController,
    PollCycle,
    get_notifier,
    search_url_for_config,
    start_from_save,
    validate_position,
)

logger = logging.getLogger("planespotter.cli")


def _poll_cycle(args) -> PollCycle:
    return PollCycle(
        args.save_path,
        client=OpenSkyClient(timeout=settings.opensky_timeout),
        notifier=get_notifier(args.notifier, icon_path=settings.icon_path),
    )


def _load(args):
    try:
        return storage.load(args.save_path)
    except PlanespotterError as exc:
        sys.stderr.write(f"{exc}\n")
        raise SystemExit(1)


def cmd_init(args) -> None:
    if Path(args.save_path).exists():
        print(f"Save file already exists at {args.save_path}")
        return

    config = load_env_config() if args.from_env else None
    storage.create_if_absent(args.save_path, config=config)
    print(f"Created save file at {args.save_path}")


def cmd_show(args) -> None:
    state = _load(args)
    output = {
        "config": ConfigView.from_config(state.config).model_dump(),
        "seen_count": state.registry.seen_count,
        "callsigns": state.registry.callsigns,
    }
    if args.json:
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return

    config = output["config"]
    print(f"Position: {config['latitude']}, {config['longitude']}")
    print(f"Spot distance: {config['spot_distance_km']} km")
    print(f"Check frequency: {config['check_freq_seconds']} s")
    print(f"OpenSky user: {config['username'] or 'n/a'}")
    print(f"Total seen: {output['seen_count']}")
    for callsign in output["callsigns"]:
        print(f"  {callsign}")


def cmd_set_config(args) -> None:
    try:
        update = ConfigUpdate(
            latitude=args.latitude,
            longitude=args.longitude,
            username=args.username,
            password=args.password,
            spot_distance_km=args.spot_distance_km,
            check_freq_seconds=args.check_freq_seconds,
        )
        config = update.to_config()
        validate_position(config.position)
    except (ValidationError, PlanespotterError) as exc:
        sys.stderr.write(f"Invalid config: {exc}\n")
        raise SystemExit(1)

    storage.save_config(args.save_path, config)
    print("Saved config")


def cmd_poll(args) -> None:
    state = _load(args)
    try:
        search_url = search_url_for_config(state.config, settings.opensky_host)
        new_count = _poll_cycle(args).run(search_url, state)
    except PlanespotterError as exc:
        sys.stderr.write(f"Error updating planes: {exc}\n")
        raise SystemExit(1)
    print(f"New aircraft: {new_count} (total seen {state.registry.seen_count})")


def cmd_run(args) -> None:
    controller = LoopController(_poll_cycle(args))
    try:
        start_from_save(controller, args.save_path, settings.opensky_host)
    except PlanespotterError as exc:
        sys.stderr.write(f"{exc}\n")
        raise SystemExit(1)

    print(controller.status().message)
    try:
        while not controller.join(timeout=0.5):
            pass
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping")
        controller.stop()
        controller.join(settings.stop_timeout)

    status = controller.status()
    print(status.message)
    if status.state == LoopState.ERROR:
        raise SystemExit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Notify about aircraft passing nearby")
    parser.add_argument(
        "--save-path", default=settings.save_path, help="Path of the JSON save file"
    )
    parser.add_argument(
        "--notifier",
        default=settings.notifier,
        choices=["desktop", "log"],
        help="Where to send spotting notifications",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    init_cmd = sub.add_parser("init", help="Create the save file if it does not exist")
    init_cmd.add_argument(
        "--from-env", action="store_true", help="Seed config from .env / environment"
    )
    init_cmd.set_defaults(func=cmd_init)

    show_cmd = sub.add_parser("show", help="Show config and statistics")
    show_cmd.add_argument("--json", action="store_true", help="Return JSON output")
    show_cmd.set_defaults(func=cmd_show)

    config_cmd = sub.add_parser("set-config", help="Save observer settings")
    config_cmd.add_argument("--latitude", type=float, required=True)
    config_cmd.add_argument("--longitude", type=float, required=True)
    config_cmd.add_argument("--username", required=True, help="OpenSky username")
    config_cmd.add_argument("--password", required=True, help="OpenSky password")
    config_cmd.add_argument("--spot-distance-km", type=int, default=20)
    config_cmd.add_argument("--check-freq-seconds", type=int, default=60)
    config_cmd.set_defaults(func=cmd_set_config)

    poll_cmd = sub.add_parser("poll", help="Poll OpenSky once")
    poll_cmd.set_defaults(func=cmd_poll)

    run_cmd = sub.add_parser("run", help="Poll continuously until interrupted")
    run_cmd.set_defaults(func=cmd_run)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    args.func(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
