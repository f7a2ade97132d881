#!/usr/bin/env python3
"""Drive the car headlessly from a scripted maneuver list.

Runs the fixed-timestep loop for the configured duration, logs speed and
steering angle every report interval and prints a metrics summary.

Usage:
    python scripts/drive.py --config configs/default.yaml

    # Longer session, record telemetry
    python scripts/drive.py --config configs/default.yaml --duration 30 --output runs

    # Override config values
    python scripts/drive.py --override vehicle.max_speed=200 sim.tick_rate=60
"""

import argparse
import copy
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from kinecar.analysis import setup_logging, SessionLogger, compute_drive_metrics, check_drive_health
from kinecar.config import (
    DEFAULT_CONFIG,
    apply_overrides,
    build_inputs,
    build_loop,
    build_reporter,
    build_vehicle,
    build_world,
    load_config,
    validate_config,
)
from kinecar.sim import CarBody, run_session
from kinecar.telemetry import TelemetryBuilder, StateValidator

logger = logging.getLogger("kinecar.drive")


def parse_args():
    parser = argparse.ArgumentParser(description="Headless kinematic car session")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (defaults built in)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Simulation seconds to run (overrides sim.duration)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for telemetry, config and metrics",
    )
    parser.add_argument(
        "--name",
        type=str,
        default="drive",
        help="Session name used in the output directory",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (overrides logging.level)",
    )
    parser.add_argument(
        "--override",
        nargs="*",
        default=[],
        help="Config overrides as key.subkey=value",
    )
    return parser.parse_args()


def main():
    args = parse_args()

    if args.config is not None:
        if not args.config.exists():
            print(f"Error: Config file not found: {args.config}")
            sys.exit(1)
        config = load_config(args.config)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    config = apply_overrides(config, args.override)
    if args.duration is not None:
        config["sim"]["duration"] = args.duration
    if args.log_level is not None:
        config["logging"]["level"] = args.log_level

    errors = validate_config(config)
    if errors:
        print("Configuration validation failed:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    session = None
    if args.output is not None:
        session = SessionLogger(args.name, base_dir=args.output, level=config["logging"]["level"])
        session.save_config(config)
    else:
        log_file = config["logging"].get("log_file")
        setup_logging(config["logging"]["level"], Path(log_file) if log_file else None)

    car = CarBody(state=build_vehicle(config))
    bounds = build_world(config)
    loop = build_loop(config)
    inputs = build_inputs(config)
    builder = TelemetryBuilder()
    records = []

    logger.info(
        f"Turning radius at full lock: {car.state.turning_radius:.2f} "
        f"(wheel base {car.state.wheel_base:.1f})"
    )

    def on_tick(time, intent, result):
        record = builder.build(car, time, intent)
        records.append(record)
        if session is not None:
            session.telemetry.log(len(records) - 1, record)

    ticks = run_session(
        car,
        inputs,
        duration=float(config["sim"]["duration"]),
        loop=loop,
        bounds=bounds,
        frame_rate=float(config["sim"]["frame_rate"]),
        reporter=build_reporter(config),
        on_tick=on_tick,
    )

    ok, violations = StateValidator.validate(car, bounds)
    for violation in violations:
        logger.error(violation)

    metrics = compute_drive_metrics(records, bounds)
    for warning in check_drive_health(metrics, car.state.max_speed):
        logger.warning(warning)

    logger.info(f"Ran {ticks} ticks ({loop.time:.2f}s)")
    for key, value in metrics.items():
        logger.info(f"  {key}: {value:.3f}")

    if session is not None:
        session.telemetry.save_summary()
        session.save_metrics(metrics)
        logger.info(f"Session output in {session.session_dir}")

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
