#!/usr/bin/env python3
"""
stepdist - Session Replay

Replays a recorded sensor log through the calibration engine and reports
the step length calibrations and the estimated walking distance.

Usage:
    python main.py --input data/sample_walk.csv
    python main.py --input data/sample_walk.csv --profile urban
    python main.py --input data/sample_walk.csv --output output/distances.csv --plot output/walk.png
"""

import argparse
import logging
import sys
from pathlib import Path

from stepdist.config import LocalizationConfig
from stepdist.exceptions import ConfigurationError
from stepdist.session_log import load_session_log, replay_session


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Replay a sensor log through the step length calibration engine"
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Path to the session log CSV file"
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="config/localization.yaml",
        help="Path to the localization profile file"
    )
    parser.add_argument(
        "--profile", "-p",
        type=str,
        default="default",
        help="Name of the localization profile to use (default: default)"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Optional CSV path for the per-sample distance report"
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Optional image path for the track / step length figure"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every calibration decision"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("stepdist session replay")
    print("=" * 60)

    print(f"\n1. Loading profile '{args.profile}' from: {args.config}")
    try:
        config = LocalizationConfig.from_yaml(args.config, args.profile)
    except (FileNotFoundError, ConfigurationError) as e:
        print(f"   Error: {e}")
        return 1
    for key, value in config.to_dict().items():
        print(f"   {key}: {value}")

    print(f"\n2. Loading session log from: {args.input}")
    try:
        log = load_session_log(args.input)
    except (FileNotFoundError, ValueError) as e:
        print(f"   Error: {e}")
        return 1
    n_fixes = int((log["kind"] == "location").sum())
    print(f"   {len(log)} events ({n_fixes} fixes, {len(log) - n_fixes} step samples)")

    print("\n3. Replaying...")
    result = replay_session(log, config)

    status = result.final_status.to_dict()
    print(f"   Calibrations: {result.calibration_count}")
    print(f"   Step length: {status['stepLength']:.3f} m")
    print(f"   Last calibrated: {status['lastCalibrated']}")
    if result.final_distance is not None:
        print(f"   Steps taken: {result.final_distance.steps_taken}")
        print(f"   Distance traveled: {result.final_distance.distance_traveled} m")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        result.distances.to_csv(output_path, index=False)
        print(f"\n4. Saved distance report to: {output_path}")

    if args.plot:
        from scripts.utils.plotting import save_replay_figure
        plot_path = save_replay_figure(result, args.plot)
        print(f"\n5. Saved figure to: {plot_path}")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
