"""Planetary phase solve CLI.

Usage:
    python -m gearphase.cli.solve --sun-teeth 30 --planet-teeth 20 --sun-omega 10

Outputs JSON with teeth, phases, mesh angles and speeds to stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

import yaml
from pydantic import ValidationError

# Flag name -> (config section, field)
_OVERRIDES = {
    "sun_teeth": ("gearset", "sun_teeth"),
    "planet_teeth": ("gearset", "planet_teeth"),
    "ring_teeth": ("gearset", "ring_teeth"),
    "n_planets": ("gearset", "n_planets"),
    "sun_phase": ("operating", "sun_phase"),
    "carrier_angle": ("operating", "carrier_angle"),
    "sun_omega": ("operating", "sun_omega"),
    "carrier_omega": ("operating", "carrier_omega"),
}


def main(argv: list[str] | None = None) -> int:
    """Solve a planetary gearset snapshot.

    Args:
        argv: Command-line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 = success, 2 = invalid input).
    """
    parser = argparse.ArgumentParser(description="Solve planetary gear phases and speeds")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--sun-teeth", type=int, default=None, help="Sun gear teeth")
    parser.add_argument("--planet-teeth", type=int, default=None, help="Planet gear teeth")
    parser.add_argument("--ring-teeth", type=int, default=None, help="Ring gear teeth (default S+2P)")
    parser.add_argument("--n-planets", type=int, default=None, help="Number of planets")
    parser.add_argument("--sun-phase", type=float, default=None, help="Sun phase (rad)")
    parser.add_argument("--carrier-angle", type=float, default=None, help="First planet angle (rad)")
    parser.add_argument("--sun-omega", type=float, default=None, help="Sun angular velocity")
    parser.add_argument("--carrier-omega", type=float, default=None, help="Carrier angular velocity")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--save-config", type=str, default=None, help="Write the effective config to this YAML file"
    )

    args = parser.parse_args(argv)

    from ..core.config import default_config, load_config, merge_config, save_config

    overrides: dict[str, dict] = {}
    for flag, (section, key) in _OVERRIDES.items():
        value = getattr(args, flag)
        if value is not None:
            overrides.setdefault(section, {})[key] = value
    if args.log_level is not None:
        overrides["log_level"] = args.log_level

    try:
        base = load_config(args.config) if args.config else default_config()
        config = merge_config(base, overrides)
        logging.basicConfig(level=config.log_level, stream=sys.stderr)
        gearset = config.build_gearset()
        if args.save_config:
            save_config(config, args.save_config)
    except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    op = config.operating
    state = gearset.solve(
        sun_phase=op.sun_phase,
        sun_omega=op.sun_omega,
        carrier_omega=op.carrier_omega,
        carrier_angle=op.carrier_angle,
    )

    print(json.dumps(state.to_dict(), indent=2))

    return 0


if __name__ == "__main__":
    sys.exit(main())
