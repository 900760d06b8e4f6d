"""
SteamLang - Command Line Interface

IAPWS-IF97 water/steam properties from the command line:

    steamlang compute --temperature 26.85 --pressure 3e6
    steamlang region --temperature 100 --pressure 101325
    steamlang saturation --temperature 100
    steamlang saturation --pressure 101325

Temperatures are in Celsius and pressures in Pascals.
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

import yaml

from steamlang import __version__
from steamlang.calculators.region4 import Region4Calculator
from steamlang.calculators.steam_property_calculator import (
    SteamPropertyCalculator,
    SteamStateInput,
)
from steamlang.config import SolverSettings, load_settings
from steamlang.exceptions import SteamLangException
from steamlang.regions import classify_region

logger = logging.getLogger("steamlang.cli")


def setup_argparse() -> argparse.ArgumentParser:
    """Setup command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="steamlang",
        description="SteamLang - IAPWS-IF97 water/steam properties",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"steamlang v{__version__}"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to solver settings YAML file"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Compute properties command
    compute_parser = subparsers.add_parser(
        "compute",
        help="Compute steam properties at a state point"
    )
    compute_parser.add_argument(
        "--temperature",
        type=float,
        required=True,
        help="Temperature in °C"
    )
    compute_parser.add_argument(
        "--pressure",
        type=float,
        required=True,
        help="Pressure in Pa"
    )
    compute_parser.add_argument(
        "--output",
        type=str,
        choices=["json", "table", "yaml"],
        default="table",
        help="Output format"
    )

    # Region command
    region_parser = subparsers.add_parser(
        "region",
        help="Classify a state point into its IAPWS-IF97 region"
    )
    region_parser.add_argument(
        "--temperature",
        type=float,
        required=True,
        help="Temperature in °C"
    )
    region_parser.add_argument(
        "--pressure",
        type=float,
        required=True,
        help="Pressure in Pa"
    )

    # Saturation command
    saturation_parser = subparsers.add_parser(
        "saturation",
        help="Saturation pressure from temperature, or temperature from pressure"
    )
    group = saturation_parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--temperature",
        type=float,
        help="Saturation temperature in °C"
    )
    group.add_argument(
        "--pressure",
        type=float,
        help="Saturation pressure in Pa"
    )

    return parser


def cmd_compute(args: argparse.Namespace, settings: SolverSettings) -> int:
    """Compute steam properties."""
    logger.info(f"Computing properties for T={args.temperature} °C, P={args.pressure} Pa")

    calculator = SteamPropertyCalculator(settings)
    output, provenance = calculator.calculate(
        SteamStateInput(temperature_c=args.temperature, pressure_pa=args.pressure)
    )

    properties = {
        key: value
        for key, value in output.to_dict().items()
        if key not in ("region", "temperature_k", "pressure_mpa", "approximate")
    }
    result = {
        "input": {
            "temperature_c": args.temperature,
            "pressure_pa": args.pressure,
        },
        "region": output.region.value,
        "approximate": output.approximate,
        "properties": properties,
        "provenance_hash": provenance.provenance_hash,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if args.output == "json":
        print(json.dumps(result, indent=2))
    elif args.output == "yaml":
        print(yaml.safe_dump(result, default_flow_style=False))
    else:  # table
        print("\n" + "=" * 50)
        print("SteamLang - Steam Properties")
        print("=" * 50)
        print(f"Region: {output.region.value}"
              + (" (approximate)" if output.approximate else ""))
        print("-" * 50)
        print(f"{'Property':<32} {'Value':>16}")
        print("-" * 50)
        for key, value in properties.items():
            if value is not None:
                print(f"{key:<32} {value:>16.6g}")
        print("-" * 50)
        print(f"Provenance: {provenance.provenance_hash[:16]}...")
        print("=" * 50 + "\n")

    return 0


def cmd_region(args: argparse.Namespace, settings: SolverSettings) -> int:
    """Classify a state point."""
    region = classify_region(args.temperature, args.pressure, settings)
    print(region.value)
    return 0


def cmd_saturation(args: argparse.Namespace, settings: SolverSettings) -> int:
    """Evaluate the saturation curve in either direction."""
    if args.temperature is not None:
        pressure_pa = Region4Calculator.saturation_pressure(args.temperature)
        result = {"temperature_c": args.temperature, "saturation_pressure_pa": pressure_pa}
    else:
        inversion = Region4Calculator.invert_saturation_temperature(
            args.pressure, full_output=True, settings=settings
        )
        result = {
            "pressure_pa": args.pressure,
            "saturation_temperature_c": inversion.value,
            "residual_pa": inversion.residual,
            "iterations": inversion.iterations,
            "converged": inversion.converged,
        }
    print(json.dumps(result, indent=2))
    return 0


COMMANDS = {
    "compute": cmd_compute,
    "region": cmd_region,
    "saturation": cmd_saturation,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = setup_argparse()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        settings = load_settings(args.config)
        return handler(args, settings)
    except SteamLangException as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
