#!/usr/bin/env python3
"""
main.py – CLI for the Extended ISA Model Calculator.

Usage:
    python main.py                                  # interactive mode
    python main.py --help                           # show all flags
    python main.py --altitude 10000 --alt-unit ft \\
        --temperature 59 --temp-unit F \\
        --pressure 29.92 --press-unit inHg          # batch mode (no prompts)
    python main.py --profile --temperature 15 \\
        --pressure 1013.25 --profile-csv isa.csv    # altitude profile
"""

from __future__ import annotations
import argparse
import sys

from airdensity.engine import AtmosphereEngine, Evaluation
from airdensity.exceptions import ErrorKind, ModelError
from airdensity.export import export_profile_csv, export_text
from airdensity.logger import enable_file_logging, logger, LOG_FILE_NAME
from airdensity.settings import (
    SETTINGS_FILE_NAME, Settings, load_settings, save_settings,
)
from airdensity.units import (
    AltitudeUnit, ModelKind, PressureUnit, TemperatureUnit, coerce_selector,
    hpa_to_pa, pressure_to_hpa, temperature_to_celsius,
)
from airdensity.validation import parse_number, validate_constants

ALT_UNITS = {'ft': AltitudeUnit.FEET, 'm': AltitudeUnit.METERS}
TEMP_UNITS = {'C': TemperatureUnit.CELSIUS, 'F': TemperatureUnit.FAHRENHEIT}
PRESS_UNITS = {'hPa': PressureUnit.HPA, 'inHg': PressureUnit.INHG}
MODELS = {'isa': ModelKind.ISA, 'extended': ModelKind.EXTENDED_ISA}


# ── Pretty-printing helpers ──────────────────────────────────────────

def _header():
    print()
    print("╔══════════════════════════════════════════════════════════╗")
    print("║          Extended ISA Model Calculator                   ║")
    print("╚══════════════════════════════════════════════════════════╝")
    print()


def _ask(prompt: str, default=None) -> str:
    """Prompt user; return default (as text) if blank."""
    suffix = f" [{default}]" if default is not None else ""
    raw = input(f"  {prompt}{suffix}: ").strip()
    if raw == "" and default is not None:
        return str(default)
    return raw


def _print_evaluation(ev: Evaluation):
    if ev.warning is not None:
        print(f"  ⚠  {ev.warning.message}")
    if not ev.ok:
        print(f"  ✗  {ev.rejection.kind.value}: {ev.rejection.message}")
        return
    print()
    for line in ev.text.splitlines():
        print(f"    {line}")
    print()
    print("  ✓  Calculation successful" + (" (from cache)." if ev.from_cache else "."))


# ── Argparse for batch mode ──────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Extended ISA Model Calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  Interactive:   python main.py
  Batch:         python main.py --altitude 5000 --temperature 15 --pressure 1013.25
  Profile:       python main.py --profile --temperature 15 --pressure 1013.25
""",
    )
    # ── Inputs ───────────────────────────────────────────────────
    p.add_argument('--altitude', type=str, default=None,
                   help='Altitude in --alt-unit')
    p.add_argument('--temperature', type=str, default=None,
                   help='Sea-level temperature in --temp-unit')
    p.add_argument('--pressure', type=str, default=None,
                   help='Sea-level pressure in --press-unit')
    p.add_argument('--alt-unit', choices=list(ALT_UNITS), default=None,
                   help='Altitude unit (default from settings)')
    p.add_argument('--temp-unit', choices=list(TEMP_UNITS), default=None,
                   help='Temperature unit (default from settings)')
    p.add_argument('--press-unit', choices=list(PRESS_UNITS), default=None,
                   help='Pressure unit (default from settings)')
    p.add_argument('--model', choices=list(MODELS), default=None,
                   help='Atmosphere model (default from settings)')

    # ── Constants & settings ─────────────────────────────────────
    p.add_argument('--gravity', type=str, default=None,
                   help='Override gravitational acceleration g [m/s²]')
    p.add_argument('--gas-constant', type=str, default=None,
                   help='Override specific gas constant R [J/(kg·K)]')
    p.add_argument('--settings', type=str, default=SETTINGS_FILE_NAME,
                   help=f'Settings file (default {SETTINGS_FILE_NAME})')
    p.add_argument('--save-settings', action='store_true',
                   help='Persist constants and units to the settings file')
    p.add_argument('--log-file', type=str, default=None,
                   help=f'Append audit events to this file (e.g. {LOG_FILE_NAME})')

    # ── Output ───────────────────────────────────────────────────
    p.add_argument('--output', type=str, default=None,
                   help='Export the result text to this path (.txt or .csv)')
    p.add_argument('--profile', action='store_true',
                   help='Compute an altitude profile from the sea-level inputs')
    p.add_argument('--n-points', type=int, default=200,
                   help='Profile samples (default 200)')
    p.add_argument('--profile-csv', type=str, default=None,
                   help='Profile CSV output path')
    p.add_argument('--plot', type=str, default=None, metavar='PATH',
                   help='Save the profile plot to PATH')
    p.add_argument('--no-plot', action='store_true',
                   help='Do not display the profile plot')

    return p


def is_batch(args) -> bool:
    """Return True if enough args are given to skip interactive prompts."""
    return (args.altitude is not None and args.temperature is not None and
            args.pressure is not None)


def resolve_settings(args) -> Settings:
    """Settings file overlaid with command-line units and constants."""
    settings = load_settings(args.settings)
    if args.alt_unit:
        settings.altitude_unit_index = int(ALT_UNITS[args.alt_unit])
    if args.temp_unit:
        settings.temperature_unit_index = int(TEMP_UNITS[args.temp_unit])
    if args.press_unit:
        settings.pressure_unit_index = int(PRESS_UNITS[args.press_unit])
    if args.model:
        settings.model_index = int(MODELS[args.model])

    if args.gravity is not None or args.gas_constant is not None:
        check = validate_constants(
            args.gravity if args.gravity is not None else settings.gravity,
            args.gas_constant if args.gas_constant is not None else settings.gas_constant_r,
        )
        if not check.ok:
            raise SystemExit("  " + "\n  ".join(check.errors))
        settings.constants = check.constants
    return settings


def _evaluate(engine: AtmosphereEngine, settings: Settings,
              altitude, temperature, pressure) -> Evaluation:
    units = settings.display_units()
    return engine.evaluate(altitude, temperature, pressure,
                           units.altitude, units.temperature, units.pressure,
                           settings.model())


# ── Batch mode ───────────────────────────────────────────────────────

def run_batch(args, settings: Settings) -> int:
    """Non-interactive mode: all inputs from argparse."""
    _header()
    engine = AtmosphereEngine(settings.constants)
    ev = _evaluate(engine, settings, args.altitude, args.temperature, args.pressure)
    _print_evaluation(ev)

    if ev.ok and args.output:
        path = export_text(ev.text, args.output)
        print(f"  → Exported: {path}")
    if args.save_settings:
        save_settings(settings, args.settings)

    print("\n  Done.\n")
    return 0 if ev.ok else 1


# ── Profile mode ─────────────────────────────────────────────────────

def run_profile(args, settings: Settings) -> int:
    """Altitude profile for the given sea-level conditions."""
    from airdensity.profile import atmosphere_profile

    _header()
    units = settings.display_units()
    try:
        temp_c = temperature_to_celsius(parse_number(args.temperature or "15"),
                                        units.temperature)
        p_hpa = pressure_to_hpa(parse_number(args.pressure or "1013.25"),
                                units.pressure)
    except (TypeError, ValueError):
        print("  ✗  Invalid numeric input detected. Please check values.")
        return 1

    try:
        prof = atmosphere_profile(temp_c, hpa_to_pa(p_hpa), settings.constants,
                                  n_points=args.n_points)
    except ModelError as err:
        logger.error("Calculation Error: %s", err.message)
        print(f"  ✗  {err.to_rejection().kind.value}: {err.message}")
        return 1
    except ArithmeticError as err:
        logger.error("Calculation Error: %s", err)
        print(f"  ✗  {ErrorKind.COMPUTATION_ERROR.value}: "
              f"An unexpected calculation error occurred: {err}")
        return 1
    except ValueError as err:
        print(f"  ✗  {err}")
        return 1
    print(f"  Sampled {args.n_points} altitudes from 0 to "
          f"{prof['h'][-1] / 1000:.1f} km.")

    if args.profile_csv:
        path = export_profile_csv(prof, args.profile_csv)
        print(f"  → CSV: {path}")
    if args.plot or not args.no_plot:
        from airdensity.plotting import plot_profile
        plot_profile(prof, show=not args.no_plot, save_path=args.plot)

    print("\n  Done.\n")
    return 0


# ── Interactive mode ─────────────────────────────────────────────────

def _ask_selector(prompt: str, enum_cls, current):
    """Prompt for a unit index or name until it names a member of enum_cls."""
    while True:
        raw = _ask(prompt, default=int(current))
        choice = coerce_selector(int(raw) if raw.isdigit() else raw, enum_cls)
        if choice is not None:
            return choice
        print(f"  ✗  {ErrorKind.UNSELECTED_UNIT.value}: "
              "Please ensure unit and model selections are made.")


def _choose_units(settings: Settings):
    u = settings.display_units()
    print("  Units: altitude 0=Feet 1=Meters | temperature 0=°C 1=°F | "
          "pressure 0=hPa 1=inHg")
    settings.altitude_unit_index = int(
        _ask_selector("Altitude unit", AltitudeUnit, u.altitude))
    settings.temperature_unit_index = int(
        _ask_selector("Temperature unit", TemperatureUnit, u.temperature))
    settings.pressure_unit_index = int(
        _ask_selector("Pressure unit", PressureUnit, u.pressure))


def _change_constants(engine: AtmosphereEngine, settings: Settings) -> bool:
    c = engine.constants
    check = validate_constants(_ask("Gravity g [m/s²]", default=c.gravity),
                               _ask("Gas constant R [J/(kg·K)]", default=c.gas_constant_r))
    if not check.ok:
        for msg in check.errors:
            print(f"  ✗  {msg}")
        logger.info("Settings change cancelled.")
        return False
    changed = engine.set_constants(check.constants)
    settings.constants = check.constants
    print("  ✓  Settings updated.")
    return changed


def run_interactive(args, settings: Settings) -> int:
    """Prompt-driven session; settings are saved on exit."""
    _header()
    engine = AtmosphereEngine(settings.constants)
    logger.info("Application initialized.")
    last_inputs = None

    while True:
        print("  [c] calculate   [u] units   [s] constants   [x] clear   "
              "[e] export   [q] quit")
        cmd = _ask("Choice", default="c").lower()

        if cmd.startswith("q"):
            break
        elif cmd.startswith("u"):
            _choose_units(settings)
        elif cmd.startswith("s"):
            if _change_constants(engine, settings) and last_inputs is not None:
                _print_evaluation(_evaluate(engine, settings, *last_inputs))
        elif cmd.startswith("x"):
            engine.reset()
            last_inputs = None
            logger.info("Inputs cleared.")
            print("  ✓  Inputs cleared.")
        elif cmd.startswith("e"):
            try:
                path = export_text(engine.last_text, _ask("File name", default="isa_results.txt"))
            except (ValueError, OSError) as err:
                print(f"  ✗  {err}")
            else:
                print(f"  → Exported: {path}")
        else:
            u = settings.display_units()
            last_inputs = (
                _ask(f"Altitude [{u.altitude.label}]"),
                _ask(f"Sea-level temperature [{u.temperature.label}]"),
                _ask(f"Sea-level pressure [{u.pressure.label}]"),
            )
            _print_evaluation(_evaluate(engine, settings, *last_inputs))
        print()

    try:
        save_settings(settings, args.settings)
    except OSError as err:
        logger.error("Error saving settings: %s", err)
    logger.info("Application closed.")
    print("\n  Done.\n")
    return 0


# ── Entry point ──────────────────────────────────────────────────────

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_file:
        enable_file_logging(args.log_file)
    settings = resolve_settings(args)

    if args.profile:
        return run_profile(args, settings)
    elif is_batch(args):
        return run_batch(args, settings)
    else:
        return run_interactive(args, settings)


if __name__ == "__main__":
    sys.exit(main())
