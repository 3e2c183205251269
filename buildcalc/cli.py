from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

from pydantic import ValidationError

from .calculators import (
    CALCULATORS,
    BeamSizeResult,
    JoistSpanResult,
    StairResult,
    WireSizeResult,
    validate_inputs,
)
from .config import Settings
from .sizing import InvalidInput, NoAdequateSizeFound

logger = logging.getLogger(__name__)

# Fields prompted for in --interactive mode when missing from the input JSON
REQUIRED_PROMPTS: Dict[str, List[Tuple[str, str]]] = {
    "beam": [
        ("span_ft", "Beam span (ft): "),
        ("tributary_width_ft", "Tributary width (ft): "),
    ],
    "joist": [
        ("spacing_in", "Joist spacing on center (in): "),
    ],
    "wire": [
        ("amperage", "Load current (A): "),
        ("distance_ft", "One-way distance (ft): "),
    ],
    "stairs": [
        ("total_rise_in", "Total rise (in): "),
    ],
}


def _prompt_float(prompt: str, *, min_v: float | None = None, max_v: float | None = None) -> float:
    while True:
        raw = input(prompt).strip()
        try:
            v = float(raw)
        except ValueError:
            print("Please enter a number.", file=sys.stderr)
            continue
        if min_v is not None and v <= min_v:
            print(f"Must be > {min_v}.", file=sys.stderr)
            continue
        if max_v is not None and v > max_v:
            print(f"Must be <= {max_v}.", file=sys.stderr)
            continue
        return v


def load_inputs(path: str | None, calculator: str, *, interactive: bool) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Input JSON not found: {path}")
        data = json.loads(p.read_text())
        if not isinstance(data, dict):
            raise InvalidInput(["Input JSON must be an object of field values"])

    if interactive:
        for field, prompt in REQUIRED_PROMPTS[calculator]:
            if field not in data:
                data[field] = _prompt_float(prompt, min_v=0.0)
    return data


def _print_beam(r: BeamSizeResult) -> None:
    print(f"Load: {r.load_psf:.0f} psf x {r.inputs.tributary_width_ft:g} ft = {r.load_plf:.0f} plf ({r.load_label})")
    print(f"Species: {r.species_label}, beam type: {r.beam_type_label}")
    print(f"Recommended: {r.recommended.size} ({r.recommended.utilization_percent}% utilized)")
    print("Adequate sizes:")
    for o in r.options:
        flag = " (extrapolated)" if o.extrapolated else ""
        print(f"- {o.size}: {o.interpolated_capacity:.0f} plf, {o.utilization_percent}%{flag}")
    if r.total_adequate > len(r.options):
        print(f"  ... {r.total_adequate - len(r.options)} more")


def _print_joist(r: JoistSpanResult) -> None:
    i = r.inputs
    print(f"{i.joist_size} {r.species_label} {i.grade} @ {i.spacing_in:g} in o.c. ({r.load_label})")
    print(f"Maximum span: {r.max_span_ft:.1f} ft")
    if i.desired_span_ft is not None:
        print(f"Desired span {i.desired_span_ft:g} ft: {'OK' if r.span_ok else 'too long'}")
        print(f"Recommended size: {r.recommended_size}")
    for s in r.all_sizes:
        span = "n/a" if s.max_span_ft is None else f"{s.max_span_ft:.1f} ft"
        print(f"- {s.size}: {span}")
    if r.warning:
        print(f"\nWarning: {r.warning}", file=sys.stderr)


def _print_wire(r: WireSizeResult) -> None:
    print(f"Recommended: {r.recommended_size} AWG {r.inputs.material}")
    print(f"Minimum by ampacity: {r.minimum_by_ampacity} AWG, by voltage drop: {r.minimum_by_voltage_drop} AWG")
    print(f"Voltage drop: {r.voltage_drop_v:.2f} V ({r.voltage_drop_percent:.2f}%)")
    print(f"Estimated cost: ${r.cost_estimate:.2f} ({r.total_wire_ft:g} ft total)")
    if r.notes:
        print("\nNotes:")
        for n in r.notes:
            print(f"- {n}")


def _print_stairs(r: StairResult) -> None:
    print(f"Risers: {r.risers} at {r.riser_height_in:.2f} in")
    print(f"Treads: {r.treads} at {r.tread_depth_in:.2f} in (with nosing {r.effective_tread_in:.2f} in)")
    print(f"Total run: {r.total_run_in:.1f} in, angle {r.angle_deg:.1f} deg")
    print(f"Stringers: {r.stringers} x {r.recommended_stock}, {r.stringer_length_in:.1f} in long ({r.stringer_stock_ft} ft stock)")
    print(f"Code compliant: {'yes' if r.code_compliant else 'no'}, comfort (2R+T): {r.comfort_value_in:.1f} in")


PRINTERS: Dict[str, Callable[[Any], None]] = {
    "beam": _print_beam,
    "joist": _print_joist,
    "wire": _print_wire,
    "stairs": _print_stairs,
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Construction calculators: beam size, joist span, wire size and stair layout."
    )
    parser.add_argument("calculator", choices=sorted(CALCULATORS), help="Calculator to run.")
    parser.add_argument("--input", "-i", help="Path to input JSON. If omitted, use --interactive prompts.")
    parser.add_argument("--output", "-o", help="Path to write the full result JSON.")
    parser.add_argument("--settings", help="Path to a settings JSON (defaults from BUILDCALC_* env vars).")
    parser.add_argument("--format", choices=["table", "json"], default="table")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for missing required inputs.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log calculation details.")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    model, calculate = CALCULATORS[args.calculator]
    try:
        settings = Settings.from_file(args.settings) if args.settings else Settings.from_env()
        raw = load_inputs(args.input, args.calculator, interactive=args.interactive)
        inputs = validate_inputs(model, raw)
        result = calculate(inputs, settings=settings)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print("Settings validation error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2
    except InvalidInput as e:
        print("Input validation error:", file=sys.stderr)
        for m in e.messages:
            print(f"- {m}", file=sys.stderr)
        return 2
    except NoAdequateSizeFound as e:
        print(f"Warning: {e.suggestion}", file=sys.stderr)
        if e.best_capacity is not None:
            print(
                f"Required {e.required_capacity:g}, best available {e.best_capacity:.0f}.",
                file=sys.stderr,
            )
        return 1

    if args.output:
        try:
            Path(args.output).write_text(result.model_dump_json(indent=2))
        except OSError as e:
            print(f"Output error: {e}", file=sys.stderr)
            return 2

    if args.format == "json":
        print(result.model_dump_json(indent=2))
    else:
        PRINTERS[args.calculator](result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
