# main.py
from __future__ import annotations

import argparse, json, sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, List, Sequence, TextIO, Tuple

from debug import Debug
from enigma import EnigmaMachine
from keyboard_and_plugboard import Keyboard
from utilities import (
    DEFAULT_CATALOG,
    Catalog,
    ConfigurationError,
    WheelSpec,
    build_components,
    preprocess_message,
    resolve_settings,
)
from visualize import render_snapshot

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class MachineConfig:
    """Machine settings as the operator writes them (left to right)."""

    rotors: str | List[str] = "123"                  # I II III, III rightmost
    ring_settings: str | List[int] | None = None     # None -> "A" per rotor
    start_positions: str | List[int] | None = None
    reflector: str = "B"
    plugboard: str | List[str] = ""


# ────────────────────────────────────────────────────────────────────────
#  1. JSON loading helpers
# ────────────────────────────────────────────────────────────────────────


def _expect(value, kinds, what: str, path) -> None:
    if isinstance(value, bool) or not isinstance(value, kinds):
        raise ConfigurationError(f"Config {path}: {what} has the wrong type: {value!r}")


def _expect_text_or_list(value, what: str, path, item=str) -> None:
    _expect(value, (str, list), what, path)
    if isinstance(value, list):
        for v in value:
            _expect(v, item, f"{what} entry", path)


def load_config(path: str | Path) -> Tuple[MachineConfig, Catalog]:
    """Read settings (and any custom wheels) from a JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {path} must hold a JSON object")

    required = {"rotors", "reflector"}
    missing = required - data.keys()
    if missing:
        raise ConfigurationError(f"Missing keys in config: {', '.join(sorted(missing))}")

    _expect_text_or_list(data["rotors"], "'rotors'", path)
    _expect(data["reflector"], str, "'reflector'", path)
    for key in ("ring_settings", "start_positions"):
        if data.get(key) is not None:
            _expect_text_or_list(data[key], f"{key!r}", path, item=int)
    _expect_text_or_list(data.get("plugboard", ""), "'plugboard'", path)
    _expect(data.get("wheels", {}), dict, "'wheels'", path)
    _expect(data.get("reflectors", {}), dict, "'reflectors'", path)

    wheels = {}
    for name, entry in data.get("wheels", {}).items():
        if not isinstance(entry, dict) or not {"wiring", "notch"} <= entry.keys():
            raise ConfigurationError(f"Wheel {name!r} needs 'wiring' and 'notch'")
        _expect(entry["wiring"], str, f"wheel {name!r} wiring", path)
        _expect(entry["notch"], str, f"wheel {name!r} notch", path)
        wheels[name] = WheelSpec(entry["wiring"], entry["notch"])
    for name, wiring in data.get("reflectors", {}).items():
        _expect(wiring, str, f"reflector {name!r}", path)
    catalog = DEFAULT_CATALOG.extended(wheels, data.get("reflectors", {}))

    cfg = MachineConfig(
        rotors=data["rotors"],
        ring_settings=data.get("ring_settings"),
        start_positions=data.get("start_positions"),
        reflector=data["reflector"],
        plugboard=data.get("plugboard", ""),
    )
    debug.log("config", f"loaded {path}: {cfg}")
    return cfg, catalog


def build_machine(cfg: MachineConfig, catalog: Catalog = DEFAULT_CATALOG) -> EnigmaMachine:
    """Validate *everything*, then assemble; never returns a half-built machine."""
    settings = resolve_settings(
        cfg.rotors,
        cfg.ring_settings,
        cfg.start_positions,
        cfg.reflector,
        cfg.plugboard,
        catalog,
    )
    rotors, reflector, plugboard = build_components(settings)
    return EnigmaMachine(rotors, reflector, plugboard, Keyboard())


# ────────────────────────────────────────────────────────────────────────
#  2. Character stream
# ────────────────────────────────────────────────────────────────────────


def run_stream(
    machine: EnigmaMachine,
    chunks: Iterable[str],
    out: TextIO,
    *,
    quiet: bool = True,
    group: int = 0,
) -> int:
    """Feed every letter found in *chunks*; return how many were enciphered."""

    def show(snapshot) -> None:
        out.write(render_snapshot(machine, snapshot) + "\n")

    if not quiet:
        machine.add_observer(show)

    count = 0
    try:
        for chunk in chunks:
            for ch in preprocess_message(chunk):
                letter = machine.feed_character(ch)
                if quiet:
                    if group and count and count % group == 0:
                        out.write(" ")
                    out.write(letter)
                count += 1
    finally:
        if not quiet:
            machine.remove_observer(show)

    if quiet and count:
        out.write("\n")
    return count


def describe(cfg: MachineConfig, machine: EnigmaMachine) -> str:
    plugs = machine.plugboard.pairs()
    return "\n".join([
        f"Rotors (left to right) : {cfg.rotors}",
        f"Ringstellung           : {cfg.ring_settings or 'A' * len(machine.rotors)}",
        f"Start position         : {machine.window()}",
        f"Reflector              : {cfg.reflector}",
        f"Steckers               : {' '.join(plugs) if plugs else 'none'}",
        "",
    ])


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="enigma",
        description="Encrypt or decrypt text with a simulated Enigma I / M3. "
                    "Settings are written left to right as on the machine.",
    )
    p.add_argument("-r", "--rotor", metavar="WHEELS", help="Rotor order, e.g. 123 (default) or 'II I III'. Codes: 1-5 = I-V.")
    p.add_argument("-rs", "--ringstellung", metavar="LETTERS", help="Ring settings, e.g. XMV. Default: A per rotor.")
    p.add_argument("-sp", "--startposition", metavar="LETTERS", help="Start positions, e.g. ABL. Default: A per rotor.")
    p.add_argument("-rf", "--reflector", metavar="NAME", help="Reflector A, B (default) or C.")
    p.add_argument("-s", "--steckerboard", metavar="PAIRS", help="Plugboard pairs, e.g. AZ,TU swaps A-Z and T-U.")
    p.add_argument("-q", "--quiet", action="store_true", help="Only output the text, no machine visualization. Handy for piping to files.")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to process. If omitted, stdin is read.")
    p.add_argument("-g", "--group", type=int, default=0, metavar="N", help="With -q, print output in blocks of N letters; refused without -q. Default: 0 (no grouping)")
    p.add_argument("--config", metavar="FILE", help="Load machine settings from JSON; explicit options override it.")
    p.add_argument("--trace", metavar="COMPONENTS", help=f"Comma-separated debug log components: {', '.join(debug.status())}")
    p.add_argument("--log-file", metavar="FILE", help="Also write debug log lines to FILE.")
    return p.parse_args(argv)


def apply_overrides(cfg: MachineConfig, args: argparse.Namespace) -> MachineConfig:
    overrides = {
        "rotors": args.rotor,
        "ring_settings": args.ringstellung,
        "start_positions": args.startposition,
        "reflector": args.reflector,
        "plugboard": args.steckerboard,
    }
    return replace(cfg, **{k: v for k, v in overrides.items() if v is not None})


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    if args.group < 0:
        sys.exit("error: --group must be 0 or more")
    if args.group and not args.quiet:
        sys.exit("error: --group only applies with -q")

    if args.log_file:
        Debug.add_log_file(args.log_file)
    if args.trace:
        try:
            debug.enable(*[c.strip().lower() for c in args.trace.split(",") if c.strip()])
        except ValueError as exc:
            sys.exit(f"error: {exc}")

    # where do the machine settings come from?
    try:
        if args.config:
            cfg, catalog = load_config(args.config)
        else:
            cfg, catalog = MachineConfig(), DEFAULT_CATALOG
        cfg = apply_overrides(cfg, args)
        machine = build_machine(cfg, catalog)
    except ConfigurationError as exc:
        sys.exit(f"error: {exc}")
    except OSError as exc:
        sys.exit(f"error: cannot read config: {exc}")

    if not args.quiet:
        print(describe(cfg, machine))

    chunks = [args.message] if args.message is not None else sys.stdin
    run_stream(machine, chunks, sys.stdout, quiet=args.quiet, group=args.group)
    return 0


if __name__ == "__main__":
    sys.exit(main())
