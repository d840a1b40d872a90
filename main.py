# main.py
from __future__ import annotations

import argparse
from dataclasses import replace

from alphabet import fold_case, group_blocks, index_of, preprocess_message
from config import DEFAULT_CONFIG, MachineConfig, load_config
from debug import COMPONENTS, Debug
from errors import ConfigError, RotorMachineError
from machine import ROTOR_COUNT, Machine

# ────────────────────────────────────────────────────────────────────────
#  0. Logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


# ────────────────────────────────────────────────────────────────────────
#  1. Machine construction
# ────────────────────────────────────────────────────────────────────────


def build_config(config_path: str | None, start: str | None) -> MachineConfig:
    """JSON file (or the built-in rotors), optionally overriding the start window."""
    cfg = load_config(config_path) if config_path else DEFAULT_CONFIG
    if start is not None:
        if len(start) != ROTOR_COUNT:
            raise ConfigError(f"--start needs exactly {ROTOR_COUNT} letters, got {start!r}")
        cfg = replace(cfg, initial_offsets=tuple(index_of(fold_case(ch)) for ch in start))
    return cfg


# ────────────────────────────────────────────────────────────────────────
#  2. Modes
# ────────────────────────────────────────────────────────────────────────


def run_once(machine: Machine, message: str, block: int) -> str:
    """Encipher *message*, then rewind and decipher it to show the round trip."""
    clean = preprocess_message(message)
    if not clean:
        raise RotorMachineError("Message contains no letters A–Z")

    print("Start window:", machine.window)
    cipher = machine.encipher(clean)
    print("Encrypted:", group_blocks(cipher, block))
    print("End window:", machine.window)

    machine.reset()
    print("Decrypted:", machine.encipher(cipher))
    return cipher


def run_repl(machine: Machine, block: int) -> None:
    print(f"\nRotor window {machine.window}. Type blank line to quit.\n")
    while True:
        txt = input("\nKeys > ")
        if not txt.strip():
            break
        clean = preprocess_message(txt)
        if not clean:
            print("❌  No letters A–Z in that line.")
            continue
        print("Lamps >", group_blocks(machine.encipher(clean), block))
        print("Window >", machine.window)


# ────────────────────────────────────────────────────────────────────────
#  3. CLI
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Three-rotor cipher machine simulator")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encipher. If omitted, an interactive REPL starts.")
    p.add_argument("--config", metavar="FILE", help="Load rotor and reflector wirings from JSON instead of the built-in set.")
    p.add_argument("--start", metavar="ABC", help="Initial rotor window letters, slow rotor first.")
    p.add_argument("--block", type=int, default=5, help="Display group size for output (0 = no grouping). Default: 5")
    p.add_argument("--verbose", action="store_true", help="Log every component (stepping, signal path, config).")
    p.add_argument("--trace", action="append", default=[], choices=COMPONENTS, metavar="COMPONENT",
                   help=f"Log one component; repeatable. One of: {', '.join(COMPONENTS)}")
    p.add_argument("--log-file", metavar="FILE", help="Also append log records to FILE.")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    debug.toggle_global(args.verbose)
    debug.enable(*args.trace)
    handler = debug.log_to_file(args.log_file) if args.log_file else None

    try:
        machine = Machine.from_config(build_config(args.config, args.start))
        if args.message is not None:
            run_once(machine, args.message, args.block)
        else:
            run_repl(machine, args.block)
    except RotorMachineError as e:
        raise SystemExit(f"❌  {e}")
    finally:
        if handler is not None:
            debug.logger.removeHandler(handler)
            handler.close()


if __name__ == "__main__":
    main()
