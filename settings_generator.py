# settings_generator.py
from __future__ import annotations

import argparse
from pathlib import Path
from random import Random, SystemRandom

from alphabet import ALPHABET, is_involution, letter_at
from config import MachineConfig, save_config
from machine import ROTOR_COUNT

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def make_rotor(rng: Random | SystemRandom) -> str:
    """Return a random permutation of the alphabet."""
    chars = list(ALPHABET)
    rng.shuffle(chars)
    return "".join(chars)


def make_reflector(rng: Random | SystemRandom) -> str:
    """Return an involutory reflector wiring (no self-maps)."""
    remaining = list(ALPHABET)
    rng.shuffle(remaining)
    wiring = [""] * len(ALPHABET)

    while remaining:
        a, b = remaining.pop(), remaining.pop()
        ia, ib = ALPHABET.index(a), ALPHABET.index(b)
        wiring[ia], wiring[ib] = b, a

    result = "".join(wiring)
    assert is_involution([ALPHABET.index(c) for c in result]), "Reflector is not an involution"
    return result


def generate_config(rng: Random | SystemRandom) -> MachineConfig:
    return MachineConfig(
        rotor_wirings=tuple(make_rotor(rng) for _ in range(ROTOR_COUNT)),
        reflector_wiring=make_reflector(rng),
        initial_offsets=tuple(rng.randrange(len(ALPHABET)) for _ in range(ROTOR_COUNT)),
    )


def parse_cli(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate random rotor machine settings")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("rotor_config.json"),
        help="Destination JSON file (default: rotor_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    args = parse_cli(argv)
    cfg = generate_config(build_rng(args.seed))
    save_config(cfg, args.outfile)

    start = "".join(letter_at(o) for o in cfg.initial_offsets)
    print(f"✅  Wrote {args.outfile}\n"
        f"   rotors      : {list(cfg.rotor_wirings)}\n"
        f"   reflector   : {cfg.reflector_wiring}\n"
        f"   start       : {start}")


if __name__ == "__main__":
    main()
