# config.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

from alphabet import parse_permutation, to_letters, validate_reflector
from debug import Debug
from errors import ConfigError, InvalidOffset
from machine import ROTOR_COUNT

debug = Debug()

# Historical rotors I, II, III (slow → fast) and the simulator's reflector.
DEFAULT_ROTOR_WIRINGS: Tuple[str, ...] = (
    "EKMFLGDQVZNTOWYHXUSPAIBRCJ",
    "AJDKSIRUXBLHWTMCQGZNPYFVOE",
    "BDFHJLCPRTXVZNYEIWGAKMUSQO",
)
DEFAULT_REFLECTOR_WIRING: str = "IXUHFEZDAOMTKQJWNSRLCYPBVG"

REQUIRED_KEYS = {"rotorWirings", "reflectorWiring"}


@dataclass(slots=True)
class MachineConfig:
    """Construction-time settings for one machine."""

    rotor_wirings: Tuple[str, ...] = DEFAULT_ROTOR_WIRINGS
    reflector_wiring: str = DEFAULT_REFLECTOR_WIRING
    initial_offsets: Tuple[int, ...] = (0, 0, 0)


DEFAULT_CONFIG = MachineConfig()


# ────────────────────────────────────────────────────────────────────────
#  dict ↔ MachineConfig
# ────────────────────────────────────────────────────────────────────────


def config_from_dict(data: Dict[str, Any]) -> MachineConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a JSON object, got {type(data).__name__}")
    missing = REQUIRED_KEYS - data.keys()
    if missing:
        raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")

    rotor_wirings = data["rotorWirings"]
    if not isinstance(rotor_wirings, list) or len(rotor_wirings) != ROTOR_COUNT:
        raise ConfigError(f"rotorWirings must be a list of {ROTOR_COUNT} wirings")

    offsets = data.get("initialOffsets", [0] * ROTOR_COUNT)
    if not isinstance(offsets, list) or len(offsets) != ROTOR_COUNT:
        raise ConfigError(f"initialOffsets must be a list of {ROTOR_COUNT} ints")
    for value in offsets:
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 25:
            raise InvalidOffset(f"initialOffsets entry {value!r} is not in 0–25")

    # normalise every wiring to its letter form; bad tables fail here
    wirings = tuple(to_letters(parse_permutation(w)) for w in rotor_wirings)
    reflector = parse_permutation(data["reflectorWiring"])
    validate_reflector(reflector)

    cfg = MachineConfig(
        rotor_wirings=wirings,
        reflector_wiring=to_letters(reflector),
        initial_offsets=tuple(offsets),
    )
    debug.log("config", f"loaded {cfg}")
    return cfg


def config_to_dict(cfg: MachineConfig) -> Dict[str, Any]:
    return {
        "rotorWirings": list(cfg.rotor_wirings),
        "initialOffsets": list(cfg.initial_offsets),
        "reflectorWiring": cfg.reflector_wiring,
    }


# ────────────────────────────────────────────────────────────────────────
#  JSON files
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> MachineConfig:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} is not valid JSON: {e}") from e
    return config_from_dict(data)


def save_config(cfg: MachineConfig, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(config_to_dict(cfg), indent=2), encoding="utf-8")
    debug.log("config", f"wrote {path}")
    return path


__all__: List[str] = [
    "DEFAULT_CONFIG",
    "MachineConfig",
    "config_from_dict",
    "config_to_dict",
    "load_config",
    "save_config",
]
