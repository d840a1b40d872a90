# debug.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict

COMPONENTS = ("alphabet", "rotor", "reflector", "stepping", "encipher", "config")

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Debug:
    """Per-component switches over the shared ``ROTOR`` logger.

    Each module keeps its own ``Debug()``; the switches are class-level, so
    turning a component on anywhere turns it on everywhere.
    """

    _root_configured: bool = False          # class-level guard
    _switches: Dict[str, bool] = {c: False for c in COMPONENTS}

    def __init__(self) -> None:
        if not Debug._root_configured:
            logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, datefmt=DATE_FORMAT)
            Debug._root_configured = True
        self.logger = logging.getLogger("ROTOR")
        # gating is done by the switches, not by logger level
        self.logger.setLevel(logging.DEBUG)

    # ── logging API ──────────────────────────────────────────────
    def is_on(self, component: str) -> bool:
        return Debug._switches.get(component, False)

    def log(self, component: str, message: str) -> None:
        if self.is_on(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    def log_to_file(self, path: str | Path) -> logging.FileHandler:
        """Also write ROTOR records to *path* (appends)."""
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        self.logger.addHandler(handler)
        return handler

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._switches[c] = True

    def toggle(self, component: str) -> None:
        self._require(component)
        Debug._switches[component] = not Debug._switches[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        for c in Debug._switches:
            Debug._switches[c] = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._switches.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._switches:
            raise ValueError(f"No such component: {component!r}")
