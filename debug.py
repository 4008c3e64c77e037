# debug.py
from __future__ import annotations
import logging
from typing import Dict

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Debug:
    """Per-component trace lines on the ``ENIGMA`` logger.

    Every instance reads the same switch map, so ``--trace`` turns a
    component on for all modules at once.
    """

    _root_configured: bool = False          # class-level guard

    _components: Dict[str, bool] = {
        "keyboard":   False,
        "plugboard":  False,
        "rotor":      False,
        "reflector":  False,
        "stepping":   False,
        "encipher":   False,
        "config":     False,
    }

    def __init__(self) -> None:
        if not Debug._root_configured:
            logging.basicConfig(
                level=logging.DEBUG,
                format=LOG_FORMAT,
                datefmt=DATE_FORMAT,
                handlers=[logging.StreamHandler()],
            )
            Debug._root_configured = True

        self.logger = logging.getLogger("ENIGMA")
        self.components = Debug._components

    @staticmethod
    def add_log_file(path: str) -> None:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logging.getLogger().addHandler(handler)

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if self.components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    # ── component switches ───────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            if c not in self.components:
                raise ValueError(f"No such component: {c!r}")
        for c in components:
            self.components[c] = True

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return self.components.copy()

    def __repr__(self) -> str:
        active = [k for k, v in self.components.items() if v]
        return f"<Debug active={active}>"
