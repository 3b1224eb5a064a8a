"""
Configuración persistente de StartRight (startright_config.json).
"""

import json
import logging
import os
from typing import Any, Dict

CONFIG_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "startright_config.json")

DEFAULTS: Dict[str, Any] = {
    "startup_folder": None,
    "include_local_machine": True,
    "extensions": [".lnk", ".exe"],
    "confirm_remove": True,
    "browse_directory": "C:\\",
    "log_level": "INFO",
    "log_file": None,
}


class Config:
    """Valores por defecto combinados con los guardados en disco"""

    def __init__(self, path: str = CONFIG_FILE):
        self.logger = logging.getLogger("StartRight.Config")
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self.load()

    def load(self) -> bool:
        """Carga configuración previa si existe; si no, quedan los valores por defecto"""
        if not os.path.exists(self.path):
            return False
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Configuración ignorada ({self.path}): {e}")
            return False
        if not isinstance(stored, dict):
            self.logger.warning(f"Configuración ignorada ({self.path}): no es un objeto JSON")
            return False
        self.data.update({k: v for k, v in stored.items() if k in DEFAULTS})
        return True

    def save(self) -> bool:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            self.logger.info("Configuración guardada correctamente.")
            return True
        except OSError as e:
            self.logger.error(f"Error guardando configuración: {e}")
            return False

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any):
        if key not in DEFAULTS:
            raise KeyError(key)
        self.data[key] = value

    @property
    def startup_folder(self):
        return self.data["startup_folder"]

    @property
    def include_local_machine(self) -> bool:
        return bool(self.data["include_local_machine"])

    @property
    def extensions(self):
        return tuple(self.data["extensions"])

    @property
    def confirm_remove(self) -> bool:
        return bool(self.data["confirm_remove"])
