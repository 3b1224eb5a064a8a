"""
Modelo de datos de las entradas de inicio.

Un valor de la clave Run deshabilitado se guarda con el prefijo REMOVED:
delante de la ruta real. Solo decode_run_value y encode_run_value conocen
ese prefijo; el resto del código trabaja con RunValue.
"""

import os
from dataclasses import dataclass
from enum import Enum

DISABLED_MARKER = "REMOVED:"


class SourceKind(Enum):
    """Origen de una entrada; el valor es el prefijo de su clave de ubicación"""
    REGISTRY_CURRENT_USER = "HKCU"
    REGISTRY_LOCAL_MACHINE = "HKLM"
    STARTUP_FOLDER = "StartupFolder"

    @property
    def is_registry(self) -> bool:
        return self is not SourceKind.STARTUP_FOLDER

    @property
    def label(self) -> str:
        return SOURCE_LABELS[self]


SOURCE_LABELS = {
    SourceKind.REGISTRY_CURRENT_USER: "Usuario actual",
    SourceKind.REGISTRY_LOCAL_MACHINE: "Todos los usuarios",
    SourceKind.STARTUP_FOLDER: "Carpeta Startup",
}


# -----------------------------
# Valor de la clave Run
# -----------------------------
@dataclass(frozen=True)
class RunValue:
    path: str
    enabled: bool = True


def decode_run_value(raw: str) -> RunValue:
    """
    Interpreta el texto guardado en el registro.

    Quita todas las copias iniciales del prefijo, así un valor que quedó
    doblemente marcado vuelve a una sola ruta limpia.
    """
    path = raw
    enabled = True
    while path.startswith(DISABLED_MARKER):
        path = path[len(DISABLED_MARKER):]
        enabled = False
    return RunValue(path, enabled)


def encode_run_value(value: RunValue) -> str:
    if value.enabled:
        return value.path
    return DISABLED_MARKER + value.path


# -----------------------------
# Entrada de inicio
# -----------------------------
@dataclass(frozen=True)
class StartupEntry:
    """Una entrada tal como se leyó en la última carga"""
    name: str
    path: str
    enabled: bool
    source_kind: SourceKind

    @property
    def location_key(self) -> str:
        return build_location_key(self.source_kind, self.name)

    @property
    def display_name(self) -> str:
        if self.source_kind is SourceKind.STARTUP_FOLDER:
            return os.path.splitext(self.name)[0]
        return self.name

    def to_dict(self) -> dict:
        """Convierte la entrada en diccionario para la interfaz"""
        return {
            "name": self.display_name,
            "path": self.path,
            "location": self.source_kind.label,
            "enabled": self.enabled,
            "key": self.location_key,
        }


def build_location_key(source_kind: SourceKind, name: str) -> str:
    return f"{source_kind.value}\\{name}"
