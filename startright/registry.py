"""
Acceso a las claves Run del registro.

Cada función abre la clave justo antes de usarla y la cierra con el bloque
with, también cuando hay errores.
"""

import logging
import sys
from typing import List, Tuple

from startright.entries import SourceKind
from startright.errors import AccessDenied, ElevationRequired, EntryNotFound, IOFailure

if sys.platform == "win32":
    import winreg
else:
    winreg = None

RUN_KEY = r"Software\Microsoft\Windows\CurrentVersion\Run"

STRING_TYPES = ("REG_SZ", "REG_EXPAND_SZ")

logger = logging.getLogger("StartRight.Registry")


def require_winreg():
    if winreg is None:
        raise IOFailure("El registro de Windows no está disponible en este sistema.")
    return winreg


def _root(kind: SourceKind):
    reg = require_winreg()
    if kind is SourceKind.REGISTRY_CURRENT_USER:
        return reg.HKEY_CURRENT_USER
    if kind is SourceKind.REGISTRY_LOCAL_MACHINE:
        return reg.HKEY_LOCAL_MACHINE
    raise ValueError(f"{kind} no es un origen del registro")


def _denied(kind: SourceKind, action: str, name: str) -> AccessDenied:
    if kind is SourceKind.REGISTRY_LOCAL_MACHINE:
        return ElevationRequired(
            f"Se requieren privilegios de administrador para {action} '{name}'."
        )
    return AccessDenied(f"Acceso denegado al {action} '{name}'.")


def read_run_values(kind: SourceKind) -> List[Tuple[str, str]]:
    """
    Devuelve los pares (nombre, texto) de la clave Run en el orden del sistema.

    Una clave inexistente no es un error. Los valores que no son texto, o
    que están vacíos, se omiten.
    """
    reg = require_winreg()
    values = []
    try:
        with reg.OpenKey(_root(kind), RUN_KEY, 0, reg.KEY_READ) as key:
            i = 0
            while True:
                try:
                    name, value, _ = reg.EnumValue(key, i)
                except OSError:
                    break
                i += 1
                if not isinstance(value, str) or not value:
                    logger.debug(f"Valor {kind.value}\\{name} omitido: vacío o no es texto")
                    continue
                values.append((name, value))
    except FileNotFoundError:
        return []
    except PermissionError:
        raise _denied(kind, "leer", "Run")
    except OSError as e:
        raise IOFailure(f"Error leyendo {kind.value}\\Run: {e}")
    return values


def query_run_value(kind: SourceKind, name: str) -> Tuple[str, int]:
    """Lee el texto guardado y su tipo de registro"""
    reg = require_winreg()
    try:
        with reg.OpenKey(_root(kind), RUN_KEY, 0, reg.KEY_READ) as key:
            value, regtype = reg.QueryValueEx(key, name)
    except FileNotFoundError:
        raise EntryNotFound(f"La entrada '{name}' ya no existe en el registro.")
    except PermissionError:
        raise _denied(kind, "leer", name)
    except OSError as e:
        raise IOFailure(f"Error leyendo '{name}': {e}")
    if not isinstance(value, str):
        raise IOFailure(f"El valor '{name}' no contiene texto.")
    return value, regtype


def set_run_value(kind: SourceKind, name: str, value: str, regtype=None):
    reg = require_winreg()
    if regtype is None or not _is_string_type(regtype):
        regtype = reg.REG_SZ
    try:
        with reg.OpenKey(_root(kind), RUN_KEY, 0, reg.KEY_SET_VALUE) as key:
            reg.SetValueEx(key, name, 0, regtype, value)
    except PermissionError:
        raise _denied(kind, "modificar", name)
    except FileNotFoundError:
        raise IOFailure("No se pudo acceder al registro para guardar la entrada.")
    except OSError as e:
        raise IOFailure(f"Error escribiendo '{name}': {e}")
    logger.debug(f"{kind.value}\\{name} = {value}")


def delete_run_value(kind: SourceKind, name: str):
    """Borra el valor; si ya no existe no hace nada"""
    reg = require_winreg()
    try:
        with reg.OpenKey(_root(kind), RUN_KEY, 0, reg.KEY_SET_VALUE) as key:
            reg.DeleteValue(key, name)
    except FileNotFoundError:
        logger.debug(f"{kind.value}\\{name} ya no existía")
    except PermissionError:
        raise _denied(kind, "eliminar", name)
    except OSError as e:
        raise IOFailure(f"Error eliminando '{name}': {e}")


def _is_string_type(regtype) -> bool:
    reg = require_winreg()
    return any(regtype == getattr(reg, t) for t in STRING_TYPES)
