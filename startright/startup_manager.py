import logging
import os
from typing import Iterable, List, Optional

from startright import registry
from startright.entries import (
    RunValue, SourceKind, StartupEntry, decode_run_value, encode_run_value
)
from startright.errors import (
    AccessDenied, EntryNotFound, IOFailure, StartupError, UnsupportedOperation,
    ValidationFailure
)

DEFAULT_EXTENSIONS = (".lnk", ".exe")

logger = logging.getLogger("StartRight.Loader")
mutator_logger = logging.getLogger("StartRight.Mutator")


def default_startup_folder() -> str:
    """Carpeta Startup del usuario actual (CSIDL_STARTUP)."""
    import pywintypes
    from win32com.shell import shell, shellcon
    try:
        return shell.SHGetFolderPath(0, shellcon.CSIDL_STARTUP, None, 0)
    except pywintypes.com_error as e:
        raise OSError(f"No se pudo resolver la carpeta Startup: {e}")


# -----------------------------
# Carga
# -----------------------------
def load_registry_entries(kind: SourceKind) -> List[StartupEntry]:
    entries = []
    for name, raw in registry.read_run_values(kind):
        value = decode_run_value(raw)
        entries.append(StartupEntry(name, value.path, value.enabled, kind))
    return entries


def load_startup_folder_entries(folder: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> List[StartupEntry]:
    """Accesos directos y ejecutables de la carpeta Startup, siempre habilitados."""
    if not folder or not os.path.isdir(folder):
        return []
    wanted = tuple(ext.lower() for ext in extensions)
    entries = []
    for f in os.listdir(folder):
        full_path = os.path.join(folder, f)
        if not os.path.isfile(full_path):
            continue
        if os.path.splitext(f)[1].lower() in wanted:
            entries.append(StartupEntry(f, full_path, True, SourceKind.STARTUP_FOLDER))
    return entries


def load_all(startup_folder: Optional[str] = None,
             include_local_machine: bool = True,
             extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> List[StartupEntry]:
    """
    Arma la lista completa: usuario actual, máquina local y carpeta Startup.

    Un origen que falla aporta cero entradas y la carga sigue con los demás.
    Solo se lanza IOFailure si el registro no está disponible en absoluto.
    """
    registry.require_winreg()
    entries = []

    try:
        entries.extend(load_registry_entries(SourceKind.REGISTRY_CURRENT_USER))
    except (OSError, StartupError) as e:
        logger.warning(f"No se pudo leer HKCU\\Run: {e}")

    if include_local_machine:
        try:
            entries.extend(load_registry_entries(SourceKind.REGISTRY_LOCAL_MACHINE))
        except (OSError, StartupError) as e:
            # Habitual sin privilegios de administrador
            logger.info(f"No se pudo leer HKLM\\Run: {e}")

    try:
        folder = startup_folder or default_startup_folder()
        entries.extend(load_startup_folder_entries(folder, extensions))
    except OSError as e:
        logger.warning(f"No se pudo leer la carpeta Startup: {e}")

    logger.debug(f"{len(entries)} entradas cargadas")
    return entries


# -----------------------------
# Modificación
# -----------------------------
def add_entry(path: str) -> StartupEntry:
    """
    Registra un programa en HKCU\\Run.

    El nombre del valor es el nombre del archivo sin extensión y el dato es
    la ruta absoluta entre comillas. No requiere privilegios.
    """
    if not path or not path.strip():
        raise ValidationFailure("Selecciona un programa primero.")
    path = path.strip()
    if not os.path.isfile(path):
        raise EntryNotFound("El archivo seleccionado no existe.")

    full_path = os.path.abspath(path)
    name = os.path.splitext(os.path.basename(full_path))[0]
    command = f'"{full_path}"'
    registry.set_run_value(SourceKind.REGISTRY_CURRENT_USER, name, command)
    mutator_logger.info(f"Agregado {name}: {command}")
    return StartupEntry(name, command, True, SourceKind.REGISTRY_CURRENT_USER)


def remove_entry(entry: StartupEntry):
    if entry.source_kind.is_registry:
        registry.delete_run_value(entry.source_kind, entry.name)
    else:
        _delete_startup_file(entry)
    mutator_logger.info(f"Eliminado {entry.location_key}")


def _delete_startup_file(entry: StartupEntry):
    try:
        os.remove(entry.path)
    except FileNotFoundError:
        mutator_logger.debug(f"{entry.path} ya no existía")
    except PermissionError:
        raise AccessDenied(f"Acceso denegado al eliminar '{entry.display_name}'.")
    except OSError as e:
        raise IOFailure(f"Error eliminando '{entry.display_name}': {e}")


def set_entry_enabled(entry: StartupEntry, enabled: bool):
    """
    Habilita o deshabilita una entrada del registro.

    Parte siempre del valor guardado en ese momento, no de la ruta mostrada,
    y conserva el tipo de registro original.
    """
    if not entry.source_kind.is_registry:
        raise UnsupportedOperation(
            f"Las entradas de la carpeta Startup no se pueden deshabilitar ({entry.display_name})."
        )
    raw, regtype = registry.query_run_value(entry.source_kind, entry.name)
    current = decode_run_value(raw)
    updated = encode_run_value(RunValue(current.path, enabled))
    if updated == raw:
        return
    registry.set_run_value(entry.source_kind, entry.name, updated, regtype)
    mutator_logger.info(f"{'Habilitado' if enabled else 'Deshabilitado'} {entry.location_key}")


def count_disabled() -> int:
    """Cantidad de valores de HKCU\\Run marcados como deshabilitados"""
    return sum(
        1 for _, raw in registry.read_run_values(SourceKind.REGISTRY_CURRENT_USER)
        if not decode_run_value(raw).enabled
    )
