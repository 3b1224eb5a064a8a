"""
Capa entre la interfaz y las operaciones sobre entradas de inicio.

Cada acción devuelve un ActionResult con un mensaje listo para mostrarse,
y toda modificación exitosa recarga la lista completa desde el sistema.
"""

import logging
import os
import re
import subprocess
from dataclasses import dataclass
from typing import List

from startright import startup_manager
from startright.config import Config
from startright.elevation import Privileges, relaunch_elevated
from startright.entries import StartupEntry
from startright.errors import ElevationRequired, StartupError

logger = logging.getLogger("StartRight.UI")


@dataclass
class ActionResult:
    ok: bool
    message: str
    elevation_required: bool = False

    @classmethod
    def failure(cls, error: StartupError) -> "ActionResult":
        return cls(False, error.message, isinstance(error, ElevationRequired))


def extract_executable_path(command: str) -> str:
    """Ruta del ejecutable dentro de una línea de comandos"""
    if not command:
        return ""
    command = command.strip()

    # Ruta entre comillas
    if command.startswith('"'):
        end_quote = command.find('"', 1)
        if end_quote > 0:
            return command[1:end_quote]

    # Ruta sin comillas con espacios (hasta el .exe)
    exe_match = re.search(r'^([^"]+?\.exe)', command, re.IGNORECASE)
    if exe_match:
        return exe_match.group(1)
    return command


class StartupController:
    def __init__(self, config: Config, privileges: Privileges):
        self.config = config
        self.privileges = privileges
        self.entries: List[StartupEntry] = []

    def _reload(self):
        self.entries = startup_manager.load_all(
            startup_folder=self.config.startup_folder,
            include_local_machine=self.config.include_local_machine,
            extensions=self.config.extensions,
        )

    def _run(self, action, success_message) -> ActionResult:
        try:
            value = action()
        except StartupError as e:
            logger.warning(e.message)
            return ActionResult.failure(e)
        try:
            self._reload()
        except StartupError as e:
            logger.error(e.message)
            return ActionResult.failure(e)
        if callable(success_message):
            success_message = success_message(value)
        return ActionResult(True, success_message)

    # -----------------------------
    # Acciones
    # -----------------------------
    def refresh(self) -> ActionResult:
        try:
            self._reload()
        except StartupError as e:
            logger.error(e.message)
            return ActionResult(False, f"Error cargando programas de inicio: {e.message}")
        return ActionResult(True, f"Se cargaron {len(self.entries)} programas de inicio.")

    def add(self, path: str) -> ActionResult:
        return self._run(
            lambda: startup_manager.add_entry(path),
            lambda entry: f"{entry.name} agregado al inicio",
        )

    def remove(self, entry: StartupEntry) -> ActionResult:
        if entry is None:
            return ActionResult(False, "Selecciona un programa para eliminar.")
        return self._run(
            lambda: startup_manager.remove_entry(entry),
            f"{entry.display_name} eliminado del inicio",
        )

    def toggle(self, entry: StartupEntry, enabled: bool) -> ActionResult:
        """Si se necesita elevación la lista se recarga igual, para revertir el estado mostrado"""
        result = self._run(
            lambda: startup_manager.set_entry_enabled(entry, enabled),
            f"{'Habilitado' if enabled else 'Deshabilitado'} {entry.display_name}",
        )
        if not result.ok:
            try:
                self._reload()
            except StartupError as e:
                logger.error(e.message)
        return result

    def save_changes(self) -> ActionResult:
        try:
            disabled = startup_manager.count_disabled()
        except StartupError as e:
            return ActionResult.failure(e)
        if disabled:
            return ActionResult(True, f"Cambios guardados para {disabled} programa(s)")
        return ActionResult(True, "No hay cambios pendientes")

    def remember_browse_directory(self, path: str) -> bool:
        """Guarda la carpeta del último programa elegido para el próximo Examinar"""
        directory = os.path.dirname(path)
        if not directory or directory == self.config.get("browse_directory"):
            return False
        self.config.set("browse_directory", directory)
        return self.config.save()

    def relaunch_elevated(self) -> ActionResult:
        if relaunch_elevated():
            return ActionResult(True, "Reiniciando como administrador...")
        return ActionResult(False, "No se pudo reiniciar como administrador.")

    def reveal(self, entry: StartupEntry) -> ActionResult:
        """Abre el Explorador con el archivo seleccionado"""
        # Los valores REG_EXPAND_SZ guardan variables como %ProgramFiles%
        path = os.path.expandvars(extract_executable_path(entry.path))
        directory = os.path.dirname(path)
        if not directory or not os.path.isdir(directory):
            return ActionResult(False, "La ubicación del archivo no existe o no es accesible.")
        try:
            subprocess.Popen(f'explorer /select,"{path}"')
        except OSError as e:
            logger.error(f"reveal: {e}")
            return ActionResult(False, f"No se pudo abrir la ubicación: {e}")
        return ActionResult(True, f"Ubicación abierta: {path}")
