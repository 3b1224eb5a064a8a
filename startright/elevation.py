"""
Privilegios de administrador en Windows.
"""

import ctypes
import logging
import subprocess
import sys
from dataclasses import dataclass

import psutil

logger = logging.getLogger("StartRight.Elevation")

SW_SHOWNORMAL = 1


def _shell32():
    return ctypes.windll.shell32


def is_elevated() -> bool:
    """
    Indica si el proceso actual corre como administrador.

    Returns:
        False también cuando la consulta falla o no estamos en Windows
    """
    try:
        return _shell32().IsUserAnAdmin() != 0
    except (AttributeError, OSError):
        return False


@dataclass(frozen=True)
class Privileges:
    """Nivel de privilegios, calculado una sola vez al arrancar"""
    is_admin: bool

    @property
    def label(self) -> str:
        return "Administrador" if self.is_admin else "Usuario estándar"


def detect_privileges() -> Privileges:
    privileges = Privileges(is_elevated())
    logger.info(f"Ejecutando como {privileges.label}")
    return privileges


def relaunch_command():
    """
    Ejecutable y parámetros para volver a abrir esta misma instancia.

    Returns:
        (ejecutable, parámetros) listos para ShellExecuteW
    """
    if getattr(sys, 'frozen', False):
        # Ejecutable compilado
        return psutil.Process().exe(), subprocess.list2cmdline(sys.argv[1:])
    # Script: intérprete + script + argumentos
    return sys.executable, subprocess.list2cmdline(sys.argv)


def relaunch_elevated() -> bool:
    """
    Abre una nueva instancia con el verbo runas.

    Returns:
        True si la nueva instancia arrancó (quien llama debe cerrar esta),
        False si el usuario rechazó el aviso de UAC o hubo un error
    """
    executable, params = relaunch_command()
    try:
        result = _shell32().ShellExecuteW(
            None, "runas", executable, params, None, SW_SHOWNORMAL
        )
    except (AttributeError, OSError) as e:
        logger.error(f"No se pudo solicitar permisos de administrador: {e}")
        return False

    # ShellExecuteW devuelve un valor > 32 si tuvo éxito
    if result > 32:
        logger.info("Nueva instancia elevada iniciada")
        return True
    logger.warning(f"Elevación rechazada o fallida (código {result})")
    return False
