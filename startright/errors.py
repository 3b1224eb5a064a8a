"""
Errores de las operaciones sobre entradas de inicio.

Cada excepción lleva un mensaje pensado para mostrarse al usuario tal cual.
"""


class StartupError(Exception):
    """Base de todos los errores de StartRight."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EntryNotFound(StartupError):
    """El archivo o el valor del registro ya no existe."""


class AccessDenied(StartupError):
    """Permisos insuficientes para escribir en el origen."""


class ElevationRequired(AccessDenied):
    """Acceso denegado al registro de la máquina; se puede reintentar como administrador."""


class IOFailure(StartupError):
    pass


class ValidationFailure(StartupError):
    """Entrada vacía o sin selección."""


class UnsupportedOperation(ValidationFailure):
    pass
