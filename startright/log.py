import logging
from typing import Optional

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Consola siempre; archivo solo si se configuró log_file."""
    root = logging.getLogger("StartRight")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            root.warning(f"No se pudo abrir el archivo de log {log_file}: {e}")
        else:
            file_handler.setFormatter(logging.Formatter("%(asctime)s " + LOG_FORMAT))
            root.addHandler(file_handler)
    return root
