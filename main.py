import sys
import logging
from PyQt5.QtWidgets import QApplication, QMessageBox

from startright.config import Config
from startright.elevation import detect_privileges
from startright.log import setup_logging
from startright.actions import StartupController
from startup_manager import StartupWindow

logger = logging.getLogger("StartRight")


def install_excepthook():
    """Muestra los errores no controlados antes de cerrar."""
    def excepthook(exc_type, exc_value, exc_tb):
        logger.critical("Excepción no controlada", exc_info=(exc_type, exc_value, exc_tb))
        QMessageBox.critical(None, "Error fatal", f"Excepción no controlada: {exc_value}")
        sys.exit(1)
    sys.excepthook = excepthook


def main():
    config = Config()
    setup_logging(config.get("log_level"), config.get("log_file"))

    app = QApplication(sys.argv)
    install_excepthook()

    # Privilegios calculados una sola vez
    privileges = detect_privileges()
    controller = StartupController(config, privileges)

    window = StartupWindow(controller)
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
