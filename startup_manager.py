import os
from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QTreeWidget, QTreeWidgetItem,
    QMenu, QAction, QLineEdit, QPushButton, QLabel, QFileDialog, QMessageBox,
    QApplication
)
from PyQt5.QtCore import Qt

from startright.actions import StartupController

ENTRY_ROLE = Qt.ItemDataRole.UserRole


class StartupTab(QWidget):
    def __init__(self, controller: StartupController):
        super().__init__()
        self.controller = controller
        self._loading = False

        # Layout principal
        layout = QVBoxLayout(self)

        # --- Agregar programa ---
        add_row = QHBoxLayout()
        self.path_edit = QLineEdit()
        self.path_edit.setPlaceholderText("Ruta del programa...")
        browse_button = QPushButton("Examinar...")
        browse_button.clicked.connect(lambda: self.browse_program())
        add_button = QPushButton("Agregar")
        add_button.clicked.connect(lambda: self.add_program())
        add_row.addWidget(self.path_edit)
        add_row.addWidget(browse_button)
        add_row.addWidget(add_button)
        layout.addLayout(add_row)

        # --- Lista ---
        self.tree = QTreeWidget()
        self.tree.setHeaderLabels(["Nombre", "Ruta", "Ubicación", "Estado"])
        self.tree.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.tree.customContextMenuRequested.connect(self.open_context_menu)
        self.tree.itemChanged.connect(self.on_item_changed)
        self.tree.itemDoubleClicked.connect(lambda item, _col: self.open_location(item.data(0, ENTRY_ROLE)))
        layout.addWidget(self.tree)

        # --- Botones ---
        buttons = QHBoxLayout()
        for text, slot in (
            ("Eliminar", self.remove_selected),
            ("Refrescar", self.refresh),
            ("Guardar cambios", self.save_changes),
            ("Ejecutar como administrador", self.run_as_admin),
        ):
            button = QPushButton(text)
            button.clicked.connect(lambda _checked=False, s=slot: s())
            buttons.addWidget(button)
        layout.addLayout(buttons)

        self.status = QLabel()
        layout.addWidget(self.status)

        self.refresh()

    # -----------------------------
    # Lista
    # -----------------------------
    def populate(self):
        self._loading = True
        try:
            self.tree.clear()
            for entry in self.controller.entries:
                data = entry.to_dict()
                row = QTreeWidgetItem([
                    data["name"],
                    data["path"],
                    data["location"],
                    "Habilitado" if data["enabled"] else "Deshabilitado"
                ])
                row.setData(0, ENTRY_ROLE, entry)
                # Las entradas de la carpeta Startup no tienen casilla
                if entry.source_kind.is_registry:
                    row.setFlags(row.flags() | Qt.ItemFlag.ItemIsUserCheckable)
                    row.setCheckState(0, Qt.CheckState.Checked if entry.enabled else Qt.CheckState.Unchecked)
                self.tree.addTopLevelItem(row)
        finally:
            self._loading = False

    def show_result(self, result, title="Error"):
        self.status.setText(result.message)
        if not result.ok and not result.elevation_required:
            QMessageBox.critical(self, title, result.message)

    def refresh(self):
        self.status.setText("Refrescando programas de inicio...")
        result = self.controller.refresh()
        self.populate()
        self.show_result(result, "Error al refrescar")

    def selected_entry(self):
        item = self.tree.currentItem()
        return item.data(0, ENTRY_ROLE) if item else None

    # -----------------------------
    # Agregar / eliminar
    # -----------------------------
    def browse_program(self):
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Selecciona un programa para agregar al inicio",
            self.controller.config.get("browse_directory", ""),
            "Ejecutables (*.exe);;Todos los archivos (*.*)"
        )
        if path:
            path = os.path.normpath(path)
            self.path_edit.setText(path)
            self.controller.remember_browse_directory(path)

    def add_program(self):
        result = self.controller.add(self.path_edit.text())
        if result.ok:
            self.path_edit.clear()
        self.populate()
        self.show_result(result)

    def remove_selected(self, entry=None):
        entry = entry or self.selected_entry()
        if entry is None:
            QMessageBox.warning(self, "Aviso", "Selecciona un programa para eliminar.")
            return
        if self.controller.config.confirm_remove:
            answer = QMessageBox.question(
                self, "Confirmar", f"¿Eliminar '{entry.display_name}' del inicio?"
            )
            if answer != QMessageBox.Yes:
                return
        result = self.controller.remove(entry)
        self.handle_elevation(result, entry)
        self.populate()
        self.show_result(result)

    # -----------------------------
    # Habilitar / deshabilitar
    # -----------------------------
    def on_item_changed(self, item, column):
        if self._loading or column != 0:
            return
        entry = item.data(0, ENTRY_ROLE)
        if entry is None or not entry.source_kind.is_registry:
            return
        enabled = item.checkState(0) == Qt.CheckState.Checked
        if enabled == entry.enabled:
            return
        result = self.controller.toggle(entry, enabled)
        self.handle_elevation(result, entry)
        # Repoblar desde la recarga; si falló vuelve al estado anterior
        self.populate()
        self.show_result(result)

    # -----------------------------
    # Elevación
    # -----------------------------
    def handle_elevation(self, result, entry):
        if not result.elevation_required:
            return
        answer = QMessageBox.question(
            self,
            "Se requieren permisos de administrador",
            f"Se requieren privilegios de administrador para modificar '{entry.display_name}'.\n\n"
            "¿Reiniciar StartRight como administrador?"
        )
        if answer == QMessageBox.Yes:
            self.run_as_admin(confirm=False)

    def run_as_admin(self, confirm=True):
        if confirm:
            answer = QMessageBox.question(
                self,
                "Ejecutar como administrador",
                "¿Reiniciar StartRight con privilegios de administrador?\n\n"
                "Esto permite modificar los programas de inicio de todos los usuarios."
            )
            if answer != QMessageBox.Yes:
                return
        result = self.controller.relaunch_elevated()
        if result.ok:
            QApplication.quit()
        else:
            self.show_result(result)

    def save_changes(self):
        result = self.controller.save_changes()
        self.status.setText(result.message)
        if result.ok:
            QMessageBox.information(self, "Guardar cambios", result.message)
        else:
            QMessageBox.critical(self, "Error", result.message)

    # -----------------------------
    # Menú contextual
    # -----------------------------
    def open_location(self, entry):
        if entry is None:
            return
        result = self.controller.reveal(entry)
        self.status.setText(result.message)
        if not result.ok:
            QMessageBox.warning(self, "Ubicación no encontrada", result.message)

    def open_context_menu(self, pos):
        item = self.tree.itemAt(pos)
        if not item:
            return

        entry = item.data(0, ENTRY_ROLE)
        menu = QMenu(self)

        # Acción abrir ubicación
        open_action = QAction("Abrir ubicación", self)
        open_action.triggered.connect(lambda: self.open_location(entry))
        menu.addAction(open_action)

        # Acción habilitar/deshabilitar
        if entry.source_kind.is_registry:
            toggle_action = QAction("Deshabilitar" if entry.enabled else "Habilitar", self)
            toggle_action.triggered.connect(lambda: item.setCheckState(
                0, Qt.CheckState.Unchecked if entry.enabled else Qt.CheckState.Checked
            ))
            menu.addAction(toggle_action)

        remove_action = QAction("Eliminar", self)
        remove_action.triggered.connect(lambda: self.remove_selected(entry))
        menu.addAction(remove_action)

        viewport = self.tree.viewport()
        if viewport is not None:
            menu.exec_(viewport.mapToGlobal(pos))


# ---- Ventana principal ----
class StartupWindow(QWidget):
    def __init__(self, controller: StartupController):
        super().__init__()
        self.setWindowTitle(f"StartRight ({controller.privileges.label})")
        self.resize(900, 500)

        layout = QVBoxLayout(self)
        self.startup_tab = StartupTab(controller)
        layout.addWidget(self.startup_tab)
