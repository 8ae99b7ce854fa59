from __future__ import annotations

from typing import List, Tuple

from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from cubie_sim.app.controller import CubeController
from cubie_sim.config import SCRAMBLE_LENGTH
from cubie_sim.logic.moves import parse_token
from cubie_sim.render.cube_gl_widget import CubeGLWidget

# Botonera de giros de cara
FACE_BUTTONS: List[str] = ["L", "L'", "R", "R'", "U", "U'", "D", "D'", "F", "F'", "B", "B'"]


class MainWindow(QMainWindow):
    """Ventana principal del simulador 3D.

    Esta clase coordina:
    - El controlador del cubo (`CubeController`: store + cola + gestos)
    - La visualización y animación 3D (`CubeGLWidget`)
    - Los botones de giro, scramble, reset y la entrada de secuencias
    """

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Cubo 3D - PySide6")

        # --- Controlador + render ---
        self.controller: CubeController = CubeController()
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.controller, self)
        self._applied: int = 0

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(300)

        self.lbl_state = QLabel("")
        panel_layout.addWidget(self.lbl_state)

        # Giros de cara
        panel_layout.addWidget(QLabel("Giros"))
        grid = QGridLayout()
        self.move_buttons: List[Tuple[str, QPushButton]] = []
        for i, tok in enumerate(FACE_BUTTONS):
            btn = QPushButton(tok)
            btn.clicked.connect(lambda _checked=False, t=tok: self.on_move_button(t))
            grid.addWidget(btn, i // 4, i % 4)
            self.move_buttons.append((tok, btn))
        panel_layout.addLayout(grid)

        # Scramble / reset
        row_main = QHBoxLayout()
        self.spin_scramble = QSpinBox()
        self.spin_scramble.setRange(1, 200)
        self.spin_scramble.setValue(SCRAMBLE_LENGTH)
        self.btn_scramble = QPushButton("Scramble")
        self.btn_reset = QPushButton("Reset")
        row_main.addWidget(self.spin_scramble, 1)
        row_main.addWidget(self.btn_scramble, 1)
        row_main.addWidget(self.btn_reset, 1)
        panel_layout.addLayout(row_main)

        # Aplicar secuencia
        panel_layout.addWidget(QLabel("Aplicar secuencia (ej: R U R' U')"))
        self.txt_seq = QLineEdit()
        self.txt_seq.setPlaceholderText("Ej: R U R' U'")
        panel_layout.addWidget(self.txt_seq)
        self.btn_apply = QPushButton("Aplicar")
        panel_layout.addWidget(self.btn_apply)

        panel_layout.addWidget(
            QLabel("Drag izquierdo sobre el cubo: girar capa\nDrag en el fondo / derecho: orbitar")
        )
        panel_layout.addStretch(1)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_reset.clicked.connect(self.on_reset)
        self.btn_scramble.clicked.connect(self.on_scramble)
        self.btn_apply.clicked.connect(self.on_apply_sequence)
        self.txt_seq.returnPressed.connect(self.on_apply_sequence)
        self.gl_widget.move_applied.connect(self.on_move_applied)

        self.btn_reset.setShortcut("Ctrl+R")

        self._refresh_state_label()

    # -------------------
    # Helpers UI
    # -------------------
    def _refresh_state_label(self) -> None:
        pending = self.controller.scheduler.pending
        self.lbl_state.setText(f"Movimientos aplicados: {self._applied} | en cola: {pending}")

    def on_move_applied(self, token: str) -> None:
        """Callback cuando el GL widget confirma un movimiento al final de su animación."""
        self._applied += 1
        self._refresh_state_label()

    # -------------------
    # Botones
    # -------------------
    def on_move_button(self, token: str) -> None:
        self.controller.queue_moves(parse_token(token))
        self._refresh_state_label()

    def on_reset(self) -> None:
        """Vacía la cola, descarta la animación actual y deja el cubo resuelto."""
        self.controller.reset()
        self._applied = 0
        self.gl_widget.update()
        self._refresh_state_label()
        self.statusBar().showMessage("Reset", 1500)

    def on_scramble(self) -> None:
        n = int(self.spin_scramble.value())
        self.controller.scramble(n)
        self._refresh_state_label()
        self.statusBar().showMessage(f"Scramble: {n} movimientos", 1500)

    def on_apply_sequence(self) -> None:
        """Encola una secuencia ingresada por el usuario (ej: 'R U R' U'')."""
        seq = self.txt_seq.text().strip()
        if not seq:
            return

        try:
            self.controller.queue_sequence(seq)
        except ValueError as exc:
            QMessageBox.warning(self, "Secuencia inválida", str(exc))
            return

        self._refresh_state_label()
