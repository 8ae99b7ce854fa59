# main.py
from __future__ import annotations

import logging
import sys
from typing import NoReturn

from PySide6.QtWidgets import QApplication

from cubie_sim.app.main_window import MainWindow
from cubie_sim.config import LOG_LEVEL


def main() -> NoReturn:
    """Punto de entrada de la aplicación.

    Configura logging, crea la `QApplication`, construye la ventana principal
    (`MainWindow`) y ejecuta el loop de eventos de Qt.
    """
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    w = MainWindow()
    w.resize(1100, 700)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
