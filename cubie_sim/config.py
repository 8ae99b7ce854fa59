"""
Constantes de configuración del simulador de cubo 3x3x3.
"""
from __future__ import annotations

import math
import os
from typing import Dict, Tuple

# Grilla: separación entre centros de cubies (incluye el "gap" visual)
SPACING: float = 1.05

# Tolerancia para decidir si un cubie pertenece a una capa
LAYER_TOLERANCE: float = 0.1 * SPACING

# Decimales a los que se redondean las posiciones después de cada giro
ROUND_DECIMALS: int = 2

# Animación: progreso por unidad de tiempo (1 / 4.0 = 0.25 s por cuarto de vuelta)
ANIM_RATE: float = 4.0
QUARTER_TURN: float = math.pi / 2
FRAME_INTERVAL_MS: int = 16  # ~60fps

# Scramble
SCRAMBLE_LENGTH: int = 20

# Drag: distancia mínima (en NDC) para resolver un movimiento
DRAG_THRESHOLD_NDC: float = 0.05

# Colores por slot (+X, -X, +Y, -Y, +Z, -Z)
FACE_COLORS: Tuple[str, ...] = ("R", "L", "U", "D", "F", "B")

COLOR_RGB: Dict[str, Tuple[float, float, float]] = {
    "U": (1.0, 1.0, 1.0),      # blanco
    "D": (1.0, 0.84, 0.0),     # amarillo
    "F": (0.0, 0.62, 0.38),    # verde
    "B": (0.0, 0.32, 0.73),    # azul
    "R": (0.77, 0.12, 0.23),   # rojo
    "L": (1.0, 0.35, 0.0),     # naranjo
}
CORE_RGB: Tuple[float, float, float] = (0.07, 0.07, 0.07)

# Cámara orbital: por defecto mira desde la esquina (+X, +Y, +Z)
CAMERA_YAW: float = -45.0
CAMERA_PITCH: float = 35.26
CAMERA_DISTANCE: float = 8.66
CAMERA_FOV: float = 45.0
CAMERA_MIN_DISTANCE: float = 4.0
CAMERA_MAX_DISTANCE: float = 12.0

LOG_LEVEL: str = os.environ.get("CUBIE_SIM_LOG_LEVEL", "WARNING").upper()
