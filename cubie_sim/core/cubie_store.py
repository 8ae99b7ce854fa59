from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

from cubie_sim.config import FACE_COLORS, ROUND_DECIMALS, SPACING
from cubie_sim.core.move import LAYERS

logger = logging.getLogger(__name__)

Color = Optional[str]  # "R", "L", "U", "D", "F", "B" o None (sin sticker)
Vec3f = Tuple[float, float, float]
Colors = Tuple[Color, Color, Color, Color, Color, Color]

# Orden de los slots de color: una normal unitaria por slot
SLOT_NORMALS: Tuple[Tuple[int, int, int], ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


class Cubie(NamedTuple):
    """Registro inmutable de un cubie: posición actual + 6 slots de color."""

    position: Vec3f
    colors: Colors

    def sticker_count(self) -> int:
        return sum(1 for c in self.colors if c is not None)


def solved_colors(x: int, y: int, z: int) -> Colors:
    """Colores de un cubie en el estado resuelto según sus coordenadas de grilla."""
    return (
        FACE_COLORS[0] if x == 1 else None,
        FACE_COLORS[1] if x == -1 else None,
        FACE_COLORS[2] if y == 1 else None,
        FACE_COLORS[3] if y == -1 else None,
        FACE_COLORS[4] if z == 1 else None,
        FACE_COLORS[5] if z == -1 else None,
    )


def solved_cubies() -> List[Cubie]:
    """Construye los 27 cubies en configuración resuelta (orden x, luego y, luego z)."""
    out: List[Cubie] = []
    for x in LAYERS:
        for y in LAYERS:
            for z in LAYERS:
                pos: Vec3f = (
                    round(x * SPACING, ROUND_DECIMALS) + 0.0,
                    round(y * SPACING, ROUND_DECIMALS) + 0.0,
                    round(z * SPACING, ROUND_DECIMALS) + 0.0,
                )
                out.append(Cubie(pos, solved_colors(x, y, z)))
    return out


def grid_coords(position: Vec3f) -> Tuple[int, int, int]:
    """Convierte una posición escalada a coordenadas enteras de grilla."""
    x, y, z = position
    return (
        int(round(x / SPACING)),
        int(round(y / SPACING)),
        int(round(z / SPACING)),
    )


class CubieStore:
    """Almacén del estado lógico del cubo (27 cubies).

    Es la única fuente de verdad: el render lee de aquí y solo el paso de
    commit del scheduler lo reemplaza (`replace`). Un reset lo vuelve al
    estado resuelto.
    """

    SIZE: int = 27

    def __init__(self) -> None:
        self.cubies: List[Cubie] = solved_cubies()

    def __len__(self) -> int:
        return len(self.cubies)

    def __getitem__(self, index: int) -> Cubie:
        return self.cubies[index]

    def reset(self) -> None:
        """Reemplaza el estado completo por la configuración resuelta."""
        self.cubies = solved_cubies()
        logger.debug("Store reiniciado a estado resuelto")

    def replace(self, cubies: Sequence[Cubie]) -> None:
        """Reemplaza el estado por uno nuevo (resultado del motor de permutación).

        Raises:
            ValueError: Si la cantidad de cubies no es 27.
        """
        if len(cubies) != self.SIZE:
            raise ValueError(f"Se esperaban {self.SIZE} cubies, llegaron {len(cubies)}")
        self.cubies = list(cubies)

