from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence, Tuple

from cubie_sim.config import LAYER_TOLERANCE, ROUND_DECIMALS, SPACING
from cubie_sim.core.cubie_store import Colors, Cubie, Vec3f
from cubie_sim.core.move import AXIS_INDEX, Move

logger = logging.getLogger(__name__)


# --------------------------
# Cuartos de vuelta (regla de la mano derecha para direction=+1)
# --------------------------
def _rot_x(v: Vec3f, direction: int) -> Vec3f:
    x, y, z = v
    if direction == 1:
        return (x, -z, y)
    return (x, z, -y)


def _rot_y(v: Vec3f, direction: int) -> Vec3f:
    x, y, z = v
    if direction == 1:
        return (z, y, -x)
    return (-z, y, x)


def _rot_z(v: Vec3f, direction: int) -> Vec3f:
    x, y, z = v
    if direction == 1:
        return (-y, x, z)
    return (y, -x, z)


_ROTATIONS: Dict[str, Callable[[Vec3f, int], Vec3f]] = {
    "x": _rot_x,
    "y": _rot_y,
    "z": _rot_z,
}

# Para cada (eje, dirección): slot nuevo i <- slot viejo SLOT_PERMUTATION[i]
# Slots: 0=+X, 1=-X, 2=+Y, 3=-Y, 4=+Z, 5=-Z
SLOT_PERMUTATION: Dict[Tuple[str, int], Tuple[int, ...]] = {
    ("x", 1): (0, 1, 5, 4, 2, 3),
    ("x", -1): (0, 1, 4, 5, 3, 2),
    ("y", 1): (4, 5, 2, 3, 1, 0),
    ("y", -1): (5, 4, 2, 3, 0, 1),
    ("z", 1): (3, 2, 0, 1, 4, 5),
    ("z", -1): (2, 3, 1, 0, 4, 5),
}


def _round_coord(v: float) -> float:
    # + 0.0 normaliza -0.0 a 0.0
    return round(v, ROUND_DECIMALS) + 0.0


def in_layer(position: Vec3f, axis: str, layer: int) -> bool:
    """Indica si una posición pertenece a la capa `layer` del eje `axis`."""
    coord = position[AXIS_INDEX[axis]]
    return abs(coord - layer * SPACING) < LAYER_TOLERANCE


def layer_indices(cubies: Sequence[Cubie], move: Move) -> List[int]:
    """Índices de los cubies afectados por `move` (según su posición actual)."""
    return [i for i, c in enumerate(cubies) if in_layer(c.position, move.axis, move.layer)]


def rotate_colors(colors: Colors, axis: str, direction: int) -> Colors:
    perm = SLOT_PERMUTATION[(axis, direction)]
    return tuple(colors[j] for j in perm)  # type: ignore[return-value]


def rotate_cubie(cubie: Cubie, axis: str, direction: int) -> Cubie:
    """Aplica un cuarto de vuelta a un cubie: rota posición y reubica colores."""
    x, y, z = _ROTATIONS[axis](cubie.position, direction)
    pos: Vec3f = (_round_coord(x), _round_coord(y), _round_coord(z))
    return Cubie(pos, rotate_colors(cubie.colors, axis, direction))


def apply_move(cubies: Sequence[Cubie], move: Move) -> List[Cubie]:
    """Aplica un movimiento al estado y retorna un estado nuevo (función pura).

    Solo se rotan los cubies de la capa seleccionada; el resto se copia tal cual.

    Args:
        cubies: Estado actual (27 cubies).
        move: Movimiento ya validado.

    Returns:
        Nueva lista de cubies.
    """
    out: List[Cubie] = []
    rotated = 0
    for c in cubies:
        if in_layer(c.position, move.axis, move.layer):
            out.append(rotate_cubie(c, move.axis, move.direction))
            rotated += 1
        else:
            out.append(c)
    logger.debug("apply_move %s: %d cubies rotados", move, rotated)
    return out


def apply_moves(cubies: Sequence[Cubie], moves: Sequence[Move]) -> List[Cubie]:
    """Aplica una secuencia de movimientos en orden."""
    out = list(cubies)
    for m in moves:
        out = apply_move(out, m)
    return out
