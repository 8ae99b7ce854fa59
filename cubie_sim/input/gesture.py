from __future__ import annotations

import logging
import math
from typing import Callable, Dict, NamedTuple, Optional, Sequence, Tuple

from cubie_sim.config import DRAG_THRESHOLD_NDC, SPACING
from cubie_sim.core.cubie_store import Cubie, Vec3f
from cubie_sim.core.move import AXES, AXIS_INDEX, Axis, Move

logger = logging.getLogger(__name__)

Vec2f = Tuple[float, float]
ProjectFn = Callable[[Vec3f], Vec2f]


class GestureRule(NamedTuple):
    """Fila de la tabla de gestos.

    Attributes:
        rotated_axis: Eje que gira.
        drag_sign: Factor aplicado al signo del drag (+1 o -1).
        sign_source: De dónde sale el segundo signo: "normal" o "point".
        sign_axis: Componente (x/y/z) del vector usado para ese signo.
    """

    rotated_axis: Axis
    drag_sign: int
    sign_source: str
    sign_axis: Axis


# (eje de la cara tomada, tangente dominante) -> regla
GESTURE_TABLE: Dict[Tuple[Axis, Axis], GestureRule] = {
    ("x", "y"): GestureRule("x", -1, "point", "z"),
    ("x", "z"): GestureRule("y", -1, "normal", "x"),
    ("y", "x"): GestureRule("z", -1, "normal", "y"),
    ("y", "z"): GestureRule("x", 1, "normal", "y"),
    ("z", "x"): GestureRule("y", 1, "normal", "z"),
    ("z", "y"): GestureRule("x", -1, "normal", "z"),
}


def _unit(axis: str) -> Vec3f:
    i = AXIS_INDEX[axis]
    return (1.0 if i == 0 else 0.0, 1.0 if i == 1 else 0.0, 1.0 if i == 2 else 0.0)


def _sub2(a: Vec2f, b: Vec2f) -> Vec2f:
    return (a[0] - b[0], a[1] - b[1])


def _normalize2(v: Vec2f) -> Vec2f:
    n = math.hypot(v[0], v[1])
    if n < 1e-12:
        return (0.0, 0.0)
    return (v[0] / n, v[1] / n)


def _sign(v: float) -> int:
    return 1 if v > 0 else (-1 if v < 0 else 0)


def dominant_axis(normal: Vec3f) -> Axis:
    """Eje del mundo con mayor componente absoluta (identifica la cara tomada)."""
    ax = [abs(normal[0]), abs(normal[1]), abs(normal[2])]
    return AXES[ax.index(max(ax))]


def tangent_axes(face_axis: str) -> Tuple[Axis, Axis]:
    """Los dos ejes contenidos en el plano de la cara (en orden x, y, z)."""
    t1, t2 = (a for a in AXES if a != face_axis)
    return t1, t2


def resolve_move(
    cubie: Cubie,
    start_point: Vec3f,
    normal: Vec3f,
    current_ndc: Vec2f,
    project: ProjectFn,
    threshold: float = DRAG_THRESHOLD_NDC,
) -> Optional[Move]:
    """Convierte un drag en pantalla en un cuarto de vuelta.

    Las direcciones de referencia se recalculan proyectando con la cámara
    actual, así el resultado no depende de una vista fija.

    Args:
        cubie: Cubie tomado (estado lógico al empezar el drag).
        start_point: Punto de contacto en el mundo.
        normal: Normal de la superficie tocada (mundo).
        current_ndc: Posición actual del puntero en NDC.
        project: Proyección mundo -> NDC de la cámara actual.
        threshold: Distancia mínima del drag en NDC.

    Returns:
        El `Move` resuelto, o None si el drag aún no supera el umbral.
    """
    start_ndc = project(start_point)
    drag = _sub2(current_ndc, start_ndc)
    if math.hypot(drag[0], drag[1]) <= threshold:
        return None
    drag_dir = _normalize2(drag)

    face = dominant_axis(normal)
    t1, t2 = tangent_axes(face)

    dots = []
    for t in (t1, t2):
        u = _unit(t)
        tip = (start_point[0] + u[0], start_point[1] + u[1], start_point[2] + u[2])
        ref = _normalize2(_sub2(project(tip), start_ndc))
        dots.append(drag_dir[0] * ref[0] + drag_dir[1] * ref[1])

    if abs(dots[0]) > abs(dots[1]):
        dominant, dot = t1, dots[0]
    else:
        dominant, dot = t2, dots[1]

    rule = GESTURE_TABLE[(face, dominant)]
    vec = normal if rule.sign_source == "normal" else start_point
    other = _sign(vec[AXIS_INDEX[rule.sign_axis]]) or 1
    drag_sign = 1 if dot > 0 else -1
    direction = rule.drag_sign * drag_sign * other

    coord = cubie.position[AXIS_INDEX[rule.rotated_axis]]
    layer = max(-1, min(1, int(round(coord / SPACING))))

    move = Move(rule.rotated_axis, layer, direction)
    logger.debug(
        "Gesto: cara=%s dominante=%s dot=%.3f -> %s", face, dominant, dot, move
    )
    return move


class GestureResolver:
    """Máquina de estados de una interacción de drag (un gesto -> un movimiento).

    Se inicia con `on_pointer_down`, cada `on_pointer_move` intenta resolver un
    movimiento y, apenas lo consigue, la interacción termina. `on_pointer_up`
    antes del umbral termina sin movimiento.

    El cubie tomado se copia al comenzar el gesto: punto, normal y capa
    describen la misma geometría aunque un movimiento encolado se confirme
    durante el drag.
    """

    def __init__(self, threshold: float = DRAG_THRESHOLD_NDC) -> None:
        self.threshold: float = threshold
        self.active: bool = False
        self.cubie_index: int = -1
        self.cubie: Optional[Cubie] = None
        self.start_point: Vec3f = (0.0, 0.0, 0.0)
        self.normal: Vec3f = (0.0, 0.0, 0.0)

    def on_pointer_down(
        self,
        cubies: Sequence[Cubie],
        cubie_index: int,
        contact_point: Sequence[float],
        surface_normal: Sequence[float],
    ) -> None:
        """Comienza un gesto sobre un cubie.

        Args:
            cubies: Estado lógico actual (se copia el cubie tomado).
            cubie_index: Índice del cubie bajo el puntero.
            contact_point: Punto de intersección real en el mundo.
            surface_normal: Normal de la cara tocada (mundo).

        Raises:
            ValueError: Si el índice está fuera de rango o la normal es nula.
        """
        if not 0 <= cubie_index < len(cubies):
            raise ValueError(f"Índice de cubie inválido: {cubie_index}")
        if len(contact_point) != 3 or len(surface_normal) != 3:
            raise ValueError("Punto y normal deben ser vectores 3D")
        if max(abs(float(c)) for c in surface_normal) < 1e-9:
            raise ValueError("La normal de la superficie no puede ser nula")

        self.active = True
        self.cubie_index = cubie_index
        self.cubie = cubies[cubie_index]
        self.start_point = (float(contact_point[0]), float(contact_point[1]), float(contact_point[2]))
        self.normal = (float(surface_normal[0]), float(surface_normal[1]), float(surface_normal[2]))

    def on_pointer_move(self, current_ndc: Vec2f, project: ProjectFn) -> Optional[Move]:
        """Actualiza el gesto con la posición actual del puntero.

        Returns:
            El movimiento resuelto (una sola vez por gesto) o None.
        """
        if not self.active or self.cubie is None:
            return None

        move = resolve_move(
            self.cubie,
            self.start_point,
            self.normal,
            current_ndc,
            project,
            self.threshold,
        )
        if move is not None:
            self.active = False
        return move

    def on_pointer_up(self) -> None:
        if self.active:
            logger.debug("Gesto terminado sin superar el umbral")
        self.active = False
