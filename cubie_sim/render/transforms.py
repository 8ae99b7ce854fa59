from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple

from cubie_sim.core.cubie_store import CubieStore, Vec3f

Mat3 = Tuple[Vec3f, Vec3f, Vec3f]

IDENTITY: Mat3 = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def axis_rotation(axis: str, angle: float) -> Mat3:
    """Matriz de rotación (regla de la mano derecha) alrededor de un eje del mundo.

    Args:
        axis: 'x', 'y' o 'z'.
        angle: Ángulo en radianes.
    """
    c = math.cos(angle)
    s = math.sin(angle)
    if axis == "x":
        return ((1.0, 0.0, 0.0), (0.0, c, -s), (0.0, s, c))
    if axis == "y":
        return ((c, 0.0, s), (0.0, 1.0, 0.0), (-s, 0.0, c))
    if axis == "z":
        return ((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0))
    raise ValueError(f"Eje inválido: {axis!r}")


def mat_vec(m: Mat3, v: Vec3f) -> Vec3f:
    return (
        m[0][0] * v[0] + m[0][1] * v[1] + m[0][2] * v[2],
        m[1][0] * v[0] + m[1][1] * v[1] + m[1][2] * v[2],
        m[2][0] * v[0] + m[2][1] * v[1] + m[2][2] * v[2],
    )


def mat_mul(a: Mat3, b: Mat3) -> Mat3:
    rows = []
    for i in range(3):
        rows.append(tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3)))
    return tuple(rows)  # type: ignore[return-value]


class VisualTransforms:
    """Estado de presentación de cada cubie (posición + orientación en flotante).

    Durante una animación se le aplican rotaciones incrementales (estado
    imperativo entre frames). Al confirmar un movimiento se re-sincroniza
    desde el store lógico: rotación identidad en la posición lógica, de modo
    que el error flotante acumulado nunca llega al modelo.
    """

    def __init__(self, store: CubieStore) -> None:
        self.positions: List[Vec3f] = []
        self.rotations: List[Mat3] = []
        self.sync(store)

    def sync(self, store: CubieStore, indices: Optional[Iterable[int]] = None) -> None:
        """Resetea los transforms visuales a identidad en la posición lógica.

        Args:
            store: Store lógico (autoritativo).
            indices: Cubies a resetear; None para todos.
        """
        if indices is None or len(self.positions) != len(store):
            self.positions = [c.position for c in store.cubies]
            self.rotations = [IDENTITY] * len(store)
            return
        for i in indices:
            self.positions[i] = store[i].position
            self.rotations[i] = IDENTITY

    def rotate(self, indices: Iterable[int], axis: str, angle: float) -> None:
        """Rota posición y orientación de los cubies alrededor de un eje del mundo.

        Args:
            indices: Cubies a rotar.
            axis: Eje de giro ('x', 'y', 'z'), pasando por el origen.
            angle: Ángulo incremental en radianes.
        """
        if angle == 0.0:
            return
        r = axis_rotation(axis, angle)
        for i in indices:
            self.positions[i] = mat_vec(r, self.positions[i])
            self.rotations[i] = mat_mul(r, self.rotations[i])

    def gl_matrix(self, index: int) -> List[float]:
        """Matriz 4x4 column-major (formato OpenGL) del cubie `index`."""
        m = self.rotations[index]
        p = self.positions[index]
        return [
            m[0][0], m[1][0], m[2][0], 0.0,
            m[0][1], m[1][1], m[2][1], 0.0,
            m[0][2], m[1][2], m[2][2], 0.0,
            p[0], p[1], p[2], 1.0,
        ]

    def world_normal(self, index: int, local: Vec3f) -> Vec3f:
        """Normal de un slot del cubie expresada en coordenadas de mundo."""
        return mat_vec(self.rotations[index], local)
