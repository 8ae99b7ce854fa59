from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Tuple

Axis = Literal["x", "y", "z"]

AXES: Tuple[Axis, ...] = ("x", "y", "z")
LAYERS: Tuple[int, ...] = (-1, 0, 1)
DIRECTIONS: Tuple[int, ...] = (1, -1)

AXIS_INDEX: Dict[str, int] = {"x": 0, "y": 1, "z": 2}


def _is_int(value: object) -> bool:
    # bool es subclase de int; no lo aceptamos como capa/dirección
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Move:
    """Un cuarto de vuelta sobre una capa del cubo.

    Attributes:
        axis: Eje de giro ('x', 'y' o 'z').
        layer: Capa sobre ese eje (-1, 0 o 1).
        direction: +1 giro positivo (regla de la mano derecha), -1 el inverso.

    Raises:
        ValueError: Si algún campo está fuera de su dominio.
    """

    axis: Axis
    layer: int
    direction: int

    def __post_init__(self) -> None:
        if self.axis not in AXES:
            raise ValueError(f"Eje inválido: {self.axis!r}")
        if not _is_int(self.layer) or self.layer not in LAYERS:
            raise ValueError(f"Capa inválida: {self.layer!r}")
        if not _is_int(self.direction) or self.direction not in DIRECTIONS:
            raise ValueError(f"Dirección inválida: {self.direction!r}")

    @property
    def axis_index(self) -> int:
        return AXIS_INDEX[self.axis]

    def inverse(self) -> "Move":
        """Devuelve el movimiento que deshace a este (misma capa, dirección opuesta)."""
        return Move(self.axis, self.layer, -self.direction)

    def __str__(self) -> str:
        return f"({self.axis}, {self.layer:+d}, {self.direction:+d})"
