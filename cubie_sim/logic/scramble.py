from __future__ import annotations

import random
from typing import List, Optional

from cubie_sim.config import SCRAMBLE_LENGTH
from cubie_sim.core.move import AXES, DIRECTIONS, LAYERS, Move


def generate_scramble(n: int = SCRAMBLE_LENGTH, seed: Optional[int] = None) -> List[Move]:
    """Genera una mezcla (scramble) aleatoria de cuartos de vuelta.

    Cada movimiento elige eje, capa y dirección de forma uniforme e independiente
    (se permiten capas centrales y repeticiones consecutivas).

    Args:
        n: Cantidad de movimientos a generar.
        seed: Semilla opcional para resultados reproducibles.

    Returns:
        Lista de `Move` en el orden en que deben aplicarse.

    Raises:
        ValueError: Si `n` es menor o igual a 0.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")

    rng = random.Random(seed)
    return [
        Move(rng.choice(AXES), rng.choice(LAYERS), rng.choice(DIRECTIONS))
        for _ in range(n)
    ]
