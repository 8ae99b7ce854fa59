from __future__ import annotations

from typing import Dict, List, Sequence, Set, Tuple

from cubie_sim.core.move import Move

# Letra -> (eje, capa, dirección) del cuarto de vuelta "base"
BASE_MOVES: Dict[str, Tuple[str, int, int]] = {
    "L": ("x", -1, 1),
    "R": ("x", 1, 1),
    "U": ("y", 1, 1),
    "D": ("y", -1, 1),
    "F": ("z", 1, 1),
    "B": ("z", -1, 1),
    "M": ("x", 0, 1),
    "E": ("y", 0, 1),
    "S": ("z", 0, 1),
}
VALID_SUFFIX: Set[str] = {"", "'", "2"}

_TOKEN_BY_PARAMS: Dict[Tuple[str, int], str] = {
    (axis, layer): base for base, (axis, layer, _) in BASE_MOVES.items()
}


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a un formato estándar.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Acepta caras (L R U D F B) y slices (M E S) con sufijo opcional "", "'" o "2".
    - Corrige el caso "D2'" -> "D2" (el inverso de un 180° es el mismo).

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", "F2", "D2'").

    Returns:
        Token normalizado.

    Raises:
        ValueError: Si la letra o el sufijo no son válidos.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'")
    if not tok:
        return ""

    base = tok[0].upper()
    suf = tok[1:]

    if base not in BASE_MOVES:
        raise ValueError(f"Movimiento inválido: {tok}")

    if suf == "2'":
        suf = "2"

    if suf not in VALID_SUFFIX:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return base + suf


def parse_token(tok: str) -> List[Move]:
    """Traduce un token a la lista de cuartos de vuelta que lo componen.

    "R" -> [R], "R'" -> [R inverso], "R2" -> [R, R].

    Raises:
        ValueError: Si el token es inválido.
    """
    tok = normalize_token(tok)
    if not tok:
        return []

    axis, layer, direction = BASE_MOVES[tok[0]]
    suf = tok[1:]

    if suf == "'":
        return [Move(axis, layer, -direction)]  # type: ignore[arg-type]
    if suf == "2":
        m = Move(axis, layer, direction)  # type: ignore[arg-type]
        return [m, m]
    return [Move(axis, layer, direction)]  # type: ignore[arg-type]


def parse_sequence(text: str) -> List[Move]:
    """Convierte una secuencia escrita como texto en movimientos.

    Ejemplo: "R U R' U'" -> 4 movimientos; "F2" aporta 2.

    Raises:
        ValueError: Si algún token es inválido (no se devuelve nada parcial).
    """
    out: List[Move] = []
    for t in text.split():
        out.extend(parse_token(t))
    return out


def move_to_token(move: Move) -> str:
    """Devuelve la notación de un cuarto de vuelta (por ejemplo "U" o "M'")."""
    base = _TOKEN_BY_PARAMS[(move.axis, move.layer)]
    return base if move.direction == BASE_MOVES[base][2] else base + "'"


def inverse_sequence(moves: Sequence[Move]) -> List[Move]:
    """Secuencia que deshace `moves`: inversos en orden contrario."""
    return [m.inverse() for m in reversed(moves)]
