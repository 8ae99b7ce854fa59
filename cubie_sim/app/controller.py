from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from cubie_sim.anim.scheduler import MoveScheduler
from cubie_sim.config import SCRAMBLE_LENGTH
from cubie_sim.core.cubie_store import CubieStore
from cubie_sim.core.move import Move
from cubie_sim.input.gesture import GestureResolver, ProjectFn, Vec2f
from cubie_sim.logic.moves import parse_sequence
from cubie_sim.logic.scramble import generate_scramble
from cubie_sim.render.transforms import VisualTransforms

logger = logging.getLogger(__name__)


class CubeController:
    """Fachada de comandos del cubo (sin dependencias de Qt).

    Coordina:
    - El estado lógico (`CubieStore`)
    - La cola + animación (`MoveScheduler`)
    - Los transforms visuales que lee el render (`VisualTransforms`)
    - El resolvedor de gestos (`GestureResolver`)
    """

    def __init__(self) -> None:
        self.store: CubieStore = CubieStore()
        self.scheduler: MoveScheduler = MoveScheduler(self.store)
        self.visuals: VisualTransforms = VisualTransforms(self.store)
        self.gesture: GestureResolver = GestureResolver()

        self.scheduler.frame_listeners.append(self.visuals.rotate)
        self.scheduler.commit_listeners.append(self._on_commit)
        self.scheduler.reset_listeners.append(self._on_reset)

    # -------------------
    # Comandos
    # -------------------
    def queue_move(self, axis: str, layer: int, direction: int) -> Move:
        """Encola un cuarto de vuelta.

        Raises:
            ValueError: Si eje, capa o dirección son inválidos (no se encola nada).
        """
        move = Move(axis, layer, direction)  # type: ignore[arg-type]
        self.scheduler.queue(move)
        return move

    def queue_moves(self, moves: Iterable[Move]) -> None:
        self.scheduler.queue_many(moves)

    def queue_sequence(self, text: str) -> List[Move]:
        """Encola una secuencia en notación (ej: "R U R' U'").

        Raises:
            ValueError: Si algún token es inválido (no se encola nada).
        """
        moves = parse_sequence(text)
        self.scheduler.queue_many(moves)
        return moves

    def scramble(self, n: int = SCRAMBLE_LENGTH, seed: Optional[int] = None) -> List[Move]:
        """Encola `n` movimientos aleatorios y los retorna."""
        moves = generate_scramble(n, seed)
        self.scheduler.queue_many(moves)
        logger.info("Scramble de %d movimientos encolado", len(moves))
        return moves

    def reset(self) -> None:
        self.gesture.on_pointer_up()
        self.scheduler.reset()

    def tick(self, dt: float) -> Optional[Move]:
        return self.scheduler.tick(dt)

    # -------------------
    # Gestos
    # -------------------
    def on_pointer_down(
        self,
        cubie_index: int,
        contact_point: Sequence[float],
        surface_normal: Sequence[float],
    ) -> None:
        """Comienza un gesto; se acepta también mientras un movimiento se anima."""
        self.gesture.on_pointer_down(self.store.cubies, cubie_index, contact_point, surface_normal)

    def on_pointer_move(self, current_ndc: Vec2f, project: ProjectFn) -> Optional[Move]:
        """Actualiza el gesto activo; si se resuelve un movimiento, se encola."""
        move = self.gesture.on_pointer_move(current_ndc, project)
        if move is not None:
            self.scheduler.queue(move)
        return move

    def on_pointer_up(self) -> None:
        self.gesture.on_pointer_up()

    # -------------------
    # Listeners del scheduler
    # -------------------
    def _on_commit(self, move: Move, indices: Sequence[int]) -> None:
        self.visuals.sync(self.store, indices)

    def _on_reset(self) -> None:
        self.visuals.sync(self.store)
