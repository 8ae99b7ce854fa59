from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Iterable, List, Optional, Sequence

from cubie_sim.config import ANIM_RATE, QUARTER_TURN
from cubie_sim.core.cubie_store import CubieStore
from cubie_sim.core.move import Move
from cubie_sim.core.permutation import apply_move, layer_indices

logger = logging.getLogger(__name__)

FrameListener = Callable[[Sequence[int], str, float], None]
CommitListener = Callable[[Move, Sequence[int]], None]
ResetListener = Callable[[], None]


def ease_in_out_cubic(t: float) -> float:
    """Easing suave y monótono en [0, 1] con ease(0)=0 y ease(1)=1."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - ((-2 * t + 2) ** 3) / 2


class AnimationState:
    """Estado transitorio del movimiento en curso.

    Attributes:
        move: Movimiento que se está animando.
        indices: Cubies de la capa (fijados al iniciar, según la posición previa).
        progress: Fracción completada en [0, 1].
        prev_angle: Ángulo aplicado en el frame anterior (radianes).
    """

    def __init__(self, move: Move, indices: Sequence[int]) -> None:
        self.move: Move = move
        self.indices: tuple = tuple(indices)
        self.progress: float = 0.0
        self.prev_angle: float = 0.0

    @property
    def angle(self) -> float:
        return ease_in_out_cubic(self.progress) * QUARTER_TURN * self.move.direction


class MoveScheduler:
    """Cola FIFO de movimientos + animación de un movimiento a la vez.

    Se avanza con `tick(dt)` una vez por frame. Estados:
    - Idle: si hay movimientos en cola, toma el primero y pasa a Animating.
    - Animating: acumula progreso, entrega a los listeners de frame solo el
      ángulo incremental y, al llegar a 1, confirma el movimiento en el store.

    El store solo se modifica en el commit; la rotación visual intermedia es
    responsabilidad de quien escuche `frame_listeners`.
    """

    def __init__(self, store: CubieStore, rate: float = ANIM_RATE) -> None:
        if rate <= 0:
            raise ValueError("rate debe ser mayor que 0.")
        self.store: CubieStore = store
        self.rate: float = rate
        self._queue: Deque[Move] = deque()
        self._anim: Optional[AnimationState] = None

        self.frame_listeners: List[FrameListener] = []
        self.commit_listeners: List[CommitListener] = []
        self.reset_listeners: List[ResetListener] = []

    # --------------------------
    # Estado
    # --------------------------
    @property
    def animating(self) -> bool:
        return self._anim is not None

    @property
    def animation(self) -> Optional[AnimationState]:
        return self._anim

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def idle(self) -> bool:
        return self._anim is None and not self._queue

    def pending_moves(self) -> List[Move]:
        return list(self._queue)

    # --------------------------
    # Cola
    # --------------------------
    def queue(self, move: Move) -> None:
        """Agrega un movimiento al final de la cola.

        Raises:
            ValueError: Si `move` no es un `Move`.
        """
        if not isinstance(move, Move):
            raise ValueError(f"Movimiento inválido: {move!r}")
        self._queue.append(move)
        logger.debug("Encolado %s (pendientes=%d)", move, len(self._queue))

    def queue_many(self, moves: Iterable[Move]) -> None:
        moves = list(moves)
        for m in moves:
            if not isinstance(m, Move):
                raise ValueError(f"Movimiento inválido: {m!r}")
        for m in moves:
            self.queue(m)

    def reset(self) -> None:
        """Limpia la cola, descarta la animación en curso y vuelve al estado resuelto."""
        dropped = len(self._queue)
        self._queue.clear()
        if self._anim is not None:
            logger.info("Reset: se descarta la animación de %s", self._anim.move)
        self._anim = None
        self.store.reset()
        logger.info("Reset del cubo (%d movimientos descartados)", dropped)
        for cb in self.reset_listeners:
            cb()

    # --------------------------
    # Frame
    # --------------------------
    def tick(self, dt: float) -> Optional[Move]:
        """Avanza el scheduler un frame.

        Args:
            dt: Tiempo transcurrido desde el frame anterior.

        Returns:
            El movimiento confirmado en este frame, si alguno terminó.

        Raises:
            ValueError: Si `dt` es negativo.
        """
        if dt < 0:
            raise ValueError(f"dt no puede ser negativo: {dt}")

        if self._anim is None:
            if self._queue:
                self._start(self._queue.popleft())
            return None

        anim = self._anim
        anim.progress = min(1.0, anim.progress + dt * self.rate)

        angle = anim.angle
        delta = angle - anim.prev_angle
        anim.prev_angle = angle
        if delta != 0.0:
            for cb in self.frame_listeners:
                cb(anim.indices, anim.move.axis, delta)

        if anim.progress >= 1.0:
            return self._commit(anim)
        return None

    def _start(self, move: Move) -> None:
        indices = layer_indices(self.store.cubies, move)
        self._anim = AnimationState(move, indices)
        logger.debug("Inicia animación %s sobre %d cubies", move, len(indices))

    def _commit(self, anim: AnimationState) -> Move:
        self._anim = None
        self.store.replace(apply_move(self.store.cubies, anim.move))
        logger.debug("Commit %s", anim.move)
        for cb in self.commit_listeners:
            cb(anim.move, anim.indices)
        return anim.move
