from cubie_sim.core.cubie_store import Cubie, CubieStore, solved_cubies
from cubie_sim.core.move import Move
from cubie_sim.core.permutation import apply_move, apply_moves

__all__ = ["Cubie", "CubieStore", "Move", "apply_move", "apply_moves", "solved_cubies"]
