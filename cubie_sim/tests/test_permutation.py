import random
import unittest

from cubie_sim.config import SPACING
from cubie_sim.core import CubieStore, Move, apply_move, apply_moves, solved_cubies
from cubie_sim.core.cubie_store import grid_coords
from cubie_sim.core.move import AXES, DIRECTIONS, LAYERS

ALL_MOVES = [Move(a, l, d) for a in AXES for l in LAYERS for d in DIRECTIONS]
GRID = {(x, y, z) for x in LAYERS for y in LAYERS for z in LAYERS}


def random_state(seed, n=40):
    rng = random.Random(seed)
    moves = [rng.choice(ALL_MOVES) for _ in range(n)]
    return apply_moves(solved_cubies(), moves)


class TestSolvedStore(unittest.TestCase):
    def test_starts_with_27_cubies_on_grid(self):
        s = CubieStore()
        self.assertEqual(len(s), 27)
        self.assertEqual({grid_coords(c.position) for c in s.cubies}, GRID)

    def test_sticker_counts_by_kind(self):
        counts = sorted(c.sticker_count() for c in solved_cubies())
        # 1 núcleo, 6 centros, 12 aristas, 8 esquinas
        self.assertEqual(counts, [0] + [1] * 6 + [2] * 12 + [3] * 8)

    def test_solved_colors_follow_coordinates(self):
        for c in solved_cubies():
            x, y, z = grid_coords(c.position)
            self.assertEqual(c.colors[0] == "R", x == 1)
            self.assertEqual(c.colors[1] == "L", x == -1)
            self.assertEqual(c.colors[2] == "U", y == 1)
            self.assertEqual(c.colors[3] == "D", y == -1)
            self.assertEqual(c.colors[4] == "F", z == 1)
            self.assertEqual(c.colors[5] == "B", z == -1)

    def test_replace_rejects_wrong_size(self):
        s = CubieStore()
        with self.assertRaises(ValueError):
            s.replace(s.cubies[:26])


class TestApplyMove(unittest.TestCase):
    def test_x_face_turn_scenario(self):
        before = solved_cubies()
        after = apply_move(before, Move("x", 1, 1))

        moved = 0
        for b, a in zip(before, after):
            bx, by, bz = b.position
            if abs(bx - SPACING) < 1e-9:
                moved += 1
                self.assertEqual(a.position, (bx, round(-bz, 2) + 0.0, by))
                c = b.colors
                self.assertEqual(a.colors, (c[0], c[1], c[5], c[4], c[2], c[3]))
            else:
                self.assertEqual(a, b)
        self.assertEqual(moved, 9)

    def test_corner_value_after_x_turn(self):
        after = apply_move(solved_cubies(), Move("x", 1, 1))
        # el cubie 26 empieza en (1, 1, 1): blanco arriba pasa al frente
        self.assertEqual(after[26].position, (1.05, -1.05, 1.05))
        self.assertEqual(after[26].colors, ("R", None, None, "F", "U", None))

    def test_y_and_z_formulas(self):
        c = solved_cubies()[26]  # (1, 1, 1)
        self.assertEqual(apply_move([c], Move("y", 1, 1))[0].position, (1.05, 1.05, -1.05))
        self.assertEqual(apply_move([c], Move("y", 1, -1))[0].position, (-1.05, 1.05, 1.05))
        self.assertEqual(apply_move([c], Move("z", 1, 1))[0].position, (-1.05, 1.05, 1.05))
        self.assertEqual(apply_move([c], Move("z", 1, -1))[0].position, (1.05, -1.05, 1.05))

    def test_pure_function(self):
        before = solved_cubies()
        snapshot = list(before)
        apply_move(before, Move("y", 0, -1))
        self.assertEqual(before, snapshot)

    def test_middle_layer_moves_nine(self):
        before = solved_cubies()
        after = apply_move(before, Move("z", 0, 1))
        changed = sum(1 for a, b in zip(after, before) if a != b)
        # el núcleo (sin stickers, en el origen) queda igual
        self.assertEqual(changed, 8)


class TestInvariants(unittest.TestCase):
    def test_move_then_inverse_is_identity(self):
        for seed in range(5):
            state = random_state(seed)
            for m in ALL_MOVES:
                self.assertEqual(apply_move(apply_move(state, m), m.inverse()), state)

    def test_four_quarter_turns_is_identity(self):
        for seed in range(3):
            state = random_state(seed)
            for m in ALL_MOVES:
                self.assertEqual(apply_moves(state, [m] * 4), state)

    def test_positions_stay_a_permutation_of_the_grid(self):
        rng = random.Random(7)
        state = solved_cubies()
        for _ in range(300):
            state = apply_move(state, rng.choice(ALL_MOVES))
            cells = [grid_coords(c.position) for c in state]
            self.assertEqual(len(set(cells)), 27)
            self.assertEqual(set(cells), GRID)
            for c in state:
                for v in c.position:
                    self.assertIn(v, (-SPACING, 0.0, SPACING))

    def test_sticker_sets_never_change(self):
        rng = random.Random(11)
        solved = solved_cubies()
        expected = [sorted(x for x in c.colors if x) for c in solved]
        state = solved
        for _ in range(300):
            state = apply_move(state, rng.choice(ALL_MOVES))
        self.assertEqual([sorted(x for x in c.colors if x) for c in state], expected)

    def test_scramble_then_reverse_inverses_returns_to_solved(self):
        rng = random.Random(3)
        moves = [rng.choice(ALL_MOVES) for _ in range(20)]
        state = apply_moves(solved_cubies(), moves)
        self.assertNotEqual(state, solved_cubies())
        state = apply_moves(state, [m.inverse() for m in reversed(moves)])
        self.assertEqual(state, solved_cubies())


if __name__ == "__main__":
    unittest.main()
