import math
import unittest

from cubie_sim.anim.scheduler import MoveScheduler, ease_in_out_cubic
from cubie_sim.app.controller import CubeController
from cubie_sim.core import CubieStore, Move, apply_moves, solved_cubies
from cubie_sim.core.permutation import layer_indices

DT = 0.0625  # 4 frames de avance por cuarto de vuelta con rate=4


class TestEasing(unittest.TestCase):
    def test_endpoints(self):
        self.assertEqual(ease_in_out_cubic(0.0), 0.0)
        self.assertEqual(ease_in_out_cubic(1.0), 1.0)
        self.assertAlmostEqual(ease_in_out_cubic(0.5), 0.5)

    def test_monotonic(self):
        values = [ease_in_out_cubic(i / 100) for i in range(101)]
        self.assertEqual(values, sorted(values))


class TestMoveScheduler(unittest.TestCase):
    def setUp(self):
        self.store = CubieStore()
        self.sched = MoveScheduler(self.store)
        self.committed = []
        self.sched.commit_listeners.append(lambda m, idx: self.committed.append(m))

    def test_idle_tick_does_nothing(self):
        self.assertIsNone(self.sched.tick(DT))
        self.assertTrue(self.sched.idle)
        self.assertEqual(self.store.cubies, solved_cubies())

    def test_single_move_timeline(self):
        m = Move("x", 1, 1)
        self.sched.queue(m)
        self.assertEqual(self.sched.pending, 1)

        # frame de inicio: toma el movimiento sin avanzar
        self.assertIsNone(self.sched.tick(DT))
        self.assertTrue(self.sched.animating)
        self.assertEqual(self.sched.pending, 0)
        self.assertEqual(self.sched.animation.progress, 0.0)

        for _ in range(3):
            self.assertIsNone(self.sched.tick(DT))
            # el store no cambia durante la animación
            self.assertEqual(self.store.cubies, solved_cubies())

        self.assertEqual(self.sched.tick(DT), m)
        self.assertFalse(self.sched.animating)
        self.assertEqual(self.store.cubies, apply_moves(solved_cubies(), [m]))

    def test_fifo_commit_order(self):
        moves = [Move("x", 1, 1), Move("y", -1, -1), Move("z", 0, 1)]
        for m in moves:
            self.sched.queue(m)

        for _ in range(14):
            self.sched.tick(DT)
        self.assertEqual(self.committed, moves[:2])

        self.sched.tick(DT)
        self.assertEqual(self.committed, moves)
        self.assertTrue(self.sched.idle)
        self.assertEqual(self.store.cubies, apply_moves(solved_cubies(), moves))

    def test_progress_is_clamped(self):
        self.sched.queue(Move("y", 0, 1))
        self.sched.tick(DT)
        self.assertEqual(self.sched.tick(10.0), Move("y", 0, 1))

    def test_incremental_angles_sum_to_quarter_turn(self):
        deltas = []
        self.sched.frame_listeners.append(lambda idx, axis, d: deltas.append((axis, d)))
        self.sched.queue(Move("z", -1, -1))
        for _ in range(20):
            self.sched.tick(0.03)
        self.assertTrue(all(axis == "z" for axis, _ in deltas))
        self.assertAlmostEqual(sum(d for _, d in deltas), -math.pi / 2)

    def test_layer_selection_fixed_at_start(self):
        frames = []
        self.sched.frame_listeners.append(lambda idx, axis, d: frames.append(tuple(idx)))
        m = Move("x", -1, 1)
        expected = tuple(layer_indices(self.store.cubies, m))
        self.sched.queue(m)
        for _ in range(5):
            self.sched.tick(DT)
        self.assertEqual(len(expected), 9)
        self.assertTrue(frames)
        self.assertTrue(all(f == expected for f in frames))

    def test_zero_dt_frame(self):
        self.sched.queue(Move("x", 0, 1))
        self.sched.tick(DT)
        self.sched.tick(0.0)
        self.assertEqual(self.sched.animation.progress, 0.0)

    def test_negative_dt_rejected(self):
        with self.assertRaises(ValueError):
            self.sched.tick(-0.1)

    def test_queue_rejects_non_moves(self):
        with self.assertRaises(ValueError):
            self.sched.queue(("x", 1, 1))
        with self.assertRaises(ValueError):
            self.sched.queue_many([Move("x", 1, 1), "R"])
        self.assertEqual(self.sched.pending, 0)

    def test_reset_discards_in_flight_move(self):
        resets = []
        self.sched.reset_listeners.append(lambda: resets.append(True))
        for m in (Move("x", 1, 1), Move("y", 1, 1), Move("z", 1, 1)):
            self.sched.queue(m)
        for _ in range(7):
            self.sched.tick(DT)
        self.assertEqual(len(self.committed), 1)
        self.assertTrue(self.sched.animating)

        self.sched.reset()
        self.assertEqual(resets, [True])
        self.assertTrue(self.sched.idle)
        self.assertEqual(self.store.cubies, solved_cubies())

        for _ in range(20):
            self.sched.tick(DT)
        self.assertEqual(len(self.committed), 1)
        self.assertEqual(self.store.cubies, solved_cubies())


class TestController(unittest.TestCase):
    def test_invalid_command_not_queued(self):
        c = CubeController()
        with self.assertRaises(ValueError):
            c.queue_move("x", 3, 1)
        with self.assertRaises(ValueError):
            c.queue_sequence("R Z")
        self.assertEqual(c.scheduler.pending, 0)

    def test_visuals_follow_animation_and_resync(self):
        c = CubeController()
        c.queue_move("y", 1, 1)
        c.tick(DT)
        c.tick(DT)
        c.tick(DT)

        # a mitad de camino: la capa se movió visualmente, el store no
        self.assertEqual(c.store.cubies, solved_cubies())
        moved = [
            i for i in range(27) if c.visuals.positions[i] != c.store[i].position
        ]
        self.assertEqual(len(moved), 8)  # el centro U gira sobre su eje

        c.tick(DT)
        c.tick(DT)
        self.assertTrue(c.scheduler.idle)
        for i in range(27):
            self.assertEqual(c.visuals.positions[i], c.store[i].position)
            self.assertEqual(
                c.visuals.rotations[i],
                ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)),
            )

    def test_visual_rotation_matches_logical_result(self):
        c = CubeController()
        c.queue_move("x", 1, 1)
        # posición visual en el último frame, antes del re-sync del commit
        seen = {}

        def capture(idx, axis, d):
            for i in idx:
                seen[i] = c.visuals.positions[i]

        c.scheduler.frame_listeners.append(capture)
        for _ in range(5):
            c.tick(DT)
        for i, p in seen.items():
            for a, b in zip(p, c.store[i].position):
                self.assertAlmostEqual(a, b, places=6)

    def test_scramble_returns_enqueued_moves(self):
        c = CubeController()
        moves = c.scramble(seed=9)
        self.assertEqual(len(moves), 20)
        self.assertEqual(c.scheduler.pending_moves(), moves)

    def test_scramble_then_inverses_through_scheduler(self):
        c = CubeController()
        moves = c.scramble(5, seed=2)
        c.queue_moves([m.inverse() for m in reversed(moves)])
        for _ in range(10 * 5):
            c.tick(DT)
        self.assertTrue(c.scheduler.idle)
        self.assertEqual(c.store.cubies, solved_cubies())

    def test_reset_restores_solved(self):
        c = CubeController()
        c.queue_sequence("R U F")
        for _ in range(8):
            c.tick(DT)
        c.reset()
        for _ in range(5):
            c.tick(DT)
        self.assertEqual(c.store.cubies, solved_cubies())
        self.assertEqual(c.visuals.positions, [x.position for x in solved_cubies()])


if __name__ == "__main__":
    unittest.main()
