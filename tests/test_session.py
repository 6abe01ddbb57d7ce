import unittest

from falling_blocks.game import (
    Action,
    FallingBlockGame,
    GameConfig,
    GameSession,
    PieceType,
    SessionConfig,
)

from test_core import force_piece


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.now += seconds


class GameSessionTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.game = FallingBlockGame(GameConfig(random_seed=7))
        self.session = GameSession(self.game, clock=self.clock)
        self.session.start()

    def test_gravity_every_32_ticks(self):
        piece = force_piece(self.game, PieceType.O)
        for _ in range(30):
            self.session.tick()
        self.assertEqual(piece.y, 0)
        self.session.tick()
        self.assertEqual(piece.y, 1)
        for _ in range(31):
            self.session.tick()
        self.assertEqual(piece.y, 1)
        self.session.tick()
        self.assertEqual(piece.y, 2)

    def test_command_applied_before_gravity(self):
        piece = force_piece(self.game, PieceType.O)
        for _ in range(30):
            self.session.tick()
        snapshot = self.session.tick(Action.LEFT)
        self.assertEqual((piece.x, piece.y), (3, 1))
        self.assertEqual(snapshot.board[2, 4], 6)

    def test_elapsed_seconds(self):
        self.assertEqual(self.session.tick().elapsed, 0)
        self.clock.now += 0.9
        self.assertEqual(self.session.tick().elapsed, 0)
        self.clock.now += 0.2
        self.assertEqual(self.session.tick().elapsed, 1)
        self.clock.now += 5
        self.assertEqual(self.session.tick().elapsed, 6)

    def test_elapsed_never_decreases(self):
        self.clock.now += 3
        self.session.tick()
        self.clock.now -= 2
        self.assertEqual(self.session.tick().elapsed, 3)

    def test_snapshot_is_read_only_copy(self):
        snapshot = self.session.tick()
        with self.assertRaises(ValueError):
            snapshot.board[0, 1] = 3
        self.assertEqual(snapshot.next_pieces, self.game.next_pieces())
        self.assertEqual(snapshot.score, 0)
        self.assertFalse(snapshot.game_over)

    def test_run_until_game_over(self):
        clock = FakeClock()
        game = FallingBlockGame(GameConfig(random_seed=3))
        session = GameSession(game, SessionConfig(ticks_per_drop=1, tick_seconds=0.25), clock=clock)
        frames = []
        result = session.run(lambda: None, sleep=clock.sleep, on_frame=frames.append)

        self.assertTrue(game.game_over)
        self.assertTrue(frames[-1].game_over)
        self.assertFalse(any(f.game_over for f in frames[:-1]))
        self.assertEqual(result.score, game.score)
        self.assertEqual(result.ticks, session.ticks)
        self.assertEqual(result.elapsed, int((result.ticks - 1) * 0.25))
        elapsed = [f.elapsed for f in frames]
        self.assertEqual(elapsed, sorted(elapsed))

    def test_tick_after_game_over_does_nothing(self):
        game = FallingBlockGame(GameConfig(random_seed=3))
        session = GameSession(game, SessionConfig(ticks_per_drop=1), clock=self.clock)
        session.run(lambda: None, sleep=self.clock.sleep)
        ticks = session.ticks
        snapshot = session.tick(Action.LEFT)
        self.assertTrue(snapshot.game_over)
        self.assertEqual(session.ticks, ticks)

    def test_invalid_drop_interval(self):
        with self.assertRaises(ValueError):
            GameSession(self.game, SessionConfig(ticks_per_drop=0))


if __name__ == "__main__":
    unittest.main()
