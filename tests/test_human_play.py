import os
import unittest
from unittest import mock

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from falling_blocks.game import Action
from falling_blocks.visualization import human_play


def key_event(key, mod=0):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod)


class PollActionTests(unittest.TestCase):
    def setUp(self):
        pygame.display.init()
        pygame.display.set_mode((32, 32))
        pygame.event.clear()

    def tearDown(self):
        pygame.quit()

    def test_no_events_means_no_action(self):
        self.assertIsNone(human_play.poll_action())

    def test_first_mapped_key_wins_and_rest_are_dropped(self):
        pygame.event.post(key_event(pygame.K_q))
        pygame.event.post(key_event(pygame.K_h))
        pygame.event.post(key_event(pygame.K_l))
        self.assertEqual(human_play.poll_action(), Action.LEFT)
        self.assertIsNone(human_play.poll_action())

    def test_ctrl_keys(self):
        pygame.event.post(key_event(pygame.K_n, pygame.KMOD_LCTRL))
        self.assertEqual(human_play.poll_action(), Action.SOFT_DROP)

    def test_window_close_interrupts(self):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        with self.assertRaises(KeyboardInterrupt):
            human_play.poll_action()

    def test_escape_interrupts(self):
        pygame.event.post(key_event(pygame.K_h))
        pygame.event.post(key_event(pygame.K_ESCAPE))
        with self.assertRaises(KeyboardInterrupt):
            human_play.poll_action()


class RunCleanupTests(unittest.TestCase):
    def tearDown(self):
        pygame.quit()

    def test_interrupt_releases_display(self):
        frames = []

        def interrupted():
            frames.append(pygame.display.get_init())
            raise KeyboardInterrupt

        with mock.patch.object(human_play, "poll_action", interrupted):
            result = human_play.run(seed=1, cell_size=8)

        self.assertIsNone(result)
        self.assertEqual(frames, [True])
        self.assertFalse(pygame.display.get_init())

    def test_unexpected_error_still_releases_display(self):
        def broken():
            raise RuntimeError("input device gone")

        with mock.patch.object(human_play, "poll_action", broken):
            with self.assertRaises(RuntimeError):
                human_play.run(seed=1, cell_size=8)
        self.assertFalse(pygame.display.get_init())


if __name__ == "__main__":
    unittest.main()
