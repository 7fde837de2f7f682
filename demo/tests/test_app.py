import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame

from smoothscroll.app import App
from smoothscroll.settings import AppCfg, WindowCfg

DT = 1 / 60


def key(k, mod=0):
    return pygame.event.Event(pygame.KEYDOWN, {"key": k, "mod": mod, "unicode": "", "scancode": 0})


class TestApp(unittest.TestCase):
    def setUp(self):
        self.app = App(AppCfg(window=WindowCfg(width=640, height=480)), defaults_path="")

    def tearDown(self):
        pygame.display.quit()

    def test_window_matches_config(self):
        self.assertEqual(self.app.screen.get_size(), (640, 480))
        self.assertIs(self.app.scene.screen, self.app.screen)

    def test_quit_and_hotkeys_stop_the_loop(self):
        self.app.on_event(pygame.event.Event(pygame.QUIT))
        self.assertFalse(self.app.running)

        self.app.running = True
        self.app.on_event(key(pygame.K_q))
        self.assertTrue(self.app.running)
        self.app.on_event(key(pygame.K_q, pygame.KMOD_LCTRL))
        self.assertFalse(self.app.running)

        self.app.running = True
        self.app.on_event(key(pygame.K_ESCAPE))
        self.assertFalse(self.app.running)

    def test_resize_hands_new_surface_to_scene(self):
        self.app.on_event(pygame.event.Event(pygame.VIDEORESIZE, {"w": 800, "h": 600, "size": (800, 600)}))
        self.assertEqual(self.app.screen.get_size(), (800, 600))
        self.assertIs(self.app.scene.screen, self.app.screen)
        self.assertTrue(self.app.screen.get_rect().contains(self.app.scene.panel.rect))

    def test_step_runs_one_frame(self):
        self.app.step(DT)
        self.assertEqual(len(self.app.scene.draw_list), 0)
        self.assertEqual(tuple(self.app.screen.get_at((2, 2)))[:3], self.app.cfg.window.bg_rgb)


if __name__ == "__main__":
    unittest.main()
