from __future__ import annotations

import logging
from typing import Tuple

import pygame

from smoothscroll.settings import AppCfg, DEFAULTS_PATH

from demo.scenes.scroll_tester import ScrollTesterScene

logger = logging.getLogger(__name__)

WINDOWED = pygame.RESIZABLE | pygame.DOUBLEBUF


class App:
    """
    Window + frame loop around the scroll tester scene. The scene gets every
    event first; whatever it leaves alone may be an app hotkey.
    """

    def __init__(self, cfg: AppCfg, defaults_path: str = DEFAULTS_PATH):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(cfg.window.title)
        self._flags = WINDOWED
        self.screen = self._set_mode((int(cfg.window.width), int(cfg.window.height)))
        self.clock = pygame.time.Clock()
        self.running = True
        self.scene = ScrollTesterScene(self.screen, cfg, defaults_path)

    def run(self) -> None:
        logger.info("Running at %d fps cap", self.cfg.fps)
        while self.running:
            dt = self.clock.tick(self.cfg.fps) / 1000.0
            for e in pygame.event.get():
                self.on_event(e)
                if not self.running:
                    break
            self.step(dt)
            pygame.display.flip()
        pygame.quit()

    def on_event(self, e: pygame.event.Event) -> None:
        if e.type == pygame.QUIT:
            self.running = False
            return
        if e.type == pygame.VIDEORESIZE:
            # new surface first, the scene re-lays out against it
            self._set_mode((max(1, int(e.w)), max(1, int(e.h))))
            self.scene.handle_event(e)
            return
        if self.scene.handle_event(e) or e.type != pygame.KEYDOWN:
            return
        if e.key == pygame.K_F11:
            self._toggle_fullscreen()
        elif e.key == pygame.K_ESCAPE or (e.key == pygame.K_q and e.mod & pygame.KMOD_CTRL):
            self.running = False

    def step(self, dt: float) -> None:
        self.scene.update(dt)
        self.scene.draw(self.screen)

    def _set_mode(self, size: Tuple[int, int], flags: int | None = None) -> pygame.Surface:
        if flags is not None:
            self._flags = flags
        self.screen = pygame.display.set_mode(size, flags=self._flags)
        if hasattr(self, "scene"):
            self.scene.screen = self.screen
        return self.screen

    def _toggle_fullscreen(self) -> None:
        try:
            pygame.display.toggle_fullscreen()
        except pygame.error:
            logger.debug("toggle_fullscreen unsupported; recreating the window")
            if self._flags & pygame.FULLSCREEN:
                self._set_mode(self.screen.get_size(), WINDOWED | pygame.SCALED)
            else:
                self._set_mode((0, 0), pygame.FULLSCREEN | pygame.SCALED | pygame.DOUBLEBUF)
        self.scene.on_resize()
