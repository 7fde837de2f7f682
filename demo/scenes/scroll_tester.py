# demo/scenes/scroll_tester.py
from __future__ import annotations
import logging
from typing import Optional
import pygame

from smoothscroll.settings import AppCfg, load_ui_defaults, build_theme_from_defaults
from smoothscroll.ui.anim import ease_exp
from smoothscroll.ui.draw_list import DrawList
from smoothscroll.ui.smooth_scroll import SmoothScroller
from smoothscroll.ui.style import Theme, compute_centered_rect
from smoothscroll.ui.widgets.scroll_panel import ScrollPanel

logger = logging.getLogger(__name__)

PAGE_FRAC = 0.9


class ScrollTesterScene:
    """
    One centered panel with a few hundred rows and a live readout of the
    scroller state (velocity, overscroll, offset, max, fps).
    """

    def __init__(self, screen: pygame.Surface, cfg: AppCfg, defaults_path: Optional[str] = None):
        self.screen = screen
        self.cfg = cfg

        defaults = load_ui_defaults(defaults_path) if defaults_path else {}
        self.theme: Theme = build_theme_from_defaults(defaults)
        self.scroller = SmoothScroller(cfg.scroll, self.theme.scrollbar)
        self.draw_list = DrawList()

        pc = cfg.panel
        rect = compute_centered_rect(screen, pc.width_frac, pc.height_frac)
        lines = [f"{pc.line_prefix} {i}" for i in range(1, pc.line_count + 1)]
        self.panel = ScrollPanel(rect, self.theme, self.scroller, title=cfg.window.title, lines=lines)
        self.panel.wheel_scale = -cfg.input.wheel_scale if cfg.input.invert_wheel else cfg.input.wheel_scale
        self._fps = float(cfg.fps)
        self._refresh_readout()
        logger.info("Scroll tester ready: %d rows, max offset %.0f px", pc.line_count, self.panel.scroll.max())

    # --- loop ---
    def handle_event(self, e: pygame.event.Event) -> bool:
        if e.type == pygame.VIDEORESIZE:
            self.on_resize()
            return False
        if e.type == pygame.KEYDOWN and e.key in (pygame.K_HOME, pygame.K_END, pygame.K_PAGEUP, pygame.K_PAGEDOWN):
            model = self.panel.scroll
            if e.key == pygame.K_HOME:
                model.to_top()
            elif e.key == pygame.K_END:
                model.to_bottom()
            else:
                step = model.viewport_h * PAGE_FRAC
                model.scroll(-step if e.key == pygame.K_PAGEUP else step)
            # a jump replaces whatever glide was running
            self.scroller.stop(self.panel.surface_id)
            return True
        return self.panel.handle_event(e)

    def on_resize(self) -> None:
        pc = self.cfg.panel
        self.panel.on_resize(compute_centered_rect(self.screen, pc.width_frac, pc.height_frac))

    def update(self, dt: float) -> None:
        if dt > 0:
            self._fps = ease_exp(self._fps, 1.0 / dt, 4.0, dt)
        self.panel.update(dt)
        self._refresh_readout()

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(self.cfg.window.bg_rgb)
        self.panel.draw(surface, self.draw_list)
        # scrollbar goes on top of everything
        self.draw_list.flush(surface)

    # --- helpers ---
    def _refresh_readout(self) -> None:
        st = self.scroller.peek(self.panel.surface_id)
        velocity = st.velocity if st else 0.0
        target = st.overscroll_target if st else 0.0
        visual = st.overscroll_visual if st else 0.0
        self.panel.set_header([
            f"Velocity: {velocity:.2f}",
            f"Overscroll: {target:.2f} (visual {visual:.2f})",
            f"Current Scroll: {self.panel.scroll.offset:.2f}",
            f"Scroll Max: {self.panel.scroll.max():.2f}",
            f"FPS: {self._fps:.1f}",
        ])
