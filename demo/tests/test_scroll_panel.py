import os
import unittest
from unittest import mock

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame

from demo.scenes.scroll_tester import ScrollTesterScene
from smoothscroll.settings import AppCfg, PanelCfg
from smoothscroll.ui.draw_list import DrawList
from smoothscroll.ui.smooth_scroll import SmoothScroller
from smoothscroll.ui.style import Theme
from smoothscroll.ui.widgets.scroll_panel import ScrollPanel

DT = 1 / 60


def wheel_event(y: float) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEWHEEL, {"x": 0, "y": int(y), "precise_x": 0.0, "precise_y": float(y)})


class TestScrollPanel(unittest.TestCase):
    def setUp(self):
        pygame.font.init()
        self.scroller = SmoothScroller()
        self.panel = ScrollPanel(pygame.Rect(50, 50, 400, 500), Theme(), self.scroller, title="Panel",
                                 lines=[f"Row {i}" for i in range(200)])

    def test_geometry(self):
        p = self.panel
        self.assertEqual(p.surface_id, "Panel")
        self.assertEqual(p.content_height, 200 * p.line_height)
        self.assertTrue(p.rect.contains(p.scroll.inner_rect))
        self.assertGreater(p.scroll.max(), 0.0)
        self.assertTrue(p.is_at_top)

    def test_header_shrinks_viewport(self):
        before = self.panel.viewport_height
        self.panel.set_header(["a", "b", "c"])
        self.assertLess(self.panel.viewport_height, before)

    def pointer_at(self, pos):
        patches = (mock.patch("pygame.display.get_init", return_value=True),
                   mock.patch("pygame.mouse.get_pos", return_value=pos))
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def test_wheel_needs_hover(self):
        self.pointer_at((0, 0))
        self.assertFalse(self.panel.handle_event(wheel_event(-1)))
        self.panel.update(DT)
        self.assertEqual(self.panel.scroll.offset, 0.0)

        moved = pygame.event.Event(pygame.MOUSEMOTION, {"pos": (100, 300), "rel": (0, 0), "buttons": (0, 0, 0)})
        self.assertFalse(self.panel.handle_event(moved))
        self.assertTrue(self.panel.handle_event(wheel_event(-1)))
        self.panel.update(DT)
        self.assertGreater(self.panel.scroll.offset, 0.0)

    def test_wheel_before_any_motion_uses_pointer_position(self):
        self.pointer_at((100, 300))
        self.assertTrue(self.panel.handle_event(wheel_event(-1)))
        self.panel.update(DT)
        self.assertGreater(self.panel.scroll.offset, 0.0)

    def test_wheel_is_consumed_once(self):
        self.panel.hover((100, 300))
        self.panel.add_wheel(-1.0)
        self.panel.update(DT)
        v1 = self.scroller.state(self.panel.surface_id).velocity
        self.panel.update(DT)
        v2 = self.scroller.state(self.panel.surface_id).velocity
        self.assertLess(abs(v2), abs(v1))

    def test_wheel_scale(self):
        self.panel.wheel_scale = -2.0
        self.panel.add_wheel(1.0)
        self.panel.update(DT)
        self.assertLess(self.scroller.state(self.panel.surface_id).velocity, -self.scroller.params.scroll_multiplier)

    def test_bounce_shows_as_overscroll(self):
        self.panel.add_wheel(1.0)
        self.panel.update(DT)
        self.assertEqual(self.panel.scroll.offset, 0.0)
        self.assertGreater(self.panel.overscroll, 0.0)

    def test_draw_paints_body_and_queues_scrollbar(self):
        screen = pygame.Surface((600, 700))
        screen.fill((0, 0, 0))
        dl = DrawList()
        self.panel.update(DT)
        self.panel.draw(screen, dl)
        self.assertEqual(len(dl), 2)
        # right of the short row labels, left of the scrollbar
        self.assertEqual(tuple(screen.get_at((400, 300)))[:3], Theme().box_bg)
        dl.flush(screen)
        self.assertEqual(len(dl), 0)

    def test_resize_keeps_relative_position(self):
        p = self.panel
        p.scroll.offset = p.scroll.max() / 2
        p.on_resize(pygame.Rect(0, 0, 400, 300))
        self.assertAlmostEqual(p.scroll.offset, p.scroll.max() / 2, places=3)

    def test_shrinking_content_is_clamped_by_scroller(self):
        p = self.panel
        p.scroll.to_bottom()
        p.set_lines(["only", "a", "few"] * 20)
        p.update(DT)
        self.assertLessEqual(p.scroll.offset, p.scroll.max())


class TestScrollTesterScene(unittest.TestCase):
    def setUp(self):
        pygame.font.init()
        self.screen = pygame.Surface((1000, 800))
        self.scene = ScrollTesterScene(self.screen, AppCfg(panel=PanelCfg(line_count=120)))

    def key(self, k):
        return pygame.event.Event(pygame.KEYDOWN, {"key": k, "mod": 0, "unicode": "", "scancode": 0})

    def test_readout_tracks_scroll_state(self):
        self.scene.panel.add_wheel(-1.0)
        self.scene.update(DT)
        header = self.scene.panel._header
        self.assertTrue(header[0].startswith("Velocity: -"))
        self.assertTrue(any(h.startswith("Scroll Max:") for h in header))

    def test_home_end_and_paging(self):
        model = self.scene.panel.scroll
        self.assertTrue(self.scene.handle_event(self.key(pygame.K_END)))
        self.assertEqual(model.offset, model.max())
        self.assertTrue(self.scene.handle_event(self.key(pygame.K_PAGEUP)))
        self.assertLess(model.offset, model.max())
        self.assertTrue(self.scene.handle_event(self.key(pygame.K_HOME)))
        self.assertEqual(model.offset, 0.0)

    def test_jump_keys_cancel_running_glide(self):
        model = self.scene.panel.scroll
        self.scene.panel.add_wheel(-1.0)
        self.scene.update(DT)
        self.assertGreater(model.offset, 0.0)

        self.assertTrue(self.scene.handle_event(self.key(pygame.K_HOME)))
        self.scene.update(DT)
        self.assertEqual(model.offset, 0.0)
        self.assertEqual(self.scene.scroller.state(self.scene.panel.surface_id).velocity, 0.0)

        self.scene.panel.add_wheel(-1.0)
        self.scene.update(DT)
        self.assertTrue(self.scene.handle_event(self.key(pygame.K_PAGEDOWN)))
        paged = model.offset
        self.scene.update(DT)
        self.assertEqual(model.offset, paged)

    def test_frame_draws_panel_and_scrollbar(self):
        self.scene.update(DT)
        self.scene.draw(self.screen)
        self.assertEqual(len(self.scene.draw_list), 0)
        self.assertEqual(tuple(self.screen.get_at((5, 5)))[:3], self.scene.cfg.window.bg_rgb)


if __name__ == "__main__":
    unittest.main()
