"""
smoothscroll/ui/widgets/scroll_panel.py

A fixed window with a title bar, a pinned header (e.g. a debug readout) and a
list of text rows that scroll through a SmoothScroller.

Per frame:
    panel.handle_event(e)        # wheel + hover
    panel.update(dt)             # scroll physics
    panel.draw(surface, draw)    # body now, scrollbar queued into `draw`
    draw.flush(surface)          # by the owner, once all panels are drawn

The rows are displaced by the scroller's overscroll so the bounce is visible,
while the model offset itself never leaves [0, max].
"""

from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Sequence, Tuple
import pygame

from smoothscroll.ui.draw_list import DrawSurface
from smoothscroll.ui.scroll_model import ScrollModel
from smoothscroll.ui.smooth_scroll import SmoothScroller
from smoothscroll.ui.style import Theme

_MAX_CACHED_ROWS = 512


class ScrollPanel:
    __slots__ = (
        "rect",
        "theme",
        "title",
        "scroller",
        "scroll",
        "wheel_scale",
        "font",
        "_lines",
        "_header",
        "_row_cache",
        "_wheel",
        "_hovered",
        "_mouse_pos",
        "_last_dt",
    )

    def __init__(self, rect: pygame.Rect, theme: Theme, scroller: SmoothScroller, title: str = "",
                 lines: Optional[Sequence[str]] = None, surface_id: Optional[Hashable] = None):
        """
        - Rect - screen-space bounds of the whole panel (title bar included)
        - Scroller - shared SmoothScroller; this panel registers under `surface_id`
        - Surface_id - defaults to the title, or the object id when untitled
        """
        if not pygame.font.get_init():
            pygame.font.init()
        self.rect = rect.copy()
        self.theme = theme
        self.title = title
        self.scroller = scroller
        self.wheel_scale: float = 1.0
        self.font = pygame.font.Font(theme.font_path, theme.font_size)

        self._lines: List[str] = list(lines or [])
        self._header: List[str] = []
        self._row_cache: Dict[Tuple[str, Tuple[int, int, int]], pygame.Surface] = {}
        self._wheel: float = 0.0
        self._hovered = False
        self._mouse_pos: Optional[Tuple[int, int]] = None
        self._last_dt: float = 0.0

        sid = surface_id if surface_id is not None else (title or id(self))
        self.scroll = ScrollModel(surface_id=sid)
        self._sync_scroll_metrics()

    # ---------- content ----------
    def set_lines(self, lines: Sequence[str]) -> None:
        self._lines = list(lines)
        self._sync_scroll_metrics()

    def set_header(self, lines: Sequence[str]) -> None:
        """ Pinned rows above the scrolling area; changing the count changes the viewport. """
        self._header = list(lines)
        self._sync_scroll_metrics()

    def set_theme(self, theme: Theme) -> None:
        self.theme = theme
        self.font = pygame.font.Font(theme.font_path, theme.font_size)
        self._row_cache.clear()
        self._sync_scroll_metrics()

    # ---------- input ----------
    def handle_event(self, e: pygame.event.Event) -> bool:
        if e.type == pygame.MOUSEMOTION:
            self.hover(e.pos)
            return False
        if e.type != pygame.MOUSEWHEEL:
            return False
        if self._mouse_pos is None and pygame.display.get_init():
            # no motion yet; the pointer may already sit over the panel
            self.hover(pygame.mouse.get_pos())
        if self._hovered:
            self.add_wheel(float(getattr(e, "precise_y", e.y)))
            return True
        return False

    def hover(self, pos: Tuple[int, int]) -> None:
        self._mouse_pos = (int(pos[0]), int(pos[1]))
        self._hovered = self.rect.collidepoint(self._mouse_pos)

    def add_wheel(self, notches: float) -> None:
        """ Queue wheel input for the next update(); positive scrolls up. """
        self._wheel += notches * self.wheel_scale

    # ---------- lifecycle ----------
    def on_resize(self, new_rect: pygame.Rect) -> None:
        """ Keep the same relative scroll position across a resize. """
        old_max = max(1e-6, self.scroll.max())
        ratio = self.scroll.offset / old_max
        self.rect = new_rect.copy()
        self._sync_scroll_metrics()
        self.scroll.offset = self.scroll.max() * ratio
        self._row_cache.clear()

    def update(self, dt: float) -> None:
        """ Feed this frame's wheel input and dt to the scroller. """
        wheel, self._wheel = self._wheel, 0.0
        self._sync_scroll_metrics()
        self.scroller.update(self.scroll, wheel, dt)
        self._last_dt = dt

    # ---------- properties ----------
    @property
    def surface_id(self) -> Hashable:
        return self.scroll.surface_id

    @property
    def line_height(self) -> int:
        return self.font.get_linesize() + self.theme.line_spacing

    @property
    def content_height(self) -> int:
        return len(self._lines) * self.line_height

    @property
    def viewport_height(self) -> int:
        return self.scroll.viewport_h

    @property
    def is_at_top(self) -> bool:
        return self.scroll.offset <= 1e-3

    @property
    def is_at_bottom(self) -> bool:
        return (self.scroll.max() - self.scroll.offset) <= 1e-3

    @property
    def overscroll(self) -> float:
        st = self.scroller.peek(self.surface_id)
        return st.overscroll_visual if st else 0.0

    # ---------- drawing ----------
    def draw(self, surface: pygame.Surface, draw: DrawSurface) -> None:
        """ Draw the panel body onto `surface` and queue the scrollbar into `draw`. """
        th = self.theme
        if self.rect.w <= 0 or self.rect.h <= 0:
            return

        layer = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        full = pygame.Rect(0, 0, self.rect.w, self.rect.h)
        pygame.draw.rect(layer, th.box_bg, full, border_radius=th.border_radius)

        # title bar
        bar = pygame.Rect(0, 0, self.rect.w, min(th.title_bar_h, self.rect.h))
        pygame.draw.rect(layer, th.title_bg, bar, border_top_left_radius=th.border_radius,
                         border_top_right_radius=th.border_radius)
        if self.title:
            title = self._row(self.title, th.text_rgb)
            layer.blit(title, (th.padding[3], bar.centery - title.get_height() // 2))

        # pinned header
        t, r, b, l = th.padding
        y = bar.bottom + t
        for text in self._header:
            layer.blit(self._row(text, th.dim_rgb), (l, y))
            y += self.line_height
        if self._header:
            pygame.draw.line(layer, th.box_border, (l, y), (self.rect.w - r, y))

        # rows, displaced by the overscroll bounce
        viewport = self.scroll.inner_rect.move(-self.rect.x, -self.rect.y)
        prev_clip = layer.get_clip()
        layer.set_clip(viewport)
        lh = self.line_height
        top = self.scroll.offset - self.overscroll
        first = max(0, int(top // lh))
        last = min(len(self._lines), int((top + viewport.h) // lh) + 1)
        for i in range(first, last):
            layer.blit(self._row(self._lines[i], th.text_rgb), (viewport.x, viewport.y + int(round(i * lh - top))))
        layer.set_clip(prev_clip)

        pygame.draw.rect(layer, th.box_border, full, width=1, border_radius=th.border_radius)
        surface.blit(layer, self.rect.topleft)

        self.scroller.render(self.scroll, draw, self._last_dt, self._mouse_pos)

    # ---------- helpers ----------
    def _sync_scroll_metrics(self) -> None:
        """ Push current geometry/content size into the ScrollModel. """
        t, r, b, l = self.theme.padding
        header_h = len(self._header) * self.line_height + (t if self._header else 0)
        top = self.rect.y + min(self.theme.title_bar_h, self.rect.h) + t + header_h
        right = self.rect.right - r - self.scroller.style.width - self.scroller.style.margin
        inner = pygame.Rect(self.rect.x + l, top, max(0, right - (self.rect.x + l)),
                            max(0, self.rect.bottom - b - top))
        self.scroll.content_h = self.content_height
        # no clamp here; the scroller re-clamps on its next update
        self.scroll.rect = self.rect.copy()
        self.scroll.inner_rect = inner

    def _row(self, text: str, color: Tuple[int, int, int]) -> pygame.Surface:
        key = (text, tuple(color))
        surf = self._row_cache.get(key)
        if surf is None:
            if len(self._row_cache) >= _MAX_CACHED_ROWS:
                self._row_cache.clear()
            surf = self._row_cache[key] = self.font.render(text, True, color)
        return surf
