from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

import pygame

from smoothscroll.ui.anim import clamp, ease_exp, saturate
from smoothscroll.ui.draw_list import RGBA, DrawSurface
from smoothscroll.ui.scroll_model import ScrollableSurface
from smoothscroll.ui.style import ScrollbarStyle

if TYPE_CHECKING:
    from smoothscroll.ui.smooth_scroll import SmoothScrollState


@dataclass(frozen=True)
class ScrollbarLayout:
    track: pygame.Rect
    thumb_len: float
    thumb_target: float   # where the thumb wants to be, px from the track top


class Scrollbar:
    """
    Vertical scrollbar whose thumb follows the smooth scroll state.

    Split in three steps so hosts can animate without drawing:
      layout()  - pure geometry from the surface + state
      advance() - eases state.grab_anim / state.alpha toward the layout
      draw()    - emits track then thumb
    render() runs all three.
    """

    @staticmethod
    def track_rect(surface: ScrollableSurface, style: ScrollbarStyle) -> pygame.Rect:
        x = surface.rect.right - style.margin - style.width
        return pygame.Rect(x, surface.inner_rect.top, style.width, surface.inner_rect.h)

    @staticmethod
    def thumb_length(viewport_h: float, content_h: float, track_h: float,
                     style: ScrollbarStyle, overscroll: float = 0.0) -> float:
        norm = clamp(viewport_h / max(1.0, float(content_h)), style.min_thumb_norm, 1.0)
        length = max(track_h * norm, float(style.min_thumb_size))
        if overscroll:
            # squash while bouncing
            length = max(length - abs(overscroll) * style.overscroll_squash, style.min_thumb_size * 0.5)
        return length

    @staticmethod
    def layout(surface: ScrollableSurface, state: "SmoothScrollState",
               style: ScrollbarStyle) -> Optional[ScrollbarLayout]:
        max_offset = surface.max()
        track = Scrollbar.track_rect(surface, style)
        if max_offset <= 0.0 or track.h <= 0 or track.w <= 0:
            return None

        thumb_len = Scrollbar.thumb_length(surface.viewport_h, surface.content_h, track.h,
                                           style, state.overscroll_visual)
        free = max(0.0, track.h - thumb_len)
        target = saturate(surface.offset / max_offset) * free
        # lead into the bounce: up past the top, down past the bottom
        target = clamp(target - state.overscroll_visual * style.overscroll_lead, 0.0, free)
        return ScrollbarLayout(track, thumb_len, target)

    @staticmethod
    def advance(state: "SmoothScrollState", layout: ScrollbarLayout, style: ScrollbarStyle, dt: float) -> None:
        state.grab_anim = ease_exp(state.grab_anim, layout.thumb_target, style.grab_rate, dt)
        state.alpha = saturate(ease_exp(state.alpha, 1.0, style.fade_rate, dt))

    @staticmethod
    def thumb_rect(layout: ScrollbarLayout, state: "SmoothScrollState", style: ScrollbarStyle) -> pygame.Rect:
        track = layout.track
        top = clamp(track.top + state.grab_anim, track.top, track.bottom)
        bottom = clamp(track.top + state.grab_anim + layout.thumb_len, top, track.bottom)
        top_i, bottom_i = int(round(top)), int(round(bottom))
        inset = min(style.padding, track.w // 2)
        return pygame.Rect(track.left + inset, top_i, track.w - 2 * inset, max(0, bottom_i - top_i))

    @staticmethod
    def colors(layout: ScrollbarLayout, state: "SmoothScrollState", style: ScrollbarStyle,
               mouse_pos: Optional[Tuple[int, int]] = None) -> Tuple[RGBA, RGBA]:
        hovered = mouse_pos is not None and layout.track.collidepoint(mouse_pos)
        thumb_mult = style.hover_alpha if hovered else style.idle_alpha
        return (
            _with_alpha(style.track_color, state.alpha * style.track_alpha),
            _with_alpha(style.thumb_color, state.alpha * thumb_mult),
        )

    @staticmethod
    def draw(layout: ScrollbarLayout, state: "SmoothScrollState", draw: DrawSurface, style: ScrollbarStyle,
             mouse_pos: Optional[Tuple[int, int]] = None) -> None:
        track_col, thumb_col = Scrollbar.colors(layout, state, style, mouse_pos)
        draw.add_rect_filled(layout.track, track_col, style.radius)
        draw.add_rect_filled(Scrollbar.thumb_rect(layout, state, style), thumb_col, style.grab_radius)

    @staticmethod
    def render(surface: ScrollableSurface, state: "SmoothScrollState", draw: DrawSurface,
               style: ScrollbarStyle, dt: float, mouse_pos: Optional[Tuple[int, int]] = None) -> None:
        layout = Scrollbar.layout(surface, state, style)
        if layout is None:
            return
        Scrollbar.advance(state, layout, style, dt)
        Scrollbar.draw(layout, state, draw, style, mouse_pos)


def _with_alpha(rgba: Tuple[int, ...], mult: float) -> RGBA:
    r, g, b = rgba[:3]
    a = rgba[3] if len(rgba) > 3 else 255
    return (int(r), int(g), int(b), int(round(a * saturate(mult))))
