from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, Optional, Tuple

from smoothscroll.ui.anim import clamp, ease_exp, snap_to_zero
from smoothscroll.ui.draw_list import DrawSurface
from smoothscroll.ui.scroll_model import ScrollableSurface
from smoothscroll.ui.scrollbar import Scrollbar
from smoothscroll.ui.style import ScrollbarStyle

logger = logging.getLogger(__name__)


@dataclass
class SmoothScrollParams:
    scroll_multiplier: float = 800.0    # wheel notch -> velocity impulse (px/s)
    scroll_smoothing: float = 16.0      # velocity decay rate
    min_velocity: float = 0.5           # below this velocity snaps to 0
    hard_hit_velocity: float = 50.0     # crossing an edge faster than this bounces
    bounce_strength: float = 0.15       # velocity -> overscroll px on a hard hit
    overscroll_multiplier: float = 20.0 # wheel notch -> overscroll px while pinned at an edge
    bounce_decay: float = 12.0          # overscroll target return rate
    overscroll_follow: float = 20.0     # visual follower rate, must outrun bounce_decay
    max_overscroll: float = 60.0
    overscroll_epsilon: float = 0.1

    def validate(self) -> "SmoothScrollParams":
        positive = ("scroll_multiplier", "scroll_smoothing", "bounce_decay",
                    "overscroll_follow", "max_overscroll")
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0 (got {getattr(self, name)!r})")
        non_negative = ("min_velocity", "hard_hit_velocity", "bounce_strength",
                        "overscroll_multiplier", "overscroll_epsilon")
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0 (got {getattr(self, name)!r})")
        if self.overscroll_follow <= self.bounce_decay:
            raise ValueError("overscroll_follow must be faster than bounce_decay")
        return self


@dataclass
class SmoothScrollState:
    velocity: float = 0.0           # px/s, positive scrolls toward the top
    overscroll_target: float = 0.0  # > 0 past the top edge, < 0 past the bottom edge
    overscroll_visual: float = 0.0  # eased follower of overscroll_target
    grab_anim: float = 0.0          # thumb offset within the track (px)
    alpha: float = 0.0              # scrollbar fade-in

    def is_resting(self) -> bool:
        return self.velocity == 0.0 and self.overscroll_target == 0.0 and self.overscroll_visual == 0.0


class SmoothScroller:
    """
    Inertial scrolling with edge bounce, plus the animated scrollbar that goes with it.

    Holds one SmoothScrollState per surface id. Call once per surface per frame,
    after the surface's layout pass:
        scroller.update(surface, wheel_delta, dt)
        scroller.render(surface, draw_list, dt, mouse_pos)

    `update` writes the clamped offset back to the surface; overscroll only
    lives in the state and is meant to be drawn as a visual displacement.
    `render` also advances the thumb/fade animation, so skipping it stalls them.

    States are never dropped on their own; hosts that create and destroy many
    surfaces should call `forget()` or `sweep()`.
    """

    def __init__(self, params: Optional[SmoothScrollParams] = None, style: Optional[ScrollbarStyle] = None):
        self.params = (params or SmoothScrollParams()).validate()
        self.style = style or ScrollbarStyle()
        self._states: Dict[Hashable, SmoothScrollState] = {}

    # ---------- store ----------
    def state(self, surface_id: Hashable) -> SmoothScrollState:
        st = self._states.get(surface_id)
        if st is None:
            st = self._states[surface_id] = SmoothScrollState()
            logger.debug("Smooth scroll state created for surface %r", surface_id)
        return st

    def peek(self, surface_id: Hashable) -> Optional[SmoothScrollState]:
        return self._states.get(surface_id)

    def forget(self, surface_id: Hashable) -> None:
        self._states.pop(surface_id, None)

    def stop(self, surface_id: Hashable) -> None:
        """ Kill any glide and bounce, e.g. after the host jumps the offset. The scrollbar keeps its animation. """
        st = self._states.get(surface_id)
        if st is not None:
            st.velocity = st.overscroll_target = st.overscroll_visual = 0.0

    def sweep(self, live_ids: Iterable[Hashable]) -> int:
        """ Drop states whose surface id is not in `live_ids`. Returns how many were dropped. """
        live = set(live_ids)
        stale = [k for k in self._states if k not in live]
        for k in stale:
            del self._states[k]
        if stale:
            logger.debug("Swept %d stale smooth scroll state(s)", len(stale))
        return len(stale)

    def reset(self) -> None:
        self._states.clear()

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, surface_id: Hashable) -> bool:
        return surface_id in self._states

    # ---------- physics ----------
    def update(self, surface: ScrollableSurface, wheel_delta: float, dt: float) -> None:
        """ Advance one frame of scroll physics for `surface`. Positive wheel_delta scrolls up. """
        max_offset = surface.max()
        if max_offset <= 0.0:
            return

        # content may have shrunk since last frame
        offset = clamp(float(surface.offset), 0.0, max_offset)
        if dt <= 0.0:
            surface.offset = offset
            return

        p = self.params
        st = self.state(surface.surface_id)
        at_top = offset <= 0.0
        at_bottom = offset >= max_offset

        if wheel_delta != 0.0:
            if (at_top and wheel_delta > 0.0) or (at_bottom and wheel_delta < 0.0):
                st.overscroll_target = clamp(st.overscroll_target + wheel_delta * p.overscroll_multiplier,
                                             -p.max_overscroll, p.max_overscroll)
                st.velocity = 0.0
            else:
                impulse = wheel_delta * p.scroll_multiplier
                if st.velocity * impulse < 0.0:
                    st.velocity = 0.0
                st.velocity += impulse
                st.overscroll_target = 0.0

        if abs(st.velocity) > p.min_velocity:
            offset = self._integrate(st, offset, max_offset, dt, surface.surface_id)
        else:
            st.velocity = 0.0

        st.overscroll_target = snap_to_zero(ease_exp(st.overscroll_target, 0.0, p.bounce_decay, dt),
                                            p.overscroll_epsilon)
        st.overscroll_visual = ease_exp(st.overscroll_visual, st.overscroll_target, p.overscroll_follow, dt)
        if st.overscroll_target == 0.0:
            st.overscroll_visual = snap_to_zero(st.overscroll_visual, p.overscroll_epsilon)

        surface.offset = offset

    def _integrate(self, st: SmoothScrollState, offset: float, max_offset: float, dt: float,
                   surface_id: Hashable) -> float:
        p = self.params
        tentative = offset - st.velocity * dt
        crossed = tentative < 0.0 or tentative > max_offset
        if crossed and abs(st.velocity) > p.hard_hit_velocity:
            # velocity sign already matches the edge: > 0 at the top, < 0 at the bottom
            st.overscroll_target = clamp(st.velocity * p.bounce_strength, -p.max_overscroll, p.max_overscroll)
            logger.debug("Surface %r hit %s edge at %.1f px/s", surface_id,
                         "top" if st.velocity > 0.0 else "bottom", st.velocity)
            st.velocity = 0.0
        elif crossed:
            st.velocity = 0.0

        st.velocity = snap_to_zero(ease_exp(st.velocity, 0.0, p.scroll_smoothing, dt), p.min_velocity)
        return clamp(tentative, 0.0, max_offset)

    # ---------- scrollbar ----------
    def render(self, surface: ScrollableSurface, draw: DrawSurface, dt: float,
               mouse_pos: Optional[Tuple[int, int]] = None) -> None:
        """ Ease the thumb/fade for this frame and emit track + thumb into `draw`. """
        if surface.max() <= 0.0:
            return
        Scrollbar.render(surface, self.state(surface.surface_id), draw, self.style, dt, mouse_pos)
