from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Protocol

import pygame


class ScrollableSurface(Protocol):
    """ What the smooth scroller needs from a host surface. """
    surface_id: Hashable
    offset: float
    content_h: int
    rect: pygame.Rect
    inner_rect: pygame.Rect

    @property
    def viewport_h(self) -> int: ...
    def max(self) -> float: ...


@dataclass
class ScrollModel:
    surface_id: Hashable = 0
    rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, 0, 0))
    inner_rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, 0, 0))
    content_h: int = 0
    offset: float = 0.0

    @property
    def viewport_h(self) -> int: return max(0, self.inner_rect.h)

    def max(self) -> float: return max(0.0, float(self.content_h - self.viewport_h))
    def clamp(self): self.offset = max(0.0, min(self.max(), self.offset))
    def scroll(self, dy: float): self.offset += dy; self.clamp()
    def to_top(self): self.offset = 0.0
    def to_bottom(self): self.offset = self.max()
