from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Protocol, Tuple

import pygame

RGBA = Tuple[int, int, int, int]


class DrawSurface(Protocol):
    """ Write-only sink for primitive draw commands. """
    def add_rect_filled(self, rect: pygame.Rect, color: RGBA, radius: int = 0) -> None: ...


@dataclass(frozen=True)
class RectFilled:
    rect: pygame.Rect
    color: RGBA
    radius: int = 0


class DrawList:
    """
    Append-only list of draw commands for one frame.

    Widgets push commands during the frame; the owner flushes them on top of
    everything else once the frame's regular drawing is done.
    """
    def __init__(self) -> None:
        self._commands: List[RectFilled] = []

    def add_rect_filled(self, rect: pygame.Rect, color: RGBA, radius: int = 0) -> None:
        self._commands.append(RectFilled(pygame.Rect(rect), tuple(int(c) for c in color), max(0, int(radius))))

    def clear(self) -> None:
        self._commands.clear()

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[RectFilled]:
        return iter(self._commands)

    @property
    def commands(self) -> List[RectFilled]:
        return list(self._commands)

    def flush(self, target: pygame.Surface) -> None:
        """ Blend every queued command onto `target` in order, then clear. """
        for cmd in self._commands:
            if cmd.rect.w <= 0 or cmd.rect.h <= 0 or cmd.color[3] <= 0:
                continue
            # pygame.draw ignores alpha on opaque targets, so go through a scratch layer
            layer = pygame.Surface(cmd.rect.size, pygame.SRCALPHA)
            pygame.draw.rect(layer, cmd.color, layer.get_rect(), border_radius=cmd.radius)
            target.blit(layer, cmd.rect.topleft)
        self.clear()
