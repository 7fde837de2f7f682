from dataclasses import dataclass, field
import pygame

@dataclass
class ScrollbarStyle:
    width: int = 14
    margin: int = 0
    radius: int = 7                # track rounding
    grab_radius: int = 3           # thumb rounding
    padding: int = 2               # thumb inset from the track sides
    min_thumb_size: int = 24
    min_thumb_norm: float = 0.05   # thumb never shorter than this fraction of the track
    track_color: tuple[int, int, int, int] = (5, 5, 5, 255)
    thumb_color: tuple[int, int, int, int] = (180, 180, 190, 255)
    track_alpha: float = 0.4       # track opacity relative to the fade-in
    hover_alpha: float = 1.0
    idle_alpha: float = 0.6
    overscroll_lead: float = 0.2   # thumb displacement per pixel of overscroll
    overscroll_squash: float = 0.5 # thumb shrink per pixel of overscroll
    grab_rate: float = 15.0
    fade_rate: float = 8.0

@dataclass
class Theme:
    font_path: str | None = None
    font_size: int = 20
    text_rgb: tuple[int, int, int] = (237, 237, 237)
    dim_rgb: tuple[int, int, int] = (150, 152, 160)
    box_bg: tuple[int, int, int] = (20, 22, 27)
    box_border: tuple[int, int, int] = (60, 64, 72)
    title_bg: tuple[int, int, int] = (41, 74, 122)
    title_bar_h: int = 28
    border_radius: int = 6
    padding: tuple[int, int, int, int] = (8, 8, 8, 8)  # t, r, b, l
    line_spacing: int = 4
    scrollbar: ScrollbarStyle = field(default_factory=ScrollbarStyle)

def compute_centered_rect(surface: pygame.Surface, frac_w=0.7, frac_h=0.45) -> pygame.Rect:
    sw, sh = surface.get_size()
    w, h = int(sw * frac_w), int(sh * frac_h)
    return pygame.Rect((sw - w) // 2, (sh - h) // 2, w, h)
