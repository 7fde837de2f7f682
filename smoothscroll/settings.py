from __future__ import annotations
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml

from smoothscroll.ui.smooth_scroll import SmoothScrollParams
from smoothscroll.ui.style import Theme

logger = logging.getLogger(__name__)

DEFAULTS_PATH = "demo/config/defaults.yaml"

@dataclass
class WindowCfg:
    width: int = 1280
    height: int = 900
    title: str = "Scroll Tester"
    bg_rgb: tuple[int, int, int] = (115, 140, 153)

@dataclass
class PanelCfg:
    width_frac: float = 0.6
    height_frac: float = 0.9
    line_count: int = 200           # demo content rows
    line_prefix: str = "Tester"

@dataclass
class InputCfg:
    wheel_scale: float = 1.0        # multiplies pygame wheel notches before they hit the scroller
    invert_wheel: bool = False

@dataclass
class AppCfg:
    fps: int = 60
    log_level: str = "INFO"
    window: WindowCfg = field(default_factory=WindowCfg)
    panel: PanelCfg = field(default_factory=PanelCfg)
    input: InputCfg = field(default_factory=InputCfg)
    scroll: SmoothScrollParams = field(default_factory=SmoothScrollParams)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur

def load_ui_defaults(path: str = DEFAULTS_PATH) -> Dict[str, Any]:
    """ Load the defaults YAML. A missing file yields an empty dict. """
    p = Path(path)
    if not p.exists():
        logger.warning("Defaults file '%s' not found; using built-in values", path)
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data

def smooth_scroll_params_from_defaults(defaults: Dict[str, Any]) -> SmoothScrollParams:
    """ Build validated physics params from the `scroll:` section. Unknown keys are ignored. """
    sc = defaults.get("scroll", {}) or {}
    base = SmoothScrollParams()
    values = {f.name: float(sc.get(f.name, getattr(base, f.name))) for f in fields(SmoothScrollParams)}
    unknown = sorted(set(sc) - set(values))
    if unknown:
        logger.warning("Ignoring unknown scroll settings: %s", ", ".join(unknown))
    return SmoothScrollParams(**values).validate()

def load_settings(path: str = DEFAULTS_PATH) -> AppCfg:
    data = load_ui_defaults(path)
    return AppCfg(
        fps=int(_get(data, "fps", 60)),
        log_level=str(_get(data, "log_level", "INFO")).upper(),
        window=WindowCfg(
            width=int(_get(data, "window.width", 1280)),
            height=int(_get(data, "window.height", 900)),
            title=str(_get(data, "window.title", "Scroll Tester")),
            bg_rgb=tuple(_get(data, "window.bg_rgb", (115, 140, 153))),
        ),
        panel=PanelCfg(
            width_frac=float(_get(data, "panel.width_frac", 0.6)),
            height_frac=float(_get(data, "panel.height_frac", 0.9)),
            line_count=int(_get(data, "panel.line_count", 200)),
            line_prefix=str(_get(data, "panel.line_prefix", "Tester")),
        ),
        input=InputCfg(
            wheel_scale=float(_get(data, "input.wheel_scale", 1.0)),
            invert_wheel=bool(_get(data, "input.invert_wheel", False)),
        ),
        scroll=smooth_scroll_params_from_defaults(data),
    )

def build_theme_from_defaults(defaults: Dict[str, Any]) -> Theme:
    tdata = defaults.get("theme", {}) or {}
    th = Theme()

    # core
    th.font_path    = tdata.get("font_path", th.font_path)
    th.font_size    = int(tdata.get("font_size", th.font_size))
    th.text_rgb     = tuple(tdata.get("text_rgb", th.text_rgb))
    th.dim_rgb      = tuple(tdata.get("dim_rgb", th.dim_rgb))
    th.box_bg       = tuple(tdata.get("box_bg", th.box_bg))
    th.box_border   = tuple(tdata.get("box_border", th.box_border))
    th.title_bg     = tuple(tdata.get("title_bg", th.title_bg))
    th.title_bar_h  = int(tdata.get("title_bar_h", th.title_bar_h))
    th.border_radius = int(tdata.get("border_radius", th.border_radius))
    th.padding      = tuple(tdata.get("padding", th.padding))
    th.line_spacing = int(tdata.get("line_spacing", th.line_spacing))

    # scrollbar
    sc = tdata.get("scrollbar", {}) or {}
    sb = th.scrollbar
    sb.width             = int(sc.get("width", sb.width))
    sb.margin            = int(sc.get("margin", sb.margin))
    sb.radius            = int(sc.get("radius", sb.radius))
    sb.grab_radius       = int(sc.get("grab_radius", sb.grab_radius))
    sb.padding           = int(sc.get("padding", sb.padding))
    sb.min_thumb_size    = int(sc.get("min_thumb_size", sb.min_thumb_size))
    sb.min_thumb_norm    = float(sc.get("min_thumb_norm", sb.min_thumb_norm))
    sb.track_color       = tuple(sc.get("track_color", sb.track_color))
    sb.thumb_color       = tuple(sc.get("thumb_color", sb.thumb_color))
    sb.track_alpha       = float(sc.get("track_alpha", sb.track_alpha))
    sb.hover_alpha       = float(sc.get("hover_alpha", sb.hover_alpha))
    sb.idle_alpha        = float(sc.get("idle_alpha", sb.idle_alpha))
    sb.overscroll_lead   = float(sc.get("overscroll_lead", sb.overscroll_lead))
    sb.overscroll_squash = float(sc.get("overscroll_squash", sb.overscroll_squash))
    sb.grab_rate         = float(sc.get("grab_rate", sb.grab_rate))
    sb.fade_rate         = float(sc.get("fade_rate", sb.fade_rate))

    return th
