import numpy as np
import pygame

from stepsort.algorithms import Algorithm
from stepsort.frames import Frame, RunState
from stepsort.settings import (
    ACTIVE_COLOR, BACKGROUND_COLOR, BAR_SPACING, OVERLAY_COLOR,
    SORTED_COLOR, VALUE_CEILING,
)

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================
#
# Bars are colored by height along a hue ramp (hue = 0.6 * v / ceiling,
# saturation and brightness 0.9), i.e. red for short bars through yellow
# and green to blue for tall ones. Highlighted bars are ACTIVE_COLOR and,
# once a run completes, every bar is SORTED_COLOR.

HUE_SPAN   = 0.6
SATURATION = 0.9
BRIGHTNESS = 0.9


def hsv_to_rgb(h, s, v) -> np.ndarray:
    """Vectorised HSV -> RGB. h may be an array in [0, 1); returns uint8 (n, 3)."""
    h = np.asarray(h, dtype=np.float64)
    i = np.floor(h * 6.0).astype(np.int64) % 6
    f = h * 6.0 - np.floor(h * 6.0)
    p = np.full_like(h, v * (1.0 - s))
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))
    vv = np.full_like(h, v)
    r = np.choose(i, [vv, q, p, p, t, vv])
    g = np.choose(i, [t, vv, vv, q, p, p])
    b = np.choose(i, [p, p, t, vv, vv, q])
    return (np.stack([r, g, b], axis=-1) * 255.0 + 0.5).astype(np.uint8)


def bar_colors(values, highlight=None, done=False) -> np.ndarray:
    vals = np.asarray(values, dtype=np.float64)
    n = vals.shape[0]
    if done:
        return np.tile(np.array(SORTED_COLOR, dtype=np.uint8), (n, 1))
    colors = hsv_to_rgb(HUE_SPAN * vals / VALUE_CEILING, SATURATION, BRIGHTNESS)
    if highlight:
        idx = np.array([k for k in highlight if 0 <= k < n], dtype=np.int64)
        colors[idx] = ACTIVE_COLOR
    return colors


def bar_geometry(values, width: int, height: int) -> np.ndarray:
    """(n, 4) int array of x, y, w, h rects, bars anchored to the bottom edge."""
    vals = np.asarray(values, dtype=np.float64)
    n = vals.shape[0]
    if n == 0:
        return np.zeros((0, 4), dtype=np.int64)
    bw = max(1, width // n)
    heights = (vals / VALUE_CEILING * height).astype(np.int64)
    xs = np.arange(n, dtype=np.int64) * bw
    rects = np.empty((n, 4), dtype=np.int64)
    rects[:, 0] = xs
    rects[:, 1] = height - heights
    rects[:, 2] = max(1, bw - BAR_SPACING)
    rects[:, 3] = heights
    return rects


def overlay_text(frame: Frame, algorithm: Algorithm) -> str:
    label = (f"Items: {len(frame.values)}    Delay(ms): {frame.delay}"
             f"    Algorithm: {algorithm.display_name}")
    if frame.state is RunState.RUNNING:
        label += "    (running)"
    elif frame.state is RunState.CANCELLED:
        label += "    (stopped)"
    elif frame.sorted:
        label += "    [SORTED]"
    return label


def draw_frame(screen, font, frame: Frame, algorithm: Algorithm):
    w, h = screen.get_size()
    screen.fill(BACKGROUND_COLOR)
    rects  = bar_geometry(frame.values, w, h)
    colors = bar_colors(frame.values, frame.highlight, frame.sorted)
    for (x, y, bw, bh), c in zip(rects.tolist(), colors.tolist()):
        pygame.draw.rect(screen, c, (x, y, bw, bh))
    screen.blit(font.render(overlay_text(frame, algorithm), True, OVERLAY_COLOR), (8, 8))
    pygame.display.flip()
