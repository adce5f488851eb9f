import json
import logging
import os

logger = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH  = 900
WINDOW_HEIGHT = 600
FPS           = 120

BACKGROUND_COLOR = (0, 0, 0)
ACTIVE_COLOR     = (255, 69, 0)
SORTED_COLOR     = (50, 205, 50)
OVERLAY_COLOR    = (255, 255, 255)
BAR_SPACING      = 1

# Array size bounds (range of the size slider)
MIN_SIZE     = 10
MAX_SIZE     = 300
DEFAULT_SIZE = 80
SIZE_STEP    = 10

# Magnitudes are drawn from [VALUE_LOW, VALUE_HIGH]; bars are scaled
# against VALUE_CEILING so the tallest bar never touches the top edge.
VALUE_LOW     = 10
VALUE_HIGH    = 489
VALUE_CEILING = 500

# Delay per step, in milliseconds. Never zero: a zero pause would keep
# the run thread from ever yielding.
DELAY_MIN     = 1
DELAY_MAX     = 201
DEFAULT_SPEED = 40
SPEED_MAX     = 200
SPEED_STEP    = 10

DEFAULT_ALGORITHM = "bubble"

# JSON file read from the working directory for user overrides
SETTINGS_JSON = "stepsort_settings.json"

# Keys a settings file may override, with the type each must coerce to
OVERRIDABLE = {
    "size":          int,
    "delay":         int,
    "algorithm":     str,
    "window_width":  int,
    "window_height": int,
    "fps":           int,
}


def defaults() -> dict:
    return dict(
        size=DEFAULT_SIZE,
        delay=max(DELAY_MIN, DELAY_MAX - DEFAULT_SPEED),
        algorithm=DEFAULT_ALGORITHM,
        window_width=WINDOW_WIDTH,
        window_height=WINDOW_HEIGHT,
        fps=FPS,
    )


def _read_settings_json(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: top level is not an object", path)
        return {}
    return data


def load_settings(path: str | None = None) -> dict:
    """
    Merge the defaults with overrides from a JSON settings file.

    Only the keys in OVERRIDABLE are honoured. Values that fail to coerce
    are dropped with a warning and the default is kept.
    """
    cfg = defaults()
    src = path or SETTINGS_JSON
    for key, value in _read_settings_json(src).items():
        kind = OVERRIDABLE.get(key)
        if kind is None:
            logger.warning("Unknown setting %r in %s", key, src)
            continue
        try:
            cfg[key] = kind(value)
        except (TypeError, ValueError):
            logger.warning("Bad value for %r in %s: %r", key, src, value)
    return cfg
