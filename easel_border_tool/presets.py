"""
Preset share codes: pack calculator settings into a short URL-safe string.

A code is the URL-safe base64 (padding stripped) of comma-separated
integers::

    ratio_index,paper_index,min_border,h_offset,v_offset,flags[,ratio_w,ratio_h][,paper_w,paper_h]

Indices point into ``RATIO_KEYS`` / ``PAPER_KEYS`` (catalog order, with
``"custom"`` last).  Lengths are stored in hundredths of an inch.  The
custom ratio pair is present only for a custom ratio, the custom paper
pair only for custom paper.

Flag bits::

    1  enable_offset      4  show_blades       16  is_ratio_flipped
    2  ignore_min_border  8  is_landscape

Nothing is stored on disk.  This module is Qt-free.
"""

import base64
import binascii
import logging
import math
from dataclasses import dataclass

from easel_border_tool.config import (
    ASPECT_RATIOS, CUSTOM_KEY, DEFAULT_CUSTOM_PAPER_HEIGHT, DEFAULT_CUSTOM_PAPER_WIDTH,
    DEFAULT_CUSTOM_RATIO_HEIGHT, DEFAULT_CUSTOM_RATIO_WIDTH, DEFAULT_MIN_BORDER,
    DEFAULT_PAPER_KEY, DEFAULT_RATIO_KEY, PAPER_SIZES,
)

logger = logging.getLogger(__name__)

RATIO_KEYS = [r["key"] for r in ASPECT_RATIOS] + [CUSTOM_KEY]
PAPER_KEYS = [p["key"] for p in PAPER_SIZES] + [CUSTOM_KEY]

_SEPARATOR = ","
_SCALE = 100
_FLAG_BITS = {
    "enable_offset": 1,
    "ignore_min_border": 2,
    "show_blades": 4,
    "is_landscape": 8,
    "is_ratio_flipped": 16,
}
_FLAG_MASK = sum(_FLAG_BITS.values())
_NUMERIC_FIELDS = (
    "custom_aspect_width", "custom_aspect_height",
    "custom_paper_width", "custom_paper_height",
    "min_border", "horizontal_offset", "vertical_offset",
)


@dataclass
class PresetSettings:
    """Shareable calculator settings."""
    aspect_ratio: str = DEFAULT_RATIO_KEY
    paper_size: str = DEFAULT_PAPER_KEY
    custom_aspect_width: float = DEFAULT_CUSTOM_RATIO_WIDTH
    custom_aspect_height: float = DEFAULT_CUSTOM_RATIO_HEIGHT
    custom_paper_width: float = DEFAULT_CUSTOM_PAPER_WIDTH
    custom_paper_height: float = DEFAULT_CUSTOM_PAPER_HEIGHT
    min_border: float = DEFAULT_MIN_BORDER
    enable_offset: bool = False
    ignore_min_border: bool = False
    horizontal_offset: float = 0.0
    vertical_offset: float = 0.0
    show_blades: bool = False
    is_landscape: bool = True
    is_ratio_flipped: bool = False


# =============================================================================
# Validation
# =============================================================================
def validate_settings(settings: PresetSettings) -> list[str]:
    """
    Validate settings before encoding.

    Returns a list of error strings (empty means valid).
    """
    errors: list[str] = []

    if settings.aspect_ratio not in RATIO_KEYS:
        errors.append(f"unknown aspect ratio {settings.aspect_ratio!r}")
    if settings.paper_size not in PAPER_KEYS:
        errors.append(f"unknown paper size {settings.paper_size!r}")

    for name in _NUMERIC_FIELDS:
        value = getattr(settings, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            errors.append(f"{name} must be a finite number, got {value!r}")

    if settings.aspect_ratio == CUSTOM_KEY:
        for name in ("custom_aspect_width", "custom_aspect_height"):
            value = getattr(settings, name)
            if isinstance(value, (int, float)) and value <= 0:
                errors.append(f"{name} must be positive for a custom ratio, got {value!r}")
    if settings.paper_size == CUSTOM_KEY:
        for name in ("custom_paper_width", "custom_paper_height"):
            value = getattr(settings, name)
            if isinstance(value, (int, float)) and value <= 0:
                errors.append(f"{name} must be positive for custom paper, got {value!r}")

    return errors


# =============================================================================
# Encode / Decode
# =============================================================================
def _flags(settings: PresetSettings) -> int:
    mask = 0
    for name, bit in _FLAG_BITS.items():
        if getattr(settings, name):
            mask |= bit
    return mask


def _hundredths(value: float) -> int:
    return int(round(value * _SCALE))


def encode_preset(settings: PresetSettings) -> str:
    """
    Encode *settings* as a share code.

    Raises ValueError if the settings fail validation.
    """
    errors = validate_settings(settings)
    if errors:
        raise ValueError("Invalid preset settings:\n  " + "\n  ".join(errors))

    parts = [
        RATIO_KEYS.index(settings.aspect_ratio),
        PAPER_KEYS.index(settings.paper_size),
        _hundredths(settings.min_border),
        _hundredths(settings.horizontal_offset),
        _hundredths(settings.vertical_offset),
        _flags(settings),
    ]
    if settings.aspect_ratio == CUSTOM_KEY:
        parts += [_hundredths(settings.custom_aspect_width), _hundredths(settings.custom_aspect_height)]
    if settings.paper_size == CUSTOM_KEY:
        parts += [_hundredths(settings.custom_paper_width), _hundredths(settings.custom_paper_height)]

    raw = _SEPARATOR.join(str(p) for p in parts)
    return base64.urlsafe_b64encode(raw.encode("ascii")).decode("ascii").rstrip("=")


def decode_preset(code: str) -> PresetSettings | None:
    """
    Decode a share code.

    Returns ``None`` (and logs why) if the code is malformed or refers to
    an unknown catalog entry.
    """
    text = (code or "").strip()
    if not text:
        return None

    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii")).decode("ascii")
        parts = [int(p) for p in raw.split(_SEPARATOR)]
    except (binascii.Error, UnicodeError, ValueError) as exc:
        logger.warning("Could not decode preset code %r: %s", code, exc)
        return None

    if len(parts) < 6:
        logger.warning("Preset code %r is truncated (%d fields)", code, len(parts))
        return None

    ratio_idx, paper_idx, min_border, h_off, v_off, flags = parts[:6]
    extra = parts[6:]
    if not (0 <= ratio_idx < len(RATIO_KEYS)) or not (0 <= paper_idx < len(PAPER_KEYS)):
        logger.warning("Preset code %r refers to an unknown ratio or paper size", code)
        return None
    if flags & ~_FLAG_MASK:
        logger.warning("Preset code %r has unknown flag bits %d", code, flags)
        return None

    settings = PresetSettings(
        aspect_ratio=RATIO_KEYS[ratio_idx],
        paper_size=PAPER_KEYS[paper_idx],
        min_border=min_border / _SCALE,
        horizontal_offset=h_off / _SCALE,
        vertical_offset=v_off / _SCALE,
        **{name: bool(flags & bit) for name, bit in _FLAG_BITS.items()},
    )

    expected = 2 * (settings.aspect_ratio == CUSTOM_KEY) + 2 * (settings.paper_size == CUSTOM_KEY)
    if len(extra) != expected:
        logger.warning("Preset code %r has %d custom fields, expected %d", code, len(extra), expected)
        return None
    if settings.aspect_ratio == CUSTOM_KEY:
        settings.custom_aspect_width = extra.pop(0) / _SCALE
        settings.custom_aspect_height = extra.pop(0) / _SCALE
    if settings.paper_size == CUSTOM_KEY:
        settings.custom_paper_width = extra.pop(0) / _SCALE
        settings.custom_paper_height = extra.pop(0) / _SCALE

    return settings
