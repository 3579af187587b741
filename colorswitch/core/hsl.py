"""Vectorized RGB <-> HSL conversion.

Operates on float arrays of shape (N, 3) with channels in [0, 1].
Hue is in degrees [0, 360), saturation and lightness in [0, 1].
Achromatic samples (R = G = B) get hue 0 and saturation 0.

hsl_to_rgb accepts saturation above 1 and returns the unclipped result;
callers decide whether to clamp before or after.
"""

import numpy as np


def rgb_to_hsl(rgb: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Convert normalized RGB (N, 3) to (hue, saturation, lightness) arrays."""
    r, g, b = rgb[:, 0], rgb[:, 1], rgb[:, 2]
    cmax = rgb.max(axis=1)
    cmin = rgb.min(axis=1)
    delta = cmax - cmin
    chromatic = delta > 0

    # Avoid 0/0 for greys; those entries are masked out below
    safe_delta = np.where(chromatic, delta, 1.0)
    rc = ((g - b) / safe_delta) % 6.0
    gc = (b - r) / safe_delta + 2.0
    bc = (r - g) / safe_delta + 4.0

    # Ties resolve to the first channel: r, then g, then b
    channel = np.argmax(rgb == cmax[:, None], axis=1)
    sector = np.choose(channel, [rc, gc, bc])
    hue = np.where(chromatic, (sector * 60.0) % 360.0, 0.0)

    lightness = (cmax + cmin) / 2.0
    denom = 1.0 - np.abs(2.0 * lightness - 1.0)
    saturation = np.where(chromatic, delta / np.where(denom > 0, denom, 1.0), 0.0)
    return hue, saturation, lightness


def hsl_to_rgb(hue: np.ndarray, saturation: np.ndarray, lightness: np.ndarray) -> np.ndarray:
    """Convert hue (degrees), saturation and lightness arrays to RGB (N, 3)."""
    h = (hue % 360.0) / 60.0
    chroma = (1.0 - np.abs(2.0 * lightness - 1.0)) * saturation
    x = chroma * (1.0 - np.abs(h % 2.0 - 1.0))
    m = lightness - chroma / 2.0
    zero = np.zeros_like(chroma)

    sector = np.minimum(h.astype(int), 5)
    r = np.choose(sector, [chroma, x, zero, zero, x, chroma])
    g = np.choose(sector, [x, chroma, chroma, x, zero, zero])
    b = np.choose(sector, [zero, zero, x, chroma, chroma, x])
    return np.stack([r + m, g + m, b + m], axis=1)
